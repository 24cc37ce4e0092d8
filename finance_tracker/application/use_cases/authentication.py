"""User registration, authentication and session handling."""

from finance_tracker.application.ports.user_repository import (
    UserRepositoryPort,
)
from finance_tracker.domain.errors import (
    InvalidCredentialsError,
    NotAuthenticatedError,
    ValidationError,
)
from finance_tracker.domain.models import User, Wallet
from finance_tracker.domain.services.normalization import normalize_login
from finance_tracker.infrastructure.logging.logger import (
    get_app_logger,
    get_usage_logger,
)


class Session:
    """Holds the authenticated user of one logical session."""

    def __init__(self, user: User | None = None) -> None:
        self._user = user

    @property
    def is_authenticated(self) -> bool:
        return self._user is not None

    @property
    def user(self) -> User:
        """Return the current user.

        Raises:
            NotAuthenticatedError: If nobody is logged in.
        """
        if self._user is None:
            raise NotAuthenticatedError()
        return self._user

    @property
    def wallet(self) -> Wallet:
        return self.user.wallet

    def attach(self, user: User) -> None:
        self._user = user

    def clear(self) -> None:
        self._user = None


class AuthService:
    """Register users and open/close sessions against a repository."""

    def __init__(
        self,
        repository: UserRepositoryPort,
        logger=None,
        usage_logger=None,
    ) -> None:
        """Initialize the service.

        Args:
            repository: Port storing users and their wallets.
            logger: Optional logger compatible with logging.Logger-like API.
            usage_logger: Optional logger receiving user action records.
        """
        self._repository = repository
        self._logger = logger or get_app_logger()
        self._usage_logger = usage_logger or get_usage_logger()

    def register(self, login: str | None, password: str | None) -> User:
        """Create a user with an empty wallet.

        Raises:
            ValidationError: If a field is blank or the login is taken.
        """
        normalized = normalize_login(login)
        if normalized is None:
            raise ValidationError.for_field("login", "must not be empty")
        if not password:
            raise ValidationError.for_field("password", "must not be empty")
        if self._repository.exists_by_login(normalized):
            raise ValidationError.for_field(
                "login",
                f"user '{normalized}' already exists",
            )

        user = User(login=normalized, password=password)
        self._repository.save(user)
        self._usage_logger.info(f"Registered user {normalized}")
        return user

    def login(
        self,
        session: Session,
        login: str | None,
        password: str | None,
    ) -> User:
        """Authenticate a user and attach it to ``session``.

        Raises:
            InvalidCredentialsError: If the login/password pair is wrong.
        """
        normalized = normalize_login(login)
        if normalized is None:
            raise InvalidCredentialsError("Login must not be empty")
        if not password:
            raise InvalidCredentialsError("Password must not be empty")

        user = self._repository.find_by_login(normalized)
        if user is None or not user.check_password(password):
            self._usage_logger.warning(f"Failed login for {normalized}")
            raise InvalidCredentialsError()

        session.attach(user)
        self._usage_logger.info(f"User {user.login} logged in")
        return user

    def logout(self, session: Session) -> None:
        """Persist the current user and end the session."""
        if not session.is_authenticated:
            return
        user = session.user
        self._repository.save(user)
        self._flush()
        session.clear()
        self._usage_logger.info(f"User {user.login} logged out")

    def find_user_by_login(self, login: str) -> User | None:
        normalized = normalize_login(login)
        if normalized is None:
            return None
        return self._repository.find_by_login(normalized)

    def get_all_users(self) -> list[User]:
        return self._repository.find_all()

    def save_all(self, session: Session | None = None) -> None:
        """Persist every user, including the session user if any."""
        if session is not None and session.is_authenticated:
            self._repository.save(session.user)
        self._flush()

    def _flush(self) -> None:
        # In-memory state stays authoritative when storage fails.
        try:
            self._repository.flush()
        except OSError as exc:
            self._logger.error(f"Failed to save users: {exc}")


__all__ = ["Session", "AuthService"]
