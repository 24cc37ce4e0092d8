"""User entity owning exactly one wallet."""

from dataclasses import dataclass, field

from finance_tracker.domain.models.wallet import Wallet


@dataclass(eq=False)
class User:
    """Registered user.

    Logins are unique case-insensitively. Passwords are kept in plain text
    and compared by exact equality.
    """

    login: str
    password: str
    wallet: Wallet = field(default_factory=Wallet, repr=False)

    def __post_init__(self) -> None:
        if self.wallet is None:
            self.wallet = Wallet()

    @property
    def key(self) -> str:
        """Case-folded login used for lookups."""
        return self.login.casefold()

    def check_password(self, raw_password: str) -> bool:
        return self.password == raw_password

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, User):
            return NotImplemented
        return self.key == other.key

    def __hash__(self) -> int:
        return hash(self.key)


__all__ = ["User"]
