"""In-memory user repository shared by the durable backends."""

from finance_tracker.application.ports.user_repository import (
    UserRepositoryPort,
)
from finance_tracker.domain.models import User


class InMemoryUserRepository(UserRepositoryPort):
    """Repository keeping users in a dict keyed by case-folded login.

    ``flush`` and ``load`` are no-ops; subclasses override them to persist.
    """

    def __init__(self) -> None:
        self._users: dict[str, User] = {}

    def save(self, user: User) -> None:
        self._users[user.key] = user

    def find_by_login(self, login: str) -> User | None:
        return self._users.get(login.casefold())

    def exists_by_login(self, login: str) -> bool:
        return login.casefold() in self._users

    def find_all(self) -> list[User]:
        return list(self._users.values())

    def delete_by_login(self, login: str) -> bool:
        return self._users.pop(login.casefold(), None) is not None

    def count(self) -> int:
        return len(self._users)

    def clear(self) -> None:
        self._users.clear()

    def flush(self) -> None:
        return None

    def load(self) -> None:
        return None

    def _replace_all(self, users: list[User]) -> None:
        self._users = {user.key: user for user in users}


__all__ = ["InMemoryUserRepository"]
