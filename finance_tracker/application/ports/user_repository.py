"""Port for storing users and their wallets."""

from typing import Protocol

from finance_tracker.domain.models import User


class UserRepositoryPort(Protocol):
    """Port exposing user lookup and persistence."""

    def save(self, user: User) -> None:
        """Store or replace a user in memory."""

    def find_by_login(self, login: str) -> User | None:
        """Return the user with this login (case-insensitive), or None."""

    def exists_by_login(self, login: str) -> bool:
        """Return True when a user with this login exists."""

    def find_all(self) -> list[User]:
        """Return every registered user."""

    def delete_by_login(self, login: str) -> bool:
        """Remove a user; return True when one was removed."""

    def flush(self) -> None:
        """Write all users to durable storage."""

    def load(self) -> None:
        """Replace in-memory users with the durable copy."""


__all__ = ["UserRepositoryPort"]
