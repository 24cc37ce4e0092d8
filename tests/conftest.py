"""Shared pytest fixtures."""

from unittest.mock import MagicMock

import pytest

from finance_tracker.application.use_cases.authentication import (
    AuthService,
    Session,
)
from finance_tracker.application.use_cases.finance_operations import (
    FinanceService,
)
from finance_tracker.domain.models import User
from finance_tracker.infrastructure.in_memory_user_repository import (
    InMemoryUserRepository,
)
from finance_tracker.infrastructure.notifications import (
    CollectingNotificationService,
)


@pytest.fixture(autouse=True, scope="session")
def _isolated_log_dir(tmp_path_factory):
    """Keep log files written by default loggers out of the project tree."""
    with pytest.MonkeyPatch.context() as patch:
        patch.setenv(
            "FINANCE_LOG_DIR",
            str(tmp_path_factory.mktemp("logs")),
        )
        yield


@pytest.fixture
def repository() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
def notifications() -> MagicMock:
    return MagicMock()


@pytest.fixture
def session() -> Session:
    return Session()


@pytest.fixture
def auth_service(repository) -> AuthService:
    return AuthService(
        repository,
        logger=MagicMock(),
        usage_logger=MagicMock(),
    )


@pytest.fixture
def alice(auth_service) -> User:
    return auth_service.register("alice", "secret")


@pytest.fixture
def bob(auth_service) -> User:
    return auth_service.register("bob", "hunter2")


@pytest.fixture
def finance_service(session, notifications) -> FinanceService:
    return FinanceService(
        session,
        notifications,
        logger=MagicMock(),
        usage_logger=MagicMock(),
    )


@pytest.fixture
def logged_in(auth_service, session, alice) -> User:
    auth_service.login(session, "alice", "secret")
    return alice


@pytest.fixture
def collecting() -> CollectingNotificationService:
    return CollectingNotificationService()

