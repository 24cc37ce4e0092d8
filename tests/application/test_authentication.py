"""Tests for registration, login and sessions."""

from unittest.mock import MagicMock

import pytest

from finance_tracker.application.use_cases.authentication import (
    AuthService,
    Session,
)
from finance_tracker.domain.errors import (
    InvalidCredentialsError,
    NotAuthenticatedError,
    ValidationError,
)
from finance_tracker.domain.models import User


def test_empty_session_raises_on_user_access(session):
    assert not session.is_authenticated
    with pytest.raises(NotAuthenticatedError):
        _ = session.user
    with pytest.raises(NotAuthenticatedError):
        _ = session.wallet


def test_session_attach_and_clear():
    session = Session()
    user = User("alice", "secret")

    session.attach(user)
    assert session.user is user
    assert session.wallet is user.wallet

    session.clear()
    assert not session.is_authenticated


def test_register_saves_trimmed_login(auth_service, repository):
    user = auth_service.register("  alice ", "secret")

    assert user.login == "alice"
    assert repository.find_by_login("ALICE") is user


@pytest.mark.parametrize(
    "login, password",
    [("", "secret"), ("   ", "secret"), (None, "secret"), ("alice", "")],
)
def test_register_rejects_blank_fields(auth_service, login, password):
    with pytest.raises(ValidationError):
        auth_service.register(login, password)


def test_register_rejects_duplicate_login_ignoring_case(auth_service, alice):
    with pytest.raises(ValidationError) as excinfo:
        auth_service.register("ALICE", "other")

    assert "already exists" in excinfo.value.message


def test_login_attaches_user_to_session(auth_service, session, alice):
    user = auth_service.login(session, "Alice", "secret")

    assert user is alice
    assert session.user is alice


@pytest.mark.parametrize(
    "login, password",
    [("alice", "wrong"), ("nobody", "secret"), ("", "secret"), ("alice", "")],
)
def test_login_failures(auth_service, session, alice, login, password):
    with pytest.raises(InvalidCredentialsError):
        auth_service.login(session, login, password)

    assert not session.is_authenticated


def test_logout_saves_flushes_and_clears(session):
    repository = MagicMock()
    user = User("alice", "secret")
    repository.find_by_login.return_value = user
    service = AuthService(
        repository,
        logger=MagicMock(),
        usage_logger=MagicMock(),
    )
    service.login(session, "alice", "secret")

    service.logout(session)

    repository.save.assert_called_once_with(user)
    repository.flush.assert_called_once()
    assert not session.is_authenticated


def test_logout_without_user_is_noop(session):
    repository = MagicMock()
    service = AuthService(repository, logger=MagicMock())

    service.logout(session)

    repository.flush.assert_not_called()


def test_flush_failure_is_logged_and_swallowed(session):
    repository = MagicMock()
    repository.flush.side_effect = OSError("disk full")
    logger = MagicMock()
    service = AuthService(repository, logger=logger, usage_logger=MagicMock())

    service.save_all(session)

    logger.error.assert_called_once()
    assert "disk full" in logger.error.call_args.args[0]


def test_save_all_saves_session_user(auth_service, repository, session, alice):
    auth_service.login(session, "alice", "secret")
    repository.delete_by_login("alice")

    auth_service.save_all(session)

    assert repository.find_by_login("alice") is alice


def test_lookup_helpers(auth_service, alice, bob):
    assert auth_service.find_user_by_login(" BOB ") is bob
    assert auth_service.find_user_by_login("") is None
    assert auth_service.find_user_by_login("carol") is None
    assert set(auth_service.get_all_users()) == {alice, bob}
