from __future__ import annotations

from datetime import UTC, datetime, timedelta
from http import HTTPStatus

import pytest
from cryptography.fernet import Fernet

from taskboard.application.services.session_validator import SessionValidator
from taskboard.application.use_cases.admin.list_users import ListUsersUseCase
from taskboard.application.use_cases.admin.set_user_active import SetUserActiveUseCase
from taskboard.application.use_cases.users.login_user import LoginUserUseCase
from taskboard.application.use_cases.users.logout_user import LogoutUserUseCase
from taskboard.application.use_cases.users.profile import (
    ChangePasswordUseCase,
    GetProfileUseCase,
    UpdateProfileUseCase,
)
from taskboard.application.use_cases.users.register_user import RegisterUserUseCase
from taskboard.domain.users.entities import UserRole
from taskboard.domain.users.exceptions import (
    AccountInactiveError,
    IncorrectPasswordError,
    InvalidCredentialsError,
    UserAlreadyExistsError,
    UserNotFoundError,
)
from taskboard.infrastructure.tokens import FernetTokenService
from taskboard.shared.errors import AccessDeniedError, UnauthenticatedError, ValidationError


@pytest.fixture()
def register(users, token_service, hasher) -> RegisterUserUseCase:
    return RegisterUserUseCase(users=users, tokens=token_service, password_hasher=hasher)


@pytest.fixture()
def login(users, token_service, hasher) -> LoginUserUseCase:
    return LoginUserUseCase(users=users, tokens=token_service, password_hasher=hasher)


def test_register_user_success(register, users, token_service) -> None:
    user, token = register.execute("alice", "Alice@Example.com", "Passw0rd", first_name="Alice")

    assert user.id == 1
    assert user.email == "alice@example.com"
    assert user.password_hash == "hashed:Passw0rd"
    assert user.role is UserRole.USER
    assert user.is_active is True
    assert token_service.decode(token).user_id == user.id
    assert users.find_by_email("alice@example.com") is not None


@pytest.mark.parametrize(
    ("username", "email"),
    [("alice", "other@example.com"), ("someone", "ALICE@example.com")],
)
def test_register_user_conflict(register, username: str, email: str) -> None:
    register.execute("alice", "alice@example.com", "Passw0rd")

    with pytest.raises(UserAlreadyExistsError) as exc_info:
        register.execute(username, email, "Passw0rd")

    assert exc_info.value.status == HTTPStatus.CONFLICT


def test_login_success_stamps_last_login(register, login) -> None:
    register.execute("alice", "alice@example.com", "Passw0rd")

    user, token = login.execute("alice@example.com", "Passw0rd")

    assert user.last_login is not None
    assert token


def test_login_wrong_password_is_authentication_error(register, login) -> None:
    register.execute("alice", "alice@example.com", "Passw0rd")

    with pytest.raises(InvalidCredentialsError) as exc_info:
        login.execute("alice@example.com", "Wrong0ne")

    assert exc_info.value.status == HTTPStatus.UNAUTHORIZED


def test_login_unknown_email_matches_wrong_password(login) -> None:
    with pytest.raises(InvalidCredentialsError) as exc_info:
        login.execute("ghost@example.com", "Passw0rd")

    assert exc_info.value.message == "Invalid credentials"


def test_login_inactive_account(register, login, users) -> None:
    user, _ = register.execute("alice", "alice@example.com", "Passw0rd")
    users.update(user.id, is_active=False)

    with pytest.raises(AccountInactiveError):
        login.execute("alice@example.com", "Passw0rd")


def test_logout_is_stateless(register) -> None:
    user, _ = register.execute("alice", "alice@example.com", "Passw0rd")
    LogoutUserUseCase().execute(user)


class TestSessionValidator:
    def test_resolves_token_to_user(self, register, users, token_service) -> None:
        user, token = register.execute("alice", "alice@example.com", "Passw0rd")
        validator = SessionValidator(users=users, tokens=token_service)

        assert validator.validate(token).id == user.id

    @pytest.mark.parametrize("token", [None, "", "not-a-token"])
    def test_rejects_missing_or_malformed(self, users, token_service, token) -> None:
        validator = SessionValidator(users=users, tokens=token_service)

        with pytest.raises(UnauthenticatedError):
            validator.validate(token)

    def test_rejects_expired_token(self, register, users) -> None:
        key = Fernet.generate_key()
        past = datetime.now(UTC) - timedelta(days=30)
        issuer = FernetTokenService(key, ttl_seconds=3600, clock=lambda: past)
        user, _ = register.execute("alice", "alice@example.com", "Passw0rd")
        token = issuer.issue(user.id).token

        validator = SessionValidator(
            users=users, tokens=FernetTokenService(key, ttl_seconds=3600)
        )
        with pytest.raises(UnauthenticatedError) as exc_info:
            validator.validate(token)

        assert exc_info.value.message == "Token has expired"

    def test_rejects_deactivated_user(self, register, users, token_service) -> None:
        user, token = register.execute("alice", "alice@example.com", "Passw0rd")
        users.update(user.id, is_active=False)

        with pytest.raises(UnauthenticatedError):
            SessionValidator(users=users, tokens=token_service).validate(token)

    def test_rejects_token_for_unknown_user(self, users, token_service) -> None:
        token = token_service.issue(42).token

        with pytest.raises(UnauthenticatedError):
            SessionValidator(users=users, tokens=token_service).validate(token)

    def test_admin_gate(self, register, users, token_service) -> None:
        user, token = register.execute("alice", "alice@example.com", "Passw0rd")
        validator = SessionValidator(users=users, tokens=token_service)

        with pytest.raises(AccessDeniedError):
            validator.validate_admin(token)

        users.update(user.id, role=UserRole.ADMIN)
        assert validator.validate_admin(token).is_admin


class TestProfile:
    def test_get_profile_unknown_user(self, users) -> None:
        with pytest.raises(UserNotFoundError):
            GetProfileUseCase(users=users).execute(99)

    def test_update_profile_applies_known_fields_only(self, register, users) -> None:
        user, _ = register.execute("alice", "alice@example.com", "Passw0rd")

        updated = UpdateProfileUseCase(users=users).execute(
            user.id, {"first_name": "Alice", "password_hash": "x", "role": "admin"}
        )

        assert updated.first_name == "Alice"
        assert updated.password_hash == "hashed:Passw0rd"
        assert updated.role is UserRole.USER

    def test_update_profile_rejects_taken_username(self, register, users) -> None:
        register.execute("alice", "alice@example.com", "Passw0rd")
        bob, _ = register.execute("bob", "bob@example.com", "Passw0rd")

        with pytest.raises(UserAlreadyExistsError):
            UpdateProfileUseCase(users=users).execute(bob.id, {"username": "alice"})

    def test_update_profile_keeps_own_email(self, register, users) -> None:
        user, _ = register.execute("alice", "alice@example.com", "Passw0rd")

        updated = UpdateProfileUseCase(users=users).execute(
            user.id, {"email": "alice@example.com", "last_name": "Smith"}
        )

        assert updated.last_name == "Smith"

    def test_change_password(self, register, users, hasher) -> None:
        user, _ = register.execute("alice", "alice@example.com", "Passw0rd")
        use_case = ChangePasswordUseCase(users=users, password_hasher=hasher)

        with pytest.raises(IncorrectPasswordError):
            use_case.execute(user.id, "Wrong0ne", "NewPassw0rd")

        use_case.execute(user.id, "Passw0rd", "NewPassw0rd")
        assert users.find_by_id(user.id).password_hash == "hashed:NewPassw0rd"


class TestAdmin:
    def test_list_users(self, register, users) -> None:
        register.execute("alice", "alice@example.com", "Passw0rd")
        register.execute("bob", "bob@example.com", "Passw0rd")

        listed = ListUsersUseCase(users=users).execute()

        assert [u.username for u in listed] == ["alice", "bob"]

    def test_set_user_active(self, register, users) -> None:
        admin, _ = register.execute("root", "root@example.com", "Passw0rd")
        bob, _ = register.execute("bob", "bob@example.com", "Passw0rd")
        use_case = SetUserActiveUseCase(users=users)

        assert use_case.execute(admin.id, bob.id, False).is_active is False
        assert use_case.execute(admin.id, bob.id, True).is_active is True

    def test_admin_cannot_deactivate_self(self, register, users) -> None:
        admin, _ = register.execute("root", "root@example.com", "Passw0rd")

        with pytest.raises(ValidationError) as exc_info:
            SetUserActiveUseCase(users=users).execute(admin.id, admin.id, False)

        assert exc_info.value.fields == ["isActive"]

    def test_set_active_unknown_user(self, users) -> None:
        with pytest.raises(UserNotFoundError):
            SetUserActiveUseCase(users=users).execute(1, 99, True)
