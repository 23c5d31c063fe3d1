"""Tests for user service."""

import pytest

from placez.errors import (
    DuplicateUser,
    FetchFailed,
    InternalFailure,
    InvalidCredentials,
    ValidationError,
)
from placez.services.tokens import TokenService
from placez.services.users import UserService
from tests.conftest import InMemoryImageStore, InMemoryUserRepository, make_upload


def test_register_persists_user_and_returns_token(
    user_service: UserService,
    user_repository: InMemoryUserRepository,
    token_service: TokenService,
    image_store: InMemoryImageStore,
) -> None:
    result = user_service.register("Ada", "Ada@Example.com", "secret1", make_upload())

    user = user_repository.users[result.user_id]
    assert user.email == "ada@example.com"
    assert user.password_hash != "secret1"
    assert user.image in image_store.saved
    assert token_service.verify(result.token).user_id == user.id


def test_register_rejects_duplicate_email(
    user_service: UserService,
    user_repository: InMemoryUserRepository,
    image_store: InMemoryImageStore,
) -> None:
    user_service.register("Ada", "ada@example.com", "secret1", make_upload())
    saved_before = dict(image_store.saved)

    with pytest.raises(DuplicateUser):
        user_service.register("Other", "ada@example.com", "secret2", make_upload())

    assert len(user_repository.users) == 1
    assert image_store.saved == saved_before


@pytest.mark.parametrize(
    ("name", "email", "password"),
    [
        ("", "ada@example.com", "secret1"),
        ("Ada", "not-an-email", "secret1"),
        ("Ada", "ada@example.com", "short"),
    ],
)
def test_register_validates_inputs(
    user_service: UserService,
    user_repository: InMemoryUserRepository,
    name: str,
    email: str,
    password: str,
) -> None:
    with pytest.raises(ValidationError):
        user_service.register(name, email, password, make_upload())

    assert user_repository.users == {}


def test_register_discards_image_when_storage_fails(
    user_service: UserService,
    user_repository: InMemoryUserRepository,
    image_store: InMemoryImageStore,
) -> None:
    user_repository.fail_on_create = True

    with pytest.raises(InternalFailure):
        user_service.register("Ada", "ada@example.com", "secret1", make_upload())

    assert image_store.saved == {}
    assert len(image_store.discarded) == 1


def test_login_returns_token_for_valid_credentials(
    user_service: UserService, token_service: TokenService
) -> None:
    registered = user_service.register(
        "Ada", "ada@example.com", "secret1", make_upload()
    )

    result = user_service.login(" ADA@example.com ", "secret1")

    assert result.user_id == registered.user_id
    assert token_service.verify(result.token).email == "ada@example.com"


def test_login_failures_are_indistinguishable(user_service: UserService) -> None:
    user_service.register("Ada", "ada@example.com", "secret1", make_upload())

    with pytest.raises(InvalidCredentials) as wrong_password:
        user_service.login("ada@example.com", "wrong-password")
    with pytest.raises(InvalidCredentials) as unknown_email:
        user_service.login("nobody@example.com", "secret1")

    assert type(wrong_password.value) is type(unknown_email.value)
    assert wrong_password.value.message == unknown_email.value.message
    assert wrong_password.value.status_code == unknown_email.value.status_code


def test_login_with_corrupt_hash_is_invalid_credentials(
    user_service: UserService, user_repository: InMemoryUserRepository
) -> None:
    user_repository.add(email="ada@example.com")

    with pytest.raises(InvalidCredentials):
        user_service.login("ada@example.com", "secret1")


def test_list_users_returns_records(
    user_service: UserService, user_repository: InMemoryUserRepository
) -> None:
    user_repository.add(name="Ada", email="ada@example.com")
    user_repository.add(name="Grace", email="grace@example.com")

    users = user_service.list_users()

    assert {user.name for user in users} == {"Ada", "Grace"}


def test_list_users_failure_is_reported(
    user_service: UserService, user_repository: InMemoryUserRepository
) -> None:
    def broken() -> list:
        raise RuntimeError("database down")

    user_repository.list_users = broken  # type: ignore[method-assign]

    with pytest.raises(FetchFailed):
        user_service.list_users()


def test_list_users_without_users_is_reported(user_service: UserService) -> None:
    with pytest.raises(FetchFailed, match="No users found."):
        user_service.list_users()
