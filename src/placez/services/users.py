"""User registration and authentication logic."""

import logging
from dataclasses import dataclass
from typing import Annotated, Protocol
from uuid import UUID

import pydantic
from pwdlib import PasswordHash
from pwdlib.exceptions import PwdlibError
from pydantic import BaseModel, EmailStr, Field, StringConstraints

from placez.adapters.image_store import ImageStore
from placez.domain.auth import AuthResult
from placez.domain.models import ImageUpload, UserRecord
from placez.errors import (
    DuplicateUser,
    FetchFailed,
    InternalFailure,
    InvalidCredentials,
    PlacezError,
    ValidationError,
)
from placez.services.tokens import TokenService

MIN_PASSWORD_LENGTH = 6

_logger = logging.getLogger(__name__)


class UserRepository(Protocol):
    """Persistence interface for user data."""

    def get_by_id(self, user_id: UUID) -> UserRecord | None:
        """Return the user with the given id, if present."""

    def get_by_email(self, email: str) -> UserRecord | None:
        """Return the user registered with an email, if present."""

    def create_user(
        self, name: str, email: str, password_hash: str, image: str
    ) -> UserRecord:
        """Create and return a new user record."""

    def list_users(self) -> list[UserRecord]:
        """Return all users."""


class SignupInput(BaseModel):
    """Validated signup fields."""

    name: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
    email: EmailStr
    password: str = Field(min_length=MIN_PASSWORD_LENGTH)


def _normalize_email(email: str) -> str:
    return email.strip().lower()


@dataclass
class UserService:
    """Application service for signup, login and user listings."""

    repository: UserRepository
    token_service: TokenService
    image_store: ImageStore
    password_hash: PasswordHash

    def register(
        self, name: str, email: str, password: str, image: ImageUpload
    ) -> AuthResult:
        """Create an account and return a fresh token for it."""
        try:
            data = SignupInput(name=name, email=email, password=password)
        except pydantic.ValidationError as exc:
            raise ValidationError() from exc
        normalized_email = _normalize_email(data.email)

        try:
            existing = self.repository.get_by_email(normalized_email)
        except Exception as exc:
            _logger.exception("User lookup failed during signup")
            raise InternalFailure("Signing up failed, please try again later.") from exc
        if existing:
            raise DuplicateUser()

        image_path = self.image_store.save(image)
        try:
            hashed = self.password_hash.hash(data.password)
            user = self.repository.create_user(
                name=data.name,
                email=normalized_email,
                password_hash=hashed,
                image=image_path,
            )
            token = self.token_service.issue(user.id, user.email)
        except PlacezError:
            self.image_store.discard(image_path)
            raise
        except Exception as exc:
            _logger.exception("Signup failed")
            self.image_store.discard(image_path)
            raise InternalFailure("Signing up failed, please try again.") from exc

        _logger.info("User registered", extra={"user_id": str(user.id)})
        return AuthResult(user_id=user.id, email=user.email, token=token)

    def login(self, email: str, password: str) -> AuthResult:
        """Check credentials and return a fresh token.

        Unknown emails and wrong passwords raise the same error.
        """
        try:
            user = self.repository.get_by_email(_normalize_email(email or ""))
        except Exception as exc:
            _logger.exception("User lookup failed during login")
            raise InternalFailure("Logging in failed, please try again later.") from exc

        if user is None or not self._password_matches(password, user.password_hash):
            raise InvalidCredentials()

        token = self.token_service.issue(user.id, user.email)
        return AuthResult(user_id=user.id, email=user.email, token=token)

    def list_users(self) -> list[UserRecord]:
        """Return every registered user; raises ``FetchFailed`` when there are none."""
        try:
            users = self.repository.list_users()
        except Exception as exc:
            _logger.exception("Fetching users failed")
            raise FetchFailed() from exc
        if not users:
            raise FetchFailed("No users found.")
        return users

    def _password_matches(self, password: str, password_hash: str) -> bool:
        if not password:
            return False
        try:
            return self.password_hash.verify(password, password_hash)
        except PwdlibError:
            return False
