"""Domain models for authentication."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class TokenClaims:
    """Verified contents of an access token."""

    user_id: UUID
    email: str
    issuer: str
    audience: str
    expires_at: datetime


@dataclass(frozen=True)
class AuthContext:
    """Authenticated identity passed into service operations."""

    user_id: UUID
    email: str


@dataclass(frozen=True)
class AuthResult:
    """Outcome of a successful signup or login."""

    user_id: UUID
    email: str
    token: str
