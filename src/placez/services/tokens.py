"""Access token issuance and verification."""

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from uuid import UUID

import jwt

from placez.domain.auth import TokenClaims

_ALGORITHM = "HS256"


class InvalidToken(Exception):
    """Raised when a token cannot be trusted."""

    reason = "invalid"


class TokenMissing(InvalidToken):
    reason = "missing"


class TokenMalformed(InvalidToken):
    reason = "malformed"


class TokenExpired(InvalidToken):
    reason = "expired"


class TokenSignatureMismatch(InvalidToken):
    reason = "signature_mismatch"


class TokenClaimsMismatch(InvalidToken):
    reason = "claims_mismatch"


def _utcnow() -> datetime:
    return datetime.now(tz=UTC)


@dataclass
class TokenService:
    """Issues and verifies signed, time-limited bearer tokens.

    Every verification checks the HMAC signature before any claim is read,
    then expiry, issuer and audience.
    """

    secret: str
    issuer: str = "api.placez"
    audience: str = "api.placez"
    ttl: timedelta = timedelta(hours=1)
    clock: Callable[[], datetime] = field(default=_utcnow)

    def issue(self, user_id: UUID, email: str) -> str:
        """Return a signed token binding the user identity."""
        now = self.clock()
        payload = {
            "userId": str(user_id),
            "email": email,
            "iss": self.issuer,
            "aud": self.audience,
            "iat": int(now.timestamp()),
            "exp": int((now + self.ttl).timestamp()),
        }
        return jwt.encode(payload, self.secret, algorithm=_ALGORITHM)

    def verify(self, token: str | None) -> TokenClaims:
        """Verify a token and return its claims."""
        if not token:
            raise TokenMissing("No token supplied")
        try:
            data = jwt.decode(
                token,
                self.secret,
                algorithms=[_ALGORITHM],
                audience=self.audience,
                issuer=self.issuer,
                options={
                    "require": ["exp", "iss", "aud"],
                    "verify_exp": False,
                    "verify_iat": False,
                },
            )
        except jwt.InvalidSignatureError as exc:
            raise TokenSignatureMismatch(str(exc)) from exc
        except (jwt.InvalidIssuerError, jwt.InvalidAudienceError) as exc:
            raise TokenClaimsMismatch(str(exc)) from exc
        except jwt.InvalidTokenError as exc:
            raise TokenMalformed(str(exc)) from exc

        expires_at = datetime.fromtimestamp(int(data["exp"]), tz=UTC)
        if expires_at <= self.clock():
            raise TokenExpired("Token has expired")
        try:
            user_id = UUID(str(data["userId"]))
            email = str(data["email"])
        except (KeyError, ValueError) as exc:
            raise TokenMalformed("Token is missing identity claims") from exc
        return TokenClaims(
            user_id=user_id,
            email=email,
            issuer=str(data["iss"]),
            audience=self.audience,
            expires_at=expires_at,
        )
