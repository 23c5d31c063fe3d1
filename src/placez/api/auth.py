"""Request authentication for protected routes."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from fastapi import Cookie, Header, Request

from placez.domain.auth import AuthContext
from placez.errors import Unauthorized
from placez.services.tokens import InvalidToken

if TYPE_CHECKING:
    from placez.containers import AppContainer

TOKEN_COOKIE = "token"

_logger = logging.getLogger(__name__)


def _bearer_token(authorization: str | None) -> str | None:
    if not authorization:
        return None
    scheme, _, credentials = authorization.partition(" ")
    if scheme.lower() != "bearer" or not credentials.strip():
        return None
    return credentials.strip()


async def require_auth(
    request: Request,
    authorization: str | None = Header(default=None),
    token: str | None = Cookie(default=None),
) -> AuthContext:
    """Verify the caller's token and return the authenticated identity.

    The ``Authorization: Bearer`` header takes precedence over the ``token``
    cookie. CORS preflight requests are answered by the CORS middleware and
    never reach this dependency.
    """
    container: AppContainer = request.app.state.container
    raw_token = _bearer_token(authorization) or token
    try:
        claims = container.token_service.verify(raw_token)
    except InvalidToken as exc:
        _logger.info(
            "Rejected request token",
            extra={"reason": exc.reason, "path": request.url.path},
        )
        raise Unauthorized() from exc
    return AuthContext(user_id=claims.user_id, email=claims.email)
