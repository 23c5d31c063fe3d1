"""CSRF protection middleware using the synchronizer token pattern.

A random token lives in the signed session cookie. Unsafe requests must echo
it back in the ``X-CSRF-Token`` header or a ``csrf_token`` form field, unless
their path matches one of the exempt prefixes.
"""

import logging
import secrets

from fastapi import APIRouter, Request
from starlette.responses import JSONResponse, Response
from starlette.types import ASGIApp, Message, Receive, Scope, Send

logger = logging.getLogger(__name__)

_SAFE_METHODS = frozenset({"GET", "HEAD", "OPTIONS", "TRACE"})
_SESSION_KEY = "_csrf_token"
_HEADER_NAME = "x-csrf-token"
_FORM_FIELD = "csrf_token"

router = APIRouter(tags=["csrf"])


def ensure_csrf_token(request: Request) -> str:
    """Return the session's CSRF token, creating it when absent."""
    token = request.session.get(_SESSION_KEY)
    if not token:
        token = secrets.token_urlsafe(32)
        request.session[_SESSION_KEY] = token
    return token


@router.get("/api/csrf-token")
@router.get("/api/crsf-token", include_in_schema=False)
async def csrf_token(request: Request) -> dict[str, str]:
    """Expose the CSRF token for the current session."""
    return {"csrfToken": ensure_csrf_token(request)}


class CSRFMiddleware:
    """Rejects unsafe requests that do not carry the session's CSRF token."""

    def __init__(self, app: ASGIApp, *, exempt_prefixes: tuple[str, ...] = ()) -> None:
        self.app = app
        self.exempt_prefixes = exempt_prefixes

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request = Request(scope, receive)
        if request.method in _SAFE_METHODS or self._is_exempt(request.url.path):
            await self.app(scope, receive, send)
            return

        expected = scope.get("session", {}).get(_SESSION_KEY)
        submitted = request.headers.get(_HEADER_NAME)
        if not submitted:
            content_type = request.headers.get("content-type", "")
            if "application/x-www-form-urlencoded" in content_type:
                body = await request.body()
                form = await request.form()
                value = form.get(_FORM_FIELD)
                if isinstance(value, str):
                    submitted = value
                await form.close()
                receive = _replay_body(body, receive)

        if not expected or not submitted or not secrets.compare_digest(
            submitted, expected
        ):
            logger.warning(
                "CSRF validation failed",
                extra={"path": request.url.path, "method": request.method},
            )
            response: Response = JSONResponse(
                {"message": "Invalid CSRF token."}, status_code=403
            )
            await response(scope, receive, send)
            return

        await self.app(scope, receive, send)

    def _is_exempt(self, path: str) -> bool:
        return any(
            path == prefix or path.startswith(f"{prefix}/")
            for prefix in self.exempt_prefixes
        )


def _replay_body(body: bytes, receive: Receive) -> Receive:
    """Return a ``receive`` that yields ``body`` once, then defers to ``receive``."""
    replayed = False

    async def replay() -> Message:
        nonlocal replayed
        if replayed:
            return await receive()
        replayed = True
        return {"type": "http.request", "body": body, "more_body": False}

    return replay
