"""User signup, login and listing endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, File, Form, Request, Response, UploadFile, status

from placez.api.auth import TOKEN_COOKIE
from placez.api.schemas import LoginRequest
from placez.api.serializers import serialize_auth_result, serialize_user
from placez.api.uploads import read_upload

if TYPE_CHECKING:
    from placez.containers import AppContainer
    from placez.domain.auth import AuthResult

router = APIRouter(prefix="/api/users", tags=["users"])


def _set_token_cookie(
    response: Response, container: AppContainer, result: AuthResult
) -> None:
    response.set_cookie(
        TOKEN_COOKIE,
        result.token,
        max_age=container.settings.token_ttl_minutes * 60,
        httponly=True,
        secure=container.settings.cookie_secure,
        samesite="lax",
    )


@router.get("", status_code=status.HTTP_201_CREATED)
async def list_users(request: Request) -> dict[str, object]:
    """Return all users without their password hashes."""
    container: AppContainer = request.app.state.container
    users = container.user_service.list_users()
    return {"users": [serialize_user(user) for user in users]}


@router.post("/signup", status_code=status.HTTP_201_CREATED)
async def signup(  # noqa: PLR0913
    request: Request,
    response: Response,
    name: str = Form(default=""),
    email: str = Form(default=""),
    password: str = Form(default=""),
    image: UploadFile = File(...),
) -> dict[str, str]:
    """Register a user and start an authenticated session."""
    container: AppContainer = request.app.state.container
    upload = await read_upload(image)
    result = container.user_service.register(
        name=name, email=email, password=password, image=upload
    )
    _set_token_cookie(response, container, result)
    return serialize_auth_result(result)


@router.post("/login")
async def login(
    payload: LoginRequest, request: Request, response: Response
) -> dict[str, str]:
    """Authenticate with email and password."""
    container: AppContainer = request.app.state.container
    result = container.user_service.login(payload.email, payload.password)
    _set_token_cookie(response, container, result)
    return serialize_auth_result(result)
