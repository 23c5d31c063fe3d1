"""Place endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile, status

from placez.api.auth import require_auth
from placez.api.schemas import PlaceUpdateRequest
from placez.api.serializers import serialize_place
from placez.api.uploads import read_upload
from placez.domain.auth import AuthContext
from placez.errors import NotFound

if TYPE_CHECKING:
    from placez.containers import AppContainer

router = APIRouter(prefix="/api/places", tags=["places"])


def _parse_id(raw: str, message: str) -> UUID:
    try:
        return UUID(raw)
    except ValueError as exc:
        raise NotFound(message) from exc


@router.get("/user/{uid}")
async def places_by_user(uid: str, request: Request) -> dict[str, object]:
    """Return every place created by a user."""
    container: AppContainer = request.app.state.container
    user_id = _parse_id(uid, "Could not find places for the provided user id.")
    places = container.place_service.get_by_user(user_id)
    return {"places": [serialize_place(place) for place in places]}


@router.get("/{pid}")
async def place_detail(pid: str, request: Request) -> dict[str, object]:
    """Return a single place."""
    container: AppContainer = request.app.state.container
    place_id = _parse_id(pid, "Could not find a place for the provided id.")
    return {"place": serialize_place(container.place_service.get_by_id(place_id))}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_place(  # noqa: PLR0913
    request: Request,
    title: str = Form(default=""),
    description: str = Form(default=""),
    address: str = Form(default=""),
    image: UploadFile = File(...),
    auth: AuthContext = Depends(require_auth),
) -> dict[str, object]:
    """Create a place owned by the authenticated user."""
    container: AppContainer = request.app.state.container
    upload = await read_upload(image)
    place = await container.place_service.create(
        title=title,
        description=description,
        address=address,
        image=upload,
        auth=auth,
    )
    return {"place": serialize_place(place)}


@router.patch("/{pid}")
async def update_place(
    pid: str,
    payload: PlaceUpdateRequest,
    request: Request,
    auth: AuthContext = Depends(require_auth),
) -> dict[str, object]:
    """Edit title and description of an owned place."""
    container: AppContainer = request.app.state.container
    place_id = _parse_id(pid, "Could not find a place for the provided id.")
    place = container.place_service.update(
        place_id, title=payload.title, description=payload.description, auth=auth
    )
    return {"place": serialize_place(place)}


@router.delete("/{pid}")
async def delete_place(
    pid: str, request: Request, auth: AuthContext = Depends(require_auth)
) -> dict[str, str]:
    """Delete an owned place."""
    container: AppContainer = request.app.state.container
    place_id = _parse_id(pid, "Could not find a place for the provided id.")
    container.place_service.delete(place_id, auth=auth)
    return {"message": "Deleted place."}
