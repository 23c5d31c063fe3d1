"""Mapping of domain records to their JSON wire shape."""

from placez.domain.auth import AuthResult
from placez.domain.models import PlaceRecord, UserRecord


def serialize_place(place: PlaceRecord) -> dict[str, object]:
    """Public view of a place with its coordinates nested under ``location``."""
    return {
        "id": str(place.id),
        "title": place.title,
        "description": place.description,
        "address": place.address,
        "location": {"lat": place.location.lat, "lng": place.location.lng},
        "image": place.image,
        "creator": str(place.creator_id),
    }


def serialize_user(user: UserRecord) -> dict[str, object]:
    """Public view of a user; the password hash is never included."""
    return {
        "id": str(user.id),
        "name": user.name,
        "email": user.email,
        "image": user.image,
        "places": [str(place_id) for place_id in user.place_ids],
    }


def serialize_auth_result(result: AuthResult) -> dict[str, str]:
    """Response body for a successful signup or login."""
    return {"userId": str(result.user_id), "email": result.email, "token": result.token}
