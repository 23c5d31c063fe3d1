"""Domain models for the places API."""

from dataclasses import dataclass, field
from uuid import UUID


@dataclass(frozen=True)
class Coordinates:
    """Geographic position resolved for an address."""

    lat: float
    lng: float


@dataclass(frozen=True)
class UserRecord:
    """Represents a user stored in the database."""

    id: UUID
    name: str
    email: str
    password_hash: str
    image: str
    place_ids: tuple[UUID, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class PlaceRecord:
    """Represents a place stored in the database."""

    id: UUID
    title: str
    description: str
    address: str
    location: Coordinates
    image: str
    creator_id: UUID


@dataclass(frozen=True)
class ImageUpload:
    """An uploaded image that has not been stored yet."""

    filename: str
    content_type: str
    data: bytes
