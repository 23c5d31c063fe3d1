"""Place lifecycle orchestration."""

import logging
from dataclasses import dataclass
from typing import Annotated, Protocol
from uuid import UUID

import pydantic
from pydantic import BaseModel, StringConstraints

from placez.adapters.geocoder import Geocoder
from placez.adapters.image_store import ImageStore
from placez.domain.auth import AuthContext
from placez.domain.models import Coordinates, ImageUpload, PlaceRecord
from placez.errors import (
    Forbidden,
    InternalFailure,
    NotFound,
    PlacezError,
    UserNotFound,
    ValidationError,
)
from placez.services.users import UserRepository

_logger = logging.getLogger(__name__)

_Title = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
_Description = Annotated[str, StringConstraints(strip_whitespace=True, min_length=4)]


class PlaceRepository(Protocol):
    """Persistence interface for places.

    ``create_place_for_owner`` and ``delete_place_for_owner`` must apply both
    the place write and the owner's place list update atomically.
    """

    def get_place(self, place_id: UUID) -> PlaceRecord | None:
        """Return a place by id, if present."""

    def list_places_by_creator(self, creator_id: UUID) -> list[PlaceRecord]:
        """Return places created by a user."""

    def create_place_for_owner(  # noqa: PLR0913
        self,
        title: str,
        description: str,
        address: str,
        location: Coordinates,
        image: str,
        creator_id: UUID,
    ) -> PlaceRecord:
        """Insert a place and append its id to the creator's place list."""

    def update_place(
        self, place_id: UUID, title: str, description: str
    ) -> PlaceRecord:
        """Update title and description of a place."""

    def delete_place_for_owner(self, place_id: UUID, creator_id: UUID) -> None:
        """Delete a place and remove its id from the creator's place list."""


class PlaceInput(BaseModel):
    """Validated fields for a new place."""

    title: _Title
    description: _Description
    address: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class PlaceUpdateInput(BaseModel):
    """Validated fields for a place edit."""

    title: _Title
    description: _Description


@dataclass
class PlaceService:
    """Creates, edits and removes places while keeping owners consistent."""

    repository: PlaceRepository
    user_repository: UserRepository
    geocoder: Geocoder
    image_store: ImageStore

    def get_by_id(self, place_id: UUID) -> PlaceRecord:
        """Return a place or raise ``NotFound``."""
        place = self._load(place_id)
        if place is None:
            raise NotFound("Could not find a place for the provided id.")
        return place

    def get_by_user(self, user_id: UUID) -> list[PlaceRecord]:
        """Return the places a user created; raises ``NotFound`` when none."""
        try:
            places = self.repository.list_places_by_creator(user_id)
        except Exception as exc:
            _logger.exception("Fetching places failed", extra={"user_id": str(user_id)})
            raise InternalFailure(
                "Fetching places failed, please try again later."
            ) from exc
        if not places:
            raise NotFound("Could not find places for the provided user id.")
        return places

    async def create(  # noqa: PLR0913
        self,
        title: str,
        description: str,
        address: str,
        image: ImageUpload,
        auth: AuthContext,
    ) -> PlaceRecord:
        """Geocode and persist a new place owned by the authenticated user."""
        try:
            data = PlaceInput(title=title, description=description, address=address)
        except pydantic.ValidationError as exc:
            raise ValidationError() from exc

        location = await self.geocoder.resolve(data.address)

        try:
            creator = self.user_repository.get_by_id(auth.user_id)
        except Exception as exc:
            _logger.exception("Creator lookup failed")
            raise InternalFailure(
                "Creating place failed, please try again later."
            ) from exc
        if creator is None:
            raise UserNotFound()

        image_path = self.image_store.save(image)
        try:
            place = self.repository.create_place_for_owner(
                title=data.title,
                description=data.description,
                address=data.address,
                location=location,
                image=image_path,
                creator_id=creator.id,
            )
        except PlacezError:
            self.image_store.discard(image_path)
            raise
        except Exception as exc:
            _logger.exception("Creating place failed", extra={"user_id": str(creator.id)})
            self.image_store.discard(image_path)
            raise InternalFailure(
                "Creating place failed, please try again later."
            ) from exc

        _logger.info(
            "Place created",
            extra={"place_id": str(place.id), "user_id": str(creator.id)},
        )
        return place

    def update(
        self, place_id: UUID, title: str, description: str, auth: AuthContext
    ) -> PlaceRecord:
        """Edit title and description of a place owned by the caller."""
        try:
            data = PlaceUpdateInput(title=title, description=description)
        except pydantic.ValidationError as exc:
            raise ValidationError() from exc

        self._load_owned(place_id, auth)
        try:
            return self.repository.update_place(
                place_id, title=data.title, description=data.description
            )
        except Exception as exc:
            _logger.exception("Updating place failed", extra={"place_id": str(place_id)})
            raise InternalFailure(
                "Something went wrong, could not update place."
            ) from exc

    def delete(self, place_id: UUID, auth: AuthContext) -> None:
        """Remove a place owned by the caller and release its image."""
        place = self._load_owned(place_id, auth)
        try:
            self.repository.delete_place_for_owner(place.id, place.creator_id)
        except Exception as exc:
            _logger.exception("Deleting place failed", extra={"place_id": str(place_id)})
            raise InternalFailure(
                "Something went wrong, could not delete place."
            ) from exc

        self.image_store.discard(place.image)
        _logger.info("Place deleted", extra={"place_id": str(place_id)})

    def _load(self, place_id: UUID) -> PlaceRecord | None:
        try:
            return self.repository.get_place(place_id)
        except Exception as exc:
            _logger.exception("Fetching place failed", extra={"place_id": str(place_id)})
            raise InternalFailure(
                "Something went wrong, could not find a place."
            ) from exc

    def _load_owned(self, place_id: UUID, auth: AuthContext) -> PlaceRecord:
        place = self._load(place_id)
        if place is None:
            raise NotFound("Could not find a place for the provided id.")
        if place.creator_id != auth.user_id:
            raise Forbidden()
        return place
