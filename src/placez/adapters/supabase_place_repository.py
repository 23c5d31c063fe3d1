"""Supabase-backed place repository."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from placez.domain.models import Coordinates, PlaceRecord
from placez.services.places import PlaceRepository

_PLACE_COLUMNS = "id, title, description, address, lat, lng, image, creator_id"


def _to_place(row: dict[str, object]) -> PlaceRecord:
    return PlaceRecord(
        id=UUID(str(row["id"])),
        title=str(row["title"]),
        description=str(row["description"]),
        address=str(row["address"]),
        location=Coordinates(lat=float(row["lat"]), lng=float(row["lng"])),
        image=str(row.get("image") or ""),
        creator_id=UUID(str(row["creator_id"])),
    )


@dataclass
class SupabasePlaceRepository(PlaceRepository):
    """Supabase implementation for place persistence.

    Dual writes go through Postgres functions (see
    ``supabase/migrations/0001_init.sql``) so the place row and the owner's
    ``place_ids`` array change in a single transaction.
    """

    client: Client

    def get_place(self, place_id: UUID) -> PlaceRecord | None:
        """Return a place by id, if present."""
        response = (
            self.client.table("places")
            .select(_PLACE_COLUMNS)
            .eq("id", str(place_id))
            .limit(1)
            .execute()
        )
        if response.data:
            return _to_place(response.data[0])
        return None

    def list_places_by_creator(self, creator_id: UUID) -> list[PlaceRecord]:
        """Return places created by a user, oldest first."""
        response = (
            self.client.table("places")
            .select(_PLACE_COLUMNS)
            .eq("creator_id", str(creator_id))
            .order("created_at")
            .execute()
        )
        return [_to_place(row) for row in response.data or []]

    def create_place_for_owner(  # noqa: PLR0913
        self,
        title: str,
        description: str,
        address: str,
        location: Coordinates,
        image: str,
        creator_id: UUID,
    ) -> PlaceRecord:
        """Insert a place and link it to its creator in one transaction."""
        response = self.client.rpc(
            "create_place_with_owner",
            {
                "p_title": title,
                "p_description": description,
                "p_address": address,
                "p_lat": location.lat,
                "p_lng": location.lng,
                "p_image": image,
                "p_creator_id": str(creator_id),
            },
        ).execute()
        row = _first_row(response.data)
        if row is None:
            raise RuntimeError("Failed to create place")
        return _to_place(row)

    def update_place(
        self, place_id: UUID, title: str, description: str
    ) -> PlaceRecord:
        """Update title and description of a place."""
        response = (
            self.client.table("places")
            .update({"title": title, "description": description})
            .eq("id", str(place_id))
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to update place")
        return _to_place(response.data[0])

    def delete_place_for_owner(self, place_id: UUID, creator_id: UUID) -> None:
        """Delete a place and unlink it from its creator in one transaction."""
        self.client.rpc(
            "delete_place_with_owner",
            {"p_place_id": str(place_id), "p_creator_id": str(creator_id)},
        ).execute()


def _first_row(data: object) -> dict[str, object] | None:
    if isinstance(data, list):
        return data[0] if data else None
    if isinstance(data, dict):
        return data
    return None
