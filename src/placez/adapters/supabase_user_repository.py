"""Supabase-backed user repository."""

from dataclasses import dataclass
from uuid import UUID

from postgrest.exceptions import APIError
from supabase import Client

from placez.domain.models import UserRecord
from placez.errors import DuplicateUser
from placez.services.users import UserRepository

_USER_COLUMNS = "id, name, email, password_hash, image, place_ids"
_UNIQUE_VIOLATION = "23505"


def _to_user(row: dict[str, object]) -> UserRecord:
    return UserRecord(
        id=UUID(str(row["id"])),
        name=str(row["name"]),
        email=str(row["email"]),
        password_hash=str(row["password_hash"]),
        image=str(row.get("image") or ""),
        place_ids=tuple(UUID(str(value)) for value in row.get("place_ids") or []),
    )


@dataclass
class SupabaseUserRepository(UserRepository):
    """Supabase implementation for user persistence."""

    client: Client

    def get_by_id(self, user_id: UUID) -> UserRecord | None:
        """Return the user with the given id, if present."""
        response = (
            self.client.table("users")
            .select(_USER_COLUMNS)
            .eq("id", str(user_id))
            .limit(1)
            .execute()
        )
        if response.data:
            return _to_user(response.data[0])
        return None

    def get_by_email(self, email: str) -> UserRecord | None:
        """Return the user registered with an email, if present."""
        response = (
            self.client.table("users")
            .select(_USER_COLUMNS)
            .eq("email", email)
            .limit(1)
            .execute()
        )
        if response.data:
            return _to_user(response.data[0])
        return None

    def create_user(
        self, name: str, email: str, password_hash: str, image: str
    ) -> UserRecord:
        """Create a new user row and return it."""
        try:
            response = (
                self.client.table("users")
                .insert(
                    {
                        "name": name,
                        "email": email,
                        "password_hash": password_hash,
                        "image": image,
                        "place_ids": [],
                    }
                )
                .execute()
            )
        except APIError as exc:
            if exc.code == _UNIQUE_VIOLATION:
                raise DuplicateUser() from exc
            raise
        if not response.data:
            raise RuntimeError("Failed to create user in Supabase")
        return _to_user(response.data[0])

    def list_users(self) -> list[UserRecord]:
        """Return all users ordered by signup time."""
        response = (
            self.client.table("users")
            .select(_USER_COLUMNS)
            .order("created_at")
            .execute()
        )
        return [_to_user(row) for row in response.data or []]
