"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import timedelta
from pathlib import Path

from pwdlib import PasswordHash
from supabase import create_client

from placez.adapters.geocoder import HttpxGoogleGeocoder
from placez.adapters.image_store import LocalImageStore
from placez.adapters.supabase_place_repository import SupabasePlaceRepository
from placez.adapters.supabase_user_repository import SupabaseUserRepository
from placez.config import Settings
from placez.services.places import PlaceService
from placez.services.tokens import TokenService
from placez.services.users import UserService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    token_service: TokenService
    user_service: UserService
    place_service: PlaceService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    user_repository = SupabaseUserRepository(supabase_client)
    place_repository = SupabasePlaceRepository(supabase_client)
    token_service = TokenService(
        secret=resolved_settings.jwt_secret,
        issuer=resolved_settings.token_issuer,
        audience=resolved_settings.token_audience,
        ttl=timedelta(minutes=resolved_settings.token_ttl_minutes),
    )
    image_store = LocalImageStore(directory=Path(resolved_settings.upload_dir))
    geocoder = HttpxGoogleGeocoder.create(
        api_key=resolved_settings.maps_api_key,
        base_url=resolved_settings.geocoding_base_url,
    )
    user_service = UserService(
        repository=user_repository,
        token_service=token_service,
        image_store=image_store,
        password_hash=PasswordHash.recommended(),
    )
    place_service = PlaceService(
        repository=place_repository,
        user_repository=user_repository,
        geocoder=geocoder,
        image_store=image_store,
    )

    async def close_resources() -> None:
        await geocoder.close()

    return AppContainer(
        settings=resolved_settings,
        token_service=token_service,
        user_service=user_service,
        place_service=place_service,
        close_resources=close_resources,
    )
