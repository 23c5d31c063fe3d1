"""Google Geocoding API client."""

import logging
from dataclasses import dataclass
from typing import Protocol

import httpx

from placez.domain.models import Coordinates
from placez.errors import AddressNotFound, GeocodingUnavailable

_logger = logging.getLogger(__name__)


class Geocoder(Protocol):
    """Interface for resolving addresses to coordinates."""

    async def resolve(self, address: str) -> Coordinates:
        """Return coordinates for an address."""


@dataclass
class HttpxGoogleGeocoder(Geocoder):
    """HTTPX-backed Google Geocoding client."""

    api_key: str
    base_url: str
    http_client: httpx.AsyncClient
    timeout_seconds: float = 10

    @classmethod
    def create(cls, api_key: str, base_url: str) -> "HttpxGoogleGeocoder":
        """Create a geocoder with a managed httpx session."""
        return cls(api_key=api_key, base_url=base_url, http_client=httpx.AsyncClient())

    async def resolve(self, address: str) -> Coordinates:
        """Resolve a free-text address to latitude and longitude."""
        if not address or not address.strip():
            raise AddressNotFound()
        try:
            response = await self.http_client.get(
                self.base_url,
                params={"address": address, "key": self.api_key},
                timeout=self.timeout_seconds,
            )
            response.raise_for_status()
            data = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            _logger.warning("Geocoding request failed: %s", type(exc).__name__)
            raise GeocodingUnavailable() from exc

        status = data.get("status") if isinstance(data, dict) else None
        results = data.get("results") if isinstance(data, dict) else None
        if status == "ZERO_RESULTS" or (status == "OK" and not results):
            raise AddressNotFound()
        if status != "OK":
            _logger.warning("Geocoding returned status %s", status)
            raise GeocodingUnavailable()

        location = results[0]["geometry"]["location"]
        return Coordinates(lat=float(location["lat"]), lng=float(location["lng"]))

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
