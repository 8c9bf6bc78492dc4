"""OpenWeatherMap current weather client."""

from typing import Optional

import httpx
from prometheus_client import Counter
from pydantic import ValidationError

from weathernow.logging_config import logger
from weathernow.models.weather import WeatherSnapshot

WEATHER_LOOKUPS = Counter(
    "weather_lookups_total", "Weather provider lookups", ["entry_point", "outcome"]
)


BLANK_CITY_NAME = "Please enter a city name"


class WeatherServiceError(Exception):
    """Base exception for weather service failures."""
    pass


class LookupFailure(WeatherServiceError):
    """Raised when the provider rejects a query or the call does not complete."""
    pass


class InputRejected(WeatherServiceError):
    """Raised when a lookup is refused locally before any network call."""
    pass


class WeatherClient:
    """Async client for the provider's current weather endpoint."""

    def __init__(
        self,
        api_key: str,
        base_url: str,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key
        self.base_url = base_url
        self.transport = transport

    async def fetch_by_coordinates(self, lat: float, lon: float) -> WeatherSnapshot:
        """Fetch current weather for a latitude/longitude pair.

        Coordinates are passed through unchecked; the provider decides
        whether they are valid.

        Args:
            lat: Latitude.
            lon: Longitude.

        Returns:
            The parsed WeatherSnapshot.

        Raises:
            LookupFailure: If the request or the payload is unusable.
        """
        return await self._lookup(
            entry_point="coordinates",
            params={"lat": lat, "lon": lon},
            log_context={"lat": lat, "lon": lon},
        )

    async def fetch_by_city_name(self, name: str) -> WeatherSnapshot:
        """Fetch current weather for a free-text city name.

        Args:
            name: City name as typed by the user.

        Returns:
            The parsed WeatherSnapshot.

        Raises:
            InputRejected: If the name is empty after trimming.
            LookupFailure: If the request or the payload is unusable.
        """
        if not name.strip():
            raise InputRejected(BLANK_CITY_NAME)
        return await self._lookup(
            entry_point="city",
            params={"q": name},
            log_context={"city": name},
        )

    async def _lookup(
        self, *, entry_point: str, params: dict, log_context: dict
    ) -> WeatherSnapshot:
        query = {**params, "appid": self.api_key, "units": "metric"}
        try:
            async with httpx.AsyncClient(transport=self.transport) as client:
                response = await client.get(self.base_url, params=query)
            logger.info("WEATHER_RESPONSE", **log_context, status=response.status_code)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            logger.error(
                "WEATHER_BAD_STATUS", **log_context, status=exc.response.status_code
            )
            WEATHER_LOOKUPS.labels(entry_point=entry_point, outcome="failure").inc()
            raise LookupFailure(f"Weather lookup failed ({entry_point})") from exc
        except httpx.RequestError as exc:
            logger.error("WEATHER_REQUEST_FAILED", **log_context, error=str(exc))
            WEATHER_LOOKUPS.labels(entry_point=entry_point, outcome="failure").inc()
            raise LookupFailure(f"Weather lookup failed ({entry_point})") from exc

        try:
            snapshot = WeatherSnapshot.from_api_response(response.json())
        except (
            ValidationError, ValueError, TypeError, KeyError, IndexError, OverflowError
        ) as exc:
            logger.error("WEATHER_BAD_PAYLOAD", **log_context, error=str(exc))
            WEATHER_LOOKUPS.labels(entry_point=entry_point, outcome="failure").inc()
            raise LookupFailure(f"Weather lookup failed ({entry_point})") from exc

        WEATHER_LOOKUPS.labels(entry_point=entry_point, outcome="success").inc()
        return snapshot
