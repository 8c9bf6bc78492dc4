"""Device location lookup and the one-shot startup resolver."""

from typing import Optional, Protocol

import httpx

from weathernow.logging_config import logger
from weathernow.models.coordinates import Coordinates
from weathernow.weather_service.weather import InputRejected

GEOLOCATION_UNSUPPORTED = "Geolocation is not supported by your browser."
GEOLOCATION_DENIED = "Location access denied. Please search manually."


class GeolocationDenied(InputRejected):
    """Raised when the host cannot or will not report a position."""
    pass


class GeolocationProvider(Protocol):
    """One-shot "get current position" capability."""

    async def locate(self) -> Coordinates:
        ...


class IpGeolocation:
    """Resolve the current position from the caller's public IP address."""

    def __init__(
        self, url: str, transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.url = url
        self.transport = transport

    async def locate(self) -> Coordinates:
        """Ask the IP geolocation service for the current coordinates.

        Returns:
            Coordinates of the detected location.

        Raises:
            GeolocationDenied: If the service fails or cannot place the address.
        """
        try:
            async with httpx.AsyncClient(transport=self.transport) as client:
                response = await client.get(self.url)
            response.raise_for_status()
            data = response.json()
            if data.get("status", "success") != "success":
                raise GeolocationDenied(data.get("message", "lookup refused"))
            return Coordinates(latitude=data["lat"], longitude=data["lon"])
        except httpx.HTTPError as exc:
            raise GeolocationDenied(str(exc)) from exc
        except (ValueError, TypeError, KeyError, AttributeError) as exc:
            raise GeolocationDenied(f"bad payload: {exc}") from exc


async def resolve_location(controller) -> None:
    """Look up the device position once and load its weather.

    Only the startup path calls this; failures leave a message in the
    controller state and are not retried.

    Args:
        controller: The WeatherController that owns the application state.
    """
    provider = controller.geolocation
    if provider is None:
        logger.info("GEOLOCATION_UNSUPPORTED")
        controller.report_error(GEOLOCATION_UNSUPPORTED)
        return
    try:
        coords = await provider.locate()
    except GeolocationDenied as exc:
        logger.error("GEOLOCATION_FAILED", error=str(exc))
        controller.report_error(GEOLOCATION_DENIED)
        return
    logger.info("GEOLOCATION_RESOLVED", lat=coords.latitude, lon=coords.longitude)
    await controller.fetch_by_coordinates(coords.latitude, coords.longitude)
