"""Health checks for the weather provider and the geolocation service."""

from typing import Optional

import httpx

from weathernow.config import Settings
from weathernow.logging_config import logger
from weathernow.models.health import ServiceStatus


async def is_weather_api_available(
    settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None
) -> ServiceStatus:
    """Check the weather provider with a fixed coordinate lookup.

    Args:
        settings: Application settings holding the endpoint and API key.

    Returns:
        ServiceStatus.available if the provider answers with weather data.
    """
    try:
        async with httpx.AsyncClient(timeout=5, transport=transport) as client:
            response = await client.get(
                settings.weather_api_url,
                params={
                    "lat": 51.5,
                    "lon": -0.12,
                    "appid": settings.weather_api_key,
                    "units": "metric",
                },
            )
        if response.status_code == 200 and "main" in response.json():
            return ServiceStatus.available
    except (httpx.HTTPError, ValueError, TypeError) as exc:
        logger.error("WEATHER_API_UNAVAILABLE", error=str(exc))
    return ServiceStatus.not_available


async def is_geolocation_available(
    settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None
) -> ServiceStatus:
    """Check the IP geolocation endpoint.

    Args:
        settings: Application settings holding the endpoint.

    Returns:
        ServiceStatus.disabled when geolocation is switched off, otherwise
        whether the endpoint responds.
    """
    if not settings.geolocation_enabled:
        return ServiceStatus.disabled
    try:
        async with httpx.AsyncClient(timeout=5, transport=transport) as client:
            response = await client.get(settings.geolocation_url)
        if response.status_code == 200:
            return ServiceStatus.available
    except httpx.HTTPError as exc:
        logger.error("GEOLOCATION_UNAVAILABLE", error=str(exc))
    return ServiceStatus.not_available
