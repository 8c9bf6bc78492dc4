"""Owner of the application state and the fetch lifecycle around it."""

from typing import Optional

from weathernow.geolocation.geolocation import GeolocationProvider
from weathernow.logging_config import logger
from weathernow.models.state import AppState
from weathernow.models.weather import WeatherSnapshot
from weathernow.weather_service.weather import (
    BLANK_CITY_NAME,
    LookupFailure,
    WeatherClient,
)

LOCATION_LOOKUP_FAILED = "Could not get weather for your location."
CITY_LOOKUP_FAILED = "City not found. Please try again with a valid city name."

DEMO_SNAPSHOT = WeatherSnapshot(
    city="New York",
    country="United States",
    temperature=22,
    condition="Partly Cloudy",
    humidity=65,
    pressure=1013,
    wind_speed=15,
    visibility=10,
)


class WeatherController:
    """Drives weather lookups and is the only writer of its AppState.

    Fetches are neither queued nor cancelled. When two overlap, whichever
    finishes last leaves its result in the state.
    """

    def __init__(
        self,
        client: WeatherClient,
        geolocation: Optional[GeolocationProvider] = None,
    ):
        self.client = client
        self.geolocation = geolocation
        self.state = AppState()

    def report_error(self, message: str) -> None:
        """Show a message without touching the current snapshot."""
        self.state.error = message

    async def fetch_by_coordinates(self, lat: float, lon: float) -> None:
        """Load weather for coordinates into the state.

        Args:
            lat: Latitude.
            lon: Longitude.
        """
        self._begin()
        try:
            snapshot = await self.client.fetch_by_coordinates(lat, lon)
        except LookupFailure:
            self._fail(LOCATION_LOOKUP_FAILED)
        else:
            self.state.weather = snapshot
        finally:
            self.state.loading = False

    async def fetch_by_city_name(self, name: str) -> None:
        """Load weather for a typed city name into the state.

        Empty input is rejected without a network call.

        Args:
            name: City name as submitted by the user.
        """
        self.state.city_input = name
        if not name.strip():
            self.report_error(BLANK_CITY_NAME)
            return
        self._begin()
        try:
            snapshot = await self.client.fetch_by_city_name(name)
        except LookupFailure:
            self._fail(CITY_LOOKUP_FAILED)
        else:
            self.state.weather = snapshot
        finally:
            self.state.loading = False

    def load_demo(self) -> None:
        """Show a fixed sample snapshot, for trying the page without a key."""
        logger.info("DEMO_LOADED")
        self.state.weather = DEMO_SNAPSHOT.model_copy()
        self.state.error = None

    def _begin(self) -> None:
        self.state.loading = True
        self.state.error = None

    def _fail(self, message: str) -> None:
        self.state.error = message
        self.state.weather = None
