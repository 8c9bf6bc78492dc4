import httpx
import pytest

from weathernow.controller import WeatherController
from weathernow.geolocation.geolocation import (
    GEOLOCATION_DENIED,
    GEOLOCATION_UNSUPPORTED,
    GeolocationDenied,
    IpGeolocation,
    resolve_location,
)
from weathernow.models.coordinates import Coordinates
from weathernow.weather_service.weather import WeatherClient

NEW_YORK = {
    "name": "New York",
    "sys": {"country": "US"},
    "main": {"temp": 21.8, "humidity": 60, "pressure": 1012},
    "weather": [{"description": "clear sky"}],
    "wind": {"speed": 10},
    "visibility": 9000,
}


class FixedLocation:
    def __init__(self, latitude, longitude):
        self.calls = 0
        self.coords = Coordinates(latitude=latitude, longitude=longitude)

    async def locate(self):
        self.calls += 1
        return self.coords


class DeniedLocation:
    async def locate(self):
        raise GeolocationDenied("user said no")


@pytest.mark.asyncio
async def test_resolved_location_loads_weather():
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(200, json=NEW_YORK)

    client = WeatherClient("secret", "https://weather.test/weather", httpx.MockTransport(handler))
    provider = FixedLocation(40.7, -74.0)
    controller = WeatherController(client, provider)

    await resolve_location(controller)

    assert provider.calls == 1
    assert calls[0].url.params["lat"] == "40.7"
    assert calls[0].url.params["lon"] == "-74.0"
    weather = controller.state.weather
    assert weather.city == "New York"
    assert weather.country == "US"
    assert weather.temperature == 22
    assert weather.condition == "clear sky"
    assert weather.humidity == 60
    assert weather.pressure == 1012
    assert weather.wind_speed == 10
    assert weather.visibility == 9
    assert controller.state.error is None
    assert controller.state.loading is False


@pytest.mark.asyncio
async def test_missing_capability_sets_unsupported_message():
    controller = WeatherController(client=None, geolocation=None)

    await resolve_location(controller)

    assert controller.state.error == GEOLOCATION_UNSUPPORTED
    assert controller.state.weather is None


@pytest.mark.asyncio
async def test_denied_location_sets_message_and_stops():
    controller = WeatherController(client=None, geolocation=DeniedLocation())

    await resolve_location(controller)

    assert controller.state.error == GEOLOCATION_DENIED
    assert controller.state.loading is False
    assert controller.state.weather is None


@pytest.mark.asyncio
async def test_ip_geolocation_parses_coordinates():
    transport = httpx.MockTransport(
        lambda request: httpx.Response(
            200, json={"status": "success", "lat": 40.7, "lon": -74.0}
        )
    )

    coords = await IpGeolocation("http://geo.test/json/", transport).locate()

    assert coords == Coordinates(latitude=40.7, longitude=-74.0)


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(200, json={"status": "fail", "message": "private range"}),
        httpx.Response(200, json={"status": "success"}),
        httpx.Response(200, json=["not", "a", "dict"]),
        httpx.Response(200, text="not json"),
        httpx.Response(503),
    ],
)
async def test_ip_geolocation_failures_are_denied(response):
    transport = httpx.MockTransport(lambda request: response)

    with pytest.raises(GeolocationDenied):
        await IpGeolocation("http://geo.test/json/", transport).locate()


@pytest.mark.asyncio
async def test_ip_geolocation_transport_error_is_denied():
    def handler(request):
        raise httpx.ConnectTimeout("timed out", request=request)

    with pytest.raises(GeolocationDenied):
        await IpGeolocation("http://geo.test/json/", httpx.MockTransport(handler)).locate()
