import json

import httpx
import pytest

from weathernow.weather_service.weather import (
    InputRejected,
    LookupFailure,
    WeatherClient,
)

BASE_URL = "https://weather.test/data/2.5/weather"

NEW_YORK = {
    "name": "New York",
    "sys": {"country": "US"},
    "main": {"temp": 21.8, "humidity": 60, "pressure": 1012},
    "weather": [{"description": "clear sky"}],
    "wind": {"speed": 10},
    "visibility": 9000,
}


def make_client(handler, calls=None):
    def record(request: httpx.Request) -> httpx.Response:
        if calls is not None:
            calls.append(request)
        return handler(request)

    return WeatherClient("secret", BASE_URL, transport=httpx.MockTransport(record))


@pytest.mark.asyncio
async def test_fetch_by_coordinates_sends_metric_query():
    calls = []
    client = make_client(lambda request: httpx.Response(200, json=NEW_YORK), calls)

    snapshot = await client.fetch_by_coordinates(40.7, -74.0)

    assert snapshot.city == "New York"
    assert snapshot.temperature == 22
    assert snapshot.visibility == 9
    params = calls[0].url.params
    assert calls[0].method == "GET"
    assert params["lat"] == "40.7"
    assert params["lon"] == "-74.0"
    assert params["appid"] == "secret"
    assert params["units"] == "metric"


@pytest.mark.asyncio
async def test_fetch_by_city_name_sends_city_query():
    calls = []
    client = make_client(lambda request: httpx.Response(200, json=NEW_YORK), calls)

    await client.fetch_by_city_name("New York")

    params = calls[0].url.params
    assert params["q"] == "New York"
    assert params["units"] == "metric"
    assert "lat" not in params


@pytest.mark.asyncio
@pytest.mark.parametrize("name", ["", "   ", "\t\n"])
async def test_blank_city_name_is_rejected_without_request(name):
    calls = []
    client = make_client(lambda request: httpx.Response(200, json=NEW_YORK), calls)

    with pytest.raises(InputRejected):
        await client.fetch_by_city_name(name)
    assert calls == []


@pytest.mark.asyncio
@pytest.mark.parametrize("status_code", [401, 404, 500])
async def test_error_status_is_lookup_failure(status_code):
    client = make_client(
        lambda request: httpx.Response(status_code, json={"message": "nope"})
    )

    with pytest.raises(LookupFailure):
        await client.fetch_by_city_name("Nowhereville")
    with pytest.raises(LookupFailure):
        await client.fetch_by_coordinates(0, 0)


@pytest.mark.asyncio
async def test_transport_error_is_lookup_failure():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    client = make_client(handler)

    with pytest.raises(LookupFailure):
        await client.fetch_by_coordinates(40.7, -74.0)


@pytest.mark.asyncio
async def test_missing_fields_are_lookup_failure():
    client = make_client(lambda request: httpx.Response(200, json={"name": "X"}))

    with pytest.raises(LookupFailure):
        await client.fetch_by_city_name("X")


@pytest.mark.asyncio
async def test_non_json_body_is_lookup_failure():
    client = make_client(lambda request: httpx.Response(200, text="<html>"))

    with pytest.raises(LookupFailure):
        await client.fetch_by_city_name("London")


@pytest.mark.asyncio
async def test_out_of_range_number_is_lookup_failure():
    body = json.dumps(NEW_YORK).replace("21.8", "1e400")
    client = make_client(lambda request: httpx.Response(200, content=body))

    with pytest.raises(LookupFailure):
        await client.fetch_by_city_name("New York")
