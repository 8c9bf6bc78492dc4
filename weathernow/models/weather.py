"""Weather snapshot model and provider payload mapping."""

import math

from pydantic import BaseModel


class WeatherSnapshot(BaseModel):
    """Normalized current conditions from one successful provider response."""

    city: str
    country: str
    temperature: int
    condition: str
    humidity: int
    pressure: int
    wind_speed: float
    visibility: float

    @classmethod
    def from_api_response(cls, api_data: dict) -> "WeatherSnapshot":
        """Create a snapshot from an OpenWeatherMap current weather payload.

        Args:
            api_data: Decoded JSON body from the provider.

        Returns:
            A populated WeatherSnapshot.

        Raises:
            KeyError, IndexError, TypeError, pydantic.ValidationError: If the
                payload is missing fields or has the wrong shape.
        """
        main = api_data["main"]
        return cls(
            city=api_data["name"],
            country=api_data["sys"]["country"],
            # Halves round up, not to even.
            temperature=math.floor(main["temp"] + 0.5),
            condition=api_data["weather"][0]["description"],
            humidity=main["humidity"],
            pressure=main["pressure"],
            wind_speed=api_data["wind"]["speed"],
            visibility=api_data["visibility"] / 1000,
        )
