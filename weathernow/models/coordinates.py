"""Coordinates model for geolocation results."""

from pydantic import BaseModel


class Coordinates(BaseModel):
    """Latitude/longitude pair reported by the geolocation capability."""

    latitude: float
    longitude: float
