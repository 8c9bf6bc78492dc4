"""Application state and view state models."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel

from weathernow.models.weather import WeatherSnapshot


class ViewState(str, Enum):
    """Mutually exclusive states the page can be in."""

    idle = "idle"
    loading = "loading"
    error = "error"
    result = "result"


class AppState(BaseModel):
    """The single mutable state record owned by the controller."""

    city_input: str = ""
    loading: bool = False
    error: Optional[str] = None
    weather: Optional[WeatherSnapshot] = None


class StateResponse(AppState):
    """State payload exposed by the API, with the view that would render."""

    view: ViewState
