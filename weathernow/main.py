"""FastAPI application routes, middleware, and metrics."""

import time
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Form, Request, Response
from fastapi.responses import HTMLResponse, JSONResponse, RedirectResponse
from prometheus_client import CONTENT_TYPE_LATEST, Counter, Histogram, generate_latest
from structlog.contextvars import bind_contextvars, clear_contextvars

from weathernow.config import get_settings
from weathernow.controller import WeatherController
from weathernow.geolocation.geolocation import IpGeolocation, resolve_location
from weathernow.health.health_check import (
    is_geolocation_available,
    is_weather_api_available,
)
from weathernow.logging_config import logger
from weathernow.models.health import Dependencies, HealthResponse
from weathernow.models.state import StateResponse
from weathernow.presentation.view import render_page, select_view
from weathernow.weather_service.weather import WeatherClient, WeatherServiceError

REQUEST_COUNT = Counter(
    "http_requests_total", "Total HTTP requests", ["method", "path", "status_code"]
)
REQUEST_LATENCY = Histogram(
    "http_request_duration_seconds", "HTTP request duration in seconds", ["path"]
)


def build_controller() -> WeatherController:
    """Create the controller from environment settings."""
    settings = get_settings()
    client = WeatherClient(settings.weather_api_key, settings.weather_api_url)
    geolocation = (
        IpGeolocation(settings.geolocation_url)
        if settings.geolocation_enabled
        else None
    )
    return WeatherController(client, geolocation)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the session controller and resolve the location once."""
    app.state.controller = build_controller()
    await resolve_location(app.state.controller)
    yield


app = FastAPI(lifespan=lifespan)


def get_controller(request: Request) -> WeatherController:
    return request.app.state.controller


@app.middleware("http")
async def request_logging(request: Request, call_next):
    """Log request details, attach a request ID, and record metrics.

    Args:
        request: Incoming HTTP request.
        call_next: FastAPI handler for the next middleware/app.

    Returns:
        The response produced by the downstream handler.
    """
    request_id = request.headers.get("x-request-id") or str(uuid.uuid4())
    bind_contextvars(request_id=request_id)
    start = time.perf_counter()
    response = None
    try:
        response = await call_next(request)
        response.headers["x-request-id"] = request_id
        return response
    finally:
        duration_s = time.perf_counter() - start
        status_code = getattr(response, "status_code", 500)
        logger.info(
            "HTTP_REQUEST",
            method=request.method,
            path=request.url.path,
            status_code=status_code,
            duration_ms=round(duration_s * 1000, 2),
        )
        REQUEST_COUNT.labels(
            method=request.method, path=request.url.path, status_code=status_code
        ).inc()
        REQUEST_LATENCY.labels(path=request.url.path).observe(duration_s)
        clear_contextvars()


@app.exception_handler(WeatherServiceError)
async def weather_service_error_handler(request: Request, exc: WeatherServiceError):
    """Convert unexpected weather service errors into 500 responses.

    Args:
        request: Incoming HTTP request.
        exc: Raised weather service error.

    Returns:
        A JSON response with a generic error message.
    """
    logger.error("UNHANDLED_WEATHER_ERROR", error=str(exc))
    return JSONResponse(status_code=500, content={"detail": "Unexpected error"})


@app.get("/", response_class=HTMLResponse)
async def index(request: Request):
    """Render the page for the current state."""
    return HTMLResponse(render_page(get_controller(request).state))


@app.post("/search")
async def search(request: Request, city: str = Form("")):
    """Look up the submitted city, then send the browser back to the page.

    Args:
        request: Incoming HTTP request.
        city: City name from the search form.
    """
    await get_controller(request).fetch_by_city_name(city)
    return RedirectResponse("/", status_code=303)


@app.post("/demo")
async def demo(request: Request):
    get_controller(request).load_demo()
    return RedirectResponse("/", status_code=303)


@app.get("/state", response_model=StateResponse)
async def current_state(request: Request) -> StateResponse:
    """Expose the application state and the view it selects."""
    state = get_controller(request).state
    return StateResponse(**state.model_dump(), view=select_view(state))


@app.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    """Report API health and dependency availability.

    Returns:
        A HealthResponse containing dependency status.
    """
    settings = get_settings()
    return HealthResponse(
        status="ok",
        dependencies=Dependencies(
            weather_api=await is_weather_api_available(settings),
            geolocation=await is_geolocation_available(settings),
        ),
    )


@app.get("/metrics")
async def metrics():
    """Expose Prometheus metrics for scraping."""
    return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)
