"""Turn the application state into a view state and an HTML page."""

from html import escape

from weathernow.icons.icons import ICON_GLYPHS, select_icon
from weathernow.models.state import AppState, ViewState
from weathernow.models.weather import WeatherSnapshot

PAGE_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<meta name="viewport" content="width=device-width, initial-scale=1">
<title>WeatherNow</title>
<style>
body {{ font-family: system-ui, sans-serif; margin: 0; min-height: 100vh;
  background: linear-gradient(135deg, #312e81, #581c87, #9d174d); color: #fff; }}
main {{ max-width: 28rem; margin: 0 auto; padding: 2rem 1rem; }}
h1 {{ text-align: center; font-size: 3rem; margin-bottom: 0.25rem; }}
.tagline {{ text-align: center; color: #ddd6fe; margin-top: 0; }}
form {{ display: flex; gap: 0.5rem; margin: 1.5rem 0; }}
input {{ flex: 1; padding: 0.9rem 1.2rem; border: 0; border-radius: 1rem; }}
button {{ padding: 0.9rem 1.2rem; border: 0; border-radius: 1rem;
  background: #7c3aed; color: #fff; cursor: pointer; }}
button:disabled {{ background: #64748b; cursor: not-allowed; }}
.panel {{ background: rgba(255, 255, 255, 0.12); border-radius: 1.5rem;
  padding: 2rem; margin-bottom: 1.5rem; text-align: center; }}
.error {{ background: rgba(239, 68, 68, 0.25); font-weight: 600; }}
.icon {{ font-size: 4.5rem; }}
.temperature {{ font-size: 4.5rem; font-weight: 800; }}
.condition {{ font-size: 1.5rem; text-transform: capitalize; }}
.details {{ display: grid; grid-template-columns: 1fr 1fr; gap: 1rem; margin-top: 2rem; }}
.details div {{ background: rgba(255, 255, 255, 0.1); border-radius: 1rem; padding: 1rem; }}
.details span {{ display: block; font-size: 1.5rem; font-weight: 700; }}
</style>
</head>
<body>
<main>
<h1>WeatherNow</h1>
<p class="tagline">Real-time weather updates</p>
<form method="post" action="/search">
<input type="text" name="city" value="{city_input}" placeholder="Enter city name...">
<button type="submit"{disabled}>Search</button>
</form>
{body}
</main>
</body>
</html>
"""

LOADING_PANEL = '<div class="panel loading">Loading weather data...</div>'


def select_view(state: AppState) -> ViewState:
    """Pick the single view to show for the given state.

    Loading wins over everything, then an error, then a result. An error
    and a snapshot set together show the error.
    """
    if state.loading:
        return ViewState.loading
    if state.error:
        return ViewState.error
    if state.weather is not None:
        return ViewState.result
    return ViewState.idle


def render_result(weather: WeatherSnapshot) -> str:
    glyph = ICON_GLYPHS[select_icon(weather.condition)]
    return (
        '<div class="panel result">'
        f"<h2>{escape(weather.city)}</h2>"
        f"<p>{escape(weather.country)}</p>"
        f'<div class="icon">{glyph}</div>'
        f'<div class="temperature">{weather.temperature}&deg;</div>'
        f'<div class="condition">{escape(weather.condition)}</div>'
        '<div class="details">'
        f"<div>Humidity<span>{weather.humidity}%</span></div>"
        f"<div>Wind Speed<span>{_number(weather.wind_speed)} km/h</span></div>"
        f"<div>Pressure<span>{weather.pressure} mb</span></div>"
        f"<div>Visibility<span>{_number(weather.visibility)} km</span></div>"
        "</div></div>"
    )


def render_page(state: AppState) -> str:
    """Render the full HTML page for the state.

    The search form is always present; below it at most one panel is shown.

    Args:
        state: Current application state.

    Returns:
        The HTML document as a string.
    """
    view = select_view(state)
    if view is ViewState.loading:
        body = LOADING_PANEL
    elif view is ViewState.error:
        body = f'<div class="panel error">{escape(state.error)}</div>'
    elif view is ViewState.result:
        body = render_result(state.weather)
    else:
        body = ""
    return PAGE_TEMPLATE.format(
        city_input=escape(state.city_input),
        disabled=" disabled" if state.loading else "",
        body=body,
    )


def _number(value: float) -> str:
    # 10.0 -> "10", 9.5 -> "9.5"
    return f"{value:g}"
