"""Map free-text condition descriptions to icon categories."""

from enum import Enum


class IconCategory(str, Enum):
    """Icon families the result panel can show."""

    clear = "clear"
    cloudy = "cloudy"
    rainy = "rainy"
    snowy = "snowy"


# Evaluated in order; the first matching substring wins.
ICON_RULES = (
    ("sunny", IconCategory.clear),
    ("clear", IconCategory.clear),
    ("cloud", IconCategory.cloudy),
    ("rain", IconCategory.rainy),
    ("drizzle", IconCategory.rainy),
    ("snow", IconCategory.snowy),
)

DEFAULT_ICON = IconCategory.cloudy

ICON_GLYPHS = {
    IconCategory.clear: "☀️",
    IconCategory.cloudy: "☁️",
    IconCategory.rainy: "\U0001f327️",
    IconCategory.snowy: "\U0001f328️",
}


def select_icon(condition: str) -> IconCategory:
    """Return the icon category for a condition description.

    Args:
        condition: Provider description such as "light rain showers".

    Returns:
        The first IconCategory whose substring occurs in the description,
        or the cloudy default.
    """
    lowered = condition.lower()
    for needle, category in ICON_RULES:
        if needle in lowered:
            return category
    return DEFAULT_ICON
