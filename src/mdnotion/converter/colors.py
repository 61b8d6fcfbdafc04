"""Map colour tokens to Notion palette values.

Notion only accepts a fixed palette of named colours for text.  Headings
may be configured with either a palette name or a hex string; hex input
is mapped to the nearest palette colour by Euclidean distance in RGB
space.  A small table of predefined mappings is consulted first so the
default heading colours always land on the intended palette entry.
"""

from __future__ import annotations

import math

from mdnotion.config import DEFAULT_HEADING_COLORS

# ---------------------------------------------------------------------------
# Palette
# ---------------------------------------------------------------------------

# Canonical hex value of each base colour.  Iteration order breaks ties.
NOTION_COLORS: dict[str, str] = {
    "default": "#37352F",
    "gray": "#9B9A97",
    "brown": "#64473A",
    "orange": "#D9730D",
    "yellow": "#DFAB01",
    "green": "#0F7B6C",
    "blue": "#0B6E99",
    "purple": "#6940A5",
    "pink": "#AD1A72",
    "red": "#E03E3E",
}

BASE_COLORS: tuple[str, ...] = tuple(NOTION_COLORS)

VALID_COLORS: frozenset[str] = frozenset(
    BASE_COLORS + tuple(f"{name}_background" for name in BASE_COLORS)
)

PREDEFINED_MAPPINGS: dict[str, str] = {
    "#FF6F61": "red",
    "#F8B400": "yellow",
    "#4DB8FF": "blue",
    "#A3BE8C": "green",
    "#B48EAD": "purple",
    "#5E81AC": "blue",
}


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def resolve_color(token: str) -> str:
    """Return the Notion palette value for *token*.

    Parameters
    ----------
    token:
        A palette name (``"red"``, ``"blue_background"`` …) or a hex
        colour (``"#4DB8FF"``).

    Returns
    -------
    str
        *token* itself when it is already a palette value, otherwise one
        of the ten base colours.  Malformed hex input resolves to
        ``"default"``.

    Examples
    --------
    >>> resolve_color("red")
    'red'
    >>> resolve_color("#4DB8FF")
    'blue'
    >>> resolve_color("#E03E3F")
    'red'
    """
    if token in VALID_COLORS:
        return token

    # Exact match only; other spellings go through the distance search.
    predefined = PREDEFINED_MAPPINGS.get(token)
    if predefined is not None:
        return predefined

    return nearest_color(token)


def nearest_color(hex_color: str) -> str:
    """Return the base colour closest to *hex_color* in RGB space.

    The first colour in :data:`NOTION_COLORS` order wins a tie.  Channels
    that fail to parse are NaN, and a NaN distance never compares as
    smaller, so the result falls back to ``"default"``.
    """
    rgb = _hex_to_rgb(hex_color)

    min_distance = math.inf
    closest = "default"
    for name, palette_hex in NOTION_COLORS.items():
        distance = math.dist(rgb, _hex_to_rgb(palette_hex))
        if distance < min_distance:
            min_distance = distance
            closest = name
    return closest


def default_heading_color(depth: int) -> str:
    """Return the palette colour used for headings of *depth* by default."""
    hex_color = DEFAULT_HEADING_COLORS.get(depth, DEFAULT_HEADING_COLORS[1])
    return resolve_color(hex_color)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _hex_to_rgb(hex_color: str) -> tuple[float, float, float]:
    digits = hex_color[1:] if hex_color.startswith("#") else hex_color
    return (
        _parse_channel(digits[0:2]),
        _parse_channel(digits[2:4]),
        _parse_channel(digits[4:6]),
    )


def _parse_channel(pair: str) -> float:
    try:
        return float(int(pair, 16))
    except ValueError:
        return math.nan
