"""
Topic icons for the cover page.

Each icon is Lucide-style SVG path data on a 24x24 viewBox, stroked (never
filled). svglib turns the path into a reportlab Drawing, so arcs and curves
come out exactly as in the source glyphs.
"""

from dataclasses import dataclass
from io import BytesIO
from typing import Tuple

from reportlab.graphics.shapes import Drawing
from svglib.svglib import svg2rlg

from ..config import PALETTE

GRID = 24


@dataclass(frozen=True)
class IconDefinition:
    name: str
    path: str


COMPASS = IconDefinition(
    "compass",
    "M12 2a10 10 0 1 0 0 20 10 10 0 0 0 0-20Zm0 18a8 8 0 1 1 0-16 8 8 0 0 1 0 16Z"
    "m-1.5-5.5 5-2.5-2.5-5-5 2.5ZM12 11a1 1 0 1 0 0 2 1 1 0 0 0 0-2Z",
)
USERS = IconDefinition(
    "users",
    "M16 21v-2a4 4 0 0 0-4-4H6a4 4 0 0 0-4 4v2M9 11a4 4 0 1 0 0-8 4 4 0 0 0 0 8Z"
    "M22 21v-2a4 4 0 0 0-3-3.87M16 3.13a4 4 0 0 1 0 7.75",
)
TRENDING_UP = IconDefinition("trending-up", "M22 7l-8.5 8.5-5-5L2 17M22 7h-6M22 7v6")
SHIELD = IconDefinition("shield", "M12 22s8-4 8-10V5l-8-3-8 3v7c0 6 8 10 8 10Z")
MESSAGE = IconDefinition(
    "message-circle",
    "M21 11.5a8.38 8.38 0 0 1-.9 3.8 8.5 8.5 0 0 1-7.6 4.7 8.38 8.38 0 0 1-3.8-.9L3 21"
    "l1.9-5.7a8.38 8.38 0 0 1-.9-3.8 8.5 8.5 0 0 1 4.7-7.6 8.38 8.38 0 0 1 3.8-.9h.5"
    "a8.48 8.48 0 0 1 8 8v.5Z",
)
LIGHTBULB = IconDefinition(
    "lightbulb",
    "M9 18h6M10 22h4M12 2a7 7 0 0 0-4 12.7V17h8v-2.3A7 7 0 0 0 12 2Z",
)
TARGET = IconDefinition(
    "target",
    "M12 2a10 10 0 1 0 0 20 10 10 0 0 0 0-20Zm0 16a6 6 0 1 1 0-12 6 6 0 0 1 0 12Z"
    "m0-8a2 2 0 1 0 0 4 2 2 0 0 0 0-4Z",
)
REFRESH = IconDefinition(
    "refresh-cw",
    "M1 4v6h6M23 20v-6h-6M20.49 9A9 9 0 0 0 5.64 5.64L1 10m22 4l-4.64 4.36A9 9 0 0 1 3.51 15",
)
ACTIVITY = IconDefinition("activity", "M22 12h-4l-3 9L9 3l-3 9H2")
BOOK_OPEN = IconDefinition(
    "book-open",
    "M2 3h6a4 4 0 0 1 4 4v14a3 3 0 0 0-3-3H2ZM22 3h-6a4 4 0 0 0-4 4v14a3 3 0 0 1 3-3h7Z",
)

DEFAULT_ICON = COMPASS

# Order matters: first keyword contained in the category wins.
TOPIC_ICONS: Tuple[Tuple[str, IconDefinition], ...] = (
    ("collaboration", USERS),
    ("strategy", TRENDING_UP),
    ("trust", SHIELD),
    ("communication", MESSAGE),
    ("innovation", LIGHTBULB),
    ("decision-making", TARGET),
    ("alignment", TARGET),
    ("change management", REFRESH),
    ("meetings", ACTIVITY),
    ("engagement", ACTIVITY),
    ("learning", BOOK_OPEN),
    ("onboarding", BOOK_OPEN),
)

_SVG = (
    '<svg xmlns="http://www.w3.org/2000/svg" width="{grid}" height="{grid}" '
    'viewBox="0 0 {grid} {grid}">'
    '<path d="{path}" fill="none" stroke="{color}" stroke-width="{width}" '
    'stroke-linecap="round" stroke-linejoin="round"/></svg>'
)


def pick_icon(category: str) -> IconDefinition:
    key = (category or "").lower().strip()
    for keyword, icon in TOPIC_ICONS:
        if keyword in key:
            return icon
    return DEFAULT_ICON


def icon_drawing(icon: IconDefinition, size: float = 32, stroke_color: str = PALETTE["heading"],
                 stroke_width: float = 1.6) -> Drawing:
    svg = _SVG.format(grid=GRID, path=icon.path, color=stroke_color, width=stroke_width)
    drawing = svg2rlg(BytesIO(svg.encode("utf-8")))
    if drawing is None:
        raise ValueError(f"icon {icon.name!r} has unparsable path data")
    factor = size / float(drawing.width)
    drawing.height = size * float(drawing.height) / float(drawing.width)
    drawing.width = size
    drawing.scale(factor, factor)
    return drawing
