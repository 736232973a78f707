"""
border.py
=========

Dashed CSS borders: a stretched 100x100 SVG rect used as a background image.
"""

import random
import re
from dataclasses import dataclass
from typing import Optional
from urllib.parse import quote

from .geometry import format_number
from .noise import resolve_rng
from .params import _color, _number

LINE_CAPS = ("butt", "round", "square")

# dash lengths, percentages and separators only; the value lands in a quoted attribute
_DASH_ARRAY = re.compile(r"^[0-9.,%\s]*$")


@dataclass(frozen=True)
class BorderParams:
    stroke_width: float = 7.0
    dash_array: str = "50%, 13%"
    line_cap: str = "butt"
    dash_offset: float = 86.0
    border_radius: float = 100.0
    color: str = "#EC3463"

    def clamped(self) -> "BorderParams":
        """Bounded numbers and a known colour; a malformed dash array raises ValueError."""
        dash = str(self.dash_array).strip()
        if not _DASH_ARRAY.match(dash):
            raise ValueError(f"Invalid dash array: {self.dash_array!r}")
        return BorderParams(
            stroke_width=_number("stroke_width", self.stroke_width, 7.0, 0.0, 100.0),
            dash_array=dash,
            line_cap=self.line_cap if self.line_cap in LINE_CAPS else "butt",
            dash_offset=_number("dash_offset", self.dash_offset, 86.0),
            border_radius=_number("border_radius", self.border_radius, 100.0, low=0.0),
            color=_color("color", self.color, "#EC3463"),
        )


def border_svg(params: BorderParams) -> str:
    p = params.clamped()
    inset = format_number(p.stroke_width / 2)
    size = format_number(100 - p.stroke_width)
    radius = format_number(p.border_radius)
    return (
        "<svg width='100%' height='100%' xmlns='http://www.w3.org/2000/svg' viewBox='0 0 100 100'>"
        f"<rect x='{inset}' y='{inset}' width='{size}' height='{size}' fill='none'"
        f" rx='{radius}' ry='{radius}' stroke='{p.color}'"
        f" stroke-width='{format_number(p.stroke_width)}' stroke-dasharray='{p.dash_array}'"
        f" stroke-dashoffset='{format_number(p.dash_offset)}' stroke-linecap='{p.line_cap}'/>"
        "</svg>"
    )


def border_data_url(params: BorderParams) -> str:
    # same escaping as encodeURIComponent
    return "data:image/svg+xml," + quote(border_svg(params), safe="-_.!~*'()")


def border_css(params: BorderParams) -> str:
    p = params.clamped()
    return (
        f'background-image: url("{border_data_url(p)}");\n'
        "background-size: 100% 100%;\n"
        "background-repeat: no-repeat;\n"
        f"border-radius: {format_number(p.border_radius)}px;"
    )


def random_dash_array(rng: Optional[random.Random] = None, seed: Optional[int] = None) -> str:
    rng = resolve_rng(rng, seed)
    return f"{rng.randrange(100)}%, {rng.randrange(100)}%"
