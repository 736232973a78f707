"""
raster.py
=========

PNG previews of generated geometry with Pillow.

Closed paths are filled, open paths are stroked. Curves are flattened to
polylines first, so what you see is the same geometry the SVG export holds.
"""

import logging
import math
from typing import Optional, Tuple

import numpy as np
from PIL import Image, ImageDraw

from .config import CURVE_SAMPLES
from .geometry import Path, PathSet
from .params import Direction, StripeParams
from .svg import ExportError

logger = logging.getLogger(__name__)

RGB = Tuple[int, int, int]


def hex_to_rgb(hex_color: str) -> RGB:
    """Convert '#RRGGBB' or 'RRGGBB' to (r,g,b). Handles shorthand '#RGB' too."""
    h = hex_color.strip().lstrip("#")
    if len(h) == 3:
        h = "".join(c*2 for c in h)
    if len(h) != 6:
        raise ValueError(f"Invalid hex color: {hex_color!r}")
    try:
        return (int(h[0:2], 16), int(h[2:4], 16), int(h[4:6], 16))
    except ValueError:
        raise ValueError(f"Invalid hex color: {hex_color!r}") from None


def _canvas(width: float, height: float, background: Optional[str]) -> Image.Image:
    size = (max(1, int(math.ceil(width))), max(1, int(math.ceil(height))))
    if background is None:
        return Image.new("RGBA", size, (0, 0, 0, 0))
    return Image.new("RGBA", size, hex_to_rgb(background) + (255,))


def draw_path(draw: ImageDraw.ImageDraw, path: Path, color: RGB,
              offset: Tuple[float, float] = (0.0, 0.0), width: int = 1) -> None:
    dx, dy = offset
    for line in path.flatten(CURVE_SAMPLES):
        pts = [(x + dx, y + dy) for (x, y) in line]
        if path.is_closed:
            draw.polygon(pts, fill=color)
        else:
            draw.line(pts, fill=color, width=width)


def render_path(path: Path, width: float, height: float, fill: str = "#ffffff",
                background: Optional[str] = "#f1f5f9") -> Image.Image:
    img = _canvas(width, height, background)
    draw_path(ImageDraw.Draw(img), path, hex_to_rgb(fill))
    return img


def render_pathset(pathset: PathSet, repeat_x: int = 4, repeat_y: int = 4,
                   stroke: str = "#3b82f6", background: Optional[str] = "#ffffff",
                   stroke_px: int = 1) -> Image.Image:
    """Tile the pattern cell ``repeat_x`` by ``repeat_y`` times."""
    repeat_x, repeat_y = max(1, repeat_x), max(1, repeat_y)
    img = _canvas(pathset.width * repeat_x, pathset.height * repeat_y, background)
    draw = ImageDraw.Draw(img)
    color = hex_to_rgb(stroke)
    for ty in range(repeat_y):
        for tx in range(repeat_x):
            offset = (tx * pathset.width, ty * pathset.height)
            for path in pathset:
                draw_path(draw, path, color, offset=offset, width=stroke_px)
    return img


def render_stripes(params: StripeParams, width: int = 400, height: int = 300) -> Image.Image:
    """Flat preview of the rotated two-colour tile, without the turbulence layers."""
    p = params.clamped()
    size = max(p.pattern_size, p.stripe_width * 2)
    angle = math.radians(45.0 if p.direction is Direction.RTL else -45.0)
    ys, xs = np.mgrid[0:max(1, height), 0:max(1, width)].astype(float)
    # pattern-space x coordinate of every pixel
    u = np.mod(xs * math.cos(angle) + ys * math.sin(angle), size)
    primary = u < p.stripe_width
    secondary = (u >= p.stripe_width) & (u < p.stripe_width * 2)

    rgb = np.full(primary.shape + (4,), 0, dtype=np.uint8)
    rgb[primary] = hex_to_rgb(p.primary_color) + (int(255 * 0.85),)
    rgb[secondary] = hex_to_rgb(p.secondary_color) + (int(255 * 0.85),)
    return Image.fromarray(rgb)


def save_png(img: Image.Image, out_path: str) -> str:
    try:
        img.save(out_path, format="PNG", optimize=True)
    except OSError as e:
        raise ExportError(f"Could not write {out_path}: {e}") from e
    logger.info("Saved preview %s (%dx%d)", out_path, img.width, img.height)
    return out_path
