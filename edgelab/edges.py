"""
edges.py
========

Torn and ripped boundaries for rectangular panels.

- ``torn_edge``: one closed, irregular polygon around the whole rectangle.
  Displacement peaks mid-edge (sine envelope) and stays small at corners so
  the panel still reads as a rectangle.
- ``organic_edge``: one jagged bezier edge sealed into a fillable strip.
  Control points are resampled independently instead of being derived from
  the endpoints.
"""

import logging
import math
import random
from typing import List, Optional, Tuple

from .geometry import (ClosePath, CubicBezierTo, HorizontalTo, LineTo, MoveTo,
                       Path, PathSegment, Point, VerticalTo, lerp, path_from_points)
from .noise import resolve_rng
from .params import Edge, OrganicEdgeParams, Side, TornEdgeParams

logger = logging.getLogger(__name__)


# ---------------------------- Torn edge -------------------------------------

def edge_segment_range(length: float) -> Tuple[int, int]:
    """Inclusive range the per-edge segment count is drawn from."""
    min_segments = max(8, int(math.floor(length / 30)))
    return min_segments, min_segments + 4


def _torn_edge_points(
    rng: random.Random,
    start: Tuple[float, float],
    end: Tuple[float, float],
    vertical: bool,
    roughness: float,
    variance: float,
) -> List[Point]:
    x1, y1 = start
    x2, y2 = end
    length = math.hypot(x2 - x1, y2 - y1)
    lo, hi = edge_segment_range(length)
    segments = rng.randint(lo, hi)
    logger.debug("Torn edge %s->%s: %d segments", start, end, segments)

    amplitude_base = min(length * 0.15, 25) * roughness
    points: List[Point] = []
    for i in range(segments + 1):
        progress = i / segments
        x = lerp(x1, x2, progress)
        y = lerp(y1, y2, progress)

        if i == 0 or i == segments:
            corner = rng.uniform(-1.5, 1.5) * roughness * 2
            points.append(Point(x + corner, y + corner))
            continue

        envelope = math.sin(progress * math.pi)
        amplitude = amplitude_base * (0.8 + envelope * 0.4)
        main_tear = (rng.random() - 0.5) * amplitude
        secondary_tear = (rng.random() - 0.5) * (amplitude * 0.5)
        micro_tear = (rng.random() - 0.5) * (amplitude * 0.2)
        total_tear = main_tear + secondary_tear + micro_tear
        perp_tear = (rng.random() - variance) * (amplitude * 0.7)

        if vertical:
            points.append(Point(x + perp_tear, y + total_tear))
        else:
            points.append(Point(x + total_tear, y + perp_tear))

        # extra detail halfway to the next sample
        if i < segments - 1:
            sub = progress + 0.5 / segments
            points.append(Point(
                lerp(x1, x2, sub) + (rng.random() - 0.5) * amplitude * 0.7,
                lerp(y1, y2, sub) + (rng.random() - 0.5) * amplitude * 0.7,
            ))
    return points


def torn_edge(params: TornEdgeParams, rng: Optional[random.Random] = None) -> Path:
    """Closed torn outline of a ``width`` x ``height`` rectangle, traced clockwise."""
    p = params.clamped()
    rng = resolve_rng(rng, p.seed)
    w, h = p.width, p.height
    corners = [(0.0, 0.0), (w, 0.0), (w, h), (0.0, h)]
    points: List[Point] = []
    for i, start in enumerate(corners):
        end = corners[(i + 1) % 4]
        points.extend(_torn_edge_points(rng, start, end, vertical=(i % 2 == 1),
                                        roughness=p.roughness, variance=p.variance))
    return path_from_points(points, closed=True)


# ---------------------------- Organic edge ----------------------------------

def _organic_layout(p: OrganicEdgeParams) -> Tuple[float, float, float, float]:
    """(length, start, baseline, sign) for the edge being drawn."""
    if p.edge is Edge.HORIZONTAL:
        if p.side is Side.PRIMARY:
            return p.width, p.height, p.height * 0.7, -1.0
        return p.width, 0.0, p.height * 0.3, 1.0
    if p.side is Side.PRIMARY:
        return p.height, p.width, p.width * 0.3, -1.0
    return p.height, 0.0, p.width * 0.7, 1.0


def organic_edge(params: OrganicEdgeParams, rng: Optional[random.Random] = None) -> Path:
    """One ripped edge of the rectangle, sealed back to its straight side."""
    p = params.clamped()
    rng = resolve_rng(rng, p.seed)
    length, start, baseline, sign = _organic_layout(p)
    step = length / p.segments
    horizontal = p.edge is Edge.HORIZONTAL

    def jitter() -> float:
        return baseline + (rng.random() - p.variance) * p.roughness * sign

    def at(along: float, across: float) -> Point:
        return Point(along, across) if horizontal else Point(across, along)

    segments: List[PathSegment] = []
    if horizontal:
        segments += [MoveTo(Point(0.0, start)), VerticalTo(baseline)]
    else:
        segments += [MoveTo(Point(start, 0.0)), HorizontalTo(baseline)]
    segments.append(LineTo(at(0.0, jitter())))

    for i in range(1, p.segments + 1):
        pos = i * step
        end = jitter()
        c1 = at(pos - step * 0.5, jitter())
        c2 = at(pos - step * 0.25, jitter())
        segments.append(CubicBezierTo(c1, c2, at(pos, end)))

    if horizontal:
        segments += [VerticalTo(start), HorizontalTo(0.0)]
    else:
        segments += [HorizontalTo(start), VerticalTo(0.0)]
    segments.append(ClosePath())
    return Path(tuple(segments))


def paper_rip(params: OrganicEdgeParams,
              rng: Optional[random.Random] = None) -> Tuple[Path, Path]:
    """Top and bottom rips for one strip, drawn from the same stream."""
    p = params.clamped()
    rng = resolve_rng(rng, p.seed)
    top = organic_edge(p.with_overrides(edge=Edge.HORIZONTAL, side=Side.PRIMARY), rng)
    bottom = organic_edge(p.with_overrides(edge=Edge.HORIZONTAL, side=Side.SECONDARY), rng)
    return top, bottom
