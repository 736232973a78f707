"""
geometry.py
===========

Path primitives shared by every generator: points, drawing commands, closed
and open paths, and their serialisation to the SVG path mini-language.

Numbers are written with the shortest decimal that round-trips to the same
float and never in scientific notation, so the text can be dropped straight
into a ``d=""`` attribute.
"""

import math
from dataclasses import dataclass, field
from typing import Iterable, List, Sequence, Tuple, Union

import numpy as np


# ---------------------------- Numbers ---------------------------------------

def format_number(value: float) -> str:
    """Shortest positional representation of ``value`` (no exponent)."""
    text = np.format_float_positional(float(value), trim="-")
    if text == "-0":
        return "0"
    return text


def lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t


# ---------------------------- Commands --------------------------------------

@dataclass(frozen=True)
class Point:
    x: float
    y: float

    def is_finite(self) -> bool:
        return math.isfinite(self.x) and math.isfinite(self.y)


@dataclass(frozen=True)
class MoveTo:
    point: Point
    letter = "M"

    def args(self) -> Tuple[float, ...]:
        return (self.point.x, self.point.y)


@dataclass(frozen=True)
class LineTo:
    point: Point
    letter = "L"

    def args(self) -> Tuple[float, ...]:
        return (self.point.x, self.point.y)


@dataclass(frozen=True)
class CubicBezierTo:
    c1: Point
    c2: Point
    end: Point
    letter = "C"

    def args(self) -> Tuple[float, ...]:
        return (self.c1.x, self.c1.y, self.c2.x, self.c2.y, self.end.x, self.end.y)


@dataclass(frozen=True)
class VerticalTo:
    y: float
    letter = "V"

    def args(self) -> Tuple[float, ...]:
        return (self.y,)


@dataclass(frozen=True)
class HorizontalTo:
    x: float
    letter = "H"

    def args(self) -> Tuple[float, ...]:
        return (self.x,)


@dataclass(frozen=True)
class ClosePath:
    letter = "Z"

    def args(self) -> Tuple[float, ...]:
        return ()


PathSegment = Union[MoveTo, LineTo, CubicBezierTo, VerticalTo, HorizontalTo, ClosePath]


# ---------------------------- Paths -----------------------------------------

@dataclass(frozen=True)
class Path:
    """An ordered sequence of drawing commands. Order defines the traced boundary."""
    segments: Tuple[PathSegment, ...]

    def __len__(self) -> int:
        return len(self.segments)

    @property
    def is_closed(self) -> bool:
        return bool(self.segments) and isinstance(self.segments[-1], ClosePath)

    def command_letters(self) -> List[str]:
        return [seg.letter for seg in self.segments]

    def points(self) -> List[Point]:
        """End point of every command, with H/V resolved against the pen."""
        pts: List[Point] = []
        pen = Point(0.0, 0.0)
        start = pen
        for seg in self.segments:
            if isinstance(seg, MoveTo):
                pen = start = seg.point
            elif isinstance(seg, LineTo):
                pen = seg.point
            elif isinstance(seg, CubicBezierTo):
                pen = seg.end
            elif isinstance(seg, HorizontalTo):
                pen = Point(seg.x, pen.y)
            elif isinstance(seg, VerticalTo):
                pen = Point(pen.x, seg.y)
            else:
                pen = start
                continue
            pts.append(pen)
        return pts

    def control_points(self) -> List[Point]:
        """Every coordinate pair the path mentions, bezier handles included."""
        pts: List[Point] = []
        for seg in self.segments:
            if isinstance(seg, CubicBezierTo):
                pts.extend([seg.c1, seg.c2])
        return self.points() + pts

    def bounds(self) -> Tuple[float, float, float, float]:
        """(min_x, min_y, max_x, max_y) over all coordinates."""
        pts = self.control_points()
        xs = [p.x for p in pts]
        ys = [p.y for p in pts]
        return (min(xs), min(ys), max(xs), max(ys))

    def is_finite(self) -> bool:
        return all(p.is_finite() for p in self.control_points())

    def to_svg(self) -> str:
        parts = []
        for seg in self.segments:
            args = " ".join(format_number(v) for v in seg.args())
            parts.append(f"{seg.letter} {args}" if args else seg.letter)
        return " ".join(parts)

    def flatten(self, samples_per_curve: int = 16) -> List[List[Tuple[float, float]]]:
        """Approximate the path as polylines, one per subpath.

        Cubic segments are sampled at ``samples_per_curve`` evenly spaced
        parameters. A closed subpath repeats its first vertex at the end.
        """
        polylines: List[List[Tuple[float, float]]] = []
        current: List[Tuple[float, float]] = []
        pen = (0.0, 0.0)
        t = np.linspace(0.0, 1.0, max(2, samples_per_curve) + 1)[1:]
        for seg in self.segments:
            if isinstance(seg, MoveTo):
                if len(current) > 1:
                    polylines.append(current)
                pen = (seg.point.x, seg.point.y)
                current = [pen]
            elif isinstance(seg, CubicBezierTo):
                p0 = np.array(pen)
                p1 = np.array((seg.c1.x, seg.c1.y))
                p2 = np.array((seg.c2.x, seg.c2.y))
                p3 = np.array((seg.end.x, seg.end.y))
                mt = 1.0 - t
                curve = (np.outer(mt ** 3, p0) + np.outer(3 * mt ** 2 * t, p1)
                         + np.outer(3 * mt * t ** 2, p2) + np.outer(t ** 3, p3))
                current.extend(map(tuple, curve.tolist()))
                pen = current[-1]
            elif isinstance(seg, ClosePath):
                if current:
                    current.append(current[0])
                    pen = current[0]
            else:
                if isinstance(seg, LineTo):
                    pen = (seg.point.x, seg.point.y)
                elif isinstance(seg, HorizontalTo):
                    pen = (seg.x, pen[1])
                else:
                    pen = (pen[0], seg.y)
                current.append(pen)
        if len(current) > 1:
            polylines.append(current)
        return polylines


def path_from_points(points: Sequence[Point], closed: bool = True) -> Path:
    """``M`` to the first point, ``L`` to every following one, optional ``Z``."""
    if not points:
        raise ValueError("A path needs at least one point")
    segments: List[PathSegment] = [MoveTo(points[0])]
    segments.extend(LineTo(p) for p in points[1:])
    if closed:
        segments.append(ClosePath())
    return Path(tuple(segments))


@dataclass
class PathSet:
    """Independent open paths drawn inside one repeating ``width`` x ``height`` tile."""
    width: float
    height: float
    paths: List[Path] = field(default_factory=list)

    def __iter__(self) -> Iterable[Path]:
        return iter(self.paths)

    def __len__(self) -> int:
        return len(self.paths)

    def is_finite(self) -> bool:
        return all(p.is_finite() for p in self.paths)
