"""
edgelab
=======

Procedural edge and pattern geometry: torn-paper panels, ripped bezier
edges, wavy grid tiles and wiggling stripe fills, exported as SVG.

Quick start
-----------
>>> from edgelab import TornEdgeParams, torn_edge
>>> path = torn_edge(TornEdgeParams(width=400, height=300, roughness=1, seed=42))
>>> path.to_svg()[:2]
'M '

Every generator is a pure function of its parameter record and an optional
``random.Random``; pass a ``seed`` in the record to get the same geometry back.
"""

from .edges import organic_edge, paper_rip, torn_edge
from .geometry import (ClosePath, CubicBezierTo, HorizontalTo, LineTo, MoveTo, Path,
                       PathSet, Point, VerticalTo, format_number)
from .grid import line_count, wavy_grid
from .noise import NoiseSampler, SineNoiseSampler, rng_from_seed
from .params import (Direction, Edge, OrganicEdgeParams, Side, StripeParams, TornEdgeParams,
                     WavyGridParams)
from .stripes import PatternDescription, compose, to_element, to_markup

__version__ = "0.1.0"

__all__ = [
    "ClosePath", "CubicBezierTo", "Direction", "Edge", "HorizontalTo", "LineTo", "MoveTo",
    "NoiseSampler", "OrganicEdgeParams", "Path", "PathSet", "PatternDescription", "Point",
    "Side", "SineNoiseSampler", "StripeParams", "TornEdgeParams", "VerticalTo",
    "WavyGridParams", "compose", "format_number", "line_count", "organic_edge", "paper_rip",
    "rng_from_seed", "to_element", "to_markup", "torn_edge", "wavy_grid",
]
