"""
grid.py
=======

Wavy background hatching: horizontal and vertical strokes displaced by
layered sine noise, laid out inside one repeating tile.
"""

import logging
import math
import random
from typing import List, Optional

import numpy as np

from .geometry import Path, PathSet, Point, path_from_points
from .noise import NoiseSampler, SamplerFactory, resolve_rng, sine_sampler_factory
from .params import WavyGridParams

logger = logging.getLogger(__name__)


def line_count(size: float) -> int:
    """Parallel lines per axis; spacing never drops below 20 units."""
    spacing = max(20.0, size / 4)
    return max(2, int(math.floor(size / spacing)))


def step_count(frequency: float) -> int:
    return max(1, int(math.floor(frequency * 8)))


def wavy_line(
    sampler: NoiseSampler,
    start: float,
    length: float,
    vertical: bool,
    params: WavyGridParams,
) -> Path:
    """One open stroke at cross-axis position ``start``, ``steps + 1`` points long."""
    steps = step_count(params.frequency)
    t = np.linspace(0.0, 1.0, steps + 1)
    along = t * length
    noise = np.asarray(sampler.sample(t * 10 + params.seed), dtype=float)
    across = start + noise * params.randomness * params.amplitude
    if vertical:
        points = [Point(float(x), float(y)) for x, y in zip(across, along)]
    else:
        points = [Point(float(x), float(y)) for x, y in zip(along, across)]
    return path_from_points(points, closed=False)


def wavy_grid(
    params: WavyGridParams,
    rng: Optional[random.Random] = None,
    sampler_factory: Optional[SamplerFactory] = None,
) -> PathSet:
    """Horizontal then vertical wavy lines for one ``width`` x ``height`` tile.

    Each line draws its own sampler from the call's stream, so neighbouring
    lines do not repeat each other while the whole tile stays reproducible
    for a given seed.
    """
    p = params.clamped()
    rng = resolve_rng(rng, p.seed)
    make_sampler = sampler_factory or sine_sampler_factory

    paths: List[Path] = []
    rows = line_count(p.height)
    for i in range(rows):
        pos = (i + 0.5) * (p.height / rows)
        paths.append(wavy_line(make_sampler(rng), pos, p.width, False, p))
    cols = line_count(p.width)
    for i in range(cols):
        pos = (i + 0.5) * (p.width / cols)
        paths.append(wavy_line(make_sampler(rng), pos, p.height, True, p))

    logger.debug("Wavy grid %gx%g: %d rows, %d columns, %d steps",
                 p.width, p.height, rows, cols, step_count(p.frequency))
    return PathSet(width=p.width, height=p.height, paths=paths)
