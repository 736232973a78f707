"""
params.py
=========

Immutable parameter records, one per generator.

Records are built by whatever drives the engine (CLI, preset store, a GUI)
on every interaction. ``with_overrides`` is the only way to derive a changed
record, and ``clamped`` pulls every field back into its valid range so a
generator always has something drawable to work with.
"""

import logging
import math
import re
from dataclasses import asdict, dataclass, fields, replace
from enum import Enum
from typing import Any, Dict, Optional, Type, TypeVar

logger = logging.getLogger(__name__)

_HEX_COLOR = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")

P = TypeVar("P", bound="BaseParams")

# Upper bounds keep every coordinate finite and every loop short.
MAX_DIMENSION = 10000.0
MAX_SEGMENTS = 1000
MAX_FREQUENCY = 100.0
MAX_TORN_ROUGHNESS = 100.0
MAX_EFFECT = 100.0
MAX_DURATION = 3600.0


class Edge(Enum):
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


class Side(Enum):
    """Which of the two opposite edges a curve belongs to.

    Horizontal: PRIMARY is the top rip, SECONDARY the bottom rip.
    Vertical: PRIMARY is the left tear, SECONDARY the right tear.
    """
    PRIMARY = "primary"
    SECONDARY = "secondary"


class Direction(Enum):
    RTL = "rtl"
    LTR = "ltr"


# ---------------------------- Clamping helpers ------------------------------

def _number(name: str, value: Any, default: float,
            low: Optional[float] = None, high: Optional[float] = None) -> float:
    try:
        v = float(value)
    except (TypeError, ValueError):
        v = math.nan
    if not math.isfinite(v):
        logger.debug("%s=%r is not a finite number, using %r", name, value, default)
        return default
    clamped = v
    if low is not None and clamped < low:
        clamped = low
    if high is not None and clamped > high:
        clamped = high
    if clamped != v:
        logger.debug("Clamped %s from %r to %r", name, v, clamped)
    return clamped


def _integer(name: str, value: Any, default: int,
             low: Optional[int] = None, high: Optional[int] = None) -> int:
    return int(_number(name, math.floor(_number(name, value, default)), default, low, high))


def _color(name: str, value: Any, default: str) -> str:
    if isinstance(value, str) and _HEX_COLOR.match(value.strip()):
        return value.strip()
    logger.debug("%s=%r is not a hex colour, using %s", name, value, default)
    return default


def _enum(enum_cls: Type[Enum], value: Any) -> Enum:
    if isinstance(value, enum_cls):
        return value
    return enum_cls(str(value).lower())


# ---------------------------- Records ---------------------------------------

class BaseParams:
    """Shared behaviour for the frozen parameter dataclasses below."""

    def with_overrides(self: P, **changes: Any) -> P:
        """Copy of this record with ``changes`` applied. Unknown names raise TypeError."""
        return replace(self, **changes)

    def clamped(self: P) -> P:
        raise NotImplementedError

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        for k, v in data.items():
            if isinstance(v, Enum):
                data[k] = v.value
        return data

    @classmethod
    def from_dict(cls: Type[P], data: Dict[str, Any]) -> P:
        """Build a record from stored fields, ignoring keys this record does not know."""
        names = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in names}).clamped()


def _seed(value: Any) -> Optional[float]:
    if value is None:
        return None
    if isinstance(value, int):
        return value
    return _number("seed", value, 0.0)


@dataclass(frozen=True)
class TornEdgeParams(BaseParams):
    width: float = 400.0
    height: float = 300.0
    roughness: float = 1.0
    variance: float = 0.3
    seed: Optional[int] = None

    def clamped(self) -> "TornEdgeParams":
        return TornEdgeParams(
            width=_number("width", self.width, 400.0, 1.0, MAX_DIMENSION),
            height=_number("height", self.height, 300.0, 1.0, MAX_DIMENSION),
            roughness=_number("roughness", self.roughness, 1.0, 0.0, MAX_TORN_ROUGHNESS),
            variance=_number("variance", self.variance, 0.3, 0.0, 1.0),
            seed=_seed(self.seed),
        )


@dataclass(frozen=True)
class OrganicEdgeParams(BaseParams):
    width: float = 1020.0
    height: float = 100.0
    segments: int = 20
    roughness: float = 30.0
    variance: float = 0.5
    edge: Edge = Edge.HORIZONTAL
    side: Side = Side.PRIMARY
    seed: Optional[int] = None

    def clamped(self) -> "OrganicEdgeParams":
        return OrganicEdgeParams(
            width=_number("width", self.width, 1020.0, 1.0, MAX_DIMENSION),
            height=_number("height", self.height, 100.0, 1.0, MAX_DIMENSION),
            segments=_integer("segments", self.segments, 20, 1, MAX_SEGMENTS),
            roughness=_number("roughness", self.roughness, 30.0, 0.0, MAX_DIMENSION),
            variance=_number("variance", self.variance, 0.5, 0.0, 1.0),
            edge=_enum(Edge, self.edge),
            side=_enum(Side, self.side),
            seed=_seed(self.seed),
        )


@dataclass(frozen=True)
class WavyGridParams(BaseParams):
    width: float = 40.0
    height: float = 40.0
    amplitude: float = 4.0
    frequency: float = 1.0
    randomness: float = 0.5
    # Phase anchor for the noise lookup, also seeds the per-call rng.
    seed: float = 1.0

    def clamped(self) -> "WavyGridParams":
        return WavyGridParams(
            width=_number("width", self.width, 40.0, 1.0, MAX_DIMENSION),
            height=_number("height", self.height, 40.0, 1.0, MAX_DIMENSION),
            amplitude=_number("amplitude", self.amplitude, 4.0, 0.0, MAX_DIMENSION),
            frequency=_number("frequency", self.frequency, 1.0, 0.0, MAX_FREQUENCY),
            randomness=_number("randomness", self.randomness, 0.5, 0.0, 1.0),
            seed=_number("seed", self.seed, 1.0),
        )


@dataclass(frozen=True)
class StripeParams(BaseParams):
    direction: Direction = Direction.RTL
    stripe_width: float = 6.0
    pattern_size: float = 12.0
    primary_color: str = "#d4d4d4"
    secondary_color: str = "#f5f5f5"
    noise_intensity: float = 0.3
    blur_amount: float = 0.7
    wiggle_intensity: float = 0.8
    layers: int = 2
    animation_speed: float = 4.0
    animated: bool = True
    seed: Optional[int] = None

    def clamped(self) -> "StripeParams":
        return StripeParams(
            direction=_enum(Direction, self.direction),
            stripe_width=_number("stripe_width", self.stripe_width, 6.0, 1.0, MAX_DIMENSION),
            pattern_size=_number("pattern_size", self.pattern_size, 12.0, 1.0, MAX_DIMENSION),
            primary_color=_color("primary_color", self.primary_color, "#d4d4d4"),
            secondary_color=_color("secondary_color", self.secondary_color, "#f5f5f5"),
            noise_intensity=_number("noise_intensity", self.noise_intensity, 0.3, 0.0, 1.0),
            blur_amount=_number("blur_amount", self.blur_amount, 0.7, 0.0, MAX_EFFECT),
            wiggle_intensity=_number("wiggle_intensity", self.wiggle_intensity, 0.8, 0.0, MAX_EFFECT),
            layers=_integer("layers", self.layers, 2, 1, 10),
            animation_speed=_number("animation_speed", self.animation_speed, 4.0, 0.1, MAX_DURATION),
            animated=bool(self.animated),
            seed=_seed(self.seed),
        )
