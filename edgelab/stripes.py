"""
stripes.py
==========

Rotated two-colour stripe fill with turbulence "wiggle" layers and a grain
overlay.

No boundary geometry is computed here: displacement is left to the
renderer's turbulence/displacement filters. ``compose`` maps parameters to a
``PatternDescription`` once; ``to_element`` (embedding) and ``to_markup``
(export text) both read that same description, so the two outputs cannot
drift apart.
"""

import logging
import random
import string
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from typing import List, Optional, Tuple

from .geometry import format_number
from .noise import resolve_rng
from .params import Direction, StripeParams

logger = logging.getLogger(__name__)

SVG_NS = "http://www.w3.org/2000/svg"
_ID_ALPHABET = string.digits + string.ascii_lowercase

STRIPE_OPACITY = 0.85
LAYER_OPACITY = 0.7
GRAIN_OPACITY = 0.3


@dataclass(frozen=True)
class StripeTile:
    size: float
    stripe_width: float
    rotation: float
    colors: Tuple[str, str]


@dataclass(frozen=True)
class DisplacementLayer:
    index: int
    base_frequency: float
    scale: float
    seed_from: int
    seed_to: int
    seed_duration: float
    drift: float
    drift_duration: float


@dataclass(frozen=True)
class GrainOverlay:
    base_frequency: float
    octaves: int
    seed: int
    frequency_values: Tuple[float, float, float]
    duration: float
    slope: float
    blur: float


@dataclass(frozen=True)
class PatternDescription:
    uid: str
    tile: StripeTile
    layers: Tuple[DisplacementLayer, ...]
    grain: GrainOverlay
    animated: bool


def unique_id(rng: random.Random, prefix: str = "organic") -> str:
    return prefix + "-" + "".join(rng.choice(_ID_ALPHABET) for _ in range(9))


def compose(params: StripeParams, rng: Optional[random.Random] = None) -> PatternDescription:
    p = params.clamped()
    rng = resolve_rng(rng, p.seed)
    uid = unique_id(rng)
    tile = StripeTile(
        size=max(p.pattern_size, p.stripe_width * 2),
        stripe_width=p.stripe_width,
        rotation=45.0 if p.direction is Direction.RTL else -45.0,
        colors=(p.primary_color, p.secondary_color),
    )
    layers: List[DisplacementLayer] = []
    for i in range(p.layers):
        layers.append(DisplacementLayer(
            index=i,
            base_frequency=0.01,
            scale=p.wiggle_intensity * 5,
            seed_from=i * 10,
            seed_to=i * 10 + 100,
            seed_duration=p.animation_speed * 1.5 + rng.random() * 2,
            drift=float(i * 2),
            drift_duration=p.animation_speed + rng.random() * 2,
        ))
    grain = GrainOverlay(
        base_frequency=0.65,
        octaves=3,
        seed=15,
        frequency_values=(0.65, 0.75, 0.65),
        duration=p.animation_speed * 2,
        slope=p.noise_intensity,
        blur=p.blur_amount,
    )
    logger.debug("Composed stripe pattern %s with %d layers", uid, len(layers))
    return PatternDescription(uid=uid, tile=tile, layers=tuple(layers),
                              grain=grain, animated=p.animated)


# ---------------------------- Element tree ----------------------------------

def _n(value: float) -> str:
    return format_number(value)


def _seconds(value: float) -> str:
    return _n(value) + "s"


def _grain_filter(desc: PatternDescription) -> ET.Element:
    g = desc.grain
    flt = ET.Element("filter", {"id": f"noise-{desc.uid}"})
    turb = ET.SubElement(flt, "feTurbulence", {
        "type": "fractalNoise",
        "baseFrequency": _n(g.base_frequency),
        "numOctaves": str(g.octaves),
        "seed": str(g.seed),
        "stitchTiles": "stitch",
    })
    if desc.animated:
        ET.SubElement(turb, "animate", {
            "attributeName": "baseFrequency",
            "dur": _seconds(g.duration),
            "values": ";".join(_n(v) for v in g.frequency_values),
            "repeatCount": "indefinite",
        })
    ET.SubElement(flt, "feColorMatrix", {"type": "saturate", "values": "0"})
    transfer = ET.SubElement(flt, "feComponentTransfer")
    ET.SubElement(transfer, "feFuncA", {"type": "linear", "slope": _n(g.slope), "intercept": "0"})
    ET.SubElement(flt, "feGaussianBlur", {"stdDeviation": _n(g.blur)})
    return flt


def _wiggle_filter(desc: PatternDescription, layer: DisplacementLayer) -> ET.Element:
    flt = ET.Element("filter", {"id": f"wiggle-{desc.uid}-{layer.index}"})
    turb = ET.SubElement(flt, "feTurbulence", {
        "type": "turbulence",
        "baseFrequency": _n(layer.base_frequency),
        "numOctaves": "1",
        "result": "turbulence",
    })
    if desc.animated:
        ET.SubElement(turb, "animate", {
            "attributeName": "seed",
            "from": str(layer.seed_from),
            "to": str(layer.seed_to),
            "dur": _seconds(layer.seed_duration),
            "repeatCount": "indefinite",
        })
    ET.SubElement(flt, "feDisplacementMap", {
        "in": "SourceGraphic",
        "in2": "turbulence",
        "scale": _n(layer.scale),
        "xChannelSelector": "R",
        "yChannelSelector": "G",
    })
    return flt


def _stripe_pattern(desc: PatternDescription) -> ET.Element:
    t = desc.tile
    pattern = ET.Element("pattern", {
        "id": f"stripe-{desc.uid}",
        "width": _n(t.size),
        "height": _n(t.size),
        "patternUnits": "userSpaceOnUse",
        "patternTransform": f"rotate({_n(t.rotation)})",
    })
    ET.SubElement(pattern, "rect", {
        "width": _n(t.stripe_width),
        "height": _n(t.size),
        "fill": t.colors[0],
        "opacity": _n(STRIPE_OPACITY),
    })
    ET.SubElement(pattern, "rect", {
        "x": _n(t.stripe_width),
        "width": _n(t.stripe_width),
        "height": _n(t.size),
        "fill": t.colors[1],
        "opacity": _n(STRIPE_OPACITY),
    })
    return pattern


def _layer_rect(desc: PatternDescription, layer: DisplacementLayer) -> ET.Element:
    rect = ET.Element("rect", {
        "width": "100%",
        "height": "100%",
        "fill": f"url(#stripe-{desc.uid})",
        "filter": f"url(#wiggle-{desc.uid}-{layer.index})",
        "opacity": _n(LAYER_OPACITY),
    })
    if desc.animated:
        d = _n(layer.drift)
        back = _n(-layer.drift)
        ET.SubElement(rect, "animateTransform", {
            "attributeName": "transform",
            "type": "translate",
            "values": f"{d} {d}; {back} {back}; {d} {d}",
            "dur": _seconds(layer.drift_duration),
            "repeatCount": "indefinite",
        })
    return rect


def to_element(desc: PatternDescription, width: float = 400, height: float = 300,
               sized: bool = False) -> ET.Element:
    """The full ``<svg>`` element for ``desc``.

    With ``sized`` the root also carries explicit ``width``/``height``, as a
    standalone file needs; embedded copies stretch to their container.
    """
    attrs = {"xmlns": SVG_NS}
    if sized:
        attrs.update(width=_n(width), height=_n(height))
    attrs.update({
        "viewBox": f"0 0 {_n(width)} {_n(height)}",
        "preserveAspectRatio": "none",
    })
    svg = ET.Element("svg", attrs)
    defs = ET.SubElement(svg, "defs")
    defs.append(_grain_filter(desc))
    for layer in desc.layers:
        defs.append(_wiggle_filter(desc, layer))
    defs.append(_stripe_pattern(desc))

    group = ET.SubElement(svg, "g")
    for layer in desc.layers:
        group.append(_layer_rect(desc, layer))
    ET.SubElement(group, "rect", {
        "width": "100%",
        "height": "100%",
        "filter": f"url(#noise-{desc.uid})",
        "opacity": _n(GRAIN_OPACITY),
    })
    return svg


def element_to_text(element: ET.Element) -> str:
    ET.indent(element, space="  ")
    return ET.tostring(element, encoding="unicode")


def to_markup(desc: PatternDescription, width: float = 400, height: float = 300,
              sized: bool = False) -> str:
    """Export text for ``desc``; the same tree ``to_element`` builds."""
    return element_to_text(to_element(desc, width, height, sized))
