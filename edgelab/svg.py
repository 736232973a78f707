"""
svg.py
======

Self-contained SVG documents for every generator, and saving them to disk.

Documents carry explicit ``width``/``height`` and a ``viewBox`` matching the
shape's bounding box so they can be embedded or opened as-is.
"""

import logging
import random
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from pathlib import Path as FsPath
from typing import Optional, Sequence, Union

from .geometry import Path, PathSet, format_number
from .noise import resolve_rng
from .params import TornEdgeParams
from .stripes import SVG_NS, PatternDescription, element_to_text, to_markup, unique_id

logger = logging.getLogger(__name__)


class ExportError(OSError):
    """Writing an exported document failed. Never affects engine state."""


def _root(width: float, height: float, **extra: str) -> ET.Element:
    attrs = {
        "width": format_number(width),
        "height": format_number(height),
        "viewBox": f"0 0 {format_number(width)} {format_number(height)}",
    }
    attrs.update(extra)
    attrs["xmlns"] = SVG_NS
    return ET.Element("svg", attrs)


def path_document(paths: Union[Path, Sequence[Path]], width: float, height: float,
                  fill: str = "white") -> str:
    """Filled path(s) in a bare document, the paper-rip export format."""
    if isinstance(paths, Path):
        paths = [paths]
    svg = _root(width, height, fill="none")
    for path in paths:
        ET.SubElement(svg, "path", {"d": path.to_svg(), "fill": fill})
    return element_to_text(svg)


@dataclass(frozen=True)
class PanelStyle:
    background: str = "#ffffff"
    shadow_offset: float = 6.0
    shadow_blur: float = 3.0
    noise_amount: float = 0.5
    animation_speed: float = 4.0
    animated: bool = True


def torn_panel_document(path: Path, params: TornEdgeParams, style: PanelStyle = PanelStyle(),
                        rng: Optional[random.Random] = None) -> str:
    """Torn panel with a drop shadow and two stacked noise displacements on its edge."""
    p = params.clamped()
    uid = unique_id(resolve_rng(rng, p.seed), prefix="ripped")
    svg = _root(p.width, p.height)
    defs = ET.SubElement(svg, "defs")

    shadow = ET.SubElement(defs, "filter", {"id": f"paper-shadow-{uid}"})
    ET.SubElement(shadow, "feGaussianBlur", {"in": "SourceAlpha",
                                             "stdDeviation": format_number(style.shadow_blur)})
    ET.SubElement(shadow, "feOffset", {"dx": format_number(style.shadow_offset / 2),
                                       "dy": format_number(style.shadow_offset)})
    transfer = ET.SubElement(shadow, "feComponentTransfer")
    ET.SubElement(transfer, "feFuncA", {"type": "linear", "slope": "0.5"})
    merge = ET.SubElement(shadow, "feMerge")
    ET.SubElement(merge, "feMergeNode")
    ET.SubElement(merge, "feMergeNode", {"in": "SourceGraphic"})

    base = style.noise_amount * 0.03
    noise = ET.SubElement(defs, "filter", {"id": f"noise-{uid}"})
    turb = ET.SubElement(noise, "feTurbulence", {
        "type": "fractalNoise",
        "baseFrequency": f"{format_number(base)} {format_number(base)}",
        "numOctaves": "6",
        "seed": "0",
        "stitchTiles": "stitch",
    })
    if style.animated:
        peak = style.noise_amount * 0.04
        values = [f"{format_number(v)} {format_number(v)}" for v in (base, peak, base)]
        ET.SubElement(turb, "animate", {
            "attributeName": "baseFrequency",
            "dur": format_number(style.animation_speed) + "s",
            "values": ";".join(values),
            "keyTimes": "0;0.5;1",
            "calcMode": "spline",
            "keySplines": "0.4 0 0.6 1; 0.4 0 0.6 1",
            "repeatCount": "indefinite",
        })
    ET.SubElement(noise, "feDisplacementMap", {"in": "SourceGraphic",
                                               "scale": format_number(p.roughness * 20)})
    fine = style.noise_amount * 0.05
    ET.SubElement(noise, "feTurbulence", {
        "type": "turbulence",
        "baseFrequency": f"{format_number(fine)} {format_number(fine)}",
        "numOctaves": "4",
        "seed": "1",
        "stitchTiles": "stitch",
    })
    ET.SubElement(noise, "feDisplacementMap", {"in": "SourceGraphic",
                                               "scale": format_number(p.roughness * 10)})

    group = ET.SubElement(svg, "g", {"filter": f"url(#paper-shadow-{uid})"})
    ET.SubElement(group, "path", {"d": path.to_svg(), "fill": style.background,
                                  "filter": f"url(#noise-{uid})"})
    return element_to_text(svg)


def grid_document(pathset: PathSet, width: float = 400, height: float = 300,
                  stroke: str = "#3b82f6", opacity: float = 0.5,
                  pattern_id: str = "wavy-grid") -> str:
    """A ``width`` x ``height`` area filled with the repeating wavy tile."""
    svg = _root(width, height)
    defs = ET.SubElement(svg, "defs")
    pattern = ET.SubElement(defs, "pattern", {
        "id": pattern_id,
        "width": format_number(pathset.width),
        "height": format_number(pathset.height),
        "patternUnits": "userSpaceOnUse",
    })
    group = ET.SubElement(pattern, "g", {"fill": "none", "stroke": stroke,
                                         "stroke-opacity": format_number(opacity)})
    for path in pathset:
        ET.SubElement(group, "path", {"d": path.to_svg(),
                                      "vector-effect": "non-scaling-stroke"})
    ET.SubElement(svg, "rect", {"width": "100%", "height": "100%",
                                "fill": f"url(#{pattern_id})", "stroke-width": "0"})
    return element_to_text(svg)


def stripe_document(desc: PatternDescription, width: float = 400, height: float = 300) -> str:
    return to_markup(desc, width, height, sized=True)


def save_document(text: str, directory: Union[str, FsPath] = ".",
                  filename: str = "edgelab.svg") -> FsPath:
    """Write ``text`` as UTF-8 to ``directory/filename`` and return the path."""
    target = FsPath(directory) / filename
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(text, encoding="utf-8")
    except OSError as e:
        raise ExportError(f"Could not write {target}: {e}") from e
    logger.info("Saved %s (%d bytes)", target, len(text.encode("utf-8")))
    return target
