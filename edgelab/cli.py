"""
Command line front end.

$ edgelab torn --size 400x300 --roughness 1 --seed 7 --out panel.svg --png panel.png
$ edgelab rip --preset "Rough Edge" --both --out .
$ edgelab grid --size 40x40 --amplitude 4 --frequency 1 --seed 1 --png grid.png
$ edgelab stripes --preset dynamic --colors "#bfbfbf,#e5e5e5" --static
$ edgelab border --random-dash --css
$ edgelab presets list

Documents go to stdout unless ``--out`` is given. When ``--out`` names a
directory the generator's default file name is used inside it.
"""

import argparse
import logging
import sys
from pathlib import Path as FsPath
from typing import Any, Callable, Dict, Optional, Sequence, Tuple

from . import config
from .border import LINE_CAPS, BorderParams, border_css, border_svg, random_dash_array
from .edges import organic_edge, paper_rip, torn_edge
from .grid import wavy_grid
from .logging_config import setup_logging
from .params import BaseParams, Direction, Edge, Side
from .presets import KINDS, PresetError, PresetStore
from .raster import render_path, render_pathset, render_stripes, save_png
from .stripes import compose
from .svg import (ExportError, grid_document, path_document, save_document,
                  stripe_document, torn_panel_document)

logger = logging.getLogger(__name__)


# ---------------------------- Helpers ---------------------------------------

def parse_size(s: str) -> Tuple[float, float]:
    if "x" not in s.lower():
        raise argparse.ArgumentTypeError("Size must be like 400x300")
    a, b = s.lower().split("x", 1)
    try:
        return (float(a), float(b))
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid size: {s!r}") from None


def parse_colors(s: str) -> Tuple[str, str]:
    parts = [c.strip() for c in s.split(",") if c.strip()]
    if len(parts) != 2:
        raise argparse.ArgumentTypeError("Give exactly two colours, e.g. '#d4d4d4,#f5f5f5'")
    return (parts[0], parts[1])


def build_params(args: argparse.Namespace, kind: str, store: PresetStore,
                 fields: Dict[str, str]) -> BaseParams:
    """Preset (or defaults) with every option the user actually passed laid on top.

    ``fields`` maps record field names to argparse destinations.
    """
    base = store.resolve(args.preset, kind) if getattr(args, "preset", None) else KINDS[kind]()
    overrides: Dict[str, Any] = {}
    for field_name, dest in fields.items():
        value = getattr(args, dest, None)
        if value is not None:
            overrides[field_name] = value
    size = getattr(args, "size", None)
    if size is not None:
        overrides["width"], overrides["height"] = size
    return base.with_overrides(**overrides).clamped()


def emit(text: str, out: Optional[str], default_name: str) -> None:
    if not out or out == "-":
        sys.stdout.write(text + "\n")
        return
    target = FsPath(out)
    if target.is_dir():
        save_document(text, target, default_name)
    else:
        save_document(text, target.parent, target.name)


def maybe_save_preset(args: argparse.Namespace, store: PresetStore, params: BaseParams) -> None:
    if getattr(args, "save_preset", None):
        store.save(args.save_preset, params)


# ---------------------------- Commands --------------------------------------

def cmd_torn(args: argparse.Namespace, store: PresetStore) -> int:
    params = build_params(args, "torn", store, {
        "roughness": "roughness", "variance": "variance", "seed": "seed",
    })
    path = torn_edge(params)
    if args.plain:
        text = path_document(path, params.width, params.height, fill=args.fill)
    else:
        text = torn_panel_document(path, params)
    emit(text, args.out, config.DEFAULT_FILENAMES["torn"])
    if args.png:
        save_png(render_path(path, params.width, params.height, fill=args.fill), args.png)
    maybe_save_preset(args, store, params)
    return 0


def cmd_rip(args: argparse.Namespace, store: PresetStore) -> int:
    params = build_params(args, "rip", store, {
        "segments": "segments", "roughness": "roughness", "variance": "variance",
        "edge": "edge", "side": "side", "seed": "seed",
    })
    paths = list(paper_rip(params)) if args.both else [organic_edge(params)]
    emit(path_document(paths, params.width, params.height, fill=args.fill),
         args.out, config.DEFAULT_FILENAMES["rip"])
    if args.png:
        save_png(render_path(paths[0], params.width, params.height, fill=args.fill), args.png)
    maybe_save_preset(args, store, params)
    return 0


def cmd_grid(args: argparse.Namespace, store: PresetStore) -> int:
    params = build_params(args, "grid", store, {
        "amplitude": "amplitude", "frequency": "frequency",
        "randomness": "randomness", "seed": "seed",
    })
    pathset = wavy_grid(params)
    emit(grid_document(pathset, stroke=args.stroke, opacity=args.opacity),
         args.out, config.DEFAULT_FILENAMES["grid"])
    if args.png:
        save_png(render_pathset(pathset, args.repeat, args.repeat, stroke=args.stroke), args.png)
    maybe_save_preset(args, store, params)
    return 0


def cmd_stripes(args: argparse.Namespace, store: PresetStore) -> int:
    if args.colors:
        args.primary_color, args.secondary_color = args.colors
    if args.static:
        args.animated = False
    params = build_params(args, "stripes", store, {
        "direction": "direction", "stripe_width": "stripe_width",
        "pattern_size": "pattern_size", "primary_color": "primary_color",
        "secondary_color": "secondary_color", "noise_intensity": "noise",
        "blur_amount": "blur", "wiggle_intensity": "wiggle", "layers": "layers",
        "animation_speed": "speed", "animated": "animated", "seed": "seed",
    })
    desc = compose(params)
    emit(stripe_document(desc), args.out, config.DEFAULT_FILENAMES["stripes"])
    if args.png:
        save_png(render_stripes(params), args.png)
    maybe_save_preset(args, store, params)
    return 0


def cmd_border(args: argparse.Namespace, store: PresetStore) -> int:
    dash = random_dash_array(seed=args.seed) if args.random_dash else args.dash_array
    params = BorderParams(
        stroke_width=args.stroke_width,
        dash_array=dash,
        line_cap=args.line_cap,
        dash_offset=args.dash_offset,
        border_radius=args.radius,
        color=args.color,
    )
    text = border_css(params) if args.css else border_svg(params)
    emit(text, args.out, config.DEFAULT_FILENAMES["border"])
    return 0


def cmd_presets(args: argparse.Namespace, store: PresetStore) -> int:
    if args.action == "list":
        for name in store.list(args.kind):
            sys.stdout.write(name + "\n")
        return 0
    if not args.name or not args.kind:
        logger.error("presets %s needs a NAME and --kind", args.action)
        return 2
    store.delete(args.name, args.kind)
    return 0


COMMANDS: Dict[str, Callable[[argparse.Namespace, PresetStore], int]] = {
    "torn": cmd_torn,
    "rip": cmd_rip,
    "grid": cmd_grid,
    "stripes": cmd_stripes,
    "border": cmd_border,
    "presets": cmd_presets,
}


# ---------------------------- Parser ----------------------------------------

def _output_args(p: argparse.ArgumentParser, with_png: bool = True) -> None:
    p.add_argument("--out", default=None, help="Output file or directory (default: stdout)")
    if with_png:
        p.add_argument("--png", default=None, help="Also write a PNG preview to this path")


def _preset_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--preset", default=None, help="Start from a saved or built-in preset")
    p.add_argument("--save-preset", default=None, metavar="NAME",
                   help="Save the resulting parameters under NAME")


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="edgelab",
                                 description="Generate torn edges, ripped strips and patterns as SVG")
    ap.add_argument("--log-level", default="WARNING",
                    choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    ap.add_argument("--log-file", default=None)
    ap.add_argument("--store", default=None, help=f"Preset file (default: {config.PRESETS_PATH})")
    sub = ap.add_subparsers(dest="command", required=True)

    p = sub.add_parser("torn", help="Closed torn-paper panel")
    p.add_argument("--size", type=parse_size, default=None, help="WIDTHxHEIGHT, e.g. 400x300")
    p.add_argument("--roughness", type=float, default=None)
    p.add_argument("--variance", type=float, default=None)
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--fill", default="#ffffff")
    p.add_argument("--plain", action="store_true", help="Bare path, no shadow or noise filters")
    _preset_args(p)
    _output_args(p)

    p = sub.add_parser("rip", help="Ripped bezier edge(s) of a strip")
    p.add_argument("--size", type=parse_size, default=None)
    p.add_argument("--segments", type=int, default=None)
    p.add_argument("--roughness", type=float, default=None)
    p.add_argument("--variance", type=float, default=None)
    p.add_argument("--edge", choices=[e.value for e in Edge], default=None)
    p.add_argument("--side", choices=[s.value for s in Side], default=None)
    p.add_argument("--both", action="store_true", help="Top and bottom rips together")
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--fill", default="#ffffff")
    _preset_args(p)
    _output_args(p)

    p = sub.add_parser("grid", help="Wavy grid pattern tile")
    p.add_argument("--size", type=parse_size, default=None)
    p.add_argument("--amplitude", type=float, default=None)
    p.add_argument("--frequency", type=float, default=None)
    p.add_argument("--randomness", type=float, default=None)
    p.add_argument("--seed", type=float, default=None)
    p.add_argument("--stroke", default="#3b82f6")
    p.add_argument("--opacity", type=float, default=0.5)
    p.add_argument("--repeat", type=int, default=4, help="Tiles per axis in the PNG preview")
    _preset_args(p)
    _output_args(p)

    p = sub.add_parser("stripes", help="Wiggling stripe fill")
    p.add_argument("--direction", choices=[d.value for d in Direction], default=None)
    p.add_argument("--stripe-width", type=float, default=None)
    p.add_argument("--pattern-size", type=float, default=None)
    p.add_argument("--colors", type=parse_colors, default=None, help="PRIMARY,SECONDARY")
    p.add_argument("--noise", type=float, default=None)
    p.add_argument("--blur", type=float, default=None)
    p.add_argument("--wiggle", type=float, default=None)
    p.add_argument("--layers", type=int, default=None)
    p.add_argument("--speed", type=float, default=None)
    p.add_argument("--static", action="store_true", help="Drop all animation elements")
    p.add_argument("--seed", type=int, default=None)
    _preset_args(p)
    _output_args(p)

    p = sub.add_parser("border", help="Dashed CSS border")
    p.add_argument("--stroke-width", type=float, default=7.0)
    p.add_argument("--dash-array", default="50%, 13%")
    p.add_argument("--random-dash", action="store_true")
    p.add_argument("--line-cap", choices=LINE_CAPS, default="butt")
    p.add_argument("--dash-offset", type=float, default=86.0)
    p.add_argument("--radius", type=float, default=100.0)
    p.add_argument("--color", default="#EC3463")
    p.add_argument("--css", action="store_true", help="Emit the CSS block instead of the SVG")
    p.add_argument("--seed", type=int, default=None)
    _output_args(p, with_png=False)

    p = sub.add_parser("presets", help="List or delete saved presets")
    p.add_argument("action", choices=["list", "delete"])
    p.add_argument("name", nargs="?", default=None)
    p.add_argument("--kind", choices=sorted(KINDS), default=None)
    return ap


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(getattr(logging, args.log_level), args.log_file)
    store = PresetStore(args.store or config.PRESETS_PATH)
    try:
        return COMMANDS[args.command](args, store)
    except (ExportError, PresetError) as e:
        logger.error("%s", e)
        return 1
    except KeyError as e:
        logger.error("%s", e.args[0] if e.args else e)
        return 1
    except ValueError as e:
        logger.error("%s", e)
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
