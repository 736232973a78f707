"""
presets.py
==========

Built-in presets and a small JSON-backed store for user presets.

The store file looks like::

    {"rip": {"My edge": {"width": 1020, ...}}, "stripes": {...}}

Only parameter fields are persisted; geometry is always regenerated.
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Type, Union

from .params import (BaseParams, Direction, OrganicEdgeParams, StripeParams,
                     TornEdgeParams, WavyGridParams)

logger = logging.getLogger(__name__)

KINDS: Dict[str, Type[BaseParams]] = {
    "torn": TornEdgeParams,
    "rip": OrganicEdgeParams,
    "grid": WavyGridParams,
    "stripes": StripeParams,
}

BUILTIN_PRESETS: Dict[str, Dict[str, BaseParams]] = {
    "rip": {
        "Gentle Wave": OrganicEdgeParams(width=1020, height=100, segments=15, roughness=20, variance=0.3),
        "Rough Edge": OrganicEdgeParams(width=1020, height=120, segments=30, roughness=50, variance=0.7),
        "Sharp Tears": OrganicEdgeParams(width=1020, height=80, segments=10, roughness=40, variance=0.8),
        "Subtle Rip": OrganicEdgeParams(width=1020, height=60, segments=25, roughness=15, variance=0.4),
    },
    "stripes": {
        "subtle": StripeParams(stripe_width=6, pattern_size=12, noise_intensity=0.3, blur_amount=0.7,
                               wiggle_intensity=0.8, layers=2, animation_speed=4),
        "dynamic": StripeParams(stripe_width=8, pattern_size=16, noise_intensity=0.5, blur_amount=0.4,
                                wiggle_intensity=1.2, layers=3, animation_speed=3),
        "refinedSilk": StripeParams(direction=Direction.LTR, stripe_width=8, pattern_size=16,
                                    primary_color="#bfbfbf", secondary_color="#e5e5e5",
                                    noise_intensity=0.4, blur_amount=0.6, wiggle_intensity=0.9,
                                    layers=3, animation_speed=4),
    },
}


class PresetError(Exception):
    """The preset file could not be read or written."""


def kind_of(params: BaseParams) -> str:
    for kind, cls in KINDS.items():
        if isinstance(params, cls):
            return kind
    raise TypeError(f"Not a parameter record: {params!r}")


def builtin(name: str, kind: str) -> BaseParams:
    try:
        return BUILTIN_PRESETS[kind][name]
    except KeyError:
        raise KeyError(f"No built-in {kind} preset named {name!r}") from None


class PresetStore:
    """Named parameter records saved to a JSON file.

    Every operation re-reads the file, so several processes sharing it see
    each other's changes. A missing file is an empty store.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def _read(self) -> Dict[str, Dict[str, Dict[str, Any]]]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            raise PresetError(f"Could not read presets from {self.path}: {e}") from e
        if not isinstance(data, dict):
            raise PresetError(f"{self.path} does not hold a preset mapping")
        return data

    def _write(self, data: Dict[str, Dict[str, Dict[str, Any]]]) -> None:
        # a failed write leaves the previous file untouched
        tmp = self.path.with_name(self.path.name + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, sort_keys=True)
            os.replace(tmp, self.path)
        except OSError as e:
            if tmp.exists():
                tmp.unlink()
            raise PresetError(f"Could not write presets to {self.path}: {e}") from e

    def save(self, name: str, params: BaseParams) -> None:
        if not name or not name.strip():
            raise ValueError("Preset name must not be blank")
        kind = kind_of(params)
        data = self._read()
        data.setdefault(kind, {})[name.strip()] = params.to_dict()
        self._write(data)
        logger.info("Saved %s preset %r", kind, name.strip())

    def list(self, kind: Optional[str] = None) -> List[str]:
        data = self._read()
        kinds = [kind] if kind else sorted(data)
        names: List[str] = []
        for k in kinds:
            names.extend(sorted(data.get(k, {})))
        return names

    def load(self, name: str, kind: str) -> BaseParams:
        data = self._read()
        try:
            fields = data[kind][name]
        except KeyError:
            raise KeyError(f"No saved {kind} preset named {name!r}") from None
        return KINDS[kind].from_dict(fields)

    def delete(self, name: str, kind: str) -> None:
        data = self._read()
        if name not in data.get(kind, {}):
            raise KeyError(f"No saved {kind} preset named {name!r}")
        del data[kind][name]
        if not data[kind]:
            del data[kind]
        self._write(data)
        logger.info("Deleted %s preset %r", kind, name)

    def resolve(self, name: str, kind: str) -> BaseParams:
        """A saved preset, falling back to the built-in one of the same name."""
        try:
            return self.load(name, kind)
        except KeyError:
            return builtin(name, kind)
