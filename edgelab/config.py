"""
Configuration
=============
Central registry of defaults shared by the exporters, the preset store and
the command line.

Exports:
    EDGELAB_HOME (Path): Directory for user data (``$EDGELAB_HOME`` or ``~/.edgelab``).
    PRESETS_PATH (Path): JSON file backing the preset store.
    DEFAULT_FILENAMES (dict): Export file name per generator.
"""
import os
from pathlib import Path


def get_home() -> Path:
    """User data directory, overridable through ``EDGELAB_HOME``."""
    env = os.environ.get("EDGELAB_HOME")
    if env:
        return Path(env).expanduser()
    return Path.home() / ".edgelab"


EDGELAB_HOME: Path = get_home()
PRESETS_PATH: Path = EDGELAB_HOME / "presets.json"

DEFAULT_FILENAMES = {
    "torn": "torn-edge.svg",
    "rip": "paper-rip.svg",
    "grid": "wavy-grid.svg",
    "stripes": "stripe-pattern.svg",
    "border": "dashed-border.svg",
}

# Bezier flattening resolution for raster previews.
CURVE_SAMPLES: int = 16

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%H:%M:%S"
