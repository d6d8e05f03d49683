"""Shared helpers."""

import os
from pathlib import Path

WSNAV_DIR_ENV = "WSNAV_DIR"


def wsnav_dir() -> Path:
    """Return the configuration directory (``$WSNAV_DIR`` or ``~/.wsnav``)."""
    raw = os.environ.get(WSNAV_DIR_ENV, "")
    if raw:
        return Path(os.path.expanduser(raw))
    return Path.home() / ".wsnav"
