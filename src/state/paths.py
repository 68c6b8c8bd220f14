"""Per-user location of the persisted state file."""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Mapping, Optional


APP_NAME = "docuum"
STATE_FILENAME = "state.yml"


def _home_dir(environ: Mapping[str, str]) -> Optional[Path]:
    home = environ.get("HOME")
    if home:
        return Path(home)
    try:
        return Path.home()
    except (RuntimeError, KeyError):
        return None


def data_local_dir(
    *,
    platform: str = sys.platform,
    environ: Optional[Mapping[str, str]] = None,
) -> Optional[Path]:
    """Return the host's per-user local data directory, or None if there isn't one.

    - Windows: %LOCALAPPDATA%
    - macOS: ~/Library/Application Support
    - Others: $XDG_DATA_HOME when set to an absolute path, else ~/.local/share
    """
    env = os.environ if environ is None else environ

    if platform.startswith("win"):
        base = env.get("LOCALAPPDATA")
        return Path(base) if base else None

    if platform == "darwin":
        home = _home_dir(env)
        return home / "Library" / "Application Support" if home else None

    xdg = env.get("XDG_DATA_HOME")
    if xdg and Path(xdg).is_absolute():
        return Path(xdg)
    home = _home_dir(env)
    return home / ".local" / "share" if home else None


def state_path() -> Optional[Path]:
    # The result always has a parent: <data dir>/<app>
    base = data_local_dir()
    if base is None:
        return None
    return base / APP_NAME / STATE_FILENAME
