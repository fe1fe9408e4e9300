"""Where the configuration and history files live."""

from __future__ import annotations

import os
from pathlib import Path


def _home_dir() -> Path | None:
    try:
        return Path.home()
    except (RuntimeError, KeyError):
        return None


def _dir_from_env(own_var: str, xdg_var: str, *home_parts: str) -> Path | None:
    own = os.environ.get(own_var)
    if own is not None:
        return Path(own)
    xdg = os.environ.get(xdg_var)
    if xdg is not None:
        return Path(xdg) / "fend"
    home = _home_dir()
    if home is None:
        return None
    return home.joinpath(*home_parts, "fend")


def get_config_dir() -> Path | None:
    """Return $FEND_CONFIG_DIR, else $XDG_CONFIG_HOME/fend, else ~/.config/fend."""
    return _dir_from_env("FEND_CONFIG_DIR", "XDG_CONFIG_HOME", ".config")


def get_config_file_location() -> Path | None:
    """Return the path of the configuration file, or None if there is no home."""
    config_dir = get_config_dir()
    if config_dir is None:
        return None
    return config_dir / "config.toml"


def get_history_dir() -> Path | None:
    """Return $FEND_STATE_DIR, else $XDG_STATE_HOME/fend, else ~/.local/state/fend."""
    return _dir_from_env("FEND_STATE_DIR", "XDG_STATE_HOME", ".local", "state")


def get_history_file_location() -> Path | None:
    """Return the history file path, creating its directory; None on failure."""
    history_dir = get_history_dir()
    if history_dir is None:
        return None
    try:
        history_dir.mkdir(parents=True, exist_ok=True)
    except OSError:
        return None
    return history_dir / "history"