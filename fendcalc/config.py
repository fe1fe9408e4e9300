"""The user configuration file."""

from __future__ import annotations

import os
import sys
import tomllib
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .colors import OutputColors
from .paths import get_config_file_location


class UnknownSettings(Enum):
    """What to do about settings that are not recognised."""

    IGNORE = "ignore"
    WARN = "warn"


class ConfigError(Exception):
    """The configuration file is invalid."""


def use_colors_if_auto() -> bool:
    """Decide whether to use colours when the setting is 'auto'."""
    if "NO_COLOR" in os.environ:
        return False
    if os.environ.get("CLICOLOR_FORCE", "0") != "0":
        return True
    if os.environ.get("CLICOLOR", "1") != "0" and _stdout_is_tty():
        return True
    return False


def _stdout_is_tty() -> bool:
    stream = sys.stdout
    try:
        return stream is not None and stream.isatty()
    except (AttributeError, ValueError):
        return False


def _enable_colors_value(key: str, value: Any) -> bool | None:
    if value is False or value == "never":
        return False
    if value is True or value == "auto":
        return use_colors_if_auto()
    if value == "always":
        return True
    print(
        f"Error: unknown config setting for `{key}`, "
        "expected one of `'never'`, `'auto'` or `'always'`",
        file=sys.stderr,
    )
    return None


@dataclass
class Config:
    """Settings for the interactive calculator."""

    prompt: str = "> "
    enable_colors: bool = field(default_factory=use_colors_if_auto)
    coulomb_and_farad: bool = False
    colors: OutputColors = field(default_factory=OutputColors)
    max_history_size: int = 1000
    unknown_settings: UnknownSettings = UnknownSettings.WARN
    unknown_keys: list[str] = field(default_factory=list)

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> Config:
        """Build a configuration from parsed TOML, starting from the defaults."""
        if not isinstance(mapping, Mapping):
            raise ConfigError("invalid type: expected a fend configuration struct")
        result = cls()
        seen_enable_colors = False
        for key, value in mapping.items():
            if key == "prompt":
                if not isinstance(value, str):
                    raise ConfigError(f"invalid type for `prompt`: {value!r}, expected a string")
                result.prompt = value
            elif key in ("enable-colors", "color"):
                if seen_enable_colors:
                    raise ConfigError("duplicate field `enable-colors`")
                seen_enable_colors = True
                enabled = _enable_colors_value(key, value)
                if enabled is not None:
                    result.enable_colors = enabled
            elif key == "coulomb-and-farad":
                if not isinstance(value, bool):
                    raise ConfigError(
                        f"invalid type for `coulomb-and-farad`: {value!r}, expected a boolean"
                    )
                result.coulomb_and_farad = value
            elif key == "colors":
                try:
                    result.colors = OutputColors.from_mapping(value)
                except ValueError as err:
                    raise ConfigError(str(err)) from err
            elif key == "max-history-size":
                if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                    raise ConfigError(
                        f"invalid value for `max-history-size`: {value!r}, "
                        "expected a non-negative integer"
                    )
                result.max_history_size = value
            elif key == "unknown-settings":
                try:
                    result.unknown_settings = UnknownSettings(value)
                except (ValueError, TypeError):
                    raise ConfigError(
                        f"invalid value: {value!r}, expected `ignore` or `warn`"
                    ) from None
            else:
                result.unknown_keys.append(key)
        return result

    @classmethod
    def from_toml(cls, text: str) -> Config:
        try:
            data = tomllib.loads(text)
        except tomllib.TOMLDecodeError as err:
            raise ConfigError(str(err)) from err
        return cls.from_mapping(data)


def print_warnings_about_unknown_keys(config: Config) -> None:
    """Warn on stderr about unrecognised settings, unless told to ignore them."""
    if config.unknown_settings is UnknownSettings.IGNORE:
        return
    for key in config.unknown_keys:
        print(f"Warning: ignoring unknown configuration setting `{key}`", file=sys.stderr)
    config.colors.print_warnings_about_unknown_keys()


def read() -> Config:
    """Read the configuration file, falling back to the defaults."""
    path = get_config_file_location()
    if path is None:
        return Config()
    try:
        data = path.read_bytes()
    except OSError:
        return Config()
    try:
        try:
            text = data.decode("utf-8")
        except UnicodeDecodeError as err:
            raise ConfigError(str(err)) from err
        config = Config.from_toml(text)
    except ConfigError as err:
        print(f'Error: invalid config file in "{path}":\n{err}', file=sys.stderr)
        print(
            "Using the default config file instead, you can view it "
            "by running `fend --default-config`",
            file=sys.stderr,
        )
        config = Config()
    print_warnings_about_unknown_keys(config)
    return config