"""Output colour settings: base colours, styles and per-kind colouring."""

from __future__ import annotations

import sys
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from .results import SpanKind

_ANSI_CODES: dict[str, int] = {
    "black": 30,
    "red": 31,
    "green": 32,
    "yellow": 33,
    "blue": 34,
    "purple": 35,
    "cyan": 36,
    "white": 37,
}
_WHITE_CODE = _ANSI_CODES["white"]
_EXPECTED_COLOR = "`black`, `red`, `green`, `yellow`, `blue`, `purple`, `cyan` or `white`"

_KNOWN_STYLE_NAMES = frozenset(
    {"number", "string", "identifier", "keyword", "built-in-function", "date", "other"}
)


@dataclass(frozen=True)
class BaseColor:
    """A named terminal colour; unknown names are kept and shown as white."""

    name: str

    @property
    def is_known(self) -> bool:
        return self.name in _ANSI_CODES

    @classmethod
    def from_name(cls, name: Any) -> BaseColor:
        if not isinstance(name, str):
            raise ValueError(f"invalid type: {name!r}, expected {_EXPECTED_COLOR}")
        return cls(name)

    def ansi_code(self) -> int:
        """Return the ANSI foreground code for this colour."""
        return _ANSI_CODES.get(self.name, _WHITE_CODE)

    def warn_about_unknown_colors(self) -> None:
        if not self.is_known:
            print(f"Warning: ignoring unknown color `{self.name}`", file=sys.stderr)


def _expect_bool(key: str, value: Any) -> bool:
    if not isinstance(value, bool):
        raise ValueError(f"invalid type for `{key}`: {value!r}, expected a boolean")
    return value


@dataclass(frozen=True)
class Color:
    """A text style: optional foreground colour, underline and bold."""

    foreground: BaseColor | None = None
    underline: bool = False
    bold: bool = False
    unknown_keys: tuple[str, ...] = ()

    @classmethod
    def from_mapping(cls, mapping: Any) -> Color:
        if not isinstance(mapping, Mapping):
            raise ValueError(
                "invalid type: expected a color, with properties "
                "`foreground`, `underline` and `bold`"
            )
        foreground = None
        underline = False
        bold = False
        unknown: list[str] = []
        for key, value in mapping.items():
            if key == "foreground":
                foreground = BaseColor.from_name(value)
            elif key == "underline":
                underline = _expect_bool(key, value)
            elif key == "bold":
                bold = _expect_bool(key, value)
            else:
                unknown.append(key)
        return cls(foreground, underline, bold, tuple(unknown))

    @classmethod
    def plain(cls, foreground: BaseColor) -> Color:
        return cls(foreground=foreground)

    @classmethod
    def bold_of(cls, foreground: BaseColor) -> Color:
        return cls(foreground=foreground, bold=True)

    def _codes(self) -> list[str]:
        codes = []
        if self.bold:
            codes.append("1")
        if self.underline:
            codes.append("4")
        if self.foreground is not None:
            codes.append(str(self.foreground.ansi_code()))
        return codes

    def paint(self, text: str) -> str:
        """Wrap ``text`` in the ANSI escape codes for this style."""
        codes = self._codes()
        if not codes:
            return text
        return f"\x1b[{';'.join(codes)}m{text}\x1b[0m"

    def print_warnings_about_unknown_keys(self, style_assignment: str) -> None:
        for key in self.unknown_keys:
            print(
                "Warning: ignoring unknown configuration setting "
                f"`colors.{style_assignment}.{key}`",
                file=sys.stderr,
            )
        if self.foreground is not None:
            self.foreground.warn_about_unknown_colors()


_DEFAULT_STYLES: dict[str, Color] = {
    "identifier": Color.plain(BaseColor("white")),
    "keyword": Color.bold_of(BaseColor("blue")),
    "built-in-function": Color.bold_of(BaseColor("blue")),
}

_KIND_STYLE_NAMES: dict[SpanKind, str] = {
    SpanKind.NUMBER: "number",
    SpanKind.STRING: "string",
    SpanKind.IDENT: "identifier",
    SpanKind.KEYWORD: "keyword",
    SpanKind.BUILT_IN_FUNCTION: "built_in_function",
    SpanKind.DATE: "date",
}


@dataclass(eq=False)
class OutputColors:
    """Styles for each kind of output, falling back to built-in defaults."""

    styles: dict[str, Color] = field(default_factory=dict)

    @classmethod
    def from_mapping(cls, mapping: Any) -> OutputColors:
        if not isinstance(mapping, Mapping):
            raise ValueError("invalid type for `colors`: expected a table")
        return cls({name: Color.from_mapping(value) for name, value in mapping.items()})

    def get_style(self, name: str) -> Color:
        style = self.styles.get(name)
        if style is not None:
            return style
        return _DEFAULT_STYLES.get(name, Color())

    def get_color(self, kind: SpanKind) -> Color:
        """Return the style used for spans of ``kind``."""
        return self.get_style(_KIND_STYLE_NAMES.get(kind, "other"))

    def print_warnings_about_unknown_keys(self) -> None:
        for key, style in self.styles.items():
            if key not in _KNOWN_STYLE_NAMES:
                print(
                    f"Warning: ignoring unknown configuration setting `colors.{key}`",
                    file=sys.stderr,
                )
            style.print_warnings_about_unknown_keys(key)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, OutputColors):
            return NotImplemented
        return all(
            self.get_style(name) == other.get_style(name)
            for name in sorted(_KNOWN_STYLE_NAMES)
        )

    __hash__ = None  # type: ignore[assignment]