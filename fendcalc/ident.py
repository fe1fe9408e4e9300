"""Identifiers as they appear in expressions."""

from __future__ import annotations

from dataclasses import dataclass

_PREFIX_UNITS = frozenset({"$", "\u00a3"})


@dataclass(frozen=True)
class Ident:
    """A name such as a variable, function or unit."""

    name: str

    def is_prefix_unit(self) -> bool:
        """Return True for units written before the number, like ``$``."""
        return self.name in _PREFIX_UNITS

    def __str__(self) -> str:
        if self.name.startswith("_"):
            return self.name
        return self.name.replace("_", " ")