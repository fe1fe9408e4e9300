"""Building blocks of a unit-aware calculator: errors, number syntax, lexing, dates and terminal settings."""

__version__ = "1.0.1"