"""Evaluation results, output spans and the evaluation context."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any

_VERSION = "1.0.1"


class SpanKind(Enum):
    """What a piece of output text represents, used for colouring."""

    NUMBER = auto()
    BUILT_IN_FUNCTION = auto()
    KEYWORD = auto()
    STRING = auto()
    DATE = auto()
    WHITESPACE = auto()
    IDENT = auto()
    BOOLEAN = auto()
    OTHER = auto()


@dataclass(frozen=True)
class Span:
    """A piece of output text together with its kind."""

    string: str
    kind: SpanKind = SpanKind.OTHER


@dataclass(frozen=True)
class FendResult:
    """The result of evaluating one input."""

    span_result: tuple[Span, ...]
    is_unit: bool

    @classmethod
    def from_spans(cls, spans: Iterable[Span], is_unit: bool) -> FendResult:
        return cls(tuple(spans), is_unit)

    @classmethod
    def empty(cls) -> FendResult:
        """The result of blank input: no output, and of the unit type."""
        return cls((), True)

    @property
    def main_result(self) -> str:
        """The result as plain text."""
        return "".join(span.string for span in self.span_result)

    @property
    def spans(self) -> tuple[Span, ...]:
        """The result as coloured spans."""
        return self.span_result


@dataclass(frozen=True)
class CurrentTimeInfo:
    """Milliseconds since the Unix epoch plus the local offset from UTC."""

    elapsed_unix_time_ms: int
    timezone_offset_secs: int


@dataclass
class Context:
    """State kept between evaluations: variables and settings."""

    current_time: CurrentTimeInfo | None = None
    variables: dict[str, Any] = field(default_factory=dict)
    coulomb_and_farad: bool = False
    random_u32: Callable[[], int] | None = None
    terminal_output: bool = False

    def set_current_time_v1(self, ms_since_1970: int, tz_offset_secs: int) -> None:
        """Accepted for compatibility; the current time stays unavailable."""
        self.current_time = None

    def use_coulomb_and_farad(self) -> None:
        """Read ``C`` and ``F`` as coulomb and farad rather than temperatures."""
        self.coulomb_and_farad = True

    def set_random_u32_fn(self, random_u32: Callable[[], int]) -> None:
        self.random_u32 = random_u32

    def disable_rng(self) -> None:
        self.random_u32 = None

    def set_output_mode_terminal(self) -> None:
        """Switch to fixed-width terminal output."""
        self.terminal_output = True


def get_version() -> str:
    """Return the version of the calculator core."""
    return _VERSION