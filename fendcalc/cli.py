"""Command-line argument handling, coloured output and Ctrl-C interruption."""

from __future__ import annotations

import signal
import sys
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum, auto

from .config import Config
from .errors import Interrupt
from .paths import get_config_file_location, get_history_file_location
from .results import Span, get_version

_HELP_ARGS = frozenset({"help", "--help", "-h"})
_VERSION_ARGS = frozenset({"--version", "-v", "-V"})
_DEFAULT_CONFIG_ARG = "--default-config"


class ActionKind(Enum):
    """What the command line asks for."""

    HELP = auto()
    VERSION = auto()
    REPL = auto()
    EVAL = auto()
    DEFAULT_CONFIG = auto()


@dataclass(frozen=True)
class ArgsAction:
    """The action chosen from the arguments; ``expression`` is set for EVAL."""

    kind: ActionKind
    expression: str | None = None


_HELP = ArgsAction(ActionKind.HELP)
_VERSION = ArgsAction(ActionKind.VERSION)
_REPL = ArgsAction(ActionKind.REPL)
_DEFAULT_CONFIG = ArgsAction(ActionKind.DEFAULT_CONFIG)


def _step(action: ArgsAction, arg: str) -> ArgsAction:
    kind = action.kind
    # A request for help wins over everything else.
    if arg in _HELP_ARGS or kind is ActionKind.HELP:
        return _HELP
    # Only help can override a version request; a bare `version` is evaluated.
    if kind is ActionKind.VERSION or (
        arg in _VERSION_ARGS
        and kind in (ActionKind.REPL, ActionKind.EVAL, ActionKind.DEFAULT_CONFIG)
    ):
        return _VERSION
    if kind is ActionKind.DEFAULT_CONFIG or (
        arg == _DEFAULT_CONFIG_ARG and kind in (ActionKind.REPL, ActionKind.EVAL)
    ):
        return _DEFAULT_CONFIG
    if kind is ActionKind.REPL:
        # Blank arguments are ignored, so `fend "" ""` still starts the prompt.
        return ArgsAction(ActionKind.EVAL, arg) if arg.strip() else _REPL
    return ArgsAction(ActionKind.EVAL, f"{action.expression} {arg}")


def parse_args(args: Iterable[str]) -> ArgsAction:
    """Decide what to do from the arguments, excluding the program name."""
    action = _REPL
    for arg in args:
        action = _step(action, arg)
    return action


def print_spans(spans: Iterable[Span], config: Config) -> str:
    """Return the spans as one string, each painted in its configured colour."""
    return "".join(config.colors.get_color(span.kind).paint(span.string) for span in spans)


def print_help(explain_quitting: bool) -> None:
    """Print version information and the locations of the config and history files."""
    print("For more information on how to use fend, please take a look at the manual.")
    print()
    print(f"Version: {get_version()}")
    config_path = get_config_file_location()
    if config_path is not None:
        print(f"Config file: {config_path}")
    else:
        print("Failed to get config file location")
    history_path = get_history_file_location()
    if history_path is not None:
        print(f"History file: {history_path}")
    else:
        print("Failed to get history file location")
    if explain_quitting:
        print("\nTo quit, type `quit`.")


class CtrlC(Interrupt):
    """An interrupt that fires once Ctrl-C has been pressed."""

    def __init__(self) -> None:
        self._running = True

    def should_interrupt(self) -> bool:
        return not self._running

    def reset(self) -> None:
        """Clear a previous Ctrl-C so the next evaluation can run."""
        self._running = True

    def _on_signal(self, signum: int, frame: object) -> None:
        if not self._running:
            # Ctrl-C was already pressed once, so quit now.
            raise SystemExit(1)
        self._running = False


def register_handler() -> CtrlC:
    """Install a Ctrl-C handler and return the interrupt it drives."""
    interrupt = CtrlC()
    try:
        signal.signal(signal.SIGINT, interrupt._on_signal)
    except (ValueError, OSError):
        print("Unable to set Ctrl-C handler", file=sys.stderr)
    return interrupt