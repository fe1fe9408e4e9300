"""Evaluation errors, interruption hooks and numeric ranges used in messages."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from string import Formatter
from typing import Any

_MESSAGES: dict[str, str] = {
    "interrupted": "interrupted",
    "parse_error": "{0}",
    "factorial_unitless": "factorial is only supported for unitless numbers",
    "modulo_unitless": "modulo is only supported for unitless numbers",
    "factorial_complex": "factorial is not supported for complex numbers",
    "roots_complex": "roots are currently unsupported for complex numbers",
    "exp_complex": "exponentiation is not supported for complex numbers",
    "exp_unitless": "exponentiation is only supported for unitless numbers",
    "invalid_base_prefix": "unable to parse a valid base prefix, expected 0b, 0o, or 0x",
    "incompatible_conversion": (
        "cannot convert from {0} to {1}: units '{2}' and '{3}' are incompatible"
    ),
    "non_integer_neg_roots": "cannot compute non-integer or negative roots",
    "roots_of_negative_numbers": "roots of negative numbers are not supported",
    "modulo_for_positive_ints": "modulo is only supported for positive integers",
    "cannot_convert_value_to": "cannot convert value to {0}",
    "base_too_small": "base must be at least 2",
    "conversion_rhs_numerical": "right-hand side of unit conversion has a numerical value",
    "base_too_large": "base cannot be larger than 36",
    "unable_to_convert_to_base": "unable to convert number to a valid base",
    "divide_by_zero": "division by zero",
    "exponent_too_large": "exponent too large",
    "zero_to_the_power_of_zero": "zero to the power of zero is undefined",
    "out_of_range": "{0} must lie in the interval {1}",
    "modulo_by_zero": "modulo by zero",
    "specify_num_dp": (
        "you need to specify what number of decimal places to use, e.g. '10 dp'"
    ),
    "specify_num_sf": (
        "you need to specify what number of significant figures to use, e.g. '10 sf'"
    ),
    "expected_a_unitless_number": "expected a unitless number",
    "expected_a_real_number": "expected a real number",
    "string_cannot_be_longer": "string cannot be longer than one codepoint",
    "string_cannot_be_empty": "string cannot be empty",
    "unable_to_get_current_date": "unable to get the current date",
    "negative_numbers_not_allowed": "negative numbers are not allowed",
    "probability_distributions_not_allowed": (
        "probability distributions are not allowed (consider using `sample`)"
    ),
    "parse_date_error": "failed to convert '{0}' to a date",
    "expected_a_string": "expected a string",
    "unable_to_invert_function": "unable to invert function {0}",
    "fraction_to_integer": "cannot convert fraction to integer",
    "random_numbers_not_available": "random numbers are not available",
    "must_be_an_integer": "{0} is not an integer",
    "expected_a_bool": "expected a bool (found {0})",
    "could_not_find_key_in_object": "could not find key in object",
    "could_not_find_key": "could not find key {0}",
    "inverses_of_lambdas_unsupported": (
        "inverses of lambda functions are not currently supported"
    ),
    "expected_a_rational_number": "expected a rational number",
    "cannot_convert_to_integer": "number cannot be converted to an integer",
    "complex_to_integer": "cannot convert complex number to integer",
    "number_with_unit_to_int": "cannot convert number with unit to integer",
    "inexact_number_to_int": "cannot convert inexact number to integer",
    "expected_a_number": "expected a number",
    "invalid_dice_syntax": "invalid dice syntax, try e.g. `4d6`",
    "invalid_type": "invalid type",
    "invalid_operands_for_subtraction": "invalid operands for subtraction",
    "cannot_format_with_zero_sf": "cannot format a number with zero significant figures",
    "is_not_a_function": "'{0}' is not a function",
    "is_not_a_function_or_number": "'{0}' is not a function or number",
    "identifier_not_found": "unknown identifier '{0}'",
    "expected_a_character": "expected a character",
    "expected_a_digit": "expected a digit, found '{0}'",
    "expected_char": "expected '{0}', found '{1}'",
    "expected_digit_separator": "expected a digit separator, found {0}",
    "digit_separators_not_allowed": "digit separators are not allowed",
    "digit_separators_only_between_digits": "digit separators can only occur between digits",
    "invalid_char_at_beginning_of_ident": "'{0}' is not valid at the beginning of an identifier",
    "unexpected_char": "unexpected character '{0}'",
    "unterminated_string_literal": "unterminated string literal",
    "unknown_backslash_escape_sequence": "unknown escape sequence: \\{0}",
    "backslash_x_out_of_range": "expected an escape sequence between \\x00 and \\x7f",
    "expected_a_letter_or_code": (
        "expected an uppercase letter, or one of @[\\]^_? (e.g. \\^H or \\^@)"
    ),
    "expected_an_object": "expected an object",
    "invalid_unicode_escape_sequence": (
        "invalid Unicode escape sequence, expected e.g. \\u{{7e}}"
    ),
    "formatting_error": "error during formatting",
}


def _arity(template: str) -> int:
    return len(
        {field for _, field, _, _ in Formatter().parse(template) if field is not None}
    )


class FendError(Exception):
    """An error raised while lexing, parsing or evaluating an expression.

    ``kind`` names the error; ``details`` holds the values shown in its message.
    """

    def __init__(self, kind: str, *details: Any) -> None:
        try:
            template = _MESSAGES[kind]
        except KeyError:
            raise ValueError(f"unknown error kind {kind!r}") from None
        expected = _arity(template)
        if len(details) != expected:
            raise TypeError(
                f"error kind {kind!r} takes {expected} detail(s), got {len(details)}"
            )
        super().__init__(kind, *details)
        self.kind = kind
        self.details = details

    def __str__(self) -> str:
        return _MESSAGES[self.kind].format(*self.details)


class Interrupt(ABC):
    """Something that can ask a running evaluation to stop."""

    @abstractmethod
    def should_interrupt(self) -> bool:
        """Return True if the evaluation should stop now."""


class Never(Interrupt):
    """An interrupt that never fires."""

    def should_interrupt(self) -> bool:
        return False


def test_int(interrupt: Interrupt) -> None:
    """Raise an ``interrupted`` error if the interrupt has fired."""
    if interrupt.should_interrupt():
        raise FendError("interrupted")


test_int.__test__ = False  # keep test collectors from picking this up


@dataclass(frozen=True)
class RangeBound:
    """One end of a range: a value that is either included or excluded."""

    value: Any
    closed: bool = False


@dataclass(frozen=True)
class Range:
    """An interval; a missing bound stands for infinity."""

    start: RangeBound | None
    end: RangeBound | None

    @classmethod
    def open(cls, start: Any, end: Any) -> Range:
        return cls(RangeBound(start), RangeBound(end))

    @classmethod
    def zero_or_greater(cls) -> Range:
        return cls(RangeBound(0, closed=True), None)

    def __str__(self) -> str:
        if self.start is None:
            left = "(-\u221e, "
        elif self.start.closed:
            left = f"[{self.start.value}, "
        else:
            left = f"({self.start.value}, "
        if self.end is None:
            right = "\u221e)"
        elif self.end.closed:
            right = f"{self.end.value}]"
        else:
            right = f"{self.end.value})"
        return left + right


def out_of_range(value: Any, range_: Range) -> FendError:
    """Build the error for a value lying outside ``range_``."""
    return FendError("out_of_range", value, range_)