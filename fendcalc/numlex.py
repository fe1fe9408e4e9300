"""Reading number literals: base prefixes, digits, decimals, recurring digits, exponents and dice."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum, auto
from fractions import Fraction
from typing import Any

from .errors import FendError, Interrupt, Never, test_int

_U32_MAX = 2**32 - 1
_MAX_EXPONENT = 1_000_000
_DIGIT_SEPARATORS = "_,"
_ASCII_DIGITS = "0123456789"


class BaseStyle(Enum):
    """How a base was written in the input."""

    PLAIN = auto()
    ZERO_PREFIX = auto()
    CUSTOM = auto()


@dataclass(frozen=True)
class Base:
    """A number base from 2 to 36, together with the way it was written."""

    value: int = 10
    style: BaseStyle = BaseStyle.PLAIN

    def __post_init__(self) -> None:
        if not 2 <= self.value <= 36:
            raise ValueError(f"base {self.value} is out of range")

    @classmethod
    def default(cls) -> Base:
        return cls()

    @classmethod
    def from_zero_based_prefix_char(cls, ch: str) -> Base:
        """Return the base for the letter after a leading ``0``: x, o or b."""
        bases = {"x": 16, "o": 8, "b": 2}
        if ch not in bases:
            raise FendError("invalid_base_prefix")
        return cls(bases[ch], BaseStyle.ZERO_PREFIX)

    @classmethod
    def from_custom_base(cls, base: int) -> Base:
        """Return the base written as ``<base>#``."""
        if base < 2:
            raise FendError("base_too_small")
        if base > 36:
            raise FendError("base_too_large")
        return cls(base, BaseStyle.CUSTOM)


@dataclass(frozen=True)
class Dice:
    """A roll of ``count`` dice with ``faces`` faces each."""

    count: int
    faces: int


@dataclass(frozen=True)
class LexedNumber:
    """A number literal read from the input, exact or a dice roll."""

    value: Fraction | Dice
    base: Base

    @property
    def is_dice(self) -> bool:
        return isinstance(self.value, Dice)


def _parse_char(text: str) -> tuple[str, str]:
    if not text:
        raise FendError("expected_a_character")
    return text[0], text[1:]


def _digit_value(ch: str, base: Base) -> int | None:
    if ch in _ASCII_DIGITS:
        digit = ord(ch) - ord("0")
    elif ch.isascii() and ch.isalpha():
        digit = ord(ch.lower()) - ord("a") + 10
    else:
        return None
    return digit if digit < base.value else None


def _parse_digit(text: str, base: Base) -> tuple[int, str]:
    ch, rest = _parse_char(text)
    digit = _digit_value(ch, base)
    if digit is None:
        raise FendError("expected_a_digit", ch)
    return digit, rest


def _is_digit_next(text: str, base: Base) -> bool:
    return bool(text) and _digit_value(text[0], base) is not None


def _expect_char(text: str, ch: str) -> str:
    found, rest = _parse_char(text)
    if found != ch:
        raise FendError("expected_char", ch, found)
    return rest


def parse_integer(
    text: str,
    allow_digit_separator: bool,
    base: Base,
    process_digit: Callable[[int], Any],
) -> str:
    """Read a plain unsigned integer, passing each digit on; return the rest of the text."""
    digit, rest = _parse_digit(text, base)
    process_digit(digit)
    while True:
        separated = bool(rest) and rest[0] in _DIGIT_SEPARATORS
        if separated:
            rest = rest[1:]
            if not allow_digit_separator:
                raise FendError("digit_separators_not_allowed")
        try:
            digit, after = _parse_digit(rest, base)
        except FendError:
            if separated:
                raise FendError("digit_separators_only_between_digits") from None
            return rest
        process_digit(digit)
        rest = after


def parse_base_prefix(text: str) -> tuple[Base, str]:
    """Read ``0x``, ``0o``, ``0b`` or ``<base>#``; return the base and the rest."""
    if text.startswith("0"):
        ch, rest = _parse_char(text[1:])
        return Base.from_zero_based_prefix_char(ch), rest

    custom_base = 0

    def add_digit(digit: int) -> None:
        nonlocal custom_base
        if custom_base > 3:
            raise FendError("base_too_large")
        custom_base = 10 * custom_base + digit
        if custom_base > 36:
            raise FendError("base_too_large")

    rest = parse_integer(text, False, Base.default(), add_digit)
    if custom_base < 2:
        raise FendError("base_too_small")
    rest = _expect_char(rest, "#")
    return Base.from_custom_base(custom_base), rest


def _parse_recurring_digits(
    text: str,
    number: Fraction,
    num_nonrec_digits: int,
    base: Base,
    interrupt: Interrupt,
) -> tuple[Fraction, str]:
    if not text.startswith("("):
        return number, text
    inner = text[1:]
    if not _is_digit_next(inner, base):
        return number, text
    numerator = 0
    denominator = 1

    def add_digit(digit: int) -> None:
        nonlocal numerator, denominator
        test_int(interrupt)
        numerator = numerator * base.value + digit
        denominator *= base.value

    rest = parse_integer(inner, True, base, add_digit)
    denominator = (denominator - 1) * base.value**num_nonrec_digits
    number += Fraction(numerator, denominator)
    rest = _expect_char(rest, ")")
    return number, rest


def _parse_dice(
    text: str, count: int, base: Base, interrupt: Interrupt
) -> tuple[Dice, str]:
    faces = 0

    def add_digit(digit: int) -> None:
        nonlocal faces
        test_int(interrupt)
        faces = faces * base.value + digit
        if faces > _U32_MAX:
            raise FendError("invalid_dice_syntax")

    rest = parse_integer(text, False, base, add_digit)
    if count == 0 or faces == 0:
        raise FendError("invalid_dice_syntax")
    return Dice(count, faces), rest


def _parse_exponent(
    text: str, base: Base, interrupt: Interrupt
) -> tuple[int, str] | None:
    if not text or text[0] not in "eE":
        return None
    rest = text[1:]
    if not rest or not (rest[0] in _ASCII_DIGITS or rest[0] in "+-"):
        return None
    negative = rest.startswith("-")
    if rest[0] in "+-":
        rest = rest[1:]
    exponent = 0

    def add_digit(digit: int) -> None:
        nonlocal exponent
        test_int(interrupt)
        exponent = exponent * base.value + digit

    rest = parse_integer(rest, True, base, add_digit)
    if exponent > _MAX_EXPONENT:
        raise FendError("exponent_too_large")
    return (-exponent if negative else exponent), rest


def _parse_basic_number(
    text: str, base: Base, interrupt: Interrupt
) -> tuple[LexedNumber, str]:
    small_base = base.value <= 10
    dice_without_count = (
        small_base and len(text) > 1 and text[0] == "d" and text[1] in _ASCII_DIGITS
    )

    result = Fraction(0)
    is_integer = True

    def add_integer_digit(digit: int) -> None:
        nonlocal result
        test_int(interrupt)
        result = result * base.value + digit

    if not text.startswith(".") and not dice_without_count:
        text = parse_integer(text, True, base, add_integer_digit)

    if text.startswith("."):
        is_integer = False
        rest = text[1:]
        numerator = 0
        denominator = 1
        num_nonrec_digits = 0

        def add_fraction_digit(digit: int) -> None:
            nonlocal numerator, denominator, num_nonrec_digits
            test_int(interrupt)
            numerator = numerator * base.value + digit
            denominator *= base.value
            num_nonrec_digits += 1

        if not rest.startswith("("):
            rest = parse_integer(rest, True, base, add_fraction_digit)
        text = rest
        result += Fraction(numerator, denominator)
        result, text = _parse_recurring_digits(
            text, result, num_nonrec_digits, base, interrupt
        )

    if is_integer and small_base and text.startswith("d") and _is_digit_next(text[1:], base):
        if dice_without_count:
            count = 1
        else:
            count = int(result)
            if count > _U32_MAX:
                raise FendError("invalid_dice_syntax")
        dice, rest = _parse_dice(text[1:], count, base, interrupt)
        return LexedNumber(dice, base), rest

    if small_base:
        parsed = _parse_exponent(text, base, interrupt)
        if parsed is not None:
            exponent, text = parsed
            result *= Fraction(base.value) ** exponent

    return LexedNumber(result, base), text


def parse_number(
    text: str, interrupt: Interrupt | None = None
) -> tuple[LexedNumber, str]:
    """Read a number literal from the start of ``text``; return it and the rest."""
    interrupt = interrupt if interrupt is not None else Never()
    try:
        base, rest = parse_base_prefix(text)
    except FendError:
        base, rest = Base.default(), text
    return _parse_basic_number(rest, base, interrupt)