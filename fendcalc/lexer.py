"""Splitting expression text into tokens."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any

from .errors import FendError, Interrupt, Never
from .ident import Ident
from .numlex import parse_number

_ALLOWED_CHARS = frozenset(
    ",&_⅛¼⅜½⅝¾⅞⅙⅓⅔⅚⅕⅖⅗⅘°$℃℉℧℈℥℔¢£¥€₩₪₤₨฿₡₣₦₧₫₭₮₯₱﷼﹩￠￡￥￦㍱㍲㍳㍴㍶"
    "㎀㎁㎂㎃㎄㎅㎆㎇㎈㎉㎊㎋㎌㎍㎎㎏㎐㎑㎒㎓㎔㎕㎖㎗㎘㎙㎚㎛㎜㎝㎞㎟㎠㎡㎢㎣㎤㎥㎦㎧㎨㎩"
    "㎪㎫㎬㎭㎮㎯㎰㎱㎲㎳㎴㎵㎶㎷㎸㎹㎺㎻㎼㎽㎾㎿㏀㏁㏃㏄㏅㏆㏈㏉㏊㏌㏏㏐㏓㏔㏕㏖㏗㏙㏛㏜㏝"
)
_ONLY_VALID_BY_THEMSELVES = frozenset("%‰‱′″’”π")
_SPLIT_ON_SUBSEQUENT_DIGIT = frozenset("$£")
_ALWAYS_INVALID = frozenset("λ")
_VALID_AFTER_FIRST = frozenset(".0123456789'\"")
_ASCII_DIGITS = "0123456789"
_ASCII_HEX_DIGITS = "0123456789abcdefABCDEF"
_ASCII_WHITESPACE = " \t\n\r\x0c"
_MAX_CODEPOINT = 0x10FFFF

_SIMPLE_ESCAPES = {
    "\\": "\\",
    '"': '"',
    "'": "'",
    "a": "\x07",
    "b": "\x08",
    "e": "\x1b",
    "f": "\x0c",
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "v": "\x0b",
}


class Symbol(Enum):
    """An operator or punctuation symbol; the value is how it is displayed."""

    OPEN_PARENS = "("
    CLOSE_PARENS = ")"
    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"
    MOD = "mod"
    POW = "^"
    UNIT_CONVERSION = "to"
    FACTORIAL = "!"
    FN = ":"
    BACKSLASH = '"'
    DOT = "."
    OF = "of"
    SHIFT_LEFT = "<<"
    SHIFT_RIGHT = ">>"
    SEMICOLON = ";"
    EQUALS = "="

    def __str__(self) -> str:
        return self.value


class TokenKind(Enum):
    """The kind of a token."""

    NUM = auto()
    IDENT = auto()
    SYMBOL = auto()
    WHITESPACE = auto()
    STRING_LITERAL = auto()


@dataclass(frozen=True)
class Token:
    """A token: a number, identifier, symbol, whitespace marker or string literal."""

    kind: TokenKind
    value: Any = None


def _symbol(symbol: Symbol) -> Token:
    return Token(TokenKind.SYMBOL, symbol)


def _is_whitespace(ch: str) -> bool:
    return ch.isspace() and ch not in "\x1c\x1d\x1e\x1f"


def is_valid_in_ident(ch: str, prev: str | None) -> bool:
    """Return True if ``ch`` may continue an identifier whose last char is ``prev``."""
    if ch in _ALWAYS_INVALID:
        return False
    if ch in _ONLY_VALID_BY_THEMSELVES:
        return prev is None
    if prev is not None and prev in _ONLY_VALID_BY_THEMSELVES:
        return False
    if ch.isalpha() or ch in _ALLOWED_CHARS:
        return True
    return (
        prev is not None
        and prev not in _SPLIT_ON_SUBSEQUENT_DIGIT
        and ch in _VALID_AFTER_FIRST
    )


_KEYWORDS = {
    "to": Symbol.UNIT_CONVERSION,
    "as": Symbol.UNIT_CONVERSION,
    "in": Symbol.UNIT_CONVERSION,
    "per": Symbol.DIV,
    "of": Symbol.OF,
    "mod": Symbol.MOD,
}


def parse_ident(text: str, allow_dots: bool) -> tuple[Token, str]:
    """Read an identifier or keyword; return its token and the rest of the text."""
    if not text:
        raise FendError("expected_a_character")
    first = text[0]
    if not is_valid_in_ident(first, None) or (first == "." and not allow_dots):
        raise FendError("invalid_char_at_beginning_of_ident", first)
    end = 1
    prev = first
    for ch in text[1:]:
        if not is_valid_in_ident(ch, prev) or (ch == "." and not allow_dots):
            break
        end += 1
        prev = ch
    ident, rest = text[:end], text[end:]
    keyword = _KEYWORDS.get(ident)
    if keyword is not None:
        return _symbol(keyword), rest
    return Token(TokenKind.IDENT, Ident(ident)), rest


def _parse_symbol(ch: str, rest: str) -> tuple[Token, str]:
    def followed_by(next_ch: str) -> bool:
        return rest.startswith(next_ch)

    if ch == "(":
        symbol = Symbol.OPEN_PARENS
    elif ch == ")":
        symbol = Symbol.CLOSE_PARENS
    elif ch == "+":
        symbol = Symbol.ADD
    elif ch == "!":
        symbol = Symbol.FACTORIAL
    elif ch in "-\u2212":
        symbol = Symbol.SUB
    elif ch in "*\u00d7\u2715":
        if followed_by("*"):
            return _symbol(Symbol.POW), rest[1:]
        symbol = Symbol.MUL
    elif ch in "/\u00f7\u2215":
        symbol = Symbol.DIV
    elif ch == "^":
        symbol = Symbol.POW
    elif ch == ":":
        symbol = Symbol.FN
    elif ch == "=":
        if followed_by(">"):
            return _symbol(Symbol.FN), rest[1:]
        symbol = Symbol.EQUALS
    elif ch in "\\\u03bb":
        symbol = Symbol.BACKSLASH
    elif ch == ".":
        symbol = Symbol.DOT
    elif ch == "<":
        if followed_by("<"):
            return _symbol(Symbol.SHIFT_LEFT), rest[1:]
        raise FendError("unexpected_char", ch)
    elif ch == ">":
        if followed_by(">"):
            return _symbol(Symbol.SHIFT_RIGHT), rest[1:]
        raise FendError("unexpected_char", ch)
    elif ch == ";":
        symbol = Symbol.SEMICOLON
    else:
        raise FendError("unexpected_char", ch)
    return _symbol(symbol), rest


def _next_char(chars: Iterator[tuple[int, str]]) -> str:
    try:
        return next(chars)[1]
    except StopIteration:
        raise FendError("unterminated_string_literal") from None


def _parse_unicode_escape(chars: Iterator[tuple[int, str]]) -> str:
    if _next_char(chars) != "{":
        raise FendError("invalid_unicode_escape_sequence")
    value = 0
    digits = 0
    while True:
        ch = _next_char(chars)
        if ch in _ASCII_HEX_DIGITS:
            digits += 1
            value = value * 16 + int(ch, 16)
            if value > _MAX_CODEPOINT:
                raise FendError("invalid_unicode_escape_sequence")
        elif ch == "}":
            break
        else:
            raise FendError("invalid_unicode_escape_sequence")
    if digits == 0 or 0xD800 <= value <= 0xDFFF:
        raise FendError("invalid_unicode_escape_sequence")
    return chr(value)


def _parse_escape(chars: Iterator[tuple[int, str]]) -> str | None:
    """Read what follows a backslash; None means 'skip following whitespace'."""
    escape = _next_char(chars)
    simple = _SIMPLE_ESCAPES.get(escape)
    if simple is not None:
        return simple
    if escape == "x":
        high = _next_char(chars)
        low = _next_char(chars)
        if high not in "01234567" or low not in _ASCII_HEX_DIGITS:
            raise FendError("backslash_x_out_of_range")
        return chr(int(high, 8) * 16 + int(low, 16))
    if escape == "u":
        return _parse_unicode_escape(chars)
    if escape == "z":
        return None
    if escape == "^":
        code = ord(_next_char(chars)) & 0xFF
        if not 63 <= code <= 95:
            raise FendError("expected_a_letter_or_code")
        return "\x7f" if code == ord("?") else chr(code - 64)
    raise FendError("unknown_backslash_escape_sequence", escape)


def parse_string_literal(text: str, terminator: str) -> tuple[Token, str]:
    """Read a quoted string with escapes; ``text`` starts at the opening quote."""
    body = text[1:]
    chars = iter(enumerate(body))
    pieces: list[str] = []
    skip_whitespace = False
    for idx, ch in chars:
        if skip_whitespace:
            if ch in _ASCII_WHITESPACE:
                continue
            skip_whitespace = False
        if ch == terminator:
            return Token(TokenKind.STRING_LITERAL, "".join(pieces)), body[idx + 1:]
        if ch == "\\":
            escaped = _parse_escape(chars)
            if escaped is None:
                skip_whitespace = True
            else:
                pieces.append(escaped)
        else:
            pieces.append(ch)
    raise FendError("unterminated_string_literal")


def parse_quote_unit(text: str) -> tuple[Token, str]:
    """Read a unit that starts with ``'`` or ``"``, such as feet or inches."""
    end = 1
    if len(text) > 1 and text[1].isalpha():
        prev = text[1]
        end = 2
        for ch in text[2:]:
            if not is_valid_in_ident(ch, prev):
                break
            end += 1
            prev = ch
    return Token(TokenKind.IDENT, Ident(text[:end])), text[end:]


class Lexer:
    """An iterator over the tokens of an expression."""

    def __init__(self, text: str, interrupt: Interrupt | None = None) -> None:
        self._input = text
        # 0 normally, 1 right after a backslash, 2 after the identifier following it
        self._after_backslash_state = 0
        self._after_number_or_to = False
        self._interrupt = interrupt if interrupt is not None else Never()

    def __iter__(self) -> Lexer:
        return self

    def __next__(self) -> Token:
        try:
            token = self._next_token()
        except FendError:
            self._after_number_or_to = False
            self._after_backslash_state = 0
            raise
        if token is None:
            self._after_number_or_to = False
            self._after_backslash_state = 0
            raise StopIteration
        self._after_number_or_to = token.kind is TokenKind.NUM or token == _symbol(
            Symbol.UNIT_CONVERSION
        )
        if token == _symbol(Symbol.BACKSLASH):
            self._after_backslash_state = 1
        elif self._after_backslash_state == 1 and token.kind is TokenKind.IDENT:
            self._after_backslash_state = 2
        else:
            self._after_backslash_state = 0
        return token

    def _skip_whitespace_and_comments(self) -> bool:
        """Advance past whitespace and comments; return False at the end of input."""
        while self._input:
            ch = self._input[0]
            if self._input.startswith("# "):
                rest = self._input[2:]
                newline = rest.find("\n")
                if newline < 0:
                    self._input = ""
                    return False
                self._input = rest[newline:]
            if not _is_whitespace(ch):
                break
            self._input = self._input[1:]
        return bool(self._input)

    def _next_token(self) -> Token | None:
        if not self._skip_whitespace_and_comments():
            return None
        text = self._input
        ch = text[0]
        following = text[1] if len(text) > 1 else None
        if _is_whitespace(ch):
            return Token(TokenKind.WHITESPACE)
        if (
            ch in _ASCII_DIGITS
            or (ch == "." and self._after_backslash_state == 0)
            or (ch == "d" and following is not None and following in _ASCII_DIGITS)
        ):
            number, self._input = parse_number(text, self._interrupt)
            return Token(TokenKind.NUM, number)
        if ch in "'\"":
            if self._after_number_or_to:
                token, self._input = parse_quote_unit(text)
            else:
                token, self._input = parse_string_literal(text, ch)
            return token
        if text.startswith('#"'):
            rest = text[2:]
            end = rest.find('"#')
            if end < 0:
                raise FendError("unterminated_string_literal")
            self._input = rest[end + 2:]
            return Token(TokenKind.STRING_LITERAL, rest[:end])
        if is_valid_in_ident(ch, None):
            token, self._input = parse_ident(text, self._after_backslash_state != 1)
            return token
        token, self._input = _parse_symbol(ch, text[1:])
        return token


def lex(text: str, interrupt: Interrupt | None = None) -> Lexer:
    """Return an iterator over the tokens of ``text``."""
    return Lexer(text, interrupt)