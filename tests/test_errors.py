import pytest

from fendcalc.errors import (
    FendError,
    Interrupt,
    Never,
    Range,
    RangeBound,
    out_of_range,
    test_int as check_interrupt,
)


class _Always(Interrupt):
    def should_interrupt(self):
        return True


def test_simple_message():
    assert str(FendError("divide_by_zero")) == "division by zero"


def test_message_with_details():
    assert str(FendError("expected_char", "a", "b")) == "expected 'a', found 'b'"


def test_incompatible_conversion_message():
    err = FendError("incompatible_conversion", "kg", "m", "kilogram", "meter")
    assert str(err) == (
        "cannot convert from kg to m: units 'kilogram' and 'meter' are incompatible"
    )


def test_escaped_braces_in_message():
    assert str(FendError("invalid_unicode_escape_sequence")) == (
        "invalid Unicode escape sequence, expected e.g. \\u{7e}"
    )


def test_unknown_kind_rejected():
    with pytest.raises(ValueError):
        FendError("no_such_error")


def test_wrong_detail_count_rejected():
    with pytest.raises(TypeError):
        FendError("divide_by_zero", "extra")
    with pytest.raises(TypeError):
        FendError("unexpected_char")


def test_kind_and_details_kept():
    err = FendError("could_not_find_key", "x")
    assert err.kind == "could_not_find_key"
    assert err.details == ("x",)


def test_never_does_not_interrupt():
    assert Never().should_interrupt() is False


def test_interrupt_raises():
    with pytest.raises(FendError) as info:
        check_interrupt(_Always())
    assert info.value.kind == "interrupted"
    assert str(info.value) == "interrupted"


def test_interrupt_is_abstract():
    with pytest.raises(TypeError):
        Interrupt()


def test_zero_or_greater_range():
    text = str(Range.zero_or_greater())
    assert text == "[0, \u221e)"


def test_open_range():
    assert str(Range.open(1, 5)) == "(1, 5)"


def test_unbounded_start_and_closed_end():
    text = str(Range(None, RangeBound(3, closed=True)))
    assert text.startswith("(-\u221e, ")
    assert text.endswith("3]")


def test_out_of_range_error():
    rng = Range.open(1, 5)
    err = out_of_range(7, rng)
    assert err.kind == "out_of_range"
    assert str(err) == f"7 must lie in the interval {rng}"