import pytest

from fendcalc.colors import BaseColor, Color, OutputColors
from fendcalc.results import SpanKind


def test_known_color_codes_are_ordered():
    names = ["black", "red", "green", "yellow", "blue", "purple", "cyan", "white"]
    codes = [BaseColor.from_name(n).ansi_code() for n in names]
    assert codes == list(range(codes[0], codes[0] + 8))
    assert BaseColor.from_name("red").ansi_code() == 31


def test_unknown_color_is_white_and_warns(capsys):
    color = BaseColor.from_name("magenta")
    assert not color.is_known
    assert color.ansi_code() == BaseColor.from_name("white").ansi_code()
    color.warn_about_unknown_colors()
    assert "Warning: ignoring unknown color `magenta`" in capsys.readouterr().err


def test_known_color_does_not_warn(capsys):
    BaseColor.from_name("green").warn_about_unknown_colors()
    assert capsys.readouterr().err == ""


def test_color_name_must_be_string():
    with pytest.raises(ValueError):
        BaseColor.from_name(5)


def test_color_from_mapping():
    color = Color.from_mapping({"foreground": "blue", "bold": True, "underline": False})
    assert color == Color.bold_of(BaseColor("blue"))


def test_color_unknown_keys_warn(capsys):
    color = Color.from_mapping({"foreground": "pink", "blink": True})
    assert color.unknown_keys == ("blink",)
    color.print_warnings_about_unknown_keys("number")
    err = capsys.readouterr().err
    assert "`colors.number.blink`" in err
    assert "unknown color `pink`" in err


def test_color_bold_must_be_bool():
    with pytest.raises(ValueError):
        Color.from_mapping({"bold": "yes"})


def test_plain_style_paints_nothing():
    assert Color().paint("42") == "42"


def test_styled_paint_wraps_text():
    painted = Color.bold_of(BaseColor("blue")).paint("x")
    assert painted == "\x1b[1;34mx\x1b[0m"


def test_default_styles():
    colors = OutputColors()
    assert colors.get_style("identifier") == Color.plain(BaseColor("white"))
    assert colors.get_style("keyword") == Color.bold_of(BaseColor("blue"))
    assert colors.get_style("number") == Color()


def test_get_color_by_kind():
    colors = OutputColors.from_mapping({"number": {"foreground": "red"}})
    assert colors.get_color(SpanKind.NUMBER) == Color.plain(BaseColor("red"))
    assert colors.get_color(SpanKind.KEYWORD) == Color.bold_of(BaseColor("blue"))
    assert colors.get_color(SpanKind.WHITESPACE) == colors.get_style("other")
    # built-in functions are looked up under the underscore name
    assert colors.get_color(SpanKind.BUILT_IN_FUNCTION) == Color()


def test_equality_uses_effective_styles():
    explicit = OutputColors.from_mapping({"identifier": {"foreground": "white"}})
    assert explicit == OutputColors()
    assert OutputColors.from_mapping({"date": {"bold": True}}) != OutputColors()


def test_unknown_style_names_warn(capsys):
    colors = OutputColors.from_mapping({"numbers": {"bold": True}})
    colors.print_warnings_about_unknown_keys()
    assert "`colors.numbers`" in capsys.readouterr().err


def test_colors_must_be_mapping():
    with pytest.raises(ValueError):
        OutputColors.from_mapping("red")