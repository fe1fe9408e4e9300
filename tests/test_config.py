import pytest

from fendcalc import config as cfg
from fendcalc.colors import BaseColor, Color
from fendcalc.config import Config, ConfigError, UnknownSettings


@pytest.fixture(autouse=True)
def no_color(monkeypatch):
    monkeypatch.setenv("NO_COLOR", "1")
    monkeypatch.delenv("CLICOLOR_FORCE", raising=False)
    monkeypatch.delenv("CLICOLOR", raising=False)


def test_defaults():
    config = Config()
    assert config.prompt == "> "
    assert config.max_history_size == 1000
    assert config.enable_colors is False
    assert config.unknown_settings is UnknownSettings.WARN


def test_empty_toml_is_default():
    assert Config.from_toml("") == Config()


def test_use_colors_if_auto(monkeypatch):
    assert cfg.use_colors_if_auto() is False
    monkeypatch.delenv("NO_COLOR")
    monkeypatch.setenv("CLICOLOR_FORCE", "1")
    assert cfg.use_colors_if_auto() is True
    monkeypatch.delenv("CLICOLOR_FORCE")
    monkeypatch.setenv("CLICOLOR", "0")
    assert cfg.use_colors_if_auto() is False


def test_basic_settings():
    config = Config.from_toml(
        'prompt = "$ "\ncoulomb-and-farad = true\nmax-history-size = 5\n'
    )
    assert config.prompt == "$ "
    assert config.coulomb_and_farad is True
    assert config.max_history_size == 5


@pytest.mark.parametrize(
    "value, expected",
    [('"never"', False), ("false", False), ('"always"', True), ('"auto"', False), ("true", False)],
)
def test_enable_colors_values(value, expected):
    assert Config.from_toml(f"enable-colors = {value}").enable_colors is expected
    assert Config.from_toml(f"color = {value}").enable_colors is expected


def test_unknown_enable_colors_value_prints_error(capsys):
    config = Config.from_toml('enable-colors = "sometimes"')
    assert config.enable_colors is False
    assert "unknown config setting for `enable-colors`" in capsys.readouterr().err


def test_color_alias_counts_as_duplicate():
    with pytest.raises(ConfigError):
        Config.from_toml('color = "always"\nenable-colors = "never"')


def test_invalid_unknown_settings():
    with pytest.raises(ConfigError):
        Config.from_toml('unknown-settings = "shout"')


def test_invalid_types_raise():
    with pytest.raises(ConfigError):
        Config.from_toml("prompt = 3")
    with pytest.raises(ConfigError):
        Config.from_toml("max-history-size = -1")
    with pytest.raises(ConfigError):
        Config.from_toml("colors.number.bold = 1")


def test_invalid_toml_raises():
    with pytest.raises(ConfigError):
        Config.from_toml("prompt = ")


def test_colors_section():
    config = Config.from_toml('[colors.number]\nforeground = "red"\n')
    assert config.colors.get_style("number") == Color.plain(BaseColor("red"))


def test_unknown_keys_warn(capsys):
    config = Config.from_toml("newer-setting = 1")
    assert config.unknown_keys == ["newer-setting"]
    cfg.print_warnings_about_unknown_keys(config)
    assert "`newer-setting`" in capsys.readouterr().err


def test_unknown_keys_ignored(capsys):
    config = Config.from_toml('unknown-settings = "ignore"\nnewer-setting = 1')
    assert config.unknown_settings is UnknownSettings.IGNORE
    cfg.print_warnings_about_unknown_keys(config)
    assert capsys.readouterr().err == ""


def test_read_from_file(monkeypatch, tmp_path):
    (tmp_path / "config.toml").write_text('prompt = "calc> "\n', encoding="utf-8")
    monkeypatch.setenv("FEND_CONFIG_DIR", str(tmp_path))
    assert cfg.read().prompt == "calc> "


def test_read_missing_file_gives_default(monkeypatch, tmp_path):
    monkeypatch.setenv("FEND_CONFIG_DIR", str(tmp_path))
    assert cfg.read() == Config()


def test_read_invalid_file_gives_default(monkeypatch, tmp_path, capsys):
    (tmp_path / "config.toml").write_text("prompt = [", encoding="utf-8")
    monkeypatch.setenv("FEND_CONFIG_DIR", str(tmp_path))
    assert cfg.read() == Config()
    err = capsys.readouterr().err
    assert "Error: invalid config file in" in err
    assert "fend --default-config" in err