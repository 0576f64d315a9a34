import pytest

from dicedist.config import load_settings


def test_defaults() -> None:
    settings = load_settings()

    assert settings["max_combinations"] == 10_000_000
    assert settings["log_level"] == "WARNING"


def test_user_settings_override_defaults(tmp_path) -> None:
    path = tmp_path / "settings.yaml"
    path.write_text("max_combinations: null\nlog_level: DEBUG\n")

    settings = load_settings(str(path))

    assert settings["max_combinations"] is None
    assert settings["log_level"] == "DEBUG"


def test_empty_settings_file(tmp_path) -> None:
    path = tmp_path / "settings.yaml"
    path.write_text("")

    assert load_settings(str(path)) == load_settings()


def test_unknown_setting(tmp_path) -> None:
    path = tmp_path / "settings.yaml"
    path.write_text("token: abc\n")

    with pytest.raises(ValueError, match="token"):
        load_settings(str(path))
