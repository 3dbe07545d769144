from pathlib import Path

import pytest

from zalgo_codec.config import CodecConfig, ConfigurationError, load_codec_config


def test_load_codec_config_prefers_environment_over_yaml(tmp_path: Path) -> None:
    config_path = tmp_path / "config.yaml"
    config_path.write_text(
        "codec:\n"
        "  strip_carriage_returns: false\n"
        "  tab_width: 8\n"
        "  force: true\n"
        "  log_level: debug\n"
    )

    env_map = {
        "ZALGO_CODEC_TAB_WIDTH": "2",
        "ZALGO_CODEC_LOG_LEVEL": "warning",
    }

    config = load_codec_config(config_path=config_path, env=env_map)

    assert isinstance(config, CodecConfig)
    assert config.tab_width == 2
    assert config.log_level == "WARNING"
    assert config.strip_carriage_returns is False
    assert config.force is True


def test_load_codec_config_reads_default_yaml_when_env_missing(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    config_path = tmp_path / ".zalgo_codec.yaml"
    monkeypatch.setattr("zalgo_codec.config.DEFAULT_CONFIG_PATH", config_path)
    config_path.write_text("codec:\n  tab_width: 0\n  force: yes\n")

    config = load_codec_config(env={})

    assert config.tab_width == 0
    assert config.force is True
    assert config.strip_carriage_returns is True
    assert config.log_level == "INFO"


def test_load_codec_config_defaults_without_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("zalgo_codec.config.DEFAULT_CONFIG_PATH", tmp_path / "missing.yaml")

    assert load_codec_config(env={}) == CodecConfig()


def test_overrides_win_over_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("zalgo_codec.config.DEFAULT_CONFIG_PATH", tmp_path / "missing.yaml")

    config = load_codec_config(
        env={"ZALGO_CODEC_FORCE": "0", "ZALGO_CODEC_STRIP_CR": "off"},
        overrides={"force": True},
    )

    assert config.force is True
    assert config.strip_carriage_returns is False


def test_empty_environment_values_are_ignored(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    config_path = tmp_path / ".zalgo_codec.yaml"
    monkeypatch.setattr("zalgo_codec.config.DEFAULT_CONFIG_PATH", config_path)
    config_path.write_text("codec:\n  tab_width: 8\n")

    config = load_codec_config(env={"ZALGO_CODEC_TAB_WIDTH": "", "ZALGO_CODEC_CONFIG": ""})

    assert config.tab_width == 8


def test_explicit_config_file_must_exist(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError, match="Config file not found"):
        load_codec_config(config_path=tmp_path / "nope.yaml", env={})

    with pytest.raises(ConfigurationError, match="Config file not found"):
        load_codec_config(env={"ZALGO_CODEC_CONFIG": str(tmp_path / "nope.yaml")})


def test_config_path_from_environment(tmp_path: Path) -> None:
    config_path = tmp_path / "custom.yaml"
    config_path.write_text("codec:\n  log_level: error\n")

    config = load_codec_config(env={"ZALGO_CODEC_CONFIG": str(config_path)})

    assert config.log_level == "ERROR"


@pytest.mark.parametrize(
    "contents",
    [
        "codec:\n  tab_width: -1\n",
        "codec:\n  tab_width: wide\n",
        "codec:\n  log_level: loud\n",
        "codec:\n  force: maybe\n",
        "codec:\n  - 1\n  - 2\n",
        "- codec\n",
    ],
)
def test_invalid_values_are_rejected(tmp_path: Path, contents: str) -> None:
    config_path = tmp_path / "config.yaml"
    config_path.write_text(contents)

    with pytest.raises(ConfigurationError):
        load_codec_config(config_path=config_path, env={})


def test_tabs_are_kept_unless_configured() -> None:
    assert CodecConfig().tab_width == 0
