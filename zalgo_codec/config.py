"""Shared configuration loader for the zalgo codec tools."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

import yaml


class ConfigurationError(RuntimeError):
    """Raised when configuration is invalid."""


DEFAULT_CONFIG_PATH = Path.home() / ".zalgo_codec.yaml"

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


@dataclass
class CodecConfig:
    """Settings for reading input files and writing results.

    The default ``tab_width`` of zero keeps tabs as they are, so a file
    containing them is reported as unencodable. A positive width expands each
    tab into that many spaces.
    """

    strip_carriage_returns: bool = True
    tab_width: int = 0
    force: bool = False
    log_level: str = "INFO"


def _load_config_file(path: Path, *, required: bool) -> dict[str, Any]:
    if not path.exists():
        if required:
            raise ConfigurationError(f"Config file not found: {path}")
        return {}

    try:
        loaded = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:  # pragma: no cover - delegated to PyYAML
        raise ConfigurationError(f"Invalid YAML in config file {path}: {exc}") from exc

    if not isinstance(loaded, dict):
        raise ConfigurationError(f"Expected {path} to contain a YAML object with a 'codec' section")
    return loaded


def _coerce_bool(value: Any, *, source: str) -> bool | None:
    if value is None or isinstance(value, bool):
        return value
    if isinstance(value, str):
        normalized = value.strip().lower()
        if normalized in {"1", "true", "yes", "y", "on"}:
            return True
        if normalized in {"0", "false", "no", "n", "off"}:
            return False
    raise ConfigurationError(f"Invalid boolean in {source}: {value}")


def _coerce_tab_width(raw: Any, *, source: str) -> int | None:
    if raw is None:
        return None
    if isinstance(raw, bool):
        raise ConfigurationError(f"Invalid tab width in {source}: {raw}")
    try:
        width = int(raw)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"Invalid tab width in {source}: {raw}") from exc
    if width < 0:
        raise ConfigurationError(f"Tab width in {source} must not be negative: {raw}")
    return width


def _coerce_log_level(raw: Any, *, source: str) -> str | None:
    if raw is None:
        return None
    level = str(raw).strip().upper()
    if level not in _LOG_LEVELS:
        raise ConfigurationError(f"Unknown log level in {source}: {raw}")
    return level


def _first_value(*values: Any, default: Any = None) -> Any:
    for value in values:
        if value is not None:
            return value
    return default


def load_codec_config(
    *,
    config_path: str | Path | None = None,
    env: Mapping[str, str] | None = None,
    overrides: Mapping[str, Any] | None = None,
) -> CodecConfig:
    """Load codec settings from overrides, environment variables and YAML.

    Values are taken from the first of ``overrides``, ``ZALGO_CODEC_*``
    environment variables and the ``codec`` section of the config file that
    provides them. An explicitly requested config file must exist.
    """

    env_map = os.environ if env is None else env
    env_path = env_map.get("ZALGO_CODEC_CONFIG")
    explicit_path = config_path is not None or bool(env_path)
    path = (
        Path(config_path).expanduser()
        if config_path is not None
        else Path(env_path).expanduser()
        if env_path
        else DEFAULT_CONFIG_PATH
    )

    file_config = _load_config_file(path, required=explicit_path)
    codec_section = file_config.get("codec") or {}
    if not isinstance(codec_section, dict):
        raise ConfigurationError(f"Expected 'codec' to be a mapping in {path}")

    override_map = dict(overrides or {})
    file_source = f"{path} codec"

    strip_carriage_returns = _first_value(
        _coerce_bool(override_map.get("strip_carriage_returns"), source="overrides"),
        _coerce_bool(env_map.get("ZALGO_CODEC_STRIP_CR") or None, source="ZALGO_CODEC_STRIP_CR"),
        _coerce_bool(codec_section.get("strip_carriage_returns"), source=file_source),
        default=True,
    )
    tab_width = _first_value(
        _coerce_tab_width(override_map.get("tab_width"), source="overrides"),
        _coerce_tab_width(env_map.get("ZALGO_CODEC_TAB_WIDTH") or None, source="ZALGO_CODEC_TAB_WIDTH"),
        _coerce_tab_width(codec_section.get("tab_width"), source=file_source),
        default=0,
    )
    force = _first_value(
        _coerce_bool(override_map.get("force"), source="overrides"),
        _coerce_bool(env_map.get("ZALGO_CODEC_FORCE") or None, source="ZALGO_CODEC_FORCE"),
        _coerce_bool(codec_section.get("force"), source=file_source),
        default=False,
    )
    log_level = _first_value(
        _coerce_log_level(override_map.get("log_level"), source="overrides"),
        _coerce_log_level(env_map.get("ZALGO_CODEC_LOG_LEVEL") or None, source="ZALGO_CODEC_LOG_LEVEL"),
        _coerce_log_level(codec_section.get("log_level"), source=file_source),
        default=logging.getLevelName(logging.INFO),
    )

    return CodecConfig(
        strip_carriage_returns=strip_carriage_returns,
        tab_width=tab_width,
        force=force,
        log_level=log_level,
    )
