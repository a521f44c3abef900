"""Configuration loading: YAML file, then environment, then flags."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml

from otterboard.errors import ConfigError

DEFAULTS: dict[str, Any] = {
    "api-url": "http://localhost:7071/api",
    "app-url": "http://localhost:5173",
    "token": "",
    "sync-interval": 5.0,
    "log-file": "",
}

ENV_PREFIX = "OTTERBOARD_"


def _python_key(key: str) -> str:
    """Convert file-style key (hyphenated) to Python-style (underscored)."""
    return key.replace("-", "_")


def _env_key(key: str) -> str:
    """Convert file-style key to its environment variable name."""
    return ENV_PREFIX + _python_key(key).upper()


def _coerce(key: str, raw: Any) -> Any:
    """Type-coerce a raw value using the type of its default."""
    default = DEFAULTS.get(key)
    if default is None or raw is None:
        return raw
    try:
        if isinstance(default, bool):
            if isinstance(raw, bool):
                return raw
            return str(raw).lower() in ("true", "yes", "1")
        if isinstance(default, int):
            return int(raw)
        if isinstance(default, float):
            return float(raw)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"invalid value for {key}: {raw!r}") from exc
    return str(raw)


def default_config_path() -> Path:
    """Return $XDG_CONFIG_HOME/otterboard/config.yaml."""
    base = os.environ.get("XDG_CONFIG_HOME") or Path.home() / ".config"
    return Path(base) / "otterboard" / "config.yaml"


def read_config(path: str | Path | None = None, environ: dict[str, str] | None = None) -> dict[str, Any]:
    """Read config into a {python_key: value} dict.

    Layers, lowest first: DEFAULTS, the YAML file (missing file is fine),
    then OTTERBOARD_* environment variables. Unknown file keys are kept
    as-is so callers can pass extra settings through.
    """
    environ = os.environ if environ is None else environ
    config_path = Path(path) if path is not None else default_config_path()

    raw: dict[str, Any] = {}
    if config_path.exists():
        try:
            loaded = yaml.safe_load(config_path.read_text()) or {}
        except (OSError, yaml.YAMLError) as exc:
            raise ConfigError(f"cannot read {config_path}: {exc}") from exc
        if not isinstance(loaded, dict):
            raise ConfigError(f"{config_path} must contain a mapping")
        raw.update(loaded)

    result: dict[str, Any] = {}
    for key, default in DEFAULTS.items():
        value = raw.pop(key, default)
        env_value = environ.get(_env_key(key))
        if env_value is not None:
            value = env_value
        result[_python_key(key)] = _coerce(key, value)
    for key, value in raw.items():
        result[_python_key(key)] = value

    if result["sync_interval"] <= 0:
        raise ConfigError("sync-interval must be positive")
    return result
