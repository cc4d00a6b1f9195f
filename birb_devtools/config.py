"""
config.py

Responsibility: Resolve run settings from CLI flags, environment, and an optional YAML file.

Precedence (highest first): CLI flag > environment > config file > defaults.
Relative paths are resolved against the working directory.

Recognized config keys:
- input: path to the TypeDoc JSON (default: docs.json)
- output: output directory for the Markdown site (default: docs)
- logs: log directory (default: logs)
- log_level: console log level (default: INFO)
- token: secret redacted from log output (or set env BIRB_TOKEN)
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

DEFAULT_CONFIG_NAME = "birb-devtools.yml"
TOKEN_ENV = "BIRB_TOKEN"

_KNOWN_KEYS = ("input", "output", "logs", "log_level", "token")


class ConfigError(ValueError):
    pass


@dataclass(frozen=True)
class Settings:
    input: Path
    output: Path
    logs: Path | None
    log_level: str = "INFO"
    token: str | None = None


def load_config(path: str | Path | None = None, *, cwd: str | Path | None = None) -> dict[str, Any]:
    """
    Load the YAML config file.

    Without an explicit path, `birb-devtools.yml` in `cwd` is used if it exists.
    An explicit path that does not exist is an error.
    """
    base = Path(cwd) if cwd is not None else Path.cwd()
    if path is None:
        p = base / DEFAULT_CONFIG_NAME
        if not p.exists():
            return {}
    else:
        p = base / Path(path)
        if not p.exists():
            raise ConfigError(f"Config file does not exist: {p}")

    try:
        data = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {p}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError("Config file must be a mapping/object at the top level.")

    unknown = sorted(str(k) for k in data if k not in _KNOWN_KEYS)
    if unknown:
        raise ConfigError(f"Unknown config key(s) in {p}: {', '.join(unknown)}")
    return data


def resolve_settings(
    *,
    overrides: Mapping[str, Any] | None = None,
    config: Mapping[str, Any] | None = None,
    env: Mapping[str, str] | None = None,
    cwd: str | Path | None = None,
) -> Settings:
    base = Path(cwd) if cwd is not None else Path.cwd()
    overrides = {k: v for k, v in (overrides or {}).items() if v is not None}
    config = config or {}
    env = os.environ if env is None else env

    def pick(key: str, default: Any) -> Any:
        if key in overrides:
            return overrides[key]
        value = config.get(key)
        return default if value is None else value

    token = overrides.get("token") or env.get(TOKEN_ENV) or config.get("token") or None

    logs = pick("logs", "logs")
    return Settings(
        input=base / str(pick("input", "docs.json")),
        output=base / str(pick("output", "docs")),
        logs=None if logs is False else base / str(logs),
        log_level=str(pick("log_level", "INFO")).strip().upper(),
        token=str(token) if token else None,
    )
