"""Configuration loading helpers for docfetch."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

import yaml

from .models import FetchConfig

CONFIG_EXTENSIONS = (".yaml", ".yml", ".json")
CONFIG_ENV_VAR = "DOCFETCH_CONFIG"


def _read_file(path: Path) -> dict:
    if path.suffix not in CONFIG_EXTENSIONS:
        raise ValueError(f"Unsupported configuration format: {path}")
    text = path.read_text(encoding="utf-8")
    try:
        if path.suffix in (".yaml", ".yml"):
            data = yaml.safe_load(text) or {}
        else:
            data = json.loads(text)
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid YAML in configuration file {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ValueError(f"Configuration file must contain a mapping: {path}")
    return data


def resolve_config_path(path: Path | None = None) -> Path | None:
    """Return the explicit path, or the one named by ``DOCFETCH_CONFIG``."""

    if path is not None:
        return path
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path).expanduser()
    return None


def load_config(path: Path | None = None, **overrides: Any) -> FetchConfig:
    """Build a :class:`FetchConfig` from an optional file plus overrides.

    Overrides whose value is ``None`` are ignored so that unset CLI options
    fall through to the file (or the built-in defaults).
    """

    payload: dict[str, Any] = {}
    config_path = resolve_config_path(path)
    if config_path is not None:
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")
        payload.update(_read_file(config_path))
    payload.update({key: value for key, value in overrides.items() if value is not None})
    return FetchConfig.model_validate(payload)


__all__ = ["CONFIG_ENV_VAR", "CONFIG_EXTENSIONS", "load_config", "resolve_config_path"]
