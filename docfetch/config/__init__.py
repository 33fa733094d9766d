"""Configuration package exports."""

from .loader import CONFIG_ENV_VAR, load_config, resolve_config_path
from .models import DEFAULT_ENDPOINT_ROOT, DEFAULT_PROXY, FetchConfig

__all__ = [
    "CONFIG_ENV_VAR",
    "DEFAULT_ENDPOINT_ROOT",
    "DEFAULT_PROXY",
    "FetchConfig",
    "load_config",
    "resolve_config_path",
]
