from __future__ import annotations

from .paths import (
    APP_NAME,
    CONFIG_FILENAME,
    default_config_path,
    default_store_path,
    expand_path,
)
from .settings import (
    CONFIG_ENV_VAR,
    ControlConfig,
    Settings,
    StoreConfig,
    get_settings,
    load_settings,
    render_settings_toml,
    resolve_config_path,
    store_path_from_settings,
    write_settings,
)

__all__ = [
    "APP_NAME",
    "CONFIG_ENV_VAR",
    "CONFIG_FILENAME",
    "ControlConfig",
    "Settings",
    "StoreConfig",
    "default_config_path",
    "default_store_path",
    "expand_path",
    "get_settings",
    "load_settings",
    "render_settings_toml",
    "resolve_config_path",
    "store_path_from_settings",
    "write_settings",
]
