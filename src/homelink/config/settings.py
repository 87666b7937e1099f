from __future__ import annotations

import json
import os
import tomllib
from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, ValidationError, model_validator

from .paths import default_config_path, default_store_path, expand_path

CONFIG_ENV_VAR = "HOMELINK_CONFIG"

StoreBackend = Literal["file", "rest"]


class StoreConfig(BaseModel):
    """Where device records and per-user device lists live."""

    model_config = {"frozen": True, "extra": "forbid"}

    backend: StoreBackend = "file"
    path: str = Field(default_factory=lambda: str(default_store_path()))
    url: str | None = None
    auth_token: str | None = None
    devices_root: str = "devices"
    users_root: str = "users"
    timeout: float = Field(default=10.0, gt=0)

    @model_validator(mode="after")
    def _rest_needs_url(self) -> StoreConfig:
        if self.backend == "rest" and not self.url:
            raise ValueError("store.url is required for the rest backend")
        return self


class ControlConfig(BaseModel):
    """Timeouts and endpoints of the per-device HTTP control planes."""

    model_config = {"frozen": True, "extra": "forbid"}

    timeout: float = Field(default=3.0, gt=0)
    probe_timeout: float = Field(default=1.0, gt=0)
    sprinkler_port: int = Field(default=3030, ge=1, le=65535)
    tv_status_path: str = "/status"
    ups_status_path: str = "/ups_status.php"


class Settings(BaseModel):
    model_config = {"frozen": True, "extra": "forbid"}

    store: StoreConfig = Field(default_factory=StoreConfig)
    control: ControlConfig = Field(default_factory=ControlConfig)


def resolve_config_path(allow_missing: bool = False) -> tuple[Path, bool]:
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        path = expand_path(env_path)
        if not allow_missing and not path.exists():
            raise FileNotFoundError(f"{CONFIG_ENV_VAR} points to missing file: {path}")
        return path, path.exists()

    path = default_config_path()
    return path, path.exists()


def load_settings(path: Path) -> Settings:
    try:
        with path.open("rb") as handle:
            data = tomllib.load(handle)
    except tomllib.TOMLDecodeError as exc:
        raise ValueError(f"Invalid TOML in config file: {path}\n{exc}") from exc

    try:
        return Settings.model_validate(data or {})
    except ValidationError as exc:
        raise ValueError(f"Invalid config file: {path}\n{exc}") from exc


@lru_cache
def get_settings() -> Settings:
    path, exists = resolve_config_path(allow_missing=False)
    if exists:
        return load_settings(path)
    return Settings()


def store_path_from_settings(settings: Settings) -> Path:
    return expand_path(settings.store.path)


def _toml_string(value: str) -> str:
    return json.dumps(value)


def render_settings_toml(settings: Settings) -> str:
    store = settings.store
    control = settings.control
    lines = [
        "# homelink configuration",
        "",
        "[store]",
        f"backend = {_toml_string(store.backend)}",
        f"path = {_toml_string(store.path)}",
    ]
    if store.url:
        lines.append(f"url = {_toml_string(store.url)}")
    if store.auth_token:
        lines.append(f"auth_token = {_toml_string(store.auth_token)}")
    lines.extend(
        [
            f"devices_root = {_toml_string(store.devices_root)}",
            f"users_root = {_toml_string(store.users_root)}",
            f"timeout = {store.timeout}",
            "",
            "[control]",
            f"timeout = {control.timeout}",
            f"probe_timeout = {control.probe_timeout}",
            f"sprinkler_port = {control.sprinkler_port}",
            f"tv_status_path = {_toml_string(control.tv_status_path)}",
            f"ups_status_path = {_toml_string(control.ups_status_path)}",
            "",
        ]
    )
    return "\n".join(lines)


def write_settings(settings: Settings, path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(render_settings_toml(settings))
