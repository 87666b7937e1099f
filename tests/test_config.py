from __future__ import annotations

import pytest

from homelink.config import (
    ControlConfig,
    Settings,
    StoreConfig,
    get_settings,
    load_settings,
    resolve_config_path,
    write_settings,
)


def test_settings_round_trip(tmp_path):
    settings = Settings(
        store=StoreConfig(
            backend="rest",
            url="https://home.example.test",
            auth_token="secret",
            path=str(tmp_path / "store.json"),
        ),
        control=ControlConfig(sprinkler_port=8080, timeout=1.5),
    )
    path = tmp_path / "nested" / "config.toml"

    write_settings(settings, path)

    assert load_settings(path) == settings


def test_defaults():
    settings = Settings()

    assert settings.store.backend == "file"
    assert settings.store.devices_root == "devices"
    assert settings.store.users_root == "users"
    assert settings.control.sprinkler_port == 3030
    assert settings.control.ups_status_path == "/ups_status.php"


def test_invalid_toml_is_rejected(tmp_path):
    path = tmp_path / "config.toml"
    path.write_text("[store\n")

    with pytest.raises(ValueError, match="Invalid TOML"):
        load_settings(path)


def test_rest_backend_requires_url(tmp_path):
    path = tmp_path / "config.toml"
    path.write_text('[store]\nbackend = "rest"\n')

    with pytest.raises(ValueError, match="store.url"):
        load_settings(path)


def test_unknown_keys_are_rejected(tmp_path):
    path = tmp_path / "config.toml"
    path.write_text("[control]\nretries = 3\n")

    with pytest.raises(ValueError, match="Invalid config file"):
        load_settings(path)


def test_env_var_pointing_to_missing_file(tmp_path, monkeypatch):
    monkeypatch.setenv("HOMELINK_CONFIG", str(tmp_path / "missing.toml"))

    with pytest.raises(FileNotFoundError):
        get_settings()

    path, exists = resolve_config_path(allow_missing=True)
    assert path == tmp_path / "missing.toml"
    assert exists is False


def test_missing_default_config_gives_defaults(tmp_path, monkeypatch):
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))

    settings = get_settings()

    assert settings == Settings()
    assert settings.store.path == str(tmp_path / "data" / "homelink" / "store.json")
