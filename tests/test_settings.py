"""Tests for core.settings and core.logging_config."""

import logging
from pathlib import Path

import pytest
import yaml

from core.logging_config import setup_logging
from core.settings import get_default_settings, get_setting, load_settings, reload_settings


@pytest.fixture(autouse=True)
def _clear_settings_cache() -> None:
    """Ensure clean settings cache for each test."""
    reload_settings()
    yield
    reload_settings()


def test_load_settings_defaults_when_file_missing(tmp_path: Path) -> None:
    settings = load_settings(config_dir=tmp_path)
    assert get_setting(settings, "api.token_secret") == "CONSOLE_API_TOKEN"
    assert get_setting(settings, "creation.offer_access_step") is False
    assert get_setting(settings, "catalog.path") is None


def test_load_settings_merges_file_over_defaults(tmp_path: Path) -> None:
    (tmp_path / "settings.yaml").write_text(
        yaml.safe_dump({"api": {"base_url": "https://console.example/api/v1"}, "creation": {"offer_access_step": True}})
    )
    settings = load_settings(config_dir=tmp_path)
    assert settings["api"]["base_url"] == "https://console.example/api/v1"
    assert settings["api"]["timeout"] == 15.0
    assert settings["creation"]["offer_access_step"] is True


def test_load_settings_ignores_invalid_yaml(tmp_path: Path) -> None:
    (tmp_path / "settings.yaml").write_text("api: [unclosed\n")
    settings = load_settings(config_dir=tmp_path)
    assert settings == get_default_settings()


def test_load_settings_is_cached_until_reload(tmp_path: Path) -> None:
    path = tmp_path / "settings.yaml"
    path.write_text(yaml.safe_dump({"api": {"timeout": 1.0}}))
    assert load_settings(config_dir=tmp_path)["api"]["timeout"] == 1.0
    path.write_text(yaml.safe_dump({"api": {"timeout": 2.0}}))
    assert load_settings(config_dir=tmp_path)["api"]["timeout"] == 1.0
    reload_settings()
    assert load_settings(config_dir=tmp_path)["api"]["timeout"] == 2.0


def test_get_default_settings_returns_copy() -> None:
    first = get_default_settings()
    first["api"]["base_url"] = "changed"
    assert get_default_settings()["api"]["base_url"] != "changed"


def test_get_setting_missing_path_returns_default() -> None:
    assert get_setting({"a": {"b": 1}}, "a.c", "x") == "x"
    assert get_setting({"a": 1}, "a.b") is None


def test_setup_logging_writes_file(tmp_path: Path) -> None:
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    try:
        setup_logging(tmp_path, {"logging": {"file": "logs/test.log", "level": "debug"}})
        logging.getLogger("creation.test").debug("hello")
        for h in root.handlers:
            h.flush()
        assert "hello" in (tmp_path / "logs" / "test.log").read_text(encoding="utf-8")
        assert root.level == logging.DEBUG
    finally:
        for h in root.handlers[:]:
            root.removeHandler(h)
            h.close()
        for h in saved_handlers:
            root.addHandler(h)
        root.setLevel(saved_level)
