"""Tests for core.secrets module."""

from unittest.mock import patch

import pytest

from core import secrets


def test_get_secret_fallback_to_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """When keyring returns None, fall back to os.environ."""
    monkeypatch.setenv("TEST_SECRET_ENV", "from-env")
    with patch("core.secrets.keyring") as mock_kr:
        mock_kr.get_password.return_value = None
        assert secrets.get_secret("TEST_SECRET_ENV") == "from-env"


def test_get_secret_prefers_keyring(monkeypatch: pytest.MonkeyPatch) -> None:
    """When keyring has value, it takes precedence over env."""
    monkeypatch.setenv("TEST_SECRET_BOTH", "from-env")
    with patch("core.secrets.keyring") as mock_kr:
        mock_kr.get_password.return_value = "from-keyring"
        assert secrets.get_secret("TEST_SECRET_BOTH") == "from-keyring"
        mock_kr.get_password.assert_called_once_with("resource-console", "TEST_SECRET_BOTH")


def test_get_secret_keyring_error_falls_back(monkeypatch: pytest.MonkeyPatch) -> None:
    """When keyring raises KeyringError, fall back to env."""
    from keyring.errors import KeyringError

    monkeypatch.setenv("TEST_SECRET_ERR", "from-env")
    with patch("core.secrets.keyring.get_password", side_effect=KeyringError("fail")):
        assert secrets.get_secret("TEST_SECRET_ERR") == "from-env"


def test_get_api_token_uses_configured_name(monkeypatch: pytest.MonkeyPatch) -> None:
    """api.token_secret names the secret holding the bearer token."""
    monkeypatch.setenv("MY_CONSOLE_TOKEN", "tok-123")
    monkeypatch.delenv("CONSOLE_API_TOKEN", raising=False)
    with patch("core.secrets.keyring.get_password", return_value=None):
        assert secrets.get_api_token({"api": {"token_secret": "MY_CONSOLE_TOKEN"}}) == "tok-123"
        assert secrets.get_api_token({}) is None


def test_set_secret_stores_under_service_name() -> None:
    with patch("core.secrets.keyring.set_password") as mock_set:
        secrets.set_secret("CONSOLE_API_TOKEN", "tok")
    mock_set.assert_called_once_with("resource-console", "CONSOLE_API_TOKEN", "tok")


def test_is_keyring_available_detects_fail_backend() -> None:
    from keyring.backends.fail import Keyring as FailKeyring

    with patch("core.secrets.keyring.get_keyring", return_value=FailKeyring()):
        assert secrets.is_keyring_available() is False
