"""API token lookup via OS keyring with environment fallback."""

import logging
import os
from typing import Any

import keyring
from keyring.errors import KeyringError

from core.settings import get_setting

logger = logging.getLogger(__name__)
SERVICE_NAME = "resource-console"


def is_keyring_available() -> bool:
    """True when a real OS keyring backend is active (not the fail stub)."""
    try:
        from keyring.backends.fail import Keyring as FailKeyring

        return not isinstance(keyring.get_keyring(), FailKeyring)
    except Exception:
        return False


def get_secret(name: str) -> str | None:
    """Resolve secret: keyring -> os.environ."""
    try:
        value = keyring.get_password(SERVICE_NAME, name)
        if value:
            return value
    except KeyringError:
        logger.debug("keyring lookup failed for %s, falling back to env", name)
    return os.environ.get(name)


def set_secret(name: str, value: str) -> None:
    """Store secret in OS keyring. Raises KeyringError if backend unavailable."""
    keyring.set_password(SERVICE_NAME, name, value)


def get_api_token(settings: dict[str, Any]) -> str | None:
    """Bearer token for the console API, by the name configured in api.token_secret."""
    name = get_setting(settings, "api.token_secret", "CONSOLE_API_TOKEN")
    return get_secret(name)
