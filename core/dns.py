"""DNS-compliant resource identifiers."""

import random
import re
import string

MAX_ID_LENGTH = 63
_SUFFIX_ALPHABET = string.ascii_lowercase + string.digits


def slugify(name: str) -> str:
    """Lowercase, hyphen-separated slug with only [a-z0-9-] characters."""
    slug = name.lower()
    slug = re.sub(r"[\s_]+", "-", slug)
    slug = re.sub(r"[^a-z0-9-]", "", slug)
    slug = re.sub(r"-+", "-", slug)
    return slug.strip("-")


def generate_random_suffix(length: int = 4) -> str:
    return "".join(random.choice(_SUFFIX_ALPHABET) for _ in range(length))


def generate_dns_id(name: str, suffix: str | None = None) -> str:
    """Build '<slug>-<suffix>' from a display name.

    The slug is prefixed with 'r' when it does not start with a letter.
    """
    slug = slugify(name)
    base = slug if slug and slug[0].isalpha() else f"r{slug}"
    return f"{base}-{suffix or generate_random_suffix()}"


def validate_dns_id(value: str) -> str | None:
    """Return an error message for an invalid id, None when valid."""
    if not value:
        return "ID is required"
    if len(value) > MAX_ID_LENGTH:
        return f"ID cannot be longer than {MAX_ID_LENGTH} characters"
    if not re.match(r"^[a-z]", value):
        return "ID must start with a lowercase letter"
    if not re.fullmatch(r"[a-z0-9-]+", value):
        return "ID can only contain lowercase letters, numbers, and hyphens"
    if value.endswith("-"):
        return "ID cannot end with a hyphen"
    if "--" in value:
        return "ID cannot contain consecutive hyphens"
    return None
