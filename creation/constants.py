"""Exit codes for python -m creation."""

CREATION_SUCCESS = 0  # Resource created
CREATION_CANCELLED = 1  # User cancelled (Ctrl+C or Cancel)
CREATION_FAILED = 2  # Console API unreachable or rejected the session
