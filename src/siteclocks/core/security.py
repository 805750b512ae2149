"""Shared-secret checks for write requests."""
from __future__ import annotations

import secrets

# Header carrying the shared secret on write requests.
AUTH_HEADER_NAME = "X-Auth-Header"


def verify_shared_secret(provided: str | None, expected: str | None) -> bool:
    """Compare a client-supplied secret with the configured one.

    Args:
        provided: Value of the auth header, if any.
        expected: Configured secret. When unset, every write is refused.

    Returns:
        True only if both values are present and equal.
    """
    if not provided or not expected:
        return False
    return secrets.compare_digest(provided.encode("utf-8"), expected.encode("utf-8"))
