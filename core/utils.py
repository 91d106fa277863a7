"""ID generation utility."""

import secrets


def gen_id(prefix: str) -> str:
    """Generate opaque IDs of the form perm_xxx."""
    return f"{prefix}{secrets.token_urlsafe(12)}"
