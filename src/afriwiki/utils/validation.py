"""Small input validators shared by the CLI and the admin tooling."""

from __future__ import annotations

import re
from urllib.parse import urlparse

_UUID = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[1-5][0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}$",
    re.IGNORECASE,
)


def is_valid_uuid(value: str | None) -> bool:
    """True for an RFC 4122 UUID (versions 1-5) in canonical form."""
    return bool(value) and _UUID.match(value) is not None


def is_valid_url(value: str | None) -> bool:
    """True for an absolute http(s) URL with a host."""
    if not value:
        return False
    try:
        parsed = urlparse(value)
    except ValueError:
        return False
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)
