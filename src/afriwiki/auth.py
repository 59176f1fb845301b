"""Admin authorization predicate.

The admin address is configuration (``AFRIWIKI_ADMIN_EMAIL``), read once
into :class:`Settings`; every admin check goes through
:func:`is_admin_email`.
"""

from __future__ import annotations

from afriwiki.config import Settings


def is_admin_email(email: str | None, settings: Settings | None = None) -> bool:
    """True when *email* is the configured admin address (case-insensitive)."""
    if not email:
        return False
    admin = (settings or Settings()).admin_email
    if not admin:
        return False
    return email.strip().lower() == admin.strip().lower()
