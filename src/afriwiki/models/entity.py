"""Pydantic v2 models for linkable entities and the profile rows they come from."""

from __future__ import annotations

import logging
from typing import Any, Literal

from pydantic import BaseModel, ValidationError, field_validator

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Enums as Literal unions
# ---------------------------------------------------------------------------

EntityCategory = Literal[
    "person",
    "place",
    "sector",
    "glossary-term",
]


# ---------------------------------------------------------------------------
# Core models
# ---------------------------------------------------------------------------


class LinkableEntity(BaseModel):
    """A name or term that the rewriter may turn into a hyperlink."""

    model_config = {"frozen": True}

    name: str
    target_path: str  # e.g. "/e/jane-doe", "/pays/bj"
    category: EntityCategory

    @field_validator("name", "target_path")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value

    @property
    def key(self) -> str:
        """Lowercased name, the dedup and already-linked key."""
        return " ".join(self.name.lower().split())


class ProfileRecord(BaseModel):
    """A published entrepreneur profile as returned by the profile store."""

    id: str | None = None
    first_name: str
    last_name: str
    slug: str
    is_published: bool = True

    @field_validator("first_name", "last_name", "slug")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        value = " ".join(value.split())
        if not value:
            raise ValueError("must not be blank")
        return value

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> Any:
        # Supabase returns uuids as strings but older exports used integers
        return str(value) if value is not None else None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


class NameLink(BaseModel):
    """A ``{slug, name}`` pair for linking names inside Markdown bodies."""

    slug: str
    name: str


def profile_from_row(row: Any) -> ProfileRecord | None:
    """Convert one raw row into a :class:`ProfileRecord`.

    Returns ``None`` (and logs a warning) when the row is not a mapping or
    fails validation, so a single bad row never poisons the catalog.
    """
    if not isinstance(row, dict):
        logger.warning("Skipping profile row of type %s", type(row).__name__)
        return None
    try:
        return ProfileRecord.model_validate(row)
    except ValidationError as exc:
        logger.warning(
            "Skipping malformed profile row %r: %s",
            row.get("slug") or row.get("id"),
            exc.errors()[0]["msg"] if exc.errors() else exc,
        )
        return None
