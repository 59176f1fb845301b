"""Data models for the AfriWiki linker."""

from afriwiki.models.catalog import EntityCatalog
from afriwiki.models.entity import (
    EntityCategory,
    LinkableEntity,
    NameLink,
    ProfileRecord,
    profile_from_row,
)

__all__ = [
    "EntityCatalog",
    "EntityCategory",
    "LinkableEntity",
    "NameLink",
    "ProfileRecord",
    "profile_from_row",
]
