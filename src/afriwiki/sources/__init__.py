"""Profile sources feeding the entity catalog."""

from afriwiki.sources.profiles import (
    JsonProfileSource,
    ProfileSource,
    StaticProfileSource,
    SupabaseProfileSource,
    source_from_settings,
)

__all__ = [
    "JsonProfileSource",
    "ProfileSource",
    "StaticProfileSource",
    "SupabaseProfileSource",
    "source_from_settings",
]
