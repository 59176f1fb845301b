"""Entity catalog builder -- published profiles plus the static reference lists."""

from __future__ import annotations

import logging

from afriwiki.catalog.static import static_entities
from afriwiki.config import Settings
from afriwiki.errors import DataUnavailable
from afriwiki.models.catalog import EntityCatalog
from afriwiki.models.entity import LinkableEntity, ProfileRecord, profile_from_row
from afriwiki.sources.profiles import ProfileSource

logger = logging.getLogger(__name__)


class CatalogBuilder:
    """Build an :class:`EntityCatalog` from a profile source.

    Every published profile contributes two entities pointing at the same
    page: the full name ("Jane Doe") and the last name alone ("Doe"), since
    prose often refers to people by surname.  Static countries, sectors and
    glossary terms are appended, then the catalog sorts everything
    longest-name-first.

    If the profile source raises (normally :class:`DataUnavailable`) the
    builder logs a warning and returns the static entities only.
    """

    def __init__(
        self,
        source: ProfileSource | None = None,
        *,
        entity_prefix: str = "e",
    ) -> None:
        self.source = source
        self.entity_prefix = entity_prefix.strip("/")

    @classmethod
    def from_settings(
        cls, settings: Settings, source: ProfileSource | None = None
    ) -> CatalogBuilder:
        if source is None:
            from afriwiki.sources.profiles import source_from_settings

            source = source_from_settings(settings)
        return cls(source, entity_prefix=settings.entity_prefix)

    def build(self) -> EntityCatalog:
        """Return a fresh catalog.  Never raises for an unavailable source."""
        entities: list[LinkableEntity] = []

        for profile in self._load_profiles():
            entities.extend(self.profile_entities(profile))

        entities.extend(static_entities())
        catalog = EntityCatalog(entities)
        logger.debug("Built entity catalog with %d entities", len(catalog))
        return catalog

    def profile_entities(self, profile: ProfileRecord) -> list[LinkableEntity]:
        """Full-name and last-name entities for one profile."""
        path = f"/{self.entity_prefix}/{profile.slug}"
        return [
            LinkableEntity(name=profile.full_name, target_path=path, category="person"),
            LinkableEntity(name=profile.last_name, target_path=path, category="person"),
        ]

    def _load_profiles(self) -> list[ProfileRecord]:
        if self.source is None:
            return []

        try:
            rows = self.source.list_published()
        except DataUnavailable as exc:
            logger.warning("Profile listing unavailable, using static entities only: %s", exc)
            return []
        except Exception as exc:
            logger.warning(
                "Profile source %s failed (%s), using static entities only",
                type(self.source).__name__,
                exc,
            )
            return []

        profiles = []
        for row in rows:
            profile = profile_from_row(row)
            if profile is not None and profile.is_published:
                profiles.append(profile)

        skipped = len(rows) - len(profiles)
        if skipped:
            logger.warning("Skipped %d of %d profile rows", skipped, len(rows))
        return profiles


def build_static_catalog() -> EntityCatalog:
    """The catalog used when no profile store is reachable."""
    return EntityCatalog(static_entities())
