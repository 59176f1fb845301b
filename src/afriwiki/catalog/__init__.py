"""Entity catalog construction and caching."""

from afriwiki.catalog.builder import CatalogBuilder, build_static_catalog
from afriwiki.catalog.cache import CatalogCache, CatalogSnapshot

__all__ = ["CatalogBuilder", "CatalogCache", "CatalogSnapshot", "build_static_catalog"]
