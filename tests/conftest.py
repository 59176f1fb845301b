"""Shared test fixtures for the AfriWiki linker test suite."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from afriwiki.catalog.builder import CatalogBuilder
from afriwiki.config import Settings
from afriwiki.models.catalog import EntityCatalog
from afriwiki.models.entity import LinkableEntity
from afriwiki.sources.profiles import StaticProfileSource


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    """Create a Settings instance with temp directories and no profile store."""
    return Settings(
        output_dir=tmp_path / "output",
        supabase_url=None,
        supabase_key=None,
        profiles_path=None,
        admin_email="admin@afriwiki.org",
    )


@pytest.fixture
def sample_profile_rows() -> list[dict]:
    """A small set of profile rows as the profile store returns them."""
    return [
        {
            "id": "5f0c6a4e-1d2b-4c3a-9e8f-0a1b2c3d4e5f",
            "first_name": "Jane",
            "last_name": "Doe",
            "slug": "jane-doe",
            "is_published": True,
        },
        {
            "id": "7a1d2e3f-4b5c-4d6e-8f90-1a2b3c4d5e6f",
            "first_name": "Iyinoluwa",
            "last_name": "Aboyeji",
            "slug": "iyinoluwa-aboyeji",
            "is_published": True,
        },
        {
            "id": "9c8b7a6d-5e4f-4a3b-8c2d-1e0f9a8b7c6d",
            "first_name": "Draft",
            "last_name": "Profile",
            "slug": "draft-profile",
            "is_published": False,
        },
    ]


@pytest.fixture
def profiles_file(tmp_path: Path, sample_profile_rows: list[dict]) -> Path:
    """Write a test profiles JSON export."""
    path = tmp_path / "profiles.json"
    path.write_text(json.dumps(sample_profile_rows), encoding="utf-8")
    return path


@pytest.fixture
def catalog(sample_profile_rows: list[dict]) -> EntityCatalog:
    """Full catalog: sample profiles plus the static lists."""
    return CatalogBuilder(StaticProfileSource(sample_profile_rows)).build()


@pytest.fixture
def countries() -> list[LinkableEntity]:
    """A few country entities for focused rewriter tests."""
    return [
        LinkableEntity(name="Kenya", target_path="/pays/ke", category="place"),
        LinkableEntity(name="Mali", target_path="/pays/ml", category="place"),
        LinkableEntity(name="Côte d'Ivoire", target_path="/pays/ci", category="place"),
        LinkableEntity(name="Sénégal", target_path="/pays/sn", category="place"),
    ]
