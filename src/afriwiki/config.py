"""AfriWiki configuration using Pydantic BaseSettings with AFRIWIKI_ env prefix."""

from __future__ import annotations

from pathlib import Path

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Settings loaded from environment variables prefixed with AFRIWIKI_.

    Example:
        AFRIWIKI_SUPABASE_URL=https://xyz.supabase.co
        AFRIWIKI_SUPABASE_KEY=eyJhbGciOi...
        AFRIWIKI_CATALOG_TTL_SECONDS=600
        AFRIWIKI_ADMIN_EMAIL=admin@afriwiki.org
    """

    model_config = {"env_prefix": "AFRIWIKI_"}

    # ── Directory paths ──────────────────────────────────────────────────
    output_dir: Path = Path("./output")
    profiles_path: Path | None = None  # JSON export of the entrepreneurs table

    # ── Profile store (Supabase REST) ────────────────────────────────────
    supabase_url: str | None = None  # https://<project>.supabase.co
    supabase_key: str | None = None  # anon or service key
    profiles_table: str = "entrepreneurs"
    fetch_timeout: float = 5.0  # seconds, profile listing read

    # ── Catalog settings ─────────────────────────────────────────────────
    entity_prefix: str = "e"  # profile pages live at /e/<slug>
    catalog_ttl_seconds: float | None = 300.0  # None = rebuild only on invalidate()

    # ── Auto-link settings ───────────────────────────────────────────────
    autolink_class: str | None = "wiki-autolink"
    autolink_title: str = "Voir la page {name}"

    # ── Authorization ────────────────────────────────────────────────────
    admin_email: str | None = None

    def ensure_dirs(self) -> None:
        """Create the output directory if it doesn't exist."""
        self.output_dir.mkdir(parents=True, exist_ok=True)
