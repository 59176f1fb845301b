#!/usr/bin/env python3
"""Export published entrepreneur profiles from Supabase to a local JSON file.

The JSON file feeds ``afriwiki link --profiles`` and AFRIWIKI_PROFILES_PATH,
so auto-linking can run without network access.

Usage:
    AFRIWIKI_SUPABASE_URL=https://xyz.supabase.co AFRIWIKI_SUPABASE_KEY=... \
        python scripts/sync-profiles-from-supabase.py
    python scripts/sync-profiles-from-supabase.py --output ./data/profiles.json
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

from afriwiki.config import Settings
from afriwiki.errors import DataUnavailable
from afriwiki.models.entity import profile_from_row
from afriwiki.sources.profiles import SupabaseProfileSource


@click.command()
@click.option(
    "--output",
    "-o",
    type=click.Path(path_type=Path),
    default=Path("./data/profiles.json"),
    help="Output path for profiles.json",
)
def main(output: Path) -> None:
    """Sync the published profiles list from Supabase."""
    settings = Settings()
    if not settings.supabase_url:
        click.echo("ERROR: AFRIWIKI_SUPABASE_URL is not set.", err=True)
        sys.exit(1)

    click.echo(f"Reading profiles from {settings.supabase_url}...")
    try:
        rows = SupabaseProfileSource.from_settings(settings).list_published()
    except DataUnavailable as exc:
        click.echo(f"ERROR: {exc}", err=True)
        sys.exit(1)

    profiles = [p.model_dump() for p in map(profile_from_row, rows) if p is not None]
    click.echo(f"  Fetched {len(rows)} rows, {len(profiles)} valid profiles")

    # Check for existing export and report diff
    if output.exists():
        existing = json.loads(output.read_text(encoding="utf-8"))
        existing_slugs = {p["slug"] for p in existing}
        new_slugs = {p["slug"] for p in profiles}
        added = new_slugs - existing_slugs
        removed = existing_slugs - new_slugs
        if added:
            click.echo(f"  New profiles: {len(added)}")
        if removed:
            click.echo(f"  Removed profiles: {len(removed)}")

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(
        json.dumps(profiles, indent=2, ensure_ascii=False),
        encoding="utf-8",
    )
    click.echo(f"  Written to {output}")


if __name__ == "__main__":
    main()
