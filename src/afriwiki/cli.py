"""Click CLI for the AfriWiki linker."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from afriwiki.config import Settings
from afriwiki.errors import AfriwikiError
from afriwiki.models.catalog import EntityCatalog

# Status output goes to stderr so stdout carries only the rewritten content
console = Console(stderr=True)

BANNER = """
[bold cyan]AfriWiki Linker[/bold cyan] - entity auto-linking and HTML sanitizing
"""

LINKABLE_SUFFIXES = (".html", ".htm", ".md")


def _load_settings() -> Settings:
    """Load settings from environment."""
    return Settings()


def _build_catalog(settings: Settings, profiles: Path | None, static_only: bool) -> EntityCatalog:
    from afriwiki.catalog.builder import CatalogBuilder, build_static_catalog
    from afriwiki.sources.profiles import JsonProfileSource

    if static_only:
        return build_static_catalog()
    source = JsonProfileSource(profiles) if profiles is not None else None
    return CatalogBuilder.from_settings(settings, source).build()


def _read(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        console.print(f"[red]Cannot read {path}: {exc}[/red]")
        sys.exit(1)


def _write(text: str, output: Path | None) -> None:
    if output is None:
        click.echo(text, nl=not text.endswith("\n"))
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(text, encoding="utf-8")
    console.print(f"  [green]Written to {output}[/green]")


profiles_option = click.option(
    "--profiles",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="JSON export of published profiles (defaults to AFRIWIKI_* settings).",
)
static_only_option = click.option(
    "--static-only",
    is_flag=True,
    help="Use only the static countries, sectors and terms.",
)
output_option = click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write to this file instead of stdout.",
)


# ---------------------------------------------------------------------------
# Top-level group
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(package_name="afriwiki-linker")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
def cli(verbose: bool) -> None:
    """AfriWiki Linker -- auto-link and sanitize AfriWiki content.

    \b
    Profiles come from --profiles, else from Supabase when
    AFRIWIKI_SUPABASE_URL is set, else from AFRIWIKI_PROFILES_PATH.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )
    console.print(BANNER)


# ---------------------------------------------------------------------------
# link
# ---------------------------------------------------------------------------


@cli.command()
@click.argument("input_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@profiles_option
@static_only_option
@output_option
def link(input_file: Path, profiles: Path | None, static_only: bool, output: Path | None) -> None:
    """Insert links to known entities into an HTML or Markdown file.

    \b
    Examples:
      afriwiki link article.html --profiles ./data/profiles.json
      afriwiki link article.html --static-only -o linked.html
    """
    from afriwiki.processors.autolink import AutoLinker

    settings = _load_settings()
    catalog = _build_catalog(settings, profiles, static_only)
    linker = AutoLinker.from_settings(settings, catalog)

    try:
        text, count = linker.link_counted(_read(input_file))
    except AfriwikiError as exc:
        console.print(f"[red]Linking failed: {exc}[/red]")
        sys.exit(1)

    console.print(f"  Inserted [bold]{count}[/bold] links using {len(catalog)} entities")
    _write(text, output)


# ---------------------------------------------------------------------------
# link-dir
# ---------------------------------------------------------------------------


@cli.command("link-dir")
@click.argument("input_dir", type=click.Path(exists=True, file_okay=False, path_type=Path))
@click.argument(
    "output_dir", type=click.Path(file_okay=False, path_type=Path), required=False
)
@profiles_option
@static_only_option
def link_dir(
    input_dir: Path, output_dir: Path | None, profiles: Path | None, static_only: bool
) -> None:
    """Auto-link every .html/.htm/.md file under INPUT_DIR into OUTPUT_DIR.

    OUTPUT_DIR defaults to AFRIWIKI_OUTPUT_DIR.  The catalog is built once
    and shared by all files.  Relative paths are preserved.
    """
    from afriwiki.processors.autolink import AutoLinker
    from afriwiki.utils.progress import create_progress, log_summary

    settings = _load_settings()
    if output_dir is None:
        settings.ensure_dirs()
        output_dir = settings.output_dir
    catalog = _build_catalog(settings, profiles, static_only)
    linker = AutoLinker.from_settings(settings, catalog)

    paths = sorted(p for p in input_dir.rglob("*") if p.suffix.lower() in LINKABLE_SUFFIXES)
    if not paths:
        console.print("[yellow]No HTML or Markdown files found.[/yellow]")
        return

    processed = errors = links = 0
    with create_progress() as progress:
        task = progress.add_task("Linking pages", total=len(paths))
        for path in paths:
            try:
                text, count = linker.link_counted(path.read_text(encoding="utf-8"))
                out_path = output_dir / path.relative_to(input_dir)
                out_path.parent.mkdir(parents=True, exist_ok=True)
                out_path.write_text(text, encoding="utf-8")
                processed += 1
                links += count
            except (OSError, UnicodeDecodeError, AfriwikiError) as exc:
                logging.getLogger(__name__).error("Linking failed for %s: %s", path, exc)
                errors += 1
            progress.advance(task)

    log_summary(processed, errors, links)
    if errors:
        sys.exit(1)


# ---------------------------------------------------------------------------
# sanitize
# ---------------------------------------------------------------------------


@cli.command()
@click.argument("input_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--max-length", type=int, default=None, help="Truncate before sanitizing.")
@output_option
def sanitize(input_file: Path, max_length: int | None, output: Path | None) -> None:
    """Strip scripts, event handlers and unsafe URLs from an HTML file."""
    from afriwiki.processors.sanitizer import sanitize_html

    _write(sanitize_html(_read(input_file), max_length=max_length), output)


# ---------------------------------------------------------------------------
# render
# ---------------------------------------------------------------------------


@cli.command()
@click.argument("input_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@profiles_option
@static_only_option
@output_option
def render(input_file: Path, profiles: Path | None, static_only: bool, output: Path | None) -> None:
    """Render profile content (HTML or Markdown) to sanitized, auto-linked HTML."""
    from afriwiki.processors.render import render_content

    settings = _load_settings()
    catalog = _build_catalog(settings, profiles, static_only)
    _write(render_content(_read(input_file), catalog), output)


# ---------------------------------------------------------------------------
# catalog
# ---------------------------------------------------------------------------


@cli.command()
@profiles_option
@static_only_option
@click.option("--lookup", default=None, help="Find the entity closest to this name.")
@click.option("--json", "as_json", is_flag=True, help="Print the catalog as JSON.")
def catalog(profiles: Path | None, static_only: bool, lookup: str | None, as_json: bool) -> None:
    """Show the entity catalog, longest names first."""
    settings = _load_settings()
    entity_catalog = _build_catalog(settings, profiles, static_only)

    if lookup is not None:
        entity = entity_catalog.match(lookup)
        if entity is None:
            console.print(f"[yellow]No entity matches {lookup!r}[/yellow]")
            sys.exit(1)
        click.echo(json.dumps(entity.model_dump(), ensure_ascii=False))
        return

    if as_json:
        click.echo(entity_catalog.to_json())
        return

    table = Table(title=f"Entity Catalog ({len(entity_catalog)})", header_style="bold cyan")
    table.add_column("Name", style="bold")
    table.add_column("Target")
    table.add_column("Category")
    for entity in entity_catalog:
        table.add_row(entity.name, entity.target_path, entity.category)
    console.print(table)


if __name__ == "__main__":
    cli()
