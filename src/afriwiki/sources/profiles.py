"""Profile sources -- list published entrepreneur profiles for the catalog.

A profile source is anything with a ``list_published()`` method returning
raw rows (dicts with ``first_name``, ``last_name`` and ``slug``).  Rows are
validated later by :func:`afriwiki.models.entity.profile_from_row`; sources
only guarantee a list comes back, or raise :class:`DataUnavailable`.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Protocol

import httpx

from afriwiki.config import Settings
from afriwiki.errors import DataUnavailable

logger = logging.getLogger(__name__)


class ProfileSource(Protocol):
    def list_published(self) -> list[dict[str, Any]]: ...


class SupabaseProfileSource:
    """Read published profiles through the Supabase REST (PostgREST) API.

    One GET per call, bounded by *timeout* seconds.  No retries: a failed
    read surfaces as :class:`DataUnavailable` and the caller falls back to
    the static catalog.
    """

    SELECT = "id,first_name,last_name,slug"

    def __init__(
        self,
        url: str,
        key: str,
        *,
        table: str = "entrepreneurs",
        timeout: float = 5.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        if not url:
            raise ValueError("Supabase URL is required")
        self.endpoint = f"{url.rstrip('/')}/rest/v1/{table}"
        self.timeout = timeout
        self._headers = {
            "apikey": key,
            "Authorization": f"Bearer {key}",
            "Accept": "application/json",
        }
        self._transport = transport

    @classmethod
    def from_settings(cls, settings: Settings) -> SupabaseProfileSource:
        return cls(
            settings.supabase_url or "",
            settings.supabase_key or "",
            table=settings.profiles_table,
            timeout=settings.fetch_timeout,
        )

    def list_published(self) -> list[dict[str, Any]]:
        params = {"select": self.SELECT, "is_published": "eq.true"}
        try:
            with httpx.Client(
                headers=self._headers,
                timeout=self.timeout,
                transport=self._transport,
            ) as client:
                resp = client.get(self.endpoint, params=params)
                resp.raise_for_status()
                data = resp.json()
        except httpx.HTTPError as exc:
            raise DataUnavailable(f"Profile listing failed: {exc}") from exc
        except ValueError as exc:
            raise DataUnavailable(f"Profile listing returned invalid JSON: {exc}") from exc

        if not isinstance(data, list):
            raise DataUnavailable(
                f"Profile listing returned {type(data).__name__}, expected a list"
            )

        logger.debug("Fetched %d published profiles from %s", len(data), self.endpoint)
        return data


class JsonProfileSource:
    """Read profiles from a JSON export of the entrepreneurs table.

    Expected JSON format::

        [
            {
                "id": "5f0c...",
                "first_name": "Jane",
                "last_name": "Doe",
                "slug": "jane-doe",
                "is_published": true
            },
            ...
        ]

    Rows without ``is_published`` are treated as published.
    """

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def list_published(self) -> list[dict[str, Any]]:
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise DataUnavailable(f"Cannot read profiles from {self.path}: {exc}") from exc

        if not isinstance(raw, list):
            raise DataUnavailable(f"{self.path} must contain a JSON list of profiles")

        return [
            row for row in raw if not isinstance(row, dict) or row.get("is_published", True)
        ]


class StaticProfileSource:
    """In-memory profile rows."""

    def __init__(self, rows: list[dict[str, Any]]) -> None:
        self.rows = list(rows)

    def list_published(self) -> list[dict[str, Any]]:
        return [
            row for row in self.rows if not isinstance(row, dict) or row.get("is_published", True)
        ]


def source_from_settings(settings: Settings) -> ProfileSource | None:
    """Pick a profile source from settings: Supabase, then JSON export, else none."""
    if settings.supabase_url:
        return SupabaseProfileSource.from_settings(settings)
    if settings.profiles_path is not None:
        return JsonProfileSource(settings.profiles_path)
    return None
