"""Ordered, deduplicated entity catalog with exact and fuzzy name lookup."""

from __future__ import annotations

import json
from collections.abc import Iterable, Iterator
from pathlib import Path

from rapidfuzz import fuzz, process

from afriwiki.models.entity import LinkableEntity


class EntityCatalog:
    """Read-only collection of :class:`LinkableEntity`, longest name first.

    Entities are sorted by name length (descending, stable for ties) and
    deduplicated on the lowercased name: when two entities share a name,
    the one encountered first in the sorted order wins.  The catalog is
    never mutated after construction, so one instance can be shared by
    concurrent rewrite passes.

    Expected JSON format for :meth:`from_json`::

        [
            {"name": "Bénin", "target_path": "/pays/bj", "category": "place"},
            ...
        ]
    """

    def __init__(self, entities: Iterable[LinkableEntity]) -> None:
        ordered = sorted(entities, key=lambda e: len(e.name), reverse=True)

        self._by_key: dict[str, LinkableEntity] = {}
        for entity in ordered:
            self._by_key.setdefault(self._normalise(entity.name), entity)

        self._entities: tuple[LinkableEntity, ...] = tuple(self._by_key.values())
        self._all_keys: list[str] = list(self._by_key)

    # ------------------------------------------------------------------
    # Factory
    # ------------------------------------------------------------------

    @classmethod
    def from_json(cls, path: Path) -> EntityCatalog:
        """Load a catalog from a JSON list of entity objects."""
        raw = json.loads(path.read_text(encoding="utf-8"))
        return cls(LinkableEntity.model_validate(entry) for entry in raw)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @property
    def entities(self) -> tuple[LinkableEntity, ...]:
        return self._entities

    def get(self, name: str) -> LinkableEntity | None:
        """Return the entity whose name equals *name* (case-insensitive)."""
        return self._by_key.get(self._normalise(name))

    def match(self, name: str, threshold: int = 85) -> LinkableEntity | None:
        """Look up *name*, tolerating typos and reordered words.

        A case- and whitespace-insensitive hit wins outright.  Otherwise the
        closest catalog name by rapidfuzz token-sort ratio is used, provided
        it scores at least *threshold* out of 100.  Used by
        ``afriwiki catalog --lookup``, never by the auto-linker.
        """
        entity = self.get(name)
        if entity is not None or not self._all_keys:
            return entity

        best = process.extractOne(
            self._normalise(name),
            self._all_keys,
            scorer=fuzz.token_sort_ratio,
            score_cutoff=threshold,
        )
        # extractOne gives (choice, score, index); keys line up with entities
        return None if best is None else self._entities[best[2]]

    def to_json(self) -> str:
        return json.dumps(
            [e.model_dump() for e in self._entities],
            indent=2,
            ensure_ascii=False,
        )

    def __iter__(self) -> Iterator[LinkableEntity]:
        return iter(self._entities)

    def __len__(self) -> int:
        return len(self._entities)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self._normalise(name) in self._by_key

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _normalise(name: str) -> str:
        """Lowercase, strip, and collapse whitespace."""
        return " ".join(name.lower().split())
