"""Entity registry: identity assignment, key index and document store.

The registry is filled in two phases.  ``from_manifests`` indexes every
loaded manifest before any resolution starts, so resolvers always see the
complete set of real keys.  During resolution only placeholders are
appended, each one fully built at the moment its key first misses.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from typing import Any

from k8sdesigner.errors import DuplicateEntityError, ParseError
from k8sdesigner.graph.models import Entity
from k8sdesigner.models.config import DuplicatePolicy
from k8sdesigner.models.manifests import (
    CONTROLLER_KINDS,
    EntityKind,
    LoadedManifest,
    ManifestShapeError,
    ManifestView,
    entity_key,
    parse_view,
)
from k8sdesigner.observability.logging import get_logger

_logger = get_logger("graph.registry")

_PLACEHOLDER_SOURCE = "<placeholder>"


@dataclass(frozen=True)
class _Record:
    entity: Entity
    key: str
    source: str
    document: Mapping[str, Any] | None  # None for placeholders


class EntityRegistry:
    """Ordered entity store with a ``kind/name`` lookup index.

    Entity ids are positions in the store and never change once assigned.
    Parsed documents are kept per id and never mutated; typed views derived
    from them are memoised.
    """

    def __init__(self) -> None:
        self._records: list[_Record] = []
        self._index: dict[str, int] = {}
        self._views: dict[int, ManifestView] = {}
        self._loaded_count = 0

    @classmethod
    def from_manifests(
        cls,
        manifests: Iterable[LoadedManifest],
        duplicate_policy: DuplicatePolicy = DuplicatePolicy.REJECT,
    ) -> EntityRegistry:
        """Index loaded manifests, assigning ids in iteration order.

        Raises:
            DuplicateEntityError: two manifests share a key and the policy is ``reject``.
        """
        registry = cls()
        for manifest in manifests:
            registry._add_loaded(manifest, duplicate_policy)
        registry._loaded_count = len(registry._records)
        return registry

    def _add_loaded(self, manifest: LoadedManifest, duplicate_policy: DuplicatePolicy) -> None:
        key = manifest.key
        previous = self._index.get(key)
        if previous is not None:
            first_source = self._records[previous].source
            if duplicate_policy is DuplicatePolicy.REJECT:
                raise DuplicateEntityError(key, first_source, manifest.source)
            _logger.warning(
                "duplicate manifest shadows earlier one",
                key=key,
                first_source=first_source,
                source=manifest.source,
            )

        entity = Entity(id=len(self._records), kind=manifest.kind, name=manifest.name)
        self._records.append(_Record(entity=entity, key=key, source=manifest.source, document=manifest.document))
        self._index[key] = entity.id

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[Entity]:
        # Snapshot so that placeholders appended while iterating are not visited.
        return iter([record.entity for record in self._records])

    @property
    def loaded_count(self) -> int:
        """Number of entities that came from manifests (ids ``0..loaded_count-1``)."""
        return self._loaded_count

    @property
    def placeholder_count(self) -> int:
        return len(self._records) - self._loaded_count

    def get(self, entity_id: int) -> Entity:
        return self._records[entity_id].entity

    def lookup(self, key: str) -> Entity | None:
        """Return the entity indexed under *key*, if any."""
        index = self._index.get(key)
        return None if index is None else self._records[index].entity

    def source(self, entity_id: int) -> str:
        return self._records[entity_id].source

    def document(self, entity_id: int) -> Mapping[str, Any] | None:
        return self._records[entity_id].document

    def entities(self) -> tuple[Entity, ...]:
        return tuple(record.entity for record in self._records)

    def controllers(self) -> list[Entity]:
        """Loaded Deployments and DaemonSets, in id order."""
        return [
            record.entity
            for record in self._records[: self._loaded_count]
            if record.entity.kind in CONTROLLER_KINDS
        ]

    def view(self, entity_id: int) -> ManifestView:
        """Return the typed view of an entity's document.

        Raises:
            ParseError: the document does not have the shape its kind requires.
        """
        cached = self._views.get(entity_id)
        if cached is not None:
            return cached

        record = self._records[entity_id]
        try:
            view = parse_view(record.entity.kind, record.document)
        except ManifestShapeError as exc:
            raise ParseError(record.source, f"invalid {record.entity.kind} {record.entity.name!r}: {exc}") from exc
        self._views[entity_id] = view
        return view

    # ------------------------------------------------------------------
    # Placeholders
    # ------------------------------------------------------------------

    def resolve_or_synthesize(
        self,
        kind: str,
        name: str,
        placeholder_kind: EntityKind = EntityKind.UNKNOWN_SERVICE,
    ) -> Entity:
        """Return the entity for ``kind/name``, creating a placeholder on a miss.

        The placeholder is indexed under the missed key, so every later
        reference to the same name resolves to it.
        """
        key = entity_key(kind, name)
        existing = self.lookup(key)
        if existing is not None:
            return existing

        placeholder = Entity(id=len(self._records), kind=placeholder_kind.value, name=name)
        self._records.append(_Record(entity=placeholder, key=key, source=_PLACEHOLDER_SOURCE, document=None))
        self._index[key] = placeholder.id
        _logger.debug("placeholder synthesized", key=key, id=placeholder.id, kind=placeholder.kind)
        return placeholder
