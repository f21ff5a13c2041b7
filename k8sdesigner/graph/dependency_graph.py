"""Immutable dependency graph and the ``build_graph`` entry point."""

from __future__ import annotations

import os
import time
from collections.abc import Iterable

from k8sdesigner.graph.models import Entity, Reference
from k8sdesigner.graph.registry import EntityRegistry
from k8sdesigner.graph.resolver import DependencyResolver
from k8sdesigner.loader.manifest_loader import load_manifests
from k8sdesigner.models.config import GraphConfig
from k8sdesigner.observability.logging import get_logger

_logger = get_logger("graph.dependency_graph")


class DependencyGraph:
    """Entities and the deduplicated references between them.

    Instances are read-only snapshots: to pick up changes on disk, call
    ``build_graph`` again and replace the old graph wholesale.
    """

    __slots__ = ("_entities", "_references")

    def __init__(self, entities: Iterable[Entity], references: Iterable[Reference]) -> None:
        self._entities: tuple[Entity, ...] = tuple(entities)
        self._references: frozenset[Reference] = frozenset(Reference(*ref) for ref in references)
        for ref in self._references:
            if not (0 <= ref.source < len(self._entities) and 0 <= ref.target < len(self._entities)):
                raise ValueError(f"reference {tuple(ref)} points outside the entity list")

    def __repr__(self) -> str:
        return f"DependencyGraph(entities={self.entity_count}, references={self.reference_count})"

    def entities(self) -> tuple[Entity, ...]:
        """All entities, ordered by id."""
        return self._entities

    def references(self) -> frozenset[Reference]:
        """Distinct ``(source, target)`` id pairs."""
        return self._references

    @property
    def entity_count(self) -> int:
        return len(self._entities)

    @property
    def reference_count(self) -> int:
        return len(self._references)

    def outgoing(self, entity_id: int) -> list[Entity]:
        """Entities referenced by *entity_id*, ordered by id."""
        return [self._entities[ref.target] for ref in sorted(self._references) if ref.source == entity_id]

    def incoming(self, entity_id: int) -> list[Entity]:
        """Entities referencing *entity_id*, ordered by id."""
        return [self._entities[ref.source] for ref in sorted(self._references) if ref.target == entity_id]


def build_graph(root: str | os.PathLike[str], config: GraphConfig | None = None) -> DependencyGraph:
    """Build a dependency graph from the manifests under *root*.

    Loading finishes completely before resolution starts.  Every call reads
    the filesystem again; nothing is shared between calls.

    Raises:
        FilesystemError: the root or one of its files cannot be read.
        ParseError: invalid YAML, a malformed manifest, a duplicate manifest
            (``reject`` policy) or an empty annotation segment (``reject``
            policy).
    """
    config = config or GraphConfig()
    t_start = time.monotonic()

    manifests = load_manifests(root, config.manifest_suffixes)
    registry = EntityRegistry.from_manifests(manifests, config.duplicate_policy)
    resolver = DependencyResolver(
        registry,
        reference_annotation=config.reference_annotation,
        empty_reference_policy=config.empty_reference_policy,
    )
    references = resolver.resolve()
    graph = DependencyGraph(registry.entities(), references)

    _logger.info(
        "graph built",
        root=str(root),
        entities=graph.entity_count,
        placeholders=registry.placeholder_count,
        references=graph.reference_count,
        duration_ms=round((time.monotonic() - t_start) * 1000.0, 2),
    )
    return graph
