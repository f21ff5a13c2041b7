"""Kind-to-marker mapping and node-link dataset.

A renderer shows one node per entity and one arrow per reference.  It only
needs a label and a marker shape per node, so this module is the whole
contract between the graph and any visualisation built on top of it.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from k8sdesigner.graph.dependency_graph import DependencyGraph
from k8sdesigner.models.manifests import EntityKind


class NodeMarker(StrEnum):
    """Marker shapes understood by vis-network style renderers."""

    INGRESS = "dot"
    SERVICE = "diamond"
    DEPLOYMENT = "square"
    DAEMON_SET = "triangle"
    DEFAULT = "triangleDown"


_KIND_MARKERS: dict[str, NodeMarker] = {
    EntityKind.INGRESS: NodeMarker.INGRESS,
    EntityKind.SERVICE: NodeMarker.SERVICE,
    EntityKind.DEPLOYMENT: NodeMarker.DEPLOYMENT,
    EntityKind.DAEMON_SET: NodeMarker.DAEMON_SET,
}


def marker_for_kind(kind: str) -> NodeMarker:
    """Return the marker for *kind*; unknown kinds and placeholders share the default."""
    return _KIND_MARKERS.get(kind, NodeMarker.DEFAULT)


def build_dataset(graph: DependencyGraph) -> dict[str, list[dict[str, Any]]]:
    """Return ``{"nodes": [...], "edges": [...]}`` ready for JSON encoding.

    Nodes are ordered by id and edges by ``(from, to)``.
    """
    nodes = [
        {"id": entity.id, "label": entity.label, "shape": marker_for_kind(entity.kind).value}
        for entity in graph.entities()
    ]
    edges = [{"from": ref.source, "to": ref.target} for ref in sorted(graph.references())]
    return {"nodes": nodes, "edges": edges}
