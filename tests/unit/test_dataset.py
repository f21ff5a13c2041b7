"""Tests for the renderer-facing marker mapping and node-link dataset."""

from __future__ import annotations

import json

import pytest

from k8sdesigner.graph import DependencyGraph, Entity, Reference
from k8sdesigner.render import NodeMarker, build_dataset, marker_for_kind


class TestMarkers:
    @pytest.mark.parametrize(
        ("kind", "marker"),
        [
            ("Ingress", NodeMarker.INGRESS),
            ("Service", NodeMarker.SERVICE),
            ("Deployment", NodeMarker.DEPLOYMENT),
            ("DaemonSet", NodeMarker.DAEMON_SET),
            ("UnknownService", NodeMarker.DEFAULT),
            ("ConfigMap", NodeMarker.DEFAULT),
            ("", NodeMarker.DEFAULT),
        ],
    )
    def test_marker_for_kind(self, kind: str, marker: NodeMarker) -> None:
        assert marker_for_kind(kind) is marker

    def test_marker_values(self) -> None:
        assert [m.value for m in NodeMarker] == ["dot", "diamond", "square", "triangle", "triangleDown"]


class TestBuildDataset:
    def test_nodes_and_edges(self) -> None:
        graph = DependencyGraph(
            [
                Entity(0, "Ingress", "edge"),
                Entity(1, "Service", "web"),
                Entity(2, "Deployment", "web"),
                Entity(3, "UnknownService", "ghost"),
            ],
            [Reference(1, 2), Reference(0, 3), Reference(0, 1)],
        )

        dataset = build_dataset(graph)

        assert dataset["nodes"] == [
            {"id": 0, "label": "edge (Ingress)", "shape": "dot"},
            {"id": 1, "label": "web (Service)", "shape": "diamond"},
            {"id": 2, "label": "web (Deployment)", "shape": "square"},
            {"id": 3, "label": "ghost (UnknownService)", "shape": "triangleDown"},
        ]
        assert dataset["edges"] == [{"from": 0, "to": 1}, {"from": 0, "to": 3}, {"from": 1, "to": 2}]

    def test_dataset_is_json_serialisable(self) -> None:
        graph = DependencyGraph([Entity(0, "Service", "web")], [])
        assert json.loads(json.dumps(build_dataset(graph))) == {
            "nodes": [{"id": 0, "label": "web (Service)", "shape": "diamond"}],
            "edges": [],
        }
