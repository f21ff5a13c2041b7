"""Manifest dependency graph.

Builds an in-memory graph from static manifests: Ingress -> Service via
backends, Service -> Deployment/DaemonSet via label selectors, and
Deployment/DaemonSet -> Service via the ``kube.references.services``
annotation.
"""

from k8sdesigner.graph.dependency_graph import DependencyGraph, build_graph
from k8sdesigner.graph.models import Entity, Reference
from k8sdesigner.graph.registry import EntityRegistry
from k8sdesigner.graph.resolver import DependencyResolver

__all__ = [
    "DependencyGraph",
    "DependencyResolver",
    "Entity",
    "EntityRegistry",
    "Reference",
    "build_graph",
]
