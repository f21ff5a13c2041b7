"""k8s-designer: dependency graphs from static Kubernetes manifests."""

from k8sdesigner.graph import DependencyGraph, Entity, Reference, build_graph

__version__ = "0.3.0"

__all__ = [
    "DependencyGraph",
    "Entity",
    "Reference",
    "__version__",
    "build_graph",
]
