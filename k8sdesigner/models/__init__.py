"""Core data structures for k8s-designer."""

from k8sdesigner.models.config import (
    DesignerConfig,
    DuplicatePolicy,
    EmptyReferencePolicy,
    GraphConfig,
    LogConfig,
)
from k8sdesigner.models.manifests import (
    CONTROLLER_KINDS,
    ControllerView,
    EntityKind,
    IngressView,
    LoadedManifest,
    ManifestShapeError,
    ManifestView,
    OpaqueView,
    ServiceView,
    entity_key,
    parse_view,
)

__all__ = [
    "CONTROLLER_KINDS",
    "ControllerView",
    "DesignerConfig",
    "DuplicatePolicy",
    "EmptyReferencePolicy",
    "EntityKind",
    "GraphConfig",
    "IngressView",
    "LoadedManifest",
    "LogConfig",
    "ManifestShapeError",
    "ManifestView",
    "OpaqueView",
    "ServiceView",
    "entity_key",
    "parse_view",
]
