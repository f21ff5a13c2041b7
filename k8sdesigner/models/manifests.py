"""Manifest data structures and typed views.

A manifest is parsed exactly once, by the loader, into a plain mapping.
The resolver never re-reads YAML: it asks for a typed view of the parsed
document instead.  Each kind that carries a resolution rule has its own view
variant, and ``parse_view`` is the single place where a kind string is mapped
to one.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any


class EntityKind(StrEnum):
    """Kubernetes kinds with special meaning during graph construction."""

    INGRESS = "Ingress"
    SERVICE = "Service"
    DEPLOYMENT = "Deployment"
    DAEMON_SET = "DaemonSet"
    UNKNOWN_SERVICE = "UnknownService"  # placeholder for a missing Service
    LIST = "List"  # batch wrapper, expanded by the loader


CONTROLLER_KINDS = frozenset({EntityKind.DEPLOYMENT, EntityKind.DAEMON_SET})


class ManifestShapeError(ValueError):
    """A parsed document does not have the structure its kind requires."""


@dataclass(frozen=True)
class LoadedManifest:
    """One resource document produced by the loader.

    ``document`` is the parsed YAML mapping and must not be mutated.
    ``source`` is ``<path>#<document index>`` and only used for diagnostics.
    """

    kind: str
    name: str
    document: Mapping[str, Any]
    source: str

    @property
    def key(self) -> str:
        return entity_key(self.kind, self.name)


def entity_key(kind: str, name: str) -> str:
    """Return the internal lookup key for a kind/name pair."""
    return f"{kind}/{name}"


# ---------------------------------------------------------------------------
# Shape helpers
# ---------------------------------------------------------------------------


def _mapping(value: Any, path: str) -> Mapping[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ManifestShapeError(f"{path} must be a mapping, got {type(value).__name__}")
    return value


def _sequence(value: Any, path: str) -> list[Any]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise ManifestShapeError(f"{path} must be a list, got {type(value).__name__}")
    return value


def _scalar(value: Any, path: str) -> str:
    # YAML turns `true`, `8080` and empty values into non-strings; Kubernetes
    # treats label values as strings.
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (str, int, float)):
        return str(value)
    raise ManifestShapeError(f"{path} must be a scalar, got {type(value).__name__}")


def _string_map(value: Any, path: str) -> dict[str, str]:
    return {_scalar(k, f"{path} key"): _scalar(v, f"{path}.{k}") for k, v in _mapping(value, path).items()}


def _backend_service_name(backend: Any, path: str) -> str | None:
    """Return the Service a backend points at, or None for non-service backends.

    Accepts both ``backend.service.name`` (networking.k8s.io/v1) and the
    legacy ``backend.serviceName`` (extensions/v1beta1).
    """
    backend = _mapping(backend, path)
    if "service" in backend:
        name = _mapping(backend["service"], f"{path}.service").get("name")
        where = f"{path}.service.name"
    else:
        name = backend.get("serviceName")
        where = f"{path}.serviceName"
    if name is None:
        return None
    if not isinstance(name, str) or not name:
        raise ManifestShapeError(f"{where} must be a non-empty string")
    return name


# ---------------------------------------------------------------------------
# Views
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class IngressView:
    """Service names referenced by an Ingress, in declaration order."""

    backends: tuple[str, ...] = ()

    @classmethod
    def from_document(cls, document: Mapping[str, Any]) -> IngressView:
        spec = _mapping(document.get("spec"), "spec")
        backends: list[str] = []
        for i, rule in enumerate(_sequence(spec.get("rules"), "spec.rules")):
            rule_path = f"spec.rules[{i}]"
            http = _mapping(_mapping(rule, rule_path).get("http"), f"{rule_path}.http")
            for j, http_path in enumerate(_sequence(http.get("paths"), f"{rule_path}.http.paths")):
                entry_path = f"{rule_path}.http.paths[{j}]"
                name = _backend_service_name(_mapping(http_path, entry_path).get("backend"), f"{entry_path}.backend")
                if name is not None:
                    backends.append(name)

        for field_name in ("defaultBackend", "backend"):
            if spec.get(field_name) is not None:
                name = _backend_service_name(spec[field_name], f"spec.{field_name}")
                if name is not None:
                    backends.append(name)
        return cls(backends=tuple(backends))


@dataclass(frozen=True)
class ServiceView:
    """Label selector of a Service."""

    selector: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_document(cls, document: Mapping[str, Any]) -> ServiceView:
        spec = _mapping(document.get("spec"), "spec")
        return cls(selector=_string_map(spec.get("selector"), "spec.selector"))

    def matches(self, labels: Mapping[str, str]) -> bool:
        """True when the selector is non-empty and every key hits with an equal value."""
        if not self.selector:
            return False
        return all(key in labels and labels[key] == value for key, value in self.selector.items())


@dataclass(frozen=True)
class ControllerView:
    """Labels and annotations of a Deployment or DaemonSet."""

    labels: dict[str, str] = field(default_factory=dict)
    annotations: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_document(cls, document: Mapping[str, Any]) -> ControllerView:
        metadata = _mapping(document.get("metadata"), "metadata")
        return cls(
            labels=_string_map(metadata.get("labels"), "metadata.labels"),
            annotations=_string_map(metadata.get("annotations"), "metadata.annotations"),
        )


@dataclass(frozen=True)
class OpaqueView:
    """Any kind without a resolution rule, including placeholders."""


ManifestView = IngressView | ServiceView | ControllerView | OpaqueView


def parse_view(kind: str, document: Mapping[str, Any] | None) -> ManifestView:
    """Derive the typed view for a document of the given kind.

    Raises:
        ManifestShapeError: the document does not match its kind's shape.
    """
    if document is None:
        return OpaqueView()
    match kind:
        case EntityKind.INGRESS:
            return IngressView.from_document(document)
        case EntityKind.SERVICE:
            return ServiceView.from_document(document)
        case EntityKind.DEPLOYMENT | EntityKind.DAEMON_SET:
            return ControllerView.from_document(document)
        case _:
            return OpaqueView()
