"""Configuration data structures."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum

DEFAULT_REFERENCE_ANNOTATION = "kube.references.services"
DEFAULT_MANIFEST_SUFFIXES = (".yaml", ".yml")


class DuplicatePolicy(StrEnum):
    """What to do when two manifests share the same kind and name."""

    REJECT = "reject"
    SHADOW = "shadow"


class EmptyReferencePolicy(StrEnum):
    """What to do with an empty segment in a reference annotation (e.g. ``"a,,b"``)."""

    SKIP = "skip"
    REJECT = "reject"


@dataclass
class GraphConfig:
    """Graph construction configuration."""

    reference_annotation: str = DEFAULT_REFERENCE_ANNOTATION
    duplicate_policy: DuplicatePolicy = DuplicatePolicy.REJECT
    empty_reference_policy: EmptyReferencePolicy = EmptyReferencePolicy.SKIP
    manifest_suffixes: tuple[str, ...] = DEFAULT_MANIFEST_SUFFIXES


@dataclass
class LogConfig:
    """Logging configuration."""

    level: str = "warning"


@dataclass
class DesignerConfig:
    """Top-level k8s-designer configuration."""

    graph: GraphConfig = field(default_factory=GraphConfig)
    log: LogConfig = field(default_factory=LogConfig)
