"""Manifest loader package.

Submodules:
    manifest_loader -- Sorted YAML discovery, parsing and List expansion.
"""

from k8sdesigner.loader.manifest_loader import (
    MAX_LIST_DEPTH,
    discover_manifest_files,
    load_manifests,
    parse_manifests,
)

__all__ = [
    "MAX_LIST_DEPTH",
    "discover_manifest_files",
    "load_manifests",
    "parse_manifests",
]
