"""Manifest discovery and parsing.

Walks a directory tree, parses every YAML file once and flattens ``List``
wrappers, producing manifests in a deterministic order: directory entries
are sorted at every level, so two loads of an unchanged tree yield the same
sequence and therefore the same entity ids.
"""

from __future__ import annotations

import os
from collections.abc import Iterator, Mapping
from pathlib import Path
from typing import Any

import yaml

from k8sdesigner.errors import FilesystemError, ParseError
from k8sdesigner.models.config import DEFAULT_MANIFEST_SUFFIXES
from k8sdesigner.models.manifests import EntityKind, LoadedManifest
from k8sdesigner.observability.logging import get_logger

_logger = get_logger("loader.manifest_loader")

# Lists of Lists do not occur in practice; this only stops runaway recursion.
MAX_LIST_DEPTH = 8


def _raise_walk_error(exc: OSError) -> None:
    raise FilesystemError(str(exc.filename or ""), exc) from exc


def discover_manifest_files(
    root: str | os.PathLike[str],
    suffixes: tuple[str, ...] = DEFAULT_MANIFEST_SUFFIXES,
) -> Iterator[Path]:
    """Yield manifest files under *root* in sorted traversal order.

    *root* may also be a single file, which is yielded if its suffix matches.
    Symlinked directories are not followed.

    Raises:
        FilesystemError: *root* does not exist or a directory cannot be listed.
    """
    root_path = Path(root)
    if not root_path.exists():
        raise FilesystemError(str(root_path), FileNotFoundError("no such file or directory"))

    if not root_path.is_dir():
        if root_path.name.lower().endswith(suffixes):
            yield root_path
        return

    for dirpath, dirnames, filenames in os.walk(root_path, onerror=_raise_walk_error):
        dirnames.sort()
        for filename in sorted(filenames):
            if filename.lower().endswith(suffixes):
                yield Path(dirpath) / filename


def _read_file(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise ParseError(str(path), f"not valid UTF-8: {exc}") from exc
    except OSError as exc:
        raise FilesystemError(str(path), exc) from exc


def _collect(document: Any, source: str, out: list[LoadedManifest], depth: int = 0) -> None:
    """Append the manifest(s) held by *document* to *out*.

    Documents without a ``kind`` are ignored: they are typically values
    files or other templating artifacts living next to real manifests.
    """
    if not isinstance(document, Mapping) or document.get("kind") is None:
        _logger.debug("skipping document without kind", source=source)
        return

    kind = document["kind"]
    if not isinstance(kind, str) or not kind:
        raise ParseError(source, "kind must be a non-empty string")

    if kind == EntityKind.LIST:
        if depth >= MAX_LIST_DEPTH:
            raise ParseError(source, f"List nesting exceeds {MAX_LIST_DEPTH} levels")
        items = document.get("items")
        if items is None:
            return
        if not isinstance(items, list):
            raise ParseError(source, f"List items must be a list, got {type(items).__name__}")
        for index, item in enumerate(items):
            _collect(item, f"{source}.items[{index}]", out, depth + 1)
        return

    metadata = document.get("metadata")
    name = metadata.get("name") if isinstance(metadata, Mapping) else None
    if not isinstance(name, str) or not name:
        raise ParseError(source, f"{kind} manifest requires a non-empty metadata.name")

    out.append(LoadedManifest(kind=kind, name=name, document=document, source=source))


def parse_manifests(content: str, path: str) -> list[LoadedManifest]:
    """Parse the YAML text of one file into manifests.

    Every document of a multi-document file is handled independently.

    Raises:
        ParseError: invalid YAML, or a document with a kind but a broken shape.
    """
    try:
        documents = list(yaml.safe_load_all(content))
    except yaml.YAMLError as exc:
        raise ParseError(path, f"invalid YAML: {exc}") from exc

    manifests: list[LoadedManifest] = []
    for index, document in enumerate(documents):
        _collect(document, f"{path}#{index}", manifests)
    return manifests


def load_manifests(
    root: str | os.PathLike[str],
    suffixes: tuple[str, ...] = DEFAULT_MANIFEST_SUFFIXES,
) -> list[LoadedManifest]:
    """Load every manifest under *root*, in traversal order.

    No partial result is ever returned: the first read or parse failure
    aborts the whole load.

    Raises:
        FilesystemError: the root or a file cannot be read.
        ParseError: a file is not valid YAML or a manifest is malformed.
    """
    manifests: list[LoadedManifest] = []
    files = 0
    for path in discover_manifest_files(root, suffixes):
        files += 1
        manifests.extend(parse_manifests(_read_file(path), str(path)))

    _logger.debug("manifests loaded", root=str(root), files=files, manifests=len(manifests))
    return manifests
