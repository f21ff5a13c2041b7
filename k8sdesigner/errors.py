"""Exception taxonomy for graph construction.

Every failure aborts the build in progress; callers never receive a partial
graph.  Catch ``GraphBuildError`` to handle all of them at once.
"""

from __future__ import annotations


class GraphBuildError(Exception):
    """Base class for every error raised while building a dependency graph."""


class FilesystemError(GraphBuildError):
    """Raised when the manifest root or one of its files cannot be read."""

    def __init__(self, path: str, cause: Exception) -> None:
        super().__init__(f"cannot read {path}: {cause}")
        self.path = path
        self.cause = cause


class ParseError(GraphBuildError):
    """Raised when a manifest is not valid YAML or does not have the expected shape."""

    def __init__(self, source: str, detail: str) -> None:
        super().__init__(f"{source}: {detail}")
        self.source = source
        self.detail = detail


class DuplicateEntityError(ParseError):
    """Two loaded manifests share the same kind and name."""

    def __init__(self, key: str, first_source: str, second_source: str) -> None:
        super().__init__(second_source, f"duplicate manifest {key} (first declared in {first_source})")
        self.key = key
        self.first_source = first_source
        self.second_source = second_source


class InvalidReferenceError(ParseError):
    """A reference annotation contains an empty service name."""

    def __init__(self, source: str, annotation: str, value: str) -> None:
        super().__init__(source, f"annotation {annotation}={value!r} contains an empty service name")
        self.annotation = annotation
        self.value = value
