"""Data structures for the manifest dependency graph."""

from __future__ import annotations

from dataclasses import dataclass
from typing import NamedTuple


@dataclass(frozen=True)
class Entity:
    """A node in the dependency graph: a loaded manifest or a placeholder.

    ``id`` is the entity's position in the graph's entity sequence.
    """

    id: int
    kind: str
    name: str

    @property
    def label(self) -> str:
        """Human-readable label, e.g. ``web (Service)``."""
        return f"{self.name} ({self.kind})"


class Reference(NamedTuple):
    """A directed edge between two entity ids.

    Compares equal to a plain ``(source, target)`` tuple.
    """

    source: int
    target: int
