"""Shared fixtures for k8s-designer tests.

Manifest trees are written under pytest's ``tmp_path`` so every test builds
its graph from real files, exactly like the CLI does.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from pathlib import Path
from typing import Any

import pytest
import structlog
import yaml


@pytest.fixture(autouse=True)
def _reset_structlog() -> Iterator[None]:
    """Undo any ``setup_logging`` call (e.g. from CLI tests) after each test."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def write_manifests(tmp_path: Path) -> Callable[..., Path]:
    """Return a helper writing YAML documents to ``tmp_path / relative``.

    Several documents end up in one multi-document file.
    """

    def _write(relative: str, *documents: dict[str, Any] | None) -> Path:
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(yaml.safe_dump_all(list(documents), sort_keys=False), encoding="utf-8")
        return path

    return _write
