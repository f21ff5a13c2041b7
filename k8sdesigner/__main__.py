"""Entry point for `python -m k8sdesigner`.

Usage:
    python -m k8sdesigner graph ./manifests
    uv run python -m k8sdesigner graph ./manifests --format text
"""

from __future__ import annotations

from k8sdesigner.cli import cli

cli()
