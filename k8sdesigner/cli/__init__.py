"""k8s-designer command-line interface.

Exposes:
    cli -- Click group entry point (registered as ``k8sdesigner`` script).
"""

from k8sdesigner.cli.main import cli

__all__ = ["cli"]
