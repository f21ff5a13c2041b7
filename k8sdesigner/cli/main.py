"""Click commands for k8s-designer.

Usage:
    k8sdesigner graph ./manifests
    k8sdesigner --log-level debug graph ./manifests --format text
"""

from __future__ import annotations

import dataclasses
import json

import click

from k8sdesigner import __version__
from k8sdesigner.config import load_config
from k8sdesigner.errors import GraphBuildError
from k8sdesigner.graph import DependencyGraph, build_graph
from k8sdesigner.models.config import DesignerConfig, DuplicatePolicy, EmptyReferencePolicy
from k8sdesigner.observability.logging import get_logger, setup_logging
from k8sdesigner.render import build_dataset

_LOG_LEVELS = ("debug", "info", "warning", "error")


def _format_text(graph: DependencyGraph) -> str:
    entities = graph.entities()
    lines = ["entities:"]
    lines.extend(f"  {entity.id:>4}  {entity.label}" for entity in entities)
    lines.append("references:")
    lines.extend(
        f"  {entities[ref.source].label} -> {entities[ref.target].label}" for ref in sorted(graph.references())
    )
    return "\n".join(lines)


@click.group()
@click.version_option(__version__, prog_name="k8sdesigner")
@click.option(
    "--log-level",
    type=click.Choice(_LOG_LEVELS, case_sensitive=False),
    default=None,
    help="Log level for stderr output (default: K8SDESIGNER_LOG_LEVEL or warning).",
)
@click.pass_context
def cli(ctx: click.Context, log_level: str | None) -> None:
    """Plot dependencies between Kubernetes manifests."""
    try:
        config = load_config()
    except ValueError as exc:
        raise click.ClickException(f"invalid configuration: {exc}") from exc
    if log_level is not None:
        config.log.level = log_level.lower()
    setup_logging(config.log.level)
    ctx.obj = config


@cli.command()
@click.argument("path", type=click.Path(path_type=str))
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["json", "text"]),
    default="json",
    show_default=True,
    help="json: node-link dataset for a renderer; text: readable listing.",
)
@click.option(
    "--duplicates",
    type=click.Choice([p.value for p in DuplicatePolicy]),
    default=None,
    help="How to treat two manifests with the same kind and name.",
)
@click.option(
    "--empty-references",
    type=click.Choice([p.value for p in EmptyReferencePolicy]),
    default=None,
    help="How to treat empty names in the reference annotation.",
)
@click.pass_obj
def graph(
    config: DesignerConfig,
    path: str,
    output_format: str,
    duplicates: str | None,
    empty_references: str | None,
) -> None:
    """Build the dependency graph of the manifests under PATH."""
    graph_config = config.graph
    if duplicates is not None:
        graph_config = dataclasses.replace(graph_config, duplicate_policy=DuplicatePolicy(duplicates))
    if empty_references is not None:
        graph_config = dataclasses.replace(
            graph_config, empty_reference_policy=EmptyReferencePolicy(empty_references)
        )

    try:
        result = build_graph(path, graph_config)
    except GraphBuildError as exc:
        get_logger("cli").error("graph build failed", path=path, error=str(exc))
        click.echo(f"error: {exc}", err=True)
        raise SystemExit(1) from exc

    if output_format == "json":
        click.echo(json.dumps(build_dataset(result), indent=2))
    else:
        click.echo(_format_text(result))
