"""Configuration loading from environment variables."""

from __future__ import annotations

import os

from k8sdesigner.models.config import (
    DEFAULT_MANIFEST_SUFFIXES,
    DEFAULT_REFERENCE_ANNOTATION,
    DesignerConfig,
    DuplicatePolicy,
    EmptyReferencePolicy,
    GraphConfig,
    LogConfig,
)


def _env(key: str, default: str = "") -> str:
    return os.environ.get(f"K8SDESIGNER_{key}", default)


def _validate_log_level(value: str) -> str:
    valid = {"debug", "info", "warning", "error"}
    if value.lower() not in valid:
        raise ValueError(f"Invalid log level: {value}. Must be one of {valid}")
    return value.lower()


def _validate_annotation(value: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError("Reference annotation key must not be empty")
    return value


def _validate_duplicate_policy(value: str) -> DuplicatePolicy:
    try:
        return DuplicatePolicy(value.lower())
    except ValueError:
        raise ValueError(
            f"Invalid duplicate policy: {value}. Must be one of {[p.value for p in DuplicatePolicy]}"
        ) from None


def _validate_empty_reference_policy(value: str) -> EmptyReferencePolicy:
    try:
        return EmptyReferencePolicy(value.lower())
    except ValueError:
        raise ValueError(
            f"Invalid empty reference policy: {value}. Must be one of {[p.value for p in EmptyReferencePolicy]}"
        ) from None


def _parse_suffixes(value: str) -> tuple[str, ...]:
    suffixes = tuple(s.strip().lower() for s in value.split(",") if s.strip())
    if not suffixes:
        raise ValueError("At least one manifest suffix is required")
    for suffix in suffixes:
        if not suffix.startswith("."):
            raise ValueError(f"Invalid manifest suffix: {suffix}. Suffixes must start with '.'")
    return suffixes


def load_config() -> DesignerConfig:
    """Load configuration from K8SDESIGNER_* environment variables."""
    return DesignerConfig(
        graph=GraphConfig(
            reference_annotation=_validate_annotation(
                _env("REFERENCE_ANNOTATION", DEFAULT_REFERENCE_ANNOTATION)
            ),
            duplicate_policy=_validate_duplicate_policy(_env("DUPLICATE_POLICY", "reject")),
            empty_reference_policy=_validate_empty_reference_policy(_env("EMPTY_REFERENCE_POLICY", "skip")),
            manifest_suffixes=_parse_suffixes(_env("MANIFEST_SUFFIXES", ",".join(DEFAULT_MANIFEST_SUFFIXES))),
        ),
        log=LogConfig(
            level=_validate_log_level(_env("LOG_LEVEL", "warning")),
        ),
    )
