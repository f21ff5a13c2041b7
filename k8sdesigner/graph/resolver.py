"""Per-kind dependency rules.

Entities are visited in ascending id order and each one is dispatched on its
typed view:

    Ingress              -> every Service named by a backend
    Service              -> every Deployment/DaemonSet its selector matches
    Deployment/DaemonSet -> every Service listed in the reference annotation
    anything else        -> nothing

References to Services that were not loaded are pointed at ``UnknownService``
placeholders, which are created before the reference is recorded.
"""

from __future__ import annotations

from k8sdesigner.errors import InvalidReferenceError
from k8sdesigner.graph.models import Entity, Reference
from k8sdesigner.graph.registry import EntityRegistry
from k8sdesigner.models.config import DEFAULT_REFERENCE_ANNOTATION, EmptyReferencePolicy
from k8sdesigner.models.manifests import (
    ControllerView,
    EntityKind,
    IngressView,
    OpaqueView,
    ServiceView,
)
from k8sdesigner.observability.logging import get_logger

_logger = get_logger("graph.resolver")


class DependencyResolver:
    """Derives references between the entities of a registry.

    The resolver appends placeholders to the registry it is given.  The
    references it returns may contain duplicates.
    """

    def __init__(
        self,
        registry: EntityRegistry,
        reference_annotation: str = DEFAULT_REFERENCE_ANNOTATION,
        empty_reference_policy: EmptyReferencePolicy = EmptyReferencePolicy.SKIP,
    ) -> None:
        self._registry = registry
        self._reference_annotation = reference_annotation
        self._empty_reference_policy = empty_reference_policy
        self._references: list[Reference] = []

    def resolve(self) -> list[Reference]:
        """Run every rule once over the registry.

        Raises:
            ParseError: a manifest does not match its kind's shape, or an
                annotation is rejected by the empty reference policy.
        """
        for entity in self._registry:
            self._resolve_entity(entity)
        return list(self._references)

    def _resolve_entity(self, entity: Entity) -> None:
        match self._registry.view(entity.id):
            case IngressView(backends=backends):
                for service_name in backends:
                    self._reference_service(entity, service_name)
            case ServiceView() as service:
                self._resolve_selector(entity, service)
            case ControllerView(annotations=annotations):
                self._resolve_annotation(entity, annotations.get(self._reference_annotation))
            case OpaqueView():
                pass

    def _reference(self, source: Entity, target: Entity) -> None:
        _logger.debug(
            "reference",
            source=f"{source.kind}/{source.name}",
            target=f"{target.kind}/{target.name}",
        )
        self._references.append(Reference(source.id, target.id))

    def _reference_service(self, source: Entity, service_name: str) -> None:
        target = self._registry.resolve_or_synthesize(EntityKind.SERVICE, service_name)
        self._reference(source, target)

    def _resolve_selector(self, service: Entity, view: ServiceView) -> None:
        if not view.selector:
            return
        for controller in self._registry.controllers():
            candidate = self._registry.view(controller.id)
            if isinstance(candidate, ControllerView) and view.matches(candidate.labels):
                self._reference(service, controller)

    def _resolve_annotation(self, controller: Entity, value: str | None) -> None:
        if value is None:
            return
        for segment in value.split(","):
            service_name = segment.strip()
            if service_name:
                self._reference_service(controller, service_name)
                continue
            if self._empty_reference_policy is EmptyReferencePolicy.REJECT:
                raise InvalidReferenceError(self._registry.source(controller.id), self._reference_annotation, value)
            _logger.warning(
                "empty service name in reference annotation skipped",
                controller=f"{controller.kind}/{controller.name}",
                annotation=self._reference_annotation,
                value=value,
            )
