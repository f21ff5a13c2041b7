"""Node-link dataset for graph renderers.

Submodules:
    dataset -- Kind-to-marker mapping and the nodes/edges payload.
"""

from k8sdesigner.render.dataset import NodeMarker, build_dataset, marker_for_kind

__all__ = ["NodeMarker", "build_dataset", "marker_for_kind"]
