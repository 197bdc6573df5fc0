"""
Workspace filter node.

Only clusters whose centroid lies strictly inside the workspace rectangle are
passed on.
"""

import logging
from typing import Any, Optional

from ..core.node import Node
from ..interfaces import ClusterCentroid, WorkspaceBounds

logger = logging.getLogger(__name__)


def is_inside(point: Any, bounds: WorkspaceBounds) -> bool:
    """
    Check if a point lies strictly inside the workspace rectangle.

    Only x and y are tested; points exactly on a bound are outside.

    Args:
        point: Object with ``x`` and ``y`` attributes, or a sequence (x, y, ...)
        bounds: Workspace rectangle

    Returns:
        True if ``x_lo < x < x_up`` and ``y_right < y < y_left``
    """
    if hasattr(point, "x") and hasattr(point, "y"):
        x, y = point.x, point.y
    else:
        x, y = point[0], point[1]

    return bounds.x_lo < x < bounds.x_up and bounds.y_right < y < bounds.y_left


class WorkspaceFilterNode(Node):
    """
    Node dropping centroids that lie outside the workspace.

    Returns the centroid unchanged when inside, None otherwise.
    """

    def __init__(self, bounds: WorkspaceBounds, name: str = None, **kwargs):
        """
        Initialize workspace filter node.

        Args:
            bounds: Workspace rectangle
            **kwargs: Additional configuration
        """
        super().__init__(name=name or "WorkspaceFilter", **kwargs)
        self.bounds = bounds

    def process(self, centroid: ClusterCentroid) -> Optional[ClusterCentroid]:
        if is_inside(centroid, self.bounds):
            return centroid

        logger.warning(
            f"The processed cluster is outside the workspace: "
            f"centroid ({centroid.x:.3f}, {centroid.y:.3f}, {centroid.z:.3f})"
        )
        return None
