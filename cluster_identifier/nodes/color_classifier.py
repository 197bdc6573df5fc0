"""
Color classifier node.

Maps a color to the id of the nearest entry of an ordered reference palette.
"""

import logging
from typing import Sequence, Tuple

import numpy as np
from scipy.spatial.distance import cdist

from ..core.node import Node
from ..exceptions import EmptyPaletteError
from ..interfaces import ClusterCentroid, ReferenceColor

logger = logging.getLogger(__name__)


def squared_distances(color: Sequence[float], palette: Sequence[ReferenceColor]) -> np.ndarray:
    """
    Squared Euclidean RGB distance from a color to every palette entry.

    Args:
        color: (r, g, b)
        palette: Ordered reference colors

    Returns:
        Distances as numpy array (len(palette),), in palette order
    """
    if len(palette) == 0:
        raise EmptyPaletteError("Cannot classify against an empty palette")

    query = np.asarray(color, dtype=np.float64).reshape(1, 3)
    references = np.array([entry.rgb for entry in palette], dtype=np.float64)

    return cdist(query, references, "sqeuclidean")[0]


def nearest_color(color: Sequence[float], palette: Sequence[ReferenceColor]) -> Tuple[ReferenceColor, float]:
    """
    Find the nearest palette entry to a color.

    When several entries are equally close the one appearing first in the
    palette wins.

    Returns:
        Tuple of (nearest ReferenceColor, squared distance)
    """
    distances = squared_distances(color, palette)
    # argmin returns the first index among equal minima
    index = int(np.argmin(distances))
    return palette[index], float(distances[index])


def classify(color: Sequence[float], palette: Sequence[ReferenceColor]) -> int:
    """
    Classify a color against a palette.

    Args:
        color: (r, g, b)
        palette: Ordered reference colors

    Returns:
        Id of the nearest palette entry

    Raises:
        EmptyPaletteError: If the palette is empty
    """
    reference, _ = nearest_color(color, palette)
    return reference.id


class ColorClassifierNode(Node):
    """
    Node classifying a cluster centroid by its mean color.

    Outputs a tuple of (centroid, nearest ReferenceColor).
    """

    def __init__(self, palette: Sequence[ReferenceColor], name: str = None, **kwargs):
        """
        Initialize color classifier node.

        Args:
            palette: Ordered reference colors, earlier entries win ties
            **kwargs: Additional configuration
        """
        super().__init__(name=name or "ColorClassifier", **kwargs)
        if len(palette) == 0:
            raise EmptyPaletteError("ColorClassifierNode requires a non-empty palette")
        self.palette = tuple(palette)

    def process(self, centroid: ClusterCentroid) -> Tuple[ClusterCentroid, ReferenceColor]:
        reference, distance = nearest_color(centroid.rgb, self.palette)

        logger.debug(
            f"The centroid of the cluster is pos: ({centroid.x:.3f}, {centroid.y:.3f}, "
            f"{centroid.z:.3f}) / col: {centroid.rgb}; id {reference.id} "
            f"({reference.name}, squared distance {distance:.0f})"
        )

        return centroid, reference
