"""
Centroid node.

This node reduces a cluster of colored points to its mean position and mean color.
"""

from typing import Any

import numpy as np

from ..core.node import Node
from ..exceptions import EmptyClusterError, MalformedClusterError
from ..interfaces import ClusterCentroid, RawCluster


def as_raw_cluster(data: Any) -> RawCluster:
    """
    Decode cluster data into a RawCluster.

    Accepts a RawCluster, an (N, 4) array-like of (x, y, z, packed_rgb) rows,
    or a sequence of ColoredPoints / point mappings.

    Raises:
        MalformedClusterError: If the data cannot be decoded
    """
    if isinstance(data, RawCluster):
        return data

    if isinstance(data, np.ndarray):
        return RawCluster.from_xyzrgb(data)

    try:
        points = list(data)
    except TypeError as e:
        raise MalformedClusterError(f"Cluster data is not a sequence of points: {e}") from e

    if points and isinstance(points[0], (list, tuple, np.ndarray)):
        return RawCluster.from_xyzrgb(points)
    return RawCluster.from_points(points)


def compute_centroid(cluster: RawCluster) -> ClusterCentroid:
    """
    Compute the unweighted mean position and mean color of a cluster.

    Args:
        cluster: Cluster of colored points

    Returns:
        ClusterCentroid with real-valued mean position and color

    Raises:
        EmptyClusterError: If the cluster has no points
    """
    if len(cluster) == 0:
        raise EmptyClusterError("Cannot compute the centroid of an empty cluster")

    position = cluster.points.mean(axis=0)
    color = cluster.colors.astype(np.float64).mean(axis=0)

    return ClusterCentroid(position=position, color=color, num_points=len(cluster))


class CentroidNode(Node):
    """
    Node computing the centroid of a cluster.

    Raw cluster data is decoded first, so malformed clusters surface here as
    MalformedClusterError and empty ones as EmptyClusterError.
    """

    def __init__(self, name: str = None, **kwargs):
        super().__init__(name=name or "Centroid", **kwargs)

    def process(self, cluster: Any) -> ClusterCentroid:
        return compute_centroid(as_raw_cluster(cluster))
