"""
Core data interfaces for cluster_identifier.

These interfaces define the standardized data structures used for communication
between nodes in the pipeline.
"""

from .interfaces import (
    ClusterBatch,
    ClusterCentroid,
    ColoredPoint,
    IdentifiedObject,
    IdentifiedObjectBatch,
    Pose,
    RawCluster,
    ReferenceColor,
    WorkspaceBounds,
)

__all__ = [
    "ClusterBatch",
    "ClusterCentroid",
    "ColoredPoint",
    "IdentifiedObject",
    "IdentifiedObjectBatch",
    "Pose",
    "RawCluster",
    "ReferenceColor",
    "WorkspaceBounds",
]
