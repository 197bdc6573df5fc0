"""
cluster_identifier - color-based identification of segmented point clusters

Reduces each segmented cluster to its centroid, keeps the ones inside the
workspace and labels them with the nearest color of a fixed reference palette.
"""

__version__ = "0.1.0"

from .config import IdentifierConfig, load_config
from .core.node import Node
from .core.pipeline import Pipeline
from .exceptions import (
    ClusterIdentifierError,
    ConfigurationError,
    EmptyClusterError,
    EmptyPaletteError,
    InvalidBoundsError,
    MalformedBatchError,
    MalformedClusterError,
)
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
    "Pipeline",
    "Node",
    "IdentifierConfig",
    "load_config",
    "ClusterBatch",
    "ClusterCentroid",
    "ColoredPoint",
    "IdentifiedObject",
    "IdentifiedObjectBatch",
    "Pose",
    "RawCluster",
    "ReferenceColor",
    "WorkspaceBounds",
    "ClusterIdentifierError",
    "ConfigurationError",
    "EmptyClusterError",
    "EmptyPaletteError",
    "InvalidBoundsError",
    "MalformedBatchError",
    "MalformedClusterError",
]
