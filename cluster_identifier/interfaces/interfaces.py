"""
Core data interfaces for cluster_identifier.

These interfaces define the standardized data structures passed between the
nodes of the identification pipeline.
"""

import math
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

import numpy as np
import numpy.typing as npt

from ..exceptions import MalformedClusterError
from ..utils.rgb import unpack_rgb


@dataclass(frozen=True)
class ColoredPoint:
    """
    A single 3D point with an RGB color.

    Attributes:
        x, y, z: Position in metres
        r, g, b: Color channels in [0, 255]
    """

    x: float
    y: float
    z: float
    r: int
    g: int
    b: int

    @classmethod
    def from_packed(cls, x: float, y: float, z: float, rgb: int) -> "ColoredPoint":
        """Create a point from a position and a packed RGB integer."""
        r, g, b = unpack_rgb(rgb)
        return cls(x=x, y=y, z=z, r=r, g=g, b=b)


def _packed_rgb_field(value: Any, index: int) -> int:
    """Validate a packed rgb field the same way as the rgb column of XYZRGB rows."""
    if isinstance(value, float) and not value.is_integer():
        raise MalformedClusterError(f"Point {index} packed rgb {value} is not an integer")
    packed = int(value)
    if not 0 <= packed <= 0xFFFFFFFF:
        raise MalformedClusterError(
            f"Point {index} packed rgb {packed} is not an unsigned 32-bit integer"
        )
    return packed


@dataclass
class RawCluster:
    """
    Unordered set of colored points believed to belong to one object.

    Attributes:
        points: Positions as numpy array (N, 3)
        colors: Colors as numpy array (N, 3) of uint8
        metadata: Additional metadata dictionary
    """

    points: npt.NDArray[np.float64]
    colors: npt.NDArray[np.uint8]
    metadata: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        try:
            points = np.asarray(self.points, dtype=np.float64)
            colors = np.asarray(self.colors, dtype=np.int64)
        except (TypeError, ValueError, OverflowError) as e:
            raise MalformedClusterError(f"Cannot decode cluster data: {e}") from e

        if points.size == 0:
            points = points.reshape(0, 3)
        if colors.size == 0:
            colors = colors.reshape(0, 3)

        if points.ndim != 2 or points.shape[1] != 3:
            raise MalformedClusterError(
                f"Cluster points must have shape (N, 3), got {points.shape}"
            )
        if colors.shape != points.shape:
            raise MalformedClusterError(
                f"Cluster colors must match points shape {points.shape}, got {colors.shape}"
            )
        if not np.all(np.isfinite(points)):
            raise MalformedClusterError("Cluster contains non-finite coordinates")
        if colors.size and (colors.min() < 0 or colors.max() > 255):
            raise MalformedClusterError("Cluster colors must lie in [0, 255]")

        self.points = points
        self.colors = colors.astype(np.uint8)

    @classmethod
    def from_xyzrgb(cls, data: Any) -> "RawCluster":
        """
        Decode a cluster from an (N, 4) array of (x, y, z, packed_rgb).

        Args:
            data: Array-like of rows (x, y, z, rgb)

        Returns:
            RawCluster with unpacked colors
        """
        try:
            array = np.asarray(data, dtype=np.float64)
        except (TypeError, ValueError, OverflowError) as e:
            raise MalformedClusterError(f"Cannot decode cluster data: {e}") from e

        if array.size == 0:
            return cls(points=np.empty((0, 3)), colors=np.empty((0, 3), dtype=np.uint8))

        if array.ndim != 2 or array.shape[1] != 4:
            raise MalformedClusterError(
                f"Expected rows of (x, y, z, rgb), got array of shape {array.shape}"
            )

        packed = array[:, 3]
        if not np.all(np.isfinite(packed)) or np.any(packed < 0) or np.any(packed > 0xFFFFFFFF):
            raise MalformedClusterError("Packed rgb values must be unsigned 32-bit integers")
        if np.any(packed != np.floor(packed)):
            raise MalformedClusterError("Packed rgb values must be integers")

        return cls(points=array[:, :3], colors=unpack_rgb(packed.astype(np.uint32)))

    @classmethod
    def from_points(cls, points: Iterable[Any]) -> "RawCluster":
        """
        Build a cluster from individual points.

        Each point is a ColoredPoint or a mapping with keys x, y, z and either
        ``rgb`` (packed) or ``r``, ``g``, ``b``.

        Raises:
            MalformedClusterError: If a point is missing required fields
        """
        positions: List[Tuple[float, float, float]] = []
        colors: List[Tuple[int, int, int]] = []

        for index, point in enumerate(points):
            if isinstance(point, ColoredPoint):
                positions.append((point.x, point.y, point.z))
                colors.append((point.r, point.g, point.b))
                continue

            if not isinstance(point, Mapping):
                raise MalformedClusterError(
                    f"Point {index} has unsupported type {type(point).__name__}"
                )

            try:
                position = (float(point["x"]), float(point["y"]), float(point["z"]))
                if "rgb" in point:
                    color = unpack_rgb(_packed_rgb_field(point["rgb"], index))
                else:
                    color = (int(point["r"]), int(point["g"]), int(point["b"]))
            except KeyError as e:
                raise MalformedClusterError(f"Point {index} is missing field {e}") from e
            except MalformedClusterError:
                raise
            except (TypeError, ValueError, OverflowError) as e:
                raise MalformedClusterError(f"Point {index} has an invalid field: {e}") from e

            positions.append(position)
            colors.append(color)

        # Array conversion and range checks happen in __post_init__
        return cls(points=positions, colors=colors)

    def __len__(self) -> int:
        return len(self.points)

    def __iter__(self):
        for position, color in zip(self.points, self.colors):
            yield ColoredPoint(
                x=float(position[0]),
                y=float(position[1]),
                z=float(position[2]),
                r=int(color[0]),
                g=int(color[1]),
                b=int(color[2]),
            )


@dataclass(frozen=True)
class ReferenceColor:
    """
    A named palette entry tagged with an object id.

    Attributes:
        name: Human readable color name
        r, g, b: Reference color channels in [0, 255]
        id: Positive object id assigned to clusters of this color
    """

    name: str
    r: int
    g: int
    b: int
    id: int

    @property
    def rgb(self) -> Tuple[int, int, int]:
        return self.r, self.g, self.b


@dataclass(frozen=True)
class WorkspaceBounds:
    """
    Axis-aligned workspace rectangle on the horizontal plane.

    ``y_left`` is the larger y value and ``y_right`` the smaller one.
    """

    x_lo: float
    x_up: float
    y_left: float
    y_right: float


@dataclass
class ClusterCentroid:
    """
    Mean position and mean color of a cluster.

    Attributes:
        position: Mean position (3,)
        color: Mean color as real values (3,)
        num_points: Number of points aggregated
    """

    position: npt.NDArray[np.float64]
    color: npt.NDArray[np.float64]
    num_points: int = 0

    @property
    def x(self) -> float:
        return float(self.position[0])

    @property
    def y(self) -> float:
        return float(self.position[1])

    @property
    def z(self) -> float:
        return float(self.position[2])

    @property
    def rgb(self) -> Tuple[int, int, int]:
        """Mean color truncated to integer channels, as stored in a packed centroid."""
        r, g, b = (int(math.floor(c)) for c in self.color)
        return r, g, b


@dataclass
class Pose:
    """
    Pose interface containing an orientation quaternion and a translation.

    Attributes:
        rotation: Quaternion (4,) in (x, y, z, w) order
        translation: Translation vector (3,)
        metadata: Additional metadata dictionary
    """

    rotation: npt.NDArray[np.float64]
    translation: npt.NDArray[np.float64]
    metadata: Dict[str, Any] = field(default_factory=dict)


@dataclass
class IdentifiedObject:
    """
    A classified cluster ready for downstream consumers.

    Attributes:
        timestamp: Processing time of classification (seconds since epoch)
        pose: Centroid position with the fixed orientation
        object_id: Id of the nearest palette color
        name: Name of the nearest palette color
    """

    timestamp: float
    pose: Pose
    object_id: int
    name: str = ""

    @property
    def position(self) -> npt.NDArray[np.float64]:
        return self.pose.translation

    @property
    def orientation(self) -> npt.NDArray[np.float64]:
        return self.pose.rotation


@dataclass
class ClusterBatch:
    """
    One arrival of clusters from the segmentation stage.

    Attributes:
        clusters: Ordered clusters, either RawCluster instances or raw point data
        stamp: Optional acquisition time of the batch
        metadata: Additional metadata dictionary
    """

    clusters: Sequence[Any] = field(default_factory=list)
    stamp: Optional[float] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.clusters)


@dataclass
class IdentifiedObjectBatch:
    """
    Ordered identification results for one ClusterBatch.

    Attributes:
        objects: Identified objects in input order
        stamp: Time at which the batch was emitted
        metadata: Additional metadata dictionary
    """

    objects: List[IdentifiedObject] = field(default_factory=list)
    stamp: Optional[float] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.objects)

    def __iter__(self):
        return iter(self.objects)
