"""
Rerun logging utility for cluster_identifier.

This module logs clusters, identification results and the workspace to Rerun
for interactive visualization and debugging.
"""

import logging
import os
from typing import Any, Dict, Optional, Sequence

import numpy as np
import rerun as rr

from ..interfaces import (
    IdentifiedObjectBatch,
    RawCluster,
    ReferenceColor,
    WorkspaceBounds,
)

logger = logging.getLogger(__name__)


class RerunLogger:
    """
    Logger for identification results using Rerun.

    All methods are no-ops when the logger is disabled, so callers do not need
    to guard their calls.
    """

    def __init__(
        self,
        recording_name: str = "cluster_identifier",
        enabled: bool = True,
        spawn: bool = True,
    ):
        """
        Initialize the Rerun logger.

        Args:
            recording_name: Name for the Rerun recording
            enabled: Whether logging is enabled
            spawn: Whether to spawn the Rerun viewer
        """
        self.recording_name = recording_name
        # Disable viewer spawning in CI environments to avoid connection issues
        self.spawn = spawn and not bool(os.getenv("CI"))
        self._initialized = False
        self.enabled = enabled

    def _ensure_initialized(self):
        """Ensure Rerun is initialized."""
        if not self.enabled:
            return

        if not self._initialized:
            rr.init(self.recording_name, spawn=self.spawn)
            self._initialized = True

    def set_time_sequence(self, timeline_name: str, sequence_number: int):
        """
        Set the time sequence for timeline-based logging.

        Args:
            timeline_name: Name of the timeline (e.g., "batch")
            sequence_number: Sequence number for this point in time
        """
        if not self.enabled:
            return

        self._ensure_initialized()
        rr.set_time(timeline_name, sequence=sequence_number)

    def log_pointcloud(
        self,
        points: np.ndarray,
        entity_path: str = "pointcloud",
        colors: Optional[np.ndarray] = None,
    ):
        """
        Log a pointcloud to Rerun.

        Args:
            points: Point cloud array (N, 3)
            entity_path: Entity path for logging
            colors: Optional colors array (N, 3)
        """
        if not self.enabled:
            return

        self._ensure_initialized()

        if colors is not None:
            rr.log(entity_path, rr.Points3D(points, colors=colors))
        else:
            rr.log(entity_path, rr.Points3D(points))

    def log_clusters(self, clusters: Sequence[RawCluster], entity_path: str = "clusters"):
        """
        Log every cluster of a batch with its own point colors.

        Args:
            clusters: Decoded clusters in input order
            entity_path: Entity path prefix; cluster i goes to ``{entity_path}/{i:03d}``
        """
        if not self.enabled:
            return

        self._ensure_initialized()

        # Clear clusters left over from a larger previous batch
        rr.log(entity_path, rr.Clear(recursive=True))

        for index, cluster in enumerate(clusters):
            if len(cluster) == 0:
                continue
            self.log_pointcloud(
                cluster.points, f"{entity_path}/{index:03d}", colors=cluster.colors
            )

    def log_identified_objects(
        self,
        batch: IdentifiedObjectBatch,
        palette: Sequence[ReferenceColor],
        entity_path: str = "identified",
    ):
        """
        Log identified objects colored and labelled by their palette entry.

        Args:
            batch: Identification results
            palette: Palette used for classification
            entity_path: Entity path for logging
        """
        if not self.enabled:
            return

        self._ensure_initialized()

        if len(batch) == 0:
            rr.log(entity_path, rr.Clear(recursive=False))
            logger.debug("No identified objects to log")
            return

        by_id = {entry.id: entry for entry in palette}
        positions = np.array([obj.position for obj in batch])
        colors = []
        labels = []
        for obj in batch:
            entry = by_id.get(obj.object_id)
            if entry is not None:
                colors.append(entry.rgb)
                labels.append(f"{entry.name} ({obj.object_id})")
            else:
                logger.warning(f"Object id {obj.object_id} not found in palette")
                colors.append((153, 153, 153))
                labels.append(f"id_{obj.object_id}")

        rr.log(
            entity_path,
            rr.Points3D(
                positions,
                colors=np.array(colors, dtype=np.uint8),
                labels=labels,
                radii=0.02,
            ),
        )

    def log_workspace(
        self, bounds: WorkspaceBounds, entity_path: str = "workspace", height: float = 0.5
    ):
        """
        Log the workspace rectangle as a box standing on the z = 0 plane.

        Args:
            bounds: Workspace rectangle
            entity_path: Entity path for logging
            height: Display height of the box (z is not constrained by the filter)
        """
        if not self.enabled:
            return

        self._ensure_initialized()

        center = [
            (bounds.x_lo + bounds.x_up) / 2.0,
            (bounds.y_left + bounds.y_right) / 2.0,
            height / 2.0,
        ]
        half_size = [
            (bounds.x_up - bounds.x_lo) / 2.0,
            (bounds.y_left - bounds.y_right) / 2.0,
            height / 2.0,
        ]
        rr.log(
            entity_path,
            rr.Boxes3D(centers=[center], half_sizes=[half_size], labels=["workspace"]),
            static=True,
        )

    def log_metadata(self, metadata: Dict[str, Any], entity_path: str = "metadata"):
        """
        Log metadata as text.

        Args:
            metadata: Metadata dictionary
            entity_path: Entity path for logging
        """
        if not self.enabled or not metadata:
            return

        self._ensure_initialized()

        metadata_text = "\n".join([f"{k}: {v}" for k, v in metadata.items()])
        rr.log(entity_path, rr.TextLog(metadata_text))
