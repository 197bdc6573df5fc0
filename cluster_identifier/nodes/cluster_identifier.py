"""
Cluster identifier node.

Classifies every cluster of an incoming batch by its mean color and emits the
identified objects lying inside the workspace.
"""

import logging
import time
from typing import Callable, Iterable, Iterator, List, Optional

import numpy as np

from ..config import IdentifierConfig
from ..core.node import Node
from ..core.pipeline import Pipeline
from ..exceptions import EmptyClusterError, MalformedClusterError
from ..interfaces import (
    ClusterBatch,
    IdentifiedObject,
    IdentifiedObjectBatch,
    Pose,
    RawCluster,
)
from ..utils.rerun_logger import RerunLogger
from .centroid import CentroidNode, as_raw_cluster
from .color_classifier import ColorClassifierNode
from .workspace_filter import WorkspaceFilterNode

logger = logging.getLogger(__name__)

Publisher = Callable[[IdentifiedObjectBatch], None]


class ClusterIdentifierNode(Node):
    """
    Node turning a batch of segmented clusters into identified objects.

    Each cluster runs through centroid -> workspace filter -> color classifier.
    Empty, malformed and out-of-workspace clusters are logged and skipped; the
    output batch is published even when it is empty.
    """

    def __init__(
        self,
        config: Optional[IdentifierConfig] = None,
        publisher: Optional[Publisher] = None,
        clock: Callable[[], float] = time.time,
        enable_rerun_logging: bool = False,
        rerun_recording_name: Optional[str] = None,
        rerun_spawn_viewer: bool = True,
        name: str = None,
        **kwargs,
    ):
        """
        Initialize cluster identifier node.

        Args:
            config: Palette, workspace and orientation (defaults if None)
            publisher: Callable receiving every output batch
            clock: Time source for object timestamps
            enable_rerun_logging: Whether to log batches and results to Rerun
            rerun_recording_name: Custom name for the Rerun recording
            rerun_spawn_viewer: Whether to spawn the Rerun viewer
            **kwargs: Additional configuration
        """
        super().__init__(name=name or "ClusterIdentifier", **kwargs)
        self.identifier_config = config or IdentifierConfig.default()
        self.publisher = publisher
        self.clock = clock

        self.pipeline = Pipeline(name=f"{self.name}_cluster")
        self.pipeline.add_node(CentroidNode())
        self.pipeline.add_node(WorkspaceFilterNode(self.identifier_config.bounds))
        self.pipeline.add_node(ColorClassifierNode(self.identifier_config.palette))

        self.enable_rerun_logging = enable_rerun_logging
        self.rerun_logger = RerunLogger(
            rerun_recording_name or "cluster_identifier",
            enabled=enable_rerun_logging,
            spawn=rerun_spawn_viewer,
        )
        self._batch_index = 0

    def process(self, batch: ClusterBatch) -> IdentifiedObjectBatch:
        """
        Identify the clusters of one batch.

        Args:
            batch: Clusters in arrival order

        Returns:
            IdentifiedObjectBatch with one object per surviving cluster, in
            input order
        """
        orientation = np.array(self.identifier_config.orientation, dtype=np.float64)
        objects: List[IdentifiedObject] = []
        decoded: List[RawCluster] = []
        skipped = {"empty": 0, "malformed": 0, "outside": 0}

        try:
            clusters = list(batch.clusters) if batch.clusters is not None else []
        except TypeError as e:
            logger.warning(f"Batch clusters are not a sequence, processing it as empty: {e}")
            clusters = []

        for index, raw in enumerate(clusters):
            try:
                cluster = as_raw_cluster(raw)
                decoded.append(cluster)
                result = self.pipeline.process(cluster)
            except EmptyClusterError:
                logger.warning(f"Cluster {index} has no points, skipping")
                skipped["empty"] += 1
                continue
            except MalformedClusterError as e:
                logger.warning(f"Cluster {index} is malformed, skipping: {e}")
                skipped["malformed"] += 1
                continue

            if result is None:
                skipped["outside"] += 1
                continue

            centroid, reference = result
            objects.append(
                IdentifiedObject(
                    timestamp=self.clock(),
                    pose=Pose(rotation=orientation.copy(), translation=centroid.position.copy()),
                    object_id=reference.id,
                    name=reference.name,
                )
            )

        output = IdentifiedObjectBatch(
            objects=objects,
            stamp=self.clock(),
            metadata={
                "num_clusters": len(clusters),
                "num_identified": len(objects),
                "skipped": skipped,
            },
        )

        logger.info(
            f"Identified {len(objects)}/{len(clusters)} clusters "
            f"(empty: {skipped['empty']}, malformed: {skipped['malformed']}, "
            f"outside: {skipped['outside']})"
        )

        if self.enable_rerun_logging:
            self._log_to_rerun(decoded, output)

        # Always published, an empty batch tells consumers nothing was found
        if self.publisher is not None:
            self.publisher(output)

        self._batch_index += 1
        return output

    def process_stream(
        self, batches: Iterable[ClusterBatch]
    ) -> Iterator[IdentifiedObjectBatch]:
        """
        Serve a stream of batches, one at a time.

        Each batch is processed and published before the next one is pulled
        from the source.

        Args:
            batches: Source of incoming batches

        Yields:
            IdentifiedObjectBatch for every input batch
        """
        for batch in batches:
            yield self(batch)

    def _log_to_rerun(self, clusters: List[RawCluster], output: IdentifiedObjectBatch):
        self.rerun_logger.set_time_sequence("batch", self._batch_index)
        self.rerun_logger.log_workspace(self.identifier_config.bounds)
        self.rerun_logger.log_clusters(clusters)
        self.rerun_logger.log_identified_objects(output, self.identifier_config.palette)
        self.rerun_logger.log_metadata(output.metadata)
