"""
Pipeline class for cluster_identifier.

The Pipeline runs a sequence of nodes on a single item, stopping early when a
node drops the item by returning None.
"""

import logging
import time
from typing import Any, List, Optional

from ..core.node import Node

logger = logging.getLogger(__name__)


class Pipeline:
    """
    Pipeline for orchestrating the execution of processing nodes.

    The pipeline manages the flow of data between nodes and records
    per-item runtime.
    """

    def __init__(self, name: str = "Pipeline"):
        """
        Initialize the pipeline.

        Args:
            name: Name of the pipeline
        """
        self.name = name
        self.nodes: List[Node] = []
        self.metadata = {}

    def add_node(self, node: Node) -> "Pipeline":
        """
        Add a node to the pipeline.

        Args:
            node: Node to add to the pipeline

        Returns:
            Self for method chaining
        """
        if not isinstance(node, Node):
            raise TypeError(f"Expected Node instance, got {type(node)}")

        self.nodes.append(node)
        logger.debug(f"Added node {node.name} to pipeline {self.name}")
        return self

    def process(self, input_data: Any) -> Optional[Any]:
        """
        Process input data through all nodes in sequence.

        Args:
            input_data: Input data for the first node

        Returns:
            Output data from the last node, or None if a node dropped the item
        """
        if not self.nodes:
            raise ValueError("Pipeline has no nodes")

        start_time = time.time()
        current_data = input_data

        for i, node in enumerate(self.nodes):
            logger.debug(f"Processing node {i + 1}/{len(self.nodes)}: {node.name}")
            current_data = node(current_data)

            if current_data is None:
                logger.debug(f"Node {node.name} dropped the item (returned None)")
                return None

        total_runtime = time.time() - start_time
        logger.debug(f"Pipeline {self.name} completed in {total_runtime:.6f}s")

        return current_data

    def __len__(self) -> int:
        """Return the number of nodes in the pipeline."""
        return len(self.nodes)

    def __repr__(self) -> str:
        node_names = [node.name for node in self.nodes]
        return f"Pipeline(name='{self.name}', nodes={node_names})"
