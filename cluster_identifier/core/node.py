"""
Base Node class for cluster_identifier.

All processing nodes inherit from this base class and implement the process method.
"""

import logging
import time
from abc import ABC, abstractmethod
from typing import Any

from ..exceptions import ClusterIdentifierError

logger = logging.getLogger(__name__)


class Node(ABC):
    """
    Base class for all processing nodes.

    Each node represents a single processing step in the pipeline. Calling a
    node runs ``process`` and records its runtime.

    Example:
        class MyNode(Node):
            def process(self, centroid: ClusterCentroid) -> ClusterCentroid:
                return centroid
    """

    def __init__(self, name: str = None, **kwargs):
        """
        Initialize the node.

        Args:
            name: Optional name for the node. If None, uses class name.
            **kwargs: Additional configuration parameters.
        """
        self.name = name or self.__class__.__name__
        self.config = kwargs
        self.metadata = {}

    @abstractmethod
    def process(self, input_data: Any) -> Any:
        """
        Process input data and return output.

        Returning None tells the pipeline to drop the current item.

        Args:
            input_data: Input data following framework interfaces

        Returns:
            Output data following framework interfaces, or None
        """
        pass

    def __call__(self, input_data: Any = None) -> Any:
        """Execute the node on ``input_data`` with timing."""
        return self._execute(input_data)

    def _execute(self, input_data: Any) -> Any:
        """Internal execution method with timing."""
        start_time = time.time()

        try:
            output = self.process(input_data)

            runtime = time.time() - start_time
            if hasattr(output, "metadata") and isinstance(output.metadata, dict):
                output.metadata[f"{self.name}_runtime"] = runtime

            logger.debug(f"Node {self.name} completed in {runtime:.6f}s")

            return output

        except ClusterIdentifierError:
            # Recoverable per-item conditions are reported by the caller
            raise
        except Exception as e:
            logger.error(f"Error in node {self.name}: {str(e)}")
            raise

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name='{self.name}')"
