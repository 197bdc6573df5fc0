"""Core components of the cluster_identifier framework."""

from .node import Node
from .pipeline import Pipeline

__all__ = ["Node", "Pipeline"]
