"""
Nodes for the cluster_identifier framework.

This module uses lazy importing so that the Rerun and scipy dependencies are
only loaded when a node needing them is accessed.
"""

from __future__ import annotations

import importlib
from typing import Any

__all__ = [
    "CentroidNode",
    "ClusterIdentifierNode",
    "ColorClassifierNode",
    "WorkspaceFilterNode",
]

# Mapping of node names to their module paths
_NODE_MODULES = {
    "CentroidNode": "cluster_identifier.nodes.centroid",
    "ClusterIdentifierNode": "cluster_identifier.nodes.cluster_identifier",
    "ColorClassifierNode": "cluster_identifier.nodes.color_classifier",
    "WorkspaceFilterNode": "cluster_identifier.nodes.workspace_filter",
}

# Cache for loaded modules
_loaded = {}


def __getattr__(name: str) -> Any:
    """
    Lazy import nodes on first access.

    Args:
        name: The name of the node class to import

    Returns:
        The requested node class

    Raises:
        AttributeError: If the node name is not recognized
        ImportError: If the node's dependencies are not installed
    """
    if name in _loaded:
        return _loaded[name]

    if name not in _NODE_MODULES:
        raise AttributeError(f"module '{__name__}' has no attribute '{name}'")

    module_path = _NODE_MODULES[name]

    try:
        module = importlib.import_module(module_path)
        node_class = getattr(module, name)
        _loaded[name] = node_class
        return node_class
    except ImportError as e:
        raise ImportError(
            f"Could not import {name}. "
            f"This may require optional dependencies. "
            f"Original error: {e}"
        ) from e


def __dir__() -> list[str]:
    """Return the list of available nodes for tab completion."""
    return __all__
