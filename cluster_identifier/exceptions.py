"""
Exception hierarchy for cluster_identifier.

Per-cluster errors are recoverable and are absorbed by the batch processor.
Configuration errors are fatal and are raised before any batch is served.
"""


class ClusterIdentifierError(Exception):
    """Base class for all errors raised by cluster_identifier."""


class EmptyClusterError(ClusterIdentifierError, ValueError):
    """Raised when a centroid is requested for a cluster with no points."""


class MalformedClusterError(ClusterIdentifierError, ValueError):
    """Raised when raw cluster data cannot be decoded into colored points."""


class ConfigurationError(ClusterIdentifierError, ValueError):
    """Raised when the startup configuration is invalid."""


class EmptyPaletteError(ConfigurationError):
    """Raised when classification is attempted against an empty palette."""


class InvalidBoundsError(ConfigurationError):
    """Raised when workspace bounds do not describe a non-empty rectangle."""


class MalformedBatchError(ClusterIdentifierError, ValueError):
    """Raised when a batch entry cannot be decoded into a list of clusters."""
