"""Utilities for cluster_identifier: RGB codec, JSON I/O and Rerun logging."""
