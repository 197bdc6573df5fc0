"""Tests for the workspace filter."""

import logging

import numpy as np
import pytest

from cluster_identifier.config import DEFAULT_BOUNDS
from cluster_identifier.interfaces import ClusterCentroid, WorkspaceBounds
from cluster_identifier.nodes import WorkspaceFilterNode
from cluster_identifier.nodes.workspace_filter import is_inside

BOUNDS = WorkspaceBounds(x_lo=0.20, x_up=0.75, y_left=0.10, y_right=-0.40)


def _centroid(x, y, z=0.0):
    return ClusterCentroid(position=np.array([x, y, z]), color=np.zeros(3), num_points=1)


def test_default_bounds():
    assert DEFAULT_BOUNDS == BOUNDS


def test_point_inside():
    assert is_inside(_centroid(0.4, -0.1), BOUNDS)


@pytest.mark.parametrize(
    "x, y",
    [
        (0.20, -0.1),  # x == x_lo
        (0.75, -0.1),  # x == x_up
        (0.40, 0.10),  # y == y_left
        (0.40, -0.40),  # y == y_right
    ],
)
def test_points_on_bounds_are_outside(x, y):
    assert not is_inside(_centroid(x, y), BOUNDS)


@pytest.mark.parametrize(
    "x, y",
    [(0.1, -0.1), (0.8, -0.1), (0.4, 0.2), (0.4, -0.5), (-1.0, 5.0)],
)
def test_points_beyond_bounds_are_outside(x, y):
    assert not is_inside(_centroid(x, y), BOUNDS)


def test_z_is_unconstrained():
    assert is_inside(_centroid(0.4, -0.1, 100.0), BOUNDS)
    assert is_inside(_centroid(0.4, -0.1, -100.0), BOUNDS)


def test_sequence_points():
    assert is_inside((0.4, -0.1, 0.0), BOUNDS)
    assert not is_inside(np.array([0.75, -0.1, 0.0]), BOUNDS)


def test_filter_node_passes_inside_centroid():
    node = WorkspaceFilterNode(BOUNDS)
    centroid = _centroid(0.4, -0.1)

    assert node(centroid) is centroid


def test_filter_node_drops_outside_centroid(caplog):
    node = WorkspaceFilterNode(BOUNDS)

    with caplog.at_level(logging.WARNING):
        assert node(_centroid(0.9, -0.1)) is None

    assert "outside the workspace" in caplog.text
