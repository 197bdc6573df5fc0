"""Tests for nearest reference color classification."""

import numpy as np
import pytest

from cluster_identifier.config import DEFAULT_PALETTE
from cluster_identifier.exceptions import EmptyPaletteError
from cluster_identifier.interfaces import ClusterCentroid, ReferenceColor
from cluster_identifier.nodes import ColorClassifierNode
from cluster_identifier.nodes.color_classifier import (
    classify,
    nearest_color,
    squared_distances,
)


@pytest.mark.parametrize(
    "color, expected_id",
    [
        ((0, 0, 0), 4),  # black
        ((255, 0, 0), 1),  # red reference is (130, 40, 40)
        ((0, 250, 5), 2),  # green
        ((10, 10, 240), 3),  # blue
        ((100, 100, 100), 5),  # white reference is (97, 105, 110)
        ((130, 40, 40), 1),
    ],
)
def test_default_palette(color, expected_id):
    assert classify(color, DEFAULT_PALETTE) == expected_id


def test_squared_distances():
    distances = squared_distances((255, 0, 0), DEFAULT_PALETTE)

    np.testing.assert_array_equal(distances, [18825, 130050, 130050, 65025, 48089])


def test_tie_goes_to_earliest_entry():
    a = ReferenceColor("a", 10, 0, 0, 7)
    b = ReferenceColor("b", 0, 10, 0, 3)

    # Both references are at distance 10 from the probe
    assert classify((0, 0, 0), [a, b]) == 7
    assert classify((0, 0, 0), [b, a]) == 3


def test_tie_among_many_entries():
    palette = [
        ReferenceColor("far", 200, 200, 200, 1),
        ReferenceColor("first", 5, 0, 0, 2),
        ReferenceColor("second", 0, 5, 0, 3),
        ReferenceColor("third", 0, 0, 5, 4),
    ]

    reference, distance = nearest_color((0, 0, 0), palette)

    assert reference.id == 2
    assert distance == 25


def test_maximum_distance_still_classified():
    palette = [ReferenceColor("black", 0, 0, 0, 9)]

    assert classify((255, 255, 255), palette) == 9


def test_result_always_in_palette():
    rng = np.random.default_rng(0)
    ids = {entry.id for entry in DEFAULT_PALETTE}

    for color in rng.integers(0, 256, (200, 3)):
        assert classify(color, DEFAULT_PALETTE) in ids


def test_empty_palette():
    with pytest.raises(EmptyPaletteError):
        classify((0, 0, 0), [])


def test_classifier_node_requires_palette():
    with pytest.raises(EmptyPaletteError):
        ColorClassifierNode([])


def test_classifier_node_uses_truncated_color():
    node = ColorClassifierNode(DEFAULT_PALETTE)
    centroid = ClusterCentroid(
        position=np.array([0.4, -0.1, 0.0]), color=np.array([0.9, 0.9, 0.9]), num_points=10
    )

    result_centroid, reference = node(centroid)

    assert result_centroid is centroid
    assert reference.id == 4
    assert reference.name == "black"
