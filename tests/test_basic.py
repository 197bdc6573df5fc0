"""
Basic tests for cluster_identifier.

Tests core interfaces and pipeline operations.
"""

import numpy as np
import pytest

from cluster_identifier import Node, Pipeline
from cluster_identifier.exceptions import MalformedClusterError
from cluster_identifier.interfaces import (
    ColoredPoint,
    IdentifiedObject,
    Pose,
    RawCluster,
    ReferenceColor,
)


def test_raw_cluster_interface():
    """Test RawCluster creation and validation."""
    points = np.random.uniform(-1.0, 1.0, (50, 3))
    colors = np.random.randint(0, 256, (50, 3), dtype=np.uint8)

    cluster = RawCluster(points=points, colors=colors)

    assert len(cluster) == 50
    assert cluster.points.shape == (50, 3)
    assert cluster.points.dtype == np.float64
    assert cluster.colors.dtype == np.uint8
    assert isinstance(cluster.metadata, dict)


def test_raw_cluster_empty():
    """Test that an empty cluster is representable."""
    cluster = RawCluster(points=[], colors=[])

    assert len(cluster) == 0
    assert cluster.points.shape == (0, 3)


def test_raw_cluster_rejects_mismatched_shapes():
    with pytest.raises(MalformedClusterError):
        RawCluster(points=np.zeros((3, 3)), colors=np.zeros((2, 3)))

    with pytest.raises(MalformedClusterError):
        RawCluster(points=np.zeros((3, 2)), colors=np.zeros((3, 2)))


def test_raw_cluster_rejects_bad_values():
    with pytest.raises(MalformedClusterError, match="non-finite"):
        RawCluster(points=[[0.0, np.nan, 0.0]], colors=[[0, 0, 0]])

    with pytest.raises(MalformedClusterError, match=r"\[0, 255\]"):
        RawCluster(points=[[0.0, 0.0, 0.0]], colors=[[0, 300, 0]])


def test_raw_cluster_iteration():
    """Test iterating a cluster yields ColoredPoints."""
    cluster = RawCluster(points=[[0.1, 0.2, 0.3]], colors=[[130, 40, 40]])

    points = list(cluster)

    assert points == [ColoredPoint(x=0.1, y=0.2, z=0.3, r=130, g=40, b=40)]


def test_colored_point_from_packed():
    point = ColoredPoint.from_packed(0.1, 0.2, 0.3, 0x822828)

    assert (point.r, point.g, point.b) == (130, 40, 40)
    assert (point.x, point.y, point.z) == (0.1, 0.2, 0.3)


def test_raw_cluster_from_xyzrgb():
    cluster = RawCluster.from_xyzrgb([[0.1, 0.2, 0.3, 0xFF0000], [0.4, 0.5, 0.6, 0x00FF00]])

    assert len(cluster) == 2
    np.testing.assert_array_equal(cluster.colors, [[255, 0, 0], [0, 255, 0]])
    np.testing.assert_allclose(cluster.points[1], [0.4, 0.5, 0.6])


def test_raw_cluster_from_xyzrgb_rejects_bad_rows():
    with pytest.raises(MalformedClusterError):
        RawCluster.from_xyzrgb([[0.1, 0.2, 0.3]])

    with pytest.raises(MalformedClusterError):
        RawCluster.from_xyzrgb([[0.1, 0.2, 0.3, -1]])

    with pytest.raises(MalformedClusterError):
        RawCluster.from_xyzrgb([[0.1, 0.2, 0.3, 1.5]])


def test_raw_cluster_from_points():
    cluster = RawCluster.from_points(
        [
            {"x": 0.0, "y": 0.0, "z": 0.0, "rgb": 0x0000FF},
            {"x": 1.0, "y": 1.0, "z": 1.0, "r": 1, "g": 2, "b": 3},
            ColoredPoint(x=2.0, y=2.0, z=2.0, r=4, g=5, b=6),
        ]
    )

    assert len(cluster) == 3
    np.testing.assert_array_equal(cluster.colors, [[0, 0, 255], [1, 2, 3], [4, 5, 6]])


def test_raw_cluster_from_points_missing_field():
    with pytest.raises(MalformedClusterError, match="missing field"):
        RawCluster.from_points([{"x": 0.0, "y": 0.0, "rgb": 0}])

    with pytest.raises(MalformedClusterError, match="missing field"):
        RawCluster.from_points([{"x": 0.0, "y": 0.0, "z": 0.0}])


@pytest.mark.parametrize(
    "point",
    [
        {"x": 0.4, "y": -0.1, "z": 0.0, "r": 10**30, "g": 0, "b": 0},
        {"x": 0.4, "y": -0.1, "z": 0.0, "r": float("inf"), "g": 0, "b": 0},
        {"x": 0.4, "y": -0.1, "z": 0.0, "rgb": float("inf")},
        {"x": 0.4, "y": -0.1, "z": 0.0, "rgb": 10**30},
        {"x": 10**400, "y": -0.1, "z": 0.0, "rgb": 0},
    ],
)
def test_raw_cluster_from_points_overflowing_fields(point):
    with pytest.raises(MalformedClusterError):
        RawCluster.from_points([point])


def test_raw_cluster_overflowing_arrays():
    with pytest.raises(MalformedClusterError):
        RawCluster(points=[[0.0, 0.0, 0.0]], colors=[[10**30, 0, 0]])

    with pytest.raises(MalformedClusterError):
        RawCluster.from_xyzrgb([[10**400, 0.0, 0.0, 0]])


@pytest.mark.parametrize("rgb", [-1, 0x100000000, 1.5])
def test_raw_cluster_from_points_rejects_bad_packed_rgb(rgb):
    # Same rules as the rgb column of (x, y, z, rgb) rows
    with pytest.raises(MalformedClusterError, match="packed rgb"):
        RawCluster.from_points([{"x": 0.0, "y": 0.0, "z": 0.0, "rgb": rgb}])

    with pytest.raises(MalformedClusterError):
        RawCluster.from_xyzrgb([[0.0, 0.0, 0.0, rgb]])


def test_raw_cluster_from_points_accepts_integral_float_rgb():
    cluster = RawCluster.from_points([{"x": 0.0, "y": 0.0, "z": 0.0, "rgb": 255.0}])

    np.testing.assert_array_equal(cluster.colors, [[0, 0, 255]])


def test_pose_interface():
    """Test Pose interface creation."""
    rotation = np.array([0.0, 0.0, 0.0, 1.0])
    translation = np.array([1.0, 2.0, 3.0])

    pose = Pose(rotation=rotation, translation=translation)

    assert pose.rotation.shape == (4,)
    assert pose.translation.shape == (3,)
    assert isinstance(pose.metadata, dict)


def test_identified_object_interface():
    pose = Pose(rotation=np.array([0.0, 0.0, 0.0, 1.0]), translation=np.array([0.4, -0.1, 0.0]))
    obj = IdentifiedObject(timestamp=12.5, pose=pose, object_id=4, name="black")

    np.testing.assert_array_equal(obj.position, [0.4, -0.1, 0.0])
    np.testing.assert_array_equal(obj.orientation, [0.0, 0.0, 0.0, 1.0])
    assert obj.object_id == 4


def test_reference_color_rgb():
    color = ReferenceColor("white", 97, 105, 110, 5)
    assert color.rgb == (97, 105, 110)


class DummyNode(Node):
    def process(self, input_data):
        return input_data


class DropNode(Node):
    def process(self, input_data):
        return None


class CountingNode(Node):
    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.calls = 0

    def process(self, input_data):
        self.calls += 1
        return input_data


def test_pipeline_creation():
    """Test Pipeline creation and node addition."""
    pipeline = Pipeline(name="test_pipeline")

    assert pipeline.name == "test_pipeline"
    assert len(pipeline) == 0

    node = DummyNode(name="dummy")
    pipeline.add_node(node)

    assert len(pipeline) == 1
    assert "dummy" in repr(pipeline)


def test_pipeline_rejects_non_nodes():
    pipeline = Pipeline()
    with pytest.raises(TypeError):
        pipeline.add_node(lambda x: x)


def test_pipeline_without_nodes():
    with pytest.raises(ValueError, match="no nodes"):
        Pipeline().process(1)


def test_pipeline_stops_when_node_drops_item():
    counter = CountingNode(name="counter")
    pipeline = Pipeline().add_node(DummyNode()).add_node(DropNode()).add_node(counter)

    assert pipeline.process(5) is None
    assert counter.calls == 0


def test_node_default_name():
    assert DummyNode().name == "DummyNode"
    assert repr(DummyNode(name="x")) == "DummyNode(name='x')"


if __name__ == "__main__":
    pytest.main([__file__])
