"""
Example identifying synthetic colored clusters, optionally visualized in Rerun.
"""

import logging

import numpy as np

from cluster_identifier import ClusterBatch, RawCluster, load_config
from cluster_identifier.nodes import ClusterIdentifierNode

logging.basicConfig(level=logging.INFO, format="%(name)s - %(levelname)s - %(message)s")
logger = logging.getLogger(__name__)


def make_cluster(center, color, num_points=200, spread=0.02, noise=8, rng=None):
    """Create a roughly spherical cluster around ``center`` with a noisy color."""
    rng = rng or np.random.default_rng()
    points = rng.normal(loc=center, scale=spread, size=(num_points, 3))
    colors = np.clip(rng.normal(loc=color, scale=noise, size=(num_points, 3)), 0, 255)
    return RawCluster(points=points, colors=colors.astype(np.uint8))


def make_batch(rng):
    """A batch with objects of every palette color plus a few to be rejected."""
    clusters = [
        make_cluster([0.30, -0.10, 0.05], [130, 40, 40], rng=rng),
        make_cluster([0.45, 0.00, 0.05], [10, 240, 10], rng=rng),
        make_cluster([0.60, -0.30, 0.05], [5, 5, 240], rng=rng),
        make_cluster([0.50, -0.20, 0.03], [15, 15, 15], rng=rng),
        make_cluster([0.70, 0.05, 0.04], [100, 100, 110], rng=rng),
        # Outside the workspace
        make_cluster([0.90, -0.10, 0.05], [130, 40, 40], rng=rng),
        # Empty
        RawCluster(points=np.empty((0, 3)), colors=np.empty((0, 3), dtype=np.uint8)),
    ]
    return ClusterBatch(clusters=clusters)


def run_example(config_path=None, num_batches=3, enable_rerun=False, seed=0):
    config = load_config(config_path)
    identifier = ClusterIdentifierNode(
        config=config,
        enable_rerun_logging=enable_rerun,
        rerun_recording_name="cluster_identifier_example",
    )

    rng = np.random.default_rng(seed)
    batches = (make_batch(rng) for _ in range(num_batches))

    for index, result in enumerate(identifier.process_stream(batches)):
        logger.info(f"Batch {index}: {len(result)} objects")
        for obj in result:
            x, y, z = obj.position
            logger.info(f"  id {obj.object_id} ({obj.name}) at ({x:.3f}, {y:.3f}, {z:.3f})")


def main():
    """Run the synthetic clusters example."""
    import argparse

    parser = argparse.ArgumentParser(description="Synthetic cluster identification example")
    parser.add_argument("--config", default=None, help="YAML configuration file")
    parser.add_argument(
        "--num-batches", type=int, default=3, help="Number of batches (default: 3)"
    )
    parser.add_argument("--rerun", action="store_true", help="Visualize in Rerun")
    parser.add_argument("--seed", type=int, default=0, help="Random seed (default: 0)")

    args = parser.parse_args()

    try:
        run_example(
            config_path=args.config,
            num_batches=args.num_batches,
            enable_rerun=args.rerun,
            seed=args.seed,
        )
    except Exception as e:
        logger.error(f"Error: {e}")


if __name__ == "__main__":
    main()
