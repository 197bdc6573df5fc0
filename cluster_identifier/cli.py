"""
Command line interface for identifying clusters stored in a JSON file.
"""

import argparse
import logging
import sys
from typing import List, Optional

from .config import load_config
from .exceptions import ConfigurationError
from .interfaces import IdentifiedObjectBatch
from .nodes.cluster_identifier import ClusterIdentifierNode
from .utils.io import dump_results, load_batches

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Identify segmented point clusters by their mean color"
    )
    parser.add_argument(
        "--input", "-i", required=True, help="JSON file with cluster batches"
    )
    parser.add_argument(
        "--output", "-o", default=None, help="Output JSON file (default: stdout)"
    )
    parser.add_argument(
        "--config", "-c", default=None, help="YAML configuration (default: built-in)"
    )
    parser.add_argument(
        "--rerun", action="store_true", help="Visualize batches and results in Rerun"
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INFO)",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Run the cluster identifier over every batch of the input file."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    try:
        config = load_config(args.config)
    except ConfigurationError as e:
        logger.error(f"Invalid configuration: {e}")
        return 2

    results: List[IdentifiedObjectBatch] = []
    identifier = ClusterIdentifierNode(
        config=config,
        publisher=results.append,
        enable_rerun_logging=args.rerun,
    )

    try:
        for _ in identifier.process_stream(load_batches(args.input)):
            pass
    except (OSError, ValueError) as e:
        logger.error(f"Cannot read batches from {args.input}: {e}")
        return 1

    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            dump_results(results, f)
        logger.info(f"Wrote {len(results)} result batches to {args.output}")
    else:
        dump_results(results, sys.stdout)

    return 0


if __name__ == "__main__":
    sys.exit(main())
