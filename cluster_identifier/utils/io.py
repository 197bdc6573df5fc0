"""
JSON input/output for cluster batches and identification results.

Batches file::

    {"batches": [{"stamp": 0.0, "clusters": [[[x, y, z, rgb], ...], ...]}, ...]}

A bare list of batches is accepted as well. Results are written as::

    {"batches": [{"stamp": t, "objects": [{"timestamp": t, "position": [x, y, z],
                  "orientation": [qx, qy, qz, qw], "object_id": 1, "name": "red"}]}]}
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, List, Union

from ..exceptions import MalformedBatchError
from ..interfaces import ClusterBatch, IdentifiedObject, IdentifiedObjectBatch

logger = logging.getLogger(__name__)


def _load_json(filepath: Path) -> Any:
    with open(filepath, encoding="utf-8") as f:
        return json.load(f)


def batch_from_dict(data: Any) -> ClusterBatch:
    """
    Create a ClusterBatch from its JSON representation.

    Cluster contents are kept as raw point data; decoding happens in the
    identifier so that a malformed cluster only affects itself.

    Raises:
        MalformedBatchError: If the entry is neither a batch object nor a list
            of clusters
    """
    try:
        if isinstance(data, dict):
            return ClusterBatch(
                clusters=list(data.get("clusters") or []),
                stamp=data.get("stamp"),
                metadata=dict(data.get("metadata") or {}),
            )
        if isinstance(data, (str, bytes)):
            raise TypeError(f"a {type(data).__name__} is not a list of clusters")
        # A batch given directly as its list of clusters
        return ClusterBatch(clusters=list(data))
    except (TypeError, ValueError) as e:
        raise MalformedBatchError(f"Cannot decode batch: {e}") from e


def load_batches(path: Union[str, Path]) -> Iterator[ClusterBatch]:
    """
    Read cluster batches from a JSON file.

    A malformed batch entry is logged and replaced by an empty batch, so every
    entry still produces one result.

    Args:
        path: Path to the batches file

    Yields:
        ClusterBatch in file order

    Raises:
        ValueError: If the file does not hold a list of batches
    """
    data = _load_json(Path(path))
    batches = data.get("batches", []) if isinstance(data, dict) else data
    if not isinstance(batches, list):
        raise ValueError(f"Expected a list of batches, got {type(batches).__name__}")

    logger.info(f"Loaded {len(batches)} batches from {path}")

    for index, entry in enumerate(batches):
        try:
            yield batch_from_dict(entry)
        except MalformedBatchError as e:
            logger.warning(f"Batch {index} is malformed, processing it as empty: {e}")
            yield ClusterBatch(clusters=[], metadata={"malformed": str(e)})


def object_to_dict(obj: IdentifiedObject) -> Dict[str, Any]:
    return {
        "timestamp": obj.timestamp,
        "position": [float(v) for v in obj.position],
        "orientation": [float(v) for v in obj.orientation],
        "object_id": int(obj.object_id),
        "name": obj.name,
    }


def result_to_dict(batch: IdentifiedObjectBatch) -> Dict[str, Any]:
    return {
        "stamp": batch.stamp,
        "objects": [object_to_dict(obj) for obj in batch.objects],
    }


def dump_results(batches: Iterable[IdentifiedObjectBatch], fp) -> List[Dict[str, Any]]:
    """
    Write identification results as JSON.

    Args:
        batches: Output batches
        fp: Writable text file object

    Returns:
        The serialized batches
    """
    serialized = [result_to_dict(batch) for batch in batches]
    json.dump({"batches": serialized}, fp, indent=2)
    fp.write("\n")
    return serialized
