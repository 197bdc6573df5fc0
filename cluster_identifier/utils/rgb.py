"""
Packed RGB codec.

Point clouds carry color as a single 32-bit value with red in bits 16-23,
green in bits 8-15 and blue in bits 0-7. PCL-style XYZRGB clouds store that
value in a float32 field, so it has to be reinterpreted bit for bit before
unpacking.
"""

from typing import Tuple, Union

import numpy as np
import numpy.typing as npt

PackedRGB = Union[int, np.integer, npt.NDArray[np.integer]]


def unpack_rgb(packed: PackedRGB) -> Union[Tuple[int, int, int], npt.NDArray[np.uint8]]:
    """
    Split packed RGB values into their channels.

    Args:
        packed: A single packed integer, or an array of them with shape (N,)

    Returns:
        (r, g, b) tuple of ints for scalar input, otherwise an (N, 3) uint8 array
    """
    if np.ndim(packed) == 0:
        value = int(packed)
        return (value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF

    values = np.asarray(packed).astype(np.int64)
    channels = np.stack(
        [(values >> 16) & 0xFF, (values >> 8) & 0xFF, values & 0xFF], axis=-1
    )
    return channels.astype(np.uint8)


def pack_rgb(r, g, b):
    """
    Pack channels into a single RGB value.

    Works on ints or on equally shaped integer arrays.
    """
    if np.ndim(r) == 0 and np.ndim(g) == 0 and np.ndim(b) == 0:
        return ((int(r) & 0xFF) << 16) | ((int(g) & 0xFF) << 8) | (int(b) & 0xFF)

    r = np.asarray(r, dtype=np.uint32) & 0xFF
    g = np.asarray(g, dtype=np.uint32) & 0xFF
    b = np.asarray(b, dtype=np.uint32) & 0xFF
    return (r << 16) | (g << 8) | b


def float_rgb_to_packed(values) -> npt.NDArray[np.uint32]:
    """
    Reinterpret float32 ``rgb`` fields as packed uint32 values.

    Args:
        values: Float32 value or array as found in an XYZRGB point cloud

    Returns:
        Array of packed uint32 values with the same shape as the input
    """
    return np.asarray(values, dtype=np.float32).view(np.uint32)


def packed_to_float_rgb(packed) -> npt.NDArray[np.float32]:
    """Inverse of :func:`float_rgb_to_packed`."""
    return np.asarray(packed, dtype=np.uint32).view(np.float32)
