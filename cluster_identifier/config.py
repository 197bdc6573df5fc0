"""
Startup configuration for cluster identification.

The palette, the workspace rectangle and the object orientation are fixed once
at startup and shared read-only by every batch.
"""

import logging
import math
from dataclasses import dataclass
from typing import Any, Dict, Optional, Sequence, Tuple

import yaml

from .exceptions import ConfigurationError, EmptyPaletteError, InvalidBoundsError
from .interfaces import ReferenceColor, WorkspaceBounds

logger = logging.getLogger(__name__)

DEFAULT_PALETTE: Tuple[ReferenceColor, ...] = (
    ReferenceColor("red", 130, 40, 40, 1),
    ReferenceColor("green", 0, 255, 0, 2),
    ReferenceColor("blue", 0, 0, 255, 3),
    ReferenceColor("black", 0, 0, 0, 4),
    ReferenceColor("white", 97, 105, 110, 5),
)

DEFAULT_BOUNDS = WorkspaceBounds(x_lo=0.20, x_up=0.75, y_left=0.10, y_right=-0.40)

IDENTITY_QUATERNION: Tuple[float, float, float, float] = (0.0, 0.0, 0.0, 1.0)


def validate_palette(palette: Sequence[ReferenceColor]) -> None:
    """
    Check that a palette can be used for classification.

    Raises:
        EmptyPaletteError: If the palette has no entries
        ConfigurationError: On out-of-range channels or bad/duplicate ids
    """
    if len(palette) == 0:
        raise EmptyPaletteError("Reference palette must contain at least one color")

    seen_ids = set()
    for color in palette:
        for channel in color.rgb:
            if not 0 <= channel <= 255:
                raise ConfigurationError(
                    f"Color '{color.name}' has channel {channel} outside [0, 255]"
                )
        if color.id <= 0:
            raise ConfigurationError(f"Color '{color.name}' has non-positive id {color.id}")
        if color.id in seen_ids:
            raise ConfigurationError(f"Duplicate object id {color.id} in palette")
        seen_ids.add(color.id)


def validate_bounds(bounds: WorkspaceBounds) -> None:
    """
    Check that the workspace bounds describe a non-empty rectangle.

    Raises:
        InvalidBoundsError: If x_lo >= x_up or y_right >= y_left
    """
    values = (bounds.x_lo, bounds.x_up, bounds.y_left, bounds.y_right)
    if not all(math.isfinite(v) for v in values):
        raise InvalidBoundsError(f"Workspace bounds must be finite, got {bounds}")
    if bounds.x_lo >= bounds.x_up:
        raise InvalidBoundsError(
            f"x_lo ({bounds.x_lo}) must be smaller than x_up ({bounds.x_up})"
        )
    if bounds.y_right >= bounds.y_left:
        raise InvalidBoundsError(
            f"y_right ({bounds.y_right}) must be smaller than y_left ({bounds.y_left})"
        )


@dataclass(frozen=True)
class IdentifierConfig:
    """
    Immutable configuration of the cluster identifier.

    Attributes:
        palette: Ordered reference colors; earlier entries win distance ties
        bounds: Workspace rectangle clusters must fall inside
        orientation: Quaternion (x, y, z, w) assigned to every identified object
    """

    palette: Tuple[ReferenceColor, ...] = DEFAULT_PALETTE
    bounds: WorkspaceBounds = DEFAULT_BOUNDS
    orientation: Tuple[float, float, float, float] = IDENTITY_QUATERNION

    def __post_init__(self):
        object.__setattr__(self, "palette", tuple(self.palette))
        object.__setattr__(self, "orientation", tuple(float(v) for v in self.orientation))

        validate_palette(self.palette)
        validate_bounds(self.bounds)

        if len(self.orientation) != 4:
            raise ConfigurationError(
                f"Orientation must be a quaternion (x, y, z, w), got {self.orientation}"
            )
        norm = math.sqrt(sum(v * v for v in self.orientation))
        if not math.isclose(norm, 1.0, rel_tol=1e-6, abs_tol=1e-6):
            raise ConfigurationError(
                f"Orientation quaternion must have unit norm, got norm {norm:.6f}"
            )

    @classmethod
    def default(cls) -> "IdentifierConfig":
        """Configuration with the default palette, workspace and identity orientation."""
        return cls()

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "IdentifierConfig":
        """
        Build a configuration from a plain dictionary.

        Sections that are missing fall back to the defaults.

        Args:
            data: Dictionary with optional ``palette``, ``workspace`` and
                ``orientation`` keys

        Returns:
            Validated IdentifierConfig
        """
        data = data or {}
        if not isinstance(data, dict):
            raise ConfigurationError(
                f"Configuration must be a mapping, got {type(data).__name__}"
            )

        kwargs: Dict[str, Any] = {}

        if "palette" in data:
            kwargs["palette"] = tuple(
                _parse_color(entry, index) for index, entry in enumerate(data["palette"] or [])
            )

        if "workspace" in data:
            workspace = data["workspace"] or {}
            try:
                kwargs["bounds"] = WorkspaceBounds(
                    x_lo=float(workspace["x_lo"]),
                    x_up=float(workspace["x_up"]),
                    y_left=float(workspace["y_left"]),
                    y_right=float(workspace["y_right"]),
                )
            except KeyError as e:
                raise InvalidBoundsError(f"Workspace is missing bound {e}") from e
            except (TypeError, ValueError) as e:
                raise InvalidBoundsError(f"Invalid workspace bounds: {e}") from e

        if "orientation" in data:
            try:
                kwargs["orientation"] = tuple(float(v) for v in data["orientation"])
            except (TypeError, ValueError) as e:
                raise ConfigurationError(f"Invalid orientation: {e}") from e

        return cls(**kwargs)


def _parse_color(entry: Any, index: int) -> ReferenceColor:
    try:
        if "rgb" in entry:
            r, g, b = entry["rgb"]
        else:
            r, g, b = entry["r"], entry["g"], entry["b"]
        return ReferenceColor(
            name=str(entry["name"]), r=int(r), g=int(g), b=int(b), id=int(entry["id"])
        )
    except KeyError as e:
        raise ConfigurationError(f"Palette entry {index} is missing field {e}") from e
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Palette entry {index} is invalid: {e}") from e


def load_config(path: Optional[str] = None) -> IdentifierConfig:
    """
    Load the identifier configuration from a YAML file.

    Args:
        path: Path to the YAML file, or None for the default configuration

    Returns:
        Validated IdentifierConfig
    """
    if path is None:
        logger.info("No configuration file given, using defaults")
        return IdentifierConfig.default()

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigurationError(f"Cannot read configuration file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Cannot parse configuration file {path}: {e}") from e

    config = IdentifierConfig.from_dict(data)
    logger.info(
        f"Loaded configuration from {path}: {len(config.palette)} colors, bounds {config.bounds}"
    )
    return config
