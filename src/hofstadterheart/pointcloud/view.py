"""
Bounding box and camera framing for a generated point set.
"""
from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from hofstadterheart.errors import EmptyPointCloudError
from hofstadterheart.model.geometry_primitives import BoundingBox, Point, Vector, ViewSuggestion

if TYPE_CHECKING:
    import numpy.typing as npt

DEFAULT_VIEW_DIRECTION: tuple[float, float, float] = (0.7, 0.3, 0.5)
DEFAULT_DISTANCE_FACTOR: float = 3.0


def compute_bounds(positions: npt.ArrayLike) -> BoundingBox:
    """
    Componentwise min/max over all positions.

    Args:
        positions: (N, 3) array of points.

    Returns:
        The axis-aligned bounding box.

    Raises:
        ValueError: If the input is not of shape (N, 3).
        EmptyPointCloudError: If there are no points.
    """
    arr = np.asarray(positions, dtype=np.float64)
    if arr.ndim != 2 or arr.shape[1] != 3:
        raise ValueError(f"Expected shape (N, 3), got {arr.shape}.")
    if arr.shape[0] == 0:
        raise EmptyPointCloudError()
    return BoundingBox(min=Point.from_array(arr.min(axis=0)), max=Point.from_array(arr.max(axis=0)))


def suggest_view(
    bounds: BoundingBox,
    direction: tuple[float, float, float] = DEFAULT_VIEW_DIRECTION,
    distance_factor: float = DEFAULT_DISTANCE_FACTOR,
) -> ViewSuggestion:
    """
    Back the camera away from the center of `bounds` along a fixed oblique direction.

    The distance is `distance_factor` times the largest extent of the box, and the
    offset is that distance multiplied by each component of `direction` (the
    direction is deliberately not normalized).
    """
    center = bounds.center
    distance = bounds.max_dim * distance_factor
    offset = Vector(*direction) * distance
    return ViewSuggestion(position=center + offset, target=center)
