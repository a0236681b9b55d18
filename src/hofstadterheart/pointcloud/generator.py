"""
Point-Cloud Generator
=====================
Maps the two sequence tables onto a colored 3D point set.

For every sampled index n (1, 1 + step, ... <= n_max):

    x = (n - n_max / 2) * x_scale
    y = (a(n) - Q(n)) * y_scale
    z = 0                                                   for n <= z_start_index
        (|a(n) - a(n-k)| + |Q(n) - Q(n-k)|) * z_scale        otherwise (k = lookback)

Points with |x|, |y| or |z| above the thresholds are dropped. Every surviving
point is colored by the relative divergence |a - Q| / (a + Q + 1): one fixed
color below the threshold, another one above it.

Classes:
    GeneratedPoint: A single emitted sample.
    PointCloud: The generator output handed to a renderer.
    PointCloudGenerator: Runs the pipeline for a configuration.
"""
from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import Optional, TYPE_CHECKING

import numpy as np

from hofstadterheart.config import PipelineConfig
from hofstadterheart.errors import EmptyPointCloudError
from hofstadterheart.model.colors import classification_colors
from hofstadterheart.model.geometry_primitives import BoundingBox, Point, ViewSuggestion
from hofstadterheart.pointcloud.view import compute_bounds, suggest_view
from hofstadterheart.sequences.engine import HofstadterSequences, SequenceTables

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GeneratedPoint:
    """One visible sample and the index it came from."""
    position: Point
    color: tuple[float, float, float]
    index: int


@dataclass(frozen=True, eq=False)
class PointCloud:
    """
    Index-aligned positions and colors plus the derived framing.

    Attributes:
        positions: (N, 3) float64 array.
        colors: (N, 3) float64 array with values in [0, 1].
        indices: (N,) int64 array of source indices n, increasing.
        concordant: (N,) bool array, True where the concordant color was used.
        bounds: Bounding box of `positions`.
        view: Suggested camera placement.
    """
    positions: npt.NDArray[np.float64]
    colors: npt.NDArray[np.float64]
    indices: npt.NDArray[np.int64]
    concordant: npt.NDArray[np.bool_]
    bounds: BoundingBox
    view: ViewSuggestion
    _points: tuple[GeneratedPoint, ...] = field(default=(), init=False, repr=False, compare=False)

    def __len__(self) -> int:
        return int(self.indices.shape[0])

    @property
    def points(self) -> tuple[GeneratedPoint, ...]:
        """The samples as immutable `GeneratedPoint` objects, in index order."""
        if not self._points and len(self):
            pts = tuple(
                GeneratedPoint(
                    position=Point.from_array(pos),
                    color=(float(col[0]), float(col[1]), float(col[2])),
                    index=int(idx),
                )
                for pos, col, idx in zip(self.positions, self.colors, self.indices)
            )
            object.__setattr__(self, "_points", pts)
        return self._points

    @property
    def concordant_fraction(self) -> float:
        return float(np.count_nonzero(self.concordant)) / len(self)


class PointCloudGenerator:
    """
    Runs the sequence engine and the geometry mapping for a configuration.

    The engine is kept between calls, so generating again with a smaller or equal
    `n_max` reuses the memo tables.
    """

    def __init__(self, config: Optional[PipelineConfig] = None, sequences: Optional[HofstadterSequences] = None) -> None:
        self.config = (config or PipelineConfig()).validate()
        self.sequences = sequences or HofstadterSequences(capacity=self.config.n_max)

    def generate(self, n_max: Optional[int] = None, step: Optional[int] = None) -> PointCloud:
        """
        Build the point cloud.

        Args:
            n_max: Highest index (defaults to the configured one).
            step: Sampling stride (defaults to the configured one).

        Returns:
            The filtered, colored point set with its bounds and view suggestion.

        Raises:
            ConfigurationError: If n_max < 1 or step < 1.
            EmptyPointCloudError: If every sampled index is rejected.
        """
        overrides = {}
        if n_max is not None:
            overrides["n_max"] = n_max
        if step is not None:
            overrides["step"] = step
        config = self.config.with_overrides(**overrides).validate() if overrides else self.config

        logger.info(f"Calculating sequences up to n={config.n_max}...")
        tables = self.sequences.build_tables(config.n_max)

        logger.info("Sequences calculated, mapping to points...")
        cloud = map_tables(tables, config)
        logger.info(f"Generated {len(cloud)} points.")
        logger.debug(
            f"Bounds: min={cloud.bounds.min.to_tuple()}, max={cloud.bounds.max.to_tuple()}, "
            f"center={cloud.view.target.to_tuple()}"
        )
        return cloud


def map_tables(tables: SequenceTables, config: PipelineConfig) -> PointCloud:
    """
    Map populated sequence tables to a point cloud.

    Raises:
        EmptyPointCloudError: If every sampled index is rejected.
    """
    n_max = config.n_max
    if tables.n_max < n_max:
        raise ValueError(f"Tables cover 1..{tables.n_max}, need 1..{n_max}.")

    n = np.arange(1, n_max + 1, config.step, dtype=np.int64)
    a = tables.a[n]
    q = tables.q[n]
    diff = a - q

    x = (n - n_max / 2) * config.x_scale
    y = diff * config.y_scale
    z = np.zeros(n.shape[0], dtype=np.float64)

    deep = n > config.z_start_index
    back = n[deep] - config.lookback
    local_variation = np.abs(a[deep] - tables.a[back]) + np.abs(q[deep] - tables.q[back])
    z[deep] = local_variation * config.z_scale

    keep = (
        (np.abs(x) <= config.max_abs_x)
        & (np.abs(y) <= config.max_abs_y)
        & (np.abs(z) <= config.max_abs_z)
    )
    kept = int(np.count_nonzero(keep))
    logger.debug(f"Outlier filter kept {kept} of {n.shape[0]} sampled indices.")
    if kept == 0:
        logger.error("No points generated! Check the scaling constants against n_max.")
        raise EmptyPointCloudError(n_max=n_max, step=config.step)

    positions = np.column_stack((x[keep], y[keep], z[keep]))

    correlation = np.abs(diff[keep]) / (a[keep] + q[keep] + 1)
    concordant = correlation < config.correlation_threshold
    concordant_rgb, discordant_rgb = classification_colors(config)
    colors = np.where(concordant[:, None], concordant_rgb, discordant_rgb)

    bounds = compute_bounds(positions)
    view = suggest_view(bounds, config.view_direction, config.view_distance_factor)

    return PointCloud(
        positions=positions,
        colors=colors,
        indices=n[keep],
        concordant=concordant,
        bounds=bounds,
        view=view,
    )


def generate(n_max: Optional[int] = None, step: Optional[int] = None, config: Optional[PipelineConfig] = None) -> PointCloud:
    """
    Convenience wrapper: run the whole pipeline with a fresh engine.

    `n_max` and `step` override the values in `config` only when given.
    """
    generator = PointCloudGenerator(config=config)
    return generator.generate(n_max=n_max, step=step)
