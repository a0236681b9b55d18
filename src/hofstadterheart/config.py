"""
Pipeline Configuration
======================
This module is the central registry for the constants that shape the point cloud.

Why is this file needed?
------------------------
1. Abstraction: The scaling factors and outlier thresholds are tuned together.
   Keeping them in one place prevents magic numbers scattered through the
   generator.
2. Testing: Tests build a modified `PipelineConfig` to vary a single constant
   without touching the algorithm.

Exports:
    DEFAULT_N_MAX (int): Highest sequence index sampled by default.
    DEFAULT_STEP (int): Sampling stride over the index range.
    PipelineConfig: Frozen dataclass with every tunable value.
"""
from __future__ import annotations

from dataclasses import dataclass, asdict, replace, fields
from typing import Any, Dict, Tuple

from hofstadterheart.errors import ConfigurationError

# Global Constants
DEFAULT_N_MAX: int = 10_750
DEFAULT_STEP: int = 1

HSL = Tuple[float, float, float]
Triple = Tuple[float, float, float]


@dataclass(frozen=True)
class PipelineConfig:
    """
    Tunable parameters of the sequence-to-geometry mapping.

    Attributes:
        n_max: Highest index evaluated (inclusive).
        step: Stride between sampled indices, starting at 1.
        x_scale: Multiplier applied to the centered index for the x coordinate.
        y_scale: Multiplier applied to a(n) - Q(n) for the y coordinate.
        z_scale: Multiplier applied to the local variation for the z coordinate.
        z_start_index: Indices up to and including this value get z = 0.
        lookback: Window used for the local variation |a(n) - a(n-k)| + |Q(n) - Q(n-k)|.
        max_abs_x, max_abs_y, max_abs_z: Outlier thresholds, strict (|v| > max rejects).
        correlation_threshold: Below this relative divergence a point is "concordant".
        concordant_hsl, discordant_hsl: The two classification colors as (h, s, l).
        view_direction: Offset ratios of the suggested camera from the cloud center.
        view_distance_factor: Camera distance as a multiple of the largest extent.
        linear_colors: Convert colors from sRGB to linear RGB.
    """
    n_max: int = DEFAULT_N_MAX
    step: int = DEFAULT_STEP

    x_scale: float = 0.03
    y_scale: float = 0.125
    z_scale: float = 0.1
    z_start_index: int = 10
    lookback: int = 5

    max_abs_x: float = 200.0
    max_abs_y: float = 100.0
    max_abs_z: float = 50.0

    correlation_threshold: float = 0.3
    concordant_hsl: HSL = (0.95, 0.9, 0.6)  # pink
    discordant_hsl: HSL = (0.6, 0.7, 0.5)  # blue

    view_direction: Triple = (0.7, 0.3, 0.5)
    view_distance_factor: float = 3.0

    linear_colors: bool = True

    def validate(self) -> PipelineConfig:
        """
        Check the configuration before any computation starts.

        Returns:
            self, to allow chaining.

        Raises:
            ConfigurationError: If any value is out of its valid range.
        """
        if self.n_max < 1:
            raise ConfigurationError(f"n_max must be >= 1, got {self.n_max}.")
        if self.step < 1:
            raise ConfigurationError(f"step must be >= 1, got {self.step}.")
        if self.lookback < 1:
            raise ConfigurationError(f"lookback must be >= 1, got {self.lookback}.")
        if self.z_start_index < self.lookback:
            raise ConfigurationError(
                f"z_start_index ({self.z_start_index}) must be >= lookback ({self.lookback})."
            )
        for name in ("x_scale", "y_scale", "z_scale", "max_abs_x", "max_abs_y",
                     "max_abs_z", "correlation_threshold", "view_distance_factor"):
            value = getattr(self, name)
            if not value > 0.0:
                raise ConfigurationError(f"{name} must be positive, got {value}.")
        for name in ("concordant_hsl", "discordant_hsl"):
            hsl = getattr(self, name)
            if len(hsl) != 3 or any(not 0.0 <= c <= 1.0 for c in hsl):
                raise ConfigurationError(f"{name} must be three values in [0, 1], got {hsl}.")
        if len(self.view_direction) != 3:
            raise ConfigurationError(f"view_direction must have 3 components, got {self.view_direction}.")
        return self

    def with_overrides(self, **overrides: Any) -> PipelineConfig:
        """Return a copy with the given fields replaced."""
        known = {f.name for f in fields(self)}
        unknown = set(overrides) - known
        if unknown:
            raise ConfigurationError(f"Unknown configuration fields: {sorted(unknown)}")
        return replace(self, **overrides)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> PipelineConfig:
        known = {f.name for f in fields(cls)}
        kwargs = {}
        for key, value in data.items():
            if key not in known:
                continue
            # JSON turns tuples into lists
            kwargs[key] = tuple(value) if isinstance(value, list) else value
        return cls(**kwargs)
