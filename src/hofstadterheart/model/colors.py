"""
Color helpers.

The point colors are specified in HSL and handed over in linear RGB by default.
With `linear=False` the raw HSL -> RGB triple is returned unchanged; those are
the buffer values a renderer that stores HSL output directly would draw.
"""
from __future__ import annotations

import colorsys
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    import numpy.typing as npt
    from hofstadterheart.config import PipelineConfig


def hsl_to_rgb(h: float, s: float, l: float) -> tuple[float, float, float]:
    """
    Convert an HSL color to sRGB.

    Args:
        h: Hue in [0, 1] (wraps around).
        s: Saturation in [0, 1].
        l: Lightness in [0, 1].

    Returns:
        (r, g, b) in [0, 1].
    """
    # colorsys orders the arguments as hue, lightness, saturation
    return colorsys.hls_to_rgb(h, l, s)


def srgb_to_linear(c: float | npt.NDArray[np.float64]) -> float | npt.NDArray[np.float64]:
    """Apply the inverse sRGB transfer curve."""
    c = np.asarray(c, dtype=np.float64)
    out = np.where(
        c < 0.04045,
        c * 0.0773993808,
        np.power(c * 0.9478672986 + 0.0521327014, 2.4),
    )
    return out if out.ndim else float(out)


def hsl_to_color(hsl: tuple[float, float, float], linear: bool = True) -> npt.NDArray[np.float64]:
    rgb = np.array(hsl_to_rgb(*hsl), dtype=np.float64)
    if linear:
        rgb = np.asarray(srgb_to_linear(rgb), dtype=np.float64)
    return np.clip(rgb, 0.0, 1.0)


def classification_colors(config: PipelineConfig) -> tuple[npt.NDArray[np.float64], npt.NDArray[np.float64]]:
    """
    The two point colors used for the binary classification.

    Returns:
        (concordant_rgb, discordant_rgb), each of shape (3,).
    """
    concordant = hsl_to_color(config.concordant_hsl, linear=config.linear_colors)
    discordant = hsl_to_color(config.discordant_hsl, linear=config.linear_colors)
    return concordant, discordant
