# luminance.py – relative luminance, Light Reflectance Value and the inverse
# "give me this colour at LRV x" solve.

from __future__ import annotations

import logging
import math
from typing import Sequence

import numpy as np

from .colorspace import RGB, linear_to_rgb, rgb_to_linear, round_half_up

log = logging.getLogger(__name__)

# Rec.709 / sRGB luma weights
LUMA = np.array([0.2126, 0.7152, 0.0722])
BLACK_Y = 1e-6


def luminance_of_linear(linear: Sequence[float]) -> float:
    return float(LUMA @ np.asarray(linear, dtype=np.float64))


def relative_luminance(rgb: Sequence[int]) -> float:
    """Y in [0, 1] of an 8-bit sRGB colour."""
    return luminance_of_linear(rgb_to_linear(rgb))


def lrv(rgb: Sequence[int]) -> float:
    """Light Reflectance Value, 0–100 with one decimal."""
    return float(round_half_up(relative_luminance(rgb) * 1000)) / 10


def scale_to_luminance(linear: Sequence[float], target_y: float) -> np.ndarray:
    """
    Scale a linear triple so that its luminance becomes ``target_y`` while the
    channel ratios stay put. Channels pushed past 1.0 are clipped, which moves
    the hue at extreme targets. Black has no ratio to keep, so it becomes a
    neutral grey at the target.
    """
    lin = np.asarray(linear, dtype=np.float64)
    ty = min(1.0, max(0.0, float(target_y)))
    y = luminance_of_linear(lin)
    if y <= BLACK_Y:
        log.debug("luminance solve on black input; using neutral grey Y=%.4f", ty)
        return np.full(3, ty)
    scaled = lin * (ty / y)
    if np.any(scaled > 1.0):
        log.debug("luminance solve clipped channels %s", scaled)
    return np.clip(scaled, 0.0, 1.0)


def color_with_lrv(rgb: Sequence[int], target_lrv: float) -> RGB:
    """Return ``rgb`` re-lit to ``target_lrv`` (clamped to [0, 100])."""
    if math.isnan(target_lrv):
        return RGB(*rgb)
    target = min(100.0, max(0.0, float(target_lrv)))
    return linear_to_rgb(scale_to_luminance(rgb_to_linear(rgb), target / 100))


__all__ = [
    "relative_luminance",
    "luminance_of_linear",
    "lrv",
    "scale_to_luminance",
    "color_with_lrv",
]
