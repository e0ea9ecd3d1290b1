# blend.py – linear-light mixing of two and three colours, label contrast,
# and inverse-distance weighting for the three-anchor preview.

from __future__ import annotations

import math
from enum import Enum
from typing import List, Sequence, Tuple

import numpy as np

from .colorspace import RGB, linear_to_rgb, rgb_to_linear, round_half_up
from .hexcodec import rgb_to_hex
from .luminance import relative_luminance

Point = Tuple[float, float]
Weights = Tuple[float, float, float]

MAX_STEPS = 512
ZERO_DISTANCE = 1e-6


class TextColor(str, Enum):
    BLACK = "#000"
    WHITE = "#FFF"


def lerp(a, b, t: float):
    return a * (1 - t) + b * t


def mix2(a: Sequence[int], b: Sequence[int], t: float) -> RGB:
    """
    Mix ``t`` parts of B into A. Interpolation happens in linear light and is
    encoded once, so white/black at 0.5 gives #BCBCBC rather than #7F7F7F.
    """
    return linear_to_rgb(lerp(rgb_to_linear(a), rgb_to_linear(b), t))


def mix3(
    a: Sequence[int], b: Sequence[int], c: Sequence[int], t_ab: float, t_c: float
) -> RGB:
    """A/B at ``t_ab``, then that intermediate with C at ``t_c``."""
    ab = lerp(rgb_to_linear(a), rgb_to_linear(b), t_ab)
    return linear_to_rgb(lerp(ab, rgb_to_linear(c), t_c))


def mix_steps(a: Sequence[int], b: Sequence[int], n: int) -> List[str]:
    """``n`` evenly spaced A→B mixes as hex, endpoints included."""
    n = max(2, min(int(n), MAX_STEPS))
    return [rgb_to_hex(mix2(a, b, i / (n - 1))) for i in range(n)]


def contrast_text(rgb: Sequence[int]) -> TextColor:
    return TextColor.BLACK if relative_luminance(rgb) > 0.5 else TextColor.WHITE


# --- spatial (preview) weighting --------------------------------------------


def inverse_distance_weights(
    pointer: Point, anchors: Sequence[Point], power: float = 2.0
) -> Weights:
    x, y = pointer
    raw = []
    for ax, ay in anchors:
        d = math.hypot(x - ax, y - ay) or ZERO_DISTANCE
        raw.append(1.0 / d**power)
    total = sum(raw)
    wa, wb, wc = (w / total for w in raw)
    return wa, wb, wc


def weights_to_sequential(weights: Sequence[float]) -> Tuple[float, float]:
    """Barycentric (wA, wB, wC) → (t_ab, t_c) understood by :func:`mix3`."""
    wa, wb, wc = weights
    denom = wa + wb
    t_ab = wb / denom if denom > 0 else 0.5
    return t_ab, wc


def sequential_to_weights(t_ab: float, t_c: float) -> Weights:
    return (1 - t_c) * (1 - t_ab), (1 - t_c) * t_ab, t_c


def spatial_blend(
    pointer: Point, anchors: Sequence[Point], colors: Sequence[Sequence[int]]
) -> RGB:
    """
    Weighted average in raw 8-bit RGB. Only used for the live preview field;
    the numeric result always comes from :func:`mix3`.
    """
    w = np.array(inverse_distance_weights(pointer, anchors))
    mixed = w @ np.asarray(colors, dtype=np.float64)
    r, g, b = np.clip(round_half_up(mixed), 0, 255).astype(int)
    return RGB(int(r), int(g), int(b))


__all__ = [
    "TextColor",
    "lerp",
    "mix2",
    "mix3",
    "mix_steps",
    "contrast_text",
    "inverse_distance_weights",
    "weights_to_sequential",
    "sequential_to_weights",
    "spatial_blend",
]
