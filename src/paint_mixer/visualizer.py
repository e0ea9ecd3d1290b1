# visualizer.py – geometry and preview field of the circular blend pickers.
#
# Both pickers are a circle inscribed in a square canvas. The two-colour one
# maps the pointer's x position onto t; the three-colour one derives
# inverse-distance weights to three anchors and paints every pixel with the
# raw-RGB spatial blend.

from __future__ import annotations

import io
from dataclasses import dataclass
from typing import Any, Dict, Optional, Sequence, Tuple

import numpy as np
from PIL import Image, ImageDraw

from .blend import (
    ZERO_DISTANCE,
    Point,
    inverse_distance_weights,
    mix3,
    spatial_blend,
    weights_to_sequential,
)
from .colorspace import round_half_up
from .hexcodec import rgb_to_hex

BG_LIGHT = (250, 250, 250)
BG_DARK = (17, 17, 17)
ANCHOR_RADIUS = 10
POINTER_RADIUS = 7


@dataclass(frozen=True)
class VisualizerGeometry:
    size: int = 300

    @property
    def radius(self) -> float:
        return self.size * 0.46

    @property
    def center(self) -> Point:
        return self.size / 2, self.size / 2

    @property
    def two_anchors(self) -> Tuple[Point, Point]:
        _, cy = self.center
        return (self.size * 0.12, cy), (self.size * 0.88, cy)

    @property
    def three_anchors(self) -> Tuple[Point, Point, Point]:
        s = self.size
        return (s * 0.12, s * 0.12), (s * 0.88, s * 0.12), (s * 0.50, s * 0.88)

    def contains(self, x: float, y: float) -> bool:
        cx, cy = self.center
        dx, dy = x - cx, y - cy
        return dx * dx + dy * dy <= self.radius * self.radius


def pointer_to_t(geom: VisualizerGeometry, x: float, y: float) -> Optional[float]:
    """Fraction of B under the pointer, or None when it is outside the circle."""
    if not geom.contains(x, y):
        return None
    cx, _ = geom.center
    r = geom.radius
    return min(1.0, max(0.0, (x - (cx - r)) / (2 * r)))


def pointer_to_blend(
    geom: VisualizerGeometry,
    x: float,
    y: float,
    colors: Optional[Sequence[Sequence[int]]] = None,
) -> Optional[Dict[str, Any]]:
    if not geom.contains(x, y):
        return None
    anchors = geom.three_anchors
    weights = inverse_distance_weights((x, y), anchors)
    t_ab, t_c = weights_to_sequential(weights)
    out: Dict[str, Any] = {"weights": list(weights), "tAB": t_ab, "tC": t_c}
    if colors is not None:
        out["preview"] = rgb_to_hex(spatial_blend((x, y), anchors, colors))
        out["result"] = rgb_to_hex(mix3(*colors, t_ab, t_c))
    return out


def blend_field(
    geom: VisualizerGeometry, colors: Sequence[Sequence[int]], *, dark: bool = False
) -> np.ndarray:
    """(size, size, 3) uint8 image of the spatial blend clipped to the circle."""
    n = geom.size
    ys, xs = np.mgrid[0:n, 0:n].astype(np.float64)
    cols = np.asarray(colors, dtype=np.float64)  # 3×3

    w = np.empty((3, n, n))
    for i, (ax, ay) in enumerate(geom.three_anchors):
        d = np.hypot(xs - ax, ys - ay)
        d = np.where(d == 0, ZERO_DISTANCE, d)
        w[i] = 1.0 / d**2
    w /= w.sum(axis=0)

    rgb = np.einsum("kyx,kc->yxc", w, cols)
    img = np.clip(round_half_up(rgb), 0, 255).astype(np.uint8)

    cx, cy = geom.center
    outside = (xs - cx) ** 2 + (ys - cy) ** 2 > geom.radius**2
    img[outside] = BG_DARK if dark else BG_LIGHT
    return img


def render_field_png(
    geom: VisualizerGeometry,
    colors: Sequence[Sequence[int]],
    *,
    dark: bool = False,
    pointer: Optional[Point] = None,
) -> bytes:
    im = Image.fromarray(blend_field(geom, colors, dark=dark))
    draw = ImageDraw.Draw(im)

    for (ax, ay), col in zip(geom.three_anchors, colors):
        box = [ax - ANCHOR_RADIUS, ay - ANCHOR_RADIUS, ax + ANCHOR_RADIUS, ay + ANCHOR_RADIUS]
        draw.ellipse(box, fill=tuple(int(c) for c in col), outline=(0, 0, 0), width=2)

    if pointer is not None and geom.contains(*pointer):
        px, py = pointer
        box = [px - POINTER_RADIUS, py - POINTER_RADIUS, px + POINTER_RADIUS, py + POINTER_RADIUS]
        draw.ellipse(
            box,
            fill=(255, 255, 255),
            outline=(255, 255, 255) if dark else (0, 0, 0),
            width=2,
        )

    buf = io.BytesIO()
    im.save(buf, format="PNG")
    return buf.getvalue()


__all__ = [
    "VisualizerGeometry",
    "pointer_to_t",
    "pointer_to_blend",
    "blend_field",
    "render_field_png",
]
