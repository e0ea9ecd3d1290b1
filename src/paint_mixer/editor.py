from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Optional, Sequence, Tuple

import numpy as np
from coloraide import Color

from .blend import contrast_text, mix2, sequential_to_weights
from .colorspace import (
    RGB,
    Lab,
    lab_to_rgb,
    lab_to_xyz,
    linear_to_rgb,
    rgb_to_lab,
    rgb_to_linear,
    round_half_up,
    xyz_to_linear,
)
from .hexcodec import hex_to_rgb, rgb_to_hex
from .luminance import color_with_lrv, lrv

log = logging.getLogger(__name__)

EDIT_FIELDS = ("r", "g", "b", "hex", "lrv", "L", "a", "b_star")
DE_OK = 2.0


def describe(rgb: Sequence[int]) -> Dict[str, Any]:
    """Everything a swatch card shows for one colour."""
    lab = rgb_to_lab(rgb)
    return {
        "hex": rgb_to_hex(rgb),
        "rgb": [int(v) for v in rgb],
        "lrv": lrv(rgb),
        "lab": [round(v, 1) for v in lab],
        "text": contrast_text(rgb).value,
    }


def _number(value: Any) -> Optional[float]:
    try:
        v = float(value)
    except (TypeError, ValueError):
        return None
    return v if math.isfinite(v) else None


def apply_edit(rgb: Sequence[int], field: str, value: Any) -> RGB:
    """
    Apply one form edit to ``rgb`` and return the new canonical colour.
    Anything that does not parse leaves the colour as it was.
    """
    current = RGB(*(int(v) for v in rgb))
    if field not in EDIT_FIELDS:
        raise ValueError(f"unknown field '{field}'")

    if field == "hex":
        parsed = hex_to_rgb(value if isinstance(value, str) else None)
        return parsed if parsed is not None else current

    v = _number(value)
    if v is None:
        return current

    if field in ("r", "g", "b"):
        ch = int(min(255, max(0, math.floor(v + 0.5))))
        return current._replace(**{field: ch})
    if field == "lrv":
        return color_with_lrv(current, v)

    L, a, b = rgb_to_lab(current)
    if field == "L":
        L = v
    elif field == "a":
        a = v
    else:
        b = v
    return lab_to_rgb(Lab(L, a, b))


def mix_ratio2(t: float) -> Tuple[int, int]:
    pct_b = int(round_half_up(t * 100))
    return 100 - pct_b, pct_b


def mix_ratio3(t_ab: float, t_c: float) -> Tuple[int, int, int]:
    _, wb, wc = sequential_to_weights(t_ab, t_c)
    pct_b, pct_c = int(round_half_up(wb * 100)), int(round_half_up(wc * 100))
    return 100 - pct_b - pct_c, pct_b, pct_c


# --- target-Lab solver -------------------------------------------------------


def _ca(rgb: Sequence[int]) -> Color:
    return Color("srgb", [v / 255 for v in rgb])


def delta_e(rgb: Sequence[int], other: Sequence[int] | Lab) -> float:
    """CIEDE2000 between an 8-bit colour and another colour or a D65 Lab."""
    if isinstance(other, Lab):
        target = Color("lab-d65", list(other))
    else:
        target = _ca(other)
    return float(_ca(rgb).delta_e(target, method="2000"))


@dataclass(frozen=True)
class SolveResult:
    b: RGB
    mix: RGB
    delta_e: float
    clipped: bool

    @property
    def kind(self) -> str:
        return "ok" if self.delta_e <= DE_OK else "warn"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "b": describe(self.b),
            "mix": describe(self.mix),
            "deltaE": round(self.delta_e, 2),
            "clipped": self.clipped,
            "kind": self.kind,
        }


def solve_b_for_target(a: Sequence[int], t: float, target: Sequence[float]) -> SolveResult:
    """
    Find the colour B that, mixed into A at ``t``, lands on the target Lab.
    Solved per channel in linear light: B = (T - (1 - t) A) / t. Targets that
    need a channel outside [0, 1] are clipped and reported as such.
    """
    if not t > 0:
        raise ValueError("t must be > 0 to solve for B")
    lab = Lab(*(float(v) for v in target))
    if not (math.isfinite(t) and all(math.isfinite(v) for v in lab)):
        raise ValueError("t and the target Lab must be finite numbers")
    want = np.clip(xyz_to_linear(lab_to_xyz(lab)), 0.0, 1.0)
    need = (want - (1 - t) * rgb_to_linear(a)) / t
    clipped = bool(np.any((need < 0.0) | (need > 1.0)))
    if clipped:
        log.debug("target %s unreachable from %s at t=%.2f; clipping %s", lab, a, t, need)
    b = linear_to_rgb(need)
    achieved = mix2(a, b, t)
    return SolveResult(b=b, mix=achieved, delta_e=delta_e(achieved, lab), clipped=clipped)


def nearest_paint(paints: Iterable[Dict[str, Any]], rgb: Sequence[int]) -> Optional[Dict[str, Any]]:
    """Closest enriched pantry paint to ``rgb`` by CIEDE2000, or None if empty."""
    best, best_de = None, math.inf
    for p in paints:
        de = delta_e(p["rgb"], rgb)
        if de < best_de:
            best, best_de = p, de
    if best is None:
        return None
    return {**best, "deltaE": round(best_de, 2)}


__all__ = [
    "describe",
    "apply_edit",
    "mix_ratio2",
    "mix_ratio3",
    "delta_e",
    "SolveResult",
    "solve_b_for_target",
    "nearest_paint",
]
