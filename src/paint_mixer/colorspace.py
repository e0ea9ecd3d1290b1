# colorspace.py – sRGB(8-bit) <-> linear light <-> CIE XYZ (D65) <-> CIELAB
#   - IEC 61966-2-1 companding (threshold 0.04045 / 0.0031308, gamma 2.4)
#   - fixed sRGB<->XYZ matrices, D65 reference white
#   - no range validation: callers clamp inputs, outputs are clamped to 8-bit

from __future__ import annotations

from typing import NamedTuple, Sequence, Union

import numpy as np

Number = Union[int, float]
ArrayLike = Union[Number, Sequence[Number], np.ndarray]


class RGB(NamedTuple):
    r: int
    g: int
    b: int


class XYZ(NamedTuple):
    X: float
    Y: float
    Z: float


class Lab(NamedTuple):
    L: float
    a: float
    b: float


# --- constants ---------------------------------------------------------------
SRGB_THRESHOLD = 0.04045
LINEAR_THRESHOLD = 0.0031308
SRGB_EXPONENT = 2.4
SRGB_A = 0.055

WHITE_D65 = np.array([0.95047, 1.0, 1.08883])

_RGB_XYZ = np.array(
    [
        [0.4124564, 0.3575761, 0.1804375],
        [0.2126729, 0.7151522, 0.0721750],
        [0.0193339, 0.1191920, 0.9503041],
    ]
)
_XYZ_RGB = np.array(
    [
        [3.2404542, -1.5371385, -0.4985314],
        [-0.9692660, 1.8760108, 0.0415560],
        [0.0556434, -0.2040259, 1.0572252],
    ]
)

_EPSILON = 216 / 24389  # (6/29)^3
_DELTA = 6 / 29


def _out(v: np.ndarray):
    # 0-d results go back to plain floats so scalar callers never see NumPy
    return float(v) if v.ndim == 0 else v


# --- companding --------------------------------------------------------------
def srgb_to_linear(channel: ArrayLike):
    """8-bit sRGB channel value(s) in [0, 255] → linear light in [0, 1]."""
    c = np.asarray(channel, dtype=np.float64) / 255.0
    # power branch only ever sees values above the threshold
    lin = np.where(
        c <= SRGB_THRESHOLD,
        c / 12.92,
        ((np.maximum(c, SRGB_THRESHOLD) + SRGB_A) / (1 + SRGB_A)) ** SRGB_EXPONENT,
    )
    return _out(lin)


def linear_to_srgb(value: ArrayLike):
    """Linear light → companded sRGB in [0, 1] (not yet scaled to 8-bit)."""
    v = np.asarray(value, dtype=np.float64)
    enc = np.where(
        v <= LINEAR_THRESHOLD,
        v * 12.92,
        (1 + SRGB_A) * np.power(np.maximum(v, LINEAR_THRESHOLD), 1 / SRGB_EXPONENT)
        - SRGB_A,
    )
    return _out(enc)


def round_half_up(x: ArrayLike) -> np.ndarray:
    """Round-to-nearest with .5 going up, i.e. what ``Math.round`` does."""
    return np.floor(np.asarray(x, dtype=np.float64) + 0.5)


def to_8bit(value01: ArrayLike):
    """Companded [0, 1] value(s) → int channel(s) in [0, 255]; NaN maps to 0."""
    scaled = np.nan_to_num(np.asarray(value01, dtype=np.float64) * 255.0, nan=0.0, posinf=255.0, neginf=0.0)
    u8 = np.clip(round_half_up(scaled), 0, 255).astype(int)
    return int(u8) if u8.ndim == 0 else u8


def linear_to_rgb(linear: ArrayLike) -> RGB:
    """Encode a linear triple once, clipping to [0, 1] first. Non-finite channels
    (an overflowed Lab or XYZ input) become 0, or 1 for +inf."""
    lin = np.nan_to_num(np.asarray(linear, dtype=np.float64), nan=0.0, posinf=1.0, neginf=0.0)
    lin = np.clip(lin, 0.0, 1.0)
    r, g, b = to_8bit(linear_to_srgb(lin))
    return RGB(int(r), int(g), int(b))


def rgb_to_linear(rgb: Sequence[Number]) -> np.ndarray:
    return np.asarray(srgb_to_linear(np.asarray(rgb, dtype=np.float64)))


# --- sRGB <-> XYZ ------------------------------------------------------------
def rgb_to_xyz(rgb: Sequence[Number]) -> XYZ:
    X, Y, Z = _RGB_XYZ @ rgb_to_linear(rgb)
    return XYZ(float(X), float(Y), float(Z))


def xyz_to_linear(xyz: Sequence[float]) -> np.ndarray:
    """XYZ → linear RGB without clipping (may leave [0, 1] for out-of-gamut)."""
    return _XYZ_RGB @ np.asarray(xyz, dtype=np.float64)


def xyz_to_rgb(xyz: Sequence[float]) -> RGB:
    return linear_to_rgb(xyz_to_linear(xyz))


# --- XYZ <-> Lab -------------------------------------------------------------
def _f(t: np.ndarray) -> np.ndarray:
    return np.where(t > _EPSILON, np.cbrt(t), (841 / 108) * t + 4 / 29)


def _finv(t: np.ndarray) -> np.ndarray:
    return np.where(t > _DELTA, t**3, (108 / 841) * (t - 4 / 29))


def xyz_to_lab(xyz: Sequence[float]) -> Lab:
    fx, fy, fz = _f(np.asarray(xyz, dtype=np.float64) / WHITE_D65)
    return Lab(float(116 * fy - 16), float(500 * (fx - fy)), float(200 * (fy - fz)))


def lab_to_xyz(lab: Sequence[float]) -> XYZ:
    L, a, b = (float(v) for v in lab)
    fy = (L + 16) / 116
    f = np.array([fy + a / 500, fy, fy - b / 200])
    X, Y, Z = WHITE_D65 * _finv(f)
    return XYZ(float(X), float(Y), float(Z))


# --- composed ----------------------------------------------------------------
def rgb_to_lab(rgb: Sequence[Number]) -> Lab:
    return xyz_to_lab(rgb_to_xyz(rgb))


def lab_to_rgb(lab: Sequence[float]) -> RGB:
    # huge L overflows to inf and then NaN; linear_to_rgb maps those into range
    with np.errstate(over="ignore", invalid="ignore"):
        return xyz_to_rgb(lab_to_xyz(lab))


__all__ = [
    "RGB",
    "XYZ",
    "Lab",
    "srgb_to_linear",
    "linear_to_srgb",
    "round_half_up",
    "to_8bit",
    "linear_to_rgb",
    "rgb_to_linear",
    "rgb_to_xyz",
    "xyz_to_linear",
    "xyz_to_rgb",
    "xyz_to_lab",
    "lab_to_xyz",
    "rgb_to_lab",
    "lab_to_rgb",
]
