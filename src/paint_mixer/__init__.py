"""Paint-colour mixing calculator: colorimetry core plus a small Flask UI."""

from .blend import (
    TextColor,
    contrast_text,
    inverse_distance_weights,
    mix2,
    mix3,
    mix_steps,
    sequential_to_weights,
    spatial_blend,
    weights_to_sequential,
)
from .colorspace import (
    RGB,
    XYZ,
    Lab,
    lab_to_rgb,
    lab_to_xyz,
    linear_to_srgb,
    rgb_to_lab,
    rgb_to_xyz,
    srgb_to_linear,
    xyz_to_lab,
    xyz_to_rgb,
)
from .hexcodec import hex_to_rgb, rgb_to_hex
from .luminance import color_with_lrv, lrv, relative_luminance

__version__ = "0.1.0"

__all__ = [
    "RGB",
    "XYZ",
    "Lab",
    "srgb_to_linear",
    "linear_to_srgb",
    "rgb_to_xyz",
    "xyz_to_rgb",
    "xyz_to_lab",
    "lab_to_xyz",
    "rgb_to_lab",
    "lab_to_rgb",
    "relative_luminance",
    "lrv",
    "color_with_lrv",
    "mix2",
    "mix3",
    "mix_steps",
    "TextColor",
    "contrast_text",
    "inverse_distance_weights",
    "weights_to_sequential",
    "sequential_to_weights",
    "spatial_blend",
    "hex_to_rgb",
    "rgb_to_hex",
]
