from __future__ import annotations

import re
from typing import Optional, Sequence

from .colorspace import RGB, round_half_up

_NON_HEX = re.compile(r"[^0-9A-Fa-f]")


def sanitize_hex(s: str | None) -> str:
    """Drop every non-hex character and keep at most the first six digits."""
    return _NON_HEX.sub("", s or "")[:6]


def hex_to_rgb(s: str | None) -> Optional[RGB]:
    """
    Parse '#RRGGBB' leniently. Anything that is not a hex digit is ignored
    ('#ec e7-de' parses), extra digits past the sixth are dropped, and fewer
    than six digits is a parse failure signalled by ``None``.
    """
    raw = sanitize_hex(s)
    if len(raw) != 6:
        return None
    return RGB(int(raw[0:2], 16), int(raw[2:4], 16), int(raw[4:6], 16))


def _channel(v: float) -> int:
    return int(min(255, max(0, round_half_up(v))))


def rgb_to_hex(rgb: Sequence[float]) -> str:
    r, g, b = (_channel(v) for v in rgb)
    return f"#{r:02X}{g:02X}{b:02X}"


__all__ = ["hex_to_rgb", "rgb_to_hex", "sanitize_hex"]
