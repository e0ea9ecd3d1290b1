# pantry.py – in-memory paint inventory and the "pick 2–3 paints, route to a
# mixer" flow. Nothing is persisted; a fresh Pantry starts from DEMO_PANTRY.

from __future__ import annotations

import logging
import re
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Iterator, List, Literal, Mapping, Optional, Sequence

from .colorspace import RGB, rgb_to_lab
from .hexcodec import hex_to_rgb, rgb_to_hex
from .luminance import lrv

log = logging.getLogger(__name__)

Route = Literal["mix2", "mix3"]

SHEEN_OPTIONS = ("Flat", "Matte", "Eggshell", "Satin", "Semi-Gloss", "Gloss", "Other")
TYPE_OPTIONS = ("Latex", "Acrylic Enamel", "Alkyd Enamel", "Lacquer", "Stain", "Primer")
LOCATION_OPTIONS = ("Interior", "Exterior")
OPACITY_OPTIONS = ("Clear", "Toner", "Semi-Transparent", "Semi-Solid", "Solid")
UNIT_OPTIONS = ("oz", "pt", "qt", "gal", "L")
BASE_OPTIONS = ("Water-Based", "Oil/Alkyd", "Waterborne Alkyd")

FALLBACK_RGB = RGB(240, 240, 240)
MIN_PICK, MAX_PICK = 2, 3


@dataclass
class Paint:
    id: str
    name: str
    hex: str
    mfr: str = ""
    type: str = ""
    sheen: str = ""
    location: str = ""
    opacity: str = ""
    base: str = ""
    volume: str = ""
    unit: str = "gal"

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "Paint":
        name = str(data.get("name") or "").strip()
        if not name:
            raise ValueError("paint needs a name")
        rgb = hex_to_rgb(data.get("hex"))
        if rgb is None:
            raise ValueError(f"invalid hex: {data.get('hex')!r}")
        unit = str(data.get("unit") or "gal")
        if unit not in UNIT_OPTIONS:
            raise ValueError(f"unknown unit '{unit}'")
        known = {k: str(data[k]) for k in cls.__dataclass_fields__ if k in data and data[k] is not None}
        known.update(id=str(data.get("id") or ""), name=name, hex=rgb_to_hex(rgb), unit=unit)
        return cls(**known)


def enrich(paint: Paint) -> Dict[str, Any]:
    """Paint record plus the derived rgb / LRV / Lab the picker displays."""
    rgb = hex_to_rgb(paint.hex)
    if rgb is None:
        log.debug("paint %s has unparsable hex %r", paint.id, paint.hex)
        rgb = FALLBACK_RGB
    lab = rgb_to_lab(rgb)
    return {
        **asdict(paint),
        "rgb": list(rgb),
        "lrv": lrv(rgb),
        "lab": [round(v, 1) for v in lab],
    }


DEMO_PANTRY: List[Paint] = [
    Paint("bm-oc-17", "White Dove OC-17", "#EAE9E2", mfr="Benjamin Moore", type="Interior Eggshell"),
    Paint("sw-7008", "Alabaster SW 7008", "#EEEAE1", mfr="Sherwin-Williams", type="Interior Matte"),
    Paint("bm-hc-172", "Revere Pewter HC-172", "#CCC7B9", mfr="Benjamin Moore", type="Advance Satin"),
    Paint("sw-9130", "Cadet SW 9130", "#7E8D96", mfr="Sherwin-Williams", type="Interior Satin"),
    Paint("pp-royal", "Royal Blue", "#2456C2", mfr="PPG", type="Interior Semi-Gloss"),
]


def _slug(name: str) -> str:
    return re.sub(r"[^a-z0-9]+", "-", name.lower()).strip("-") or "paint"


@dataclass
class Pantry:
    paints: Dict[str, Paint] = field(default_factory=dict)

    @classmethod
    def demo(cls) -> "Pantry":
        p = cls()
        for paint in DEMO_PANTRY:
            p.add(Paint(**asdict(paint)))
        return p

    def __iter__(self) -> Iterator[Paint]:
        return iter(self.paints.values())

    def __len__(self) -> int:
        return len(self.paints)

    def get(self, paint_id: str) -> Optional[Paint]:
        return self.paints.get(paint_id)

    def add(self, paint: Paint) -> Paint:
        if not paint.id:
            base = _slug(paint.name)
            pid, n = base, 2
            while pid in self.paints:
                pid, n = f"{base}-{n}", n + 1
            paint.id = pid
        elif paint.id in self.paints:
            raise ValueError(f"duplicate paint id '{paint.id}'")
        self.paints[paint.id] = paint
        log.info("pantry: added %s (%s)", paint.id, paint.hex)
        return paint

    def remove(self, paint_id: str) -> Paint:
        paint = self.paints.pop(paint_id)
        log.info("pantry: removed %s", paint_id)
        return paint

    def enriched(self) -> List[Dict[str, Any]]:
        return [enrich(p) for p in self]

    def pick(self, ids: Sequence[str]) -> List[Dict[str, Any]]:
        """Enriched paints for ``ids`` in the given order; unknown ids are skipped."""
        chosen = [enrich(self.paints[i]) for i in ids if i in self.paints]
        if not MIN_PICK <= len(chosen) <= MAX_PICK:
            raise ValueError("Select 2-3 paints")
        return chosen


def toggle_selection(selected: Sequence[str], paint_id: str, limit: int = MAX_PICK) -> List[str]:
    """Checkbox behaviour: uncheck if present, check only while under ``limit``."""
    if paint_id in selected:
        return [s for s in selected if s != paint_id]
    if len(selected) >= limit:
        return list(selected)
    return [*selected, paint_id]


def route_for(chosen: Sequence[Any]) -> Route:
    return "mix2" if len(chosen) == 2 else "mix3"


__all__ = [
    "Paint",
    "Pantry",
    "DEMO_PANTRY",
    "enrich",
    "toggle_selection",
    "route_for",
]
