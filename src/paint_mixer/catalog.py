# catalog.py – read-only manufacturer colour catalog (mfr / code / name / hex)
#   - ships as data/paint_colors.json; another file can be swapped in via config
#   - manufacturers keep first-seen order, colours keep file order

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Optional

from .colorspace import RGB, rgb_to_lab
from .hexcodec import hex_to_rgb, rgb_to_hex
from .luminance import lrv

log = logging.getLogger(__name__)

DEFAULT_PATH = Path(__file__).parent / "data" / "paint_colors.json"


@dataclass(frozen=True)
class CatalogColor:
    mfr: str
    code: str
    name: str
    rgb: RGB

    @property
    def hex(self) -> str:
        return rgb_to_hex(self.rgb)

    @property
    def label(self) -> str:
        """Name as the editors show it once picked, e.g. 'White Dove OC-17'."""
        return f"{self.name} {self.code}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "mfr": self.mfr,
            "code": self.code,
            "name": self.name,
            "label": self.label,
            "hex": self.hex,
            "rgb": list(self.rgb),
            "lrv": lrv(self.rgb),
            "lab": [round(v, 1) for v in rgb_to_lab(self.rgb)],
        }


class Catalog:
    def __init__(self, colors: List[CatalogColor]):
        self.colors = colors
        self._by_code = {}
        for c in colors:
            self._by_code.setdefault(c.code, c)

    @classmethod
    def from_records(cls, records: List[Dict[str, Any]]) -> "Catalog":
        colors = []
        for rec in records:
            rgb = hex_to_rgb(rec.get("hex"))
            if rgb is None or not rec.get("code"):
                log.warning("catalog: skipping bad entry %r", rec)
                continue
            colors.append(
                CatalogColor(
                    mfr=str(rec.get("mfr") or ""),
                    code=str(rec["code"]),
                    name=str(rec.get("name") or ""),
                    rgb=rgb,
                )
            )
        return cls(colors)

    def __len__(self) -> int:
        return len(self.colors)

    def manufacturers(self) -> List[str]:
        return list(dict.fromkeys(c.mfr for c in self.colors if c.mfr))

    def filter(self, mfr: Optional[str] = None) -> List[CatalogColor]:
        """Every colour, or only ``mfr``'s when one is given."""
        if not mfr:
            return list(self.colors)
        return [c for c in self.colors if c.mfr == mfr]

    def find(self, code: str) -> Optional[CatalogColor]:
        return self._by_code.get(code)


@lru_cache(maxsize=8)
def load_catalog(path: Optional[str] = None) -> Catalog:
    """Load (once per path) the catalog JSON: a list of {mfr, code, name, hex}."""
    src = Path(path) if path else DEFAULT_PATH
    with open(src, "r", encoding="utf-8") as f:
        records = json.load(f)
    if not isinstance(records, list):
        raise ValueError(f"{src}: expected a JSON list of colours")
    catalog = Catalog.from_records(records)
    log.info("catalog: %d colours from %s", len(catalog), src)
    return catalog


__all__ = ["CatalogColor", "Catalog", "load_catalog", "DEFAULT_PATH"]
