import json

import pytest

from paint_mixer.catalog import DEFAULT_PATH, Catalog, load_catalog
from paint_mixer.colorspace import RGB


def test_bundled_catalog_loads():
    cat = load_catalog()
    assert len(cat) > 0
    assert load_catalog() is cat
    with open(DEFAULT_PATH, encoding="utf-8") as f:
        assert len(json.load(f)) == len(cat)


def test_manufacturers_first_seen_order():
    cat = load_catalog()
    mfrs = cat.manufacturers()
    assert mfrs[:2] == ["Benjamin Moore", "Sherwin-Williams"]
    assert len(mfrs) == len(set(mfrs))


def test_filter_by_manufacturer():
    cat = load_catalog()
    sw = cat.filter("Sherwin-Williams")
    assert sw and all(c.mfr == "Sherwin-Williams" for c in sw)
    assert len(cat.filter()) == len(cat)
    assert cat.filter("") == cat.filter(None)
    assert cat.filter("Nobody") == []


def test_find_fills_rgb():
    c = load_catalog().find("OC-17")
    assert c.rgb == RGB(0xEA, 0xE9, 0xE2)
    assert c.hex == "#EAE9E2"
    assert c.label == "White Dove OC-17"
    assert load_catalog().find("nope") is None


def test_to_dict():
    d = load_catalog().find("SW 7008").to_dict()
    assert d["mfr"] == "Sherwin-Williams"
    assert d["rgb"] == [0xEE, 0xEA, 0xE1]
    assert 0 < d["lrv"] <= 100
    assert len(d["lab"]) == 3


def test_bad_records_are_skipped():
    cat = Catalog.from_records(
        [
            {"mfr": "X", "code": "1", "name": "One", "hex": "#010203"},
            {"mfr": "X", "code": "2", "name": "Bad", "hex": "#12"},
            {"mfr": "X", "name": "No code", "hex": "#010203"},
            {"mfr": "X", "code": "1", "name": "Shadowed", "hex": "#FFFFFF"},
        ]
    )
    assert len(cat) == 2
    # first entry wins a code lookup
    assert cat.find("1").name == "One"


def test_custom_catalog_file(tmp_path):
    path = tmp_path / "colors.json"
    path.write_text(json.dumps([{"mfr": "Acme", "code": "A1", "name": "Red", "hex": "ff0000"}]))
    cat = load_catalog(str(path))
    assert cat.manufacturers() == ["Acme"]
    assert cat.find("A1").rgb == RGB(255, 0, 0)


def test_catalog_file_must_be_a_list(tmp_path):
    path = tmp_path / "colors.json"
    path.write_text(json.dumps({"code": "A1"}))
    with pytest.raises(ValueError):
        load_catalog(str(path))
