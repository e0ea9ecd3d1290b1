import pytest

from paint_mixer.pantry import (
    DEMO_PANTRY,
    Paint,
    Pantry,
    enrich,
    route_for,
    toggle_selection,
)


def test_from_mapping_normalises_hex():
    p = Paint.from_mapping({"name": "Chalk", "hex": "eae9e2", "sheen": "Matte", "volume": 1})
    assert p.hex == "#EAE9E2"
    assert p.sheen == "Matte"
    assert p.volume == "1"
    assert p.unit == "gal"
    assert p.id == ""


@pytest.mark.parametrize(
    "data",
    [
        {"hex": "#EAE9E2"},
        {"name": "  ", "hex": "#EAE9E2"},
        {"name": "Chalk", "hex": "#EAE"},
        {"name": "Chalk"},
        {"name": "Chalk", "hex": "#EAE9E2", "unit": "barrel"},
    ],
)
def test_from_mapping_rejects(data):
    with pytest.raises(ValueError):
        Paint.from_mapping(data)


def test_enrich():
    e = enrich(DEMO_PANTRY[0])
    assert e["id"] == "bm-oc-17"
    assert e["rgb"] == [0xEA, 0xE9, 0xE2]
    assert 0 < e["lrv"] <= 100
    assert len(e["lab"]) == 3


def test_enrich_falls_back_on_bad_hex():
    e = enrich(Paint("x", "Broken", "#zz"))
    assert e["rgb"] == [240, 240, 240]


def test_demo_pantry_is_a_copy():
    p = Pantry.demo()
    assert len(p) == len(DEMO_PANTRY)
    p.remove("pp-royal")
    assert len(Pantry.demo()) == len(DEMO_PANTRY)


def test_add_generates_unique_ids():
    p = Pantry()
    a = p.add(Paint.from_mapping({"name": "Sea Salt", "hex": "#CDD2CA"}))
    b = p.add(Paint.from_mapping({"name": "Sea Salt", "hex": "#CDD2CA"}))
    assert a.id == "sea-salt"
    assert b.id == "sea-salt-2"
    assert [x.id for x in p] == ["sea-salt", "sea-salt-2"]


def test_add_duplicate_id():
    p = Pantry.demo()
    with pytest.raises(ValueError):
        p.add(Paint("sw-7008", "Again", "#EEEAE1"))


def test_remove_unknown():
    with pytest.raises(KeyError):
        Pantry().remove("nope")


def test_pick_and_route():
    p = Pantry.demo()
    two = p.pick(["sw-7008", "bm-oc-17"])
    assert [c["id"] for c in two] == ["sw-7008", "bm-oc-17"]
    assert route_for(two) == "mix2"
    assert route_for(p.pick(["sw-7008", "bm-oc-17", "pp-royal"])) == "mix3"

    with pytest.raises(ValueError):
        p.pick(["sw-7008"])
    with pytest.raises(ValueError):
        p.pick(["sw-7008", "missing"])
    with pytest.raises(ValueError):
        p.pick(["sw-7008", "bm-oc-17", "pp-royal", "sw-9130"])


def test_toggle_selection():
    sel = toggle_selection([], "a")
    sel = toggle_selection(sel, "b")
    sel = toggle_selection(sel, "c")
    assert sel == ["a", "b", "c"]
    assert toggle_selection(sel, "d") == ["a", "b", "c"]
    assert toggle_selection(sel, "b") == ["a", "c"]
