import pytest

from paint_mixer.blend import mix2
from paint_mixer.colorspace import RGB, Lab, rgb_to_lab
from paint_mixer.editor import (
    apply_edit,
    delta_e,
    describe,
    mix_ratio2,
    mix_ratio3,
    nearest_paint,
    solve_b_for_target,
)
from paint_mixer.luminance import color_with_lrv, lrv
from paint_mixer.pantry import Pantry

LINEN = RGB(236, 231, 222)
KHAKI = RGB(214, 200, 183)


def test_describe():
    d = describe(LINEN)
    assert d["hex"] == "#ECE7DE"
    assert d["rgb"] == [236, 231, 222]
    assert d["lrv"] == pytest.approx(80.3)
    assert d["text"] == "#000"
    assert all(round(v, 1) == v for v in d["lab"])


def test_channel_edit_clamps():
    assert apply_edit(LINEN, "r", 300) == RGB(255, 231, 222)
    assert apply_edit(LINEN, "g", "-4") == RGB(236, 0, 222)
    assert apply_edit(LINEN, "b", 99.6) == RGB(236, 231, 100)


def test_bad_values_leave_colour():
    assert apply_edit(LINEN, "hex", "#12") == LINEN
    assert apply_edit(LINEN, "hex", 12) == LINEN
    assert apply_edit(LINEN, "r", "abc") == LINEN
    assert apply_edit(LINEN, "lrv", "nan") == LINEN
    assert apply_edit(LINEN, "L", None) == LINEN
    assert apply_edit(LINEN, "L", "inf") == LINEN
    assert apply_edit(LINEN, "r", float("-inf")) == LINEN


def test_huge_lab_edit_stays_in_range():
    out = apply_edit(LINEN, "L", "1e300")
    assert all(0 <= c <= 255 for c in out)
    assert 0.0 <= lrv(out) <= 100.0


def test_hex_and_lrv_edits():
    assert apply_edit(LINEN, "hex", "#2456c2") == RGB(36, 86, 194)
    assert apply_edit(LINEN, "lrv", 40) == color_with_lrv(LINEN, 40)


def test_lab_edits():
    L, a, b = rgb_to_lab(LINEN)
    same = apply_edit(LINEN, "L", L)
    assert all(abs(x - y) <= 1 for x, y in zip(same, LINEN))

    darker = apply_edit(LINEN, "L", 40)
    assert rgb_to_lab(darker).L == pytest.approx(40, abs=0.5)
    assert lrv(darker) < lrv(LINEN)

    bluer = apply_edit(LINEN, "b_star", -20)
    assert bluer.b > bluer.r


def test_unknown_field():
    with pytest.raises(ValueError):
        apply_edit(LINEN, "alpha", 1)


def test_mix_ratios():
    assert mix_ratio2(0.5) == (50, 50)
    assert mix_ratio2(0.333) == (67, 33)
    assert mix_ratio2(0.0) == (100, 0)
    # halves round up
    assert mix_ratio2(0.125) == (87, 13)
    assert mix_ratio2(0.005) == (99, 1)
    assert mix_ratio3(0.5, 0.5) == (25, 25, 50)
    assert sum(mix_ratio3(0.37, 0.21)) == 100


def test_delta_e():
    assert delta_e(LINEN, LINEN) == pytest.approx(0.0, abs=1e-9)
    assert delta_e((255, 255, 255), (0, 0, 0)) > 90


def test_solve_reaches_reachable_target():
    t = 0.5
    target = rgb_to_lab(mix2(LINEN, KHAKI, t))
    res = solve_b_for_target(LINEN, t, target)
    assert not res.clipped
    assert all(abs(x - y) <= 2 for x, y in zip(res.b, KHAKI))
    assert res.delta_e < 1.0
    assert res.kind == "ok"
    assert res.to_dict()["b"]["hex"].startswith("#")


def test_solve_reports_unreachable_target():
    res = solve_b_for_target((255, 255, 255), 0.1, Lab(0.0, 0.0, 0.0))
    assert res.clipped
    assert res.b == RGB(0, 0, 0)
    assert res.kind == "warn"


def test_solve_needs_positive_t():
    with pytest.raises(ValueError):
        solve_b_for_target(LINEN, 0.0, Lab(50.0, 0.0, 0.0))


@pytest.mark.parametrize(
    "t, target",
    [
        (0.5, Lab(float("nan"), 0.0, 0.0)),
        (0.5, Lab(50.0, float("inf"), 0.0)),
        (float("inf"), Lab(50.0, 0.0, 0.0)),
    ],
)
def test_solve_rejects_non_finite(t, target):
    with pytest.raises(ValueError):
        solve_b_for_target(LINEN, t, target)


def test_nearest_paint():
    paints = Pantry.demo().enriched()
    best = nearest_paint(paints, (36, 86, 194))
    assert best["id"] == "pp-royal"
    assert best["deltaE"] == pytest.approx(0.0, abs=1e-6)
    assert nearest_paint([], LINEN) is None
