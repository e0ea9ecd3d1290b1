from __future__ import annotations

import logging
import math
from typing import Any, Mapping, Optional

from flask import Flask, Response, jsonify, render_template, request
from werkzeug.exceptions import HTTPException

from .blend import contrast_text, mix2, mix3, mix_steps
from .catalog import load_catalog
from .colorspace import RGB
from .editor import (
    apply_edit,
    describe,
    mix_ratio2,
    mix_ratio3,
    nearest_paint,
    solve_b_for_target,
)
from .hexcodec import hex_to_rgb, rgb_to_hex
from .pantry import (
    BASE_OPTIONS,
    LOCATION_OPTIONS,
    MIN_PICK,
    OPACITY_OPTIONS,
    SHEEN_OPTIONS,
    TYPE_OPTIONS,
    UNIT_OPTIONS,
    Paint,
    Pantry,
    route_for,
    toggle_selection,
)
from .visualizer import (
    VisualizerGeometry,
    pointer_to_blend,
    pointer_to_t,
    render_field_png,
)

log = logging.getLogger(__name__)

DEFAULTS: Mapping[str, Any] = {
    "DARK_MODE": False,
    "PREVIEW_COLORS": True,
    "VISUALIZER_SIZE": 300,
    "MAX_STEPS": 512,
    "CATALOG_PATH": None,
}

# starting colours of the mixer screens
DEFAULT_A = RGB(236, 231, 222)
DEFAULT_B = RGB(214, 200, 183)
DEFAULT_C = RGB(180, 170, 160)


class InvalidInput(ValueError):
    pass


def color_arg(name: str, default: RGB) -> RGB:
    """``?name=RRGGBB`` query argument, or ``default`` when absent."""
    raw = request.args.get(name)
    if raw is None:
        return default
    rgb = hex_to_rgb(raw)
    if rgb is None:
        raise InvalidInput(f"invalid color '{name}': {raw!r}")
    return rgb


def float_arg(name: str, default: float, lo: float = 0.0, hi: float = 1.0) -> float:
    raw = request.args.get(name)
    if raw is None:
        return default
    try:
        v = float(raw)
    except ValueError:
        raise InvalidInput(f"{name} must be a number") from None
    if v != v:
        raise InvalidInput(f"{name} must be a number")
    return min(hi, max(lo, v))


def color_value(value: Any) -> RGB:
    """JSON colour: '#RRGGBB' string or [r, g, b] list."""
    if isinstance(value, str):
        rgb = hex_to_rgb(value)
        if rgb is not None:
            return rgb
    elif isinstance(value, (list, tuple)) and len(value) == 3:
        try:
            return RGB(*(int(min(255, max(0, int(v)))) for v in value))
        except (TypeError, ValueError, OverflowError):
            pass
    raise InvalidInput(f"invalid color: {value!r}")


def json_body() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise InvalidInput("expected a JSON object")
    return data


# ----------------------------- Flask app ----------------------------------


def create_app(config: Optional[Mapping[str, Any]] = None) -> Flask:
    app = Flask(__name__, template_folder="templates")
    logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")

    app.config.update(DEFAULTS)
    app.config.from_prefixed_env("PAINT_MIXER")
    if config:
        app.config.update(config)

    catalog = load_catalog(app.config["CATALOG_PATH"])
    pantry = Pantry.demo()
    app.extensions["pantry"] = pantry
    geom = VisualizerGeometry(int(app.config["VISUALIZER_SIZE"]))

    @app.errorhandler(InvalidInput)
    def bad_request(exc: InvalidInput):
        return jsonify({"error": str(exc)}), 400

    @app.errorhandler(Exception)
    def failed(exc: Exception):
        if isinstance(exc, HTTPException):
            return exc
        log.exception("Request failed")
        return jsonify({"error": str(exc)}), 500

    @app.route("/")
    def index():
        return render_template(
            "index.html",
            dark=bool(app.config["DARK_MODE"]),
            preview_colors=bool(app.config["PREVIEW_COLORS"]),
            size=geom.size,
            defaults=[rgb_to_hex(c) for c in (DEFAULT_A, DEFAULT_B, DEFAULT_C)],
        )

    @app.route("/convert")
    def convert():
        if "hex" in request.args:
            rgb = color_arg("hex", DEFAULT_A)
        else:
            try:
                rgb = RGB(*(int(request.args[k]) for k in ("r", "g", "b")))
            except (KeyError, ValueError):
                raise InvalidInput("give either hex or r, g, b") from None
            rgb = RGB(*(min(255, max(0, v)) for v in rgb))
        return jsonify(describe(rgb))

    @app.route("/edit", methods=["POST"])
    def edit():
        data = json_body()
        rgb = color_value(data.get("color"))
        try:
            new = apply_edit(rgb, str(data.get("field")), data.get("value"))
        except ValueError as exc:
            raise InvalidInput(str(exc)) from None
        return jsonify(describe(new))

    @app.route("/mix")
    def mix():
        a = color_arg("a", DEFAULT_A)
        b = color_arg("b", DEFAULT_B)
        t = float_arg("t", 0.5)
        result = mix2(a, b, t)
        pct_a, pct_b = mix_ratio2(t)
        return jsonify(
            {
                "result": describe(result),
                "ratio": {"a": pct_a, "b": pct_b},
                "chips": [contrast_text(a).value, contrast_text(b).value],
            }
        )

    @app.route("/mix3")
    def mix_three():
        a = color_arg("a", DEFAULT_A)
        b = color_arg("b", DEFAULT_B)
        c = color_arg("c", DEFAULT_C)
        t_ab = float_arg("tab", 0.5)
        t_c = float_arg("tc", 0.5)
        pct_a, pct_b, pct_c = mix_ratio3(t_ab, t_c)
        return jsonify(
            {
                "result": describe(mix3(a, b, c, t_ab, t_c)),
                "ratio": {"a": pct_a, "b": pct_b, "c": pct_c},
            }
        )

    @app.route("/steps")
    def steps():
        a = color_arg("a", DEFAULT_A)
        b = color_arg("b", DEFAULT_B)
        try:
            n = int(request.args.get("n", 21))
        except ValueError:
            raise InvalidInput("n must be an integer") from None
        n = max(2, min(n, int(app.config["MAX_STEPS"])))
        return jsonify(mix_steps(a, b, n))

    @app.route("/visualizer/two")
    def visualizer_two():
        x = float_arg("x", geom.center[0], 0.0, geom.size)
        y = float_arg("y", geom.center[1], 0.0, geom.size)
        return jsonify({"t": pointer_to_t(geom, x, y)})

    @app.route("/visualizer/three")
    def visualizer_three():
        x = float_arg("x", geom.center[0], 0.0, geom.size)
        y = float_arg("y", geom.center[1], 0.0, geom.size)
        colors = [
            color_arg("a", DEFAULT_A),
            color_arg("b", DEFAULT_B),
            color_arg("c", DEFAULT_C),
        ]
        return jsonify(pointer_to_blend(geom, x, y, colors))

    @app.route("/visualizer/field.png")
    def visualizer_field():
        colors = [
            color_arg("a", DEFAULT_A),
            color_arg("b", DEFAULT_B),
            color_arg("c", DEFAULT_C),
        ]
        pointer = None
        if "x" in request.args and "y" in request.args:
            pointer = (
                float_arg("x", 0.0, 0.0, geom.size),
                float_arg("y", 0.0, 0.0, geom.size),
            )
        png = render_field_png(
            geom, colors, dark=bool(app.config["DARK_MODE"]), pointer=pointer
        )
        return Response(png, mimetype="image/png")

    @app.route("/catalog")
    def catalog_list():
        mfr = request.args.get("mfr") or None
        return jsonify(
            {
                "manufacturers": catalog.manufacturers(),
                "colors": [c.to_dict() for c in catalog.filter(mfr)],
            }
        )

    @app.route("/catalog/<code>")
    def catalog_color(code: str):
        color = catalog.find(code)
        if color is None:
            return jsonify({"error": f"no catalog colour '{code}'"}), 404
        return jsonify(color.to_dict())

    @app.route("/solve", methods=["POST"])
    def solve():
        data = json_body()
        a = color_value(data.get("a"))
        lab = data.get("lab")
        try:
            t = float(data.get("t", 0.5))
            target = [float(v) for v in lab]
        except (TypeError, ValueError):
            raise InvalidInput("t must be a number and lab a list of 3 numbers") from None
        if len(target) != 3:
            raise InvalidInput("lab must have 3 components")
        if not all(math.isfinite(v) for v in (t, *target)):
            raise InvalidInput("t and lab must be finite numbers")
        try:
            solved = solve_b_for_target(a, min(1.0, t), target)
        except ValueError as exc:
            raise InvalidInput(str(exc)) from None
        out = solved.to_dict()
        out["nearest"] = nearest_paint(pantry.enriched(), solved.b)
        return jsonify(out)

    @app.route("/pantry", methods=["GET"])
    def pantry_list():
        return jsonify(
            {
                "paints": pantry.enriched(),
                "options": {
                    "sheen": SHEEN_OPTIONS,
                    "type": TYPE_OPTIONS,
                    "location": LOCATION_OPTIONS,
                    "opacity": OPACITY_OPTIONS,
                    "unit": UNIT_OPTIONS,
                    "base": BASE_OPTIONS,
                },
            }
        )

    @app.route("/pantry", methods=["POST"])
    def pantry_add():
        try:
            paint = pantry.add(Paint.from_mapping(json_body()))
        except ValueError as exc:
            raise InvalidInput(str(exc)) from None
        return jsonify({"id": paint.id}), 201

    @app.route("/pantry/<paint_id>", methods=["DELETE"])
    def pantry_remove(paint_id: str):
        if pantry.get(paint_id) is None:
            return jsonify({"error": f"no paint '{paint_id}'"}), 404
        pantry.remove(paint_id)
        return "", 204

    @app.route("/pantry/select", methods=["POST"])
    def pantry_select():
        data = json_body()
        selected = data.get("selected", [])
        if not isinstance(selected, list):
            raise InvalidInput("selected must be a list")
        paint_id = str(data.get("id") or "")
        if pantry.get(paint_id) is None:
            return jsonify({"error": f"no paint '{paint_id}'"}), 404
        chosen = toggle_selection([str(s) for s in selected if pantry.get(str(s))], paint_id)
        return jsonify({"selected": chosen, "ready": len(chosen) >= MIN_PICK})

    @app.route("/pantry/mix", methods=["POST"])
    def pantry_mix():
        ids = json_body().get("ids")
        if not isinstance(ids, list):
            raise InvalidInput("ids must be a list")
        try:
            chosen = pantry.pick([str(i) for i in ids])
        except ValueError as exc:
            raise InvalidInput(str(exc)) from None
        route = route_for(chosen)
        colors = [RGB(*p["rgb"]) for p in chosen]
        result = mix2(*colors, 0.5) if route == "mix2" else mix3(*colors, 0.5, 0.5)
        return jsonify({"route": route, "paints": chosen, "result": describe(result)})

    return app


if __name__ == "__main__":
    create_app().run(debug=False, threaded=True)
