import math

from flask import Flask, jsonify, request
from flask_cors import CORS
from loguru import logger

from blast_design import (
    DEFAULT_INPUTS,
    BlastInputs,
    CSVHandler,
    UnitSystem,
    convert_inputs,
    design_blast,
    format_length,
    format_mass,
    pattern_bounds,
    unit_labels,
    validate_inputs,
)
from blast_design.models import parse_enum
from config import Config, configure_logging

configure_logging()

app = Flask(__name__)
CORS(app, origins=Config.cors_origins())

csv_handler = CSVHandler()


def _unit_system(payload: dict | None, *keys: str) -> UnitSystem:
    """Read a unit system from the first present key, defaulting to metric."""
    source = payload or {}
    keys = keys or ("unit_system", "unitSystem", "units")
    for key in keys:
        if source.get(key) is not None:
            return parse_enum(UnitSystem, source[key])
    return UnitSystem.METRIC


def _source_unit_system(payload: dict, target: UnitSystem) -> UnitSystem:
    """Unit system the posted inputs are in; without one, the other system."""
    for key in ("from_unit", "fromUnit", "from"):
        if payload.get(key) is not None:
            return parse_enum(UnitSystem, payload[key])
    if target is UnitSystem.IMPERIAL:
        return UnitSystem.METRIC
    return UnitSystem.IMPERIAL


def _parse_inputs(
    payload: dict | None, units: UnitSystem = UnitSystem.METRIC
) -> BlastInputs:
    """Accept inputs either nested under `inputs` or at the top level.

    Missing fields are filled from the defaults expressed in `units`.
    """
    source = payload or {}
    nested = source.get("inputs")
    if nested is not None and not isinstance(nested, dict):
        raise ValueError("`inputs` must be an object")
    defaults = DEFAULT_INPUTS
    if units is UnitSystem.IMPERIAL:
        defaults = convert_inputs(DEFAULT_INPUTS, units)
    return BlastInputs.from_dict(
        nested if nested is not None else source, defaults=defaults
    )


def _finite_or_none(value):
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return value


def _design_payload(design) -> dict:
    results = design.results
    units = design.unit_system
    bounds = pattern_bounds(design.geo_holes)

    return {
        "unit_system": units.value,
        "inputs": design.inputs.to_dict(),
        "results": {k: _finite_or_none(v) for k, v in results.to_dict().items()},
        "display": {
            "burden": format_length(results.burden, units),
            "spacing": format_length(results.spacing, units),
            "stemming": format_length(results.stemming, units),
            "charge_per_hole": format_mass(results.charge_per_hole, units),
            "total_explosive": format_mass(results.total_explosive, units),
            "powder_factor": (
                f"{results.powder_factor:.2f} kg/t"
                if math.isfinite(results.powder_factor)
                else "n/a"
            ),
        },
        "labels": unit_labels(units),
        "quality": design.quality.to_dict(),
        "warnings": design.warnings,
        "holes": [h.to_dict() for h in design.geo_holes],
        "bounds": (
            {"south_west": list(bounds[0]), "north_east": list(bounds[1])}
            if bounds
            else None
        ),
    }


def _summary_rows(design) -> list[dict]:
    results = design.results
    units = design.unit_system
    return [
        {"section": "design", "name": "pattern", "value": design.inputs.pattern.value},
        {"section": "design", "name": "rock_type", "value": design.inputs.rock_type.value},
        {"section": "design", "name": "burden", "value": format_length(results.burden, units)},
        {"section": "design", "name": "spacing", "value": format_length(results.spacing, units)},
        {"section": "design", "name": "rows", "value": results.rows},
        {"section": "design", "name": "cols", "value": results.cols},
        {"section": "design", "name": "num_holes", "value": results.num_holes},
        {
            "section": "design",
            "name": "charge_per_hole",
            "value": format_mass(results.charge_per_hole, units),
        },
        {"section": "quality", "name": "stiffness_ratio", "value": results.stiffness_ratio},
        {"section": "quality", "name": "action", "value": design.quality.action},
    ]


@app.route("/api/defaults", methods=["GET"])
def defaults():
    try:
        units = _unit_system(request.args)
        inputs = DEFAULT_INPUTS
        if units is UnitSystem.IMPERIAL:
            inputs = convert_inputs(inputs, units)
        return (
            jsonify(
                {
                    "status": "success",
                    "unit_system": units.value,
                    "inputs": inputs.to_dict(),
                    "labels": unit_labels(units),
                }
            ),
            200,
        )

    except ValueError as exc:
        return jsonify({"error": str(exc)}), 400


@app.route("/api/design", methods=["POST"])
def calculate_design():
    try:
        data = request.get_json(silent=True)

        if not data:
            return jsonify({"error": "No design inputs provided"}), 400

        units = _unit_system(data)
        design = design_blast(_parse_inputs(data, units), units)

        return jsonify({"status": "success", **_design_payload(design)}), 200

    except ValueError as exc:
        return jsonify({"error": str(exc)}), 400

    except Exception as exc:
        logger.exception("Blast design failed")
        return jsonify({"error": str(exc)}), 500


@app.route("/api/convert", methods=["POST"])
def convert_units():
    try:
        data = request.get_json(silent=True)

        if not data or "inputs" not in data:
            return jsonify({"error": "No inputs provided"}), 400

        target = _unit_system(data, "target_unit", "targetUnit", "to")
        source_units = _source_unit_system(data, target)
        inputs = _parse_inputs(data, source_units)
        if source_units is target:
            converted = inputs
        else:
            converted = convert_inputs(inputs, target)

        return (
            jsonify(
                {
                    "status": "success",
                    "unit_system": target.value,
                    "inputs": converted.to_dict(),
                    "labels": unit_labels(target),
                }
            ),
            200,
        )

    except ValueError as exc:
        return jsonify({"error": str(exc)}), 400

    except Exception as exc:
        logger.exception("Unit conversion failed")
        return jsonify({"error": str(exc)}), 500


@app.route("/api/validate", methods=["POST"])
def validate_design():
    try:
        data = request.get_json(silent=True)

        if not data:
            return jsonify({"error": "No design inputs provided"}), 400

        errors = validate_inputs(_parse_inputs(data, _unit_system(data)))
        if errors:
            return jsonify({"status": "invalid", "errors": errors}), 400

        return jsonify({"status": "valid", "message": "Inputs are valid"}), 200

    except ValueError as exc:
        return jsonify({"status": "invalid", "errors": [str(exc)]}), 400

    except Exception as exc:
        logger.exception("Validation failed")
        return jsonify({"error": str(exc)}), 500


@app.route("/api/export", methods=["POST"])
def export_holes():
    try:
        data = request.get_json(silent=True)

        if not data:
            return jsonify({"error": "No design or holes provided"}), 400

        if "holes" in data:
            csv_content = csv_handler.export_holes(
                data["holes"], summary_rows=data.get("summary", [])
            )
        else:
            units = _unit_system(data)
            design = design_blast(_parse_inputs(data, units), units)
            csv_content = csv_handler.export_holes(
                design.geo_holes, summary_rows=_summary_rows(design)
            )

        return jsonify({"status": "success", "csv": csv_content}), 200

    except ValueError as exc:
        return jsonify({"error": str(exc)}), 400

    except Exception as exc:
        logger.exception("Hole export failed")
        return jsonify({"error": str(exc)}), 500


@app.route("/health", methods=["GET"])
def health():
    return jsonify({"status": "healthy"}), 200


if __name__ == "__main__":
    app.run(debug=Config.DEBUG, host=Config.HOST, port=Config.PORT)
