from __future__ import annotations

import math

from .models import BlastInputs, QualityAssessment, RockType

# Recommended burden factor (kb) and stemming factor (kst) per rock type.
ROCK_RANGES: dict[RockType, dict[str, tuple[float, float]]] = {
    RockType.VERY_SOFT: {"kb": (18, 25), "kst": (0.6, 0.8)},
    RockType.SOFT: {"kb": (25, 30), "kst": (0.6, 0.8)},
    RockType.MEDIUM: {"kb": (30, 35), "kst": (0.7, 0.8)},
    RockType.HARD: {"kb": (35, 45), "kst": (0.7, 0.9)},
}

CHARGE_LIMITS_KG = (0.5, 2000)


def get_quality_assessment(kr: int) -> QualityAssessment:
    """Rate a design from its stiffness ratio (depth / burden, rounded up)."""
    if kr <= 1:
        return QualityAssessment(
            fragmentation="Poor",
            air_blast="Severe",
            fly_rock="Severe",
            ground_vibration="Severe",
            comment="Severe back break/toe problems",
            action="Do not blast",
        )
    if kr == 2:
        rating, comment, action = "Fair", "Fair control", "Redesign if possible"
    elif kr == 3:
        rating, comment, action = (
            "Good",
            "Good control and fragmentation",
            "None required",
        )
    else:
        rating, comment, action = (
            "Excellent",
            "No increased benefits",
            "Consider reducing KR",
        )

    return QualityAssessment(
        fragmentation=rating,
        air_blast=rating,
        fly_rock=rating,
        ground_vibration=rating,
        comment=comment,
        action=action,
    )


def _outside(value: float, bounds: tuple[float, float]) -> bool:
    return value < bounds[0] or value > bounds[1]


def get_warnings(inputs: BlastInputs, charge_per_hole: float) -> list[str]:
    """Advisory messages for factors or charges outside usual practice."""
    messages: list[str] = []
    ranges = ROCK_RANGES[RockType(inputs.rock_type)]

    kb_min, kb_max = ranges["kb"]
    if _outside(inputs.burden_factor, ranges["kb"]):
        messages.append(
            f"Burden factor (B) out of recommended range {kb_min}–{kb_max}."
        )

    kst_min, kst_max = ranges["kst"]
    if _outside(inputs.stemming_factor, ranges["kst"]):
        messages.append(
            f"Stemming factor (st) out of recommended range {kst_min}–{kst_max}."
        )

    if _outside(charge_per_hole, CHARGE_LIMITS_KG):
        messages.append(
            f"Charge per hole ({charge_per_hole:.1f} kg) seems unusual. Check inputs."
        )

    return messages


def validate_inputs(inputs: BlastInputs) -> list[str]:
    """List inputs that cannot describe a real bench. Empty means usable."""
    errors: list[str] = []

    for name in (
        "diameter",
        "depth",
        "bench_length",
        "bench_width",
        "explosive_density",
        "rock_density",
        "burden_factor",
        "stemming_factor",
    ):
        value = getattr(inputs, name)
        if not math.isfinite(value) or value <= 0:
            errors.append(f"{name} must be a positive number")

    if not -90 < inputs.latitude < 90:
        errors.append("latitude must be strictly between -90 and 90")
    if not -180 <= inputs.longitude <= 180:
        errors.append("longitude must be between -180 and 180")
    if not 0 <= inputs.azimuth <= 360:
        errors.append("azimuth must be between 0 and 360 degrees")

    return errors
