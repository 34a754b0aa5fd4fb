"""Metric/imperial conversions for blast inputs and displayed results."""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal

from .models import BlastInputs, UnitSystem

FT_PER_M = 3.28084
LB_PER_KG = 2.2046226218
KGM3_PER_LBFT3 = 16.01846337396

LENGTH_FIELDS = ("diameter", "depth", "bench_length", "bench_width")
DENSITY_FIELDS = ("explosive_density", "rock_density")


def ft_to_m(x: float) -> float:
    return x / FT_PER_M


def m_to_ft(x: float) -> float:
    return x * FT_PER_M


def lb_to_kg(x: float) -> float:
    return x / LB_PER_KG


def kg_to_lb(x: float) -> float:
    return x * LB_PER_KG


def lbft3_to_kgm3(x: float) -> float:
    return x * KGM3_PER_LBFT3


def kgm3_to_lbft3(x: float) -> float:
    return x / KGM3_PER_LBFT3


def round_half_up(value: float, digits: int) -> float:
    """Round ties away from zero, as the front end's `toFixed` does."""
    # floats this large carry no fractional digits to round
    if not math.isfinite(value) or abs(value) >= 1e15:
        return value
    quantum = Decimal(1).scaleb(-digits)
    return float(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))


def _convert_fields(inputs: BlastInputs, convert_len, convert_dens, digits=None):
    def fix(value: float) -> float:
        return value if digits is None else round_half_up(value, digits)

    changes = {name: fix(convert_len(getattr(inputs, name))) for name in LENGTH_FIELDS}
    changes.update(
        {name: fix(convert_dens(getattr(inputs, name))) for name in DENSITY_FIELDS}
    )
    return inputs.replace(**changes)


def convert_inputs(inputs: BlastInputs, target_unit: UnitSystem) -> BlastInputs:
    """Re-express a record in `target_unit`, rounded to 3 decimals for display.

    The rounding makes metric -> imperial -> metric drift slightly; callers
    that need exact values should use `to_metric` on the original record.
    """
    if UnitSystem(target_unit) is UnitSystem.IMPERIAL:
        return _convert_fields(inputs, m_to_ft, kgm3_to_lbft3, digits=3)
    return _convert_fields(inputs, ft_to_m, lbft3_to_kgm3, digits=3)


def to_metric(inputs: BlastInputs, unit_system: UnitSystem) -> BlastInputs:
    """Exact conversion of a record entered in `unit_system` into metric."""
    if UnitSystem(unit_system) is UnitSystem.IMPERIAL:
        return _convert_fields(inputs, ft_to_m, lbft3_to_kgm3)
    return inputs


def unit_labels(unit_system: UnitSystem) -> dict[str, str]:
    if UnitSystem(unit_system) is UnitSystem.IMPERIAL:
        return {"len": "ft", "dens": "lb/ft³"}
    return {"len": "m", "dens": "kg/m³"}


def format_length(value_m: float, unit_system: UnitSystem) -> str:
    if UnitSystem(unit_system) is UnitSystem.IMPERIAL:
        return f"{m_to_ft(value_m):.2f} ft"
    return f"{value_m:.2f} m"


def format_mass(value_kg: float, unit_system: UnitSystem) -> str:
    if UnitSystem(unit_system) is UnitSystem.IMPERIAL:
        return f"{kg_to_lb(value_kg):.2f} lb"
    return f"{value_kg:.2f} kg"
