from __future__ import annotations

import math

from loguru import logger

from .errors import DegenerateGeometryError
from .models import BlastInputs, BlastPattern, CalculationResults, UnitSystem
from .units import to_metric

# Spacing-to-burden ratio (Ks) per drill pattern.
PATTERN_COEFFICIENTS: dict[BlastPattern, float] = {
    BlastPattern.SQUARE: 1.0,
    BlastPattern.STAGGERED: 1.146,
    BlastPattern.DIAGONAL: 1.3,
}

NUMERIC_FIELDS = (
    "diameter",
    "depth",
    "bench_length",
    "bench_width",
    "explosive_density",
    "rock_density",
    "stemming_factor",
    "burden_factor",
)

# Upper bound on holes in one pattern; real benches have tens to hundreds.
MAX_HOLES = 100_000


def _positive_length(name: str, value: float) -> float:
    if not math.isfinite(value) or value <= 0:
        raise DegenerateGeometryError(
            f"{name} must be a positive finite length, got {value}"
        )
    return value


def _count(name: str, ratio: float) -> int:
    if not math.isfinite(ratio):
        raise DegenerateGeometryError(f"{name} count is not finite")
    return math.ceil(ratio)


def calculate_blast_design(
    inputs: BlastInputs, unit_system: UnitSystem = UnitSystem.METRIC
) -> CalculationResults:
    """Derive the pattern geometry and charging for one bench blast.

    Imperial inputs are converted to metric first; results are always metric
    (metres, kilograms, kg of explosive per tonne of rock).

    Inputs are not range-checked: negative depths or an explosive column
    shorter than the stemming still produce numbers, which `get_warnings`
    and `validate_inputs` flag. Only a burden or spacing that would make the
    row/column counts undefined, or a pattern of more than `MAX_HOLES`
    holes, raises `DegenerateGeometryError`.
    """
    metric = to_metric(inputs, unit_system)
    for name in NUMERIC_FIELDS:
        if not math.isfinite(getattr(metric, name)):
            raise DegenerateGeometryError(f"{name} must be finite")

    diameter = metric.diameter
    depth = metric.depth

    ks = PATTERN_COEFFICIENTS[metric.pattern]
    burden = _positive_length("Burden", metric.burden_factor * diameter)
    spacing = _positive_length("Spacing", ks * burden)
    stemming = metric.stemming_factor * burden

    explosive_length = depth - stemming
    cs_area = math.pi * diameter**2 / 4
    charge_per_hole = explosive_length * cs_area * metric.explosive_density

    rows = _count("rows", metric.bench_width / burden)
    cols = _count("columns", metric.bench_length / spacing)
    num_holes = rows * cols
    if abs(num_holes) > MAX_HOLES:
        raise DegenerateGeometryError(
            f"Pattern needs {num_holes} holes, more than the limit of {MAX_HOLES}"
        )

    rock_mass_per_hole = burden * spacing * depth * metric.rock_density

    total_explosive = charge_per_hole * num_holes
    total_rock_mass = rock_mass_per_hole * num_holes

    if total_rock_mass != 0:
        powder_factor = total_explosive / (total_rock_mass / 1000)
    else:
        powder_factor = math.nan

    stiffness_ratio = max(0, _count("Stiffness ratio", depth / burden))

    logger.debug(
        "Blast design: B={:.3f} S={:.3f} rows={} cols={} KR={}",
        burden,
        spacing,
        rows,
        cols,
        stiffness_ratio,
    )

    return CalculationResults(
        burden=burden,
        spacing=spacing,
        stemming=stemming,
        charge_per_hole=charge_per_hole,
        rows=rows,
        cols=cols,
        num_holes=num_holes,
        total_explosive=total_explosive,
        total_rock_mass=total_rock_mass,
        powder_factor=powder_factor,
        stiffness_ratio=stiffness_ratio,
    )
