"""Tests for burden/spacing/charge calculations."""
import math

import pytest

from blast_design import (
    DEFAULT_INPUTS,
    BlastPattern,
    DegenerateGeometryError,
    RockType,
    UnitSystem,
    calculate_blast_design,
    convert_inputs,
)
from blast_design.geometry import MAX_HOLES


def test_reference_staggered_design():
    """0.15 m holes, 10 m deep on a 50 x 20 m bench, staggered."""
    results = calculate_blast_design(DEFAULT_INPUTS, UnitSystem.METRIC)

    assert results.burden == pytest.approx(4.5)
    assert results.spacing == pytest.approx(5.157)
    assert results.stemming == pytest.approx(3.15)
    assert results.rows == 5
    assert results.cols == 10
    assert results.num_holes == 50
    assert results.stiffness_ratio == 3

    area = math.pi * 0.15**2 / 4
    assert results.charge_per_hole == pytest.approx(6.85 * area * 1200)
    assert results.total_explosive == pytest.approx(results.charge_per_hole * 50)
    assert results.total_rock_mass == pytest.approx(4.5 * 5.157 * 10 * 2700 * 50)
    assert results.powder_factor == pytest.approx(0.23183, rel=1e-3)


@pytest.mark.parametrize(
    "pattern,ks",
    [
        (BlastPattern.SQUARE, 1.0),
        (BlastPattern.STAGGERED, 1.146),
        (BlastPattern.DIAGONAL, 1.3),
    ],
)
@pytest.mark.parametrize("rock_type", list(RockType))
def test_counts_cover_the_bench(pattern, ks, rock_type):
    inputs = DEFAULT_INPUTS.replace(pattern=pattern, rock_type=rock_type)
    results = calculate_blast_design(inputs)

    assert results.spacing == pytest.approx(ks * results.burden)
    assert results.rows == math.ceil(inputs.bench_width / results.burden)
    assert results.cols == math.ceil(inputs.bench_length / results.spacing)
    assert results.num_holes == results.rows * results.cols
    assert results.rows * results.burden >= inputs.bench_width
    assert results.cols * results.spacing >= inputs.bench_length


def test_imperial_inputs_give_metric_results():
    imperial = convert_inputs(DEFAULT_INPUTS, UnitSystem.IMPERIAL)

    metric_results = calculate_blast_design(DEFAULT_INPUTS, UnitSystem.METRIC)
    imperial_results = calculate_blast_design(imperial, UnitSystem.IMPERIAL)

    assert imperial_results.burden == pytest.approx(metric_results.burden, rel=1e-3)
    assert imperial_results.rows == metric_results.rows
    assert imperial_results.cols == metric_results.cols
    assert imperial_results.stiffness_ratio == metric_results.stiffness_ratio
    assert imperial_results.charge_per_hole == pytest.approx(
        metric_results.charge_per_hole, rel=1e-3
    )


def test_stemming_longer_than_hole_gives_negative_charge():
    inputs = DEFAULT_INPUTS.replace(depth=2.0)
    results = calculate_blast_design(inputs)

    assert results.charge_per_hole < 0
    assert results.stiffness_ratio == 1


def test_stiffness_ratio_never_negative():
    results = calculate_blast_design(DEFAULT_INPUTS.replace(depth=-5.0))
    assert results.stiffness_ratio == 0


def test_empty_bench_has_undefined_powder_factor():
    results = calculate_blast_design(DEFAULT_INPUTS.replace(bench_width=0.0))

    assert results.rows == 0
    assert results.num_holes == 0
    assert math.isnan(results.powder_factor)


@pytest.mark.parametrize(
    "changes",
    [
        {"diameter": 0.0},
        {"burden_factor": -30.0},
        {"depth": float("nan")},
        {"bench_length": float("inf")},
    ],
)
def test_degenerate_inputs_raise(changes):
    with pytest.raises(DegenerateGeometryError):
        calculate_blast_design(DEFAULT_INPUTS.replace(**changes))


def test_calculation_is_repeatable():
    assert calculate_blast_design(DEFAULT_INPUTS) == calculate_blast_design(
        DEFAULT_INPUTS
    )


def test_tiny_diameter_exceeds_hole_limit():
    with pytest.raises(DegenerateGeometryError, match="limit"):
        calculate_blast_design(DEFAULT_INPUTS.replace(diameter=1e-6))


def test_subnormal_diameter_overflows_row_count():
    with pytest.raises(DegenerateGeometryError, match="not finite"):
        calculate_blast_design(DEFAULT_INPUTS.replace(diameter=1e-320))


def test_large_pattern_under_limit_is_allowed():
    results = calculate_blast_design(
        DEFAULT_INPUTS.replace(bench_length=2000.0, bench_width=1000.0)
    )
    assert results.num_holes == 223 * 388
    assert results.num_holes <= MAX_HOLES
