"""Tests for the full design pipeline."""
import pytest

from blast_design import (
    DEFAULT_INPUTS,
    UnitSystem,
    convert_inputs,
    design_blast,
)


def test_reference_design_bundle():
    design = design_blast(DEFAULT_INPUTS)

    assert design.unit_system is UnitSystem.METRIC
    assert design.results.num_holes == 50
    assert len(design.local_holes) == len(design.geo_holes) == 50
    assert design.quality.action == "None required"
    assert design.warnings == []
    assert design.geo_holes[0].lat == DEFAULT_INPUTS.latitude
    assert design.geo_holes[0].lng == DEFAULT_INPUTS.longitude


def test_imperial_design_matches_metric_layout():
    imperial = convert_inputs(DEFAULT_INPUTS, UnitSystem.IMPERIAL)

    metric_design = design_blast(DEFAULT_INPUTS, UnitSystem.METRIC)
    imperial_design = design_blast(imperial, "imperial")

    assert imperial_design.unit_system is UnitSystem.IMPERIAL
    assert [(h.row, h.col) for h in imperial_design.geo_holes] == [
        (h.row, h.col) for h in metric_design.geo_holes
    ]
    last_metric = metric_design.geo_holes[-1]
    last_imperial = imperial_design.geo_holes[-1]
    assert last_imperial.lat == pytest.approx(last_metric.lat, abs=1e-6)
    assert last_imperial.lng == pytest.approx(last_metric.lng, abs=1e-6)
