"""Bench blast design: pattern geometry, charging, quality and hole coordinates."""

from .csv_handler import CSVHandler
from .design import design_blast
from .errors import DegenerateGeometryError
from .geometry import calculate_blast_design
from .grid import generate_hole_grid
from .models import (
    DEFAULT_INPUTS,
    BlastDesign,
    BlastInputs,
    BlastPattern,
    CalculationResults,
    GeoHole,
    LocalHole,
    QualityAssessment,
    RockType,
    UnitSystem,
)
from .projection import (
    EquirectangularProjector,
    Projector,
    pattern_bounds,
    project_coordinates,
)
from .quality import get_quality_assessment, get_warnings, validate_inputs
from .units import (
    convert_inputs,
    format_length,
    format_mass,
    ft_to_m,
    kg_to_lb,
    kgm3_to_lbft3,
    lb_to_kg,
    lbft3_to_kgm3,
    m_to_ft,
    to_metric,
    unit_labels,
)

__all__ = [
    "CSVHandler",
    "DEFAULT_INPUTS",
    "BlastDesign",
    "BlastInputs",
    "BlastPattern",
    "CalculationResults",
    "DegenerateGeometryError",
    "EquirectangularProjector",
    "GeoHole",
    "LocalHole",
    "Projector",
    "QualityAssessment",
    "RockType",
    "UnitSystem",
    "calculate_blast_design",
    "convert_inputs",
    "design_blast",
    "format_length",
    "format_mass",
    "ft_to_m",
    "generate_hole_grid",
    "get_quality_assessment",
    "get_warnings",
    "kg_to_lb",
    "kgm3_to_lbft3",
    "lb_to_kg",
    "lbft3_to_kgm3",
    "m_to_ft",
    "pattern_bounds",
    "project_coordinates",
    "to_metric",
    "unit_labels",
    "validate_inputs",
]
