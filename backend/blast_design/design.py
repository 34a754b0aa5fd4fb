from __future__ import annotations

from .geometry import calculate_blast_design
from .grid import generate_hole_grid
from .models import BlastDesign, BlastInputs, UnitSystem
from .projection import Projector, project_coordinates
from .quality import get_quality_assessment, get_warnings


def design_blast(
    inputs: BlastInputs,
    unit_system: UnitSystem = UnitSystem.METRIC,
    projector: Projector | None = None,
) -> BlastDesign:
    """Run the whole pipeline for one input snapshot."""
    unit_system = UnitSystem(unit_system)
    results = calculate_blast_design(inputs, unit_system)
    local_holes = generate_hole_grid(results, inputs.pattern)
    geo_holes = project_coordinates(
        inputs.latitude,
        inputs.longitude,
        inputs.azimuth,
        local_holes,
        projector=projector,
    )

    return BlastDesign(
        inputs=inputs,
        unit_system=unit_system,
        results=results,
        quality=get_quality_assessment(results.stiffness_ratio),
        warnings=get_warnings(inputs, results.charge_per_hole),
        local_holes=local_holes,
        geo_holes=geo_holes,
    )
