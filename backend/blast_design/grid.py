from __future__ import annotations

from .models import BlastPattern, CalculationResults, LocalHole

# Whether odd rows are shifted half a spacing along the bench.
STAGGERED_ROWS: dict[BlastPattern, bool] = {
    BlastPattern.SQUARE: False,
    BlastPattern.STAGGERED: True,
    BlastPattern.DIAGONAL: True,
}


def generate_hole_grid(
    results: CalculationResults, pattern: BlastPattern
) -> list[LocalHole]:
    """Lay out every hole on the bench plane, row by row.

    x runs along the bench length (spacing axis), y along the bench width
    (burden axis), both in metres from the first hole of the first row.
    """
    staggered = STAGGERED_ROWS[BlastPattern(pattern)]
    holes: list[LocalHole] = []

    for row in range(results.rows):
        x_offset = results.spacing / 2 if staggered and row % 2 != 0 else 0.0
        y = row * results.burden
        for col in range(results.cols):
            holes.append(
                LocalHole(x=col * results.spacing + x_offset, y=y, row=row, col=col)
            )

    return holes
