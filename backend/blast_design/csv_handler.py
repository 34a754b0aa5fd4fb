from __future__ import annotations

import csv
import io
from typing import Any

from .models import GeoHole


class CSVHandler:
    """Export projected blast holes as CSV for survey and drill rigs."""

    HOLE_FIELDS = ["hole_id", "label", "row", "col", "lat", "lng"]

    def _hole_row(self, hole: GeoHole | dict[str, Any]) -> dict[str, Any]:
        if isinstance(hole, GeoHole):
            hole = hole.to_dict()

        try:
            row = int(hole["row"])
            col = int(hole["col"])
            lat = float(hole["lat"])
            lng = float(hole["lng"])
        except (KeyError, TypeError, ValueError) as exc:
            raise ValueError(f"Invalid hole record {hole!r}: {exc}") from exc

        return {
            "hole_id": str(hole.get("id", "")),
            "label": hole.get("label") or f"Hole {row + 1}-{col + 1}",
            "row": row,
            "col": col,
            "lat": f"{lat:.8f}",
            "lng": f"{lng:.8f}",
        }

    def export_holes(
        self,
        holes: list[GeoHole] | list[dict[str, Any]],
        summary_rows: list[dict[str, Any]] | None = None,
    ) -> str:
        if not holes:
            raise ValueError("No holes to export")

        output = io.StringIO()
        writer = csv.writer(output)

        writer.writerow(["section", "name", "value"])
        if summary_rows:
            for item in summary_rows:
                writer.writerow(
                    [
                        item.get("section", "summary"),
                        item.get("name", ""),
                        item.get("value", ""),
                    ]
                )
        writer.writerow([])

        dict_writer = csv.DictWriter(output, fieldnames=self.HOLE_FIELDS)
        dict_writer.writeheader()
        dict_writer.writerows(self._hole_row(h) for h in holes)
        return output.getvalue()
