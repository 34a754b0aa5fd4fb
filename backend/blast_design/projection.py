from __future__ import annotations

import math
from typing import Iterable

from .errors import DegenerateGeometryError
from .models import GeoHole, LocalHole

EARTH_RADIUS_M = 6378137.0


class Projector:
    """Places bench-plane offsets on the globe."""

    def offset(
        self, origin_lat: float, origin_lng: float, north_m: float, east_m: float
    ) -> tuple[float, float]:
        raise NotImplementedError

    def project(
        self,
        origin_lat: float,
        origin_lng: float,
        azimuth_deg: float,
        holes: Iterable[LocalHole],
    ) -> list[GeoHole]:
        bearing = math.radians(azimuth_deg)
        perpendicular = bearing + math.pi / 2

        projected: list[GeoHole] = []
        for idx, hole in enumerate(holes):
            # x follows the azimuth, y points 90 degrees clockwise of it
            north = hole.x * math.cos(bearing) + hole.y * math.cos(perpendicular)
            east = hole.x * math.sin(bearing) + hole.y * math.sin(perpendicular)
            lat, lng = self.offset(origin_lat, origin_lng, north, east)
            projected.append(
                GeoHole(id=f"h-{idx}", lat=lat, lng=lng, row=hole.row, col=hole.col)
            )
        return projected


class EquirectangularProjector(Projector):
    """Flat-earth approximation around the origin.

    Good to well under a metre across a bench (hundreds of metres); it is not
    meant for kilometre-scale spans or for origins near the poles.
    """

    def __init__(self, radius_m: float = EARTH_RADIUS_M):
        self.radius_m = radius_m

    def offset(
        self, origin_lat: float, origin_lng: float, north_m: float, east_m: float
    ) -> tuple[float, float]:
        if not -90 < origin_lat < 90:
            raise DegenerateGeometryError(
                f"Origin latitude must be strictly between -90 and 90, got {origin_lat}"
            )

        d_lat = math.degrees(north_m / self.radius_m)
        d_lng = math.degrees(
            east_m / (self.radius_m * math.cos(math.radians(origin_lat)))
        )
        return origin_lat + d_lat, origin_lng + d_lng


DEFAULT_PROJECTOR = EquirectangularProjector()


def project_coordinates(
    origin_lat: float,
    origin_lng: float,
    azimuth_deg: float,
    holes: Iterable[LocalHole],
    projector: Projector | None = None,
) -> list[GeoHole]:
    """Map local (x, y) holes to latitude/longitude, preserving order."""
    return (projector or DEFAULT_PROJECTOR).project(
        origin_lat, origin_lng, azimuth_deg, holes
    )


def pattern_bounds(
    holes: list[GeoHole],
) -> tuple[tuple[float, float], tuple[float, float]] | None:
    """South-west and north-east corners enclosing every hole."""
    if not holes:
        return None

    lats = [h.lat for h in holes]
    lngs = [h.lng for h in holes]
    return (min(lats), min(lngs)), (max(lats), max(lngs))
