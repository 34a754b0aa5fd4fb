from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields, replace
from enum import Enum
from typing import Any


class UnitSystem(str, Enum):
    METRIC = "metric"
    IMPERIAL = "imperial"


class RockType(str, Enum):
    VERY_SOFT = "verysoft"
    SOFT = "soft"
    MEDIUM = "medium"
    HARD = "hard"


class BlastPattern(str, Enum):
    SQUARE = "Square"
    STAGGERED = "Staggered"
    DIAGONAL = "Diagonal"


def parse_enum(enum_cls, value):
    """Match an enum member by value or name, ignoring case and separators."""
    if isinstance(value, enum_cls):
        return value

    key = str(value).strip().lower().replace("-", "").replace("_", "").replace(" ", "")
    for member in enum_cls:
        if key in {member.value.lower(), member.name.lower().replace("_", "")}:
            return member

    allowed = ", ".join(m.value for m in enum_cls)
    raise ValueError(f"Invalid {enum_cls.__name__} '{value}'. Expected one of: {allowed}")


# snake_case field -> accepted payload aliases
INPUT_ALIASES = {
    "diameter": ("diameter", "hole_diameter", "holeDiameter"),
    "depth": ("depth", "hole_depth", "holeDepth"),
    "bench_length": ("bench_length", "benchLength"),
    "bench_width": ("bench_width", "benchWidth"),
    "explosive_density": ("explosive_density", "explosiveDensity"),
    "rock_density": ("rock_density", "rockDensity"),
    "stemming_factor": ("stemming_factor", "stemmingFactor"),
    "burden_factor": ("burden_factor", "burdenFactor"),
    "rock_type": ("rock_type", "rockType"),
    "pattern": ("pattern", "pattern_type", "patternType"),
    "latitude": ("latitude", "lat"),
    "longitude": ("longitude", "lng", "lon"),
    "azimuth": ("azimuth", "azimuth_deg", "azimuthDeg", "bearing"),
}


@dataclass(frozen=True)
class BlastInputs:
    """Parameter record for one blast design.

    Lengths and densities are in whatever unit system the record was entered
    in; `calculate_blast_design` is told which one.
    """

    diameter: float
    depth: float
    bench_length: float
    bench_width: float
    explosive_density: float
    rock_density: float
    stemming_factor: float
    burden_factor: float
    rock_type: RockType
    pattern: BlastPattern
    latitude: float = 0.0
    longitude: float = 0.0
    azimuth: float = 0.0

    def replace(self, **changes: Any) -> BlastInputs:
        return replace(self, **changes)

    @classmethod
    def from_dict(
        cls, payload: dict[str, Any] | None, defaults: BlastInputs | None = None
    ) -> BlastInputs:
        """Build inputs from a JSON payload, filling gaps from `defaults`."""
        source = payload or {}
        base = defaults or DEFAULT_INPUTS
        values: dict[str, Any] = {}

        for f in fields(cls):
            raw = None
            for alias in INPUT_ALIASES[f.name]:
                if source.get(alias) is not None:
                    raw = source[alias]
                    break

            if raw is None:
                values[f.name] = getattr(base, f.name)
            elif f.name == "rock_type":
                values[f.name] = parse_enum(RockType, raw)
            elif f.name == "pattern":
                values[f.name] = parse_enum(BlastPattern, raw)
            else:
                try:
                    values[f.name] = float(raw)
                except (TypeError, ValueError) as exc:
                    raise ValueError(
                        f"Invalid numeric value for '{f.name}': {raw!r}"
                    ) from exc

        return cls(**values)

    def to_dict(self) -> dict[str, Any]:
        return {
            "diameter": self.diameter,
            "depth": self.depth,
            "benchLength": self.bench_length,
            "benchWidth": self.bench_width,
            "explosiveDensity": self.explosive_density,
            "rockDensity": self.rock_density,
            "stemmingFactor": self.stemming_factor,
            "burdenFactor": self.burden_factor,
            "rockType": self.rock_type.value,
            "pattern": self.pattern.value,
            "latitude": self.latitude,
            "longitude": self.longitude,
            "azimuth": self.azimuth,
        }


DEFAULT_INPUTS = BlastInputs(
    diameter=0.15,
    depth=10.0,
    bench_length=50.0,
    bench_width=20.0,
    explosive_density=1200.0,
    rock_density=2700.0,
    stemming_factor=0.7,
    burden_factor=30.0,
    rock_type=RockType.MEDIUM,
    pattern=BlastPattern.STAGGERED,
    latitude=-21.15,
    longitude=119.75,
    azimuth=0.0,
)


@dataclass(frozen=True)
class CalculationResults:
    """Derived geometry for one input snapshot. Always metric (m, kg)."""

    burden: float
    spacing: float
    stemming: float
    charge_per_hole: float
    rows: int
    cols: int
    num_holes: int
    total_explosive: float
    total_rock_mass: float
    powder_factor: float
    stiffness_ratio: int

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class LocalHole:
    """A hole position on the bench plane, in metres from the first hole."""

    x: float
    y: float
    row: int
    col: int


@dataclass(frozen=True)
class GeoHole:
    id: str
    lat: float
    lng: float
    row: int
    col: int

    @property
    def label(self) -> str:
        return f"Hole {self.row + 1}-{self.col + 1}"

    def to_dict(self) -> dict[str, Any]:
        return {**asdict(self), "label": self.label}


@dataclass(frozen=True)
class QualityAssessment:
    fragmentation: str
    air_blast: str
    fly_rock: str
    ground_vibration: str
    comment: str
    action: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class BlastDesign:
    """Everything derived from one input snapshot."""

    inputs: BlastInputs
    unit_system: UnitSystem
    results: CalculationResults
    quality: QualityAssessment
    warnings: list[str] = field(default_factory=list)
    local_holes: list[LocalHole] = field(default_factory=list)
    geo_holes: list[GeoHole] = field(default_factory=list)
