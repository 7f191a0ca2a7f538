"""
HYDROSTAB Geometry Model

Immutable snapshot of a hull's offset table: station positions along the
length, waterline heights above the keel, and the half-breadth at every
station x waterline intersection, held as a dense read-only numpy grid
indexed [station, waterline]. Record lists (as handed over by a vessel
store) are assembled into the grid with HullGeometry.from_records().
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Sequence
import math
import logging

import numpy as np

from hydrostab.core.constants import SEAWATER_DENSITY_KG_M3
from hydrostab.errors import GeometryValidationError
from hydrostab.geometry.validation import validate_grid

logger = logging.getLogger(__name__)


# =============================================================================
# RECORDS
# =============================================================================

@dataclass(frozen=True)
class Station:
    """Transverse section at a longitudinal position."""
    index: int
    x: float  # Longitudinal position (m)


@dataclass(frozen=True)
class Waterline:
    """Horizontal level above the keel."""
    index: int
    z: float  # Height above keel (m)


@dataclass(frozen=True)
class Offset:
    """Half-breadth sample at a station/waterline intersection."""
    station_index: int
    waterline_index: int
    half_breadth: float  # Distance from centreline (m)


@dataclass(frozen=True)
class Loadcase:
    """
    Loading condition.

    rho is the water density; kg the vertical centre of gravity above
    keel, optional because pure hydrostatics do not need it.
    """
    rho: float = SEAWATER_DENSITY_KG_M3  # kg/m³
    kg: Optional[float] = None  # m
    name: str = ""

    def __post_init__(self):
        if not math.isfinite(self.rho) or self.rho <= 0:
            raise ValueError(f"Water density must be positive: {self.rho}")
        if self.kg is not None and (not math.isfinite(self.kg) or self.kg < 0):
            raise ValueError(f"KG must be a non-negative height above keel: {self.kg}")

    @property
    def has_kg(self) -> bool:
        return self.kg is not None

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "rho": self.rho, "kg": self.kg}


# =============================================================================
# HULL GEOMETRY
# =============================================================================

def _frozen_array(values: Any) -> np.ndarray:
    array = np.array(values, dtype=float)
    array.setflags(write=False)
    return array


@dataclass(frozen=True, eq=False)
class HullGeometry:
    """
    Dense offset grid of a port/starboard symmetric hull.

    Attributes:
        stations_x: Station X positions, shape (N,)
        waterlines_z: Waterline Z positions, shape (M,)
        offsets: Half-breadths, shape (N, M), offsets[i, j] at station i, waterline j
        lpp: Length between perpendiculars (defaults to the station span)
        beam: Moulded beam (defaults to twice the largest half-breadth)
        name: Label used in logs and reports

    The arrays are copied and flagged read-only; invariants are checked on
    construction and a GeometryValidationError lists every violation.
    """
    stations_x: np.ndarray
    waterlines_z: np.ndarray
    offsets: np.ndarray
    lpp: Optional[float] = None
    beam: Optional[float] = None
    name: str = ""

    def __post_init__(self):
        stations_x = _frozen_array(self.stations_x)
        waterlines_z = _frozen_array(self.waterlines_z)
        offsets = _frozen_array(self.offsets)

        validate_grid(stations_x, waterlines_z, offsets)

        issues: List[str] = []
        lpp = float(stations_x[-1] - stations_x[0]) if self.lpp is None else float(self.lpp)
        beam = 2.0 * float(offsets.max()) if self.beam is None else float(self.beam)
        if self.lpp is not None and not (math.isfinite(lpp) and lpp > 0):
            issues.append(f"Lpp must be positive: {self.lpp}")
        if self.beam is not None and not (math.isfinite(beam) and beam > 0):
            issues.append(f"Beam must be positive: {self.beam}")
        if issues:
            raise GeometryValidationError(issues)

        object.__setattr__(self, "stations_x", stations_x)
        object.__setattr__(self, "waterlines_z", waterlines_z)
        object.__setattr__(self, "offsets", offsets)
        object.__setattr__(self, "lpp", lpp)
        object.__setattr__(self, "beam", beam)

    # =========================================================================
    # CONSTRUCTION
    # =========================================================================

    @classmethod
    def from_arrays(
        cls,
        stations_x: Sequence[float],
        waterlines_z: Sequence[float],
        offsets: Any,
        lpp: Optional[float] = None,
        beam: Optional[float] = None,
        name: str = "",
    ) -> "HullGeometry":
        """Build from position vectors and an (N, M) half-breadth table."""
        return cls(
            stations_x=np.asarray(stations_x, dtype=float),
            waterlines_z=np.asarray(waterlines_z, dtype=float),
            offsets=np.asarray(offsets, dtype=float),
            lpp=lpp,
            beam=beam,
            name=name,
        )

    @classmethod
    def from_records(
        cls,
        stations: Iterable[Station],
        waterlines: Iterable[Waterline],
        offsets: Iterable[Offset],
        lpp: Optional[float] = None,
        beam: Optional[float] = None,
        name: str = "",
    ) -> "HullGeometry":
        """
        Assemble the dense grid from station, waterline and offset records.

        Indices must run 0..N-1 and 0..M-1 without gaps or duplicates.
        Missing (station, waterline) pairs and offsets that reference an
        unknown index are reported as GeometryValidationError.
        """
        station_list = sorted(stations, key=lambda s: s.index)
        waterline_list = sorted(waterlines, key=lambda w: w.index)

        issues: List[str] = []
        issues.extend(_index_issues([s.index for s in station_list], "station"))
        issues.extend(_index_issues([w.index for w in waterline_list], "waterline"))

        n_stations = len(station_list)
        n_waterlines = len(waterline_list)
        grid = np.full((n_stations, n_waterlines), np.nan)
        seen = set()

        for offset in offsets:
            key = (offset.station_index, offset.waterline_index)
            if not (0 <= key[0] < n_stations and 0 <= key[1] < n_waterlines):
                issues.append(
                    f"Offset references unknown station {key[0]} / waterline {key[1]}"
                )
                continue
            if key in seen:
                issues.append(f"Duplicate offset at station {key[0]}, waterline {key[1]}")
                continue
            seen.add(key)
            grid[key] = offset.half_breadth

        if issues:
            raise GeometryValidationError(issues)

        logger.debug(
            "Assembled offset grid %s: %d stations x %d waterlines",
            name or "<unnamed>", n_stations, n_waterlines,
        )

        return cls(
            stations_x=np.array([s.x for s in station_list], dtype=float),
            waterlines_z=np.array([w.z for w in waterline_list], dtype=float),
            offsets=grid,
            lpp=lpp,
            beam=beam,
            name=name,
        )

    # =========================================================================
    # ACCESSORS
    # =========================================================================

    @property
    def n_stations(self) -> int:
        return int(self.stations_x.size)

    @property
    def n_waterlines(self) -> int:
        return int(self.waterlines_z.size)

    @property
    def max_draft(self) -> float:
        """Highest waterline in the table (m)."""
        return float(self.waterlines_z[-1])

    @property
    def stations(self) -> List[Station]:
        return [Station(index=i, x=float(x)) for i, x in enumerate(self.stations_x)]

    @property
    def waterlines(self) -> List[Waterline]:
        return [Waterline(index=j, z=float(z)) for j, z in enumerate(self.waterlines_z)]

    def half_breadth(self, station_index: int, waterline_index: int) -> float:
        """Half-breadth at one grid cell (m)."""
        return float(self.offsets[station_index, waterline_index])

    def iter_offsets(self) -> Iterable[Offset]:
        """Offset records in station-major order."""
        for i in range(self.n_stations):
            for j in range(self.n_waterlines):
                yield Offset(i, j, float(self.offsets[i, j]))

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "name": self.name,
            "lpp": self.lpp,
            "beam": self.beam,
            "stations_x": self.stations_x.tolist(),
            "waterlines_z": self.waterlines_z.tolist(),
            "offsets": self.offsets.tolist(),
        }


def _index_issues(indices: List[int], label: str) -> List[str]:
    """Indices must be exactly 0..n-1."""
    issues: List[str] = []
    duplicates = sorted({i for i in indices if indices.count(i) > 1})
    if duplicates:
        issues.append(f"Duplicate {label} indices found: {', '.join(map(str, duplicates))}")
    expected = list(range(len(indices)))
    if not duplicates and indices != expected:
        issues.append(f"{label.capitalize()} indices must run 0..{len(indices) - 1}, got {indices}")
    return issues
