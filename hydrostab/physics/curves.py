"""
physics/curves.py - Hydrostatic curves and Bonjean curves

Hydrostatic curves plot one property (displacement, KB, LCB, GMt,
waterplane area, ...) against draft over an evenly spaced draft range;
every curve in a request is served from a single hydrostatic table.
Drafts at which a property is undefined are left out of that curve and
listed in its `skipped_drafts`.

Bonjean curves give the immersed sectional area of each station as a
function of draft, sampled at the waterlines.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Sequence, Tuple, Any
import logging

from hydrostab.core.cancellation import CancellationToken, check_cancelled
from hydrostab.core.quantity import Defined, Quantity
from hydrostab.geometry.model import HullGeometry, Loadcase
from hydrostab.physics.hydrostatics import HydrostaticsCalculator, HydrostaticsResults, draft_range

logger = logging.getLogger(__name__)


# Curve type -> (y-axis label, accessor)
CURVE_TYPES: Dict[str, Tuple[str, Callable[[HydrostaticsResults], Quantity]]] = {
    "displacement": ("Displacement (kg)", lambda r: r.displacement_kg),
    "volume": ("Volume (m³)", lambda r: Defined(r.volume_m3)),
    "kb": ("KB (m)", lambda r: r.kb_m),
    "lcb": ("LCB (m)", lambda r: r.lcb_m),
    "lcf": ("LCF (m)", lambda r: r.lcf_m),
    "bmt": ("BMt (m)", lambda r: r.bmt_m),
    "gmt": ("GMt (m)", lambda r: r.gmt_m),
    "awp": ("Waterplane Area (m²)", lambda r: Defined(r.waterplane_area_m2)),
    "tpc": ("TPC (t/cm)", lambda r: r.tpc),
    "mct": ("MCT 1cm (t·m/cm)", lambda r: r.mct),
}


@dataclass
class CurvePoint:
    x: float
    y: float

    def to_dict(self) -> Dict[str, float]:
        return {"x": round(self.x, 4), "y": round(self.y, 4)}


@dataclass
class HydrostaticCurve:
    """One property against draft."""
    curve_type: str
    x_label: str
    y_label: str
    points: List[CurvePoint] = field(default_factory=list)
    skipped_drafts: List[float] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.curve_type,
            "x_label": self.x_label,
            "y_label": self.y_label,
            "points": [p.to_dict() for p in self.points],
            "skipped_drafts": [round(d, 4) for d in self.skipped_drafts],
        }


@dataclass
class BonjeanCurve:
    """Sectional area against draft at one station."""
    station_index: int
    station_x: float
    points: List[CurvePoint] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "station_index": self.station_index,
            "station_x": round(self.station_x, 4),
            "points": [p.to_dict() for p in self.points],
        }


class CurvesGenerator:
    """Hydrostatic and Bonjean curve generation."""

    def __init__(self, calculator: Optional[HydrostaticsCalculator] = None):
        self.calculator = calculator or HydrostaticsCalculator()

    def generate(
        self,
        geometry: HullGeometry,
        loadcase: Optional[Loadcase],
        curve_types: Sequence[str],
        min_draft: float,
        max_draft: float,
        points: int = 50,
        cancellation: Optional[CancellationToken] = None,
    ) -> Dict[str, HydrostaticCurve]:
        """
        Several hydrostatic curves over the same draft range.

        Raises:
            ValueError: Unknown curve type or bad draft range
        """
        unknown = [t for t in curve_types if t.lower() not in CURVE_TYPES]
        if unknown:
            raise ValueError(
                f"Unknown curve type(s): {', '.join(unknown)}. "
                f"Available: {', '.join(CURVE_TYPES)}"
            )

        drafts = draft_range(min_draft, max_draft, points)
        table = self.calculator.compute_table(geometry, loadcase, drafts, cancellation)

        curves: Dict[str, HydrostaticCurve] = {}
        for curve_type in curve_types:
            key = curve_type.lower()
            y_label, accessor = CURVE_TYPES[key]
            curve = HydrostaticCurve(curve_type=key, x_label="Draft (m)", y_label=y_label)
            for result in table:
                value = accessor(result)
                if value.is_defined:
                    curve.points.append(CurvePoint(result.draft_m, value.value))
                else:
                    curve.skipped_drafts.append(result.draft_m)
            curves[key] = curve

        logger.info(
            "Generated %d curves for %s over %d drafts",
            len(curves), geometry.name or "<unnamed>", len(drafts),
        )
        return curves

    def generate_curve(
        self,
        geometry: HullGeometry,
        loadcase: Optional[Loadcase],
        curve_type: str,
        min_draft: float,
        max_draft: float,
        points: int = 50,
        cancellation: Optional[CancellationToken] = None,
    ) -> HydrostaticCurve:
        """A single hydrostatic curve."""
        curves = self.generate(
            geometry, loadcase, [curve_type], min_draft, max_draft, points, cancellation,
        )
        return curves[curve_type.lower()]

    def bonjean_curves(
        self,
        geometry: HullGeometry,
        cancellation: Optional[CancellationToken] = None,
    ) -> List[BonjeanCurve]:
        """Sectional area at every waterline, per station."""
        curves = [
            BonjeanCurve(station_index=s.index, station_x=s.x)
            for s in geometry.stations
        ]

        for waterline in geometry.waterlines:
            check_cancelled(cancellation, f"Bonjean curves at waterline {waterline.index}")
            areas = self.calculator.section_areas(geometry, waterline.z)
            for curve, area in zip(curves, areas):
                curve.points.append(CurvePoint(waterline.z, float(area)))

        logger.info(
            "Generated Bonjean curves for %s: %d stations",
            geometry.name or "<unnamed>", len(curves),
        )
        return curves
