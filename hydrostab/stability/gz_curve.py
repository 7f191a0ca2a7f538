"""
HYDROSTAB GZ Curve Calculator

Generates righting arm (GZ) curves over a heel sweep.

Implements the wall-sided formula:
GZ = (GMt + ½·BMt·tan²φ)·sin φ

with GMt and BMt from the upright hydrostatics at the requested draft.
Valid for heel angles up to ~20° in general and up to deck-edge
immersion for truly wall-sided hulls.
"""

from __future__ import annotations
from typing import Any, Dict, List, Optional, Union
import time
import math
import logging

from hydrostab.core.cancellation import CancellationToken, check_cancelled
from hydrostab.core.constants import DEG_TO_RAD, HEEL_LIMIT_DEG, WALL_SIDED_MAX_RECOMMENDED_DEG
from hydrostab.core.protocols import HydrostaticsProviderProtocol
from hydrostab.errors import (
    AngleRangeError,
    MissingKGError,
    UndefinedMetacentricHeightError,
    UnknownMethodError,
)
from hydrostab.geometry.model import HullGeometry, Loadcase
from hydrostab.physics.hydrostatics import HydrostaticsCalculator
from hydrostab.stability.requests import StabilityMethod, StabilityRequest
from hydrostab.stability.results import GZPoint, StabilityCurveResult

logger = logging.getLogger(__name__)


METHODS: List[Dict[str, Any]] = [
    {
        "id": StabilityMethod.WALL_SIDED.value,
        "name": "Wall-Sided Formula",
        "description": "Fast approximation from the upright metacentric height and radius. "
                       "Suitable for small heel angles and hulls with vertical sides.",
        "max_recommended_angle_deg": WALL_SIDED_MAX_RECOMMENDED_DEG,
    },
]


def heel_angles(min_angle: float, max_angle: float, angle_step: float) -> List[float]:
    """
    min_angle + i·angle_step for every i that stays within max_angle.

    Angles are computed from the index, not accumulated.
    """
    count = int(math.floor((max_angle - min_angle) / angle_step + 1e-9))
    angles = [round(min_angle + i * angle_step, 10) for i in range(count + 1)]
    return [a for a in angles if a <= max_angle]


def resolve_method(method: Union[StabilityMethod, str]) -> StabilityMethod:
    """
    StabilityMethod for a method or its id (case-insensitive).

    Raises:
        UnknownMethodError: No such method
    """
    if isinstance(method, StabilityMethod):
        return method
    for candidate in StabilityMethod:
        if str(method).lower() == candidate.value.lower():
            return candidate
    raise UnknownMethodError(str(method), [m["id"] for m in METHODS])


def compute_gz_wall_sided(gmt: float, bmt: float, heel_deg: float) -> float:
    """
    Wall-sided righting arm at one heel angle.

    Args:
        gmt: Transverse metacentric height (m)
        bmt: Transverse metacentric radius (m)
        heel_deg: Heel angle (deg), |heel| < 90

    Returns:
        GZ (m), odd in heel
    """
    if not math.isfinite(heel_deg) or abs(heel_deg) >= HEEL_LIMIT_DEG:
        raise ValueError(f"Heel angle must be within ±{HEEL_LIMIT_DEG}°: {heel_deg}")
    phi = heel_deg * DEG_TO_RAD
    tan_phi = math.tan(phi)
    return (gmt + 0.5 * bmt * tan_phi * tan_phi) * math.sin(phi)


class GZCurveCalculator:
    """
    Calculator for GZ (righting arm) curves.

    Accuracy: exact for wall-sided hulls until the deck edge immerses or
    the bilge emerges; degrades with flare and at larger angles.
    """

    def __init__(self, hydrostatics: Optional[HydrostaticsProviderProtocol] = None):
        self.hydrostatics = hydrostatics or HydrostaticsCalculator()

    def available_methods(self) -> List[Dict[str, Any]]:
        """Descriptors of the supported methods."""
        return [dict(m) for m in METHODS]

    def compute_gz_curve(
        self,
        geometry: HullGeometry,
        loadcase: Loadcase,
        min_angle: float,
        max_angle: float,
        angle_step: float,
        draft: float,
        method: Union[StabilityMethod, str] = StabilityMethod.WALL_SIDED,
        cancellation: Optional[CancellationToken] = None,
    ) -> StabilityCurveResult:
        """
        Compute the GZ curve of a loaded hull over a heel sweep.

        Args:
            geometry: Hull offset grid
            loadcase: Loading condition, must define KG
            min_angle: First heel angle (deg)
            max_angle: Last heel angle (deg), inclusive if on the step grid
            angle_step: Heel increment (deg)
            draft: Draft above keel (m)
            method: Righting-arm method
            cancellation: Optional token checked at every heel angle

        Returns:
            StabilityCurveResult

        Raises:
            UnknownMethodError: Method not available
            AngleRangeError: Empty, inverted or out-of-range sweep
            MissingKGError: Loadcase has no KG
            UndefinedMetacentricHeightError: GMt/BMt undefined at the draft
            DraftOutOfRangeError: Draft outside the geometry
            CancellationSignal: Token cancelled or expired
        """
        start_time = time.perf_counter()
        warnings: List[str] = []

        method = resolve_method(method)
        self._validate_sweep(min_angle, max_angle, angle_step)

        if loadcase is None or loadcase.kg is None:
            raise MissingKGError(loadcase.name if loadcase else "")
        kg = loadcase.kg

        hydro = self.hydrostatics.compute_at_draft(
            geometry, loadcase, draft, cancellation=cancellation,
        )
        for quantity in (hydro.bmt_m, hydro.gmt_m):
            if not quantity.is_defined:
                raise UndefinedMetacentricHeightError(draft, quantity.reason)
        gmt = hydro.gmt_m.value
        bmt = hydro.bmt_m.value

        if gmt <= 0:
            warnings.append(f"Non-positive GMt: {gmt:.3f}m - vessel may be unstable")

        # Generate GZ curve
        points: List[GZPoint] = []
        for angle in heel_angles(min_angle, max_angle, angle_step):
            check_cancelled(cancellation, f"GZ curve at {angle}°")
            gz = compute_gz_wall_sided(gmt, bmt, angle)
            kn = gz + kg * math.sin(angle * DEG_TO_RAD)
            points.append(GZPoint(heel_deg=angle, gz_m=gz, kn_m=kn))

        # Find key values
        max_point = max(points, key=lambda p: p.gz_m)
        vanishing_angle = self._find_vanishing_angle(points)

        extent = max(abs(points[0].heel_deg), abs(points[-1].heel_deg))
        if extent > WALL_SIDED_MAX_RECOMMENDED_DEG:
            warnings.append(
                f"Heel up to {extent:.1f}° - wall-sided formula less accurate above "
                f"{WALL_SIDED_MAX_RECOMMENDED_DEG:.0f}°"
            )

        elapsed_ms = int((time.perf_counter() - start_time) * 1000)

        logger.info(
            "Computed GZ curve for %s using %s method: %d points, max GZ %.4f m at %.1f°",
            geometry.name or "<unnamed>", method.value, len(points),
            max_point.gz_m, max_point.heel_deg,
        )

        return StabilityCurveResult(
            points=points,
            method=method.value,
            draft_m=hydro.draft_m,
            kg_m=kg,
            displacement_kg=hydro.displacement_kg.value,
            initial_gmt_m=gmt,
            max_gz_m=max_point.gz_m,
            angle_at_max_gz_deg=max_point.heel_deg,
            angle_of_vanishing_stability_deg=vanishing_angle,
            calculation_time_ms=elapsed_ms,
            warnings=warnings,
        )

    def compute_from_request(
        self,
        geometry: HullGeometry,
        loadcase: Loadcase,
        request: StabilityRequest,
        cancellation: Optional[CancellationToken] = None,
    ) -> StabilityCurveResult:
        """GZ curve for a validated request."""
        return self.compute_gz_curve(
            geometry,
            loadcase,
            min_angle=request.min_angle,
            max_angle=request.max_angle,
            angle_step=request.angle_step,
            draft=request.draft,
            method=request.method,
            cancellation=cancellation,
        )

    # =========================================================================
    # VALIDATION
    # =========================================================================

    def _validate_sweep(self, min_angle: float, max_angle: float, angle_step: float) -> None:
        if not all(math.isfinite(v) for v in (min_angle, max_angle, angle_step)):
            raise AngleRangeError(min_angle, max_angle, angle_step, "angles must be finite")
        if angle_step <= 0:
            raise AngleRangeError(min_angle, max_angle, angle_step, "angle step must be positive")
        if min_angle >= max_angle:
            raise AngleRangeError(min_angle, max_angle, angle_step, "min angle must be less than max angle")
        if abs(min_angle) >= HEEL_LIMIT_DEG or abs(max_angle) >= HEEL_LIMIT_DEG:
            raise AngleRangeError(
                min_angle, max_angle, angle_step, f"angles must be within ±{HEEL_LIMIT_DEG:g}°",
            )

    # =========================================================================
    # CURVE ANALYSIS
    # =========================================================================

    def _find_vanishing_angle(self, points: List[GZPoint]) -> Optional[float]:
        """First positive-heel angle where GZ falls from positive to non-positive."""
        for prev, curr in zip(points, points[1:]):
            if prev.heel_deg < 0 or prev.gz_m <= 0:
                continue
            if curr.gz_m <= 0:
                fraction = prev.gz_m / (prev.gz_m - curr.gz_m)
                return prev.heel_deg + fraction * (curr.heel_deg - prev.heel_deg)
        return None
