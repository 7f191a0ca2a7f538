"""
HYDROSTAB Stability Criteria Checker

Evaluates a GZ curve against the IMO A.749(18) general intact stability
criteria.

Areas under the curve are integrated over the exact sub-range bounds:
the curve is linearly interpolated at each bound, the interior samples
are kept, and the angles are converted to radians before integration,
so results are in m·rad. A curve that does not reach the angles a
criterion needs raises CurveCoverageError.
"""

from __future__ import annotations
from typing import List, Optional, Sequence, Tuple
import logging
import math

import numpy as np

from hydrostab.core.constants import DEG_TO_RAD, RAD_TO_DEG
from hydrostab.core.protocols import IntegratorProtocol
from hydrostab.errors import CurveCoverageError, FloodingAngleError
from hydrostab.physics.integration import IntegrationEngine
from hydrostab.stability.constants import IMO_INTACT, IMOIntactCriteria, STANDARD_NAME
from hydrostab.stability.requests import StabilityRequest
from hydrostab.stability.results import (
    CriteriaReport,
    CriterionResult,
    GZPoint,
    StabilityCurveResult,
)

logger = logging.getLogger(__name__)

# Angles closer than this are the same sample (deg)
ANGLE_TOLERANCE_DEG = 1e-9


def _check_coverage(points: Sequence[GZPoint], from_deg: float, to_deg: float) -> None:
    if not points:
        raise CurveCoverageError(from_deg, to_deg, float("nan"), float("nan"))
    first = points[0].heel_deg
    last = points[-1].heel_deg
    if from_deg < first - ANGLE_TOLERANCE_DEG or to_deg > last + ANGLE_TOLERANCE_DEG:
        raise CurveCoverageError(from_deg, to_deg, first, last)


def interpolate_gz(points: Sequence[GZPoint], angle_deg: float) -> float:
    """
    GZ at an angle, linear between samples.

    Raises:
        CurveCoverageError: Angle outside the curve
    """
    _check_coverage(points, angle_deg, angle_deg)
    angles = np.array([p.heel_deg for p in points])
    gz = np.array([p.gz_m for p in points])
    return float(np.interp(angle_deg, angles, gz))


def find_max_gz(points: Sequence[GZPoint]) -> Tuple[float, float]:
    """(max GZ, heel at max GZ) over the samples; first sample wins ties."""
    if not points:
        raise ValueError("GZ curve has no points")
    best = max(points, key=lambda p: p.gz_m)
    return best.gz_m, best.heel_deg


class StabilityCriteriaChecker:
    """
    IMO A.749(18) intact stability criteria.

    Criteria, in report order:
    1. Area 0°-30° >= 0.055 m·rad
    2. Area 0°-40° (or flooding angle if lower) >= 0.090 m·rad
    3. Area 30°-40° (or flooding angle if lower) >= 0.030 m·rad
    4. Max GZ at heel >= 30° is at least 0.20 m
    5. Angle of maximum GZ >= 25°
    6. Initial GMt >= 0.15 m
    """

    def __init__(
        self,
        integrator: Optional[IntegratorProtocol] = None,
        criteria: IMOIntactCriteria = IMO_INTACT,
    ):
        self.integrator = integrator or IntegrationEngine()
        self.criteria = criteria

    def check_intact_stability(
        self,
        curve: StabilityCurveResult,
        flooding_angle_deg: Optional[float] = None,
    ) -> CriteriaReport:
        """
        Evaluate all criteria over a GZ curve.

        Args:
            curve: GZ curve covering at least 0° to max(30°, upper bound)
            flooding_angle_deg: Angle of flooding, replaces 40° if lower

        Returns:
            CriteriaReport with six CriterionResult entries

        Raises:
            CurveCoverageError: Curve does not span the required angles
            FloodingAngleError: Flooding angle not positive
        """
        c = self.criteria
        points = curve.points

        if flooding_angle_deg is not None and not (
            math.isfinite(flooding_angle_deg) and flooding_angle_deg > 0
        ):
            raise FloodingAngleError(flooding_angle_deg)

        upper = c.upper_angle_deg
        if flooding_angle_deg is not None and flooding_angle_deg < upper:
            upper = flooding_angle_deg
        _check_coverage(points, 0.0, max(c.lower_angle_deg, upper))

        results: List[CriterionResult] = []

        # Criterion 1: area 0-30
        area_0_30 = self.area_under_curve(points, 0.0, c.lower_angle_deg)
        results.append(self._area_result(
            f"Area under GZ curve (0° to {c.lower_angle_deg:g}°)", area_0_30, c.area_0_30_min_m_rad,
        ))

        # Criterion 2: area 0-40 or 0-flooding
        area_0_upper = self.area_under_curve(points, 0.0, upper)
        results.append(self._area_result(
            f"Area under GZ curve (0° to {upper:g}°)", area_0_upper, c.area_0_40_min_m_rad,
        ))

        # Criterion 3: area 30-40 or 30-flooding
        if upper > c.lower_angle_deg:
            area_30_upper = self.area_under_curve(points, c.lower_angle_deg, upper)
            results.append(self._area_result(
                f"Area under GZ curve ({c.lower_angle_deg:g}° to {upper:g}°)",
                area_30_upper, c.area_30_40_min_m_rad,
            ))
        else:
            results.append(CriterionResult(
                name=f"Area under GZ curve ({c.lower_angle_deg:g}° to {upper:g}°)",
                actual_value=0.0,
                required_value=c.area_30_40_min_m_rad,
                passed=False,
                unit="m·rad",
                notes=f"Flooding angle {upper:g}° is below {c.lower_angle_deg:g}°",
            ))

        # Criterion 4: max GZ at heel >= 30
        gz_beyond, angle_beyond = self._max_gz_from(points, c.lower_angle_deg)
        results.append(CriterionResult(
            name=f"Maximum GZ at heel of {c.lower_angle_deg:g}° or more",
            actual_value=gz_beyond,
            required_value=c.gz_30_min_m,
            passed=gz_beyond >= c.gz_30_min_m,
            unit="m",
            notes=f"Occurs at {angle_beyond:.1f}°",
        ))

        # Criterion 5: angle of max GZ
        max_gz, angle_at_max = find_max_gz(points)
        results.append(CriterionResult(
            name="Angle at maximum GZ",
            actual_value=angle_at_max,
            required_value=c.angle_gz_max_min_deg,
            passed=angle_at_max >= c.angle_gz_max_min_deg,
            unit="degrees",
            notes=f"Maximum GZ = {max_gz:.3f} m",
        ))

        # Criterion 6: initial GMt
        results.append(CriterionResult(
            name="Initial metacentric height (GMt)",
            actual_value=curve.initial_gmt_m,
            required_value=c.gm_min_m,
            passed=curve.initial_gmt_m >= c.gm_min_m,
            unit="m",
        ))

        report = CriteriaReport(criteria=results, standard=STANDARD_NAME)
        total = len(results)
        passed = report.passed_count
        if report.all_criteria_passed:
            report.summary = f"All {total} {STANDARD_NAME} intact stability criteria satisfied."
        else:
            report.summary = (
                f"Warning: {total - passed} of {total} criteria not satisfied. "
                "Vessel may not meet intact stability requirements."
            )

        logger.info("Stability criteria check completed: %d/%d passed", passed, total)
        return report

    def check_from_request(
        self,
        curve: StabilityCurveResult,
        request: StabilityRequest,
    ) -> CriteriaReport:
        """Criteria for a curve computed from a request, using its flooding angle."""
        return self.check_intact_stability(curve, flooding_angle_deg=request.flooding_angle_deg)

    # =========================================================================
    # CURVE OPERATIONS
    # =========================================================================

    def area_under_curve(self, points: Sequence[GZPoint], from_deg: float, to_deg: float) -> float:
        """
        Area under GZ between two heel angles (m·rad).

        Raises:
            ValueError: from_deg > to_deg
            CurveCoverageError: Bounds outside the curve
        """
        if from_deg > to_deg:
            raise ValueError(f"Area bounds reversed: {from_deg}° > {to_deg}°")
        _check_coverage(points, from_deg, to_deg)
        if to_deg - from_deg <= ANGLE_TOLERANCE_DEG:
            return 0.0

        angles = [from_deg]
        gz = [interpolate_gz(points, from_deg)]
        for p in points:
            if from_deg + ANGLE_TOLERANCE_DEG < p.heel_deg < to_deg - ANGLE_TOLERANCE_DEG:
                angles.append(p.heel_deg)
                gz.append(p.gz_m)
        angles.append(to_deg)
        gz.append(interpolate_gz(points, to_deg))

        return self.integrator.integrate(np.array(angles) * DEG_TO_RAD, gz)

    def interpolate_gz(self, points: Sequence[GZPoint], angle_deg: float) -> float:
        """GZ at an angle, linear between samples."""
        return interpolate_gz(points, angle_deg)

    def find_max_gz(self, points: Sequence[GZPoint]) -> Tuple[float, float]:
        """(max GZ, heel at max GZ)."""
        return find_max_gz(points)

    def _max_gz_from(self, points: Sequence[GZPoint], angle_deg: float) -> Tuple[float, float]:
        """Largest GZ at heel >= angle_deg, including the interpolated value at angle_deg."""
        best_gz = interpolate_gz(points, angle_deg)
        best_angle = angle_deg
        for p in points:
            if p.heel_deg >= angle_deg and p.gz_m > best_gz:
                best_gz, best_angle = p.gz_m, p.heel_deg
        return best_gz, best_angle

    def _area_result(self, name: str, area: float, required: float) -> CriterionResult:
        return CriterionResult(
            name=name,
            actual_value=area,
            required_value=required,
            passed=area >= required,
            unit="m·rad",
            notes=f"Equivalent to {area * RAD_TO_DEG:.3f} m·deg",
        )
