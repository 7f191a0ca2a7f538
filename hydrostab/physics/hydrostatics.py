"""
HYDROSTAB Hydrostatics Calculator

Direct integration of an offset grid at a given draft.

Per station the half-breadths below the draft (plus one point
interpolated at the draft) are integrated over z to give the sectional
area and its vertical moment; those are integrated along the stations
for volume and centres. The waterplane is the interpolated half-breadth
at the draft, integrated for area, first and second moments.

Quantities with a vanishing denominator come back as Undefined.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Dict, List, Optional, Any, Sequence, Tuple
import time
import logging
import math

import numpy as np

from hydrostab.core.cancellation import CancellationToken, check_cancelled
from hydrostab.core.config import HydrostabConfig, get_config
from hydrostab.core.constants import (
    DEG_TO_RAD,
    HEEL_LIMIT_DEG,
    KG_TO_TONNES,
    WALL_SIDED_MAX_RECOMMENDED_DEG,
)
from hydrostab.core.protocols import IntegratorProtocol
from hydrostab.core.quantity import (
    ZERO_TOLERANCE,
    Defined,
    Undefined,
    Quantity,
    combine,
    ratio,
)
from hydrostab.errors import DraftOutOfRangeError
from hydrostab.geometry.model import HullGeometry, Loadcase
from hydrostab.physics.integration import IntegrationEngine

if TYPE_CHECKING:
    from hydrostab.stability.requests import HydrostaticsRequest, HydrostaticsTableRequest

logger = logging.getLogger(__name__)


NO_VOLUME = "no immersed volume at this draft"
NO_WATERPLANE = "no waterplane area at this draft"
NO_LOADCASE = "no loadcase given"
NO_KG = "loadcase has no KG"


# =============================================================================
# HYDROSTATICS RESULTS
# =============================================================================

@dataclass
class HydrostaticsResults:
    """
    Hydrostatic properties of a hull at one draft.

    Lengths in m, areas in m², volumes in m³, second moments in m⁴,
    displacement in kg. Positions are measured from the keel (z) and
    from the first station (x).
    """
    draft_m: float
    heel_angle_deg: float

    # Volume and centres
    volume_m3: float
    displacement_kg: Quantity
    kb_m: Quantity
    lcb_m: Quantity
    tcb_m: Quantity

    # Waterplane
    waterplane_area_m2: float
    lcf_m: Quantity
    iwp_transverse_m4: float
    iwp_longitudinal_m4: float  # about the transverse axis through LCF

    # Metacentric geometry
    bmt_m: Quantity
    bml_m: Quantity
    kmt_m: Quantity
    kml_m: Quantity
    gmt_m: Quantity
    gml_m: Quantity

    # Form coefficients
    cb: Quantity
    cp: Quantity
    cm: Quantity
    cwp: Quantity
    midship_area_m2: float

    # Loadcase dependent
    tpc: Quantity  # t/cm
    mct: Quantity  # t·m/cm

    kg_m: Optional[float] = None
    rho_kg_m3: Optional[float] = None

    # Metadata
    calculation_time_ms: int = 0
    warnings: List[str] = field(default_factory=list)

    def undefined(self) -> Dict[str, str]:
        """Names of undefined quantities with their reasons."""
        out = {}
        for name, value in self.__dict__.items():
            if isinstance(value, Undefined):
                out[name] = value.reason
        return out

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to dictionary with appropriate precision; undefined values are None."""
        return {
            "draft_m": round(self.draft_m, 4),
            "heel_angle_deg": round(self.heel_angle_deg, 2),
            # Volume and displacement
            "volume_m3": round(self.volume_m3, 3),
            "displacement_kg": self.displacement_kg.to_value(1),
            # Centres (4 decimal places)
            "kb_m": self.kb_m.to_value(4),
            "lcb_m": self.lcb_m.to_value(4),
            "tcb_m": self.tcb_m.to_value(4),
            "lcf_m": self.lcf_m.to_value(4),
            # Waterplane
            "waterplane_area_m2": round(self.waterplane_area_m2, 3),
            "iwp_transverse_m4": round(self.iwp_transverse_m4, 3),
            "iwp_longitudinal_m4": round(self.iwp_longitudinal_m4, 3),
            # Metacentric geometry
            "bmt_m": self.bmt_m.to_value(4),
            "bml_m": self.bml_m.to_value(4),
            "kmt_m": self.kmt_m.to_value(4),
            "kml_m": self.kml_m.to_value(4),
            "gmt_m": self.gmt_m.to_value(4),
            "gml_m": self.gml_m.to_value(4),
            # Form coefficients
            "cb": self.cb.to_value(4),
            "cp": self.cp.to_value(4),
            "cm": self.cm.to_value(4),
            "cwp": self.cwp.to_value(4),
            "midship_area_m2": round(self.midship_area_m2, 3),
            # TPC (4 decimal places), MCT (2 decimal places)
            "tpc": self.tpc.to_value(4),
            "mct": self.mct.to_value(2),
            # Loadcase
            "kg_m": self.kg_m,
            "rho_kg_m3": self.rho_kg_m3,
            # Metadata
            "undefined": self.undefined(),
            "calculation_time_ms": self.calculation_time_ms,
            "warnings": self.warnings,
        }


def draft_range(min_draft: float, max_draft: float, points: int) -> List[float]:
    """Evenly spaced drafts from min_draft to max_draft inclusive."""
    if points < 2:
        raise ValueError("At least 2 points required")
    if max_draft <= min_draft:
        raise ValueError(f"Max draft must be greater than min draft: {min_draft} >= {max_draft}")
    step = (max_draft - min_draft) / (points - 1)
    return [min_draft + i * step for i in range(points - 1)] + [max_draft]


# =============================================================================
# HYDROSTATICS CALCULATOR
# =============================================================================

class HydrostaticsCalculator:
    """
    Offset-grid hydrostatics calculator.

    Accuracy: exact for the rectangular barge on any grid; within 2% of
    the analytical Wigley values on a 21 x 13 grid.
    """

    def __init__(
        self,
        integrator: Optional[IntegratorProtocol] = None,
        config: Optional[HydrostabConfig] = None,
    ):
        self.config = config or get_config()
        self.integrator = integrator or IntegrationEngine(self.config)

    def compute_at_draft(
        self,
        geometry: HullGeometry,
        loadcase: Optional[Loadcase] = None,
        draft: float = 0.0,
        heel_angle_deg: float = 0.0,
        cancellation: Optional[CancellationToken] = None,
    ) -> HydrostaticsResults:
        """
        Compute hydrostatic properties at a draft.

        Args:
            geometry: Hull offset grid
            loadcase: Density and optional KG; without it displacement,
                GM, TPC and MCT are Undefined
            draft: Draft above keel (m)
            heel_angle_deg: Heel for the wall-sided TCB shift (deg)
            cancellation: Optional token checked between stations

        Returns:
            HydrostaticsResults

        Raises:
            DraftOutOfRangeError: Draft below 0 or above the top waterline
            ValueError: |heel_angle_deg| >= 90
            CancellationSignal: Token cancelled or expired
        """
        start_time = time.perf_counter()
        warnings: List[str] = []

        if not math.isfinite(heel_angle_deg) or abs(heel_angle_deg) >= HEEL_LIMIT_DEG:
            raise ValueError(f"Heel angle must be within ±{HEEL_LIMIT_DEG}°: {heel_angle_deg}")

        draft = self._resolve_draft(geometry, draft)
        x = geometry.stations_x

        # Sectional properties
        areas, vertical_moments = self._sections(geometry, draft, cancellation)

        volume = self.integrator.integrate(x, areas)
        vertical_moment = self.integrator.integrate(x, vertical_moments)
        longitudinal_moment = self.integrator.integrate(x, areas * x)

        if volume < ZERO_TOLERANCE:
            volume = 0.0
            # Keel-plane limit
            kb: Quantity = Defined(0.0) if draft == 0.0 else Undefined(NO_VOLUME, "kb_m")
            warnings.append(f"No immersed volume at draft {draft} m")
        else:
            kb = Defined(vertical_moment / volume)
        lcb = ratio("lcb_m", longitudinal_moment, volume, NO_VOLUME)

        # Waterplane
        half_breadths = self._waterplane_half_breadths(geometry, draft)
        awp = 2.0 * self.integrator.integrate(x, half_breadths)
        iwp_t = (2.0 / 3.0) * self.integrator.integrate(x, half_breadths ** 3)
        lcf = ratio("lcf_m", 2.0 * self.integrator.integrate(x, half_breadths * x), awp, NO_WATERPLANE)
        iwp_l_origin = 2.0 * self.integrator.integrate(x, half_breadths * x * x)
        iwp_l = iwp_l_origin - awp * lcf.value ** 2 if lcf.is_defined else 0.0

        if awp < ZERO_TOLERANCE:
            awp = 0.0
            bmt: Quantity = Undefined(NO_WATERPLANE, "bmt_m")
            bml: Quantity = Undefined(NO_WATERPLANE, "bml_m")
        else:
            bmt = ratio("bmt_m", iwp_t, volume, NO_VOLUME)
            bml = ratio("bml_m", iwp_l, volume, NO_VOLUME)

        kmt = combine("kmt_m", lambda a, b: a + b, kb, bmt)
        kml = combine("kml_m", lambda a, b: a + b, kb, bml)

        # Form coefficients
        lpp = geometry.lpp
        beam = geometry.beam
        midship_area = float(np.interp((x[0] + x[-1]) / 2.0, x, areas))
        cb = ratio("cb", volume, lpp * beam * draft, "zero Lpp x B x T")
        cm = ratio("cm", midship_area, beam * draft, "zero B x T")
        cp = ratio("cp", volume, lpp * midship_area, "zero midship section area")
        cwp = ratio("cwp", awp, lpp * beam, "zero Lpp x B")

        # Transverse centre
        if heel_angle_deg == 0.0:
            tcb: Quantity = Defined(0.0)
        else:
            tan_phi = math.tan(heel_angle_deg * DEG_TO_RAD)
            tcb = bmt.map(lambda bm: bm * tan_phi)
            if tcb.is_defined and abs(heel_angle_deg) > WALL_SIDED_MAX_RECOMMENDED_DEG:
                warnings.append(
                    f"Heel {heel_angle_deg:.1f}° beyond the wall-sided validity range; TCB is approximate"
                )

        # Loadcase dependent
        loadcase_values = self._loadcase_values(
            loadcase, volume, awp, lpp, kmt, kml, bml, warnings,
        )

        elapsed_ms = int((time.perf_counter() - start_time) * 1000)

        results = HydrostaticsResults(
            draft_m=draft,
            heel_angle_deg=heel_angle_deg,
            volume_m3=volume,
            kb_m=kb,
            lcb_m=lcb,
            tcb_m=tcb,
            waterplane_area_m2=awp,
            lcf_m=lcf,
            iwp_transverse_m4=iwp_t,
            iwp_longitudinal_m4=iwp_l,
            bmt_m=bmt,
            bml_m=bml,
            kmt_m=kmt,
            kml_m=kml,
            cb=cb,
            cp=cp,
            cm=cm,
            cwp=cwp,
            midship_area_m2=midship_area,
            kg_m=loadcase.kg if loadcase else None,
            rho_kg_m3=loadcase.rho if loadcase else None,
            calculation_time_ms=elapsed_ms,
            warnings=warnings,
            **loadcase_values,
        )

        logger.debug(
            "Hydrostatics %s at T=%.4f m: V=%.3f m³ KB=%s BMt=%s",
            geometry.name or "<unnamed>", draft, volume,
            kb.to_value(4), bmt.to_value(4),
        )
        return results

    def compute_table(
        self,
        geometry: HullGeometry,
        loadcase: Optional[Loadcase],
        drafts: Sequence[float],
        cancellation: Optional[CancellationToken] = None,
    ) -> List[HydrostaticsResults]:
        """
        Hydrostatics at several drafts.

        All drafts are range-checked before any is computed.
        """
        for draft in drafts:
            self._resolve_draft(geometry, draft)

        results = []
        for draft in drafts:
            check_cancelled(cancellation, f"hydrostatic table at draft {draft}")
            results.append(
                self.compute_at_draft(geometry, loadcase, draft, cancellation=cancellation)
            )

        logger.info(
            "Computed hydrostatic table for %s: %d drafts",
            geometry.name or "<unnamed>", len(results),
        )
        return results

    def compute_from_request(
        self,
        geometry: HullGeometry,
        loadcase: Optional[Loadcase],
        request: "HydrostaticsRequest",
        cancellation: Optional[CancellationToken] = None,
    ) -> HydrostaticsResults:
        """Hydrostatics for a validated single-draft request."""
        return self.compute_at_draft(
            geometry,
            loadcase,
            draft=request.draft,
            heel_angle_deg=request.heel_angle_deg,
            cancellation=cancellation,
        )

    def compute_table_from_request(
        self,
        geometry: HullGeometry,
        loadcase: Optional[Loadcase],
        request: "HydrostaticsTableRequest",
        cancellation: Optional[CancellationToken] = None,
    ) -> List[HydrostaticsResults]:
        """
        Hydrostatic table over the request's evenly spaced drafts.

        Raises:
            ValueError: max_draft not above min_draft
            DraftOutOfRangeError: Range extends beyond the geometry
        """
        drafts = draft_range(request.min_draft, request.max_draft, request.points)
        return self.compute_table(geometry, loadcase, drafts, cancellation)

    def section_areas(self, geometry: HullGeometry, draft: float) -> np.ndarray:
        """Immersed sectional area at every station (m²)."""
        draft = self._resolve_draft(geometry, draft)
        areas, _ = self._sections(geometry, draft, None)
        return areas

    # =========================================================================
    # SECTION INTEGRATION
    # =========================================================================

    def _resolve_draft(self, geometry: HullGeometry, draft: float) -> float:
        """Range-check a draft and snap it onto a waterline within tolerance."""
        z = geometry.waterlines_z
        tol = self.config.draft_tolerance_m

        if not math.isfinite(draft) or draft < -tol or draft > z[-1] + tol:
            raise DraftOutOfRangeError(draft, float(z[-1]))

        nearest = int(np.argmin(np.abs(z - draft)))
        if abs(z[nearest] - draft) <= tol:
            return float(z[nearest])
        return max(float(draft), 0.0)

    def _immersed_levels(self, geometry: HullGeometry, draft: float) -> Tuple[np.ndarray, np.ndarray]:
        """
        Z levels of the immersed part of each section and their half-breadths.

        Returns (z, y) with y of shape (N, k): the waterlines below the
        draft followed by the draft itself.
        """
        z = geometry.waterlines_z
        below = z < draft
        z_levels = np.append(z[below], draft)
        y_levels = np.column_stack([geometry.offsets[:, below], self._waterplane_half_breadths(geometry, draft)])
        return z_levels, y_levels

    def _waterplane_half_breadths(self, geometry: HullGeometry, draft: float) -> np.ndarray:
        """Half-breadth of every station at the draft, linear in z."""
        z = geometry.waterlines_z
        if draft <= z[0]:
            return geometry.offsets[:, 0].copy() if draft == z[0] else np.zeros(geometry.n_stations)
        j = int(np.searchsorted(z, draft, side="left"))
        if z[j] == draft:
            return geometry.offsets[:, j].copy()
        t = (draft - z[j - 1]) / (z[j] - z[j - 1])
        return (1.0 - t) * geometry.offsets[:, j - 1] + t * geometry.offsets[:, j]

    def _sections(
        self,
        geometry: HullGeometry,
        draft: float,
        cancellation: Optional[CancellationToken],
    ) -> Tuple[np.ndarray, np.ndarray]:
        """Sectional area and vertical moment (about the keel) per station."""
        z_levels, y_levels = self._immersed_levels(geometry, draft)
        areas = np.zeros(geometry.n_stations)
        moments = np.zeros(geometry.n_stations)

        for i in range(geometry.n_stations):
            check_cancelled(cancellation, f"section integration at station {i}")
            y = y_levels[i]
            areas[i] = 2.0 * self.integrator.integrate(z_levels, y)
            moments[i] = 2.0 * self.integrator.integrate(z_levels, y * z_levels)

        return areas, moments

    # =========================================================================
    # LOADCASE VALUES
    # =========================================================================

    def _loadcase_values(
        self,
        loadcase: Optional[Loadcase],
        volume: float,
        awp: float,
        lpp: float,
        kmt: Quantity,
        kml: Quantity,
        bml: Quantity,
        warnings: List[str],
    ) -> Dict[str, Quantity]:
        """Displacement, GM, TPC and MCT for a loadcase."""
        if loadcase is None:
            return {
                "displacement_kg": Undefined(NO_LOADCASE, "displacement_kg"),
                "gmt_m": Undefined(NO_LOADCASE, "gmt_m"),
                "gml_m": Undefined(NO_LOADCASE, "gml_m"),
                "tpc": Undefined(NO_LOADCASE, "tpc"),
                "mct": Undefined(NO_LOADCASE, "mct"),
            }

        displacement_kg = loadcase.rho * volume
        tpc = Defined(loadcase.rho * awp / 100000.0)

        if loadcase.kg is None:
            gmt: Quantity = Undefined(NO_KG, "gmt_m")
            gml: Quantity = Undefined(NO_KG, "gml_m")
        else:
            kg = loadcase.kg
            gmt = kmt.map(lambda km: km - kg)
            gml = kml.map(lambda km: km - kg)
            if gmt.is_defined and gmt.value <= 0:
                warnings.append(f"Non-positive GMt: {gmt.value:.3f}m - vessel may be unstable")

        # MCT = Δ·GMl / (100·Lpp), GMl ≈ BMl without KG
        lever = gml if gml.is_defined else bml
        if not gml.is_defined and bml.is_defined:
            warnings.append("MCT approximated with BMl (no KG)")
        mct = combine(
            "mct", lambda gm: displacement_kg * KG_TO_TONNES * gm / (100.0 * lpp), lever,
        )

        return {
            "displacement_kg": Defined(displacement_kg),
            "gmt_m": gmt,
            "gml_m": gml,
            "tpc": tpc,
            "mct": mct,
        }
