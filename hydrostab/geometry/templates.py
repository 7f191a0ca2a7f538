"""
geometry/templates.py - Benchmark hull forms

Offset-grid generators for hulls with known hydrostatics:

- Rectangular barge: every property has a closed form.
- Wigley parabolic hull: y = B/2 · (1 - ξ²) · (1 - ζ²), with
  ξ = (x - L/2)/(L/2) and ζ = (T - z)/T, so the section is widest at the
  design waterline and closes at the keel. Cb = 4/9, Cm = Cp = Cwp = 2/3.

Each generator has a matching *_reference() returning the analytical
values at a draft, used by the benchmark command and the test suite.
"""

from __future__ import annotations
from dataclasses import dataclass, asdict
from typing import Any, Dict

import numpy as np

from hydrostab.core.constants import SEAWATER_DENSITY_KG_M3
from hydrostab.geometry.model import HullGeometry


# =============================================================================
# ANALYTICAL REFERENCE
# =============================================================================

@dataclass(frozen=True)
class AnalyticalHydrostatics:
    """Closed-form hydrostatics of a template hull at one draft."""
    draft_m: float
    volume_m3: float
    displacement_kg: float
    kb_m: float
    lcb_m: float
    waterplane_area_m2: float
    iwp_transverse_m4: float
    iwp_longitudinal_m4: float
    bmt_m: float
    bml_m: float
    cb: float
    cp: float
    cm: float
    cwp: float

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


# =============================================================================
# RECTANGULAR BARGE
# =============================================================================

def rectangular_barge(
    length: float = 100.0,
    beam: float = 20.0,
    depth: float = 10.0,
    num_stations: int = 5,
    num_waterlines: int = 3,
) -> HullGeometry:
    """
    Box-shaped hull with constant half-breadth B/2.

    Stations are equally spaced over [0, L] and waterlines over [0, depth].
    """
    if length <= 0 or beam <= 0 or depth <= 0:
        raise ValueError(f"Barge dimensions must be positive: L={length}, B={beam}, D={depth}")
    if num_stations < 2 or num_waterlines < 2:
        raise ValueError("Barge needs at least 2 stations and 2 waterlines")

    stations_x = np.linspace(0.0, length, num_stations)
    waterlines_z = np.linspace(0.0, depth, num_waterlines)
    offsets = np.full((num_stations, num_waterlines), beam / 2.0)

    return HullGeometry.from_arrays(
        stations_x, waterlines_z, offsets,
        lpp=length, beam=beam, name=f"Barge {length:g}x{beam:g}x{depth:g}",
    )


def barge_reference(
    length: float,
    beam: float,
    draft: float,
    rho: float = SEAWATER_DENSITY_KG_M3,
) -> AnalyticalHydrostatics:
    """Closed-form barge hydrostatics (all form coefficients are 1)."""
    volume = length * beam * draft
    iwp_t = length * beam ** 3 / 12.0
    iwp_l = beam * length ** 3 / 12.0
    return AnalyticalHydrostatics(
        draft_m=draft,
        volume_m3=volume,
        displacement_kg=rho * volume,
        kb_m=draft / 2.0,
        lcb_m=length / 2.0,
        waterplane_area_m2=length * beam,
        iwp_transverse_m4=iwp_t,
        iwp_longitudinal_m4=iwp_l,
        bmt_m=iwp_t / volume,
        bml_m=iwp_l / volume,
        cb=1.0,
        cp=1.0,
        cm=1.0,
        cwp=1.0,
    )


# =============================================================================
# WIGLEY HULL
# =============================================================================

def wigley_hull(
    length: float = 100.0,
    beam: float = 10.0,
    draft: float = 6.25,
    num_stations: int = 21,
    num_waterlines: int = 13,
) -> HullGeometry:
    """
    Wigley parabolic hull sampled on a uniform grid.

    The top waterline is the design draft; odd station and waterline
    counts keep both directions on composite Simpson.
    """
    if length <= 0 or beam <= 0 or draft <= 0:
        raise ValueError(f"Wigley dimensions must be positive: L={length}, B={beam}, T={draft}")
    if num_stations < 3 or num_waterlines < 3:
        raise ValueError("Wigley hull needs at least 3 stations and 3 waterlines")

    stations_x = np.linspace(0.0, length, num_stations)
    waterlines_z = np.linspace(0.0, draft, num_waterlines)

    half_length = length / 2.0
    xi = (stations_x - half_length) / half_length
    zeta = (draft - waterlines_z) / draft

    offsets = (beam / 2.0) * np.outer(1.0 - xi ** 2, 1.0 - zeta ** 2)
    offsets = np.clip(offsets, 0.0, None)

    return HullGeometry.from_arrays(
        stations_x, waterlines_z, offsets,
        lpp=length, beam=beam, name=f"Wigley {length:g}x{beam:g}x{draft:g}",
    )


def wigley_reference(
    length: float,
    beam: float,
    draft: float,
    rho: float = SEAWATER_DENSITY_KG_M3,
) -> AnalyticalHydrostatics:
    """
    Analytical Wigley hydrostatics at the design draft.

    KB = 5T/8, It = 4·B³·L/105, Il = B·L³/30 (about midship).
    """
    volume = 4.0 / 9.0 * length * beam * draft
    iwp_t = 4.0 * beam ** 3 * length / 105.0
    iwp_l = beam * length ** 3 / 30.0
    return AnalyticalHydrostatics(
        draft_m=draft,
        volume_m3=volume,
        displacement_kg=rho * volume,
        kb_m=5.0 * draft / 8.0,
        lcb_m=length / 2.0,
        waterplane_area_m2=2.0 / 3.0 * length * beam,
        iwp_transverse_m4=iwp_t,
        iwp_longitudinal_m4=iwp_l,
        bmt_m=iwp_t / volume,
        bml_m=iwp_l / volume,
        cb=4.0 / 9.0,
        cp=2.0 / 3.0,
        cm=2.0 / 3.0,
        cwp=2.0 / 3.0,
    )


TEMPLATES = {
    "barge": (rectangular_barge, barge_reference),
    "wigley": (wigley_hull, wigley_reference),
}
