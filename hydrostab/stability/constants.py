"""
HYDROSTAB Stability Constants

IMO intact stability criteria.

References:
- IMO Resolution A.749(18), Code on Intact Stability, Section 3.1.2
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Dict


STANDARD_NAME = "IMO A.749(18)"


# =============================================================================
# IMO INTACT STABILITY CRITERIA (A.749(18) 3.1.2)
# =============================================================================

@dataclass(frozen=True)
class IMOIntactCriteria:
    """
    General intact stability criteria for all ships.

    Areas in m·rad, lengths in m, angles in degrees.
    """
    # Area under GZ curve
    area_0_30_min_m_rad: float = 0.055
    area_0_40_min_m_rad: float = 0.090
    area_30_40_min_m_rad: float = 0.030

    # GZ curve shape
    gz_30_min_m: float = 0.20  # Max GZ at heel >= 30°
    angle_gz_max_min_deg: float = 25.0

    # Initial metacentric height
    gm_min_m: float = 0.15

    # Sub-range angles
    lower_angle_deg: float = 30.0
    upper_angle_deg: float = 40.0

    def to_dict(self) -> Dict[str, float]:
        return {
            "area_0_30_min_m_rad": self.area_0_30_min_m_rad,
            "area_0_40_min_m_rad": self.area_0_40_min_m_rad,
            "area_30_40_min_m_rad": self.area_30_40_min_m_rad,
            "gz_30_min_m": self.gz_30_min_m,
            "angle_gz_max_min_deg": self.angle_gz_max_min_deg,
            "gm_min_m": self.gm_min_m,
        }


# Singleton instance
IMO_INTACT = IMOIntactCriteria()
