"""
HYDROSTAB Physical Constants and Numerical Defaults

Constants used throughout HYDROSTAB for hydrostatic and stability
calculations.
"""

import math

# ==================== Physical Constants ====================

# Water properties
SEAWATER_DENSITY_KG_M3 = 1025.0  # kg/m³ at 15°C, 35 ppt salinity

# Unit conversions - Angle
DEG_TO_RAD = math.pi / 180.0
RAD_TO_DEG = 180.0 / math.pi

# Unit conversions - Mass
KG_TO_TONNES = 0.001

# ==================== Numerical Defaults ====================

# Relative tolerance for treating sample spacing as uniform
SPACING_TOLERANCE = 1e-6

# Draft coincides with a waterline within this distance
DRAFT_TOLERANCE_M = 1e-4  # 0.1mm

# Heel angles at or beyond this magnitude are rejected (tan φ diverges)
HEEL_LIMIT_DEG = 90.0

# Recommended upper heel for the wall-sided formula; sweeps and heeled
# queries beyond it carry a warning
WALL_SIDED_MAX_RECOMMENDED_DEG = 20.0

# ==================== Version ====================

HYDROSTAB_VERSION = "1.0.0"
