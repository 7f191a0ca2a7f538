"""
HYDROSTAB - Hull hydrostatics and intact stability

Offset-grid hydrostatics, wall-sided GZ curves and IMO A.749(18)
intact stability criteria.
"""

from hydrostab.core.constants import HYDROSTAB_VERSION
from hydrostab.core.config import HydrostabConfig, get_config
from hydrostab.core.quantity import Defined, Undefined, Quantity
from hydrostab.core.cancellation import CancellationToken
from hydrostab.geometry.model import Station, Waterline, Offset, Loadcase, HullGeometry
from hydrostab.physics.integration import IntegrationEngine
from hydrostab.physics.hydrostatics import HydrostaticsCalculator, HydrostaticsResults
from hydrostab.stability.gz_curve import GZCurveCalculator
from hydrostab.stability.criteria import StabilityCriteriaChecker

__version__ = HYDROSTAB_VERSION

__all__ = [
    "HydrostabConfig",
    "get_config",
    "Defined",
    "Undefined",
    "Quantity",
    "CancellationToken",
    "Station",
    "Waterline",
    "Offset",
    "Loadcase",
    "HullGeometry",
    "IntegrationEngine",
    "HydrostaticsCalculator",
    "HydrostaticsResults",
    "GZCurveCalculator",
    "StabilityCriteriaChecker",
]
