"""
HYDROSTAB Stability Module

Wall-sided GZ curves and IMO intact stability criteria.
"""

from hydrostab.stability.constants import IMOIntactCriteria, IMO_INTACT, STANDARD_NAME
from hydrostab.stability.requests import (
    StabilityMethod,
    HydrostaticsRequest,
    HydrostaticsTableRequest,
    StabilityRequest,
)
from hydrostab.stability.results import (
    GZPoint,
    StabilityCurveResult,
    CriterionResult,
    CriteriaReport,
)
from hydrostab.stability.gz_curve import (
    GZCurveCalculator,
    compute_gz_wall_sided,
    heel_angles,
    resolve_method,
)
from hydrostab.stability.criteria import (
    StabilityCriteriaChecker,
    interpolate_gz,
    find_max_gz,
)

__all__ = [
    "IMOIntactCriteria",
    "IMO_INTACT",
    "STANDARD_NAME",
    "StabilityMethod",
    "HydrostaticsRequest",
    "HydrostaticsTableRequest",
    "StabilityRequest",
    "GZPoint",
    "StabilityCurveResult",
    "CriterionResult",
    "CriteriaReport",
    "GZCurveCalculator",
    "compute_gz_wall_sided",
    "heel_angles",
    "resolve_method",
    "StabilityCriteriaChecker",
    "interpolate_gz",
    "find_max_gz",
]
