"""
HYDROSTAB Physics Module

Numerical integration, offset-grid hydrostatics and hydrostatic curves.
"""

from hydrostab.physics.integration import IntegrationEngine, IntegrationRule
from hydrostab.physics.hydrostatics import HydrostaticsCalculator, HydrostaticsResults, draft_range
from hydrostab.physics.curves import (
    CURVE_TYPES,
    CurvePoint,
    HydrostaticCurve,
    BonjeanCurve,
    CurvesGenerator,
)

__all__ = [
    "IntegrationEngine",
    "IntegrationRule",
    "HydrostaticsCalculator",
    "HydrostaticsResults",
    "CURVE_TYPES",
    "CurvePoint",
    "HydrostaticCurve",
    "BonjeanCurve",
    "CurvesGenerator",
    "draft_range",
]
