"""
errors/ - Error Taxonomy

Structured exceptions raised by the geometry, physics and stability
layers. All errors propagate to the immediate caller; nothing in
HYDROSTAB retries or converts them to default values.
"""

from .taxonomy import (
    ErrorCategory,
    HydrostabError,
    GeometryError,
    GeometryValidationError,
    DraftOutOfRangeError,
    UndefinedQuantityError,
    StabilityError,
    AngleRangeError,
    UnknownMethodError,
    MissingKGError,
    UndefinedMetacentricHeightError,
    CurveCoverageError,
    FloodingAngleError,
    CancellationSignal,
    error_response,
)

__all__ = [
    "ErrorCategory",
    "HydrostabError",
    # Geometry
    "GeometryError",
    "GeometryValidationError",
    "DraftOutOfRangeError",
    # Calculation
    "UndefinedQuantityError",
    # Stability
    "StabilityError",
    "AngleRangeError",
    "UnknownMethodError",
    "MissingKGError",
    "UndefinedMetacentricHeightError",
    "CurveCoverageError",
    "FloodingAngleError",
    # Cancellation
    "CancellationSignal",
    # Helpers
    "error_response",
]
