"""
errors/taxonomy.py - Error taxonomy

Structured exception types for geometry, calculation and stability
failures. Every error carries a code, a category, a message and a
details dictionary, and serializes with to_dict().

CancellationSignal is not a HydrostabError: a cancelled
computation is not a failure and can always be retried.
"""

from __future__ import annotations
from typing import Any, Dict, List, Optional
from enum import Enum


# =============================================================================
# ERROR CATEGORIES
# =============================================================================

class ErrorCategory(Enum):
    """Categories of HYDROSTAB errors."""
    GEOMETRY = "geometry"          # Malformed offset grid or draft outside it
    CALCULATION = "calculation"    # Mathematically undefined quantity
    STABILITY = "stability"        # GZ curve / criteria request cannot be served
    CANCELLATION = "cancellation"  # Cooperative abort


# =============================================================================
# BASE ERROR CLASS
# =============================================================================

class HydrostabError(Exception):
    """
    Base class for HYDROSTAB errors.

    Provides structured error information with:
    - Error code for programmatic handling
    - Human-readable message
    - Recovery hint for the caller
    - Detailed context for debugging
    """

    code: str = "HYD_000"
    category: ErrorCategory = ErrorCategory.CALCULATION

    def __init__(
        self,
        message: str = "",
        *,
        recovery_hint: str = "",
        details: Optional[Dict[str, Any]] = None,
        **kwargs,
    ):
        self.message = message or self.__class__.__doc__ or "Hydrostatics error"
        self.recovery_hint = recovery_hint
        self.details = dict(details or {})
        self.details.update(kwargs)

        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary for callers that serialize results."""
        return {
            "code": self.code,
            "category": self.category.value,
            "message": self.message,
            "recovery_hint": self.recovery_hint,
            "details": self.details,
        }

    def __str__(self) -> str:
        parts = [f"[{self.code}] {self.message}"]
        if self.recovery_hint:
            parts.append(f"Hint: {self.recovery_hint}")
        return " ".join(parts)


# =============================================================================
# GEOMETRY ERRORS
# =============================================================================

class GeometryError(HydrostabError):
    """Hull geometry is malformed."""

    code = "GEOM_000"
    category = ErrorCategory.GEOMETRY


class GeometryValidationError(GeometryError):
    """Offset grid violates its invariants."""

    code = "GEOM_001"

    def __init__(
        self,
        issues: List[str],
        **kwargs,
    ):
        issue_count = len(issues)
        message = f"Geometry validation failed with {issue_count} issue(s)"
        if issues:
            message += f": {issues[0]}"
            if issue_count > 1:
                message += f" (+{issue_count - 1} more)"

        super().__init__(
            message=message,
            recovery_hint="Stations and waterlines must be strictly increasing and non-negative, "
                          "and every station/waterline pair needs a non-negative half-breadth.",
            issues=list(issues),
            issue_count=issue_count,
            **kwargs,
        )

    @property
    def issues(self) -> List[str]:
        return self.details["issues"]


class DraftOutOfRangeError(GeometryError):
    """Requested draft lies outside the waterline range of the grid."""

    code = "GEOM_002"

    def __init__(
        self,
        draft: float,
        z_max: float,
        **kwargs,
    ):
        message = f"Draft {draft} m outside geometry range [0, {z_max}] m"
        super().__init__(
            message=message,
            recovery_hint="Request a draft between 0 and the highest waterline, or extend the offset table.",
            draft=draft,
            z_max=z_max,
            **kwargs,
        )


# =============================================================================
# CALCULATION ERRORS
# =============================================================================

class UndefinedQuantityError(HydrostabError):
    """A derived quantity is mathematically undefined at this draft."""

    code = "CALC_001"
    category = ErrorCategory.CALCULATION

    def __init__(
        self,
        quantity: str,
        reason: str,
        **kwargs,
    ):
        message = f"{quantity} is undefined: {reason}"
        super().__init__(
            message=message,
            recovery_hint="The hull has no immersed geometry (or waterplane) at this draft.",
            quantity=quantity,
            reason=reason,
            **kwargs,
        )

    @property
    def quantity(self) -> str:
        return self.details["quantity"]

    @property
    def reason(self) -> str:
        return self.details["reason"]


# =============================================================================
# STABILITY ERRORS
# =============================================================================

class StabilityError(HydrostabError):
    """Stability request cannot be evaluated."""

    code = "STAB_000"
    category = ErrorCategory.STABILITY


class AngleRangeError(StabilityError):
    """Heel angle sweep is empty, inverted or out of range."""

    code = "STAB_001"

    def __init__(
        self,
        min_angle: float,
        max_angle: float,
        angle_step: float,
        reason: str,
        **kwargs,
    ):
        message = f"Invalid heel sweep [{min_angle}°, {max_angle}°] step {angle_step}°: {reason}"
        super().__init__(
            message=message,
            recovery_hint="Use min_angle < max_angle, a positive step, and angles within ±90°.",
            min_angle=min_angle,
            max_angle=max_angle,
            angle_step=angle_step,
            reason=reason,
            **kwargs,
        )


class UnknownMethodError(StabilityError):
    """Requested righting-arm method is not available."""

    code = "STAB_002"

    def __init__(self, method: str, available: List[str], **kwargs):
        message = f"Unknown stability method: {method}"
        super().__init__(
            message=message,
            recovery_hint=f"Use one of: {', '.join(available)}.",
            method=method,
            available=list(available),
            **kwargs,
        )


class MissingKGError(StabilityError):
    """Loadcase has no vertical centre of gravity."""

    code = "STAB_003"

    def __init__(self, loadcase_name: str = "", **kwargs):
        label = f" '{loadcase_name}'" if loadcase_name else ""
        message = f"Loadcase{label} must define KG for stability calculations"
        super().__init__(
            message=message,
            recovery_hint="Set the loadcase KG (vertical centre of gravity above keel).",
            loadcase=loadcase_name,
            **kwargs,
        )


class UndefinedMetacentricHeightError(StabilityError):
    """GMt or BMt is undefined at the requested draft."""

    code = "STAB_004"

    def __init__(self, draft: float, reason: str, **kwargs):
        message = f"Initial stability undefined at draft {draft} m: {reason}"
        super().__init__(
            message=message,
            recovery_hint="Choose a draft at which the hull has volume and waterplane area.",
            draft=draft,
            reason=reason,
            **kwargs,
        )


class CurveCoverageError(StabilityError):
    """GZ curve does not span the angles a criterion needs."""

    code = "STAB_005"

    def __init__(
        self,
        required_from: float,
        required_to: float,
        curve_from: float,
        curve_to: float,
        **kwargs,
    ):
        message = (
            f"GZ curve covers [{curve_from}°, {curve_to}°] but criteria need "
            f"[{required_from}°, {required_to}°]"
        )
        super().__init__(
            message=message,
            recovery_hint="Recompute the GZ curve over a wider heel range.",
            required_from=required_from,
            required_to=required_to,
            curve_from=curve_from,
            curve_to=curve_to,
            **kwargs,
        )


class FloodingAngleError(StabilityError):
    """Angle of flooding is not a positive heel angle."""

    code = "STAB_006"

    def __init__(self, flooding_angle_deg: float, **kwargs):
        message = f"Flooding angle must be a positive finite heel angle: {flooding_angle_deg}°"
        super().__init__(
            message=message,
            recovery_hint="Give the angle of flooding in degrees above upright, or omit it.",
            flooding_angle_deg=flooding_angle_deg,
            **kwargs,
        )


# =============================================================================
# CANCELLATION
# =============================================================================

class CancellationSignal(Exception):
    """Computation aborted through its cancellation token."""

    code: str = "CANCEL_001"
    category: ErrorCategory = ErrorCategory.CANCELLATION
    retryable: bool = True

    def __init__(self, reason: str = "cancelled", stage: str = ""):
        self.reason = reason
        self.stage = stage
        message = f"Computation {reason}"
        if stage:
            message += f" during {stage}"
        self.message = message
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "category": self.category.value,
            "message": self.message,
            "reason": self.reason,
            "stage": self.stage,
            "retryable": self.retryable,
        }


# =============================================================================
# ERROR RESPONSE HELPERS
# =============================================================================

def error_response(error: Exception) -> Dict[str, Any]:
    """
    Convert a HYDROSTAB error (or cancellation) to a response dictionary.

    Returns structured error response suitable for JSON serialization.
    """
    if isinstance(error, (HydrostabError, CancellationSignal)):
        return {"error": error.to_dict()}
    raise TypeError(f"Not a HYDROSTAB error: {type(error).__name__}")
