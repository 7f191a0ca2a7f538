"""
stability/requests.py - Per-call request models

Validated configuration for one hydrostatics or stability evaluation,
as received from a caller that speaks JSON. Range constraints are
checked on construction; cross-field checks (min < max) are left to the
calculators, which raise StabilityError.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class StabilityMethod(str, Enum):
    """Righting-arm computation method."""
    WALL_SIDED = "WallSided"


class HydrostaticsRequest(BaseModel):
    """Single-draft hydrostatics request."""

    draft: float = Field(..., ge=0.0, description="Draft above keel (m)")
    heel_angle_deg: float = Field(
        default=0.0, gt=-90.0, lt=90.0, description="Heel angle for the TCB shift (deg)"
    )


class HydrostaticsTableRequest(BaseModel):
    """Hydrostatics over an evenly spaced draft range."""

    min_draft: float = Field(..., ge=0.0, description="First draft (m)")
    max_draft: float = Field(..., gt=0.0, description="Last draft (m)")
    points: int = Field(default=11, ge=2, le=1000, description="Number of drafts")


class StabilityRequest(BaseModel):
    """GZ curve request."""

    draft: float = Field(..., ge=0.0, description="Draft above keel (m)")
    min_angle: float = Field(default=0.0, gt=-90.0, lt=90.0, description="First heel angle (deg)")
    max_angle: float = Field(default=60.0, gt=-90.0, lt=90.0, description="Last heel angle (deg)")
    angle_step: float = Field(default=1.0, gt=0.0, description="Heel increment (deg)")
    method: StabilityMethod = Field(
        default=StabilityMethod.WALL_SIDED, description="Righting-arm method"
    )
    flooding_angle_deg: Optional[float] = Field(
        None, gt=0.0, description="Angle of flooding; caps the 40° criteria if lower"
    )
