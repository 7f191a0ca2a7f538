"""
HYDROSTAB Stability Results

Result records for GZ curves and criteria checks.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


# =============================================================================
# GZ CURVE
# =============================================================================

@dataclass(frozen=True)
class GZPoint:
    """Single point on the GZ curve."""
    heel_deg: float
    gz_m: float
    kn_m: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "heel_deg": round(self.heel_deg, 2),
            "gz_m": round(self.gz_m, 4),
            "kn_m": round(self.kn_m, 4),
        }


@dataclass
class StabilityCurveResult:
    """
    GZ curve over a heel sweep with its summary statistics.

    Points are ordered by strictly increasing heel. max_gz_m and
    angle_at_max_gz_deg are taken from the samples (no interpolation).
    """
    points: List[GZPoint]
    method: str
    draft_m: float
    kg_m: float
    displacement_kg: float
    initial_gmt_m: float
    max_gz_m: float
    angle_at_max_gz_deg: float
    angle_of_vanishing_stability_deg: Optional[float] = None

    # Metadata
    calculation_time_ms: int = 0
    warnings: List[str] = field(default_factory=list)

    @property
    def min_angle_deg(self) -> float:
        return self.points[0].heel_deg

    @property
    def max_angle_deg(self) -> float:
        return self.points[-1].heel_deg

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to dictionary."""
        vanishing = self.angle_of_vanishing_stability_deg
        return {
            "method": self.method,
            "draft_m": round(self.draft_m, 4),
            "kg_m": round(self.kg_m, 4),
            "displacement_kg": round(self.displacement_kg, 1),
            "initial_gmt_m": round(self.initial_gmt_m, 4),
            "max_gz_m": round(self.max_gz_m, 4),
            "angle_at_max_gz_deg": round(self.angle_at_max_gz_deg, 2),
            "angle_of_vanishing_stability_deg": round(vanishing, 2) if vanishing is not None else None,
            "points": [p.to_dict() for p in self.points],
            "calculation_time_ms": self.calculation_time_ms,
            "warnings": self.warnings,
        }


# =============================================================================
# CRITERIA
# =============================================================================

@dataclass(frozen=True)
class CriterionResult:
    """Outcome of one criterion."""
    name: str
    actual_value: float
    required_value: float
    passed: bool
    unit: str
    notes: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "actual_value": round(self.actual_value, 4),
            "required_value": self.required_value,
            "passed": self.passed,
            "unit": self.unit,
            "notes": self.notes,
        }


@dataclass
class CriteriaReport:
    """Aggregate outcome of a criteria check."""
    criteria: List[CriterionResult]
    standard: str
    summary: str = ""

    @property
    def all_criteria_passed(self) -> bool:
        return all(c.passed for c in self.criteria)

    @property
    def passed_count(self) -> int:
        return sum(1 for c in self.criteria if c.passed)

    def failed(self) -> List[CriterionResult]:
        return [c for c in self.criteria if not c.passed]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "standard": self.standard,
            "all_criteria_passed": self.all_criteria_passed,
            "passed_count": self.passed_count,
            "total_count": len(self.criteria),
            "summary": self.summary,
            "criteria": [c.to_dict() for c in self.criteria],
        }
