"""
HYDROSTAB Geometry Module

Offset-grid hull model, invariant checks and benchmark hull templates.
"""

from hydrostab.geometry.model import (
    Station,
    Waterline,
    Offset,
    Loadcase,
    HullGeometry,
)
from hydrostab.geometry.validation import collect_issues, validate_grid
from hydrostab.geometry.templates import (
    AnalyticalHydrostatics,
    rectangular_barge,
    barge_reference,
    wigley_hull,
    wigley_reference,
)

__all__ = [
    "Station",
    "Waterline",
    "Offset",
    "Loadcase",
    "HullGeometry",
    "collect_issues",
    "validate_grid",
    "AnalyticalHydrostatics",
    "rectangular_barge",
    "barge_reference",
    "wigley_hull",
    "wigley_reference",
]
