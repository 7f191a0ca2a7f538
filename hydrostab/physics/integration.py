"""
HYDROSTAB Integration Engine

Numerical quadrature over sampled functions (offsets along a section,
sectional areas along the hull, GZ over heel).

Rule selection:
- 0 or 1 point: 0.0
- 2 points: trapezoid
- uniform spacing, odd count: composite Simpson 1/3
- uniform spacing, even count: Simpson on the first n-1 points plus a
  trapezoid on the last interval
- otherwise: composite trapezoid
"""

from __future__ import annotations
from enum import Enum
from typing import Optional, Sequence, Tuple
import logging

import numpy as np

from hydrostab.core.config import HydrostabConfig, get_config

logger = logging.getLogger(__name__)


class IntegrationRule(Enum):
    """Quadrature rule chosen for a sample set."""
    NONE = "none"                  # fewer than 2 points
    TRAPEZOIDAL = "trapezoidal"
    SIMPSON = "simpson"
    SIMPSON_TRAPEZOID = "simpson_trapezoid"


def _as_samples(x: Sequence[float], y: Sequence[float]) -> Tuple[np.ndarray, np.ndarray]:
    """Convert to float arrays and check shape and ordering."""
    xa = np.asarray(x, dtype=float)
    ya = np.asarray(y, dtype=float)
    if xa.ndim != 1 or ya.ndim != 1:
        raise ValueError("X and Y must be one-dimensional")
    if xa.size != ya.size:
        raise ValueError(f"X and Y arrays must have the same length ({xa.size} != {ya.size})")
    if xa.size > 1 and np.any(np.diff(xa) <= 0):
        raise ValueError("X values must be strictly increasing")
    return xa, ya


class IntegrationEngine:
    """
    1-D quadrature with automatic rule selection.

    Spacing is treated as uniform when every interval is within
    spacing_tolerance (relative) of the first one.
    """

    def __init__(self, config: Optional[HydrostabConfig] = None):
        self.config = config or get_config()

    # =========================================================================
    # RULE SELECTION
    # =========================================================================

    def is_uniform(self, x: Sequence[float]) -> bool:
        """True if all intervals match the first within tolerance."""
        xa = np.asarray(x, dtype=float)
        if xa.size < 3:
            return True
        steps = np.diff(xa)
        return bool(np.all(np.abs(steps - steps[0]) <= self.config.spacing_tolerance * abs(steps[0])))

    def select_rule(self, x: Sequence[float]) -> IntegrationRule:
        """Rule integrate() would apply to these abscissae."""
        n = len(x)
        if n < 2:
            return IntegrationRule.NONE
        if n == 2 or not self.is_uniform(x):
            return IntegrationRule.TRAPEZOIDAL
        if n % 2 == 1:
            return IntegrationRule.SIMPSON
        return IntegrationRule.SIMPSON_TRAPEZOID

    # =========================================================================
    # INTEGRATION
    # =========================================================================

    def integrate(self, x: Sequence[float], y: Sequence[float]) -> float:
        """
        Definite integral of y over x.

        Raises:
            ValueError: Mismatched lengths or x not strictly increasing
        """
        xa, ya = _as_samples(x, y)
        rule = self.select_rule(xa)
        logger.debug("Integrating %d points with %s rule", xa.size, rule.value)

        if rule is IntegrationRule.NONE:
            return 0.0
        if rule is IntegrationRule.TRAPEZOIDAL:
            return self.trapezoidal_rule(xa, ya)
        return self.composite_simpson(xa, ya)

    def simpsons_rule(self, x: Sequence[float], y: Sequence[float]) -> float:
        """
        Composite Simpson 1/3 rule.

        Requires an odd number (>= 3) of equally spaced points.
        """
        xa, ya = _as_samples(x, y)
        if xa.size < 3:
            raise ValueError("At least 3 points required for Simpson's rule")
        if xa.size % 2 == 0:
            raise ValueError("Simpson's rule requires an odd number of points")
        if not self.is_uniform(xa):
            raise ValueError("Simpson's rule requires equally spaced points")

        h = (xa[-1] - xa[0]) / (xa.size - 1)
        total = ya[0] + ya[-1] + 4.0 * ya[1:-1:2].sum() + 2.0 * ya[2:-1:2].sum()
        return float(h / 3.0 * total)

    def composite_simpson(self, x: Sequence[float], y: Sequence[float]) -> float:
        """Simpson for odd counts; Simpson plus a closing trapezoid for even counts."""
        xa, ya = _as_samples(x, y)
        if xa.size < 3:
            raise ValueError("At least 3 points required for composite Simpson's rule")
        if xa.size % 2 == 1:
            return self.simpsons_rule(xa, ya)

        head = self.simpsons_rule(xa[:-1], ya[:-1])
        tail = (xa[-1] - xa[-2]) * (ya[-1] + ya[-2]) / 2.0
        return float(head + tail)

    def trapezoidal_rule(self, x: Sequence[float], y: Sequence[float]) -> float:
        """Composite trapezoidal rule, any spacing."""
        xa, ya = _as_samples(x, y)
        if xa.size < 2:
            raise ValueError("At least 2 points required for the trapezoidal rule")
        return float(np.sum(np.diff(xa) * (ya[1:] + ya[:-1]) / 2.0))

    # =========================================================================
    # MOMENTS
    # =========================================================================

    def first_moment(self, x: Sequence[float], y: Sequence[float]) -> float:
        """∫ x·y dx."""
        xa, ya = _as_samples(x, y)
        return self.integrate(xa, xa * ya)

    def second_moment(self, x: Sequence[float], y: Sequence[float]) -> float:
        """∫ x²·y dx."""
        xa, ya = _as_samples(x, y)
        return self.integrate(xa, xa * xa * ya)
