"""
core/quantity.py - Defined/Undefined result values

Derived hydrostatic quantities (BMt, GMt, form coefficients, ...) can be
mathematically undefined when their denominator vanishes. They are
returned as Quantity = Defined | Undefined instead of None or NaN, so an
undefined value cannot be used as if it were zero: reading .value of an
Undefined raises UndefinedQuantityError.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Callable, Optional, Union

from hydrostab.errors import UndefinedQuantityError

# Denominators smaller than this are treated as zero
ZERO_TOLERANCE = 1e-12


@dataclass(frozen=True)
class Defined:
    """A computed value."""
    value: float

    @property
    def is_defined(self) -> bool:
        return True

    def value_or(self, default: Any) -> float:
        return self.value

    def map(self, fn: Callable[[float], float]) -> "Quantity":
        return Defined(fn(self.value))

    def to_value(self, ndigits: Optional[int] = None) -> Optional[float]:
        """Serializable value, rounded if ndigits is given."""
        if ndigits is None:
            return self.value
        return round(self.value, ndigits)


@dataclass(frozen=True)
class Undefined:
    """A value that cannot be computed, with the reason why."""
    reason: str
    quantity: str = ""

    @property
    def is_defined(self) -> bool:
        return False

    @property
    def value(self) -> float:
        raise UndefinedQuantityError(self.quantity or "quantity", self.reason)

    def value_or(self, default: Any) -> Any:
        return default

    def map(self, fn: Callable[[float], float]) -> "Quantity":
        return self

    def to_value(self, ndigits: Optional[int] = None) -> None:
        return None


Quantity = Union[Defined, Undefined]


def ratio(name: str, numerator: float, denominator: float, reason: str) -> Quantity:
    """
    numerator / denominator, Undefined when the denominator is zero.

    Args:
        name: Quantity name used in the Undefined record
        numerator: Dividend
        denominator: Divisor
        reason: Explanation stored when the divisor vanishes

    Returns:
        Defined(numerator / denominator) or Undefined(reason)
    """
    if abs(denominator) < ZERO_TOLERANCE:
        return Undefined(reason=reason, quantity=name)
    return Defined(numerator / denominator)


def combine(name: str, fn: Callable[..., float], *quantities: Quantity) -> Quantity:
    """Apply fn to the values of several quantities; Undefined if any input is."""
    for q in quantities:
        if not q.is_defined:
            return Undefined(reason=q.reason, quantity=name)
    return Defined(fn(*(q.value for q in quantities)))
