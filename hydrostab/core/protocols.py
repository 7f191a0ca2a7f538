"""
hydrostab/core/protocols.py - Protocol Definitions

Capability interfaces at the calculator seams, so the stability layer
can be tested against stub integrators or hydrostatics providers.
Each protocol has a single production implementation.
"""

from typing import Protocol, Optional, Sequence, TYPE_CHECKING

if TYPE_CHECKING:
    from hydrostab.geometry.model import HullGeometry, Loadcase
    from hydrostab.physics.hydrostatics import HydrostaticsResults
    from hydrostab.core.cancellation import CancellationToken

__all__ = [
    'IntegratorProtocol',
    'HydrostaticsProviderProtocol',
]


class IntegratorProtocol(Protocol):
    """
    Protocol for 1-D quadrature over sampled functions.

    Implemented by hydrostab.physics.integration.IntegrationEngine.
    """

    def integrate(self, x: Sequence[float], y: Sequence[float]) -> float:
        """
        Definite integral of y over x.

        Args:
            x: Strictly increasing abscissae
            y: Samples at x

        Returns:
            Integral value
        """
        ...


class HydrostaticsProviderProtocol(Protocol):
    """
    Protocol for single-draft hydrostatics.

    Implemented by hydrostab.physics.hydrostatics.HydrostaticsCalculator.
    """

    def compute_at_draft(
        self,
        geometry: 'HullGeometry',
        loadcase: Optional['Loadcase'] = None,
        draft: float = 0.0,
        heel_angle_deg: float = 0.0,
        cancellation: Optional['CancellationToken'] = None,
    ) -> 'HydrostaticsResults':
        """Hydrostatic properties at one draft."""
        ...
