"""
HYDROSTAB Core Module

Contains the foundation layer:
- Physical constants and numerical defaults
- Runtime configuration
- Defined/Undefined quantity type
- Cooperative cancellation
- Capability protocols
"""

from hydrostab.core.config import HydrostabConfig, get_config, set_config
from hydrostab.core.quantity import Defined, Undefined, Quantity, ratio, combine
from hydrostab.core.cancellation import CancellationToken, check_cancelled
from hydrostab.core.protocols import IntegratorProtocol, HydrostaticsProviderProtocol

__all__ = [
    "HydrostabConfig",
    "get_config",
    "set_config",
    "Defined",
    "Undefined",
    "Quantity",
    "ratio",
    "combine",
    "CancellationToken",
    "check_cancelled",
    "IntegratorProtocol",
    "HydrostaticsProviderProtocol",
]
