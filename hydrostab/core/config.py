"""
core/config.py - Runtime configuration

Numerical tolerances and defaults shared by the calculators.
Values come from the environment when created with from_env().
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional
import os
import logging

from hydrostab.core.constants import (
    SPACING_TOLERANCE,
    DRAFT_TOLERANCE_M,
    SEAWATER_DENSITY_KG_M3,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HydrostabConfig:
    """Configuration for hydrostatic and stability calculations."""

    # Integration
    spacing_tolerance: float = SPACING_TOLERANCE  # relative

    # Draft handling
    draft_tolerance_m: float = DRAFT_TOLERANCE_M

    # Defaults used by callers that have no loadcase
    default_rho_kg_m3: float = SEAWATER_DENSITY_KG_M3

    # Logging (CLI only; the library installs no handlers)
    log_level: str = "WARNING"

    def __post_init__(self):
        """Validate configuration."""
        if self.spacing_tolerance < 0:
            raise ValueError(f"spacing_tolerance must be non-negative: {self.spacing_tolerance}")
        if self.draft_tolerance_m < 0:
            raise ValueError(f"draft_tolerance_m must be non-negative: {self.draft_tolerance_m}")
        if self.default_rho_kg_m3 <= 0:
            raise ValueError(f"default_rho_kg_m3 must be positive: {self.default_rho_kg_m3}")

    @classmethod
    def from_env(cls) -> "HydrostabConfig":
        """Create configuration from environment variables."""
        return cls(
            spacing_tolerance=float(os.getenv("HYDROSTAB_SPACING_TOLERANCE", str(SPACING_TOLERANCE))),
            draft_tolerance_m=float(os.getenv("HYDROSTAB_DRAFT_TOLERANCE_M", str(DRAFT_TOLERANCE_M))),
            default_rho_kg_m3=float(os.getenv("HYDROSTAB_DEFAULT_RHO", str(SEAWATER_DENSITY_KG_M3))),
            log_level=os.getenv("HYDROSTAB_LOG_LEVEL", "WARNING").upper(),
        )


# =============================================================================
# DEFAULT INSTANCE
# =============================================================================

_default_config: Optional[HydrostabConfig] = None


def get_config() -> HydrostabConfig:
    """Get the process-wide default configuration (read from env once)."""
    global _default_config
    if _default_config is None:
        _default_config = HydrostabConfig.from_env()
        logger.debug("Loaded configuration: %s", _default_config)
    return _default_config


def set_config(config: Optional[HydrostabConfig]) -> None:
    """Replace the default configuration. None re-reads the environment on next use."""
    global _default_config
    _default_config = config
