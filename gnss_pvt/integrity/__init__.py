"""integrity subpackage."""
"""Residual consistency checks and RAIM fault exclusion."""

from gnss_pvt.integrity.raim import (
    LeaveOneOut,
    RaimContractError,
    RaimOutcome,
    RaimStatus,
    raim_repair,
    solve_raim,
)
from gnss_pvt.integrity.residual import residual_norm, residual_p_value, residual_test

__all__ = [
    "LeaveOneOut",
    "RaimContractError",
    "RaimOutcome",
    "RaimStatus",
    "raim_repair",
    "residual_norm",
    "residual_p_value",
    "residual_test",
    "solve_raim",
]
