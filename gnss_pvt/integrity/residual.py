"""Post-fit residual consistency test."""

from __future__ import annotations

import numpy as np
from scipy.stats import chi2

from gnss_pvt.config import PvtConfig


def residual_norm(omp: np.ndarray, clock_m: float) -> float:
    """Norm of the innovations once referenced to the solved receiver clock."""

    return float(np.linalg.norm(np.asarray(omp, dtype=float) - clock_m))


def residual_test(
    omp: np.ndarray,
    clock_m: float,
    threshold_m: float = PvtConfig.residual_threshold_m,
) -> tuple[bool, float]:
    """Return (passed, residual norm); passes when the norm is below ``threshold_m``."""

    norm = residual_norm(omp, clock_m)
    return norm < threshold_m, norm


def residual_p_value(norm_m: float, n_used: int, sigma_m: float, num_states: int = 4) -> float | None:
    """Chi-square p-value of the residual norm for a per-measurement sigma.

    Diagnostic only; returns None when the fix has no redundancy.
    """

    dof = n_used - num_states
    if dof <= 0 or not np.isfinite(norm_m):
        return None
    t_stat = (norm_m / max(float(sigma_m), 1e-3)) ** 2
    return float(chi2.sf(t_stat, dof))
