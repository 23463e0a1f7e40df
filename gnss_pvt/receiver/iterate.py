"""Bounded Newton-Raphson iteration."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np

from gnss_pvt.config import PvtConfig
from gnss_pvt.models import NavigationMeasurement, ReceiverState
from gnss_pvt.receiver.newton import NewtonStep, newton_step
from gnss_pvt.utils.logging import get_logger

_LOG = get_logger(__name__)


@dataclass(frozen=True)
class IterationResult:
    """Outcome of iterating the Newton-Raphson step on one measurement set."""

    converged: bool
    iterations: int
    omp: np.ndarray
    h_matrix: np.ndarray


def iterate_pvt(
    state: ReceiverState,
    measurements: Sequence[NavigationMeasurement],
    config: PvtConfig | None = None,
) -> IterationResult:
    """Iterate ``newton_step`` until it converges or the budget is spent.

    Velocity and drift are cleared first. If the iteration budget runs out, or
    the geometry matrix cannot be inverted, the position is cleared so the
    failed estimate does not seed the next epoch.
    """

    cfg = config or PvtConfig()
    state.reset_velocity()

    step: NewtonStep | None = None
    iterations = 0
    converged = False
    try:
        for iterations in range(1, cfg.max_iterations + 1):
            step = newton_step(state, measurements, tol_m=cfg.convergence_tol_m)
            if step.converged:
                converged = True
                break
    except np.linalg.LinAlgError:
        _LOG.warning("Singular geometry with %d measurements", len(measurements))

    state.last_iterations = iterations
    state.total_iterations += iterations

    if not converged:
        state.reset_position()
        _LOG.debug("No convergence after %d iterations (%d measurements)", iterations, len(measurements))
        n_used = len(measurements)
        return IterationResult(
            converged=False,
            iterations=iterations,
            omp=step.omp if step is not None else np.zeros(n_used),
            h_matrix=step.h_matrix if step is not None else np.full((4, 4), np.nan),
        )

    _LOG.debug("Converged in %d iterations, step %.3e m", iterations, step.step_m)
    return IterationResult(converged=True, iterations=iterations, omp=step.omp, h_matrix=step.h_matrix)
