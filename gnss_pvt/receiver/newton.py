"""Single Newton-Raphson least-squares step for position and clock."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np

from gnss_pvt.config import PvtConfig
from gnss_pvt.models import NavigationMeasurement, ReceiverState
from gnss_pvt.receiver.geometry import build_geometry
from gnss_pvt.receiver.velocity import solve_velocity


@dataclass(frozen=True)
class NewtonStep:
    """Matrices and step size from one Newton-Raphson update."""

    score: float
    geometry: np.ndarray
    h_matrix: np.ndarray
    mapping: np.ndarray
    omp: np.ndarray

    @property
    def converged(self) -> bool:
        return self.score >= 0.0

    @property
    def step_m(self) -> float:
        return abs(self.score)


def newton_step(
    state: ReceiverState,
    measurements: Sequence[NavigationMeasurement],
    tol_m: float = PvtConfig.convergence_tol_m,
) -> NewtonStep:
    """Apply one least-squares update to ``state`` in place.

    The position is incremented by the correction while the clock offset is
    replaced outright, since the innovations are formed without it and the
    clock column therefore solves for the full offset every step.

    ``score`` is the position step size, negated while the step still exceeds
    ``tol_m``. On convergence the velocity/drift part of the state is solved
    with the same G and X.

    Raises:
        numpy.linalg.LinAlgError: if G^T G is singular (degenerate geometry).
    """

    geometry, omp = build_geometry(state.pos_ecef_m, measurements)
    g_trans = geometry.T
    normal = g_trans @ geometry
    h_matrix = np.linalg.inv(normal)
    mapping = h_matrix @ g_trans
    correction = mapping @ omp

    state.x[:3] += correction[:3]
    state.x[3] = correction[3]

    step_m = float(np.linalg.norm(correction[:3]))
    if step_m > tol_m:
        return NewtonStep(score=-step_m, geometry=geometry, h_matrix=h_matrix, mapping=mapping, omp=omp)

    state.x[4:8] = solve_velocity(geometry, mapping, measurements)
    return NewtonStep(score=step_m, geometry=geometry, h_matrix=h_matrix, mapping=mapping, omp=omp)
