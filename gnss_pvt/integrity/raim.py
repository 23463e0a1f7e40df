"""RAIM fault detection and single-measurement exclusion."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Iterator, Sequence

import numpy as np

from gnss_pvt.config import PvtConfig
from gnss_pvt.integrity.residual import residual_test
from gnss_pvt.models import NavigationMeasurement, ReceiverState
from gnss_pvt.receiver.iterate import IterationResult, iterate_pvt
from gnss_pvt.utils.logging import get_logger

_LOG = get_logger(__name__)


class RaimContractError(RuntimeError):
    """A repair that was already proven possible could not be recomputed."""


class RaimStatus(IntEnum):
    UNCHECKED = 2
    REPAIRED = 1
    PASSED = 0
    REPAIR_FAILED = -1
    REPAIR_IMPOSSIBLE = -2
    NOT_CONVERGED = -3


@dataclass(frozen=True)
class RaimOutcome:
    """Result of the RAIM-protected solve; ``h_matrix`` belongs to the final fix."""

    status: RaimStatus
    n_used: int
    iterations: int
    h_matrix: np.ndarray
    residual_m: float | None = None
    removed_sv_id: str | None = None

    @property
    def ok(self) -> bool:
        return self.status >= 0


class LeaveOneOut(Sequence[NavigationMeasurement]):
    """Read-only view of a measurement set with one index left out."""

    def __init__(self, measurements: Sequence[NavigationMeasurement], excluded: int) -> None:
        if not 0 <= excluded < len(measurements):
            raise IndexError(f"Excluded index {excluded} out of range for {len(measurements)} measurements.")
        self._measurements = measurements
        self.excluded = excluded

    def __len__(self) -> int:
        return len(self._measurements) - 1

    def __getitem__(self, index):
        if isinstance(index, slice):
            return [self[i] for i in range(*index.indices(len(self)))]
        if index < 0:
            index += len(self)
        if not 0 <= index < len(self):
            raise IndexError(index)
        return self._measurements[index if index < self.excluded else index + 1]

    def __iter__(self) -> Iterator[NavigationMeasurement]:
        for i, meas in enumerate(self._measurements):
            if i != self.excluded:
                yield meas

    @property
    def excluded_measurement(self) -> NavigationMeasurement:
        return self._measurements[self.excluded]


def raim_repair(
    state: ReceiverState,
    measurements: Sequence[NavigationMeasurement],
    config: PvtConfig | None = None,
) -> RaimOutcome:
    """Search every single exclusion for the one that restores consistency.

    Repair succeeds only when exactly one exclusion passes the residual test.
    Any subset that fails to converge aborts the search.
    """

    cfg = config or PvtConfig()
    n_used = len(measurements)
    iterations = 0
    passing: list[int] = []
    last: IterationResult | None = None

    for drop in range(n_used - 1, -1, -1):
        subset = LeaveOneOut(measurements, drop)
        last = iterate_pvt(state, subset, cfg)
        iterations += last.iterations
        if not last.converged:
            _LOG.warning("RAIM repair aborted: subset without %s did not converge", subset.excluded_measurement.sv_id)
            return RaimOutcome(
                status=RaimStatus.REPAIR_FAILED,
                n_used=n_used,
                iterations=iterations,
                h_matrix=last.h_matrix,
            )
        passed, norm = residual_test(last.omp, state.clock_m, cfg.residual_threshold_m)
        _LOG.debug("Excluding %s: residual %.1f m", subset.excluded_measurement.sv_id, norm)
        if passed:
            passing.append(drop)

    if len(passing) != 1:
        _LOG.warning("RAIM repair failed: %d single exclusions pass", len(passing))
        return RaimOutcome(
            status=RaimStatus.REPAIR_FAILED,
            n_used=n_used,
            iterations=iterations,
            h_matrix=last.h_matrix if last is not None else np.full((4, 4), np.nan),
        )

    bad = passing[0]
    subset = LeaveOneOut(measurements, bad)
    repaired = iterate_pvt(state, subset, cfg)
    iterations += repaired.iterations
    if not repaired.converged:
        raise RaimContractError(
            f"Subset excluding {subset.excluded_measurement.sv_id} converged during the search but not on recompute."
        )
    _, norm = residual_test(repaired.omp, state.clock_m, cfg.residual_threshold_m)
    removed = subset.excluded_measurement.sv_id
    _LOG.info("RAIM excluded %s, residual %.1f m", removed, norm)
    return RaimOutcome(
        status=RaimStatus.REPAIRED,
        n_used=n_used - 1,
        iterations=iterations,
        h_matrix=repaired.h_matrix,
        residual_m=norm,
        removed_sv_id=removed,
    )


def solve_raim(
    state: ReceiverState,
    measurements: Sequence[NavigationMeasurement],
    disable_raim: bool = False,
    config: PvtConfig | None = None,
) -> RaimOutcome:
    """Solve on the full set, check consistency and attempt repair if needed."""

    cfg = config or PvtConfig()
    n_used = len(measurements)
    if n_used > cfg.max_channels:
        raise ValueError(f"{n_used} measurements exceed the {cfg.max_channels} channel limit.")

    result = iterate_pvt(state, measurements, cfg)
    if not result.converged:
        # Repair is too expensive and non-convergence is not a single-fault signature.
        return RaimOutcome(
            status=RaimStatus.NOT_CONVERGED,
            n_used=n_used,
            iterations=result.iterations,
            h_matrix=result.h_matrix,
        )

    passed, norm = residual_test(result.omp, state.clock_m, cfg.residual_threshold_m)
    if disable_raim or passed:
        status = RaimStatus.UNCHECKED if disable_raim or n_used == 4 else RaimStatus.PASSED
        return RaimOutcome(
            status=status,
            n_used=n_used,
            iterations=result.iterations,
            h_matrix=result.h_matrix,
            residual_m=norm,
        )

    _LOG.debug("Residual test failed: %.1f m >= %.1f m", norm, cfg.residual_threshold_m)
    if n_used < cfg.raim_min_measurements:
        # With one fewer than six measurements the reduced fix has no redundancy left.
        return RaimOutcome(
            status=RaimStatus.REPAIR_IMPOSSIBLE,
            n_used=n_used,
            iterations=result.iterations,
            h_matrix=result.h_matrix,
            residual_m=norm,
        )

    repaired = raim_repair(state, measurements, cfg)
    return RaimOutcome(
        status=repaired.status,
        n_used=repaired.n_used,
        iterations=result.iterations + repaired.iterations,
        h_matrix=repaired.h_matrix,
        residual_m=repaired.residual_m if repaired.residual_m is not None else norm,
        removed_sv_id=repaired.removed_sv_id,
    )
