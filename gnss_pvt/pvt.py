"""Single-epoch PVT entry point."""

from __future__ import annotations

from dataclasses import replace
from typing import Sequence

import numpy as np

from gnss_pvt.config import PvtConfig
from gnss_pvt.constants import GPS_C
from gnss_pvt.integrity.raim import RaimOutcome, solve_raim
from gnss_pvt.integrity.residual import residual_p_value
from gnss_pvt.models import (
    DopMetrics,
    GnssSolution,
    NavigationMeasurement,
    PvtCode,
    PvtResult,
    ReceiverState,
)
from gnss_pvt.receiver.dop import compute_dops
from gnss_pvt.receiver.validate import filter_solution
from gnss_pvt.utils.gps_time import GpsTime, normalize_gps_time
from gnss_pvt.utils.logging import get_logger
from gnss_pvt.utils.wgs84 import ecef_to_lla, ned_from_ecef_vector

_LOG = get_logger(__name__)


def _failure(code: PvtCode, outcome: RaimOutcome | None = None) -> PvtResult:
    return PvtResult(
        code=code,
        solution=GnssSolution.empty(),
        dops=DopMetrics(),
        residual_m=outcome.residual_m if outcome is not None else None,
        iterations=outcome.iterations if outcome is not None else 0,
    )


def _build_solution(
    state: ReceiverState,
    outcome: RaimOutcome,
    dops: DopMetrics,
    first: NavigationMeasurement,
) -> GnssSolution:
    h_matrix = outcome.h_matrix
    err_cov = np.array(
        [
            h_matrix[0, 0],
            h_matrix[0, 1],
            h_matrix[0, 2],
            h_matrix[1, 1],
            h_matrix[1, 2],
            h_matrix[2, 2],
            dops.gdop,
        ],
        dtype=float,
    )
    pos_ecef = state.pos_ecef_m.copy()
    vel_ecef = state.vel_ecef_mps.copy()
    clock_offset_s = state.clock_m / GPS_C

    # Receive time is transmit time plus time of flight, the pseudorange
    # less the receiver clock offset.
    rx_time = GpsTime(wn=first.tot.wn, tow=first.tot.tow + first.pseudorange_m / GPS_C - clock_offset_s)

    return GnssSolution(
        valid=False,
        n_used=outcome.n_used,
        pos_ecef_m=pos_ecef,
        pos_llh=np.array(ecef_to_lla(*pos_ecef), dtype=float),
        vel_ecef_mps=vel_ecef,
        vel_ned_mps=ned_from_ecef_vector(vel_ecef, pos_ecef),
        clock_offset_s=clock_offset_s,
        clock_drift_s=state.drift_mps / GPS_C,
        err_cov=err_cov,
        time=normalize_gps_time(rx_time),
    )


def calc_pvt(
    measurements: Sequence[NavigationMeasurement],
    state: ReceiverState,
    *,
    disable_raim: bool | None = None,
    config: PvtConfig | None = None,
) -> PvtResult:
    """Compute a single-point PVT fix for one epoch.

    ``state`` is the caller's solver session; its position seeds the
    Newton-Raphson iteration and is updated with the new fix. It is left
    untouched when fewer than four measurements are supplied.

    Returns:
        PvtResult whose ``code`` is non-negative for a usable fix:
          2 converged, RAIM unavailable (4 measurements) or disabled;
          1 RAIM failed and was repaired by excluding ``removed_sv_id``;
          0 converged and verified by RAIM.
        Negative codes index ``PVT_ERR_MSG`` and always carry a zeroed
        solution.

    Raises:
        ValueError: if more measurements are supplied than channels configured.
        RaimContractError: if a proven repair cannot be recomputed.
    """

    cfg = config or PvtConfig()
    if disable_raim is None:
        disable_raim = cfg.disable_raim

    n_used = len(measurements)
    if n_used < 4:
        return _failure(PvtCode.NOT_ENOUGH_MEASUREMENTS)

    outcome = solve_raim(state, measurements, disable_raim=disable_raim, config=cfg)
    if not outcome.ok:
        code = PvtCode(int(outcome.status) - 3)
        _LOG.debug("No fix: %s", code.name)
        return _failure(code, outcome)

    dops = compute_dops(outcome.h_matrix, state.pos_ecef_m)
    solution = _build_solution(state, outcome, dops, measurements[0])

    failure = filter_solution(
        dops.pdop,
        float(solution.pos_llh[2]),
        float(np.linalg.norm(solution.vel_ecef_mps)),
        cfg,
    )
    if failure is not None:
        state.reset_position()
        _LOG.debug("Fix rejected: %s (PDOP %.1f, height %.1f m)", failure.name, dops.pdop, solution.pos_llh[2])
        return _failure(PvtCode(-failure.value), outcome)

    return PvtResult(
        code=PvtCode(int(outcome.status)),
        solution=replace(solution, valid=True),
        dops=dops,
        removed_sv_id=outcome.removed_sv_id,
        residual_m=outcome.residual_m,
        p_value=(
            residual_p_value(outcome.residual_m, outcome.n_used, cfg.pr_sigma_m)
            if outcome.residual_m is not None
            else None
        ),
        iterations=outcome.iterations,
    )
