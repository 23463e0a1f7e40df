from __future__ import annotations

import numpy as np

from gnss_pvt.config import PvtConfig
from gnss_pvt.constants import GPS_C
from gnss_pvt.models import ReceiverState
from gnss_pvt.receiver import iterate as iterate_module
from gnss_pvt.receiver.iterate import iterate_pvt


def test_converges_from_earth_center(make_measurements, truth) -> None:
    measurements = make_measurements()
    state = ReceiverState()

    result = iterate_pvt(state, measurements)

    assert result.converged
    assert 1 < result.iterations <= PvtConfig().max_iterations
    assert np.linalg.norm(state.pos_ecef_m - truth.pos_ecef_m) < 1e-3
    assert abs(state.clock_m - GPS_C * truth.clk_bias_s) < 1e-3
    assert state.last_iterations == result.iterations


def test_budget_exhaustion_resets_position(make_measurements) -> None:
    measurements = make_measurements()
    state = ReceiverState()
    state.x[4:8] = 99.0

    result = iterate_pvt(state, measurements, PvtConfig(max_iterations=2))

    assert not result.converged
    assert result.iterations == 2
    assert np.all(state.pos_ecef_m == 0.0)
    assert np.all(state.x[4:8] == 0.0)


def test_warm_start_needs_fewer_iterations(make_measurements) -> None:
    measurements = make_measurements()
    cold = ReceiverState()
    iterate_pvt(cold, measurements)

    warm = ReceiverState.from_position(cold.pos_ecef_m.copy())
    iterate_pvt(warm, measurements)

    assert warm.last_iterations < cold.last_iterations
    assert warm.last_iterations == 1


def test_singular_geometry_is_reported_as_non_convergence(make_measurements, truth, monkeypatch) -> None:
    def _singular(*_args, **_kwargs):
        raise np.linalg.LinAlgError("Singular matrix")

    monkeypatch.setattr(iterate_module, "newton_step", _singular)
    state = ReceiverState.from_position(truth.pos_ecef_m)

    result = iterate_pvt(state, make_measurements())

    assert not result.converged
    assert np.all(state.pos_ecef_m == 0.0)
    assert np.all(np.isnan(result.h_matrix))


def test_total_iterations_accumulate(make_measurements) -> None:
    measurements = make_measurements()
    state = ReceiverState()
    first = iterate_pvt(state, measurements)
    second = iterate_pvt(state, measurements)

    assert state.total_iterations == first.iterations + second.iterations
