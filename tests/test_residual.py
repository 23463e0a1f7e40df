from __future__ import annotations

import numpy as np

from gnss_pvt.config import PvtConfig
from gnss_pvt.integrity.residual import residual_norm, residual_p_value, residual_test


def test_residual_is_referenced_to_clock() -> None:
    omp = np.array([1_000.0, 1_003.0, 996.0, 1_000.0, 1_004.0])
    passed, norm = residual_test(omp, 1_000.0)

    assert passed
    assert np.isclose(norm, 5.0)
    assert np.isclose(residual_norm(omp, 0.0), np.linalg.norm(omp))


def test_residual_test_does_not_modify_input() -> None:
    omp = np.array([10.0, 20.0, 30.0, 40.0])
    residual_test(omp, 5.0)

    assert np.array_equal(omp, [10.0, 20.0, 30.0, 40.0])


def test_threshold_is_strict() -> None:
    omp = np.array([3_000.0, 0.0, 0.0, 0.0])

    assert residual_test(omp, 0.0, threshold_m=3_000.0)[0] is False
    assert residual_test(omp, 0.0, threshold_m=3_000.1)[0] is True


def test_p_value_requires_redundancy() -> None:
    assert residual_p_value(10.0, 4, sigma_m=5.0) is None
    clean = residual_p_value(5.0, 8, sigma_m=5.0)
    faulty = residual_p_value(500.0, 8, sigma_m=5.0)

    assert clean is not None and clean > 0.9
    assert faulty is not None and faulty < 1e-6


def test_default_threshold_comes_from_config() -> None:
    limit = PvtConfig().residual_threshold_m

    assert residual_test(np.array([limit - 1.0, 0.0, 0.0, 0.0]), 0.0)[0] is True
    assert residual_test(np.array([limit, 0.0, 0.0, 0.0]), 0.0)[0] is False
