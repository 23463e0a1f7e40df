from __future__ import annotations

from gnss_pvt.config import PvtConfig
from gnss_pvt.receiver.validate import ValidationFailure, filter_solution


def test_good_fix_is_accepted() -> None:
    assert filter_solution(pdop=1.8, height_m=30.0, speed_mps=5.0) is None


def test_pdop_ceiling() -> None:
    assert filter_solution(pdop=50.0, height_m=0.0, speed_mps=0.0) is None
    assert filter_solution(pdop=50.1, height_m=0.0, speed_mps=0.0) is ValidationFailure.PDOP_TOO_HIGH


def test_pdop_is_checked_before_altitude() -> None:
    assert filter_solution(pdop=80.0, height_m=-6e6, speed_mps=0.0) is ValidationFailure.PDOP_TOO_HIGH


def test_altitude_band() -> None:
    assert filter_solution(pdop=2.0, height_m=-1_001.0, speed_mps=0.0) is ValidationFailure.ALTITUDE_UNREASONABLE
    assert filter_solution(pdop=2.0, height_m=1.1e6, speed_mps=0.0) is ValidationFailure.ALTITUDE_UNREASONABLE
    assert filter_solution(pdop=2.0, height_m=9.9e5, speed_mps=0.0) is None


def test_speed_gate_only_when_configured() -> None:
    assert filter_solution(pdop=2.0, height_m=0.0, speed_mps=10_000.0) is None
    cfg = PvtConfig(max_speed_mps=514.444)
    assert filter_solution(2.0, 0.0, 514.444, cfg) is ValidationFailure.VELOCITY_LIMIT
    assert filter_solution(2.0, 0.0, 100.0, cfg) is None
