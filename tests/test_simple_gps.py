import numpy as np

from gnss_pvt.sat.simple_gps import SimpleGpsConfig, SimpleGpsConstellation
from gnss_pvt.sat.visibility import visible_sv_states


def test_simple_gps_states_are_finite() -> None:
    constellation = SimpleGpsConstellation(SimpleGpsConfig(num_sats=24, seed=42))
    states = constellation.get_sv_states(0.0)
    assert len(states) == 24
    for sv in states:
        assert np.all(np.isfinite(sv.pos_ecef_m))
        assert np.all(np.isfinite(sv.vel_ecef_mps))
        assert np.isclose(np.linalg.norm(sv.pos_ecef_m), 26_560_000.0)


def test_simple_gps_visibility_mask() -> None:
    receiver_ecef = np.array([6_378_000.0, 0.0, 0.0])
    constellation = SimpleGpsConstellation(SimpleGpsConfig(num_sats=24, seed=7))
    states = constellation.get_sv_states(0.0)
    visible = visible_sv_states(receiver_ecef, states, elevation_mask_deg=10.0)
    assert 0 < len(visible) < len(states)


def test_simple_gps_seed_repeatability() -> None:
    constellation_a = SimpleGpsConstellation(SimpleGpsConfig(num_sats=12, seed=123))
    constellation_b = SimpleGpsConstellation(SimpleGpsConfig(num_sats=12, seed=123))
    pos_a = [sv.pos_ecef_m for sv in constellation_a.get_sv_states(30.0)]
    pos_b = [sv.pos_ecef_m for sv in constellation_b.get_sv_states(30.0)]
    assert np.allclose(pos_a, pos_b)
