import numpy as np

from gnss_pvt.utils.angles import elev_az_from_rx_sv
from gnss_pvt.utils.wgs84 import (
    ecef_to_enu_matrix,
    ecef_to_lla,
    ecef_to_ned_matrix,
    lla_to_ecef,
    ned_from_ecef_vector,
)


def test_lla_ecef_roundtrip() -> None:
    lat_deg = 37.4275
    lon_deg = -122.1697
    alt_m = 30.0

    ecef = lla_to_ecef(lat_deg, lon_deg, alt_m)
    lat_rt, lon_rt, alt_rt = ecef_to_lla(*ecef)

    assert np.isclose(lat_rt, lat_deg, atol=1e-6)
    assert np.isclose(lon_rt, lon_deg, atol=1e-6)
    assert np.isclose(alt_rt, alt_m, atol=1e-3)


def test_earth_center_has_implausible_height() -> None:
    _, _, alt = ecef_to_lla(0.0, 0.0, 0.0)

    assert alt < -6_000_000.0


def test_ned_matrix_is_rotation_with_down_towards_center() -> None:
    pos = lla_to_ecef(48.0, 11.0, 500.0)
    rot = ecef_to_ned_matrix(pos)

    assert np.allclose(rot @ rot.T, np.eye(3))
    assert np.isclose(np.linalg.det(rot), 1.0)
    up = ecef_to_enu_matrix(48.0, 11.0)[2]
    assert np.allclose(rot[2], -up)


def test_ned_from_ecef_vector_at_equator() -> None:
    pos = lla_to_ecef(0.0, 0.0, 0.0)

    ned = ned_from_ecef_vector(np.array([0.0, 2.0, 3.0]), pos)

    assert np.allclose(ned, [3.0, 2.0, 0.0])


def test_elevation_overhead() -> None:
    pos_rx = lla_to_ecef(0.0, 0.0, 0.0)
    pos_sv = lla_to_ecef(0.0, 0.0, 20_200_000.0)

    elev_deg, az_deg = elev_az_from_rx_sv(pos_rx, pos_sv)

    assert elev_deg > 89.9
    assert 0.0 <= az_deg <= 360.0
