"""Shared scenario builders.

Satellites are placed at fixed azimuth/elevation around the receiver so the
geometry (and therefore RAIM leverage) is the same on every run.
"""

from __future__ import annotations

from typing import Callable, Mapping, Sequence

import numpy as np
import pytest

from gnss_pvt.meas.synthetic import ReceiverTruth, synthesize_measurements
from gnss_pvt.models import NavigationMeasurement, SvState
from gnss_pvt.utils.gps_time import GpsTime
from gnss_pvt.utils.wgs84 import ecef_to_enu_matrix, ecef_to_lla, lla_to_ecef

RX_LLA = (37.4275, -122.1697, 30.0)
RX_TIME = GpsTime(wn=2200, tow=345_600.0)
SAT_RANGE_M = 21_000_000.0

# (azimuth, elevation) in degrees.
OPEN_SKY = [
    (0.0, 80.0),
    (45.0, 30.0),
    (100.0, 55.0),
    (160.0, 20.0),
    (210.0, 45.0),
    (260.0, 15.0),
    (300.0, 60.0),
    (340.0, 35.0),
]
ZENITH_CLUSTER = [
    (0.0, 88.0),
    (90.0, 86.0),
    (180.0, 89.0),
    (270.0, 87.0),
    (45.0, 85.0),
]


def sky_states(rx_pos: np.ndarray, sky: Sequence[tuple[float, float]]) -> list[SvState]:
    lat_deg, lon_deg, _ = ecef_to_lla(*rx_pos)
    enu_to_ecef = ecef_to_enu_matrix(lat_deg, lon_deg).T
    states: list[SvState] = []
    for idx, (az_deg, el_deg) in enumerate(sky):
        az = np.deg2rad(az_deg)
        el = np.deg2rad(el_deg)
        enu = np.array([np.cos(el) * np.sin(az), np.cos(el) * np.cos(az), np.sin(el)])
        pos = rx_pos + SAT_RANGE_M * (enu_to_ecef @ enu)
        along = np.cross([0.0, 0.0, 1.0], pos / np.linalg.norm(pos))
        vel = 3_000.0 * along / np.linalg.norm(along)
        states.append(SvState(sv_id=f"G{idx + 1:02d}", t=0.0, pos_ecef_m=pos, vel_ecef_mps=vel))
    return states


@pytest.fixture
def truth() -> ReceiverTruth:
    return ReceiverTruth(
        pos_ecef_m=lla_to_ecef(*RX_LLA),
        vel_ecef_mps=np.array([1.5, -0.5, 0.2]),
        clk_bias_s=4.2e-6,
        clk_drift_sps=1e-8,
    )


MeasurementFactory = Callable[..., list[NavigationMeasurement]]


@pytest.fixture
def make_measurements(truth: ReceiverTruth) -> MeasurementFactory:
    def _make(
        n: int | None = None,
        *,
        sky: Sequence[tuple[float, float]] = OPEN_SKY,
        biases_m: Mapping[str, float] | None = None,
        rx_truth: ReceiverTruth | None = None,
    ) -> list[NavigationMeasurement]:
        rx = rx_truth or truth
        states = sky_states(rx.pos_ecef_m, sky)
        if n is not None:
            states = states[:n]
        return synthesize_measurements(rx, states, RX_TIME, biases_m=biases_m)

    return _make


@pytest.fixture
def rx_lla() -> tuple[float, float, float]:
    return RX_LLA


@pytest.fixture
def rx_time() -> GpsTime:
    return RX_TIME


@pytest.fixture
def zenith_cluster() -> list[tuple[float, float]]:
    return list(ZENITH_CLUSTER)
