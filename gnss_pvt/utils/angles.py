"""Angle utilities for GNSS geometry."""

from __future__ import annotations

import numpy as np

from gnss_pvt.utils.wgs84 import ecef_to_lla, enu_from_ecef_delta


def elev_az_from_rx_sv(pos_rx: np.ndarray, pos_sv: np.ndarray) -> tuple[float, float]:
    """Compute elevation and azimuth (deg) from receiver to satellite using ENU."""

    lat_deg, lon_deg, _ = ecef_to_lla(*pos_rx)
    east, north, up = enu_from_ecef_delta(pos_sv - pos_rx, lat_deg, lon_deg)
    elev = float(np.rad2deg(np.arctan2(up, np.hypot(east, north))))
    az = float(np.rad2deg(np.arctan2(east, north)))
    if az < 0.0:
        az += 360.0
    return elev, az
