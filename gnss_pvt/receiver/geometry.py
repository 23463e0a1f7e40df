"""Geometry matrix and pseudorange innovation builder."""

from __future__ import annotations

from typing import Sequence

import numpy as np

from gnss_pvt.constants import GPS_C, GPS_OMEGAE_DOT
from gnss_pvt.models import NavigationMeasurement


def sagnac_corrected_position(
    sat_pos_ecef_m: np.ndarray,
    rx_pos_ecef_m: np.ndarray,
    omega_e_dot: float = GPS_OMEGAE_DOT,
) -> np.ndarray:
    """Rotate a satellite position back through the Earth's rotation during transit.

    The ECEF frame turns with the Earth, so the satellite appears rotated by
    -omega*tau at reception time. A small-angle rotation about Z is used; the
    error is below a millimetre at GNSS ranges.
    """

    tau = float(np.linalg.norm(rx_pos_ecef_m - sat_pos_ecef_m)) / GPS_C
    we_tau = omega_e_dot * tau
    return np.array(
        [
            sat_pos_ecef_m[0] + we_tau * sat_pos_ecef_m[1],
            sat_pos_ecef_m[1] - we_tau * sat_pos_ecef_m[0],
            sat_pos_ecef_m[2],
        ],
        dtype=float,
    )


def build_geometry(
    rx_pos_ecef_m: np.ndarray,
    measurements: Sequence[NavigationMeasurement],
) -> tuple[np.ndarray, np.ndarray]:
    """Return the geometry matrix G (n x 4) and observed-minus-predicted ranges.

    Row j of G is the unit vector from satellite j towards the receiver with a
    1 in the clock column.
    """

    n_used = len(measurements)
    geometry = np.zeros((n_used, 4), dtype=float)
    omp = np.zeros(n_used, dtype=float)
    rx_pos = np.asarray(rx_pos_ecef_m, dtype=float)
    for j, meas in enumerate(measurements):
        sat_pos = sagnac_corrected_position(np.asarray(meas.sat_pos_ecef_m, dtype=float), rx_pos)
        los = sat_pos - rx_pos
        p_pred = float(np.linalg.norm(los))
        omp[j] = meas.pseudorange_m - p_pred
        geometry[j, :3] = -los / p_pred
        geometry[j, 3] = 1.0
    return geometry, omp
