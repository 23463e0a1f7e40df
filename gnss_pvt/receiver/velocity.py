"""One-shot velocity and clock drift solution."""

from __future__ import annotations

from typing import Sequence

import numpy as np

from gnss_pvt.constants import GPS_L1_WAVELENGTH_M
from gnss_pvt.models import NavigationMeasurement


def doppler_residuals(
    geometry: np.ndarray,
    measurements: Sequence[NavigationMeasurement],
    wavelength_m: float = GPS_L1_WAVELENGTH_M,
) -> np.ndarray:
    """Range-rate residuals left after removing the satellite motion.

    The observed range rate is ``-doppler * wavelength``; the predicted part
    comes from the satellite velocity along the line of sight in ``geometry``.
    """

    residuals = np.zeros(len(measurements), dtype=float)
    for j, meas in enumerate(measurements):
        pdot_pred = -float(np.dot(geometry[j, :3], meas.sat_vel_ecef_mps))
        residuals[j] = -meas.doppler_hz * wavelength_m - pdot_pred
    return residuals


def solve_velocity(
    geometry: np.ndarray,
    mapping: np.ndarray,
    measurements: Sequence[NavigationMeasurement],
) -> np.ndarray:
    """Return (vx, vy, vz, drift) in m/s using the converged position matrices.

    ``mapping`` is X = H G^T (4 x n) from the last Newton-Raphson step; the
    same least-squares map is applied to the Doppler residuals in one step.
    """

    if mapping.shape != (4, len(measurements)):
        raise ValueError(f"Mapping matrix shape {mapping.shape} does not match {len(measurements)} measurements.")
    return mapping @ doppler_residuals(geometry, measurements)
