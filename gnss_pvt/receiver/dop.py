"""Dilution of precision from the converged normal-matrix inverse."""

from __future__ import annotations

import numpy as np

from gnss_pvt.models import DopMetrics
from gnss_pvt.utils.wgs84 import ecef_to_ned_matrix


def compute_dops(h_matrix: np.ndarray, pos_ecef_m: np.ndarray) -> DopMetrics:
    """Compute PDOP/TDOP/GDOP from the trace of H and HDOP/VDOP by projection.

    Rather than rotating H into NED, the local Down unit vector (in ECEF) is
    projected through H to give VDOP^2; HDOP follows from
    PDOP^2 = HDOP^2 + VDOP^2.
    """

    if h_matrix.shape != (4, 4):
        raise ValueError(f"H must be 4x4, got {h_matrix.shape}.")
    pdop_sq = float(h_matrix[0, 0] + h_matrix[1, 1] + h_matrix[2, 2])
    tdop_sq = float(h_matrix[3, 3])

    down_ecef = np.zeros(4, dtype=float)
    down_ecef[:3] = ecef_to_ned_matrix(pos_ecef_m)[2]
    vdop_sq = float(down_ecef[:3] @ (h_matrix[:3, :] @ down_ecef))
    hdop_sq = pdop_sq - vdop_sq
    if min(tdop_sq, vdop_sq, hdop_sq) < 0.0:
        raise ValueError("H is not positive semi-definite; DOPs are undefined.")

    return DopMetrics(
        pdop=float(np.sqrt(pdop_sq)),
        tdop=float(np.sqrt(tdop_sq)),
        gdop=float(np.sqrt(pdop_sq + tdop_sq)),
        hdop=float(np.sqrt(hdop_sq)),
        vdop=float(np.sqrt(vdop_sq)),
    )
