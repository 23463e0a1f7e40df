"""Single-epoch GNSS PVT solver with RAIM fault detection and exclusion."""

from gnss_pvt.config import PvtConfig
from gnss_pvt.models import (
    PVT_ERR_MSG,
    DopMetrics,
    GnssSolution,
    NavigationMeasurement,
    PvtCode,
    PvtResult,
    ReceiverState,
    pvt_err_msg,
)
from gnss_pvt.pvt import calc_pvt

__all__ = [
    "PVT_ERR_MSG",
    "DopMetrics",
    "GnssSolution",
    "NavigationMeasurement",
    "PvtCode",
    "PvtConfig",
    "PvtResult",
    "ReceiverState",
    "calc_pvt",
    "pvt_err_msg",
    "integrity",
    "meas",
    "receiver",
    "sat",
    "utils",
]
