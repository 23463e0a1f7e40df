"""Frame, time and logging utilities.

NOTE: Keep this package lightweight; nothing here may import the solver.
"""

from gnss_pvt.utils.angles import elev_az_from_rx_sv
from gnss_pvt.utils.gps_time import GpsTime, gps_to_utc_datetime, normalize_gps_time
from gnss_pvt.utils.logging import get_logger
from gnss_pvt.utils.wgs84 import (
    ecef_to_enu_matrix,
    ecef_to_lla,
    ecef_to_ned_matrix,
    enu_from_ecef_delta,
    lla_to_ecef,
    ned_from_ecef_vector,
)

__all__ = [
    "GpsTime",
    "ecef_to_enu_matrix",
    "ecef_to_lla",
    "ecef_to_ned_matrix",
    "elev_az_from_rx_sv",
    "enu_from_ecef_delta",
    "get_logger",
    "gps_to_utc_datetime",
    "lla_to_ecef",
    "ned_from_ecef_vector",
    "normalize_gps_time",
]
