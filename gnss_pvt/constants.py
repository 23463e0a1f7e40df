"""Physical constants used by the PVT solver."""

from __future__ import annotations

GPS_C = 299_792_458.0
GPS_OMEGAE_DOT = 7.2921151467e-5
GPS_L1_HZ = 1.57542e9
GPS_L1_WAVELENGTH_M = GPS_C / GPS_L1_HZ

MU_EARTH = 3.986004418e14
SECONDS_PER_WEEK = 604_800.0
