"""Core data models for the PVT solver."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum

import numpy as np

from gnss_pvt.utils.gps_time import GpsTime


@dataclass(frozen=True)
class NavigationMeasurement:
    """Single-satellite pseudorange/Doppler observation at an epoch."""

    sv_id: str
    pseudorange_m: float
    doppler_hz: float
    sat_pos_ecef_m: np.ndarray
    sat_vel_ecef_mps: np.ndarray
    tot: GpsTime = field(default_factory=GpsTime)


@dataclass(frozen=True)
class SvState:
    """Satellite state at a given epoch."""

    sv_id: str
    t: float
    pos_ecef_m: np.ndarray
    vel_ecef_mps: np.ndarray
    clk_bias_s: float = 0.0
    clk_drift_sps: float = 0.0


@dataclass
class ReceiverState:
    """Solver session state carried from one epoch to the next.

    ``x`` holds position (ECEF, m), clock offset (m), velocity (ECEF, m/s) and
    clock drift (m/s). Only the position is used as a warm start; velocity and
    drift are cleared before every solve attempt.
    """

    x: np.ndarray = field(default_factory=lambda: np.zeros(8, dtype=float))
    last_iterations: int = 0
    total_iterations: int = 0

    def __post_init__(self) -> None:
        self.x = np.asarray(self.x, dtype=float).copy()
        if self.x.shape != (8,):
            raise ValueError(f"Receiver state must have 8 elements, got shape {self.x.shape}.")

    @classmethod
    def from_position(cls, pos_ecef_m: np.ndarray, clock_m: float = 0.0) -> ReceiverState:
        x = np.zeros(8, dtype=float)
        x[:3] = pos_ecef_m
        x[3] = clock_m
        return cls(x=x)

    @property
    def pos_ecef_m(self) -> np.ndarray:
        return self.x[:3]

    @property
    def clock_m(self) -> float:
        return float(self.x[3])

    @property
    def vel_ecef_mps(self) -> np.ndarray:
        return self.x[4:7]

    @property
    def drift_mps(self) -> float:
        return float(self.x[7])

    def reset_position(self) -> None:
        self.x[:3] = 0.0

    def reset_velocity(self) -> None:
        self.x[4:8] = 0.0

    def copy(self) -> ReceiverState:
        return ReceiverState(
            x=self.x.copy(),
            last_iterations=self.last_iterations,
            total_iterations=self.total_iterations,
        )


@dataclass(frozen=True)
class DopMetrics:
    """Dilution of precision metrics."""

    pdop: float = 0.0
    tdop: float = 0.0
    gdop: float = 0.0
    hdop: float = 0.0
    vdop: float = 0.0


def _zeros3() -> np.ndarray:
    return np.zeros(3, dtype=float)


@dataclass(frozen=True)
class GnssSolution:
    """Position/velocity/time solution record for one epoch.

    ``err_cov`` holds the upper triangle of the position block of H
    (xx, xy, xz, yy, yz, zz) followed by GDOP.
    """

    valid: bool = False
    n_used: int = 0
    pos_ecef_m: np.ndarray = field(default_factory=_zeros3)
    pos_llh: np.ndarray = field(default_factory=_zeros3)
    vel_ecef_mps: np.ndarray = field(default_factory=_zeros3)
    vel_ned_mps: np.ndarray = field(default_factory=_zeros3)
    clock_offset_s: float = 0.0
    clock_drift_s: float = 0.0
    err_cov: np.ndarray = field(default_factory=lambda: np.zeros(7, dtype=float))
    time: GpsTime = field(default_factory=GpsTime)

    @classmethod
    def empty(cls) -> GnssSolution:
        return cls()


class PvtCode(IntEnum):
    """Public result codes; non-negative values carry a usable fix."""

    RAIM_UNAVAILABLE = 2
    RAIM_REPAIRED = 1
    OK = 0
    PDOP_TOO_HIGH = -1
    ALTITUDE_UNREASONABLE = -2
    VELOCITY_LIMIT = -3
    RAIM_REPAIR_FAILED = -4
    RAIM_REPAIR_IMPOSSIBLE = -5
    NOT_CONVERGED = -6
    NOT_ENOUGH_MEASUREMENTS = -7


# Indexed by ``-code - 1`` for negative codes.
PVT_ERR_MSG = (
    "PDOP too high",
    "Altitude unreasonable",
    "Velocity >= 1000 kts",
    "RAIM repair attempted, failed",
    "RAIM repair impossible (not enough measurements)",
    "Took too long to converge",
    "Not enough measurements for solution (< 4)",
)


def pvt_err_msg(code: int) -> str:
    """Return the diagnostic string for a negative result code."""

    if code >= 0:
        return ""
    return PVT_ERR_MSG[-int(code) - 1]


@dataclass(frozen=True)
class PvtResult:
    """Outcome of one epoch's solve."""

    code: PvtCode
    solution: GnssSolution
    dops: DopMetrics
    removed_sv_id: str | None = None
    residual_m: float | None = None
    p_value: float | None = None
    iterations: int = 0

    @property
    def ok(self) -> bool:
        return self.code >= 0

    @property
    def message(self) -> str:
        return pvt_err_msg(self.code)
