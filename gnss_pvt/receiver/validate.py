"""Plausibility gate applied to a computed fix."""

from __future__ import annotations

from enum import Enum

from gnss_pvt.config import PvtConfig


class ValidationFailure(Enum):
    PDOP_TOO_HIGH = 1
    ALTITUDE_UNREASONABLE = 2
    VELOCITY_LIMIT = 3


def filter_solution(
    pdop: float,
    height_m: float,
    speed_mps: float,
    config: PvtConfig | None = None,
) -> ValidationFailure | None:
    """Return why a fix should be discarded, or None if it is acceptable."""

    cfg = config or PvtConfig()
    if pdop > cfg.pdop_max:
        return ValidationFailure.PDOP_TOO_HIGH
    if height_m < cfg.height_min_m or height_m > cfg.height_max_m:
        return ValidationFailure.ALTITUDE_UNREASONABLE
    if cfg.max_speed_mps is not None and speed_mps >= cfg.max_speed_mps:
        return ValidationFailure.VELOCITY_LIMIT
    return None
