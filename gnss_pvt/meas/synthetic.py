"""Synthetic pseudorange/Doppler measurements for a known receiver state."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping

import numpy as np

from gnss_pvt.constants import GPS_C, GPS_L1_WAVELENGTH_M
from gnss_pvt.models import NavigationMeasurement, SvState
from gnss_pvt.receiver.geometry import sagnac_corrected_position
from gnss_pvt.sat.simple_gps import SimpleGpsConstellation
from gnss_pvt.sat.visibility import visible_sv_states
from gnss_pvt.utils.gps_time import GpsTime


@dataclass(frozen=True)
class ReceiverTruth:
    """Receiver truth state for an epoch."""

    pos_ecef_m: np.ndarray
    vel_ecef_mps: np.ndarray = field(default_factory=lambda: np.zeros(3))
    clk_bias_s: float = 0.0
    clk_drift_sps: float = 0.0


def synthesize_measurements(
    truth: ReceiverTruth,
    sv_states: list[SvState],
    rx_time: GpsTime = GpsTime(),
    *,
    pr_noise_sigma_m: float = 0.0,
    biases_m: Mapping[str, float] | None = None,
    rng: np.random.Generator | None = None,
) -> list[NavigationMeasurement]:
    """Build measurements that match the solver's propagation model exactly.

    Satellite positions are Earth-rotation corrected the same way the solver
    does, so noiseless measurements reproduce ``truth`` to numerical precision.
    ``biases_m`` adds a pseudorange fault per satellite id.
    """

    biases = biases_m or {}
    rng = rng or np.random.default_rng(0)
    measurements: list[NavigationMeasurement] = []
    for state in sv_states:
        sat_pos = sagnac_corrected_position(state.pos_ecef_m, truth.pos_ecef_m)
        los = sat_pos - truth.pos_ecef_m
        rho = float(np.linalg.norm(los))
        los_unit = los / rho
        noise_m = float(rng.normal(0.0, pr_noise_sigma_m)) if pr_noise_sigma_m > 0.0 else 0.0
        pr_m = rho + GPS_C * (truth.clk_bias_s - state.clk_bias_s) + biases.get(state.sv_id, 0.0) + noise_m
        range_rate_mps = float(np.dot(state.vel_ecef_mps - truth.vel_ecef_mps, los_unit)) + GPS_C * (
            truth.clk_drift_sps - state.clk_drift_sps
        )
        measurements.append(
            NavigationMeasurement(
                sv_id=state.sv_id,
                pseudorange_m=pr_m,
                doppler_hz=-range_rate_mps / GPS_L1_WAVELENGTH_M,
                sat_pos_ecef_m=np.array(state.pos_ecef_m, dtype=float),
                sat_vel_ecef_mps=np.array(state.vel_ecef_mps, dtype=float),
                tot=rx_time.add_seconds(-rho / GPS_C),
            )
        )
    return measurements


@dataclass
class SyntheticMeasurementSource:
    """Visible-satellite measurements for a static receiver over time."""

    constellation: SimpleGpsConstellation
    receiver_truth: ReceiverTruth
    start_time: GpsTime = field(default_factory=GpsTime)
    elevation_mask_deg: float = 10.0
    max_channels: int = 12
    pr_noise_sigma_m: float = 0.0
    biases_m: dict[str, float] = field(default_factory=dict)
    rng: np.random.Generator = field(default_factory=np.random.default_rng)

    def get_measurements(self, t: float) -> list[NavigationMeasurement]:
        visible = visible_sv_states(
            self.receiver_truth.pos_ecef_m,
            self.constellation.get_sv_states(t),
            elevation_mask_deg=self.elevation_mask_deg,
        )
        return synthesize_measurements(
            self.receiver_truth,
            visible[: self.max_channels],
            self.start_time.add_seconds(t),
            pr_noise_sigma_m=self.pr_noise_sigma_m,
            biases_m=self.biases_m,
            rng=self.rng,
        )
