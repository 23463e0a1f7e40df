"""Configuration objects for the PVT solver and the static demo."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class PvtConfig:
    """Solver limits, convergence and integrity thresholds."""

    max_channels: int = 12
    max_iterations: int = 20
    convergence_tol_m: float = 1e-3
    # Very liberal; normal fixes sit around 20-120 m.
    residual_threshold_m: float = 3000.0
    raim_min_measurements: int = 6
    pdop_max: float = 50.0
    height_min_m: float = -1e3
    height_max_m: float = 1e6
    max_speed_mps: float | None = None
    pr_sigma_m: float = 5.0
    disable_raim: bool = False


@dataclass(frozen=True)
class DemoConfig:
    """Static receiver scenario defaults for the demo runner."""

    rng_seed: int = 42
    dt: float = 1.0
    duration: float = 30.0
    rx_lat_deg: float = 36.597383
    rx_lon_deg: float = -121.874300
    rx_alt_m: float = 14.0
    rx_clk_bias_s: float = 4.2e-6
    rx_clk_drift_sps: float = 0.0
    elev_mask_deg: float = 10.0
    pr_noise_sigma_m: float = 0.0
    start_wn: int = 2200
    start_tow_s: float = 345_600.0
    fault_sv_id: str | None = None
    fault_bias_m: float = 0.0
    fault_start_t: float = 0.0
    disable_raim: bool = False
