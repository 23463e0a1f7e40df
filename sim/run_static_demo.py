"""Run a static-receiver PVT demo with optional fault injection."""

from __future__ import annotations

import argparse
from dataclasses import replace
from pathlib import Path

import numpy as np

from gnss_pvt.config import DemoConfig, PvtConfig
from gnss_pvt.logger import save_results_csv
from gnss_pvt.meas.synthetic import ReceiverTruth, SyntheticMeasurementSource
from gnss_pvt.models import PvtResult, ReceiverState
from gnss_pvt.pvt import calc_pvt
from gnss_pvt.sat.simple_gps import SimpleGpsConfig, SimpleGpsConstellation
from gnss_pvt.utils.gps_time import GpsTime
from gnss_pvt.utils.wgs84 import lla_to_ecef


def build_source(cfg: DemoConfig, pvt_cfg: PvtConfig) -> SyntheticMeasurementSource:
    """Return a measurement source for the configured static receiver."""

    truth = ReceiverTruth(
        pos_ecef_m=lla_to_ecef(cfg.rx_lat_deg, cfg.rx_lon_deg, cfg.rx_alt_m),
        vel_ecef_mps=np.zeros(3),
        clk_bias_s=cfg.rx_clk_bias_s,
        clk_drift_sps=cfg.rx_clk_drift_sps,
    )
    return SyntheticMeasurementSource(
        constellation=SimpleGpsConstellation(SimpleGpsConfig(seed=cfg.rng_seed)),
        receiver_truth=truth,
        start_time=GpsTime(wn=cfg.start_wn, tow=cfg.start_tow_s),
        elevation_mask_deg=cfg.elev_mask_deg,
        max_channels=pvt_cfg.max_channels,
        pr_noise_sigma_m=cfg.pr_noise_sigma_m,
        rng=np.random.default_rng(cfg.rng_seed),
    )


def run_static_demo(
    cfg: DemoConfig,
    pvt_cfg: PvtConfig | None = None,
    out_path: Path | None = None,
    *,
    verbose: bool = False,
) -> list[tuple[float, PvtResult]]:
    """Solve every epoch of the scenario, warm-starting from the previous fix."""

    pvt_cfg = pvt_cfg or PvtConfig()
    source = build_source(cfg, pvt_cfg)
    state = ReceiverState()
    results: list[tuple[float, PvtResult]] = []
    for t in np.arange(0.0, cfg.duration, cfg.dt):
        t = float(t)
        if cfg.fault_sv_id is not None and t >= cfg.fault_start_t:
            source.biases_m = {cfg.fault_sv_id: cfg.fault_bias_m}
        result = calc_pvt(source.get_measurements(t), state, disable_raim=cfg.disable_raim, config=pvt_cfg)
        results.append((t, result))
        if verbose:
            err_m = float(np.linalg.norm(result.solution.pos_ecef_m - source.receiver_truth.pos_ecef_m))
            print(
                f"t={t:6.1f}s code={int(result.code):2d} n={result.solution.n_used:2d} "
                f"iters={result.iterations:3d} err={err_m:10.3f} m "
                f"pdop={result.dops.pdop:6.2f} {result.removed_sv_id or ''} {result.message}"
            )
    if out_path is not None:
        out_path.parent.mkdir(parents=True, exist_ok=True)
        save_results_csv(out_path, results)
    return results


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="gnss-pvt-demo", description="Static receiver PVT/RAIM demo")
    parser.add_argument("--duration-s", type=float, default=DemoConfig.duration, help="Scenario length in seconds")
    parser.add_argument("--dt-s", type=float, default=DemoConfig.dt, help="Epoch spacing in seconds")
    parser.add_argument("--rng-seed", type=int, default=DemoConfig.rng_seed, help="Constellation and noise seed")
    parser.add_argument("--noise-m", type=float, default=DemoConfig.pr_noise_sigma_m, help="Pseudorange noise sigma")
    parser.add_argument("--fault-sv", type=str, default=None, help="Satellite id to corrupt, e.g. G05")
    parser.add_argument("--fault-m", type=float, default=0.0, help="Pseudorange bias applied to --fault-sv")
    parser.add_argument("--fault-start-s", type=float, default=0.0, help="Time the fault starts")
    parser.add_argument("--disable-raim", action="store_true", help="Skip the RAIM check and repair")
    parser.add_argument("--out", type=str, default=None, help="CSV output path")
    parser.add_argument("--quiet", action="store_true", help="Do not print per-epoch lines")
    return parser


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    cfg = replace(
        DemoConfig(),
        duration=args.duration_s,
        dt=args.dt_s,
        rng_seed=args.rng_seed,
        pr_noise_sigma_m=args.noise_m,
        fault_sv_id=args.fault_sv,
        fault_bias_m=args.fault_m,
        fault_start_t=args.fault_start_s,
        disable_raim=args.disable_raim,
    )
    out_path = Path(args.out) if args.out else None
    results = run_static_demo(cfg, out_path=out_path, verbose=not args.quiet)
    n_fix = sum(1 for _, result in results if result.ok)
    print(f"{n_fix}/{len(results)} epochs with a valid fix")
    if out_path is not None:
        print(f"Wrote {out_path}")


if __name__ == "__main__":
    main()
