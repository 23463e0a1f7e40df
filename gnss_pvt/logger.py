"""CSV logging of per-epoch PVT results."""

from __future__ import annotations

import csv
from pathlib import Path

from gnss_pvt.models import PvtResult

EPOCH_CSV_COLUMNS = [
    "t",
    "code",
    "valid",
    "n_used",
    "removed_sv_id",
    "wn",
    "tow",
    "pos_ecef_x",
    "pos_ecef_y",
    "pos_ecef_z",
    "lat_deg",
    "lon_deg",
    "height_m",
    "vel_ned_n",
    "vel_ned_e",
    "vel_ned_d",
    "clock_offset_s",
    "clock_drift_s",
    "pdop",
    "hdop",
    "vdop",
    "tdop",
    "gdop",
    "residual_m",
    "p_value",
    "iterations",
    "message",
]


def append_result_csv(path: str | Path, t: float, result: PvtResult) -> None:
    """Append a single epoch result to a CSV file, writing the header first if needed."""

    target = Path(path)
    new_file = not target.exists()
    with target.open("a", encoding="utf-8", newline="") as handle:
        writer = csv.writer(handle)
        if new_file:
            writer.writerow(EPOCH_CSV_COLUMNS)
        writer.writerow(_result_to_row(t, result))


def save_results_csv(path: str | Path, results: list[tuple[float, PvtResult]]) -> None:
    """Save all epoch results to a CSV file."""

    with Path(path).open("w", encoding="utf-8", newline="") as handle:
        writer = csv.writer(handle)
        writer.writerow(EPOCH_CSV_COLUMNS)
        for t, result in results:
            writer.writerow(_result_to_row(t, result))


def _result_to_row(t: float, result: PvtResult) -> list[str]:
    soln = result.solution
    dops = result.dops
    return [
        _format_value(t),
        str(int(result.code)),
        _format_value(soln.valid),
        str(soln.n_used),
        result.removed_sv_id or "",
        str(soln.time.wn),
        _format_value(soln.time.tow),
        *(_format_value(v) for v in soln.pos_ecef_m),
        *(_format_value(v) for v in soln.pos_llh),
        *(_format_value(v) for v in soln.vel_ned_mps),
        _format_value(soln.clock_offset_s),
        _format_value(soln.clock_drift_s),
        _format_value(dops.pdop),
        _format_value(dops.hdop),
        _format_value(dops.vdop),
        _format_value(dops.tdop),
        _format_value(dops.gdop),
        _format_value(result.residual_m),
        _format_value(result.p_value),
        str(result.iterations),
        result.message,
    ]


def _format_value(value: float | int | bool | None) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "1" if value else "0"
    return repr(float(value))
