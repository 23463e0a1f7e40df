"""receiver subpackage."""
"""Newton-Raphson PVT solver pieces and the per-epoch entry point."""

from gnss_pvt.receiver.dop import compute_dops
from gnss_pvt.receiver.geometry import build_geometry, sagnac_corrected_position
from gnss_pvt.receiver.iterate import IterationResult, iterate_pvt
from gnss_pvt.receiver.newton import NewtonStep, newton_step
from gnss_pvt.receiver.validate import ValidationFailure, filter_solution
from gnss_pvt.receiver.velocity import doppler_residuals, solve_velocity

__all__ = [
    "IterationResult",
    "NewtonStep",
    "ValidationFailure",
    "build_geometry",
    "compute_dops",
    "doppler_residuals",
    "filter_solution",
    "iterate_pvt",
    "newton_step",
    "sagnac_corrected_position",
    "solve_velocity",
]
