"""Simplified GPS-like constellation used for demos and tests."""

from __future__ import annotations

from dataclasses import dataclass
from math import ceil

import numpy as np

from gnss_pvt.constants import GPS_OMEGAE_DOT, MU_EARTH
from gnss_pvt.models import SvState


@dataclass(frozen=True)
class SimpleGpsConfig:
    """Configuration for the simplified GPS constellation."""

    num_sats: int = 24
    num_planes: int = 6
    radius_m: float = 26_560_000.0
    inclination_deg: float = 55.0
    seed: int | None = 0


def _rot_z(angle_rad: float) -> np.ndarray:
    cos_a = np.cos(angle_rad)
    sin_a = np.sin(angle_rad)
    return np.array(
        [
            [cos_a, -sin_a, 0.0],
            [sin_a, cos_a, 0.0],
            [0.0, 0.0, 1.0],
        ],
        dtype=float,
    )


def _rot_x(angle_rad: float) -> np.ndarray:
    cos_a = np.cos(angle_rad)
    sin_a = np.sin(angle_rad)
    return np.array(
        [
            [1.0, 0.0, 0.0],
            [0.0, cos_a, -sin_a],
            [0.0, sin_a, cos_a],
        ],
        dtype=float,
    )


class SimpleGpsConstellation:
    """Deterministic GPS-like constellation with circular orbits."""

    def __init__(self, config: SimpleGpsConfig | None = None) -> None:
        self.config = config or SimpleGpsConfig()
        rng = np.random.default_rng(self.config.seed)
        self._num_sats = self.config.num_sats
        num_planes = max(1, min(self.config.num_planes, self._num_sats))
        self._radius_m = self.config.radius_m
        self._mean_motion = float(np.sqrt(MU_EARTH / self._radius_m**3))

        plane_raan = np.linspace(0.0, 2.0 * np.pi, num_planes, endpoint=False)
        plane_offsets = rng.uniform(0.0, 2.0 * np.pi, size=num_planes)
        sats_per_plane = ceil(self._num_sats / num_planes)
        inclination = _rot_x(np.deg2rad(self.config.inclination_deg))
        self._rot_plane = [_rot_z(plane_raan[i % num_planes]) @ inclination for i in range(self._num_sats)]
        self._mean_anom = np.array(
            [
                (2.0 * np.pi * (i // num_planes) / sats_per_plane) + plane_offsets[i % num_planes]
                for i in range(self._num_sats)
            ],
            dtype=float,
        )

    def get_sv_states(self, t: float) -> list[SvState]:
        """Return satellite ECEF states at the requested epoch."""

        rot_earth = _rot_z(-GPS_OMEGAE_DOT * t)
        omega = np.array([0.0, 0.0, GPS_OMEGAE_DOT], dtype=float)
        sv_states: list[SvState] = []
        for idx in range(self._num_sats):
            theta = self._mean_motion * t + self._mean_anom[idx]
            r_orb = self._radius_m * np.array([np.cos(theta), np.sin(theta), 0.0], dtype=float)
            v_orb = self._radius_m * self._mean_motion * np.array([-np.sin(theta), np.cos(theta), 0.0], dtype=float)

            r_ecef = rot_earth @ (self._rot_plane[idx] @ r_orb)
            v_ecef = rot_earth @ (self._rot_plane[idx] @ v_orb) - np.cross(omega, r_ecef)
            sv_states.append(
                SvState(
                    sv_id=f"G{idx + 1:02d}",
                    t=t,
                    pos_ecef_m=r_ecef,
                    vel_ecef_mps=v_ecef,
                )
            )
        return sv_states
