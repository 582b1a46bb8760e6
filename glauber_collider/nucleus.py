"""glauber_collider/nucleus.py

Nuclei as sampled sets of transverse nucleon positions.

A nucleus owns an (A, 2) position array and an (A,) participant mask. Both are
replaced on every ``sample_nucleons`` call; the previous configuration is gone
after that. The impact-parameter offset is applied along x.
"""

from __future__ import annotations

import logging
import numpy as np
from typing import Iterator, Optional
from scipy.spatial.transform import Rotation

from .geometry import HulthenParams, HulthenSampler, WoodsSaxonParams, deformed_radius, woods_saxon_from_name

logger = logging.getLogger(__name__)

# attempts per nucleon to satisfy the minimum distance before giving up
MAX_PLACEMENT_ATTEMPTS = 1000


class Nucleon:
    """View of one nucleon inside its nucleus' current configuration."""

    def __init__(self, nucleus: "Nucleus", index: int):
        self.nucleus = nucleus
        self.index = index

    @property
    def x(self) -> float:
        return float(self.nucleus.positions[self.index, 0])

    @property
    def y(self) -> float:
        return float(self.nucleus.positions[self.index, 1])

    @property
    def is_participant(self) -> bool:
        return bool(self.nucleus.participant[self.index])

    def set_participant(self) -> None:
        self.nucleus.participant[self.index] = True

    def __repr__(self) -> str:
        return f"Nucleon(x={self.x:.3f}, y={self.y:.3f}, participant={self.is_participant})"


class Nucleus:
    """Base class: subclasses provide ``_sample_positions`` about the origin."""

    def __init__(self, A: int, radius: float):
        self._A = int(A)
        self._radius = float(radius)
        self.positions: Optional[np.ndarray] = None
        self.participant = np.zeros(self._A, dtype=bool)

    def radius(self) -> float:
        return self._radius

    def __len__(self) -> int:
        return self._A

    def _sample_positions(self, *, rng: np.random.Generator) -> np.ndarray:
        raise NotImplementedError

    def sample_nucleons(self, offset: float, *, rng: np.random.Generator) -> None:
        """Replace the nucleon set with a fresh one shifted by ``offset`` along x."""
        xy = np.array(self._sample_positions(rng=rng), dtype=float).reshape(self._A, 2)
        xy[:, 0] += offset
        self.positions = xy
        self.participant = np.zeros(self._A, dtype=bool)

    def __iter__(self) -> Iterator[Nucleon]:
        if self.positions is None:
            raise RuntimeError(f"{type(self).__name__} has no nucleons before sample_nucleons()")
        for i in range(self._A):
            yield Nucleon(self, i)

    @property
    def npart(self) -> int:
        return int(self.participant.sum())


class Proton(Nucleus):
    """Single nucleon sitting exactly at the offset."""

    def __init__(self):
        super().__init__(A=1, radius=0.0)

    def _sample_positions(self, *, rng: np.random.Generator) -> np.ndarray:
        return np.zeros((1, 2))


class Deuteron(Nucleus):
    """Proton and neutron at ±d/2 about the offset, d from the Hulthén wavefunction."""

    def __init__(self, params: HulthenParams = HulthenParams()):
        self.sampler = HulthenSampler(params)
        super().__init__(A=2, radius=self.sampler.radius)

    def _sample_positions(self, *, rng: np.random.Generator) -> np.ndarray:
        dx, dy = self.sampler.sample_transverse_separation(rng=rng)
        return np.array([[0.5 * dx, 0.5 * dy], [-0.5 * dx, -0.5 * dy]])


class WoodsSaxonNucleus(Nucleus):
    """Woods–Saxon nucleus, spherical or deformed, with optional hard core.

    Nucleons are sampled in 3D by rejection inside a sphere of radius
    ``R_max + 10a``. Deformed nuclei get a uniformly random orientation on
    every call. The transverse centre of mass is moved to the origin.
    """

    def __init__(self, params: WoodsSaxonParams, *, dmin: float = 0.0):
        self.p = params
        self.dmin = float(dmin)
        self.rmax = params.surface_max + 10.0 * params.a
        super().__init__(A=params.A, radius=params.surface_max + 3.0 * params.a)

    def _sample_candidates(self, n: int, *, rng: np.random.Generator) -> np.ndarray:
        """Rejection sample n points in the body frame, shape (n, 3)."""
        p = self.p
        batches = []
        count = 0
        while count < n:
            m = max(2 * (n - count), 16)
            r = self.rmax * rng.random(m) ** (1.0 / 3.0)  # uniform in the ball
            cos_th = rng.uniform(-1.0, 1.0, size=m)
            phi = rng.uniform(0.0, 2.0 * np.pi, size=m)
            R = deformed_radius(p, cos_th, phi) if p.deformed else p.R
            keep = rng.random(m) < 1.0 / (1.0 + np.exp((r - R) / p.a))

            r, cos_th, phi = r[keep], cos_th[keep], phi[keep]
            sin_th = np.sqrt(1.0 - cos_th * cos_th)
            batches.append(np.stack([r * sin_th * np.cos(phi), r * sin_th * np.sin(phi), r * cos_th], axis=1))
            count += int(keep.sum())
        return np.concatenate(batches)[:n]

    def _place(self, *, rng: np.random.Generator) -> np.ndarray:
        A = len(self)
        if self.dmin <= 0.0:
            return self._sample_candidates(A, rng=rng)

        dminsq = self.dmin * self.dmin
        xyz = np.empty((A, 3))
        crowded = 0
        for i in range(A):
            for _ in range(MAX_PLACEMENT_ATTEMPTS):
                cand = self._sample_candidates(1, rng=rng)[0]
                if i == 0 or np.min(np.sum((xyz[:i] - cand) ** 2, axis=1)) >= dminsq:
                    break
            else:
                crowded += 1
            xyz[i] = cand
        if crowded:
            logger.warning(
                "%d of %d nucleons placed closer than dmin=%.3f fm after %d attempts each",
                crowded, A, self.dmin, MAX_PLACEMENT_ATTEMPTS,
            )
        return xyz

    def _sample_positions(self, *, rng: np.random.Generator) -> np.ndarray:
        xyz = self._place(rng=rng)
        if self.p.deformed:
            # a normalized Gaussian 4-vector is a uniformly random rotation
            xyz = Rotation.from_quat(rng.normal(size=4)).apply(xyz)
        xy = xyz[:, :2]
        return xy - xy.mean(axis=0)


def create_nucleus(
    species: str,
    *,
    nucleon_dmin: float = 0.0,
    surface_thickness: float = 0.0,
    beta2: Optional[float] = None,
    beta3: float = 0.0,
    beta4: Optional[float] = None,
    gamma: float = 0.0,
) -> Nucleus:
    """Build a nucleus from its name: p, d, Cu, Au, Pb, U."""
    key = species.strip().lower()
    if key == "p":
        return Proton()
    if key == "d":
        return Deuteron()
    params = woods_saxon_from_name(
        key,
        surface_thickness=surface_thickness,
        beta2=beta2,
        beta3=beta3,
        beta4=beta4,
        gamma=gamma,
    )
    return WoodsSaxonNucleus(params, dmin=nucleon_dmin)
