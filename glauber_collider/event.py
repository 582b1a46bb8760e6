"""glauber_collider/event.py

Event-level profile of one sampled collision.

For the participant nucleons of A and B we build Gaussian participant
thicknesses on a transverse grid, each nucleon weighted by a Gamma
fluctuation (mean 1), and combine them into the reduced thickness

  T_R = ((T_A^p + T_B^p) / 2)^{1/p},   p = 0 → sqrt(T_A T_B)

which serves as the entropy/energy proxy. Observables: Npart, multiplicity
(∫ T_R d^2x), eccentricities ε_2..ε_5 about the T_R centroid.
"""

from __future__ import annotations

import numpy as np
from dataclasses import dataclass, field
from typing import Dict

from .nucleon import GaussianNucleonCommon, NucleonCommon
from .nucleus import Nucleus

HARMONICS = (2, 3, 4, 5)


@dataclass(frozen=True)
class EventResult:
    npart: int
    multiplicity: float
    eccentricity: Dict[int, float]
    reduced_thickness: np.ndarray = field(repr=False)


def _gamma_weights(rng: np.random.Generator, n: int, k: float) -> np.ndarray:
    # shape=k, scale=1/k -> mean=1
    k = float(k)
    return rng.gamma(shape=k, scale=1.0 / k, size=n)


def reduced_thickness(TA: np.ndarray, TB: np.ndarray, p: float) -> np.ndarray:
    """Generalized mean of two thickness grids."""
    if p == 0.0:
        return np.sqrt(TA * TB)
    with np.errstate(divide="ignore", invalid="ignore"):
        TR = (0.5 * (TA ** p + TB ** p)) ** (1.0 / p)
    if p < 0.0:
        TR = np.where((TA > 0.0) & (TB > 0.0), TR, 0.0)
    return TR


def eccentricities(T: np.ndarray, X: np.ndarray, Y: np.ndarray) -> Dict[int, float]:
    """ε_n = |Σ r^n e^{inφ} T| / Σ r^n T about the centroid of T."""
    total = float(T.sum())
    if total <= 0.0:
        return {n: 0.0 for n in HARMONICS}

    xc = float((X * T).sum()) / total
    yc = float((Y * T).sum()) / total
    z = (X - xc) + 1j * (Y - yc)
    r = np.abs(z)
    phi = np.angle(z)

    out = {}
    for n in HARMONICS:
        rn = r ** n
        den = float((rn * T).sum())
        out[n] = float(np.abs((rn * np.exp(1j * n * phi) * T).sum()) / den) if den > 0.0 else 0.0
    return out


class EventProfile:
    """Computes the reduced-thickness grid and event observables."""

    def __init__(
        self,
        *,
        reduced_thickness: float = 0.0,
        fluctuation: float = 1.0,
        normalization: float = 1.0,
        nucleon_width: float = 0.5,
        grid_max: float = 10.0,
        grid_step: float = 0.2,
    ):
        if grid_max <= 0.0 or grid_step <= 0.0:
            raise ValueError("grid_max and grid_step must be positive.")
        self.p = float(reduced_thickness)
        self.k = float(fluctuation)
        self.norm = float(normalization)
        self.default_width = float(nucleon_width)
        self.grid_max = float(grid_max)
        self.grid_step = float(grid_step)

        n = int(np.ceil(2.0 * self.grid_max / self.grid_step - 1e-9))
        x = -self.grid_max + (np.arange(n) + 0.5) * self.grid_step
        self.X, self.Y = np.meshgrid(x, x, indexing="xy")

    def _width(self, nucleon_common: NucleonCommon) -> float:
        if isinstance(nucleon_common, GaussianNucleonCommon):
            return nucleon_common.width
        return self.default_width

    def thickness(self, nucleus: Nucleus, width: float, *, rng: np.random.Generator) -> np.ndarray:
        """Participant thickness of one nucleus on the grid [fm^-2]."""
        xy = nucleus.positions[nucleus.participant]
        w = _gamma_weights(rng, len(xy), self.k) if self.k > 0.0 else np.ones(len(xy))

        two_w2 = 2.0 * width * width
        T = np.zeros_like(self.X)
        for (x0, y0), wi in zip(xy, w):
            T += wi * np.exp(-((self.X - x0) ** 2 + (self.Y - y0) ** 2) / two_w2)
        return self.norm * T / (np.pi * two_w2)

    def compute(self, A: Nucleus, B: Nucleus, nucleon_common: NucleonCommon, *, rng: np.random.Generator) -> EventResult:
        width = self._width(nucleon_common)
        TA = self.thickness(A, width, rng=rng)
        TB = self.thickness(B, width, rng=rng)
        TR = reduced_thickness(TA, TB, self.p)

        return EventResult(
            npart=A.npart + B.npart,
            multiplicity=float(TR.sum()) * self.grid_step ** 2,
            eccentricity=eccentricities(TR, self.X, self.Y),
            reduced_thickness=TR,
        )
