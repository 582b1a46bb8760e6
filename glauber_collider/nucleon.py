"""glauber_collider/nucleon.py

Nucleon–nucleon interaction models.

A model answers two questions for the collision sampler:
- how far apart two nucleons can be and still interact (``max_impact``)
- whether a given pair interacts (``participate``); interacting nucleons are
  marked as participants in their nucleus.

``collide`` evaluates every ordered pair (a ∈ A, b ∈ B) and returns the
(len(A), len(B)) boolean hit matrix. The base version loops over
``participate``; the concrete models below broadcast the same test over the
full distance matrix, drawing randomness in row-major pair order.
"""

from __future__ import annotations

import numpy as np
from scipy.optimize import brentq
from scipy.special import exp1

from .nucleus import Nucleon, Nucleus


class NucleonCommon:
    """Base interaction model."""

    def max_impact(self) -> float:
        raise NotImplementedError

    def participate(self, a: Nucleon, b: Nucleon, *, rng: np.random.Generator) -> bool:
        raise NotImplementedError

    def collide(self, A: Nucleus, B: Nucleus, *, rng: np.random.Generator) -> np.ndarray:
        hits = np.zeros((len(A), len(B)), dtype=bool)
        for i, a in enumerate(A):
            for j, b in enumerate(B):
                hits[i, j] = self.participate(a, b, rng=rng)
        return hits


def _distance_sq(A: Nucleus, B: Nucleus) -> np.ndarray:
    dx = A.positions[:, None, 0] - B.positions[None, :, 0]
    dy = A.positions[:, None, 1] - B.positions[None, :, 1]
    return dx * dx + dy * dy


def _mark(A: Nucleus, B: Nucleus, hits: np.ndarray) -> None:
    A.participant |= hits.any(axis=1)
    B.participant |= hits.any(axis=0)


# -------------------------
# Gaussian nucleons
# -------------------------

# the pair profile is cut at 6 widths: t_max = (6w)^2 / 4w^2
T_MAX = 9.0


def truncated_cross_section(x: float, width: float) -> float:
    r"""Inelastic σ_NN [fm^2] for opacity x, cut at d = 6w.

    σ = ∫_0^{6w} 2π b [1 - exp(-x e^{-b^2/4w^2})] db
      = 4π w^2 [t_max + E1(x) - E1(x e^{-t_max})]
    """
    return float(4.0 * np.pi * width ** 2 * (T_MAX + exp1(x) - exp1(x * np.exp(-T_MAX))))


def solve_opacity(cross_section: float, width: float) -> float:
    """Opacity x such that the truncated Gaussian overlap reproduces σ_NN."""
    ceiling = 4.0 * np.pi * width ** 2 * T_MAX
    if not 0.0 < cross_section < ceiling:
        raise ValueError(
            f"cross section {cross_section} fm^2 not reachable with nucleon width {width} fm "
            f"(must lie in (0, {ceiling:.3f}))."
        )
    return float(brentq(lambda x: truncated_cross_section(x, width) - cross_section, 1e-12, 1e12, xtol=1e-14, rtol=1e-12))


class GaussianNucleonCommon(NucleonCommon):
    r"""Nucleons with Gaussian thickness T(r) = exp(-r^2/2w^2) / 2πw^2.

    Pair probability P(d) = 1 - exp(-x e^{-d^2/4w^2}) for d ≤ 6w, else 0.
    One uniform draw per pair.
    """

    def __init__(self, cross_section: float, nucleon_width: float = 0.5):
        if nucleon_width <= 0.0:
            raise ValueError("nucleon width must be positive.")
        self.cross_section = float(cross_section)
        self.width = float(nucleon_width)
        self.opacity = solve_opacity(self.cross_section, self.width)
        self._max_impact = 6.0 * self.width
        self._max_impact_sq = self._max_impact ** 2
        self._four_w2 = 4.0 * self.width ** 2

    def max_impact(self) -> float:
        return self._max_impact

    def probability(self, dsq: np.ndarray) -> np.ndarray:
        dsq = np.asarray(dsq, dtype=float)
        P = 1.0 - np.exp(-self.opacity * np.exp(-dsq / self._four_w2))
        return np.where(dsq <= self._max_impact_sq, P, 0.0)

    def participate(self, a: Nucleon, b: Nucleon, *, rng: np.random.Generator) -> bool:
        dsq = (a.x - b.x) ** 2 + (a.y - b.y) ** 2
        hit = bool(self.probability(dsq) > rng.random())
        if hit:
            a.set_participant()
            b.set_participant()
        return hit

    def collide(self, A: Nucleus, B: Nucleus, *, rng: np.random.Generator) -> np.ndarray:
        dsq = _distance_sq(A, B)
        hits = self.probability(dsq) > rng.random(dsq.shape)
        _mark(A, B, hits)
        return hits


# -------------------------
# Black disk
# -------------------------

class BlackDiskNucleonCommon(NucleonCommon):
    """Collide iff d^2 < σ_NN/π. Deterministic."""

    def __init__(self, cross_section: float):
        if cross_section <= 0.0:
            raise ValueError("cross section must be positive.")
        self.cross_section = float(cross_section)
        self._d0sq = self.cross_section / np.pi

    def max_impact(self) -> float:
        return float(np.sqrt(self._d0sq))

    def participate(self, a: Nucleon, b: Nucleon, *, rng: np.random.Generator) -> bool:
        hit = (a.x - b.x) ** 2 + (a.y - b.y) ** 2 < self._d0sq
        if hit:
            a.set_participant()
            b.set_participant()
        return hit

    def collide(self, A: Nucleus, B: Nucleus, *, rng: np.random.Generator) -> np.ndarray:
        hits = _distance_sq(A, B) < self._d0sq
        _mark(A, B, hits)
        return hits


INTERACTION_MODELS = ("gaussian", "black-disk")


def create_nucleon_common(kind: str, *, cross_section: float, nucleon_width: float = 0.5) -> NucleonCommon:
    if kind == "gaussian":
        return GaussianNucleonCommon(cross_section, nucleon_width)
    if kind == "black-disk":
        return BlackDiskNucleonCommon(cross_section)
    raise ValueError(f"Unknown interaction model '{kind}'. Choose from {INTERACTION_MODELS}.")
