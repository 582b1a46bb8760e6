"""glauber_collider/geometry.py

Geometry primitives used to sample nucleon positions:
- Woods–Saxon parameters and the empirical half-density radius
- species table (p, d, Cu, Au, Pb, U)
- deformed nuclear surface R(θ,φ) with β2 (triaxial γ), β3, β4
- deuteron pn separation via the Hulthén wavefunction

All distances are in fm.
"""

from __future__ import annotations

import numpy as np
from dataclasses import dataclass
from typing import Optional


# -------------------------
# Woods–Saxon nucleus
# -------------------------

@dataclass(frozen=True)
class WoodsSaxonParams:
    """Woods–Saxon parameters, optionally deformed.

    rho(r,θ,φ) ∝ 1 / (1 + exp((r - R(θ,φ))/a))

    Typical:
      R ~ 1.12 A^{1/3} - 0.86 A^{-1/3}
      a ~ 0.535 (Au) or 0.549 (Pb) fm
    """
    A: int
    R: float
    a: float
    beta2: float = 0.0
    beta3: float = 0.0
    beta4: float = 0.0
    gamma: float = 0.0  # triaxiality angle (rad)

    @property
    def deformed(self) -> bool:
        return bool(self.beta2 or self.beta3 or self.beta4)

    @property
    def surface_max(self) -> float:
        """Upper bound of the half-density radius over all directions."""
        return self.R * (1.0 + abs(self.beta2) + abs(self.beta3) + abs(self.beta4))


def default_radius(A: int) -> float:
    """Empirical half-density radius."""
    A = float(A)
    return 1.12 * A ** (1.0 / 3.0) - 0.86 * A ** (-1.0 / 3.0)


@dataclass(frozen=True)
class Species:
    A: int
    a: float
    beta2: float = 0.0
    beta4: float = 0.0


# Surface thickness from the usual heavy-ion initial-condition fits;
# U is the only entry deformed by default.
SPECIES = {
    "cu": Species(A=63, a=0.596),
    "au": Species(A=197, a=0.535),
    "pb": Species(A=208, a=0.549),
    "u": Species(A=238, a=0.6, beta2=0.28, beta4=0.093),
}


def species_beta2(name: str) -> Optional[float]:
    """Tabulated β2 of a Woods–Saxon species, None for p, d and unknown names."""
    sp = SPECIES.get(name.strip().lower())
    return None if sp is None else sp.beta2


def woods_saxon_from_name(
    name: str,
    *,
    surface_thickness: float = 0.0,
    beta2: Optional[float] = None,
    beta3: float = 0.0,
    beta4: Optional[float] = None,
    gamma: float = 0.0,
) -> WoodsSaxonParams:
    """Woods–Saxon parameters for a named nucleus.

    ``surface_thickness > 0`` overrides the tabulated diffuseness;
    ``beta2``/``beta4`` left as None keep the species default.
    """
    key = name.strip().lower()
    if key not in SPECIES:
        raise ValueError(f"Unknown nucleus '{name}'. Add it to SPECIES.")
    sp = SPECIES[key]
    return WoodsSaxonParams(
        A=sp.A,
        R=default_radius(sp.A),
        a=float(surface_thickness) if surface_thickness > 0.0 else sp.a,
        beta2=sp.beta2 if beta2 is None else float(beta2),
        beta3=float(beta3),
        beta4=sp.beta4 if beta4 is None else float(beta4),
        gamma=float(gamma),
    )


def deformed_radius(params: WoodsSaxonParams, cos_th: np.ndarray, phi: np.ndarray) -> np.ndarray:
    """Half-density radius R(θ,φ) in the body frame."""
    c = np.asarray(cos_th, dtype=float)
    c2 = c * c
    s2 = 1.0 - c2

    Y20 = np.sqrt(5.0 / (16.0 * np.pi)) * (3.0 * c2 - 1.0)
    # sqrt(2) * Re Y22
    Y22 = np.sqrt(15.0 / (16.0 * np.pi)) * s2 * np.cos(2.0 * np.asarray(phi, dtype=float))
    Y30 = 0.25 * np.sqrt(7.0 / np.pi) * (5.0 * c2 * c - 3.0 * c)
    Y40 = (3.0 / 16.0) * np.sqrt(1.0 / np.pi) * (35.0 * c2 * c2 - 30.0 * c2 + 3.0)

    p = params
    shape = (
        p.beta2 * (np.cos(p.gamma) * Y20 + np.sin(p.gamma) * Y22)
        + p.beta3 * Y30
        + p.beta4 * Y40
    )
    return p.R * (1.0 + shape)


# -------------------------
# Deuteron: Hulthén sampling
# -------------------------

@dataclass(frozen=True)
class HulthenParams:
    """Hulthén parameters (fm^-1)."""
    a: float = 0.228
    b: float = 1.18


class HulthenSampler:
    """Sample the pn separation in a deuteron with a random 3D orientation.

    We use the Hulthén wavefunction ψ(r) ∝ (e^{-ar} - e^{-br})/r.
    The radial probability density for r is ∝ (e^{-ar} - e^{-br})^2.
    """

    def __init__(self, params: HulthenParams = HulthenParams(), *, rmax: float = 30.0, Nr: int = 20000):
        self.p = params
        r = np.linspace(1e-5, rmax, Nr)
        u = (np.exp(-self.p.a * r) - np.exp(-self.p.b * r))
        P = u * u  # radial PDF up to normalization
        cdf = np.cumsum(P) * (r[1] - r[0])
        cdf /= cdf[-1]
        self._r = r
        self._cdf = cdf

    @property
    def radius(self) -> float:
        """Transverse scale at which the pn density has fallen to 1%."""
        return float(-np.log(0.01) / (2.0 * self.p.a))

    def sample_transverse_separation(self, *, rng: np.random.Generator) -> tuple[float, float]:
        """Return one transverse pn separation (dx, dy)."""
        r = float(np.interp(rng.random(), self._cdf, self._r))

        cos_th = rng.uniform(-1.0, 1.0)
        phi = rng.uniform(0.0, 2.0 * np.pi)
        rT = r * np.sqrt(1.0 - cos_th * cos_th)
        return float(rT * np.cos(phi)), float(rT * np.sin(phi))
