"""glauber_collider/config.py

User-facing run configuration and the factory that turns it into a Collider.
"""

from __future__ import annotations

import logging
import numpy as np
from dataclasses import dataclass
from typing import Optional, Tuple

from .collider import Collider, TrackingFlags, make_rng
from .event import EventProfile
from .geometry import species_beta2
from .nucleon import INTERACTION_MODELS, NucleonCommon, create_nucleon_common
from .nucleus import Nucleus, create_nucleus
from .output import Output
from .physics import DEFAULT_CROSS_SECTION_FM2, DEFAULT_SIGMA_NN

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ColliderConfig:
    projectiles: Tuple[str, str] = ("Pb", "Pb")
    nevents: int = 1
    bmin: float = 0.0
    bmax: float = -1.0  # negative: R_A + R_B + max nucleon interaction distance
    random_seed: int = 0  # <= 0: not reproducible
    track_ncoll: bool = False
    track_trials: bool = False

    # nucleon-nucleon interaction
    interaction: str = "gaussian"
    cross_section: Optional[float] = None  # fm^2
    sqrt_s: Optional[float] = None  # GeV, used when cross_section is None
    nucleon_width: float = 0.5

    # nuclear structure
    nucleon_min_dist: float = 0.0
    surface_thickness: float = 0.0  # <= 0: species default
    beta2_mean: Optional[float] = None  # None: species default
    beta2_std: float = 0.0
    gamma_mean: float = 0.0
    gamma_std: float = 0.0
    beta3: float = 0.0
    beta4: Optional[float] = None

    # event profile
    reduced_thickness: float = 0.0
    fluctuation: float = 1.0
    normalization: float = 1.0
    grid_max: float = 10.0
    grid_step: float = 0.2

    def validate(self) -> None:
        if len(self.projectiles) != 2:
            raise ValueError(f"exactly two projectiles required, got {len(self.projectiles)}.")
        if self.nevents < 0:
            raise ValueError(f"number of events must be non-negative, got {self.nevents}.")
        if self.bmin < 0.0:
            raise ValueError(f"bmin must be non-negative, got {self.bmin}.")
        if self.nucleon_width <= 0.0:
            raise ValueError(f"nucleon width must be positive, got {self.nucleon_width}.")
        if self.grid_max <= 0.0 or self.grid_step <= 0.0:
            raise ValueError("grid max and grid step must be positive.")
        if self.interaction not in INTERACTION_MODELS:
            raise ValueError(f"unknown interaction model '{self.interaction}', choose from {INTERACTION_MODELS}.")

    def resolved_cross_section(self) -> float:
        """σ_NN in fm^2 from the explicit value, the beam energy, or the default."""
        if self.cross_section is not None:
            return float(self.cross_section)
        if self.sqrt_s is not None:
            return DEFAULT_SIGMA_NN.sigma_fm2(self.sqrt_s)
        return DEFAULT_CROSS_SECTION_FM2

    def tracking(self) -> TrackingFlags:
        return TrackingFlags(
            track_binary_collisions=self.track_ncoll,
            track_trial_count=self.track_trials,
        )


def _fluctuated(rng: np.random.Generator, mean: Optional[float], std: float) -> Optional[float]:
    if mean is None or std <= 0.0:
        return mean
    return float(rng.normal(mean, std))


def build_nucleus(config: ColliderConfig, species: str, *, rng: np.random.Generator) -> Nucleus:
    # deformation is drawn once per nucleus for the whole run
    beta2_mean = species_beta2(species) if config.beta2_mean is None else config.beta2_mean
    beta2 = _fluctuated(rng, beta2_mean, config.beta2_std)
    gamma = _fluctuated(rng, config.gamma_mean, config.gamma_std)
    logger.debug("nucleus %s: beta2=%s gamma=%s", species, beta2, gamma)
    return create_nucleus(
        species,
        nucleon_dmin=config.nucleon_min_dist,
        surface_thickness=config.surface_thickness,
        beta2=beta2,
        beta3=config.beta3,
        beta4=config.beta4,
        gamma=gamma,
    )


def build_nucleon_common(config: ColliderConfig) -> NucleonCommon:
    return create_nucleon_common(
        config.interaction,
        cross_section=config.resolved_cross_section(),
        nucleon_width=config.nucleon_width,
    )


def build_collider(config: ColliderConfig, *, output: Optional[Output] = None) -> Collider:
    """Validate the configuration and assemble a ready-to-run Collider."""
    config.validate()
    rng = make_rng(config.random_seed)

    nucleus_a = build_nucleus(config, config.projectiles[0], rng=rng)
    nucleus_b = build_nucleus(config, config.projectiles[1], rng=rng)
    event = EventProfile(
        reduced_thickness=config.reduced_thickness,
        fluctuation=config.fluctuation,
        normalization=config.normalization,
        nucleon_width=config.nucleon_width,
        grid_max=config.grid_max,
        grid_step=config.grid_step,
    )
    return Collider(
        nucleus_a,
        nucleus_b,
        build_nucleon_common(config),
        rng=rng,
        bmin=config.bmin,
        bmax=config.bmax,
        nevents=config.nevents,
        tracking=config.tracking(),
        event=event,
        output=output,
    )
