"""glauber_collider/collider.py

Event-by-event collision sampler.

For each event the impact parameter is drawn from P(b) db ∝ 2π b db on
[bmin, bmax], both nuclei are resampled about the collision axis and every
nucleon pair is tested. Trials repeat until at least one pair interacts
(minimum-bias trigger). There is deliberately no cap on the number of trials:
a model that can never interact inside [bmin, bmax] is a configuration error
and spins forever.

Counters:
- ncoll: interacting pairs summed over *all* trials of the event, including
  the rejected ones
- trials: number of b values drawn, including the accepted one

Both are reported as 0 when their tracking is disabled.

The two nuclei are placed asymmetrically, A at +asym·b and B at (asym-1)·b
with asym = R_A / (R_A + R_B), so that their separation is exactly b.
"""

from __future__ import annotations

import logging
import numpy as np
from dataclasses import dataclass
from typing import Optional

from .event import EventProfile
from .nucleon import NucleonCommon
from .nucleus import Nucleus
from .output import Output

logger = logging.getLogger(__name__)

# summed radius below which a system counts as point-like (e.g. p+p)
POINT_LIKE_RADIUS = 0.1


@dataclass(frozen=True)
class TrackingFlags:
    """Optional per-event counters.

    track_binary_collisions: count interacting pairs (ncoll)
    track_trial_count: count impact-parameter draws until acceptance
    """
    track_binary_collisions: bool = False
    track_trial_count: bool = False


@dataclass(frozen=True)
class RunConfiguration:
    """Run-level parameters, fixed at construction."""
    bmin: float
    bmax: float
    asymmetry: float
    nevents: int
    tracking: TrackingFlags = TrackingFlags()

    def __post_init__(self):
        if self.bmin < 0.0:
            raise ValueError(f"bmin must be non-negative, got {self.bmin}.")
        if self.bmax < self.bmin:
            raise ValueError(f"bmax ({self.bmax}) must not be smaller than bmin ({self.bmin}).")
        if self.nevents < 0:
            raise ValueError(f"number of events must be non-negative, got {self.nevents}.")
        if not 0.0 <= self.asymmetry <= 1.0:
            raise ValueError(f"asymmetry must lie in [0, 1], got {self.asymmetry}.")


@dataclass(frozen=True)
class CollisionResult:
    impact_parameter: float
    binary_collisions: int
    trial_count: int


def make_rng(seed: Optional[int] = None) -> np.random.Generator:
    """Seeded generator for seed > 0, otherwise seeded from OS entropy."""
    if seed is not None and seed > 0:
        return np.random.default_rng(int(seed))
    return np.random.default_rng()


def determine_bmax(A: Nucleus, B: Nucleus, nc: NucleonCommon, bmax: float = -1.0) -> float:
    """Configured bmax, or R_A + R_B + d_max when unset (negative)."""
    if bmax < 0.0:
        return A.radius() + B.radius() + nc.max_impact()
    return float(bmax)


def determine_asymmetry(A: Nucleus, B: Nucleus) -> float:
    """R_A / (R_A + R_B), or 1/2 for point-like systems."""
    rA = A.radius()
    rB = B.radius()
    total = rA + rB
    if total < POINT_LIKE_RADIUS:
        return 0.5
    return rA / total


class Collider:
    """Owns both nuclei and the interaction model for the whole run."""

    def __init__(
        self,
        nucleus_a: Nucleus,
        nucleus_b: Nucleus,
        nucleon_common: NucleonCommon,
        *,
        rng: np.random.Generator,
        bmin: float = 0.0,
        bmax: float = -1.0,
        nevents: int = 1,
        tracking: TrackingFlags = TrackingFlags(),
        event: Optional[EventProfile] = None,
        output: Optional[Output] = None,
    ):
        self.nucleus_a = nucleus_a
        self.nucleus_b = nucleus_b
        self.nucleon_common = nucleon_common
        self.rng = rng
        self.run = RunConfiguration(
            bmin=float(bmin),
            bmax=determine_bmax(nucleus_a, nucleus_b, nucleon_common, bmax),
            asymmetry=determine_asymmetry(nucleus_a, nucleus_b),
            nevents=int(nevents),
            tracking=tracking,
        )
        self.event = EventProfile() if event is None else event
        self.output = Output() if output is None else output

        logger.info(
            "collider ready: bmin=%.4f fm, bmax=%.4f fm, asymmetry=%.4f, nevents=%d",
            self.run.bmin, self.run.bmax, self.run.asymmetry, self.run.nevents,
        )

    def sample_impact_parameter(self) -> float:
        """b from P(b) db ∝ b db on [bmin, bmax] (inverse CDF)."""
        bmin2 = self.run.bmin ** 2
        bmax2 = self.run.bmax ** 2
        return float(np.sqrt(bmin2 + (bmax2 - bmin2) * self.rng.random()))

    def sample_collision(self) -> CollisionResult:
        """Sample b until at least one nucleon pair interacts.

        On return both nuclei hold the accepted configuration.
        """
        tracking = self.run.tracking
        asym = self.run.asymmetry
        ncoll = 0
        trials = 0
        collided = False

        while not collided:
            b = self.sample_impact_parameter()
            self.nucleus_a.sample_nucleons(asym * b, rng=self.rng)
            self.nucleus_b.sample_nucleons((asym - 1.0) * b, rng=self.rng)

            # full sweep over all pairs, no early exit
            hits = self.nucleon_common.collide(self.nucleus_a, self.nucleus_b, rng=self.rng)
            nhits = int(np.count_nonzero(hits))
            if tracking.track_binary_collisions:
                ncoll += nhits
            collided = collided or nhits > 0
            if tracking.track_trial_count:
                trials += 1

        return CollisionResult(impact_parameter=b, binary_collisions=ncoll, trial_count=trials)

    def run_events(self) -> None:
        logger.info("running %d events", self.run.nevents)
        for n in range(self.run.nevents):
            # also leaves the nuclei prepared for the event profile
            collision = self.sample_collision()
            logger.debug(
                "event %d: b=%.4f ncoll=%d trials=%d",
                n, collision.impact_parameter, collision.binary_collisions, collision.trial_count,
            )

            result = self.event.compute(self.nucleus_a, self.nucleus_b, self.nucleon_common, rng=self.rng)
            self.output(n, collision.impact_parameter, collision.binary_collisions, collision.trial_count, result)
        logger.info("finished %d events", self.run.nevents)
