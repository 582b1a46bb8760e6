"""Event-by-event Monte Carlo sampler for high-energy nuclear collisions.

For a pair of colliding nuclei it samples an area-weighted impact parameter,
places both nucleon clouds about the collision axis, keeps only events with at
least one interacting nucleon pair (minimum bias) and hands the prepared
nuclei to a reduced-thickness event profile.

All distances are in fm, cross sections in fm^2 unless stated otherwise.
"""

from .collider import Collider, CollisionResult, RunConfiguration, TrackingFlags, determine_asymmetry, determine_bmax, make_rng
from .config import ColliderConfig, build_collider
from .event import EventProfile, EventResult
from .nucleon import BlackDiskNucleonCommon, GaussianNucleonCommon, NucleonCommon
from .nucleus import Deuteron, Nucleon, Nucleus, Proton, WoodsSaxonNucleus, create_nucleus
from .output import EventRecord, Output

__version__ = "0.1.0"

__all__ = [
    "BlackDiskNucleonCommon",
    "Collider",
    "ColliderConfig",
    "CollisionResult",
    "Deuteron",
    "EventProfile",
    "EventRecord",
    "EventResult",
    "GaussianNucleonCommon",
    "NucleonCommon",
    "Nucleon",
    "Nucleus",
    "Output",
    "Proton",
    "RunConfiguration",
    "TrackingFlags",
    "WoodsSaxonNucleus",
    "build_collider",
    "create_nucleus",
    "determine_asymmetry",
    "determine_bmax",
    "make_rng",
]
