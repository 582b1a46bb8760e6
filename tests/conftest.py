"""Stub collaborators with fixed, randomness-free geometry."""

from __future__ import annotations

import numpy as np
import pytest

from glauber_collider.nucleon import NucleonCommon
from glauber_collider.nucleus import Nucleus


class LineNucleus(Nucleus):
    """Nucleons at fixed x positions on the y = 0 line; records every offset."""

    def __init__(self, xs, radius: float = 0.0):
        self.xs = np.asarray(xs, dtype=float)
        self.offsets = []
        super().__init__(A=len(self.xs), radius=radius)

    def _sample_positions(self, *, rng):
        return np.stack([self.xs, np.zeros_like(self.xs)], axis=1)

    def sample_nucleons(self, offset, *, rng):
        self.offsets.append(offset)
        super().sample_nucleons(offset, rng=rng)


class AlwaysCollide(NucleonCommon):
    def __init__(self, max_impact: float = 1.0):
        self._max_impact = max_impact
        self.calls = 0

    def max_impact(self):
        return self._max_impact

    def participate(self, a, b, *, rng):
        self.calls += 1
        a.set_participant()
        b.set_participant()
        return True


class DistanceModel(NucleonCommon):
    """Collide iff the transverse distance is below ``d``."""

    def __init__(self, d: float = 1.0):
        self.d = d

    def max_impact(self):
        return self.d

    def participate(self, a, b, *, rng):
        hit = np.hypot(a.x - b.x, a.y - b.y) < self.d
        if hit:
            a.set_participant()
            b.set_participant()
        return bool(hit)


@pytest.fixture
def rng():
    return np.random.default_rng(2024)
