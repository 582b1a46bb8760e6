"""Tests for the nucleon-nucleon interaction models."""

from __future__ import annotations

import numpy as np
import pytest
from scipy.integrate import quad

from glauber_collider.nucleon import (
    BlackDiskNucleonCommon,
    GaussianNucleonCommon,
    NucleonCommon,
    create_nucleon_common,
    solve_opacity,
    truncated_cross_section,
)
from glauber_collider.physics import DEFAULT_SIGMA_NN, mb_to_fm2

from conftest import LineNucleus


@pytest.mark.parametrize("sigma, width", [(4.2, 0.5), (6.4, 0.5), (7.0, 0.8)])
def test_opacity_reproduces_cross_section(sigma, width):
    x = solve_opacity(sigma, width)
    assert truncated_cross_section(x, width) == pytest.approx(sigma, rel=1e-8)


def test_cross_section_matches_direct_integral():
    model = GaussianNucleonCommon(6.4, 0.5)
    integral, _ = quad(lambda b: 2 * np.pi * b * model.probability(b * b), 0.0, model.max_impact())
    assert integral == pytest.approx(6.4, rel=1e-6)


def test_unreachable_cross_section():
    with pytest.raises(ValueError, match="not reachable"):
        GaussianNucleonCommon(100.0, 0.3)


def test_gaussian_probability_is_cut_at_six_widths():
    model = GaussianNucleonCommon(6.4, 0.5)
    assert model.max_impact() == 3.0
    assert model.probability(3.01 ** 2) == 0.0
    assert 0.0 < model.probability(0.0) <= 1.0


def test_gaussian_collide_marks_participants(rng):
    A = LineNucleus([-0.2, 0.1, 10.0])
    B = LineNucleus([0.0, 20.0])
    A.sample_nucleons(0.0, rng=rng)
    B.sample_nucleons(0.0, rng=rng)

    hits = GaussianNucleonCommon(6.4, 0.5).collide(A, B, rng=rng)
    assert hits.shape == (3, 2)
    assert not hits[2].any() and not hits[:, 1].any()
    assert np.array_equal(A.participant, hits.any(axis=1))
    assert np.array_equal(B.participant, hits.any(axis=0))


def test_black_disk_matches_pairwise_loop(rng):
    model = BlackDiskNucleonCommon(mb_to_fm2(42.0))
    A = LineNucleus([-1.5, -0.5, 0.0, 0.8, 2.0])
    B = LineNucleus([-1.0, 0.3, 1.9])
    A.sample_nucleons(0.2, rng=rng)
    B.sample_nucleons(0.0, rng=rng)

    looped = NucleonCommon.collide(model, A, B, rng=rng)
    looped_a, looped_b = A.participant.copy(), B.participant.copy()

    A.sample_nucleons(0.2, rng=rng)
    B.sample_nucleons(0.0, rng=rng)
    assert np.array_equal(model.collide(A, B, rng=rng), looped)
    assert np.array_equal(A.participant, looped_a)
    assert np.array_equal(B.participant, looped_b)


def test_black_disk_radius():
    model = BlackDiskNucleonCommon(np.pi)
    assert model.max_impact() == pytest.approx(1.0)


def test_unknown_interaction_model():
    with pytest.raises(ValueError, match="Unknown interaction model"):
        create_nucleon_common("soft", cross_section=6.4)


def test_sigma_table_interpolates_in_log_s():
    assert DEFAULT_SIGMA_NN.sigma_mb(200.0) == 42.0
    assert 62.0 < DEFAULT_SIGMA_NN.sigma_mb(4000.0) < 67.6
    assert DEFAULT_SIGMA_NN.sigma_fm2(5020.0) == pytest.approx(6.76)
    with pytest.raises(ValueError):
        DEFAULT_SIGMA_NN.sigma_mb(10.0)
