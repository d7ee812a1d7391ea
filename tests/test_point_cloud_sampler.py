"""
Tests for the rejection sampler.

Sampling is stochastic, so distribution checks use seeded generators and
Kolmogorov-Smirnov tests instead of exact values.
"""

import logging
from unittest import mock

import numpy as np
import pytest
from scipy import stats

from orbital_viz.quantum.orbital_parameters import SamplingParameters, get_max_radius
from orbital_viz.quantum.valence_orbitals import OrbitalDescriptor
from orbital_viz.generators.orbital_artifacts import ORBITALS
from orbital_viz.generators.point_cloud_sampler import (
    OrbitalPointCloud,
    generate,
    generate_orbital_points,
)

VISUALIZED_ORBITALS = [
    (n, l) for n in range(1, 8) for l in range(0, min(n - 1, 3) + 1)
]


def bohr_radii(cloud):
    """Undo the view-sphere scaling."""
    return np.linalg.norm(cloud.positions, axis=1) * cloud.max_extent / 1.5

# ============================================================================
# Shape and Bounds
# ============================================================================

@pytest.mark.parametrize("n,l", VISUALIZED_ORBITALS)
def test_cloud_is_consistent_and_bounded(n, l, rng):
    cloud = generate_orbital_points(n, l, 0, 40, rng=rng)

    assert cloud.complete
    assert cloud.count == len(cloud.signs) == len(cloud.positions) == 40
    assert cloud.bound_violations == 0
    assert cloud.positions.shape == (cloud.count, 3)
    assert set(np.unique(cloud.signs)) <= {1, -1}
    assert np.all(np.linalg.norm(cloud.positions, axis=1) <= 1.5 + 1e-3)
    assert cloud.max_extent <= get_max_radius(n, l)

def test_consistency_check_covers_batch_orbitals():
    batch = {(orbital['n'], orbital['l']) for orbital in ORBITALS}
    assert batch <= set(VISUALIZED_ORBITALS)

@pytest.mark.parametrize("m", [-3, -2, -1, 1, 2, 3])
def test_off_axis_f_orbitals_stay_within_bound(m, rng):
    cloud = generate_orbital_points(4, 3, m, 300, rng=rng)

    assert cloud.complete
    assert cloud.bound_violations == 0

def test_complete_cloud_fills_view_sphere(rng):
    cloud = generate_orbital_points(2, 1, 0, 500, rng=rng)

    assert cloud.complete
    assert cloud.count == 500
    assert cloud.requested_count == 500
    assert cloud.attempts >= 500
    assert cloud.bound_violations == 0
    assert 0 < cloud.max_extent <= get_max_radius(2)
    # The outermost accepted point lands on the view sphere
    assert np.max(np.linalg.norm(cloud.positions, axis=1)) == pytest.approx(1.5, abs=1e-3)

def test_positions_are_rounded(rng):
    cloud = generate_orbital_points(2, 0, 0, 100, rng=rng)
    np.testing.assert_array_equal(cloud.positions, np.round(cloud.positions, 4))

@pytest.mark.parametrize("point_count", [0, -3])
def test_no_points_requested_skips_sampling(point_count):
    rng = mock.Mock()
    cloud = generate_orbital_points(1, 0, 0, point_count, rng=rng)

    assert cloud.count == 0
    assert cloud.positions.shape == (0, 3)
    rng.random.assert_not_called()

def test_invalid_orbital_yields_empty_cloud(rng):
    cloud = generate_orbital_points(1, 1, 0, 10, rng=rng)
    assert cloud.count == 0
    assert not cloud.complete

# ============================================================================
# Phase
# ============================================================================

def test_2pz_signs_follow_z(rng):
    cloud = generate_orbital_points(2, 1, 0, 300, rng=rng, precision=None)
    z = cloud.positions[:, 2]
    np.testing.assert_array_equal(cloud.signs, np.where(z >= 0, 1, -1))

def test_2px_signs_follow_x(rng):
    cloud = generate_orbital_points(2, 1, 1, 300, rng=rng, precision=None)
    x = cloud.positions[:, 0]
    np.testing.assert_array_equal(cloud.signs, np.where(x >= 0, 1, -1))

def test_1s_phase_is_positive_everywhere(rng):
    cloud = generate_orbital_points(1, 0, 0, 200, rng=rng)
    assert np.all(cloud.signs == 1)

# ============================================================================
# Distribution
# ============================================================================

def test_1s_radii_follow_gamma_distribution(rng):
    """r²|R_10|² = 4r² exp(-2r) is a Gamma(3, 1/2) density."""
    cloud = generate_orbital_points(1, 0, 0, 3000, rng=rng, precision=None)
    result = stats.kstest(bohr_radii(cloud), stats.gamma(a=3, scale=0.5).cdf)
    assert result.pvalue > 1e-3

def test_repeated_generation_is_statistically_similar():
    first = generate_orbital_points(3, 1, 0, 2000, rng=np.random.default_rng(1), precision=None)
    second = generate_orbital_points(3, 1, 0, 2000, rng=np.random.default_rng(2), precision=None)

    assert not np.array_equal(first.positions, second.positions)
    result = stats.ks_2samp(bohr_radii(first), bohr_radii(second))
    assert result.pvalue > 1e-3

def test_seeded_generation_is_reproducible():
    first = generate_orbital_points(2, 1, 0, 100, rng=np.random.default_rng(7))
    second = generate_orbital_points(2, 1, 0, 100, rng=np.random.default_rng(7))
    np.testing.assert_array_equal(first.positions, second.positions)
    np.testing.assert_array_equal(first.signs, second.signs)

def test_table_bound_variant(rng):
    cloud = generate_orbital_points(2, 1, 0, 200, rng=rng, bound='table')
    assert cloud.count == 200
    assert cloud.bound_violations == 0

# ============================================================================
# Degraded Sampling
# ============================================================================

def test_bound_violations_are_reported(rng, caplog):
    params = SamplingParameters(max_radius=3.0, max_probability_density=0.01,
                                effective_nuclear_charge=1.0)
    with caplog.at_level(logging.WARNING):
        cloud = generate_orbital_points(1, 0, 0, 200, rng=rng, parameters=params)

    assert cloud.bound_violations > 0
    assert "exceeded the density bound" in caplog.text

def test_attempt_cap_returns_partial_cloud(rng, caplog):
    params = SamplingParameters(max_radius=8.0, max_probability_density=1e3,
                                effective_nuclear_charge=1.0)
    with caplog.at_level(logging.WARNING):
        cloud = generate_orbital_points(1, 0, 0, 3, rng=rng, parameters=params,
                                        max_attempts=30000)

    assert cloud.count < 3
    assert not cloud.complete
    assert cloud.attempts == 30000
    assert "attempt cap" in caplog.text

# ============================================================================
# Container
# ============================================================================

def test_generate_from_descriptor(rng):
    orbital = OrbitalDescriptor.from_quantum_numbers(3, 2, 0, electrons=6)
    cloud = generate(orbital, 50, rng=rng)
    assert cloud.count == 50

def test_cloud_arrays_are_read_only(rng):
    cloud = generate_orbital_points(1, 0, 0, 10, rng=rng)
    with pytest.raises(ValueError):
        cloud.positions[0, 0] = 9.0
    with pytest.raises(ValueError):
        cloud.signs[0] = -1

def test_from_flat_validates_input():
    cloud = OrbitalPointCloud.from_flat([0.1, 0.2, 0.3, -0.1, 0.0, 1.0], [1, -1])
    assert cloud.count == 2
    assert cloud.max_extent == 1.5
    assert cloud.flat_positions() == [0.1, 0.2, 0.3, -0.1, 0.0, 1.0]

    with pytest.raises(ValueError):
        OrbitalPointCloud.from_flat([0.1, 0.2], [1])
    with pytest.raises(ValueError):
        OrbitalPointCloud.from_flat([0.1, 0.2, 0.3], [0])

def test_mismatched_arrays_rejected():
    with pytest.raises(ValueError):
        OrbitalPointCloud(np.zeros((3, 3)), np.ones(2), 1.0)
