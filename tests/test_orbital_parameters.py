"""Tests for the rejection-sampling bounds and attempt caps."""

import numpy as np
import pytest

from orbital_viz.quantum.hydrogen_wavefunctions import (
    probability_density,
    radial_wavefunction,
    real_spherical_harmonic,
)
from orbital_viz.quantum.orbital_parameters import (
    SamplingParameters,
    angular_weight,
    effective_nuclear_charge,
    estimate_sampling_parameters,
    expected_acceptance_rate,
    get_max_probability_density,
    get_max_radius,
    grid_search_directions,
    grid_search_max_density,
    grid_search_radii,
    sampling_attempt_cap,
)

VISUALIZED_ORBITALS = [
    (n, l, m)
    for n in range(1, 8)
    for l in range(0, min(n - 1, 3) + 1)
    for m in range(-l, l + 1)
]


def test_max_radius_ignores_l():
    assert get_max_radius(1, 0) == 8
    assert get_max_radius(3, 0) == 32
    assert get_max_radius(3, 2) == 32
    assert get_max_radius(7, 1) == 152

def test_max_probability_table_and_fallback():
    assert get_max_probability_density(1, 0, 0) == 0.32
    assert get_max_probability_density(2, 1, -1) == 0.02
    assert get_max_probability_density(3, 2, 1) == 0.003
    assert get_max_probability_density(4, 3, 0) == 0.001
    assert get_max_probability_density(5, 0, 0) == pytest.approx(0.01 / 25)
    assert get_max_probability_density(3, 2, -2) == pytest.approx(0.01 / 9)

def test_effective_nuclear_charge():
    assert effective_nuclear_charge(1) == 1.0
    assert effective_nuclear_charge(3) == 1.0
    assert effective_nuclear_charge(4) == pytest.approx(1.2)
    assert effective_nuclear_charge(7) == pytest.approx(2.1)

def test_grid_radii_include_nucleus_and_edge():
    radii = grid_search_radii(50.0)
    assert radii[0] == 0.0
    assert radii[-1] == pytest.approx(50.0)
    assert np.all(np.diff(radii) > 0)
    # Dense near the nucleus for narrow inner lobes
    assert radii[1] < 50.0 / 1000

def test_1s_grid_bound_uses_origin_peak():
    # max |ψ_1s|² = 1/π at r = 0 for Z_eff = 1
    bound = grid_search_max_density(1, 0, 0, get_max_radius(1), 1.0)
    assert bound == pytest.approx(1.2 / np.pi, rel=1e-9)

@pytest.mark.parametrize("n,l,m", VISUALIZED_ORBITALS)
def test_grid_bound_dominates_density(n, l, m, rng):
    """The envelope must exceed |ψ|² everywhere in the sampling sphere."""
    params = estimate_sampling_parameters(n, l, m)
    max_r = params.max_radius
    z_eff = params.effective_nuclear_charge

    # ψ = R Y, so the true maximum is max R² on a fine radial line times
    # max Y² on a fine angular grid
    r = np.linspace(0.0, max_r, 20001)
    theta, phi = np.meshgrid(np.linspace(0.0, np.pi, 361),
                             np.linspace(0.0, 2.0 * np.pi, 721), indexing='ij')
    true_max = (np.max(radial_wavefunction(n, l, r, z_eff) ** 2) *
                np.max(real_spherical_harmonic(l, m, theta, phi) ** 2))

    points = rng.uniform(-1.0, 1.0, size=(20000, 3))
    points = points[np.linalg.norm(points, axis=1) <= 1.0] * max_r
    random_density = probability_density(n, l, m, points[:, 0], points[:, 1], points[:, 2], z_eff)

    assert true_max <= params.max_probability_density
    assert np.max(random_density) <= params.max_probability_density

@pytest.mark.parametrize("m", [-3, 3])
def test_grid_bound_reaches_off_axis_f_lobes(m):
    # sin³θ cosθ cos3φ peaks at θ = 60°, φ = 0, away from every axis and diagonal
    params = estimate_sampling_parameters(4, 3, m)
    z_eff = params.effective_nuclear_charge

    radii = grid_search_radii(params.max_radius)
    lobe = (np.max(radial_wavefunction(4, 3, radii, z_eff) ** 2) *
            real_spherical_harmonic(3, m, np.pi / 3, 0.0) ** 2)

    assert params.max_probability_density == pytest.approx(1.2 * lobe, rel=1e-6)

def test_search_directions_are_unit_vectors():
    directions = grid_search_directions()
    np.testing.assert_allclose(np.linalg.norm(directions, axis=1), 1.0)
    # Axes and diagonals come first, followed by the 61 x 120 lattice
    assert len(directions) == 7 + 61 * 120
    np.testing.assert_array_equal(directions[0], [0.0, 0.0, 1.0])

# ============================================================================
# Attempt Cap
# ============================================================================

def test_attempt_cap_floor_for_compact_orbitals():
    params = estimate_sampling_parameters(2, 1, 0)
    assert sampling_attempt_cap(100, 1, 0, params) == 100 * 10000

    table = estimate_sampling_parameters(2, 1, 0, method='table')
    assert sampling_attempt_cap(100, 1, 0, table, bound='table') >= 100 * 1000

@pytest.mark.parametrize("n,l", [(5, 0), (6, 0), (7, 0), (7, 1)])
def test_attempt_cap_scales_with_acceptance_rate(n, l):
    params = estimate_sampling_parameters(n, l, 0)
    rate = expected_acceptance_rate(l, 0, params)

    assert rate < 1e-4
    assert sampling_attempt_cap(40, l, 0, params) >= 40 * 4 / rate

def test_acceptance_rate_counts_simplified_f_weight():
    params = SamplingParameters(max_radius=10.0, max_probability_density=1e-3,
                                effective_nuclear_charge=1.0)
    volume = 4.0 / 3.0 * np.pi * 1000.0

    assert expected_acceptance_rate(1, 0, params) == pytest.approx(1.0 / (volume * 1e-3), rel=1e-6)
    assert expected_acceptance_rate(3, 1, params) == pytest.approx(7.0 / 60.0 / (volume * 1e-3),
                                                                   rel=1e-6)
    assert angular_weight(3, 3) == pytest.approx(2.0 / 45.0, rel=1e-6)

def test_acceptance_rate_without_envelope_is_zero():
    params = SamplingParameters(max_radius=8.0, max_probability_density=0.0,
                                effective_nuclear_charge=1.0)
    assert expected_acceptance_rate(0, 0, params) == 0.0
    assert sampling_attempt_cap(10, 0, 0, params) == 10 * 10000

def test_table_method_uses_lookup():
    params = estimate_sampling_parameters(2, 1, 0, method='table')
    assert params == SamplingParameters(
        max_radius=17.0,
        max_probability_density=0.02,
        effective_nuclear_charge=1.0,
    )

def test_unknown_method_rejected():
    with pytest.raises(ValueError):
        estimate_sampling_parameters(1, 0, 0, method='exact')

def test_grid_bound_for_invalid_orbital_is_zero():
    assert grid_search_max_density(1, 1, 0, get_max_radius(1), 1.0) == 0.0
