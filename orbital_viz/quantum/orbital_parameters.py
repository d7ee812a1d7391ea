"""
Orbital Sampling Parameters

Per-orbital bounds for rejection sampling: how far out to draw candidates
and how large |ψ|² can get inside that sphere.
"""

import logging
from dataclasses import dataclass
from functools import lru_cache

import numpy as np

from .quantum_constants import (
    ACCEPTANCE_CAP_FACTOR,
    ANGULAR_SEARCH_STEPS,
    ATTEMPTS_PER_POINT,
    GRID_SEARCH_DIRECTIONS,
    GRID_SEARCH_STEPS,
    MAX_PROBABILITY_DENSITY,
    SAFETY_MARGIN,
    SHIELDING_FACTOR,
    get_orbital_name,
)
from .hydrogen_wavefunctions import (
    cartesian_to_spherical,
    radial_wavefunction,
    real_spherical_harmonic,
    spherical_to_cartesian,
    verify_angular_normalization,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SamplingParameters:
    max_radius: float
    max_probability_density: float
    effective_nuclear_charge: float

# ============================================================================
# Heuristic Bounds
# ============================================================================

def get_max_radius(n, l=0):
    """
    Get the sampling radius for an orbital.

    Deliberately loose so the sampled sphere always contains the whole
    distribution. Ignores l.
    """
    return n * n * 3 + 5

def get_max_probability_density(n, l, m):
    """
    Get approximate maximum probability density from the fixed table.

    Falls back to 0.01 / n² for orbitals outside the table.
    """
    return MAX_PROBABILITY_DENSITY.get((n, l, m), 0.01 / (n * n))

def effective_nuclear_charge(n):
    """Empirical shielding approximation, the same for every orbital of a shell."""
    return max(1.0, n * SHIELDING_FACTOR)

# ============================================================================
# Grid Search
# ============================================================================

def grid_search_radii(max_radius, search_steps=GRID_SEARCH_STEPS):
    """
    Radii checked by the grid search.

    Linear steps from 0 to max_radius, merged with quadratically spaced
    radii that resolve the narrow inner lobes of high-n orbitals. Always
    contains r = 0, where s orbitals peak.
    """
    fractions = np.linspace(0.0, 1.0, search_steps + 1)
    return np.union1d(fractions * max_radius, fractions ** 2 * max_radius)

def grid_search_directions(angular_steps=ANGULAR_SEARCH_STEPS):
    """
    Unit vectors checked by the grid search.

    The axes and diagonals, followed by a θ×φ lattice with angular_steps
    intervals over θ ∈ [0, π] and 2 * angular_steps over φ ∈ [0, 2π).
    """
    theta = np.linspace(0.0, np.pi, angular_steps + 1)
    phi = np.linspace(0.0, 2.0 * np.pi, 2 * angular_steps, endpoint=False)
    theta, phi = np.meshgrid(theta, phi, indexing='ij')

    lattice = np.column_stack([c.ravel() for c in spherical_to_cartesian(1.0, theta, phi)])
    return np.vstack([GRID_SEARCH_DIRECTIONS, lattice])

def grid_search_max_density(n, l, m, max_radius, z_eff,
                            search_steps=GRID_SEARCH_STEPS,
                            safety_margin=SAFETY_MARGIN,
                            directions=None):
    """
    Bound max |ψ|² over the radial grid crossed with the search directions.

    ψ = R(r) Y(θ, φ) separates, so the maximum over every (radius,
    direction) pair is max R² times max Y², and the two factors are
    searched independently.

    Args:
        n, l, m: Quantum numbers
        max_radius: Outer radius of the sampling sphere
        z_eff: Effective nuclear charge
        search_steps: Number of linear radial steps
        safety_margin: Factor applied to the largest density found
        directions: (k, 3) array of unit vectors to search (default:
            grid_search_directions())

    Returns:
        float: Density bound for rejection sampling
    """
    if directions is None:
        directions = grid_search_directions()
    directions = np.asarray(directions, dtype=float)

    radial = radial_wavefunction(n, l, grid_search_radii(max_radius, search_steps), z_eff)

    _, theta, phi = cartesian_to_spherical(directions[:, 0], directions[:, 1], directions[:, 2])
    angular = real_spherical_harmonic(l, m, theta, phi)

    return float(np.max(radial ** 2) * np.max(angular ** 2)) * safety_margin

@lru_cache(maxsize=None)
def angular_weight(l, m):
    """∫|Y_lm|² dΩ: 1 except for the simplified f harmonics."""
    return verify_angular_normalization(l, m)

def expected_acceptance_rate(l, m, parameters):
    """
    Fraction of uniform candidates the rejection step should accept.

    The sampling sphere holds practically all of |ψ|², so the rate is
    ∫|ψ|² dV / (V * bound) with the radial part normalized to 1.
    """
    volume = 4.0 / 3.0 * np.pi * parameters.max_radius ** 3
    envelope = volume * parameters.max_probability_density
    if envelope <= 0:
        return 0.0
    return min(1.0, angular_weight(l, m) / envelope)

def sampling_attempt_cap(point_count, l, m, parameters, bound='grid'):
    """
    Maximum candidates to draw for point_count points.

    ATTEMPTS_PER_POINT is the floor. Diffuse orbitals in large spheres
    accept far fewer candidates than that allows (about 1 in 150 000 for
    7s), so the cap grows to ACCEPTANCE_CAP_FACTOR times the draws the
    expected acceptance rate needs.
    """
    per_point = ATTEMPTS_PER_POINT.get(bound, ATTEMPTS_PER_POINT['grid'])

    rate = expected_acceptance_rate(l, m, parameters)
    if rate > 0:
        per_point = max(per_point, int(np.ceil(ACCEPTANCE_CAP_FACTOR / rate)))

    return point_count * per_point

def estimate_sampling_parameters(n, l, m, method='grid'):
    """
    Derive sampling parameters for one orbital.

    Args:
        n, l, m: Quantum numbers
        method: 'grid' to search for the density bound, 'table' for the
            fixed lookup table

    Returns:
        SamplingParameters
    """
    z_eff = effective_nuclear_charge(n)
    max_radius = get_max_radius(n, l)

    if method == 'grid':
        max_prob = grid_search_max_density(n, l, m, max_radius, z_eff)
    elif method == 'table':
        max_prob = get_max_probability_density(n, l, m)
    else:
        raise ValueError(f"Unknown bound method: {method}. Use 'grid' or 'table'")

    logger.debug(
        "%s: max_radius=%.1f z_eff=%.2f max_prob=%.3e (%s)",
        get_orbital_name(n, l, m), max_radius, z_eff, max_prob, method,
    )

    return SamplingParameters(
        max_radius=float(max_radius),
        max_probability_density=float(max_prob),
        effective_nuclear_charge=float(z_eff),
    )
