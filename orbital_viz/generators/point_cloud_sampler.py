"""
Orbital Point Cloud Generation

Monte-Carlo rejection sampler that turns |ψ|² into a 3D point cloud,
scaled into the viewing sphere and tagged with the sign of ψ at each point.

Sampling discipline: r = R_max * cbrt(u) with a uniform direction gives
candidates uniform in volume, and each is accepted with probability
|ψ|² / max|ψ|². Accepted points are then distributed as |ψ|² dV.
"""

import logging

import numpy as np

from ..quantum.quantum_constants import (
    POSITION_DECIMALS,
    SAMPLING_BATCH_SIZE,
    VIEW_RADIUS,
    get_orbital_name,
)
from ..quantum.hydrogen_wavefunctions import spherical_to_cartesian, wave_function
from ..quantum.orbital_parameters import estimate_sampling_parameters, sampling_attempt_cap

logger = logging.getLogger(__name__)

# ============================================================================
# Point Cloud Container
# ============================================================================

class OrbitalPointCloud:
    """
    Immutable set of sampled points for one orbital.

    Attributes:
        positions (np.ndarray): (count, 3) coordinates inside the view sphere
        signs (np.ndarray): (count,) int8 phase of ψ, +1 or -1
        max_extent (float): Largest accepted radius before scaling
        requested_count (int): Number of points that were asked for
        attempts (int): Candidates drawn while sampling
        bound_violations (int): Candidates whose density exceeded the bound
    """

    def __init__(self, positions, signs, max_extent, requested_count=None,
                 attempts=0, bound_violations=0):
        positions = np.array(positions, dtype=float).reshape(-1, 3)
        signs = np.array(signs, dtype=np.int8).reshape(-1)

        if len(positions) != len(signs):
            raise ValueError(
                f"positions and signs differ in length: {len(positions)} != {len(signs)}"
            )

        positions.setflags(write=False)
        signs.setflags(write=False)

        self._positions = positions
        self._signs = signs
        self._max_extent = float(max_extent)
        self._requested_count = len(signs) if requested_count is None else int(requested_count)
        self._attempts = int(attempts)
        self._bound_violations = int(bound_violations)

    @classmethod
    def empty(cls, requested_count=0):
        """Cloud with no points, used when nothing could be produced."""
        return cls(np.empty((0, 3)), np.empty(0, dtype=np.int8), 0.0,
                   requested_count=requested_count)

    @classmethod
    def from_flat(cls, positions, signs, max_extent=VIEW_RADIUS):
        """Rebuild a cloud from a flat [x0, y0, z0, x1, ...] position list."""
        positions = np.asarray(positions, dtype=float)
        signs = np.asarray(signs)
        if positions.ndim != 1 or positions.size != 3 * signs.size:
            raise ValueError(
                f"expected {3 * signs.size} flat coordinates, got {positions.size}"
            )
        if not np.all(np.isin(signs, (1, -1))):
            raise ValueError("signs must be +1 or -1")
        return cls(positions.reshape(-1, 3), signs, max_extent)

    @property
    def positions(self):
        return self._positions

    @property
    def signs(self):
        return self._signs

    @property
    def count(self):
        return len(self._signs)

    @property
    def max_extent(self):
        return self._max_extent

    @property
    def requested_count(self):
        return self._requested_count

    @property
    def attempts(self):
        return self._attempts

    @property
    def bound_violations(self):
        return self._bound_violations

    @property
    def complete(self):
        """True when every requested point was accepted."""
        return self.count >= self._requested_count

    def flat_positions(self):
        """Positions as a flat list of 3 * count floats."""
        return self._positions.reshape(-1).tolist()

    def __len__(self):
        return self.count

    def __repr__(self):
        return (f"OrbitalPointCloud(count={self.count}, requested={self._requested_count}, "
                f"max_extent={self._max_extent:.3f})")

# ============================================================================
# Rejection Sampling
# ============================================================================

def _draw_candidates(rng, size, max_radius):
    u, v, w = rng.random((3, size))
    r = max_radius * np.cbrt(u)
    theta = np.arccos(2.0 * v - 1.0)
    phi = 2.0 * np.pi * w
    x, y, z = spherical_to_cartesian(r, theta, phi)
    return r, x, y, z

def generate_orbital_points(n, l, m, point_count, rng=None, bound='grid',
                            parameters=None, precision=POSITION_DECIMALS,
                            batch_size=SAMPLING_BATCH_SIZE, max_attempts=None):
    """
    Sample a point cloud distributed according to |ψ_nlm|².

    Results are reproducible only for a seeded rng. When the attempt cap
    is reached first, the points accepted so far are returned and the
    cloud reports complete == False.

    Args:
        n, l, m: Quantum numbers
        point_count: Number of points to accept
        rng: numpy.random.Generator (default: fresh unseeded generator)
        bound: 'grid' to search for the density bound, 'table' for the
            fixed lookup table
        parameters: SamplingParameters overriding the bound estimate
        precision: Decimal places to round scaled coordinates to, None to
            keep full precision
        batch_size: Candidates evaluated per vectorized step
        max_attempts: Candidate cap overriding the one derived from the
            bound's expected acceptance rate

    Returns:
        OrbitalPointCloud
    """
    name = get_orbital_name(n, l, m)

    if point_count <= 0:
        return OrbitalPointCloud.empty()

    if rng is None:
        rng = np.random.default_rng()

    if parameters is None:
        parameters = estimate_sampling_parameters(n, l, m, method=bound)

    max_radius = parameters.max_radius
    max_prob = parameters.max_probability_density
    z_eff = parameters.effective_nuclear_charge

    if max_prob <= 0:
        logger.warning("%s: density bound is %r, nothing to sample", name, max_prob)
        return OrbitalPointCloud.empty(requested_count=point_count)

    if max_attempts is None:
        max_attempts = sampling_attempt_cap(point_count, l, m, parameters, bound)

    accepted_points = []
    accepted_signs = []
    generated = 0
    attempts = 0
    violations = 0
    max_extent = 0.0

    while generated < point_count and attempts < max_attempts:
        size = min(batch_size, max_attempts - attempts)

        r, x, y, z = _draw_candidates(rng, size, max_radius)
        psi = wave_function(n, l, m, x, y, z, z_eff)
        acceptance = psi ** 2 / max_prob
        accept = rng.random(size) < acceptance

        violations += int(np.count_nonzero(acceptance > 1.0))

        index = np.flatnonzero(accept)[:point_count - generated]
        if len(index) and generated + len(index) == point_count:
            attempts += int(index[-1]) + 1
        else:
            attempts += size

        if len(index):
            accepted_points.append(np.column_stack((x[index], y[index], z[index])))
            accepted_signs.append(np.where(psi[index] >= 0, 1, -1).astype(np.int8))
            max_extent = max(max_extent, float(np.max(r[index])))
            generated += len(index)

    if violations:
        logger.warning(
            "%s: %d candidates exceeded the density bound %.3e; "
            "high-density regions are under-sampled",
            name, violations, max_prob,
        )

    if generated < point_count:
        logger.warning(
            "%s: attempt cap %d reached with %d/%d points accepted",
            name, max_attempts, generated, point_count,
        )

    if not accepted_points:
        return OrbitalPointCloud(np.empty((0, 3)), np.empty(0, dtype=np.int8), 0.0,
                                 requested_count=point_count, attempts=attempts,
                                 bound_violations=violations)

    positions = np.concatenate(accepted_points)
    signs = np.concatenate(accepted_signs)

    # Scale into the view sphere
    scale = VIEW_RADIUS / max_extent if max_extent > 0 else 1.0
    positions = positions * scale
    if precision is not None:
        positions = np.round(positions, precision)

    logger.debug("%s: generated %d points in %d attempts", name, generated, attempts)

    return OrbitalPointCloud(positions, signs, max_extent,
                             requested_count=point_count, attempts=attempts,
                             bound_violations=violations)

def generate(orbital, point_count, rng=None, **options):
    """
    Generate the point cloud for an OrbitalDescriptor.

    Args:
        orbital: OrbitalDescriptor to sample
        point_count: Number of points to accept
        rng: numpy.random.Generator
        **options: Passed through to generate_orbital_points

    Returns:
        OrbitalPointCloud
    """
    return generate_orbital_points(orbital.n, orbital.l, orbital.m, point_count,
                                   rng=rng, **options)
