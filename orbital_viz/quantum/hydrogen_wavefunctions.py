"""
Hydrogen-like Wave Function Calculations

Implements radial wave functions, real spherical harmonics, and complete
single-electron orbital wave functions with an effective nuclear charge.
Atomic units throughout (Bohr radius a₀ = 1).

Every function accepts scalars or numpy arrays. Scalar inputs return a
Python float, array inputs return an array of the broadcast shape.
"""

import numpy as np
from scipy import integrate

from .quantum_constants import ORIGIN_EPSILON, Y00


def _as_output(value):
    """Unwrap 0-d arrays so scalar callers get a float back."""
    value = np.asarray(value, dtype=float)
    if value.ndim == 0:
        return float(value)
    return value

# ============================================================================
# Factorials
# ============================================================================

class FactorialTable:
    """
    Memoized factorials, grown lazily as larger arguments are requested.

    Negative arguments return 1. Callers must not read meaning into that,
    it only keeps (n-l-1)! finite when quantum numbers are misused.
    """

    def __init__(self):
        self._table = [1, 1]

    def __len__(self):
        return len(self._table)

    def __call__(self, n):
        if n < 0:
            return 1
        if n < len(self._table):
            return self._table[n]

        result = self._table[-1]
        for i in range(len(self._table), n + 1):
            result *= i
            self._table.append(result)

        return result


_FACTORIALS = FactorialTable()


def factorial(n):
    """Factorial n! from the module's memo table (1 for n < 0)."""
    return _FACTORIALS(n)

# ============================================================================
# Radial Wave Functions
# ============================================================================

def associated_laguerre(n, k, x):
    """
    Calculate associated Laguerre polynomial L_n^k(x).

    Uses the three-term recurrence
        L_0 = 1, L_1 = 1 + k - x,
        L_i = ((2i - 1 + k - x) L_{i-1} - (i - 1 + k) L_{i-2}) / i

    Args:
        n: Degree of polynomial
        k: Generalized parameter
        x: Evaluation point(s)

    Returns:
        Value(s) of L_n^k(x)
    """
    x = np.asarray(x, dtype=float)

    if n <= 0:
        return _as_output(np.ones_like(x))

    l0 = np.ones_like(x)
    l1 = 1.0 + k - x

    for i in range(2, n + 1):
        l0, l1 = l1, ((2 * i - 1 + k - x) * l1 - (i - 1 + k) * l0) / i

    return _as_output(l1)

def radial_wavefunction(n, l, r, z_eff=1.0):
    """
    Calculate radial part of a hydrogen-like wave function R_nl(r).

    R_nl(r) = N * exp(-ρ/2) * ρ^l * L_{n-l-1}^{2l+1}(ρ),  ρ = 2 Z_eff r / n
    N = sqrt((2 Z_eff / n)³ * (n-l-1)! / (2n (n+l)!))

    Args:
        n: Principal quantum number (1, 2, 3, ...)
        l: Azimuthal quantum number (0 to n-1)
        r: Radial distance (in Bohr radii, can be array)
        z_eff: Effective nuclear charge

    Returns:
        R_nl(r): Radial wave function value(s), 0 when l >= n
    """
    r = np.asarray(r, dtype=float)

    if n < 1 or l < 0 or l >= n:
        return _as_output(np.zeros_like(r))

    rho = 2.0 * z_eff * r / n

    norm_factor = np.sqrt(
        (2.0 * z_eff / n) ** 3 *
        factorial(n - l - 1) / (2.0 * n * factorial(n + l))
    )

    exp_term = np.exp(-rho / 2.0)
    power_term = rho ** l
    laguerre_term = associated_laguerre(n - l - 1, 2 * l + 1, rho)

    return _as_output(norm_factor * exp_term * power_term * laguerre_term)

def radial_probability(n, l, r, z_eff=1.0):
    """Radial probability density r² |R_nl(r)|²."""
    r = np.asarray(r, dtype=float)
    return _as_output(r ** 2 * np.asarray(radial_wavefunction(n, l, r, z_eff)) ** 2)

# ============================================================================
# Spherical Harmonics
# ============================================================================

def real_spherical_harmonic(l, m, theta, phi):
    """
    Calculate the real spherical harmonic used for orbital shapes.

    l = 0..2 use the standard real combinations (pz/px/py, dz²/dxz/dyz/
    dx²-y²/dxy). For l = 3 only m = 0 is the standard fz³; every other m
    uses sin^|m|(θ) cos(θ) cos(mφ) with the fz³ prefactor. That is a
    visualization approximation and is not normalized.

    Args:
        l: Azimuthal quantum number (0 to 3)
        m: Magnetic quantum number (-l to +l)
        theta: Polar angle (0 to π), measured from +z axis
        phi: Azimuthal angle, measured from +x axis

    Returns:
        Y_lm(θ, φ): Real value(s), 0 for unsupported (l, m)
    """
    theta = np.asarray(theta, dtype=float)
    phi = np.asarray(phi, dtype=float)
    shape = np.broadcast(theta, phi).shape

    cos_theta = np.cos(theta)
    sin_theta = np.sin(theta)

    # s orbital
    if l == 0:
        return _as_output(np.full(shape, Y00))

    # p orbitals
    if l == 1:
        norm = 0.5 * np.sqrt(3.0 / np.pi)
        if m == 0:
            return _as_output(norm * cos_theta * np.ones(shape))  # pz
        if m == 1:
            return _as_output(norm * sin_theta * np.cos(phi))  # px
        if m == -1:
            return _as_output(norm * sin_theta * np.sin(phi))  # py

    # d orbitals
    if l == 2:
        if m == 0:
            norm = 0.25 * np.sqrt(5.0 / np.pi)
            return _as_output(norm * (3.0 * cos_theta ** 2 - 1.0) * np.ones(shape))  # dz²
        if m == 1:
            norm = 0.5 * np.sqrt(15.0 / np.pi)
            return _as_output(norm * sin_theta * cos_theta * np.cos(phi))  # dxz
        if m == -1:
            norm = 0.5 * np.sqrt(15.0 / np.pi)
            return _as_output(norm * sin_theta * cos_theta * np.sin(phi))  # dyz
        if m == 2:
            norm = 0.25 * np.sqrt(15.0 / np.pi)
            return _as_output(norm * sin_theta ** 2 * np.cos(2 * phi))  # dx²-y²
        if m == -2:
            norm = 0.25 * np.sqrt(15.0 / np.pi)
            return _as_output(norm * sin_theta ** 2 * np.sin(2 * phi))  # dxy

    # f orbitals (simplified for m != 0)
    if l == 3 and abs(m) <= 3:
        norm = 0.25 * np.sqrt(7.0 / np.pi)
        if m == 0:
            return _as_output(norm * (5.0 * cos_theta ** 3 - 3.0 * cos_theta) * np.ones(shape))
        return _as_output(norm * sin_theta ** abs(m) * cos_theta * np.cos(m * phi))

    return _as_output(np.zeros(shape))

# ============================================================================
# Complete Wave Functions
# ============================================================================

def cartesian_to_spherical(x, y, z):
    """
    Convert Cartesian coordinates to spherical coordinates.

    Args:
        x, y, z: Cartesian coordinates (can be arrays)

    Returns:
        (r, theta, phi): Spherical coordinates
            r: Radial distance
            theta: Polar angle (0 to π), 0 at the origin
            phi: Azimuthal angle (-π to π)
    """
    x, y, z = np.asarray(x, dtype=float), np.asarray(y, dtype=float), np.asarray(z, dtype=float)

    r = np.sqrt(x ** 2 + y ** 2 + z ** 2)
    theta = np.arccos(np.clip(z / np.maximum(r, ORIGIN_EPSILON), -1, 1))
    phi = np.arctan2(y, x)

    return r, theta, phi

def spherical_to_cartesian(r, theta, phi):
    """Convert spherical (r, θ, φ) to Cartesian (x, y, z)."""
    sin_theta = np.sin(theta)
    x = r * sin_theta * np.cos(phi)
    y = r * sin_theta * np.sin(phi)
    z = r * np.cos(theta)
    return x, y, z

def wave_function(n, l, m, x, y, z, z_eff=1.0):
    """
    Calculate the signed wave function ψ_nlm at position (x, y, z).

    ψ_nlm(r, θ, φ) = R_nl(r) * Y_lm(θ, φ)

    At the origin the angles are undefined; s orbitals take R_n0(0) * Y_00
    there and every other orbital is 0.

    Args:
        n: Principal quantum number
        l: Azimuthal quantum number
        m: Magnetic quantum number
        x, y, z: Cartesian coordinates (in Bohr radii, can be arrays)
        z_eff: Effective nuclear charge

    Returns:
        ψ value(s)
    """
    r, theta, phi = cartesian_to_spherical(x, y, z)

    radial = np.asarray(radial_wavefunction(n, l, r, z_eff))
    angular = np.asarray(real_spherical_harmonic(l, m, theta, phi))
    psi = radial * angular

    if l == 0:
        origin_value = radial_wavefunction(n, l, 0.0, z_eff) * Y00
    else:
        origin_value = 0.0

    return _as_output(np.where(r < ORIGIN_EPSILON, origin_value, psi))

def probability_density(n, l, m, x, y, z, z_eff=1.0):
    """
    Calculate probability density |ψ|² at position (x, y, z).

    Returns:
        |ψ|²: Probability density, never negative
    """
    psi = np.asarray(wave_function(n, l, m, x, y, z, z_eff))
    return _as_output(psi ** 2)

# ============================================================================
# Normalization Checks
# ============================================================================

def verify_radial_normalization(n, l, z_eff=1.0, r_max=None):
    """
    Verify that the radial function is normalized: ∫r²|R|²dr = 1

    Args:
        n, l: Quantum numbers
        z_eff: Effective nuclear charge
        r_max: Upper integration limit (default: 5n² + 20 Bohr radii)

    Returns:
        float: Integral value (should be close to 1.0)
    """
    if r_max is None:
        r_max = 5 * n ** 2 + 20  # Well past the outermost lobe

    result, _ = integrate.quad(
        lambda r: radial_probability(n, l, r, z_eff),
        0, r_max,
        limit=200,
    )
    return result

def verify_angular_normalization(l, m):
    """
    Verify that the angular function is normalized: ∫|Y|²dΩ = 1

    The simplified l = 3, m != 0 harmonics are expected to miss.

    Returns:
        float: Integral value
    """
    result, _ = integrate.dblquad(
        lambda theta, phi: real_spherical_harmonic(l, m, theta, phi) ** 2 * np.sin(theta),
        0, 2 * np.pi,       # phi
        0, np.pi,           # theta
    )
    return result
