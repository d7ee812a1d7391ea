"""
Quantum Constants and Definitions

Quantum number ranges, orbital naming, and sampling parameters for
hydrogen-like orbital point clouds.
"""

import numpy as np

# ============================================================================
# Quantum Number Definitions
# ============================================================================

# Valid quantum number ranges
MAX_PRINCIPAL_QUANTUM_NUMBER = 7  # n: 1, 2, 3, ..., 7
MAX_AZIMUTHAL_QUANTUM_NUMBER = 3  # l: 0 to min(n-1, 3)

# Orbital letter designations
ORBITAL_LETTERS = {
    0: 's',
    1: 'p',
    2: 'd',
    3: 'f',
}

ORBITAL_L_VALUES = {letter: l for l, letter in ORBITAL_LETTERS.items()}

# Shape names shown next to the orbital label
ORBITAL_SHAPES = {
    's': 'spherical',
    'p': 'dumbbell',
    'd': 'cloverleaf',
    'f': 'complex',
}

# Cartesian labels of the real harmonics, keyed by (l, m)
ORBITAL_SUFFIXES = {
    (1, 0): 'z',
    (1, 1): 'x',
    (1, -1): 'y',
    (2, 0): 'z²',
    (2, 1): 'xz',
    (2, -1): 'yz',
    (2, 2): 'x²-y²',
    (2, -2): 'xy',
    (3, 0): 'z³',
}

def validate_quantum_numbers(n, l, m):
    """
    Check that (n, l, m) names an orbital the viewer can draw.

    Descriptors are validated when they are built. The wave function
    math never validates and returns 0 for misused numbers instead.

    Returns:
        bool: True

    Raises:
        ValueError: For the first rule (n, l, m) breaks
    """
    if not all(isinstance(q, (int, np.integer)) for q in (n, l, m)):
        raise ValueError(f"Quantum numbers must be integers, got n={n!r}, l={l!r}, m={m!r}")

    if not 1 <= n <= MAX_PRINCIPAL_QUANTUM_NUMBER:
        raise ValueError(f"n={n} is outside 1..{MAX_PRINCIPAL_QUANTUM_NUMBER}")

    if not 0 <= l < n:
        raise ValueError(f"l={l} is outside 0..{n - 1} for n={n}")

    if l > MAX_AZIMUTHAL_QUANTUM_NUMBER:
        raise ValueError(f"l={l} is past the {ORBITAL_LETTERS[MAX_AZIMUTHAL_QUANTUM_NUMBER]} subshell")

    if abs(m) > l:
        raise ValueError(f"m={m} is outside -{l}..{l}")

    return True

# ============================================================================
# Wave Function Constants
# ============================================================================

# Below this radius theta/phi are undefined and only s orbitals survive
ORIGIN_EPSILON = 1e-10

# Y_0^0, constant over the sphere
Y00 = 0.5 * np.sqrt(1.0 / np.pi)

# Empirical shielding: Z_eff = max(1, n * SHIELDING_FACTOR)
SHIELDING_FACTOR = 0.3

# ============================================================================
# Sampling Parameters
# ============================================================================

# Radius of the viewing sphere every point cloud is scaled into
VIEW_RADIUS = 1.5

# Grid search for the rejection-sampling envelope
GRID_SEARCH_STEPS = 100
SAFETY_MARGIN = 1.2

# Representative directions checked by the grid search (axes and diagonals)
GRID_SEARCH_DIRECTIONS = np.array([
    [0.0, 0.0, 1.0],
    [0.0, 1.0, 0.0],
    [1.0, 0.0, 0.0],
    [1.0, 1.0, 0.0],
    [1.0, 0.0, 1.0],
    [0.0, 1.0, 1.0],
    [1.0, 1.0, 1.0],
])
GRID_SEARCH_DIRECTIONS = GRID_SEARCH_DIRECTIONS / np.linalg.norm(
    GRID_SEARCH_DIRECTIONS, axis=1, keepdims=True
)

# θ×φ lattice added to those directions, in 3° steps. Lobes of the
# |m| = 3 f harmonics (θ = 60°) lie off every axis and diagonal.
ANGULAR_SEARCH_STEPS = 60

# Minimum candidate draws per requested point, by envelope source
ATTEMPTS_PER_POINT = {
    'grid': 10000,
    'table': 1000,
}

# The cap allows this many times the draws the bound's acceptance rate predicts
ACCEPTANCE_CAP_FACTOR = 4

# Candidates evaluated per vectorized batch
SAMPLING_BATCH_SIZE = 65536

# Decimal places kept in stored coordinates
POSITION_DECIMALS = 4

# Approximate maximum |ψ|² for rejection sampling, keyed by (n, l, m).
# Fast path only: these were tuned for visualization and are not
# guaranteed to bound the density for every Z_eff.
MAX_PROBABILITY_DENSITY = {
    (1, 0, 0): 0.32,    # 1s
    (2, 0, 0): 0.05,    # 2s
    (2, 1, 0): 0.02,    # 2p
    (2, 1, 1): 0.02,
    (2, 1, -1): 0.02,
    (3, 0, 0): 0.015,   # 3s
    (3, 1, 0): 0.008,   # 3p
    (3, 2, 0): 0.004,   # 3d
    (3, 2, 1): 0.003,
    (3, 2, 2): 0.003,
    (4, 0, 0): 0.006,   # 4s
    (4, 1, 0): 0.003,   # 4p
    (4, 2, 0): 0.002,   # 4d
    (4, 3, 0): 0.001,   # 4f
}

# ============================================================================
# Utility Functions
# ============================================================================

def get_orbital_name(n, l, m=None):
    """
    Label an orbital, e.g. "3d" without m or "3dz²" with it.

    m values without a Cartesian label are written as "m<m>" (4fm-2).
    """
    name = f"{n}{ORBITAL_LETTERS.get(l, f'l{l}')}"
    if m is None:
        return name
    return name + ORBITAL_SUFFIXES.get((l, m), f'm{m}' if m else '')
