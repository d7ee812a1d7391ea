"""
Quantum Orbital Math

Hydrogen-like wave functions, sampling bounds, and valence orbital
parsing for the periodic table's orbital viewer.
"""

from .quantum_constants import *
from .hydrogen_wavefunctions import *
from .orbital_parameters import *
from .valence_orbitals import *

__all__ = [
    'quantum_constants',
    'hydrogen_wavefunctions',
    'orbital_parameters',
    'valence_orbitals',
]
