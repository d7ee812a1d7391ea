"""
Valence Orbital Parsing

Maps an element's electron configuration (e.g. "[Ar] 3d6 4s2") to the
subshell that gets visualized.
"""

import logging
import re
from dataclasses import dataclass

from .quantum_constants import (
    ORBITAL_L_VALUES,
    ORBITAL_LETTERS,
    ORBITAL_SHAPES,
    validate_quantum_numbers,
)

logger = logging.getLogger(__name__)

NOBLE_GAS_CORE = re.compile(r"\[[A-Za-z]+\]\s*")
SUBSHELL_TOKEN = re.compile(r"(\d+)([spdf])(\d+)")


@dataclass(frozen=True)
class OrbitalDescriptor:
    """
    One subshell picked for visualization.

    Attributes:
        n (int): Principal quantum number
        l (int): Azimuthal quantum number
        m (int): Magnetic quantum number
        orbital_type (str): 's', 'p', 'd' or 'f'
        electrons (int): Occupancy of the subshell
    """

    n: int
    l: int
    m: int
    orbital_type: str
    electrons: int = 0

    @classmethod
    def from_quantum_numbers(cls, n, l, m=0, electrons=0):
        """Build a validated descriptor; raises ValueError for invalid input."""
        validate_quantum_numbers(n, l, m)
        if electrons < 0:
            raise ValueError(f"Electron count must be non-negative, got {electrons}")
        return cls(n=n, l=l, m=m, orbital_type=ORBITAL_LETTERS[l], electrons=electrons)

    @property
    def key(self):
        """Cache identity (n, l, m)."""
        return (self.n, self.l, self.m)

    @property
    def name(self):
        """Subshell label such as "3d", also the artifact name."""
        return f"{self.n}{self.orbital_type}"


FALLBACK_ORBITAL = OrbitalDescriptor(n=1, l=0, m=0, orbital_type='s', electrons=1)


def _parse_token(token):
    match = SUBSHELL_TOKEN.search(token)
    if match is None:
        return None
    n, letter, electrons = match.groups()
    return int(n), letter, int(electrons)

def parse_valence_orbital(config):
    """
    Parse an electron configuration into its valence orbital.

    The last subshell is the default. A d or f subshell wins over it, since
    those stay chemically active even when listed before a higher-n s
    subshell. Only the m = 0 member of the subshell is visualized.

    Examples:
        "1s1"           -> 1s, 1 electron
        "[He] 2s2 2p2"  -> 2p, 2 electrons
        "[Ar] 3d6 4s2"  -> 3d, 6 electrons

    Args:
        config: Electron configuration string

    Returns:
        OrbitalDescriptor: Parsed orbital, or the 1s fallback when nothing
            in the string can be used
    """
    remainder = NOBLE_GAS_CORE.sub('', config or '').strip()

    subshells = [
        parsed for parsed in (_parse_token(token) for token in remainder.split())
        if parsed is not None
    ]
    if not subshells:
        return FALLBACK_ORBITAL

    valence = subshells[-1]
    for subshell in subshells:
        if subshell[1] in ('d', 'f'):
            valence = subshell
            break

    n, letter, electrons = valence
    try:
        return OrbitalDescriptor.from_quantum_numbers(
            n, ORBITAL_L_VALUES[letter], 0, electrons
        )
    except ValueError as e:
        logger.warning("Unusable valence orbital in %r: %s", config, e)
        return FALLBACK_ORBITAL

def get_orbital_description(orbital):
    """Human-readable description, e.g. "3d orbital (cloverleaf shape)"."""
    shape = ORBITAL_SHAPES[orbital.orbital_type]
    return f"{orbital.n}{orbital.orbital_type} orbital ({shape} shape)"
