"""
Orbital Point Cloud Framework

Turns an element's electron configuration into the valence orbital to
show, and that orbital into a point cloud sampled from |ψ|².
"""

from .quantum.valence_orbitals import (
    OrbitalDescriptor,
    get_orbital_description,
    parse_valence_orbital,
)
from .generators.point_cloud_sampler import OrbitalPointCloud, generate
from .generators.orbital_cache import OrbitalArtifactStore, OrbitalCache

__all__ = [
    'OrbitalDescriptor',
    'OrbitalPointCloud',
    'OrbitalCache',
    'OrbitalArtifactStore',
    'parse_valence_orbital',
    'get_orbital_description',
    'generate',
]

__version__ = '1.0.0'
