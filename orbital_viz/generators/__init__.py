"""
Point Cloud Generator Package

Sampling, caching, and precomputed artifacts for orbital point clouds.
"""

from .point_cloud_sampler import *
from .orbital_artifacts import *
from .orbital_cache import *

__all__ = [
    'point_cloud_sampler',
    'orbital_artifacts',
    'orbital_cache',
]
