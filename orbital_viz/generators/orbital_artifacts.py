"""
Precomputed Orbital Artifacts

Offline batch step that samples every orbital the periodic table can show
and writes one JSON artifact per orbital name:

    {"n": 3, "l": 2, "m": 0, "name": "3d",
     "positions": [x0, y0, z0, x1, ...], "signs": [1, -1, ...]}

Run with:  orbital-viz-generate   (or  python -m orbital_viz)
"""

import json
import logging
from pathlib import Path

import numpy as np

from .. import config
from ..logging_config import setup_logging
from ..quantum.quantum_constants import VIEW_RADIUS
from ..quantum.hydrogen_wavefunctions import verify_radial_normalization
from ..quantum.orbital_parameters import effective_nuclear_charge
from .point_cloud_sampler import OrbitalPointCloud, generate_orbital_points

logger = logging.getLogger(__name__)

# Orbital types we need to generate (covers all elements)
ORBITALS = [
    {'n': 1, 'l': 0, 'm': 0, 'name': '1s'},
    {'n': 2, 'l': 0, 'm': 0, 'name': '2s'},
    {'n': 2, 'l': 1, 'm': 0, 'name': '2p'},
    {'n': 3, 'l': 0, 'm': 0, 'name': '3s'},
    {'n': 3, 'l': 1, 'm': 0, 'name': '3p'},
    {'n': 3, 'l': 2, 'm': 0, 'name': '3d'},
    {'n': 4, 'l': 0, 'm': 0, 'name': '4s'},
    {'n': 4, 'l': 1, 'm': 0, 'name': '4p'},
    {'n': 4, 'l': 2, 'm': 0, 'name': '4d'},
    {'n': 4, 'l': 3, 'm': 0, 'name': '4f'},
    {'n': 5, 'l': 0, 'm': 0, 'name': '5s'},
    {'n': 5, 'l': 1, 'm': 0, 'name': '5p'},
    {'n': 5, 'l': 2, 'm': 0, 'name': '5d'},
    {'n': 5, 'l': 3, 'm': 0, 'name': '5f'},
    {'n': 6, 'l': 0, 'm': 0, 'name': '6s'},
    {'n': 6, 'l': 1, 'm': 0, 'name': '6p'},
    {'n': 6, 'l': 2, 'm': 0, 'name': '6d'},
    {'n': 7, 'l': 0, 'm': 0, 'name': '7s'},
    {'n': 7, 'l': 1, 'm': 0, 'name': '7p'},
]

# ============================================================================
# Artifact Codec
# ============================================================================

def orbital_artifact(cloud, n, l, m, name):
    """Build the JSON-ready artifact dict for a point cloud."""
    return {
        'n': n,
        'l': l,
        'm': m,
        'name': name,
        'positions': cloud.flat_positions(),
        'signs': cloud.signs.tolist(),
    }

def write_orbital_artifact(cloud, n, l, m, name, directory):
    """
    Write one orbital artifact as <directory>/<name>.json.

    Returns:
        Path: Written file
    """
    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)

    path = directory / f"{name}.json"
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(orbital_artifact(cloud, n, l, m, name), f, separators=(',', ':'))

    return path

def read_orbital_artifact(path):
    """
    Read an artifact back into an OrbitalPointCloud.

    Stored positions are already scaled into the view sphere.

    Raises:
        OSError: File cannot be read
        ValueError: Invalid JSON or inconsistent positions/signs
        KeyError: Missing field
    """
    with open(path, 'r', encoding='utf-8') as f:
        data = json.load(f)

    return OrbitalPointCloud.from_flat(data['positions'], data['signs'], max_extent=VIEW_RADIUS)

# ============================================================================
# Batch Generation
# ============================================================================

def generate_all(output_dir=None, point_count=None, rng=None):
    """
    Sample every orbital in ORBITALS and write its artifact.

    Args:
        output_dir: Destination directory (default: config.get_artifact_dir())
        point_count: Points per orbital (default: config.DEFAULT_POINT_COUNT)
        rng: numpy.random.Generator shared by all orbitals

    Returns:
        list: Paths of written artifacts
    """
    output_dir = Path(output_dir or config.get_artifact_dir())
    point_count = point_count or config.DEFAULT_POINT_COUNT
    rng = rng if rng is not None else np.random.default_rng()

    print(f"Generating {len(ORBITALS)} orbital point clouds...")
    print(f"Output directory: {output_dir}")
    print()

    written = []
    for orbital in ORBITALS:
        n, l, m, name = orbital['n'], orbital['l'], orbital['m'], orbital['name']
        print(f"Generating {name}...")

        cloud = generate_orbital_points(n, l, m, point_count, rng=rng)
        print(f"  Generated {cloud.count} points in {cloud.attempts} attempts")

        normalization = verify_radial_normalization(n, l, effective_nuclear_charge(n))
        print(f"  ∫r²|R|²dr = {normalization:.6f}")

        path = write_orbital_artifact(cloud, n, l, m, name, output_dir)
        size_kb = path.stat().st_size / 1024
        print(f"  Saved to {path.name} ({size_kb:.1f} KB)")
        print()

        written.append(path)

    print("Done!")
    return written

def main():
    """Console entry point; takes no arguments."""
    setup_logging(config.LOG_LEVEL)
    generate_all()


if __name__ == "__main__":
    main()
