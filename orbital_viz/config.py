"""
Configuration & Path Management
===============================
Central registry for file locations and run-time defaults.

Numerical constants of the orbital model live in
orbital_viz.quantum.quantum_constants; this module only holds values a
deployment may want to change.

Exports:
    get_artifact_dir(): Directory holding precomputed orbital clouds,
        resolved on each call so it follows the current working directory.
    DEFAULT_POINT_COUNT (int): Points sampled per orbital.
    LOG_LEVEL (int): Level used by the batch generator's logger.
"""
import logging
import os
from pathlib import Path


def get_artifact_dir() -> Path:
    """
    Directory the batch generator writes to and the artifact store reads.

    ORBITAL_VIZ_ARTIFACT_DIR overrides the default public/orbitals
    directory under the current working directory.
    """
    override = os.environ.get("ORBITAL_VIZ_ARTIFACT_DIR")
    if override:
        return Path(override)
    return Path.cwd() / "public" / "orbitals"


def get_log_level() -> int:
    name = os.environ.get("ORBITAL_VIZ_LOG_LEVEL", "INFO").upper()
    return getattr(logging, name, logging.INFO)


# Global Constants
DEFAULT_POINT_COUNT: int = 30000
LOG_LEVEL: int = get_log_level()
