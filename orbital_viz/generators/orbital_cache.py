"""
Orbital Point Cloud Caches

Two ways of serving point clouds to the viewer:

- OrbitalCache samples on demand and memoizes by (n, l, m, point_count).
- OrbitalArtifactStore loads clouds precomputed by the batch generator,
  keyed by orbital name ("3d").

Both run the expensive step on a background executor and hand every
concurrent caller of the same key the same Future, so the work happens
at most once per key.
"""

import logging
import threading
from pathlib import Path
from concurrent.futures import Future, ThreadPoolExecutor

from ..config import get_artifact_dir
from ..quantum.quantum_constants import get_orbital_name
from .point_cloud_sampler import OrbitalPointCloud, generate_orbital_points
from .orbital_artifacts import read_orbital_artifact

logger = logging.getLogger(__name__)

# ============================================================================
# Shared Deduplication
# ============================================================================

class _DeduplicatingCache:
    """
    Write-once result table with in-flight deduplication.

    Subclasses implement _compute(key). A result is stored when _store
    returns True for it.
    """

    def __init__(self, executor=None, thread_name_prefix='orbital-cache'):
        self._results = {}
        self._pending = {}
        self._lock = threading.Lock()
        self._owns_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(
            max_workers=1, thread_name_prefix=thread_name_prefix
        )

    def __len__(self):
        with self._lock:
            return len(self._results)

    def __contains__(self, key):
        with self._lock:
            return key in self._results

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def close(self, wait=True):
        """Shut down the executor if this cache created it."""
        if self._owns_executor:
            self._executor.shutdown(wait=wait)

    def _compute(self, key):
        raise NotImplementedError

    def _store(self, result):
        return True

    def _request(self, key):
        with self._lock:
            if key in self._results:
                done = Future()
                done.set_result(self._results[key])
                return done

            pending = self._pending.get(key)
            if pending is not None:
                return pending

            future = self._executor.submit(self._run, key)
            self._pending[key] = future

        future.add_done_callback(lambda f, key=key: self._forget(key, f))
        return future

    def _run(self, key):
        result = self._compute(key)
        if self._store(result):
            with self._lock:
                self._results.setdefault(key, result)
                result = self._results[key]
        return result

    def _forget(self, key, future):
        with self._lock:
            if self._pending.get(key) is future:
                del self._pending[key]

# ============================================================================
# On-Demand Sampling
# ============================================================================

class OrbitalCache(_DeduplicatingCache):
    """
    Memoizes generated point clouds for the process lifetime.

    Args:
        generator: Callable (n, l, m, point_count, rng=...) -> OrbitalPointCloud
        rng_factory: Optional callable key -> numpy.random.Generator, for
            reproducible clouds
        executor: Executor to sample on (default: private single worker)
    """

    def __init__(self, generator=generate_orbital_points, rng_factory=None, executor=None):
        super().__init__(executor, thread_name_prefix='orbital-sampler')
        self._generator = generator
        self._rng_factory = rng_factory

    @staticmethod
    def make_key(orbital, point_count):
        return (orbital.n, orbital.l, orbital.m, int(point_count))

    def request(self, orbital, point_count):
        """
        Get a Future for the orbital's point cloud.

        Cancelling a Future that has not started removes it from the
        pending table. A generation already running always finishes and
        fills the cache.
        """
        return self._request(self.make_key(orbital, point_count))

    def get(self, orbital, point_count):
        """Blocking lookup; samples on a miss."""
        return self.request(orbital, point_count).result()

    def _compute(self, key):
        n, l, m, point_count = key
        rng = self._rng_factory(key) if self._rng_factory is not None else None
        logger.info("Sampling %s with %d points", get_orbital_name(n, l, m), point_count)
        return self._generator(n, l, m, point_count, rng=rng)

# ============================================================================
# Precomputed Artifacts
# ============================================================================

class OrbitalArtifactStore(_DeduplicatingCache):
    """
    Lazily loads precomputed point clouds from <artifact_dir>/<name>.json.

    A missing or malformed artifact is logged and served as an empty
    cloud. Failures are not cached, so a later request tries again.

    Args:
        artifact_dir: Directory to read from (default: config.get_artifact_dir()
            at construction)
        executor: Executor to load on (default: private single worker)
    """

    def __init__(self, artifact_dir=None, executor=None):
        super().__init__(executor, thread_name_prefix='orbital-loader')
        self.artifact_dir = Path(artifact_dir) if artifact_dir is not None else get_artifact_dir()

    def request(self, orbital):
        """Get a Future for the orbital's precomputed cloud."""
        return self._request(orbital.name)

    def load(self, orbital):
        """Blocking load of the orbital's precomputed cloud."""
        return self.request(orbital).result()

    def _compute(self, name):
        path = self.artifact_dir / f"{name}.json"
        try:
            return read_orbital_artifact(path)
        except (OSError, ValueError, KeyError, TypeError) as e:
            logger.error("Failed to load orbital %s from %s: %s", name, path, e)
            return OrbitalPointCloud.empty()

    def _store(self, result):
        return result.count > 0
