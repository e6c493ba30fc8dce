"""
In-process cache of simulation results.
"""

import hashlib
import json
import logging
import threading
from typing import Any, Dict, Optional

from ..simulator.metrics import SimulationResult
from ..simulator.noise_models import NoiseModel, canonical_noise

logger = logging.getLogger(__name__)


class ResultCache:
    """
    Thread-safe map from (algorithm, qubits, noise) keys to results.

    Entries never expire; concurrent writers for the same key overwrite
    each other and the last write wins.
    """

    def __init__(self):
        self._entries: Dict[str, SimulationResult] = {}
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0

    @staticmethod
    def make_key(
        algorithm: str, num_qubits: int, noise: Optional[NoiseModel] = None
    ) -> str:
        """Generate cache key from simulation parameters."""
        key_data = {
            "algorithm": algorithm,
            "qubits": num_qubits,
            "noise": canonical_noise(noise),
        }
        key_str = json.dumps(key_data, sort_keys=True)
        return hashlib.md5(key_str.encode()).hexdigest()

    def get(self, key: str) -> Optional[SimulationResult]:
        """Get cached result if present."""
        with self._lock:
            result = self._entries.get(key)
            if result is None:
                self.misses += 1
            else:
                self.hits += 1

        if result is not None:
            logger.debug(f"Cache hit for simulation: {key}")
        else:
            logger.debug(f"Cache miss for simulation: {key}")
        return result

    def put(self, key: str, result: SimulationResult) -> None:
        """Cache simulation result."""
        with self._lock:
            self._entries[key] = result
        logger.debug(f"Cached simulation result: {key}")

    def clear(self) -> None:
        """Drop every entry and reset counters."""
        with self._lock:
            self._entries.clear()
            self.hits = 0
            self.misses = 0
        logger.info("Simulation cache cleared")

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def get_stats(self) -> Dict[str, Any]:
        """Get cache statistics."""
        with self._lock:
            lookups = self.hits + self.misses
            return {
                "backend": "memory",
                "entries": len(self._entries),
                "hits": self.hits,
                "misses": self.misses,
                "hit_rate": self.hits / lookups if lookups else 0.0,
            }
