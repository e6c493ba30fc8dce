"""
Simulation service.

Ties the circuit generator, the state vector engine and the metrics
evaluator together behind a worker pool with per-run timeouts and a
result cache.
"""

import logging
import threading
import time
from concurrent.futures import Future, ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from typing import Any, Dict, List, Optional, Union

from ..algorithms.circuit_generator import generate_circuit
from ..algorithms.detection import AlgorithmDetector, KeywordAlgorithmDetector
from ..simulator.exceptions import SimulationError, SimulationTimeoutError
from ..simulator.metrics import MetricsEvaluator, SimulationResult
from ..simulator.noise_models import NoiseModel
from ..simulator.quantum_circuit import AlgorithmId, Circuit
from ..simulator.state_vector import StateVectorEngine
from .cache import ResultCache
from .config import SimulationSettings, get_settings

logger = logging.getLogger(__name__)

ADVANTAGE_THRESHOLD = 2.0


class SimulationService:
    """
    Quantum circuit simulation service.

    Runs circuits on a worker pool, evaluates the final states, caches
    results for generated circuits and keeps a validation history keyed
    by circuit name.
    """

    def __init__(
        self,
        settings: Optional[SimulationSettings] = None,
        cache: Optional[ResultCache] = None,
        max_workers: Optional[int] = None,
        detector: Optional[AlgorithmDetector] = None,
    ):
        """
        Initialize simulation service.

        Args:
            settings: Service settings; loaded from the environment if omitted
            cache: Result cache; a fresh in-memory cache if omitted
            max_workers: Worker pool size; overrides settings
            detector: Resolver for free-text algorithm descriptions
        """
        self.settings = settings or get_settings()
        self.cache = cache if cache is not None else ResultCache()
        self.detector = detector or KeywordAlgorithmDetector()

        self.engine = StateVectorEngine(
            max_qubits=self.settings.max_qubits, precision=self.settings.precision
        )
        self.evaluator = MetricsEvaluator(
            fidelity_threshold=self.settings.fidelity_threshold,
            tolerance=self.settings.normalization_tolerance,
        )

        self.max_workers = max_workers or self.settings.max_workers
        self._executor = ThreadPoolExecutor(
            max_workers=self.max_workers,
            thread_name_prefix="qsim",
        )
        self._running = True
        self._state_lock = threading.Lock()

        self._lock = threading.Lock()
        self.validation_results: Dict[str, SimulationResult] = {}

        # Statistics
        self.stats = {
            "total_requests": 0,
            "successful_simulations": 0,
            "failed_simulations": 0,
            "cache_hits": 0,
            "timeouts": 0,
        }

        logger.info(
            f"Simulation service started with {self.max_workers} workers"
        )

    def __enter__(self) -> "SimulationService":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.shutdown()

    def shutdown(self, wait: bool = True) -> None:
        """Stop accepting work and release the worker pool."""
        with self._state_lock:
            if not self._running:
                return
            self._running = False
        self._executor.shutdown(wait=wait)
        logger.info("Simulation service stopped")

    def simulate(
        self,
        circuit: Circuit,
        noise: Optional[NoiseModel] = None,
        timeout: Optional[float] = None,
    ) -> SimulationResult:
        """
        Simulate a circuit and evaluate the result.

        Args:
            circuit: Circuit to execute
            noise: Optional noise model applied after every gate
            timeout: Seconds to wait for the run; defaults to settings

        Returns:
            Simulation result, possibly served from the cache

        Raises:
            ParameterError: If the circuit references invalid qubits
            ResourceError: If the circuit exceeds the qubit ceiling
            SimulationTimeoutError: If the run does not finish in time
            SimulationError: If the service has been shut down
        """
        if not self._running:
            raise SimulationError("Simulation service has been shut down")

        self._bump("total_requests")

        key = None
        if circuit.algorithm is not None:
            key = ResultCache.make_key(
                circuit.algorithm.value, circuit.num_qubits, noise
            )
            cached = self.cache.get(key)
            if cached is not None:
                self._bump("cache_hits")
                self._record(circuit.name, cached)
                return cached

        if timeout is None:
            timeout = self.settings.default_timeout

        future = self._submit(circuit, noise)
        try:
            result = future.result(timeout=timeout)
        except FutureTimeoutError:
            # The worker cannot be interrupted mid-gate; its result is discarded
            future.cancel()
            self._bump("timeouts")
            self._bump("failed_simulations")
            logger.warning(
                f"Simulation of '{circuit.name}' exceeded timeout of {timeout}s"
            )
            raise SimulationTimeoutError(
                f"Simulation of '{circuit.name}' exceeded timeout of {timeout}s"
            ) from None
        except SimulationError as e:
            self._bump("failed_simulations")
            logger.error(f"Simulation of '{circuit.name}' failed: {e}")
            raise
        except Exception as e:
            self._bump("failed_simulations")
            logger.error(f"Unexpected failure simulating '{circuit.name}': {e}")
            raise

        if key is not None:
            self.cache.put(key, result)

        self._bump("successful_simulations")
        self._record(circuit.name, result)
        return result

    def run(
        self,
        identifier: Union[AlgorithmId, str],
        num_qubits: int,
        noise: Optional[NoiseModel] = None,
        timeout: Optional[float] = None,
    ) -> SimulationResult:
        """Generate the circuit for an algorithm and simulate it."""
        circuit = generate_circuit(identifier, num_qubits)
        return self.simulate(circuit, noise=noise, timeout=timeout)

    def simulate_description(
        self,
        description: str,
        num_qubits: int,
        noise: Optional[NoiseModel] = None,
        timeout: Optional[float] = None,
    ) -> SimulationResult:
        """Resolve a free-text description to an algorithm and run it."""
        algorithm = self.detector.detect(description)
        logger.info(f"Resolved '{description}' to {algorithm.value}")
        return self.run(algorithm, num_qubits, noise=noise, timeout=timeout)

    def validate_circuit(
        self,
        circuit: Circuit,
        noise: Optional[NoiseModel] = None,
        timeout: Optional[float] = None,
    ) -> bool:
        """True if the circuit simulates above the fidelity threshold."""
        result = self.simulate(circuit, noise=noise, timeout=timeout)
        return result.is_valid and result.fidelity > self.settings.fidelity_threshold

    def get_validation_results(self) -> Dict[str, SimulationResult]:
        """Copy of the recorded results keyed by circuit name."""
        with self._lock:
            return dict(self.validation_results)

    def get_quantum_advantage_metrics(self) -> Dict[str, Any]:
        """Summary of quantum advantage estimates across recorded results."""
        results = list(self.get_validation_results().values())
        if not results:
            return {
                "average_advantage": 1.0,
                "max_advantage": 1.0,
                "algorithms_with_advantage": [],
            }

        advantages = [r.quantum_advantage for r in results]
        algorithms: List[str] = []
        for r in results:
            if r.quantum_advantage > ADVANTAGE_THRESHOLD and r.algorithm not in algorithms:
                algorithms.append(r.algorithm)

        return {
            "average_advantage": sum(advantages) / len(advantages),
            "max_advantage": max(advantages),
            "algorithms_with_advantage": algorithms,
        }

    def get_stats(self) -> Dict[str, Any]:
        """Service and cache statistics."""
        with self._lock:
            stats = dict(self.stats)
        stats["cache"] = self.cache.get_stats()
        return stats

    def _submit(self, circuit: Circuit, noise: Optional[NoiseModel]) -> Future:
        with self._state_lock:
            if not self._running:
                raise SimulationError("Simulation service has been shut down")
            try:
                return self._executor.submit(self._execute, circuit, noise)
            except RuntimeError as e:
                raise SimulationError(f"Worker pool unavailable: {e}") from e

    def _execute(
        self, circuit: Circuit, noise: Optional[NoiseModel]
    ) -> SimulationResult:
        start_time = time.time()
        evolution = self.engine.run(circuit, noise)
        execution_time = time.time() - start_time
        return self.evaluator.evaluate(
            circuit, evolution, noise=noise, execution_time=execution_time
        )

    def _record(self, name: str, result: SimulationResult) -> None:
        with self._lock:
            self.validation_results[name] = result

    def _bump(self, counter: str) -> None:
        with self._lock:
            self.stats[counter] += 1
