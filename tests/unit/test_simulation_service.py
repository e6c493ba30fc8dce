"""
Unit tests for the simulation service.
"""

import time
from unittest.mock import patch

import numpy as np
import pytest
from src.algorithms.circuit_generator import MIN_QUBITS
from src.service.cache import ResultCache
from src.service.config import SimulationSettings
from src.service.simulation_service import SimulationService
from src.simulator.exceptions import (
    ParameterError,
    ResourceError,
    SimulationError,
    SimulationTimeoutError,
)
from src.simulator.noise_models import NoiseModel
from src.simulator.quantum_circuit import AlgorithmId, Circuit
from src.simulator.quantum_gates import GateType, controlled, single_qubit


class TestSimulationService:
    """Test suite for SimulationService."""

    def setup_method(self):
        """Set up test fixtures."""
        self.settings = SimulationSettings(max_workers=2)
        self.service = SimulationService(settings=self.settings)

    def teardown_method(self):
        self.service.shutdown()

    def test_bell_result(self):
        """Bell run is valid with expected amplitudes."""
        result = self.service.run("bell", 2)

        np.testing.assert_allclose(
            result.state_vector, [0.7071, 0, 0, 0.7071], atol=1e-4
        )
        assert result.fidelity >= 0.97
        assert result.is_valid
        assert result.algorithm == "bell"
        assert result.circuit_name == "bell-2q"
        assert result.gate_count == 2
        assert result.execution_time >= 0

    def test_result_cached(self):
        """get after simulate returns an equal result."""
        result = self.service.run(AlgorithmId.GHZ, 3)
        key = ResultCache.make_key("ghz", 3)

        assert self.service.cache.get(key) == result
        assert self.service.run("ghz", 3) is result
        assert self.service.get_stats()["cache_hits"] == 1

        self.service.cache.clear()
        assert self.service.cache.get(key) is None

    def test_noise_is_part_of_cache_key(self):
        ideal = self.service.run("bell", 2)
        noisy = self.service.run("bell", 2, noise=NoiseModel(depolarizing=0.1))
        assert noisy is not ideal
        assert noisy.fidelity < ideal.fidelity

    def test_handmade_circuit_not_cached(self):
        """Circuits without an algorithm bypass the cache."""
        circuit = Circuit.from_gates("custom", 1, [single_qubit(GateType.H, 0)])
        self.service.simulate(circuit)
        assert len(self.service.cache) == 0
        assert "custom" in self.service.get_validation_results()

    def test_deterministic(self):
        """Ideal runs are bit-identical across services."""
        with SimulationService(settings=self.settings) as other:
            first = self.service.run("qft", 4)
            second = other.run("qft", 4)
        np.testing.assert_array_equal(first.state_vector, second.state_vector)

    def test_noise_monotonicity(self):
        """Raising depolarizing noise never raises fidelity."""
        fidelities = [
            self.service.run("bell", 2, noise=NoiseModel(depolarizing=p)).fidelity
            for p in (0.0, 0.1, 0.25, 0.5)
        ]
        assert fidelities[0] == pytest.approx(0.98)
        assert fidelities[-1] < fidelities[0]

    @pytest.mark.parametrize("algorithm", list(AlgorithmId))
    @pytest.mark.parametrize("extra", [0, 1, 2])
    @pytest.mark.parametrize(
        "background",
        [NoiseModel(), NoiseModel(amplitude_damping=0.01, phase_damping=0.05)],
    )
    def test_fidelity_non_increasing_in_depolarizing(
        self, algorithm, extra, background
    ):
        """Fidelity never rises over a fine depolarizing grid up to 0.5."""
        num_qubits = MIN_QUBITS[algorithm] + extra
        fidelities = []
        for p in np.linspace(0, 0.5, 26):
            noise = NoiseModel(
                depolarizing=float(p),
                amplitude_damping=background.amplitude_damping,
                phase_damping=background.phase_damping,
            )
            fidelities.append(self.service.run(algorithm, num_qubits, noise).fidelity)

        for before, after in zip(fidelities, fidelities[1:]):
            assert after <= before + 1e-12

    def test_noisy_results_normalized(self):
        noise = NoiseModel(depolarizing=0.2, amplitude_damping=0.1, phase_damping=0.1)
        result = self.service.run("grover", 3, noise=noise)
        assert abs(np.sum(result.probabilities()) - 1.0) < 1e-6
        assert result.probability_retained < 1.0

    def test_timeout(self):
        """A run exceeding its timeout raises SimulationTimeoutError."""

        def slow_run(circuit, noise=None):
            time.sleep(0.5)

        with patch.object(self.service.engine, "run", side_effect=slow_run):
            with pytest.raises(SimulationTimeoutError):
                self.service.run("bell", 2, timeout=0.05)

        assert self.service.get_stats()["timeouts"] == 1
        assert len(self.service.cache) == 0

    def test_timeout_is_builtin_timeout(self):
        assert issubclass(SimulationTimeoutError, TimeoutError)

    def test_invalid_qubit_count(self):
        with pytest.raises(ParameterError):
            self.service.run("teleportation", 2)

    def test_resource_error(self):
        """Hand-built circuits above the ceiling fail in the engine."""
        with pytest.raises(ResourceError):
            self.service.simulate(Circuit("wide", 21))

    def test_invalid_gate_target(self):
        circuit = Circuit.from_gates("bad", 2, [controlled(GateType.CNOT, 0, 2)])
        with pytest.raises(ParameterError):
            self.service.simulate(circuit)
        assert self.service.get_stats()["failed_simulations"] == 1

    def test_simulate_description(self):
        result = self.service.simulate_description("Fourier transform", 3)
        assert result.algorithm == "qft"

    def test_validate_circuit(self):
        """Bell passes validation, Grover does not."""
        assert self.service.validate_circuit(
            Circuit.from_gates(
                "bell",
                2,
                [single_qubit(GateType.H, 0), controlled(GateType.CNOT, 0, 1)],
            )
        )
        assert not self.service.validate_circuit(
            Circuit("grover-3q", 3, algorithm="grover")
        )

    def test_validation_history(self):
        self.service.run("bell", 2)
        self.service.run("ghz", 4)
        results = self.service.get_validation_results()
        assert set(results) == {"bell-2q", "ghz-4q"}

        # Returned mapping is a copy
        results.clear()
        assert len(self.service.get_validation_results()) == 2

    def test_advantage_metrics_empty(self):
        assert self.service.get_quantum_advantage_metrics() == {
            "average_advantage": 1.0,
            "max_advantage": 1.0,
            "algorithms_with_advantage": [],
        }

    def test_advantage_metrics(self):
        self.service.run("bell", 2)  # 1.0
        self.service.run("grover", 4)  # 4.0
        self.service.run("deutsch-jozsa", 3)  # 4.0

        metrics = self.service.get_quantum_advantage_metrics()
        assert metrics["average_advantage"] == pytest.approx(3.0)
        assert metrics["max_advantage"] == pytest.approx(4.0)
        assert metrics["algorithms_with_advantage"] == ["grover", "deutsch-jozsa"]

    def test_shutdown(self):
        """Use after shutdown raises SimulationError."""
        self.service.shutdown()
        with pytest.raises(SimulationError):
            self.service.run("bell", 2)

    def test_context_manager(self):
        with SimulationService(settings=self.settings, max_workers=1) as service:
            assert service.max_workers == 1
            service.run("bell", 2)
        with pytest.raises(SimulationError):
            service.run("bell", 2)

    def test_normalization_tolerance_from_settings(self):
        """The evaluator uses the configured drift tolerance."""
        settings = SimulationSettings(max_workers=1, normalization_tolerance=0.5)
        with SimulationService(settings=settings) as service:
            assert service.evaluator.tolerance == 0.5

            # Losses below the tolerance are treated as drift
            result = service.run("bell", 2, noise=NoiseModel(amplitude_damping=0.05))
            assert result.fidelity == pytest.approx(0.98)

    def test_default_normalization_tolerance(self):
        assert self.service.evaluator.tolerance == 1e-6

    def test_unexpected_worker_failure_counted(self):
        """Errors outside the simulation hierarchy still count as failures."""
        with patch.object(
            self.service.engine, "run", side_effect=RuntimeError("corrupted state")
        ):
            with pytest.raises(RuntimeError):
                self.service.run("bell", 2)

        stats = self.service.get_stats()
        assert stats["failed_simulations"] == 1
        assert stats["successful_simulations"] == 0

    def test_submit_after_pool_closed(self):
        """A pool that refuses work surfaces as SimulationError."""
        with patch.object(
            self.service._executor,
            "submit",
            side_effect=RuntimeError("cannot schedule new futures after shutdown"),
        ):
            with pytest.raises(SimulationError):
                self.service.run("bell", 2)
