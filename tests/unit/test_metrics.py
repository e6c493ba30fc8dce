"""
Unit tests for simulation metrics.
"""

import numpy as np
import pytest
from src.simulator.metrics import (
    MetricsEvaluator,
    SimulationResult,
    algorithm_label,
    base_fidelity,
    estimate_quantum_advantage,
)
from src.simulator.noise_models import NoiseModel
from src.simulator.quantum_circuit import AlgorithmId, Circuit
from src.simulator.state_vector import StateEvolution


BELL_STATE = np.array([1, 0, 0, 1], dtype=complex) / np.sqrt(2)


class TestQuantumAdvantage:
    """Test closed-form advantage estimates."""

    def test_grover(self):
        assert estimate_quantum_advantage("grover", 4) == pytest.approx(4.0)

    def test_shor(self):
        assert estimate_quantum_advantage("shor", 6) == pytest.approx(8.0)

    def test_qft(self):
        assert estimate_quantum_advantage("qft", 6) == pytest.approx(4.0)

    def test_deutsch_jozsa(self):
        assert estimate_quantum_advantage("deutsch-jozsa", 3) == pytest.approx(4.0)

    def test_default(self):
        """max(1, 0.5 n) for everything else."""
        assert estimate_quantum_advantage("bell", 2) == 1.0
        assert estimate_quantum_advantage("ghz", 6) == 3.0


class TestBaseFidelity:
    """Test algorithm family baselines."""

    def test_families(self):
        assert base_fidelity("bell") == 0.98
        assert base_fidelity("grover") == 0.92
        assert base_fidelity("qft") == 0.96
        assert base_fidelity("teleportation") == 0.95

    def test_label(self):
        """Circuit name is used when no algorithm is attached."""
        assert algorithm_label(Circuit("My Bell", 2)) == "my bell"
        assert algorithm_label(Circuit("x", 2, algorithm="qft")) == "qft"


class TestMetricsEvaluator:
    """Test suite for MetricsEvaluator."""

    def setup_method(self):
        """Set up test fixtures."""
        self.evaluator = MetricsEvaluator()
        self.circuit = Circuit("bell-2q", 2, algorithm=AlgorithmId.BELL)

    def test_ideal_bell(self):
        """Ideal Bell state keeps the baseline fidelity."""
        result = self.evaluator.evaluate(self.circuit, StateEvolution(BELL_STATE))
        assert result.fidelity == pytest.approx(0.98)
        assert result.is_valid
        assert result.error_rate == pytest.approx(0.02)
        assert result.recommendations == ()

    def test_fidelity_drops_with_retained_loss(self):
        """Probability lost to noise lowers fidelity."""
        evolution = StateEvolution(BELL_STATE, probability_retained=0.9)
        fidelity = self.evaluator.calculate_fidelity(evolution, "bell")
        assert fidelity == pytest.approx(0.88)

    def test_fidelity_clipped(self):
        evolution = StateEvolution(BELL_STATE, probability_retained=0.0)
        assert self.evaluator.calculate_fidelity(evolution, "bell") == 0.0

    def test_unnormalized_state_penalized(self):
        evolution = StateEvolution(BELL_STATE * np.sqrt(0.5))
        assert self.evaluator.calculate_fidelity(evolution, "ghz") == pytest.approx(
            0.45
        )

    def test_grover_below_threshold(self):
        """Grover baseline sits below the default validation threshold."""
        circuit = Circuit("grover-2q", 2, algorithm=AlgorithmId.GROVER)
        result = self.evaluator.evaluate(circuit, StateEvolution(BELL_STATE))
        assert not result.is_valid
        assert result.quantum_advantage == pytest.approx(2.0)

    def test_low_fidelity_recommendations(self):
        recommendations = self.evaluator.generate_recommendations("bell", 0.85)
        assert "Consider error correction codes" in recommendations
        assert "Optimize gate sequence for noise resilience" in recommendations
        assert (
            "Bell state fidelity low - check CNOT gate calibration" in recommendations
        )

    def test_noise_recommendations(self):
        noise = NoiseModel(depolarizing=0.3, gate_error=0.05)
        recommendations = self.evaluator.generate_recommendations("qft", 0.96, noise)
        assert recommendations == [
            "Noise resilience low - validate on real hardware before deployment",
            "High gate error rate detected - calibrate hardware",
        ]

    def test_algorithm_notes(self):
        assert self.evaluator.generate_recommendations("ghz", 0.95) == [
            "Multi-qubit entanglement sensitive to decoherence"
        ]
        assert self.evaluator.generate_recommendations("deutsch-jozsa", 0.95) == [
            "Ensure oracle implementation matches problem structure"
        ]

    def test_recommendations_deterministic(self):
        noise = NoiseModel(gate_error=0.02)
        first = self.evaluator.generate_recommendations("bell", 0.8, noise)
        second = self.evaluator.generate_recommendations("bell", 0.8, noise)
        assert first == second


class TestSimulationResult:
    """Test suite for SimulationResult."""

    def _result(self, **overrides):
        fields = dict(
            algorithm="bell",
            num_qubits=2,
            state_vector=BELL_STATE,
            fidelity=0.98,
            quantum_advantage=1.0,
            is_valid=True,
            error_rate=0.02,
            execution_time=0.001,
            circuit_depth=2,
            gate_count=2,
        )
        fields.update(overrides)
        return SimulationResult(**fields)

    def test_invalid_fidelity(self):
        with pytest.raises(ValueError):
            self._result(fidelity=1.5)

    def test_negative_advantage(self):
        with pytest.raises(ValueError):
            self._result(quantum_advantage=-1.0)

    def test_state_vector_read_only(self):
        """The stored state vector is a private, frozen copy."""
        source = BELL_STATE.copy()
        result = self._result(state_vector=source)
        source[0] = 0
        assert result.state_vector[0] == pytest.approx(1 / np.sqrt(2))
        with pytest.raises(ValueError):
            result.state_vector[0] = 1

    def test_equality(self):
        assert self._result() == self._result()
        assert self._result() != self._result(fidelity=0.5)

    def test_probabilities(self):
        np.testing.assert_allclose(
            self._result().probabilities(), [0.5, 0, 0, 0.5], atol=1e-12
        )

    def test_to_dict(self):
        """Test conversion to dictionary."""
        data = self._result().to_dict()
        assert data["algorithm"] == "bell"
        assert data["metrics"]["fidelity"] == 0.98
        assert data["state_vector"][0]["real"] == pytest.approx(0.70710678)
        assert data["state_vector"][1] == {"real": 0.0, "imaginary": 0.0}
        assert data["recommendations"] == []
