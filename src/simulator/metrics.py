"""
Simulation quality metrics.

Fidelity here is an approximate score: an algorithm-family baseline reduced
by how far the probability mass deviated from 1. No reference state is kept,
so it is not a state-overlap fidelity. Quantum advantage figures are
illustrative closed-form estimates, not measured speedups.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

import numpy as np

from .complex_number import Complex
from .noise_models import NoiseModel
from .quantum_circuit import AlgorithmId, Circuit
from .state_vector import StateEvolution

logger = logging.getLogger(__name__)

DEFAULT_FIDELITY_THRESHOLD = 0.95
ERROR_CORRECTION_THRESHOLD = 0.9
RESILIENCE_THRESHOLD = 0.8
GATE_ERROR_THRESHOLD = 0.01

# Empirically chosen baselines per algorithm family
BASE_FIDELITY = {
    "bell": 0.98,
    "grover": 0.92,
    "qft": 0.96,
}
DEFAULT_BASE_FIDELITY = 0.95


@dataclass(frozen=True, eq=False)
class SimulationResult:
    """Result from one simulation run."""

    algorithm: str
    num_qubits: int
    state_vector: np.ndarray
    fidelity: float
    quantum_advantage: float
    is_valid: bool
    error_rate: float
    execution_time: float
    circuit_depth: int
    gate_count: int
    recommendations: Tuple[str, ...] = ()
    probability_retained: float = 1.0
    circuit_name: str = ""

    def __post_init__(self):
        """Validate simulation result."""
        if not 0 <= self.fidelity <= 1:
            raise ValueError("Fidelity must be in [0,1]")
        if self.quantum_advantage < 0:
            raise ValueError("Quantum advantage must be non-negative")

        state_vector = np.array(self.state_vector, dtype=complex, copy=True)
        state_vector.setflags(write=False)
        object.__setattr__(self, "state_vector", state_vector)
        object.__setattr__(self, "recommendations", tuple(self.recommendations))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SimulationResult):
            return NotImplemented
        return (
            self.algorithm == other.algorithm
            and self.num_qubits == other.num_qubits
            and np.array_equal(self.state_vector, other.state_vector)
            and self.fidelity == other.fidelity
            and self.quantum_advantage == other.quantum_advantage
            and self.is_valid == other.is_valid
            and self.error_rate == other.error_rate
            and self.execution_time == other.execution_time
            and self.circuit_depth == other.circuit_depth
            and self.gate_count == other.gate_count
            and self.recommendations == other.recommendations
            and self.probability_retained == other.probability_retained
            and self.circuit_name == other.circuit_name
        )

    __hash__ = object.__hash__

    def probabilities(self) -> np.ndarray:
        """Measurement probabilities for all basis states."""
        return np.abs(self.state_vector) ** 2

    def amplitudes(self) -> List[Complex]:
        """Final amplitudes as Complex values."""
        return [Complex.from_value(a) for a in self.state_vector]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "algorithm": self.algorithm,
            "circuit_name": self.circuit_name,
            "num_qubits": self.num_qubits,
            "state_vector": [a.to_dict() for a in self.amplitudes()],
            "metrics": {
                "fidelity": self.fidelity,
                "quantum_advantage": self.quantum_advantage,
                "error_rate": self.error_rate,
                "probability_retained": self.probability_retained,
            },
            "is_valid": self.is_valid,
            "execution_time": self.execution_time,
            "circuit_depth": self.circuit_depth,
            "gate_count": self.gate_count,
            "recommendations": list(self.recommendations),
        }


def algorithm_label(circuit: Circuit) -> str:
    """Label used to pick metric families: the algorithm id, else the name."""
    if circuit.algorithm is not None:
        return circuit.algorithm.value
    return circuit.name.lower()


def base_fidelity(algorithm: str) -> float:
    """Baseline fidelity for an algorithm family."""
    label = algorithm.lower()
    for family, value in BASE_FIDELITY.items():
        if family in label:
            return value
    return DEFAULT_BASE_FIDELITY


def estimate_quantum_advantage(algorithm: str, num_qubits: int) -> float:
    """
    Closed-form speedup estimate for an algorithm family.

    Args:
        algorithm: Algorithm identifier or circuit name
        num_qubits: Circuit width

    Returns:
        Dimensionless speedup multiplier
    """
    label = algorithm.lower()

    if "grover" in label:
        return float(np.sqrt(2.0**num_qubits))
    elif "shor" in label or "factor" in label:
        return float(2.0 ** (num_qubits / 2))
    elif "qft" in label or "fourier" in label:
        return float(2.0 ** (num_qubits / 3))
    elif "deutsch" in label:
        return float(2.0 ** (num_qubits - 1))
    return max(1.0, num_qubits * 0.5)


class MetricsEvaluator:
    """Turns a final state and circuit metadata into a SimulationResult."""

    def __init__(
        self,
        fidelity_threshold: float = DEFAULT_FIDELITY_THRESHOLD,
        tolerance: float = 1e-6,
    ):
        """
        Initialize evaluator.

        Args:
            fidelity_threshold: Minimum fidelity for a valid result
            tolerance: Probability deviation treated as floating-point drift
        """
        self.fidelity_threshold = fidelity_threshold
        self.tolerance = tolerance

    def calculate_fidelity(self, evolution: StateEvolution, algorithm: str) -> float:
        """Baseline fidelity reduced by the observed probability deviation."""
        deviation = abs(1.0 - evolution.total_probability)
        deviation += 1.0 - evolution.probability_retained
        if deviation < self.tolerance:
            deviation = 0.0
        fidelity = base_fidelity(algorithm) - deviation
        return float(min(1.0, max(0.0, fidelity)))

    def generate_recommendations(
        self, algorithm: str, fidelity: float, noise: Optional[NoiseModel] = None
    ) -> List[str]:
        """Deterministic advice derived from fidelity and noise levels."""
        recommendations = []

        if fidelity < ERROR_CORRECTION_THRESHOLD:
            recommendations.append("Consider error correction codes")
            recommendations.append("Optimize gate sequence for noise resilience")

        if noise is not None:
            if noise.noise_resilience() < RESILIENCE_THRESHOLD:
                recommendations.append(
                    "Noise resilience low - validate on real hardware before deployment"
                )
            if noise.gate_error > GATE_ERROR_THRESHOLD:
                recommendations.append(
                    "High gate error rate detected - calibrate hardware"
                )

        label = algorithm.lower()
        if label == AlgorithmId.BELL.value and fidelity < 0.98:
            recommendations.append(
                "Bell state fidelity low - check CNOT gate calibration"
            )
        elif label == AlgorithmId.GHZ.value:
            recommendations.append("Multi-qubit entanglement sensitive to decoherence")
        elif label == AlgorithmId.DEUTSCH_JOZSA.value:
            recommendations.append(
                "Ensure oracle implementation matches problem structure"
            )

        return recommendations

    def evaluate(
        self,
        circuit: Circuit,
        evolution: StateEvolution,
        noise: Optional[NoiseModel] = None,
        execution_time: float = 0.0,
    ) -> SimulationResult:
        """
        Build the result record for a finished run.

        Args:
            circuit: Circuit that was executed
            evolution: Final state from the engine
            noise: Noise model used for the run, if any
            execution_time: Wall-clock run time in seconds

        Returns:
            Immutable simulation result
        """
        algorithm = algorithm_label(circuit)
        fidelity = self.calculate_fidelity(evolution, algorithm)

        result = SimulationResult(
            algorithm=algorithm,
            num_qubits=circuit.num_qubits,
            state_vector=evolution.state_vector,
            fidelity=fidelity,
            quantum_advantage=estimate_quantum_advantage(
                algorithm, circuit.num_qubits
            ),
            is_valid=fidelity >= self.fidelity_threshold,
            error_rate=1.0 - fidelity,
            execution_time=execution_time,
            circuit_depth=circuit.depth,
            gate_count=circuit.gate_count,
            recommendations=tuple(
                self.generate_recommendations(algorithm, fidelity, noise)
            ),
            probability_retained=evolution.probability_retained,
            circuit_name=circuit.name,
        )

        logger.debug(
            f"Evaluated '{circuit.name}': fidelity={fidelity:.3f}, "
            f"advantage={result.quantum_advantage:.2f}x"
        )
        return result
