"""
State vector engine.

Executes a circuit against a private amplitude array of length 2^n. Gates are
applied through bit-indexed amplitude updates rather than by expanding them
into 2^n x 2^n matrices. Bit ``q`` of a basis index is the value of qubit
``q``.
"""

import logging
from dataclasses import dataclass
from typing import Optional

import numpy as np

from .exceptions import ParameterError, ResourceError
from .noise_models import NoiseModel, apply_noise, channel_survival
from .quantum_circuit import Circuit
from .quantum_gates import Gate, GateType, QuantumGates

logger = logging.getLogger(__name__)

DEFAULT_MAX_QUBITS = 20


@dataclass
class StateEvolution:
    """Final state of one engine run."""

    state_vector: np.ndarray
    probability_retained: float = 1.0
    gates_applied: int = 0

    @property
    def total_probability(self) -> float:
        """Sum of squared amplitude magnitudes."""
        return float(np.sum(np.abs(self.state_vector) ** 2))


class StateVectorEngine:
    """
    Quantum circuit executor using state vector representation.

    The engine holds no per-run state, so one instance may serve
    concurrent runs; each run allocates its own amplitude array.
    """

    def __init__(
        self,
        max_qubits: int = DEFAULT_MAX_QUBITS,
        precision: float = 1e-10,
        gates: Optional[QuantumGates] = None,
    ):
        """
        Initialize the engine.

        Args:
            max_qubits: Largest circuit width the engine will allocate
            precision: Numerical precision for calculations
            gates: Gate catalog to draw matrices from
        """
        self.max_qubits = max_qubits
        self.precision = precision
        self.gates = gates or QuantumGates()

    def initialize_state(self, num_qubits: int) -> np.ndarray:
        """Allocate the |00...0⟩ state."""
        self._check_width(num_qubits)
        state_vector = np.zeros(2**num_qubits, dtype=complex)
        state_vector[0] = 1.0
        return state_vector

    def run(
        self, circuit: Circuit, noise: Optional[NoiseModel] = None
    ) -> StateEvolution:
        """
        Execute a circuit from |00...0⟩.

        Args:
            circuit: Circuit to execute
            noise: Optional noise applied after every gate

        Returns:
            Final state and the probability retained through noise
        """
        self._check_width(circuit.num_qubits)
        highest = circuit.max_qubit_index()
        if highest >= circuit.num_qubits:
            raise ParameterError(
                f"Gate references qubit {highest} in a "
                f"{circuit.num_qubits}-qubit circuit"
            )

        state_vector = self.initialize_state(circuit.num_qubits)
        retained = 1.0
        # Losses are measured against the noise-free trajectory
        ideal = state_vector.copy() if noise is not None else None

        for gate in circuit.gates:
            self.apply_gate(state_vector, gate)
            if noise is not None:
                self.apply_gate(ideal, gate)
                state_vector, _ = apply_noise(state_vector, noise, self.precision)
                retained *= channel_survival(ideal, noise)

        logger.debug(
            f"Executed '{circuit.name}': {circuit.gate_count} gates on "
            f"{circuit.num_qubits} qubits (retained={retained:.6f})"
        )
        return StateEvolution(state_vector, retained, circuit.gate_count)

    def apply_gate(self, state_vector: np.ndarray, gate: Gate) -> None:
        """
        Apply a gate to the state vector in place.

        Args:
            state_vector: Amplitude array to update
            gate: Gate to apply
        """
        num_qubits = int(np.log2(state_vector.shape[0]))
        for qubit in gate.qubits:
            if qubit >= num_qubits:
                raise ParameterError(
                    f"Gate {gate.kind.value} targets qubit {qubit} "
                    f"but state has {num_qubits} qubits"
                )

        matrix = self.gates.matrix_for(gate)

        if gate.kind == GateType.CNOT:
            self.apply_cnot(state_vector, gate.qubits[0], gate.qubits[1])
        elif gate.kind == GateType.SWAP:
            self.apply_swap(state_vector, gate.qubits[0], gate.qubits[1])
        elif gate.kind.num_qubits == 2:
            self.apply_controlled(
                state_vector, matrix[2:, 2:], gate.qubits[0], gate.qubits[1]
            )
        else:
            self.apply_single_qubit_gate(state_vector, matrix, gate.qubits[0])

    def apply_single_qubit_gate(
        self, state_vector: np.ndarray, matrix: np.ndarray, qubit: int
    ) -> None:
        """
        Apply a 2x2 unitary to one qubit.

        Each index i with bit ``qubit`` clear is paired with i | (1 << qubit).
        Both old amplitudes are read before either slot is written.
        """
        indices = np.arange(state_vector.shape[0])
        zero = indices[((indices >> qubit) & 1) == 0]
        one = zero | (1 << qubit)
        self._mix_pairs(state_vector, matrix, zero, one)

    def apply_cnot(self, state_vector: np.ndarray, control: int, target: int) -> None:
        """Swap amplitudes across the target bit wherever the control bit is 1."""
        indices = np.arange(state_vector.shape[0])
        base = indices[
            (((indices >> control) & 1) == 1) & (((indices >> target) & 1) == 0)
        ]
        flipped = base | (1 << target)
        state_vector[base], state_vector[flipped] = (
            state_vector[flipped],
            state_vector[base],
        )

    def apply_controlled(
        self,
        state_vector: np.ndarray,
        sub_matrix: np.ndarray,
        control: int,
        target: int,
    ) -> None:
        """Apply a 2x2 unitary to the target within the control-1 subspace."""
        indices = np.arange(state_vector.shape[0])
        base = indices[
            (((indices >> control) & 1) == 1) & (((indices >> target) & 1) == 0)
        ]
        self._mix_pairs(state_vector, sub_matrix, base, base | (1 << target))

    def apply_swap(self, state_vector: np.ndarray, qubit_a: int, qubit_b: int) -> None:
        """Exchange two qubits."""
        indices = np.arange(state_vector.shape[0])
        base = indices[
            (((indices >> qubit_a) & 1) == 1) & (((indices >> qubit_b) & 1) == 0)
        ]
        partner = base ^ (1 << qubit_a) ^ (1 << qubit_b)
        state_vector[base], state_vector[partner] = (
            state_vector[partner],
            state_vector[base],
        )

    @staticmethod
    def _mix_pairs(
        state_vector: np.ndarray,
        matrix: np.ndarray,
        zero: np.ndarray,
        one: np.ndarray,
    ) -> None:
        # Fancy indexing copies, so amp0/amp1 are snapshots
        amp0 = state_vector[zero]
        amp1 = state_vector[one]
        state_vector[zero] = matrix[0, 0] * amp0 + matrix[0, 1] * amp1
        state_vector[one] = matrix[1, 0] * amp0 + matrix[1, 1] * amp1

    def _check_width(self, num_qubits: int) -> None:
        if num_qubits > self.max_qubits:
            raise ResourceError(
                f"{num_qubits} qubits exceeds the simulation ceiling of "
                f"{self.max_qubits} (2^{self.max_qubits} amplitudes)"
            )
        if num_qubits < 1:
            raise ParameterError(f"Invalid qubit count: {num_qubits}")
