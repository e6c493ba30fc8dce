"""
Circuit templates for the built-in quantum algorithms.

Each template maps a qubit count to a concrete, immutable ``Circuit``. The
templates are the simplified textbook forms used for validation runs:
teleportation applies its corrections unconditionally and the GHZ template
fans out from qubit 0 instead of chaining.
"""

import logging
import math
from typing import Callable, Dict, List, Union

from ..simulator.exceptions import ParameterError
from ..simulator.quantum_circuit import AlgorithmId, Circuit
from ..simulator.quantum_gates import (
    Gate,
    GateType,
    controlled,
    gates_on,
    single_qubit,
)

logger = logging.getLogger(__name__)

MAX_QUBITS = 20
MAX_GROVER_ITERATIONS = 3

MIN_QUBITS: Dict[AlgorithmId, int] = {
    AlgorithmId.BELL: 2,
    AlgorithmId.SUPERDENSE: 2,
    AlgorithmId.QFT: 2,
    AlgorithmId.GROVER: 2,
    AlgorithmId.GHZ: 3,
    AlgorithmId.DEUTSCH_JOZSA: 3,
    AlgorithmId.TELEPORTATION: 3,
    AlgorithmId.GENERIC: 1,
}

DESCRIPTIONS: Dict[AlgorithmId, str] = {
    AlgorithmId.BELL: "Bell state preparation: (|00⟩ + |11⟩)/√2",
    AlgorithmId.GHZ: "GHZ state preparation: (|0...0⟩ + |1...1⟩)/√2",
    AlgorithmId.GROVER: "Grover search with phase oracle on the last qubit",
    AlgorithmId.DEUTSCH_JOZSA: "Deutsch-Jozsa with a balanced phase oracle",
    AlgorithmId.TELEPORTATION: "Quantum teleportation with deterministic corrections",
    AlgorithmId.SUPERDENSE: "Superdense coding of the payload '11'",
    AlgorithmId.QFT: "Quantum Fourier transform with qubit-order reversal",
    AlgorithmId.GENERIC: "Generic superposition and entanglement circuit",
}

TAGS: Dict[AlgorithmId, tuple] = {
    AlgorithmId.BELL: ("entanglement",),
    AlgorithmId.GHZ: ("entanglement", "multi-qubit"),
    AlgorithmId.GROVER: ("search", "amplitude-amplification"),
    AlgorithmId.DEUTSCH_JOZSA: ("oracle",),
    AlgorithmId.TELEPORTATION: ("communication", "entanglement"),
    AlgorithmId.SUPERDENSE: ("communication", "entanglement"),
    AlgorithmId.QFT: ("fourier",),
    AlgorithmId.GENERIC: ("generic",),
}


def bell_gates(num_qubits: int) -> List[Gate]:
    """H on qubit 0, then CNOT(0 -> 1)."""
    return [single_qubit(GateType.H, 0), controlled(GateType.CNOT, 0, 1)]


def ghz_gates(num_qubits: int) -> List[Gate]:
    """H on qubit 0, then CNOT from qubit 0 to every other qubit."""
    gates = [single_qubit(GateType.H, 0)]
    for i in range(1, num_qubits):
        gates.append(controlled(GateType.CNOT, 0, i))
    return gates


def grover_iterations(num_qubits: int) -> int:
    """Optimal iteration count, capped for tractability."""
    optimal = math.floor(math.pi / 4 * math.sqrt(2**num_qubits))
    return min(optimal, MAX_GROVER_ITERATIONS)


def grover_gates(num_qubits: int) -> List[Gate]:
    """Uniform superposition followed by oracle + diffusion iterations."""
    all_qubits = range(num_qubits)
    last = num_qubits - 1

    gates = list(gates_on(GateType.H, all_qubits))
    for _ in range(grover_iterations(num_qubits)):
        # Oracle
        gates.append(single_qubit(GateType.Z, last))
        # Diffusion
        gates.extend(gates_on(GateType.H, all_qubits))
        gates.extend(gates_on(GateType.X, all_qubits))
        gates.append(single_qubit(GateType.Z, last))
        gates.extend(gates_on(GateType.X, all_qubits))
        gates.extend(gates_on(GateType.H, all_qubits))
    return gates


def deutsch_jozsa_gates(num_qubits: int) -> List[Gate]:
    """Ancilla in |1⟩, Hadamards, balanced phase oracle, final Hadamards."""
    ancilla = num_qubits - 1
    gates = [single_qubit(GateType.X, ancilla)]
    gates.extend(gates_on(GateType.H, range(num_qubits)))
    gates.append(single_qubit(GateType.Z, 0))
    gates.extend(gates_on(GateType.H, range(ancilla)))
    return gates


def teleportation_gates(num_qubits: int) -> List[Gate]:
    """Bell pair on 1-2, Bell-measurement basis change on 0-1, corrections on 2."""
    return [
        single_qubit(GateType.H, 1),
        controlled(GateType.CNOT, 1, 2),
        controlled(GateType.CNOT, 0, 1),
        single_qubit(GateType.H, 0),
        single_qubit(GateType.X, 2),
        single_qubit(GateType.Z, 2),
    ]


def superdense_gates(num_qubits: int) -> List[Gate]:
    """Bell pair, encode '11' with Z then X on qubit 0, decode."""
    return [
        single_qubit(GateType.H, 0),
        controlled(GateType.CNOT, 0, 1),
        single_qubit(GateType.Z, 0),
        single_qubit(GateType.X, 0),
        controlled(GateType.CNOT, 0, 1),
        single_qubit(GateType.H, 0),
    ]


def qft_gates(num_qubits: int) -> List[Gate]:
    """Hadamard and controlled-phase ladder, then a SWAP network."""
    gates = []
    for i in range(num_qubits):
        gates.append(single_qubit(GateType.H, i))
        for j in range(i + 1, num_qubits):
            gates.append(
                controlled(GateType.CPHASE, j, i, angle=math.pi / 2 ** (j - i))
            )
    for i in range(num_qubits // 2):
        gates.append(Gate(GateType.SWAP, (i, num_qubits - 1 - i)))
    return gates


def generic_gates(num_qubits: int) -> List[Gate]:
    """Hadamard on up to four qubits plus one CNOT when possible."""
    gates = list(gates_on(GateType.H, range(min(num_qubits, 4))))
    if num_qubits > 1:
        gates.append(controlled(GateType.CNOT, 0, 1))
    return gates


TEMPLATES: Dict[AlgorithmId, Callable[[int], List[Gate]]] = {
    AlgorithmId.BELL: bell_gates,
    AlgorithmId.GHZ: ghz_gates,
    AlgorithmId.GROVER: grover_gates,
    AlgorithmId.DEUTSCH_JOZSA: deutsch_jozsa_gates,
    AlgorithmId.TELEPORTATION: teleportation_gates,
    AlgorithmId.SUPERDENSE: superdense_gates,
    AlgorithmId.QFT: qft_gates,
    AlgorithmId.GENERIC: generic_gates,
}


def generate_circuit(
    identifier: Union[AlgorithmId, str], num_qubits: int
) -> Circuit:
    """
    Build the circuit for an algorithm template.

    Args:
        identifier: Algorithm identifier; unknown strings fall back to generic
        num_qubits: Number of qubits

    Returns:
        Immutable circuit with its gate sequence and metadata

    Raises:
        ParameterError: If the qubit count is below the template minimum or
            above the simulation ceiling
    """
    algorithm = AlgorithmId.parse(identifier)
    minimum = MIN_QUBITS[algorithm]

    if num_qubits < minimum:
        raise ParameterError(
            f"{algorithm.value} requires at least {minimum} qubits, got {num_qubits}"
        )
    if num_qubits > MAX_QUBITS:
        raise ParameterError(
            f"{algorithm.value} supports at most {MAX_QUBITS} qubits, got {num_qubits}"
        )

    gates = TEMPLATES[algorithm](num_qubits)
    circuit = Circuit(
        name=f"{algorithm.value}-{num_qubits}q",
        num_qubits=num_qubits,
        gates=tuple(gates),
        description=DESCRIPTIONS[algorithm],
        tags=TAGS[algorithm],
        algorithm=algorithm,
    )

    logger.debug(
        f"Generated {circuit.name}: depth={circuit.depth}, gates={circuit.gate_count}"
    )
    return circuit
