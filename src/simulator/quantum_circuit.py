"""
Immutable circuit description consumed by the state vector engine.

A circuit is built once, by the circuit generator or by hand, and is never
mutated afterwards. Depth follows the usual simplification of counting every
gate as its own layer.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, Optional, Tuple

from .exceptions import ParameterError
from .quantum_gates import Gate


class AlgorithmId(str, Enum):
    """Algorithm templates known to the circuit generator."""

    BELL = "bell"
    GHZ = "ghz"
    GROVER = "grover"
    DEUTSCH_JOZSA = "deutsch-jozsa"
    TELEPORTATION = "teleportation"
    SUPERDENSE = "superdense"
    QFT = "qft"
    GENERIC = "generic"

    @classmethod
    def parse(cls, identifier) -> "AlgorithmId":
        """Resolve an identifier, falling back to GENERIC on no match."""
        if isinstance(identifier, cls):
            return identifier
        try:
            return cls(str(identifier).strip().lower())
        except ValueError:
            return cls.GENERIC


class CircuitComplexity(str, Enum):
    """Complexity classification by qubit count."""

    SIMPLE = "simple"  # 1-5 qubits
    MODERATE = "moderate"  # 6-15 qubits
    ADVANCED = "advanced"  # 16-25 qubits
    RESEARCH = "research"  # 25+ qubits

    @classmethod
    def for_qubits(cls, num_qubits: int) -> "CircuitComplexity":
        """Classify a circuit by its width."""
        if num_qubits <= 5:
            return cls.SIMPLE
        if num_qubits <= 15:
            return cls.MODERATE
        if num_qubits <= 25:
            return cls.ADVANCED
        return cls.RESEARCH


class MeasurementBasis(str, Enum):
    """Measurement bases."""

    COMPUTATIONAL = "computational"


@dataclass(frozen=True)
class MeasurementOperation:
    """Measurement of one qubit into one classical bit."""

    qubit: int
    classical_bit: int
    basis: MeasurementBasis = MeasurementBasis.COMPUTATIONAL


@dataclass(frozen=True)
class Circuit:
    """
    Named, immutable quantum program.

    Gate qubit indices are checked against ``num_qubits`` by the engine at
    simulation time, not here.
    """

    name: str
    num_qubits: int
    gates: Tuple[Gate, ...] = ()
    measurements: Tuple[MeasurementOperation, ...] = ()
    description: str = ""
    tags: Tuple[str, ...] = ()
    complexity: Optional[CircuitComplexity] = None
    algorithm: Optional[AlgorithmId] = None

    def __post_init__(self):
        """Validate qubit count and fill derived fields."""
        if self.num_qubits < 1:
            raise ParameterError(
                f"Circuit requires at least 1 qubit, got {self.num_qubits}"
            )

        object.__setattr__(self, "gates", tuple(self.gates))
        object.__setattr__(self, "tags", tuple(self.tags))

        measurements = tuple(self.measurements) or tuple(
            MeasurementOperation(q, q) for q in range(self.num_qubits)
        )
        for measurement in measurements:
            if not 0 <= measurement.qubit < self.num_qubits:
                raise ParameterError(
                    f"Measurement references qubit {measurement.qubit} "
                    f"outside a {self.num_qubits}-qubit circuit"
                )
        object.__setattr__(self, "measurements", measurements)

        if self.complexity is None:
            object.__setattr__(
                self, "complexity", CircuitComplexity.for_qubits(self.num_qubits)
            )
        if self.algorithm is not None:
            object.__setattr__(self, "algorithm", AlgorithmId(self.algorithm))

    @classmethod
    def from_gates(
        cls, name: str, num_qubits: int, gates: Iterable[Gate], **metadata
    ) -> "Circuit":
        """Build a circuit from any iterable of gates."""
        return cls(name=name, num_qubits=num_qubits, gates=tuple(gates), **metadata)

    @property
    def gate_count(self) -> int:
        """Total number of gate applications."""
        return len(self.gates)

    @property
    def depth(self) -> int:
        """Circuit depth, counting each gate as one layer."""
        return len(self.gates)

    def gate_counts(self) -> Dict[str, int]:
        """Get count of each gate type used."""
        counts: Dict[str, int] = {}
        for gate in self.gates:
            counts[gate.kind.value] = counts.get(gate.kind.value, 0) + 1
        return counts

    def max_qubit_index(self) -> int:
        """Highest qubit index referenced by any gate, or -1 for no gates."""
        return max((max(gate.qubits) for gate in self.gates), default=-1)

    def __str__(self) -> str:
        """String representation of circuit."""
        lines = [f"Circuit '{self.name}' ({self.num_qubits} qubits)"]
        for i, gate in enumerate(self.gates):
            lines.append(f"  {i}: {gate}")
        return "\n".join(lines)
