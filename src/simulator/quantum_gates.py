"""
Gate catalog for state vector simulation.

This module provides the unitary matrices of the supported single- and
two-qubit gates as complex NumPy arrays, and the immutable ``Gate`` value
that places a catalog entry on specific qubits of a circuit.
"""

import numpy as np
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from typing import Optional, Sequence, Tuple

from .exceptions import ParameterError


class GateType(str, Enum):
    """Catalog of supported gate kinds."""

    I = "I"
    X = "X"
    Y = "Y"
    Z = "Z"
    H = "H"
    S = "S"
    T = "T"
    RX = "RX"
    RY = "RY"
    RZ = "RZ"
    PHASE = "PHASE"
    CNOT = "CNOT"
    CZ = "CZ"
    CPHASE = "CPHASE"
    SWAP = "SWAP"

    @property
    def num_qubits(self) -> int:
        """Number of qubits the gate acts on."""
        return 2 if self in TWO_QUBIT_GATES else 1

    @property
    def is_parameterized(self) -> bool:
        """Whether the gate takes a rotation angle."""
        return self in PARAMETERIZED_GATES


TWO_QUBIT_GATES = frozenset(
    {GateType.CNOT, GateType.CZ, GateType.CPHASE, GateType.SWAP}
)
PARAMETERIZED_GATES = frozenset(
    {GateType.RX, GateType.RY, GateType.RZ, GateType.PHASE, GateType.CPHASE}
)


@dataclass(frozen=True)
class Gate:
    """
    A gate kind applied to specific qubits.

    For two-qubit gates ``qubits[0]`` is the control and ``qubits[1]`` the
    target. SWAP treats both positions symmetrically.
    """

    kind: GateType
    qubits: Tuple[int, ...]
    angle: Optional[float] = None

    def __post_init__(self):
        """Validate gate arity, indices and angle."""
        try:
            kind = GateType(self.kind)
        except ValueError:
            raise ParameterError(f"Unknown gate: {self.kind}") from None
        object.__setattr__(self, "kind", kind)
        object.__setattr__(self, "qubits", tuple(int(q) for q in self.qubits))

        if len(self.qubits) != kind.num_qubits:
            raise ParameterError(
                f"{kind.value} gate requires {kind.num_qubits} qubit(s), "
                f"got {len(self.qubits)}"
            )
        if any(q < 0 for q in self.qubits):
            raise ParameterError(f"Qubit indices must be non-negative: {self.qubits}")
        if len(set(self.qubits)) != len(self.qubits):
            raise ParameterError(f"Qubit indices must be distinct: {self.qubits}")

        if kind.is_parameterized:
            if self.angle is None:
                raise ParameterError(f"{kind.value} gate requires a rotation angle")
            object.__setattr__(self, "angle", float(self.angle))
        elif self.angle is not None:
            raise ParameterError(f"{kind.value} gate does not take an angle")

    @property
    def control(self) -> Optional[int]:
        """Control qubit for two-qubit gates."""
        return self.qubits[0] if len(self.qubits) == 2 else None

    @property
    def target(self) -> int:
        """Target qubit."""
        return self.qubits[-1]

    def __str__(self) -> str:
        angle_str = f"({self.angle:.4f})" if self.angle is not None else ""
        qubits_str = ", ".join(map(str, self.qubits))
        return f"{self.kind.value}{angle_str} on qubits [{qubits_str}]"


class QuantumGates:
    """
    Gate catalog.

    Fixed gates are exposed as cached properties named after their
    ``GateType`` value; angle gates are methods taking radians.
    """

    def __init__(self):
        self._sqrt2 = np.sqrt(2)

    @property
    @lru_cache(maxsize=1)
    def I(self) -> np.ndarray:
        """Identity gate."""
        return np.array([[1, 0], [0, 1]], dtype=complex)

    @property
    @lru_cache(maxsize=1)
    def X(self) -> np.ndarray:
        """Pauli-X (NOT) gate."""
        return np.array([[0, 1], [1, 0]], dtype=complex)

    @property
    @lru_cache(maxsize=1)
    def Y(self) -> np.ndarray:
        """Pauli-Y gate."""
        return np.array([[0, -1j], [1j, 0]], dtype=complex)

    @property
    @lru_cache(maxsize=1)
    def Z(self) -> np.ndarray:
        """Pauli-Z gate."""
        return np.array([[1, 0], [0, -1]], dtype=complex)

    @property
    @lru_cache(maxsize=1)
    def H(self) -> np.ndarray:
        """Hadamard gate."""
        return np.array([[1, 1], [1, -1]], dtype=complex) / self._sqrt2

    @property
    @lru_cache(maxsize=1)
    def S(self) -> np.ndarray:
        """Phase gate (S gate)."""
        return np.array([[1, 0], [0, 1j]], dtype=complex)

    @property
    @lru_cache(maxsize=1)
    def T(self) -> np.ndarray:
        """T gate (π/8 gate)."""
        return np.array([[1, 0], [0, np.exp(1j * np.pi / 4)]], dtype=complex)

    def Rx(self, theta: float) -> np.ndarray:
        """
        Rotation around X-axis.

        Args:
            theta: Rotation angle in radians

        Returns:
            2x2 rotation matrix
        """
        cos = np.cos(theta / 2)
        sin = np.sin(theta / 2)
        return np.array([[cos, -1j * sin], [-1j * sin, cos]], dtype=complex)

    def Ry(self, theta: float) -> np.ndarray:
        """
        Rotation around Y-axis.

        Args:
            theta: Rotation angle in radians

        Returns:
            2x2 rotation matrix
        """
        cos = np.cos(theta / 2)
        sin = np.sin(theta / 2)
        return np.array([[cos, -sin], [sin, cos]], dtype=complex)

    def Rz(self, theta: float) -> np.ndarray:
        """
        Rotation around Z-axis, in phase form diag(1, e^{iθ}).

        This differs from the symmetric form only by a global phase.

        Args:
            theta: Rotation angle in radians

        Returns:
            2x2 rotation matrix
        """
        return self.Phase(theta)

    def Phase(self, theta: float) -> np.ndarray:
        """Phase shift by angle theta."""
        return np.array([[1, 0], [0, np.exp(1j * theta)]], dtype=complex)

    @property
    @lru_cache(maxsize=1)
    def CNOT(self) -> np.ndarray:
        """Controlled-NOT (CNOT) gate."""
        return np.array(
            [[1, 0, 0, 0], [0, 1, 0, 0], [0, 0, 0, 1], [0, 0, 1, 0]], dtype=complex
        )

    @property
    @lru_cache(maxsize=1)
    def CZ(self) -> np.ndarray:
        """Controlled-Z gate."""
        return np.array(
            [[1, 0, 0, 0], [0, 1, 0, 0], [0, 0, 1, 0], [0, 0, 0, -1]], dtype=complex
        )

    def CPhase(self, theta: float) -> np.ndarray:
        """
        Controlled phase rotation.

        Args:
            theta: Rotation angle in radians

        Returns:
            4x4 controlled rotation matrix
        """
        return np.array(
            [[1, 0, 0, 0], [0, 1, 0, 0], [0, 0, 1, 0], [0, 0, 0, np.exp(1j * theta)]],
            dtype=complex,
        )

    @property
    @lru_cache(maxsize=1)
    def SWAP(self) -> np.ndarray:
        """SWAP gate."""
        return np.array(
            [[1, 0, 0, 0], [0, 0, 1, 0], [0, 1, 0, 0], [0, 0, 0, 1]], dtype=complex
        )

    def matrix(self, kind: GateType, angle: Optional[float] = None) -> np.ndarray:
        """
        Get the unitary for a gate kind.

        Args:
            kind: Gate kind
            angle: Rotation angle for parameterized gates

        Returns:
            2x2 or 4x4 complex matrix
        """
        kind = GateType(kind)
        if kind.is_parameterized and angle is None:
            raise ParameterError(f"{kind.value} gate requires a rotation angle")

        if kind == GateType.RX:
            return self.Rx(angle)
        elif kind == GateType.RY:
            return self.Ry(angle)
        elif kind == GateType.RZ:
            return self.Rz(angle)
        elif kind == GateType.PHASE:
            return self.Phase(angle)
        elif kind == GateType.CPHASE:
            return self.CPhase(angle)
        return getattr(self, kind.value)

    def matrix_for(self, gate: Gate) -> np.ndarray:
        """Get the unitary for a placed gate."""
        return self.matrix(gate.kind, gate.angle)


def single_qubit(kind: GateType, qubit: int, angle: Optional[float] = None) -> Gate:
    """Shorthand for a single-qubit gate."""
    return Gate(kind, (qubit,), angle)


def controlled(
    kind: GateType, control: int, target: int, angle: Optional[float] = None
) -> Gate:
    """Shorthand for a two-qubit gate with control and target roles."""
    return Gate(kind, (control, target), angle)


def gates_on(kind: GateType, qubits: Sequence[int]) -> Tuple[Gate, ...]:
    """Apply the same single-qubit gate to each of the given qubits."""
    return tuple(single_qubit(kind, q) for q in qubits)
