"""
State vector simulation of quantum circuits.

This module contains:
- Gate catalog and immutable circuit model
- State vector engine with bit-indexed gate application
- Approximate amplitude-level noise channels
- Fidelity and quantum advantage metrics
"""

from typing import List

from .complex_number import Complex
from .exceptions import (
    ParameterError,
    ResourceError,
    SimulationError,
    SimulationTimeoutError,
)
from .quantum_gates import Gate, GateType, QuantumGates
from .quantum_circuit import AlgorithmId, Circuit, CircuitComplexity
from .noise_models import NoiseModel, NoiseType, apply_noise
from .state_vector import StateEvolution, StateVectorEngine
from .metrics import MetricsEvaluator, SimulationResult

__all__: List[str] = [
    "Complex",
    "SimulationError",
    "ParameterError",
    "ResourceError",
    "SimulationTimeoutError",
    "Gate",
    "GateType",
    "QuantumGates",
    "AlgorithmId",
    "Circuit",
    "CircuitComplexity",
    "NoiseModel",
    "NoiseType",
    "apply_noise",
    "StateEvolution",
    "StateVectorEngine",
    "MetricsEvaluator",
    "SimulationResult",
]
