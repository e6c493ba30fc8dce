"""
Built-in quantum algorithm templates and description matching.
"""

from typing import List

from .circuit_generator import MIN_QUBITS, generate_circuit
from .detection import AlgorithmDetector, KeywordAlgorithmDetector

__all__: List[str] = [
    "MIN_QUBITS",
    "generate_circuit",
    "AlgorithmDetector",
    "KeywordAlgorithmDetector",
]
