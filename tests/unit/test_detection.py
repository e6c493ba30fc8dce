"""
Unit tests for algorithm description matching.
"""

import pytest
from src.algorithms.detection import KeywordAlgorithmDetector
from src.simulator.quantum_circuit import AlgorithmId


class TestKeywordAlgorithmDetector:
    """Test suite for KeywordAlgorithmDetector."""

    def setup_method(self):
        """Set up test fixtures."""
        self.detector = KeywordAlgorithmDetector()

    @pytest.mark.parametrize(
        "description, expected",
        [
            ("Prepare a Bell pair", AlgorithmId.BELL),
            ("GHZ state on five qubits", AlgorithmId.GHZ),
            ("unstructured search", AlgorithmId.GROVER),
            ("Deutsch oracle", AlgorithmId.DEUTSCH_JOZSA),
            ("teleport a qubit", AlgorithmId.TELEPORTATION),
            ("dense coding", AlgorithmId.SUPERDENSE),
            ("quantum Fourier transform", AlgorithmId.QFT),
            ("something else", AlgorithmId.GENERIC),
            ("", AlgorithmId.GENERIC),
        ],
    )
    def test_detect(self, description, expected):
        assert self.detector.detect(description) is expected

    def test_first_match_wins(self):
        assert self.detector.detect("bell state via grover") is AlgorithmId.BELL

    def test_custom_keywords(self):
        detector = KeywordAlgorithmDetector([(AlgorithmId.QFT, ["Spectral"])])
        assert detector.detect("spectral analysis") is AlgorithmId.QFT
        assert detector.detect("bell") is AlgorithmId.GENERIC
