"""
Resolution of free-text algorithm descriptions to template identifiers.

The simulation core never depends on this heuristic; callers pass any
object satisfying ``AlgorithmDetector`` to the service.
"""

from typing import Protocol, Sequence, Tuple

from ..simulator.quantum_circuit import AlgorithmId


class AlgorithmDetector(Protocol):
    """Maps a description to an algorithm identifier."""

    def detect(self, description: str) -> AlgorithmId:
        ...


# Checked in order; the first match wins
DEFAULT_KEYWORDS: Tuple[Tuple[AlgorithmId, Tuple[str, ...]], ...] = (
    (AlgorithmId.BELL, ("bell",)),
    (AlgorithmId.GHZ, ("ghz",)),
    (AlgorithmId.GROVER, ("grover", "search")),
    (AlgorithmId.DEUTSCH_JOZSA, ("deutsch", "jozsa")),
    (AlgorithmId.TELEPORTATION, ("teleport",)),
    (AlgorithmId.SUPERDENSE, ("superdense", "dense")),
    (AlgorithmId.QFT, ("qft", "fourier")),
)


class KeywordAlgorithmDetector:
    """Substring matching against a keyword table."""

    def __init__(
        self,
        keywords: Sequence[Tuple[AlgorithmId, Sequence[str]]] = DEFAULT_KEYWORDS,
    ):
        self.keywords = [
            (AlgorithmId(algorithm), tuple(k.lower() for k in words))
            for algorithm, words in keywords
        ]

    def detect(self, description: str) -> AlgorithmId:
        """Return the first matching algorithm, or GENERIC."""
        text = (description or "").lower()
        for algorithm, words in self.keywords:
            if any(word in text for word in words):
                return algorithm
        return AlgorithmId.GENERIC
