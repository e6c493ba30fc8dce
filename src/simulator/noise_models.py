"""
Approximate noise model for state vector simulation.

The channels below act directly on the amplitude array rather than on a
density matrix, so they are a modeling simplification and will not agree
with a Kraus-operator simulation. They are applied in a fixed order after
every gate: depolarizing, then amplitude damping, then phase damping. The
vector is renormalized afterwards.
"""

import json
import logging
from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Dict, Optional, Tuple

import numpy as np

from .exceptions import ParameterError

logger = logging.getLogger(__name__)


class NoiseType(Enum):
    """Types of noise parameters."""

    DEPOLARIZING = "depolarizing"
    AMPLITUDE_DAMPING = "amplitude_damping"
    PHASE_DAMPING = "phase_damping"
    GATE_ERROR = "gate_error"


@dataclass(frozen=True)
class NoiseModel:
    """Probability-like noise parameters, each in [0, 1]."""

    depolarizing: float = 0.0
    amplitude_damping: float = 0.0
    phase_damping: float = 0.0
    gate_error: float = 0.0

    def __post_init__(self):
        """Validate noise parameters."""
        for noise_type in NoiseType:
            value = getattr(self, noise_type.value)
            if value is None or not np.isfinite(value) or not 0 <= value <= 1:
                raise ParameterError(
                    f"{noise_type.value} must be in [0,1], got {value}"
                )
            object.__setattr__(self, noise_type.value, float(value))

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "NoiseModel":
        """Build a noise model from a mapping, ignoring missing keys."""
        unknown = set(data) - {t.value for t in NoiseType}
        if unknown:
            raise ParameterError(f"Unknown noise parameters: {sorted(unknown)}")
        return cls(**data)

    @property
    def is_ideal(self) -> bool:
        """True when every parameter is zero."""
        return all(getattr(self, t.value) == 0.0 for t in NoiseType)

    def noise_resilience(self) -> float:
        """Fraction of the signal expected to survive all four parameters."""
        resilience = 1.0
        for noise_type in NoiseType:
            resilience *= 1.0 - getattr(self, noise_type.value)
        return resilience

    def canonical(self) -> str:
        """Canonical JSON serialization used in cache keys."""
        return json.dumps(asdict(self), sort_keys=True)

    def to_dict(self) -> Dict[str, float]:
        """Convert to dictionary."""
        return asdict(self)

    def __str__(self) -> str:
        """String representation of noise model."""
        params = ", ".join(f"{t.value}={getattr(self, t.value):g}" for t in NoiseType)
        return f"NoiseModel({params})"


def canonical_noise(noise: Optional[NoiseModel]) -> str:
    """Canonical form of an optional noise model; ``"ideal"`` for None."""
    return noise.canonical() if noise is not None else "ideal"


def channel_survival(state_vector: np.ndarray, noise: NoiseModel) -> float:
    """
    Probability surviving one noise application to a normalized state.

    Each channel is measured on the given state independently, so the
    depolarizing factor depends on ``depolarizing`` alone and is
    non-increasing for p in [0, 0.5].

    Args:
        state_vector: Normalized amplitude array, usually the noise-free state
        noise: Noise parameters

    Returns:
        Product of the per-channel surviving probabilities, in [0, 1]
    """
    survival = 1.0
    dimension = state_vector.shape[0]

    p = noise.depolarizing
    if p > 0:
        magnitudes = (1 - p) * np.abs(state_vector) + p / np.sqrt(dimension)
        survival *= min(1.0, float(np.sum(magnitudes**2)))

    survival *= 1 - noise.amplitude_damping

    lam = noise.phase_damping
    if lam > 0:
        survival *= float(
            np.sum(state_vector.real**2 + ((1 - lam) * state_vector.imag) ** 2)
        )

    return min(1.0, max(0.0, survival))


def apply_noise(
    state_vector: np.ndarray, noise: NoiseModel, precision: float = 1e-10
) -> Tuple[np.ndarray, float]:
    """
    Apply the noise model to a normalized state vector.

    Args:
        state_vector: Current amplitude array (not modified)
        noise: Noise parameters
        precision: Norm below which the state is treated as fully decayed

    Returns:
        Tuple of the renormalized state and the total probability that
        survived the channels before renormalization
    """
    noisy = np.array(state_vector, dtype=complex, copy=True)
    dimension = noisy.shape[0]

    # Depolarizing: blend each magnitude toward the uniform amplitude
    p = noise.depolarizing
    if p > 0:
        magnitudes = (1 - p) * np.abs(noisy) + p / np.sqrt(dimension)
        noisy = magnitudes * np.exp(1j * np.angle(noisy))

    # Amplitude damping: uniform magnitude attenuation
    gamma = noise.amplitude_damping
    if gamma > 0:
        noisy *= np.sqrt(1 - gamma)

    # Phase damping: attenuate the imaginary component
    lam = noise.phase_damping
    if lam > 0:
        noisy = noisy.real + 1j * (noisy.imag * (1 - lam))

    total_probability = float(np.sum(np.abs(noisy) ** 2))
    norm = np.sqrt(total_probability)

    if norm < precision:
        logger.debug("State fully decayed under noise; resetting to ground state")
        noisy = np.zeros(dimension, dtype=complex)
        noisy[0] = 1.0
    else:
        noisy /= norm

    return noisy, min(1.0, max(0.0, total_probability))
