"""
Minimal complex value type used when amplitudes leave the engine.
"""

import math
from dataclasses import dataclass
from typing import Dict, Union


@dataclass(frozen=True)
class Complex:
    """Immutable complex number with float64 components."""

    real: float
    imag: float = 0.0

    @classmethod
    def from_polar(cls, magnitude: float, phase: float) -> "Complex":
        """Build a complex number from magnitude and phase angle."""
        return cls(magnitude * math.cos(phase), magnitude * math.sin(phase))

    @classmethod
    def from_value(cls, value: Union[complex, float, int]) -> "Complex":
        """Convert a Python or NumPy scalar."""
        value = complex(value)
        return cls(float(value.real), float(value.imag))

    def __add__(self, other: "Complex") -> "Complex":
        return self.add(other)

    def __mul__(self, other: "Complex") -> "Complex":
        return self.multiply(other)

    def __complex__(self) -> complex:
        return complex(self.real, self.imag)

    def add(self, other: "Complex") -> "Complex":
        """Return the sum of two complex numbers."""
        return Complex(self.real + other.real, self.imag + other.imag)

    def multiply(self, other: "Complex") -> "Complex":
        """Return the product of two complex numbers."""
        return Complex(
            self.real * other.real - self.imag * other.imag,
            self.real * other.imag + self.imag * other.real,
        )

    def conjugate(self) -> "Complex":
        """Return the complex conjugate."""
        return Complex(self.real, -self.imag)

    def magnitude(self) -> float:
        """Absolute value |z|."""
        return math.hypot(self.real, self.imag)

    def phase(self) -> float:
        """Argument of z in radians, in (-π, π]."""
        return math.atan2(self.imag, self.real)

    def is_close(self, other: "Complex", tolerance: float = 1e-10) -> bool:
        """Check whether two values agree within tolerance."""
        return abs(self.real - other.real) <= tolerance and abs(
            self.imag - other.imag
        ) <= tolerance

    def to_dict(self) -> Dict[str, float]:
        """Convert to dictionary."""
        return {"real": self.real, "imaginary": self.imag}
