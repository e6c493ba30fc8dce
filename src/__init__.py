"""
QSim - Quantum Circuit Simulation Core

A state vector simulator for small quantum circuits with built-in algorithm
templates, an approximate noise model and fidelity-based validation.
"""

__version__ = "0.1.0"
__author__ = "QSim Team"

from typing import List

__all__: List[str] = []
