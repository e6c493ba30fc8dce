"""
Exception hierarchy for the simulation core.
"""


class SimulationError(Exception):
    """Base exception for all simulation failures."""

    pass


class ParameterError(SimulationError, ValueError):
    """Exception raised for invalid qubit counts, gate targets or noise values."""

    pass


class ResourceError(SimulationError):
    """Exception raised when a circuit exceeds the state-vector ceiling."""

    pass


class SimulationTimeoutError(SimulationError, TimeoutError):
    """Exception raised when a simulation run exceeds its timeout."""

    pass
