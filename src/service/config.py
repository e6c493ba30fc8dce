"""
Configuration management for the simulation service.
"""

import logging

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class SimulationSettings(BaseSettings):
    """Simulation settings."""

    model_config = SettingsConfigDict(
        env_prefix="QSIM_", env_file=".env", case_sensitive=False, extra="ignore"
    )

    # Engine limits
    max_qubits: int = Field(
        default=20, ge=1, description="Largest circuit width the engine allocates"
    )
    precision: float = Field(default=1e-10, gt=0)
    normalization_tolerance: float = Field(default=1e-6, gt=0)

    # Validation
    fidelity_threshold: float = Field(default=0.95, ge=0, le=1)

    # Execution
    default_timeout: float = Field(
        default=30.0, gt=0, description="Per-run timeout in seconds"
    )
    max_workers: int = Field(default=4, ge=1, description="Worker pool size")

    # Logging
    log_level: str = "INFO"
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def get_settings() -> SimulationSettings:
    """Load settings from the environment."""
    return SimulationSettings()


def configure_logging(settings: SimulationSettings) -> None:
    """Configure root logging from settings."""
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper()), format=settings.log_format
    )
