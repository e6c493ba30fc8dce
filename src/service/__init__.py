"""
Simulation service with worker pool, timeouts and result caching.
"""

from typing import List

from .cache import ResultCache
from .config import SimulationSettings, configure_logging, get_settings
from .simulation_service import SimulationService

__all__: List[str] = [
    "ResultCache",
    "SimulationSettings",
    "configure_logging",
    "get_settings",
    "SimulationService",
]
