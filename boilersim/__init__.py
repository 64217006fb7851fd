"""
boilersim - Steady-State Boiler Simulator

Deterministic steady-state calculator for a simplified industrial fire-tube
boiler: fuel, water, air, electricity and control inputs in, steam, flue gas
and emissions out.

Example:
    >>> from boilersim import simulate, Fuel, Water, Air, ControlSettings
    >>> output = simulate(
    ...     Fuel(type="wood", quantity=1000, heat_content=8000),
    ...     Water(quantity=34500, temperature=20),
    ...     Air(quantity=12000, temperature=20),
    ...     50,
    ...     ControlSettings(pressure=200, temperature=382),
    ... )
    >>> output.steam.temperature
    552.0
"""

from ._version import __version__

from .exceptions import (
    BoilerSimException,
    SimulationException,
    InvalidOperatingPoint,
    ValidationError,
    ConfigurationError,
)

from .models import (
    Fuel,
    Water,
    Air,
    ControlSettings,
    Steam,
    FlueGases,
    BoilerOutput,
)

from .params import (
    BoilerParams,
    DEFAULT_PARAMS,
    merge_params,
    load_params,
)

from .scenarios import (
    Scenario,
    DEFAULT_SCENARIO,
    load_scenario,
    load_scenarios,
)

from .calculators import (
    CombustionModel,
    ReferenceCombustionModel,
    ProvenanceRecord,
)

from .simulator import BoilerSimulator, simulate
from .batch import BatchSimulator, BatchResult
from .dashboard import ActivityLog, DashboardSummary, summarize
from .config import SimulatorConfig, get_config, set_config, reset_config

__all__ = [
    "__version__",
    # Exceptions
    "BoilerSimException",
    "SimulationException",
    "InvalidOperatingPoint",
    "ValidationError",
    "ConfigurationError",
    # Records
    "Fuel",
    "Water",
    "Air",
    "ControlSettings",
    "Steam",
    "FlueGases",
    "BoilerOutput",
    # Parameters and scenarios
    "BoilerParams",
    "DEFAULT_PARAMS",
    "merge_params",
    "load_params",
    "Scenario",
    "DEFAULT_SCENARIO",
    "load_scenario",
    "load_scenarios",
    # Simulation
    "CombustionModel",
    "ReferenceCombustionModel",
    "ProvenanceRecord",
    "BoilerSimulator",
    "simulate",
    "BatchSimulator",
    "BatchResult",
    # Dashboard
    "ActivityLog",
    "DashboardSummary",
    "summarize",
    # Settings
    "SimulatorConfig",
    "get_config",
    "set_config",
    "reset_config",
]
