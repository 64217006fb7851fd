# -*- coding: utf-8 -*-
"""
Boiler process records.

Immutable input and output records for the boiler pipeline. Every record
is a frozen dataclass with structural equality; records are built fresh
per simulation and never shared or mutated. Species mappings (flue gas
composition, emissions) are stored as read-only copies, so records stay
hashable and cannot be changed through their dict fields.

Units:
    Fuel quantity        lb/hr (solid/liquid) or ft³/hr (gas)
    Fuel heat content    BTU per unit of fuel
    Water / air temps    °C
    Control temperature  °F
    Steam flow           PPH (lb/hr)
    Steam pressure       PSIG
    Flue gas volume      ft³/hr
    Waste heat           BTU/hr
"""

from dataclasses import asdict, dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Mapping


def _read_only(mapping: Mapping[str, float]) -> Mapping[str, float]:
    return MappingProxyType(dict(mapping))


# =============================================================================
# INPUTS
# =============================================================================

@dataclass(frozen=True)
class Fuel:
    """
    Fuel fired in the furnace.

    Attributes:
        type: Free-form fuel name (e.g. "wood", "natural_gas")
        quantity: Firing rate (lb/hr or ft³/hr)
        heat_content: Heating value (BTU/lb or BTU/ft³)
    """
    type: str
    quantity: float
    heat_content: float


@dataclass(frozen=True)
class Water:
    """Feedwater supply: quantity (lb/hr) and temperature (°C)."""
    quantity: float
    temperature: float


@dataclass(frozen=True)
class Air:
    """Combustion air supply: quantity (ft³/hr) and temperature (°C)."""
    quantity: float
    temperature: float


@dataclass(frozen=True)
class ControlSettings:
    """Target operating point: pressure (PSIG) and temperature (°F)."""
    pressure: float
    temperature: float


# =============================================================================
# OUTPUTS
# =============================================================================

@dataclass(frozen=True)
class Steam:
    """Generated steam: flow rate (PPH), pressure (PSIG), temperature (°F)."""
    flow_rate: float
    pressure: float
    temperature: float

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class FlueGases:
    """
    Flue gas stream.

    Attributes:
        volume: Flue gas volume (ft³/hr)
        temp: Flue gas temperature (°C)
        composition: Species -> volume percent (read-only)
    """
    volume: float
    temp: float
    composition: Mapping[str, float] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "composition", _read_only(self.composition))

    def __hash__(self) -> int:
        return hash((self.volume, self.temp, frozenset(self.composition.items())))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "volume": self.volume,
            "temp": self.temp,
            "composition": dict(self.composition),
        }


@dataclass(frozen=True)
class BoilerOutput:
    """
    Final result of one simulation.

    Attributes:
        steam: Generated steam
        flue_gases: Flue gas leaving the stack
        waste_heat: Fuel energy not converted to useful heat (BTU/hr)
        emissions: Species -> quantity (read-only)
    """
    steam: Steam
    flue_gases: FlueGases
    waste_heat: float
    emissions: Mapping[str, float] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "emissions", _read_only(self.emissions))

    def __hash__(self) -> int:
        return hash((self.steam, self.flue_gases, self.waste_heat, frozenset(self.emissions.items())))

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a plain dictionary (JSON-friendly apart from inf/nan)."""
        return {
            "steam": self.steam.to_dict(),
            "flue_gases": self.flue_gases.to_dict(),
            "waste_heat": self.waste_heat,
            "emissions": dict(self.emissions),
        }


# =============================================================================
# STAGE RESULTS
# =============================================================================

@dataclass(frozen=True)
class CombustionResult:
    """Furnace stage: released energy (BTU/hr) and furnace-side flue gas."""
    energy: float
    flue_gases: FlueGases


@dataclass(frozen=True)
class HeatTransferResult:
    """
    Heat transfer stage.

    The tube surface area and furnace factors are derived from the boiler
    geometry and reported for reference; the transferred heat does not
    depend on them.
    """
    heat_transferred: float
    flue_gas_volume: float
    flue_gas_exit_temp: float
    tube_surface_area: float
    furnace_factor: float
    wet_back_factor: float


@dataclass(frozen=True)
class SteamHeatBalance:
    """
    Heat required per pound of steam at the target pressure.

    Attributes:
        steam_temp: Saturation temperature estimate (°F)
        latent_heat: Heat of vaporization (BTU/lb)
        sensible_heat: Heat to raise feedwater to steam_temp (BTU/lb)
        total_heat_per_unit: sensible_heat + latent_heat (BTU/lb)
    """
    steam_temp: float
    latent_heat: float
    sensible_heat: float
    total_heat_per_unit: float


@dataclass(frozen=True)
class FlueGasReport:
    """Flue gas finalization stage: stack gas and emissions."""
    flue_gases: FlueGases
    emissions: Mapping[str, float] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "emissions", _read_only(self.emissions))

    def __hash__(self) -> int:
        return hash((self.flue_gases, frozenset(self.emissions.items())))


__all__ = [
    "Fuel",
    "Water",
    "Air",
    "ControlSettings",
    "Steam",
    "FlueGases",
    "BoilerOutput",
    "CombustionResult",
    "HeatTransferResult",
    "SteamHeatBalance",
    "FlueGasReport",
]
