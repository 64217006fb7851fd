"""
Combustion sub-models.

A CombustionModel supplies the flue gas and emissions figures the boiler
pipeline needs. The reference model returns fixed placeholder values that
do not vary with fuel or air; a fuel-specific model can replace it without
changing the pipeline.

Reference values:
    Flue gas volume         air quantity x 0.9
    Flue gas composition    CO2 10%, H2O 15%, O2 5%, N2 70%
    Furnace exit temp       1100 °C
    Stack temp              180 °C
    Emissions               CO 100, NOx 50
"""

from abc import ABC, abstractmethod
from typing import Dict

from boilersim.models import Air, Fuel

# Reference constants
FLUE_GAS_VOLUME_FACTOR = 0.9
FURNACE_EXIT_TEMP_C = 1100.0
STACK_TEMP_C = 180.0

REFERENCE_COMPOSITION = {"CO2": 10.0, "H2O": 15.0, "O2": 5.0, "N2": 70.0}
REFERENCE_EMISSIONS = {"CO": 100.0, "NOx": 50.0}


class CombustionModel(ABC):
    """Interface for flue gas and emissions sub-models."""

    @abstractmethod
    def flue_gas_volume(self, fuel: Fuel, air: Air) -> float:
        """Flue gas volume (ft³/hr)."""

    @abstractmethod
    def composition(self, fuel: Fuel, air: Air) -> Dict[str, float]:
        """Flue gas composition, species -> volume percent."""

    @abstractmethod
    def emissions(self, fuel_type: str) -> Dict[str, float]:
        """Pollutant emissions, species -> quantity."""

    @abstractmethod
    def furnace_exit_temperature(self, fuel: Fuel, air: Air) -> float:
        """Flue gas temperature leaving the furnace (°C)."""

    @abstractmethod
    def stack_temperature(self) -> float:
        """Flue gas temperature leaving the last tube pass (°C)."""


class ReferenceCombustionModel(CombustionModel):
    """
    Placeholder model with fixed values.

    Composition and emissions ignore the fuel type and the air supply.
    Mappings are returned as fresh copies so callers cannot alter the
    reference constants.
    """

    def flue_gas_volume(self, fuel: Fuel, air: Air) -> float:
        return air.quantity * FLUE_GAS_VOLUME_FACTOR

    def composition(self, fuel: Fuel, air: Air) -> Dict[str, float]:
        return dict(REFERENCE_COMPOSITION)

    def emissions(self, fuel_type: str) -> Dict[str, float]:
        return dict(REFERENCE_EMISSIONS)

    def furnace_exit_temperature(self, fuel: Fuel, air: Air) -> float:
        return FURNACE_EXIT_TEMP_C

    def stack_temperature(self) -> float:
        return STACK_TEMP_C


REFERENCE_MODEL = ReferenceCombustionModel()


__all__ = [
    "CombustionModel",
    "ReferenceCombustionModel",
    "REFERENCE_MODEL",
    "REFERENCE_COMPOSITION",
    "REFERENCE_EMISSIONS",
    "FLUE_GAS_VOLUME_FACTOR",
    "FURNACE_EXIT_TEMP_C",
    "STACK_TEMP_C",
]
