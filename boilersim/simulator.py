# -*- coding: utf-8 -*-
"""
Boiler Simulator

Runs the steady-state boiler pipeline:

    furnace -> heat_transfer -> steam_generation -> generate_flue_gases -> aggregate

GUARANTEES:
- Deterministic: same inputs produce bit-identical outputs
- Stateless: nothing persists between calls; concurrent calls are safe
- Traceable: simulate_with_provenance records every stage with a
  SHA-256 hash that depends only on inputs, steps and outputs

Degenerate operating points (heat per pound of steam <= 0) yield inf, nan
or negative steam flow by default. A strict simulator raises
InvalidOperatingPoint instead.
"""

import logging
import math
from typing import Optional, Tuple

from boilersim.calculators.combustion import FLUE_GAS_VOLUME_FACTOR, REFERENCE_MODEL, CombustionModel
from boilersim.calculators.provenance import ProvenanceRecord, ProvenanceTracker
from boilersim.calculators.stages import (
    HEAT_TRANSFER_FRACTION,
    aggregate,
    furnace,
    generate_flue_gases,
    heat_transfer,
    steam_from_balance,
    steam_heat_balance,
)
from boilersim.config import get_config
from boilersim.models import Air, BoilerOutput, ControlSettings, Fuel, Water
from boilersim.params import DEFAULT_PARAMS, BoilerParams
from boilersim.scenarios import Scenario

logger = logging.getLogger(__name__)


class BoilerSimulator:
    """
    Steady-state boiler simulator.

    Example:
        >>> simulator = BoilerSimulator()
        >>> output = simulator.simulate(
        ...     Fuel(type="wood", quantity=1000, heat_content=8000),
        ...     Water(quantity=34500, temperature=20),
        ...     Air(quantity=12000, temperature=20),
        ...     50,
        ...     ControlSettings(pressure=200, temperature=382),
        ... )
        >>> round(output.steam.flow_rate, 2)
        5317.58
    """

    VERSION = "1.0.0"
    NAME = "BoilerSimulator"

    def __init__(
        self,
        params: Optional[BoilerParams] = None,
        combustion_model: Optional[CombustionModel] = None,
        strict: Optional[bool] = None,
    ):
        """
        Args:
            params: Default parameters for calls that pass none
            combustion_model: Flue gas and emissions sub-model
            strict: Raise on degenerate operating points (defaults to the
                ``strict_operating_point`` setting)
        """
        self.params = params or DEFAULT_PARAMS
        self.combustion_model = combustion_model or REFERENCE_MODEL
        self.strict = get_config().strict_operating_point if strict is None else strict

    def simulate(
        self,
        fuel: Fuel,
        water: Water,
        air: Air,
        electricity: float,
        control_settings: ControlSettings,
        params: Optional[BoilerParams] = None,
    ) -> BoilerOutput:
        """
        Compute one BoilerOutput.

        ``electricity`` is accepted as a process input and does not affect
        the result.

        Raises:
            InvalidOperatingPoint: In strict mode only
        """
        return self._run(fuel, water, air, electricity, control_settings, params, None)

    def simulate_with_provenance(
        self,
        fuel: Fuel,
        water: Water,
        air: Air,
        electricity: float,
        control_settings: ControlSettings,
        params: Optional[BoilerParams] = None,
    ) -> Tuple[BoilerOutput, ProvenanceRecord]:
        """Compute one BoilerOutput together with its provenance record."""
        tracker = ProvenanceTracker(
            calculator_name=self.NAME,
            calculator_version=self.VERSION,
            metadata={
                "combustion_model": type(self.combustion_model).__name__,
                "strict": self.strict,
            },
        )
        output = self._run(fuel, water, air, electricity, control_settings, params, tracker)
        return output, tracker.finalize()

    def run_scenario(self, scenario: Scenario) -> BoilerOutput:
        """Simulate a Scenario bundle."""
        return self.simulate(
            scenario.fuel,
            scenario.water,
            scenario.air,
            scenario.electricity,
            scenario.control_settings,
            scenario.params,
        )

    def _run(
        self,
        fuel: Fuel,
        water: Water,
        air: Air,
        electricity: float,
        control_settings: ControlSettings,
        params: Optional[BoilerParams],
        tracker: Optional[ProvenanceTracker],
    ) -> BoilerOutput:
        params = params or self.params
        model = self.combustion_model

        if tracker:
            tracker.set_inputs({
                "fuel_type": fuel.type,
                "fuel_quantity": fuel.quantity,
                "fuel_heat_content": fuel.heat_content,
                "water_quantity": water.quantity,
                "water_temperature": water.temperature,
                "air_quantity": air.quantity,
                "air_temperature": air.temperature,
                "electricity": electricity,
                "control_pressure": control_settings.pressure,
                "control_temperature": control_settings.temperature,
                "efficiency": params.efficiency,
            })

        # Stage 1: combustion
        combustion = furnace(fuel, air, model)
        if tracker:
            tracker.add_step(
                operation="multiply",
                description="Combustion energy released in the furnace",
                inputs={"quantity": fuel.quantity, "heat_content": fuel.heat_content},
                output_name="energy",
                output_value=combustion.energy,
                formula="energy = quantity * heat_content",
            )
            tracker.add_step(
                operation="multiply",
                description="Furnace-side flue gas volume",
                inputs={"air_quantity": air.quantity, "volume_factor": FLUE_GAS_VOLUME_FACTOR},
                output_name="furnace_flue_gas_volume",
                output_value=combustion.flue_gases.volume,
                formula=f"volume = air_quantity * {FLUE_GAS_VOLUME_FACTOR}",
            )
            tracker.add_step(
                operation="lookup",
                description="Furnace exit gas temperature",
                inputs={"fuel_type": fuel.type},
                output_name="furnace_flue_gas_temp",
                output_value=combustion.flue_gases.temp,
                formula=f"temp = furnace exit temperature ({type(model).__name__})",
            )

        # Stage 2: heat transfer
        transfer = heat_transfer(
            combustion.energy,
            combustion.flue_gases,
            water,
            params.tube_config,
            params.heat_transfer_coeff,
            params.furnace_design,
            model,
        )
        if tracker:
            tracker.add_step(
                operation="multiply",
                description="Heat transferred to the water side",
                inputs={
                    "energy": combustion.energy,
                    "transfer_fraction": HEAT_TRANSFER_FRACTION,
                    "tube_surface_area": transfer.tube_surface_area,
                    "furnace_factor": transfer.furnace_factor,
                    "wet_back_factor": transfer.wet_back_factor,
                },
                output_name="heat_transferred",
                output_value=transfer.heat_transferred,
                formula="heat_transferred = energy * 0.9",
            )

        # Stage 3: steam generation
        balance = steam_heat_balance(water, control_settings)
        degenerate = not (
            math.isfinite(balance.total_heat_per_unit) and balance.total_heat_per_unit > 0
        )
        if degenerate and not self.strict:
            logger.warning(
                f"Degenerate operating point: {balance.total_heat_per_unit} BTU/lb "
                f"at {control_settings.pressure} PSIG, water {water.temperature} °C"
            )
        steam = steam_from_balance(
            transfer.heat_transferred, balance, control_settings.pressure, strict=self.strict
        )
        if tracker:
            tracker.add_step(
                operation="add",
                description="Heat required per pound of steam",
                inputs={
                    "pressure": control_settings.pressure,
                    "water_temperature": water.temperature,
                    "steam_temp": balance.steam_temp,
                    "latent_heat": balance.latent_heat,
                    "sensible_heat": balance.sensible_heat,
                },
                output_name="total_heat_per_unit",
                output_value=balance.total_heat_per_unit,
                formula="total = (212 + 1.7P - (1.8T + 32)) + (970 - 0.5P)",
            )
            tracker.add_step(
                operation="divide",
                description="Steam flow rate",
                inputs={
                    "heat_transferred": transfer.heat_transferred,
                    "total_heat_per_unit": balance.total_heat_per_unit,
                },
                output_name="steam_flow_rate",
                output_value=steam.flow_rate,
                formula="flow_rate = heat_transferred / total_heat_per_unit",
            )

        # Stage 4: stack flue gas and emissions
        flue_report = generate_flue_gases(
            combustion.energy, fuel, air, combustion.flue_gases, model
        )

        output = aggregate(combustion.energy, steam, flue_report, params.efficiency)
        if tracker:
            tracker.add_step(
                operation="multiply",
                description="Waste heat",
                inputs={"energy": combustion.energy, "efficiency": params.efficiency},
                output_name="waste_heat",
                output_value=output.waste_heat,
                formula="waste_heat = energy * (1 - efficiency)",
            )
            tracker.set_outputs({
                "steam_flow_rate": output.steam.flow_rate,
                "steam_pressure": output.steam.pressure,
                "steam_temperature": output.steam.temperature,
                "flue_gas_volume": output.flue_gases.volume,
                "flue_gas_temp": output.flue_gases.temp,
                "flue_gas_composition": dict(output.flue_gases.composition),
                "waste_heat": output.waste_heat,
                "emissions": dict(output.emissions),
            })

        logger.debug(
            f"Simulated {fuel.type} at {control_settings.pressure} PSIG -> "
            f"{output.steam.flow_rate} PPH, waste heat {output.waste_heat} BTU/hr"
        )
        return output


def simulate(
    fuel: Fuel,
    water: Water,
    air: Air,
    electricity: float,
    control_settings: ControlSettings,
    params: Optional[BoilerParams] = None,
) -> BoilerOutput:
    """Run one simulation with the reference combustion model."""
    return BoilerSimulator().simulate(fuel, water, air, electricity, control_settings, params)


__all__ = ["BoilerSimulator", "simulate"]
