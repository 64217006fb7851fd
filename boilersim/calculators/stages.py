"""
Boiler pipeline stages.

Deterministic, side-effect-free stage functions:

    furnace -> heat_transfer -> steam_generation -> generate_flue_gases -> aggregate

Each stage consumes the previous stage's result plus the pipeline inputs.
Arithmetic follows IEEE-754: a zero heat-per-pound denominator yields
inf/nan rather than an exception, unless ``strict`` is requested.

Steam property correlations (linear approximations, not steam tables):
    steam_temp    = 212 + 1.7 * P          (°F, P in PSIG)
    latent_heat   = 970 - 0.5 * P          (BTU/lb)
    sensible_heat = steam_temp - (1.8 * T_water + 32)
"""

import math
from typing import Dict

import numpy as np

from boilersim.calculators.combustion import REFERENCE_MODEL, CombustionModel
from boilersim.exceptions import InvalidOperatingPoint
from boilersim.models import (
    Air,
    BoilerOutput,
    CombustionResult,
    ControlSettings,
    FlueGases,
    FlueGasReport,
    Fuel,
    HeatTransferResult,
    Steam,
    SteamHeatBalance,
    Water,
)
from boilersim.params import FurnaceDesign, TubeConfig

# Fraction of combustion energy transferred to the water side
HEAT_TRANSFER_FRACTION = 0.9

CORRUGATED_FURNACE_FACTOR = 1.1
WET_BACK_FACTOR = 1.05


def ieee_divide(numerator: float, denominator: float) -> float:
    """Divide with IEEE-754 semantics: x/0 -> ±inf, 0/0 -> nan."""
    with np.errstate(divide="ignore", invalid="ignore"):
        return float(np.float64(numerator) / np.float64(denominator))


# =============================================================================
# HELPER CORRELATIONS
# =============================================================================

def calculate_steam_temp(pressure: float) -> float:
    return 212 + pressure * 1.7


def get_latent_heat(pressure: float) -> float:
    return 970 - pressure * 0.5


def calculate_sensible_heat(inlet_temp_c: float, steam_temp_f: float) -> float:
    """Heat to raise feedwater (°C) to steam temperature (°F), BTU/lb."""
    return steam_temp_f - (inlet_temp_c * 1.8 + 32)


def calculate_tube_surface_area(tube_config: TubeConfig) -> float:
    return math.pi * tube_config.diameter * tube_config.length * tube_config.num_tubes


# =============================================================================
# STAGES
# =============================================================================

def furnace(fuel: Fuel, air: Air, model: CombustionModel = REFERENCE_MODEL) -> CombustionResult:
    """
    Stage 1: combustion.

    energy = fuel.quantity * fuel.heat_content (BTU/hr)
    """
    energy = fuel.quantity * fuel.heat_content
    flue_gases = FlueGases(
        volume=model.flue_gas_volume(fuel, air),
        temp=model.furnace_exit_temperature(fuel, air),
        composition=model.composition(fuel, air),
    )
    return CombustionResult(energy=energy, flue_gases=flue_gases)


def heat_transfer(
    combustion_energy: float,
    flue_gases: FlueGases,
    water: Water,
    tube_config: TubeConfig,
    heat_transfer_coeff: float,
    furnace_design: FurnaceDesign,
    model: CombustionModel = REFERENCE_MODEL,
) -> HeatTransferResult:
    """
    Stage 2: heat transfer to the water side.

    heat_transferred = combustion_energy * 0.9, independent of tube
    geometry, furnace design and heat_transfer_coeff. The geometry-derived
    figures are reported alongside but not applied.
    """
    furnace_factor = CORRUGATED_FURNACE_FACTOR if furnace_design.corrugated else 1.0
    wet_back_factor = WET_BACK_FACTOR if furnace_design.type == "wet-back" else 1.0

    return HeatTransferResult(
        heat_transferred=combustion_energy * HEAT_TRANSFER_FRACTION,
        flue_gas_volume=flue_gases.volume,
        flue_gas_exit_temp=model.stack_temperature(),
        tube_surface_area=calculate_tube_surface_area(tube_config),
        furnace_factor=furnace_factor,
        wet_back_factor=wet_back_factor,
    )


def steam_heat_balance(water: Water, control_settings: ControlSettings) -> SteamHeatBalance:
    """Heat required per pound of steam at the target pressure."""
    steam_temp = calculate_steam_temp(control_settings.pressure)
    latent_heat = get_latent_heat(control_settings.pressure)
    sensible_heat = calculate_sensible_heat(water.temperature, steam_temp)
    return SteamHeatBalance(
        steam_temp=steam_temp,
        latent_heat=latent_heat,
        sensible_heat=sensible_heat,
        total_heat_per_unit=sensible_heat + latent_heat,
    )


def steam_from_balance(
    heat_transferred: float,
    balance: SteamHeatBalance,
    target_pressure: float,
    strict: bool = False,
) -> Steam:
    """
    Convert transferred heat into steam flow.

    Raises:
        InvalidOperatingPoint: In strict mode, if total heat per unit is not
            a positive finite number
    """
    total = balance.total_heat_per_unit
    if strict and not (math.isfinite(total) and total > 0):
        raise InvalidOperatingPoint(
            message=(
                f"Heat required per unit of steam must be positive, got {total} "
                f"at {target_pressure} PSIG"
            ),
            context={
                "pressure": target_pressure,
                "steam_temp": balance.steam_temp,
                "latent_heat": balance.latent_heat,
                "sensible_heat": balance.sensible_heat,
                "total_heat_per_unit": total,
            },
            stage="steam_generation",
        )

    return Steam(
        flow_rate=ieee_divide(heat_transferred, total),
        pressure=target_pressure,
        temperature=balance.steam_temp,
    )


def steam_generation(
    heat_transferred: float,
    water: Water,
    control_settings: ControlSettings,
    pressure: float,
    strict: bool = False,
) -> Steam:
    """
    Stage 3: steam generation at ``control_settings.pressure``.

    ``pressure`` (the boiler's minimum rated pressure) is accepted for
    signature compatibility and does not affect the result.
    """
    balance = steam_heat_balance(water, control_settings)
    return steam_from_balance(
        heat_transferred, balance, control_settings.pressure, strict=strict
    )


def generate_flue_gases(
    combustion_energy: float,
    fuel: Fuel,
    air: Air,
    furnace_flue_gases: FlueGases,
    model: CombustionModel = REFERENCE_MODEL,
) -> FlueGasReport:
    """
    Stage 4: stack flue gas and emissions.

    Volume and composition carry over from the furnace; temperature is the
    model's stack temperature.
    """
    flue_gases = FlueGases(
        volume=furnace_flue_gases.volume,
        temp=model.stack_temperature(),
        composition=dict(furnace_flue_gases.composition),
    )
    return FlueGasReport(flue_gases=flue_gases, emissions=model.emissions(fuel.type))


def aggregate(
    combustion_energy: float,
    steam: Steam,
    flue_report: FlueGasReport,
    efficiency: float,
) -> BoilerOutput:
    """Assemble BoilerOutput; waste_heat = energy * (1 - efficiency)."""
    emissions: Dict[str, float] = dict(flue_report.emissions)
    return BoilerOutput(
        steam=steam,
        flue_gases=flue_report.flue_gases,
        waste_heat=combustion_energy * (1 - efficiency),
        emissions=emissions,
    )


__all__ = [
    "HEAT_TRANSFER_FRACTION",
    "ieee_divide",
    "calculate_steam_temp",
    "get_latent_heat",
    "calculate_sensible_heat",
    "calculate_tube_surface_area",
    "furnace",
    "heat_transfer",
    "steam_heat_balance",
    "steam_from_balance",
    "steam_generation",
    "generate_flue_gases",
    "aggregate",
]
