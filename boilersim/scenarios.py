# -*- coding: utf-8 -*-
"""
Simulation scenarios.

A Scenario bundles one complete set of simulator inputs. Scenario files are
YAML or JSON, holding either a single scenario or a ``scenarios:`` list:

    name: wood-200psig
    fuel: {type: wood, quantity: 1000, heat_content: 8000}
    water: {quantity: 34500, temperature: 20}
    air: {quantity: 12000, temperature: 20}
    electricity: 50
    control_settings: {pressure: 200, temperature: 382}
    params:
      efficiency: 0.85

``params`` may be partial; it is merged onto DEFAULT_PARAMS. Any omitted
input section falls back to DEFAULT_SCENARIO.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from boilersim.exceptions import ConfigurationError, ValidationError
from boilersim.models import Air, ControlSettings, Fuel, Water
from boilersim.params import (
    DEFAULT_PARAMS,
    BoilerParams,
    invalid_fields_from,
    load_document,
    merge_params,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Scenario:
    """One set of simulator inputs."""
    name: str
    fuel: Fuel
    water: Water
    air: Air
    electricity: float
    control_settings: ControlSettings
    params: BoilerParams = field(default=DEFAULT_PARAMS)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "fuel": {
                "type": self.fuel.type,
                "quantity": self.fuel.quantity,
                "heat_content": self.fuel.heat_content,
            },
            "water": {
                "quantity": self.water.quantity,
                "temperature": self.water.temperature,
            },
            "air": {
                "quantity": self.air.quantity,
                "temperature": self.air.temperature,
            },
            "electricity": self.electricity,
            "control_settings": {
                "pressure": self.control_settings.pressure,
                "temperature": self.control_settings.temperature,
            },
            "params": self.params.model_dump(),
        }


# Dashboard form defaults
DEFAULT_SCENARIO = Scenario(
    name="default",
    fuel=Fuel(type="wood", quantity=1000, heat_content=8000),
    water=Water(quantity=34500, temperature=20),
    air=Air(quantity=12000, temperature=20),
    electricity=50,
    control_settings=ControlSettings(pressure=200, temperature=382),
)


# ============================================================================
# FILE SCHEMA
# ============================================================================


class _FuelSpec(BaseModel):
    model_config = ConfigDict(extra="forbid")

    type: str = DEFAULT_SCENARIO.fuel.type
    quantity: float = DEFAULT_SCENARIO.fuel.quantity
    heat_content: float = DEFAULT_SCENARIO.fuel.heat_content


class _StreamSpec(BaseModel):
    model_config = ConfigDict(extra="forbid")

    quantity: float
    temperature: float


class _ControlSpec(BaseModel):
    model_config = ConfigDict(extra="forbid")

    pressure: float = DEFAULT_SCENARIO.control_settings.pressure
    temperature: float = DEFAULT_SCENARIO.control_settings.temperature


class ScenarioSpec(BaseModel):
    """Validated shape of one scenario in a file."""

    model_config = ConfigDict(extra="forbid")

    name: Optional[str] = None
    fuel: _FuelSpec = Field(default_factory=_FuelSpec)
    water: Optional[_StreamSpec] = None
    air: Optional[_StreamSpec] = None
    electricity: float = DEFAULT_SCENARIO.electricity
    control_settings: _ControlSpec = Field(default_factory=_ControlSpec)
    params: Dict[str, Any] = Field(default_factory=dict)

    def to_scenario(self, default_name: str, base_params: BoilerParams = DEFAULT_PARAMS) -> Scenario:
        water = self.water or _StreamSpec(
            quantity=DEFAULT_SCENARIO.water.quantity,
            temperature=DEFAULT_SCENARIO.water.temperature,
        )
        air = self.air or _StreamSpec(
            quantity=DEFAULT_SCENARIO.air.quantity,
            temperature=DEFAULT_SCENARIO.air.temperature,
        )
        return Scenario(
            name=self.name or default_name,
            fuel=Fuel(**self.fuel.model_dump()),
            water=Water(**water.model_dump()),
            air=Air(**air.model_dump()),
            electricity=self.electricity,
            control_settings=ControlSettings(**self.control_settings.model_dump()),
            params=merge_params(base_params, self.params),
        )


def scenario_from_dict(
    data: Mapping[str, Any],
    default_name: str = "scenario",
    base_params: BoilerParams = DEFAULT_PARAMS,
) -> Scenario:
    """
    Build a Scenario from a plain mapping.

    Raises:
        ValidationError: If the mapping does not describe a valid scenario
    """
    if not isinstance(data, Mapping):
        raise ValidationError(
            message=f"Scenario must be a mapping, got {type(data).__name__}",
            context={"scenario": default_name},
        )
    try:
        spec = ScenarioSpec.model_validate(dict(data))
    except PydanticValidationError as e:
        raise ValidationError(
            message=f"Invalid scenario '{data.get('name', default_name)}'",
            invalid_fields=invalid_fields_from(e),
        ) from e
    return spec.to_scenario(default_name, base_params)


def load_scenarios(
    path: Union[str, Path], base_params: BoilerParams = DEFAULT_PARAMS
) -> List[Scenario]:
    """
    Load every scenario in a YAML or JSON file.

    A file holding a single scenario mapping yields a one-element list.
    Unnamed scenarios are named after the file stem and their position.

    Raises:
        ConfigurationError: If the file is missing, unreadable, or empty
        ValidationError: If a scenario fails validation
    """
    path = Path(path)
    data = load_document(path)

    if isinstance(data, Mapping) and "scenarios" in data:
        entries = data["scenarios"]
        if not isinstance(entries, list):
            raise ConfigurationError(
                message=f"'scenarios' must be a list in {path}",
                context={"path": str(path)},
                config_key="scenarios",
            )
    elif isinstance(data, Mapping):
        entries = [data]
    else:
        raise ConfigurationError(
            message=f"Scenario file must contain a mapping: {path}",
            context={"path": str(path), "found": type(data).__name__},
        )

    if not entries:
        raise ConfigurationError(
            message=f"No scenarios found in {path}",
            context={"path": str(path)},
            config_key="scenarios",
        )

    scenarios = [
        scenario_from_dict(entry, default_name=f"{path.stem}-{i + 1}", base_params=base_params)
        for i, entry in enumerate(entries)
    ]
    logger.info(f"Loaded {len(scenarios)} scenario(s) from {path}")
    return scenarios


def load_scenario(
    path: Union[str, Path], base_params: BoilerParams = DEFAULT_PARAMS
) -> Scenario:
    """
    Load exactly one scenario.

    Raises:
        ConfigurationError: If the file holds more than one scenario
    """
    scenarios = load_scenarios(path, base_params)
    if len(scenarios) != 1:
        raise ConfigurationError(
            message=f"Expected one scenario in {path}, found {len(scenarios)}",
            context={"path": str(path), "count": len(scenarios)},
        )
    return scenarios[0]


__all__ = [
    "Scenario",
    "ScenarioSpec",
    "DEFAULT_SCENARIO",
    "scenario_from_dict",
    "load_scenario",
    "load_scenarios",
]
