# -*- coding: utf-8 -*-
"""
Boiler design parameters.

Immutable, validated Pydantic models describing the boiler: efficiency,
rating ranges, furnace design, tube bundle and refractory. A parameter set
is built once and passed explicitly to the simulator; nothing mutates it.

Only ``efficiency`` changes simulation outputs. The geometry and rating
fields are carried for reporting and for future sub-models.

Example:
    >>> from boilersim.params import DEFAULT_PARAMS, merge_params
    >>> params = merge_params(DEFAULT_PARAMS, {"efficiency": 0.85})
    >>> params.efficiency
    0.85
    >>> DEFAULT_PARAMS.efficiency
    0.9
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Mapping, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic import ValidationError as PydanticValidationError

from boilersim.exceptions import ConfigurationError, ValidationError

logger = logging.getLogger(__name__)


# ============================================================================
# PARAMETER MODELS
# ============================================================================


class Range(BaseModel):
    """Closed numeric range."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    min: float = Field(..., description="Lower bound")
    max: float = Field(..., description="Upper bound")

    @model_validator(mode="after")
    def validate_bounds(self) -> "Range":
        """Ensure min does not exceed max."""
        if self.min > self.max:
            raise ValueError(f"min ({self.min}) must not exceed max ({self.max})")
        return self


class FurnaceDesign(BaseModel):
    """Furnace construction."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    corrugated: bool = Field(default=True, description="Corrugated furnace tube")
    type: str = Field(default="wet-back", description="Rear turnaround design")


class TubeConfig(BaseModel):
    """Fire-tube bundle geometry."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    num_tubes: int = Field(default=100, ge=0, description="Number of tubes")
    diameter: float = Field(default=2.0, description="Tube diameter")
    length: float = Field(default=10.0, description="Tube length")


class Refractory(BaseModel):
    """Refractory lining properties."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    thermal_conductivity: float = Field(default=0.5, description="Thermal conductivity")
    max_temp: float = Field(default=1200.0, description="Maximum service temperature")


class BoilerParams(BaseModel):
    """
    Boiler design parameters.

    Defaults describe a packaged wet-back fire-tube boiler rated
    50-2500 BHP, 1725-86250 PPH, 15-350 PSIG.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    efficiency: float = Field(
        default=0.9, ge=0.0, le=1.0, description="Fraction of fuel energy retained"
    )
    horsepower: Range = Field(
        default_factory=lambda: Range(min=50, max=2500),
        description="Boiler horsepower rating range",
    )
    steam_output: Range = Field(
        default_factory=lambda: Range(min=1725, max=86250),
        description="Steam output range (PPH)",
    )
    pressure: Range = Field(
        default_factory=lambda: Range(min=15, max=350),
        description="Operating pressure range (PSIG)",
    )
    furnace_design: FurnaceDesign = Field(default_factory=FurnaceDesign)
    tube_config: TubeConfig = Field(default_factory=TubeConfig)
    refractory: Refractory = Field(default_factory=Refractory)
    heat_transfer_coeff: float = Field(
        default=50.0, description="Overall heat transfer coefficient"
    )


DEFAULT_PARAMS = BoilerParams()


# ============================================================================
# LOADING AND MERGING
# ============================================================================


def invalid_fields_from(exc: PydanticValidationError) -> Dict[str, str]:
    """Flatten pydantic errors to ``{"dotted.location": "message"}``."""
    return {
        ".".join(str(part) for part in error["loc"]) or "__root__": error["msg"]
        for error in exc.errors()
    }


def _deep_merge(base: Dict[str, Any], overrides: Mapping[str, Any]) -> Dict[str, Any]:
    merged = dict(base)
    for key, value in overrides.items():
        if isinstance(value, Mapping) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def merge_params(
    base: BoilerParams, overrides: Union[Mapping[str, Any], None]
) -> BoilerParams:
    """
    Deep-merge a partial mapping onto ``base`` and re-validate.

    Args:
        base: Parameter set to start from (left untouched)
        overrides: Partial parameters, e.g. ``{"tube_config": {"num_tubes": 80}}``

    Returns:
        New BoilerParams

    Raises:
        ValidationError: If the merged parameters are invalid
    """
    if not overrides:
        return base

    merged = _deep_merge(base.model_dump(), overrides)
    try:
        return BoilerParams.model_validate(merged)
    except PydanticValidationError as e:
        raise ValidationError(
            message="Invalid boiler parameters",
            invalid_fields=invalid_fields_from(e),
        ) from e


def load_document(path: Union[str, Path]) -> Any:
    """
    Read a YAML or JSON document.

    Files ending in ``.json`` are parsed as JSON; everything else as YAML.

    Raises:
        ConfigurationError: If the file is missing, unreadable, or cannot be parsed
    """
    path = Path(path)
    try:
        with open(path, 'r', encoding='utf-8') as f:
            if path.suffix.lower() == ".json":
                return json.load(f)
            return yaml.safe_load(f)
    except FileNotFoundError as e:
        raise ConfigurationError(
            message=f"File not found: {path}", context={"path": str(path)}
        ) from e
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigurationError(
            message=f"Cannot read {path}: {e}", context={"path": str(path)}
        ) from e
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise ConfigurationError(
            message=f"Failed to parse {path}: {e}", context={"path": str(path)}
        ) from e


def load_params(path: Union[str, Path], base: BoilerParams = DEFAULT_PARAMS) -> BoilerParams:
    """
    Load a (possibly partial) parameter file and merge it onto ``base``.

    Raises:
        ConfigurationError: If the file cannot be read or is not a mapping
        ValidationError: If the merged parameters are invalid
    """
    data = load_document(path)
    if data is None:
        data = {}
    if not isinstance(data, Mapping):
        raise ConfigurationError(
            message=f"Parameter file must contain a mapping: {path}",
            context={"path": str(path), "found": type(data).__name__},
        )

    params = merge_params(base, data)
    logger.info(f"Loaded boiler parameters from {path}")
    return params


__all__ = [
    "Range",
    "FurnaceDesign",
    "TubeConfig",
    "Refractory",
    "BoilerParams",
    "DEFAULT_PARAMS",
    "merge_params",
    "load_params",
    "load_document",
    "invalid_fields_from",
]
