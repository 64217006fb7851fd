"""boilersim Exception Hierarchy.

Exceptions carry rich context so callers (the CLI, the batch runner, any
embedding application) can report failures without parsing messages.

Exception Hierarchy:
    BoilerSimException (base)
    ├── SimulationException
    │   └── InvalidOperatingPoint
    ├── ValidationError
    └── ConfigurationError

All exceptions include:
- error_code: Identifier derived from the class name
- context: Dictionary with error-specific details
- timestamp: When the error occurred

Example:
    >>> from boilersim.exceptions import InvalidOperatingPoint
    >>> raise InvalidOperatingPoint(
    ...     message="Total heat per unit must be positive",
    ...     context={"total_heat_per_unit": -50.0, "pressure": -1000.0},
    ... )
"""

import json
import re
from typing import Any, Dict, Optional

from boilersim.determinism import DeterministicClock


class BoilerSimException(Exception):
    """Base exception for all boilersim errors.

    Attributes:
        message: Human-readable error message
        error_code: Unique error identifier (e.g., "BS_SIM_INVALID_OPERATING_POINT")
        context: Dictionary with error-specific details
        timestamp: When the error occurred
    """

    ERROR_PREFIX = "BS"

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self._generate_error_code()
        self.context = context or {}
        self.timestamp = DeterministicClock.now()

    def _generate_error_code(self) -> str:
        """Build an error code from the class name.

        Returns:
            Error code like "BS_SIM_INVALID_OPERATING_POINT"
        """
        error_type = re.sub(r'(?<!^)(?=[A-Z])', '_', self.__class__.__name__).upper()
        return f"{self.ERROR_PREFIX}_{error_type}"

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for serialization."""
        return {
            "error_type": self.__class__.__name__,
            "error_code": self.error_code,
            "message": self.message,
            "context": self.context,
            "timestamp": self.timestamp.isoformat(),
        }

    def to_json(self) -> str:
        """Convert exception to JSON string."""
        return json.dumps(self.to_dict(), indent=2, default=str)

    def __str__(self) -> str:
        return f"[{self.error_code}] - {self.message}"

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message='{self.message}', "
            f"error_code='{self.error_code}')"
        )


# ==============================================================================
# Simulation Exceptions
# ==============================================================================

class SimulationException(BoilerSimException):
    """Base exception for errors raised while running the boiler pipeline."""
    ERROR_PREFIX = "BS_SIM"


class InvalidOperatingPoint(SimulationException):
    """The requested operating point has no physical steam balance.

    Raised only in strict mode, when the heat required per pound of steam
    (sensible plus latent) is zero, negative or not finite.
    """

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        stage: Optional[str] = None,
    ):
        context = context or {}
        if stage:
            context["stage"] = stage
        super().__init__(message, context=context)


# ==============================================================================
# Input and Configuration Exceptions
# ==============================================================================

class ValidationError(BoilerSimException):
    """Scenario or parameter input failed validation.

    Example:
        >>> raise ValidationError(
        ...     message="Invalid scenario file",
        ...     invalid_fields={"fuel.quantity": "Input should be a valid number"},
        ... )
    """

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        invalid_fields: Optional[Dict[str, str]] = None,
    ):
        if invalid_fields:
            context = context or {}
            context["invalid_fields"] = invalid_fields
        super().__init__(message, context=context)


class ConfigurationError(BoilerSimException):
    """A configuration source could not be read or parsed."""

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        config_key: Optional[str] = None,
    ):
        if config_key:
            context = context or {}
            context["config_key"] = config_key
        super().__init__(message, context=context)


__all__ = [
    "BoilerSimException",
    "SimulationException",
    "InvalidOperatingPoint",
    "ValidationError",
    "ConfigurationError",
]
