# -*- coding: utf-8 -*-
"""
boilersim runtime settings.

Centralized settings for the simulator, batch runner, dashboard and CLI:
- Logging level
- Strict vs permissive handling of degenerate operating points
- Provenance tracking toggle
- Batch worker pool size
- Recent-activity log size
- Display precision for dashboard figures

All settings can be overridden via environment variables with the
``BOILERSIM_`` prefix (e.g. ``BOILERSIM_STRICT_OPERATING_POINT=true``).

Environment Variable Reference (BOILERSIM_ prefix):
    BOILERSIM_LOG_LEVEL                 - Logging level
    BOILERSIM_STRICT_OPERATING_POINT    - Raise on non-positive heat per unit
    BOILERSIM_ENABLE_PROVENANCE         - Build provenance records in the CLI
    BOILERSIM_MAX_WORKERS               - Batch thread pool size
    BOILERSIM_ACTIVITY_LOG_SIZE         - Recent-activity entries kept
    BOILERSIM_DISPLAY_PRECISION         - Decimal places on stat cards

Example:
    >>> from boilersim.config import get_config, set_config, reset_config
    >>> from boilersim.config import SimulatorConfig
    >>> set_config(SimulatorConfig(strict_operating_point=True))
    >>> get_config().strict_operating_point
    True
    >>> reset_config()  # teardown
"""

from __future__ import annotations

import logging
import os
import threading
from dataclasses import dataclass
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

_ENV_PREFIX = "BOILERSIM_"

_VALID_LOG_LEVELS = frozenset(
    {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
)


@dataclass
class SimulatorConfig:
    """Runtime settings for boilersim.

    Attributes:
        log_level: Root logging level used by the CLI.
        strict_operating_point: Raise InvalidOperatingPoint instead of
            returning inf/nan/negative steam flow.
        enable_provenance: Build provenance records where callers ask for
            them by default (CLI ``--provenance`` default).
        max_workers: Thread pool size for BatchSimulator.
        activity_log_size: Entries kept by ActivityLog.
        display_precision: Decimal places for stat-card figures.
    """

    log_level: str = "INFO"
    strict_operating_point: bool = False
    enable_provenance: bool = True
    max_workers: int = 4
    activity_log_size: int = 4
    display_precision: int = 2

    def __post_init__(self) -> None:
        errors = []

        self.log_level = self.log_level.upper()
        if self.log_level not in _VALID_LOG_LEVELS:
            errors.append(
                f"log_level must be one of {sorted(_VALID_LOG_LEVELS)}, "
                f"got {self.log_level!r}"
            )

        if self.max_workers <= 0:
            errors.append(f"max_workers must be > 0, got {self.max_workers}")

        if self.activity_log_size <= 0:
            errors.append(
                f"activity_log_size must be > 0, got {self.activity_log_size}"
            )

        if self.display_precision < 0:
            errors.append(
                f"display_precision must be >= 0, got {self.display_precision}"
            )

        if errors:
            raise ValueError(
                "SimulatorConfig validation failed:\n"
                + "\n".join(f"  - {e}" for e in errors)
            )

        logger.debug(
            "SimulatorConfig validated: log_level=%s, strict=%s, "
            "provenance=%s, max_workers=%d, activity_log_size=%d",
            self.log_level,
            self.strict_operating_point,
            self.enable_provenance,
            self.max_workers,
            self.activity_log_size,
        )

    @classmethod
    def from_env(cls) -> SimulatorConfig:
        """Build a SimulatorConfig from environment variables.

        Boolean values accept ``true/1/yes`` (case-insensitive). Unknown log
        levels, malformed integers and integers below their minimum fall
        back to the class default and emit a WARNING log, so a bad
        environment never makes get_config() raise.
        """
        prefix = _ENV_PREFIX

        def _env(name: str) -> Optional[str]:
            return os.environ.get(f"{prefix}{name}")

        def _bool(name: str, default: bool) -> bool:
            val = _env(name)
            if val is None:
                return default
            return val.strip().lower() in ("true", "1", "yes")

        def _int(name: str, default: int, minimum: int) -> int:
            val = _env(name)
            if val is None:
                return default
            try:
                parsed = int(val.strip())
            except ValueError:
                logger.warning(
                    "Invalid integer for %s%s=%r, using default %d",
                    prefix, name, val, default,
                )
                return default
            if parsed < minimum:
                logger.warning(
                    "%s%s=%d is below the minimum %d, using default %d",
                    prefix, name, parsed, minimum, default,
                )
                return default
            return parsed

        def _log_level(name: str, default: str) -> str:
            val = _env(name)
            if val is None:
                return default
            level = val.strip().upper()
            if level not in _VALID_LOG_LEVELS:
                logger.warning(
                    "Invalid log level for %s%s=%r, using default %s",
                    prefix, name, val, default,
                )
                return default
            return level

        return cls(
            log_level=_log_level("LOG_LEVEL", cls.log_level),
            strict_operating_point=_bool(
                "STRICT_OPERATING_POINT", cls.strict_operating_point,
            ),
            enable_provenance=_bool("ENABLE_PROVENANCE", cls.enable_provenance),
            max_workers=_int("MAX_WORKERS", cls.max_workers, minimum=1),
            activity_log_size=_int("ACTIVITY_LOG_SIZE", cls.activity_log_size, minimum=1),
            display_precision=_int("DISPLAY_PRECISION", cls.display_precision, minimum=0),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialise the settings to a plain dictionary."""
        return {
            "log_level": self.log_level,
            "strict_operating_point": self.strict_operating_point,
            "enable_provenance": self.enable_provenance,
            "max_workers": self.max_workers,
            "activity_log_size": self.activity_log_size,
            "display_precision": self.display_precision,
        }


# ---------------------------------------------------------------------------
# Thread-safe singleton accessor
# ---------------------------------------------------------------------------

_config_instance: Optional[SimulatorConfig] = None
_config_lock = threading.Lock()


def get_config() -> SimulatorConfig:
    """Return the singleton SimulatorConfig, creating it from env if needed."""
    global _config_instance
    if _config_instance is None:
        with _config_lock:
            if _config_instance is None:
                _config_instance = SimulatorConfig.from_env()
    return _config_instance


def set_config(config: SimulatorConfig) -> None:
    """Replace the singleton SimulatorConfig (tests and dependency injection)."""
    global _config_instance
    with _config_lock:
        _config_instance = config
    logger.info(
        "SimulatorConfig replaced programmatically: strict=%s, max_workers=%d",
        config.strict_operating_point,
        config.max_workers,
    )


def reset_config() -> None:
    """Reset the singleton so the next get_config() re-reads the environment."""
    global _config_instance
    with _config_lock:
        _config_instance = None
    logger.debug("SimulatorConfig singleton reset")


__all__ = [
    "SimulatorConfig",
    "get_config",
    "set_config",
    "reset_config",
]
