"""
Dashboard data.

Derives the figures the boiler dashboard displays from a BoilerOutput:
four stat cards, three chart series, and a bounded recent-activity log.
Rendering is left to the caller (see ``boilersim.cli``).
"""

import logging
import math
import threading
from collections import deque
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from boilersim.calculators.stages import ieee_divide
from boilersim.config import get_config
from boilersim.models import BoilerOutput
from boilersim.scenarios import Scenario

logger = logging.getLogger(__name__)

# Usable heat shown on the dashboard, BTU per PPH of steam
USABLE_HEAT_PER_PPH = 1000

Series = List[Tuple[str, float]]


def format_number(value: float) -> str:
    """Shortest plain rendering: 200.0 -> "200", 552.5 -> "552.5"."""
    if math.isfinite(value) and float(value).is_integer():
        return str(int(value))
    return str(value)


@dataclass(frozen=True)
class StatCard:
    """One headline figure."""
    title: str
    value: str


@dataclass(frozen=True)
class DashboardSummary:
    """
    Everything the dashboard shows for one simulation.

    Attributes:
        stat_cards: Steam flow rate, pressure, temperature and efficiency
        usable_heat: steam.flow_rate * 1000
        display_efficiency: usable / (usable + waste) * 100, may be nan
        energy_distribution: Usable vs waste heat
        flue_gas_composition: Species -> percent, in composition order
        emissions: Species -> quantity, in emissions order
    """
    stat_cards: List[StatCard]
    usable_heat: float
    display_efficiency: float
    energy_distribution: Series = field(default_factory=list)
    flue_gas_composition: Series = field(default_factory=list)
    emissions: Series = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "stat_cards": [{"title": c.title, "value": c.value} for c in self.stat_cards],
            "usable_heat": self.usable_heat,
            "display_efficiency": self.display_efficiency,
            "energy_distribution": [list(p) for p in self.energy_distribution],
            "flue_gas_composition": [list(p) for p in self.flue_gas_composition],
            "emissions": [list(p) for p in self.emissions],
        }


def summarize(output: BoilerOutput, precision: Optional[int] = None) -> DashboardSummary:
    """
    Build the dashboard figures for ``output``.

    Args:
        output: Simulation result
        precision: Decimal places for the steam flow card (defaults to the
            display_precision setting)
    """
    if precision is None:
        precision = get_config().display_precision

    usable_heat = output.steam.flow_rate * USABLE_HEAT_PER_PPH
    efficiency = ieee_divide(usable_heat, usable_heat + output.waste_heat) * 100

    stat_cards = [
        StatCard("Steam Flow Rate", f"{output.steam.flow_rate:.{precision}f} PPH"),
        StatCard("Steam Pressure", f"{format_number(output.steam.pressure)} PSIG"),
        StatCard("Steam Temperature", f"{format_number(output.steam.temperature)} °F"),
        StatCard("Efficiency", f"{efficiency:.1f}%"),
    ]

    return DashboardSummary(
        stat_cards=stat_cards,
        usable_heat=usable_heat,
        display_efficiency=efficiency,
        energy_distribution=[
            ("Usable Heat", usable_heat),
            ("Waste Heat", output.waste_heat),
        ],
        flue_gas_composition=list(output.flue_gases.composition.items()),
        emissions=list(output.emissions.items()),
    )


class ActivityLog:
    """
    Recent-activity list, newest first.

    Only the most recent ``max_entries`` messages are kept. Safe to share
    between threads.
    """

    def __init__(self, max_entries: Optional[int] = None):
        self.max_entries = max_entries or get_config().activity_log_size
        self._entries = deque(maxlen=self.max_entries)
        self._lock = threading.Lock()

    def record(self, message: str) -> None:
        with self._lock:
            self._entries.appendleft(message)

    def record_run(self, scenario: Scenario) -> str:
        """Record a simulation run and return the message."""
        message = (
            f"Ran simulation: {scenario.fuel.type}, "
            f"{format_number(scenario.fuel.quantity)} lb/hr, "
            f"{format_number(scenario.control_settings.pressure)} PSIG"
        )
        self.record(message)
        logger.debug(message)
        return message

    def entries(self) -> List[str]:
        with self._lock:
            return list(self._entries)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


__all__ = [
    "StatCard",
    "DashboardSummary",
    "ActivityLog",
    "summarize",
    "format_number",
]
