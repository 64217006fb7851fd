"""
Batch Simulator

Runs many independent scenarios on a thread pool.

Features:
- Parallel execution (ThreadPoolExecutor)
- Input order preserved in the results
- Error isolation (one failing scenario doesn't stop the batch)
- Progress callback and summary statistics
"""

import logging
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional

from boilersim.config import get_config
from boilersim.determinism import DeterministicClock
from boilersim.exceptions import BoilerSimException
from boilersim.models import BoilerOutput
from boilersim.scenarios import Scenario
from boilersim.simulator import BoilerSimulator

logger = logging.getLogger(__name__)


@dataclass
class ScenarioOutcome:
    """
    Result of one scenario in a batch.

    Exactly one of ``output`` and ``error`` is set.
    """
    scenario: Scenario
    output: Optional[BoilerOutput] = None
    error: Optional[BoilerSimException] = None
    duration_ms: float = 0.0

    @property
    def succeeded(self) -> bool:
        return self.error is None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "scenario": self.scenario.name,
            "succeeded": self.succeeded,
            "output": self.output.to_dict() if self.output else None,
            "error": self.error.to_dict() if self.error else None,
            "duration_ms": self.duration_ms,
        }


@dataclass
class BatchResult:
    """
    Result of a batch run.

    Attributes:
        outcomes: Per-scenario outcomes, in input order
        successful_count: Number of scenarios that produced an output
        failed_count: Number of scenarios that raised
        batch_duration_seconds: Wall time for the whole batch
        average_duration_ms: Mean time per scenario
    """
    outcomes: List[ScenarioOutcome]
    successful_count: int = 0
    failed_count: int = 0
    batch_duration_seconds: float = 0
    average_duration_ms: float = 0
    batch_start_time: datetime = field(default_factory=DeterministicClock.utcnow)

    def __post_init__(self):
        """Calculate summary statistics"""
        self.successful_count = len([o for o in self.outcomes if o.succeeded])
        self.failed_count = len(self.outcomes) - self.successful_count

        if self.outcomes:
            self.average_duration_ms = (
                sum(o.duration_ms for o in self.outcomes) / len(self.outcomes)
            )

    @property
    def outputs(self) -> List[Optional[BoilerOutput]]:
        return [o.output for o in self.outcomes]

    def get_failed(self) -> List[ScenarioOutcome]:
        return [o for o in self.outcomes if not o.succeeded]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            'total_scenarios': len(self.outcomes),
            'successful_count': self.successful_count,
            'failed_count': self.failed_count,
            'batch_duration_seconds': self.batch_duration_seconds,
            'average_duration_ms': self.average_duration_ms,
            'batch_start_time': self.batch_start_time.isoformat(),
            'outcomes': [o.to_dict() for o in self.outcomes],
        }


class BatchSimulator:
    """
    Runs scenarios in parallel.

    The simulator is stateless, so one instance is shared by every worker.

    Example:
        >>> from boilersim.scenarios import DEFAULT_SCENARIO
        >>> result = BatchSimulator().run([DEFAULT_SCENARIO, DEFAULT_SCENARIO])
        >>> result.successful_count
        2
    """

    def __init__(
        self,
        simulator: Optional[BoilerSimulator] = None,
        max_workers: Optional[int] = None,
    ):
        """
        Args:
            simulator: Simulator to run (auto-creates if None)
            max_workers: Max parallel workers (defaults to the max_workers setting)
        """
        self.simulator = simulator or BoilerSimulator()
        self.max_workers = max_workers or get_config().max_workers

    def run(
        self,
        scenarios: List[Scenario],
        progress_callback: Optional[Callable[[int, int], None]] = None,
    ) -> BatchResult:
        """
        Simulate every scenario.

        Args:
            scenarios: Scenarios to run
            progress_callback: Optional callback function(completed, total)

        Returns:
            BatchResult with outcomes in the same order as ``scenarios``
        """
        start_time = DeterministicClock.utcnow()
        started = time.perf_counter()
        outcomes: List[Optional[ScenarioOutcome]] = [None] * len(scenarios)
        completed = 0

        logger.info(f"Starting batch simulation: {len(scenarios)} scenarios")

        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            future_to_index = {
                executor.submit(self._safe_simulate, scenario): i
                for i, scenario in enumerate(scenarios)
            }

            for future in as_completed(future_to_index):
                outcomes[future_to_index[future]] = future.result()
                completed += 1

                if progress_callback:
                    progress_callback(completed, len(scenarios))

        duration_seconds = time.perf_counter() - started

        result = BatchResult(
            outcomes=outcomes,
            batch_duration_seconds=duration_seconds,
            batch_start_time=start_time,
        )
        logger.info(
            f"Batch simulation completed: {result.successful_count} succeeded, "
            f"{result.failed_count} failed in {duration_seconds:.3f}s"
        )
        return result

    def _safe_simulate(self, scenario: Scenario) -> ScenarioOutcome:
        started = time.perf_counter()
        try:
            output = self.simulator.run_scenario(scenario)
        except BoilerSimException as e:
            logger.error(f"Simulation failed for {scenario.name}: {e}")
            return ScenarioOutcome(
                scenario=scenario,
                error=e,
                duration_ms=(time.perf_counter() - started) * 1000,
            )
        return ScenarioOutcome(
            scenario=scenario,
            output=output,
            duration_ms=(time.perf_counter() - started) * 1000,
        )


__all__ = ["BatchSimulator", "BatchResult", "ScenarioOutcome"]
