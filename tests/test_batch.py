"""Tests for the batch simulator."""

import math
from dataclasses import replace

import pytest

from boilersim.batch import BatchSimulator
from boilersim.config import SimulatorConfig, set_config
from boilersim.exceptions import InvalidOperatingPoint
from boilersim.models import ControlSettings, Fuel, Water
from boilersim.scenarios import DEFAULT_SCENARIO
from boilersim.simulator import BoilerSimulator


def _sweep(n):
    return [
        replace(
            DEFAULT_SCENARIO,
            name=f"fuel-{i}",
            fuel=Fuel(type="wood", quantity=100 * (i + 1), heat_content=8000),
        )
        for i in range(n)
    ]


DEGENERATE = replace(
    DEFAULT_SCENARIO,
    name="degenerate",
    water=Water(quantity=34500, temperature=0),
    control_settings=ControlSettings(pressure=-1000, temperature=0),
)


class TestBatchSimulator:
    def test_results_keep_input_order(self):
        scenarios = _sweep(12)
        result = BatchSimulator(max_workers=4).run(scenarios)

        assert [o.scenario.name for o in result.outcomes] == [s.name for s in scenarios]
        flows = [o.output.steam.flow_rate for o in result.outcomes]
        assert flows == sorted(flows)

    def test_matches_sequential_runs(self):
        scenarios = _sweep(5)
        simulator = BoilerSimulator()
        result = BatchSimulator(simulator).run(scenarios)

        assert result.outputs == [simulator.run_scenario(s) for s in scenarios]

    def test_counts(self):
        result = BatchSimulator().run(_sweep(3))

        assert result.successful_count == 3
        assert result.failed_count == 0
        assert result.batch_duration_seconds >= 0

    def test_failure_isolated(self):
        scenarios = _sweep(2) + [DEGENERATE] + _sweep(1)
        result = BatchSimulator(BoilerSimulator(strict=True)).run(scenarios)

        assert result.successful_count == 3
        assert result.failed_count == 1
        failed = result.get_failed()
        assert [o.scenario.name for o in failed] == ["degenerate"]
        assert isinstance(failed[0].error, InvalidOperatingPoint)
        assert failed[0].output is None

    def test_permissive_degenerate_is_not_a_failure(self):
        result = BatchSimulator(BoilerSimulator(strict=False)).run([DEGENERATE])

        assert result.failed_count == 0
        assert result.outcomes[0].output.steam.flow_rate == pytest.approx(-144_000)

    def test_progress_callback(self):
        calls = []
        BatchSimulator().run(_sweep(4), progress_callback=lambda done, total: calls.append((done, total)))

        assert sorted(calls) == [(1, 4), (2, 4), (3, 4), (4, 4)]

    def test_empty_batch(self):
        result = BatchSimulator().run([])

        assert result.outcomes == []
        assert result.successful_count == 0
        assert result.average_duration_ms == 0

    def test_max_workers_from_settings(self):
        set_config(SimulatorConfig(max_workers=7))
        assert BatchSimulator().max_workers == 7
        assert BatchSimulator(max_workers=2).max_workers == 2

    def test_to_dict(self):
        result = BatchSimulator(BoilerSimulator(strict=True)).run([DEFAULT_SCENARIO, DEGENERATE])
        data = result.to_dict()

        assert data["total_scenarios"] == 2
        assert data["successful_count"] == 1
        assert data["failed_count"] == 1
        assert data["outcomes"][0]["succeeded"] is True
        assert math.isclose(
            data["outcomes"][0]["output"]["steam"]["flow_rate"], 7_200_000 / 1354
        )
        assert data["outcomes"][1]["error"]["error_code"] == "BS_SIM_INVALID_OPERATING_POINT"
