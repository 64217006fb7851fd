"""Tests for scenario bundles and scenario files."""

import json

import pytest

from boilersim.exceptions import ConfigurationError, ValidationError
from boilersim.models import Air, ControlSettings, Fuel, Water
from boilersim.params import DEFAULT_PARAMS
from boilersim.scenarios import (
    DEFAULT_SCENARIO,
    load_scenario,
    load_scenarios,
    scenario_from_dict,
)


SCENARIO_YAML = """
name: gas-150
fuel:
  type: natural_gas
  quantity: 500
  heat_content: 1000
water:
  quantity: 20000
  temperature: 15
air:
  quantity: 6000
  temperature: 25
electricity: 30
control_settings:
  pressure: 150
  temperature: 350
params:
  efficiency: 0.85
"""


class TestDefaultScenario:
    def test_dashboard_form_defaults(self):
        assert DEFAULT_SCENARIO.fuel == Fuel(type="wood", quantity=1000, heat_content=8000)
        assert DEFAULT_SCENARIO.water == Water(quantity=34500, temperature=20)
        assert DEFAULT_SCENARIO.air == Air(quantity=12000, temperature=20)
        assert DEFAULT_SCENARIO.electricity == 50
        assert DEFAULT_SCENARIO.control_settings == ControlSettings(pressure=200, temperature=382)
        assert DEFAULT_SCENARIO.params is DEFAULT_PARAMS

    def test_to_dict(self):
        data = DEFAULT_SCENARIO.to_dict()
        assert data["fuel"] == {"type": "wood", "quantity": 1000, "heat_content": 8000}
        assert data["params"]["efficiency"] == 0.9


class TestScenarioFromDict:
    def test_missing_sections_use_defaults(self):
        scenario = scenario_from_dict({"fuel": {"quantity": 2000}}, default_name="partial")

        assert scenario.name == "partial"
        assert scenario.fuel == Fuel(type="wood", quantity=2000, heat_content=8000)
        assert scenario.water == DEFAULT_SCENARIO.water
        assert scenario.control_settings == DEFAULT_SCENARIO.control_settings
        assert scenario.params == DEFAULT_PARAMS

    def test_wrong_type(self):
        with pytest.raises(ValidationError) as exc_info:
            scenario_from_dict({"fuel": {"quantity": "lots"}})
        assert "fuel.quantity" in exc_info.value.context["invalid_fields"]

    def test_unknown_key(self):
        with pytest.raises(ValidationError):
            scenario_from_dict({"fule": {}})

    def test_invalid_params(self):
        with pytest.raises(ValidationError):
            scenario_from_dict({"params": {"efficiency": 1.5}})

    def test_not_a_mapping(self):
        with pytest.raises(ValidationError):
            scenario_from_dict(["fuel"])


class TestLoadScenario:
    def test_yaml(self, tmp_path):
        path = tmp_path / "gas.yaml"
        path.write_text(SCENARIO_YAML)

        scenario = load_scenario(path)
        assert scenario.name == "gas-150"
        assert scenario.fuel == Fuel(type="natural_gas", quantity=500, heat_content=1000)
        assert scenario.air == Air(quantity=6000, temperature=25)
        assert scenario.control_settings.pressure == 150
        assert scenario.params.efficiency == 0.85
        assert scenario.params.tube_config == DEFAULT_PARAMS.tube_config

    def test_json(self, tmp_path):
        path = tmp_path / "wood.json"
        path.write_text(json.dumps({"fuel": {"quantity": 1500}}))

        scenario = load_scenario(path)
        assert scenario.name == "wood-1"
        assert scenario.fuel.quantity == 1500

    def test_more_than_one(self, tmp_path):
        path = tmp_path / "many.yaml"
        path.write_text("scenarios:\n  - name: a\n  - name: b\n")

        with pytest.raises(ConfigurationError, match="Expected one scenario"):
            load_scenario(path)


class TestLoadScenarios:
    def test_list(self, tmp_path):
        path = tmp_path / "sweep.yaml"
        path.write_text(
            "scenarios:\n"
            "  - name: low\n"
            "    control_settings: {pressure: 50}\n"
            "  - control_settings: {pressure: 300}\n"
        )

        scenarios = load_scenarios(path)
        assert [s.name for s in scenarios] == ["low", "sweep-2"]
        assert [s.control_settings.pressure for s in scenarios] == [50, 300]
        assert scenarios[0].control_settings.temperature == 382

    def test_scenarios_not_a_list(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("scenarios: {name: a}\n")

        with pytest.raises(ConfigurationError) as exc_info:
            load_scenarios(path)
        assert exc_info.value.context["config_key"] == "scenarios"

    def test_empty_list(self, tmp_path):
        path = tmp_path / "none.yaml"
        path.write_text("scenarios: []\n")

        with pytest.raises(ConfigurationError, match="No scenarios"):
            load_scenarios(path)

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")

        with pytest.raises(ConfigurationError):
            load_scenarios(path)

    def test_non_utf8_file(self, tmp_path):
        path = tmp_path / "binary.yaml"
        path.write_bytes(b"name: \xff\xfe\n")

        with pytest.raises(ConfigurationError, match="Cannot read"):
            load_scenario(path)

    def test_directory(self, tmp_path):
        with pytest.raises(ConfigurationError):
            load_scenarios(tmp_path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError):
            load_scenarios(tmp_path / "missing.yaml")
