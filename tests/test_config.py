"""Tests for SimulatorConfig and its singleton accessors."""

import logging

import pytest

from boilersim.config import SimulatorConfig, get_config, reset_config, set_config


class TestSimulatorConfig:
    def test_defaults(self):
        config = SimulatorConfig()

        assert config.log_level == "INFO"
        assert config.strict_operating_point is False
        assert config.enable_provenance is True
        assert config.max_workers == 4
        assert config.activity_log_size == 4
        assert config.display_precision == 2

    def test_log_level_normalized(self):
        assert SimulatorConfig(log_level="debug").log_level == "DEBUG"

    def test_validation_collects_errors(self):
        with pytest.raises(ValueError) as exc_info:
            SimulatorConfig(log_level="LOUD", max_workers=0, activity_log_size=0)

        message = str(exc_info.value)
        assert "log_level" in message
        assert "max_workers" in message
        assert "activity_log_size" in message

    def test_negative_precision(self):
        with pytest.raises(ValueError, match="display_precision"):
            SimulatorConfig(display_precision=-1)

    def test_to_dict(self):
        assert SimulatorConfig().to_dict() == {
            "log_level": "INFO",
            "strict_operating_point": False,
            "enable_provenance": True,
            "max_workers": 4,
            "activity_log_size": 4,
            "display_precision": 2,
        }


class TestFromEnv:
    def test_reads_prefixed_variables(self, monkeypatch):
        monkeypatch.setenv("BOILERSIM_LOG_LEVEL", "warning")
        monkeypatch.setenv("BOILERSIM_STRICT_OPERATING_POINT", "true")
        monkeypatch.setenv("BOILERSIM_ENABLE_PROVENANCE", "0")
        monkeypatch.setenv("BOILERSIM_MAX_WORKERS", "8")
        monkeypatch.setenv("BOILERSIM_ACTIVITY_LOG_SIZE", "10")
        monkeypatch.setenv("BOILERSIM_DISPLAY_PRECISION", "3")

        config = SimulatorConfig.from_env()

        assert config.log_level == "WARNING"
        assert config.strict_operating_point is True
        assert config.enable_provenance is False
        assert config.max_workers == 8
        assert config.activity_log_size == 10
        assert config.display_precision == 3

    @pytest.mark.parametrize("value", ["yes", "YES", "1", " True "])
    def test_truthy_values(self, monkeypatch, value):
        monkeypatch.setenv("BOILERSIM_STRICT_OPERATING_POINT", value)
        assert SimulatorConfig.from_env().strict_operating_point is True

    def test_malformed_int_falls_back(self, monkeypatch, caplog):
        monkeypatch.setenv("BOILERSIM_MAX_WORKERS", "lots")

        with caplog.at_level(logging.WARNING, logger="boilersim.config"):
            config = SimulatorConfig.from_env()

        assert config.max_workers == 4
        assert "BOILERSIM_MAX_WORKERS" in caplog.text

    def test_unknown_log_level_falls_back(self, monkeypatch, caplog):
        monkeypatch.setenv("BOILERSIM_LOG_LEVEL", "verbose")

        with caplog.at_level(logging.WARNING, logger="boilersim.config"):
            config = SimulatorConfig.from_env()

        assert config.log_level == "INFO"
        assert "BOILERSIM_LOG_LEVEL" in caplog.text

    @pytest.mark.parametrize("name, value, attribute, default", [
        ("BOILERSIM_MAX_WORKERS", "0", "max_workers", 4),
        ("BOILERSIM_ACTIVITY_LOG_SIZE", "-2", "activity_log_size", 4),
        ("BOILERSIM_DISPLAY_PRECISION", "-1", "display_precision", 2),
    ])
    def test_out_of_range_int_falls_back(self, monkeypatch, caplog, name, value, attribute, default):
        monkeypatch.setenv(name, value)

        with caplog.at_level(logging.WARNING, logger="boilersim.config"):
            config = SimulatorConfig.from_env()

        assert getattr(config, attribute) == default
        assert name in caplog.text

    def test_zero_display_precision_allowed(self, monkeypatch):
        monkeypatch.setenv("BOILERSIM_DISPLAY_PRECISION", "0")
        assert SimulatorConfig.from_env().display_precision == 0

    def test_bad_environment_does_not_break_simulate(self, monkeypatch):
        from boilersim.scenarios import DEFAULT_SCENARIO
        from boilersim.simulator import BoilerSimulator

        monkeypatch.setenv("BOILERSIM_LOG_LEVEL", "verbose")
        monkeypatch.setenv("BOILERSIM_MAX_WORKERS", "0")
        reset_config()

        output = BoilerSimulator().run_scenario(DEFAULT_SCENARIO)
        assert output.steam.flow_rate == pytest.approx(7_200_000 / 1354)
        assert get_config().max_workers == 4


class TestSingleton:
    def test_get_config_is_cached(self):
        assert get_config() is get_config()

    def test_set_and_reset(self, monkeypatch):
        custom = SimulatorConfig(max_workers=2)
        set_config(custom)
        assert get_config() is custom

        monkeypatch.setenv("BOILERSIM_MAX_WORKERS", "6")
        reset_config()
        assert get_config().max_workers == 6
