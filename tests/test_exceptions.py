"""Tests for the boilersim exception hierarchy."""

import json
from datetime import datetime, timezone

import pytest

from boilersim.determinism import DeterministicClock
from boilersim.exceptions import (
    BoilerSimException,
    ConfigurationError,
    InvalidOperatingPoint,
    SimulationException,
    ValidationError,
)


# ==============================================================================
# Base Exception Tests
# ==============================================================================

class TestBoilerSimException:
    """Tests for base BoilerSimException."""

    def test_create_basic_exception(self):
        """Can create basic exception with message."""
        exc = BoilerSimException("Something went wrong")

        assert exc.message == "Something went wrong"
        assert exc.error_code == "BS_BOILER_SIM_EXCEPTION"
        assert exc.context == {}
        assert isinstance(exc.timestamp, datetime)

    def test_explicit_error_code(self):
        exc = BoilerSimException("Test error", error_code="BS_TEST_001", context={"k": 1})

        assert exc.error_code == "BS_TEST_001"
        assert exc.context == {"k": 1}

    def test_str_representation(self):
        exc = BoilerSimException("Test error", error_code="BS_TEST_001")
        assert str(exc) == "[BS_TEST_001] - Test error"

    def test_repr(self):
        exc = BoilerSimException("Test error", error_code="BS_TEST_001")
        assert repr(exc) == "BoilerSimException(message='Test error', error_code='BS_TEST_001')"

    def test_timestamp_from_deterministic_clock(self):
        frozen = datetime(2025, 3, 1, 12, 0, tzinfo=timezone.utc)
        with DeterministicClock.frozen(frozen):
            exc = BoilerSimException("Test")
        assert exc.timestamp == frozen

    def test_to_dict_and_json(self):
        exc = BoilerSimException("Test", context={"pressure": 200})

        data = exc.to_dict()
        assert data["error_type"] == "BoilerSimException"
        assert data["message"] == "Test"
        assert data["context"] == {"pressure": 200}
        assert json.loads(exc.to_json())["error_code"] == exc.error_code


# ==============================================================================
# Subclass Tests
# ==============================================================================

class TestInvalidOperatingPoint:
    def test_hierarchy(self):
        exc = InvalidOperatingPoint("bad")
        assert isinstance(exc, SimulationException)
        assert isinstance(exc, BoilerSimException)

    def test_error_code(self):
        assert InvalidOperatingPoint("bad").error_code == "BS_SIM_INVALID_OPERATING_POINT"

    def test_stage_in_context(self):
        exc = InvalidOperatingPoint("bad", context={"pressure": -1000}, stage="steam_generation")
        assert exc.context == {"pressure": -1000, "stage": "steam_generation"}

    def test_can_be_caught_as_base(self):
        with pytest.raises(BoilerSimException):
            raise InvalidOperatingPoint("bad")


class TestValidationError:
    def test_invalid_fields(self):
        exc = ValidationError("Invalid", invalid_fields={"efficiency": "too high"})

        assert exc.error_code == "BS_VALIDATION_ERROR"
        assert exc.context["invalid_fields"] == {"efficiency": "too high"}

    def test_without_fields(self):
        assert ValidationError("Invalid").context == {}


class TestConfigurationError:
    def test_config_key(self):
        exc = ConfigurationError("Bad file", context={"path": "x.yaml"}, config_key="scenarios")

        assert exc.error_code == "BS_CONFIGURATION_ERROR"
        assert exc.context == {"path": "x.yaml", "config_key": "scenarios"}
