"""
Unit tests for environment-driven configuration.
"""

import pytest

from tokenvest.core.config import LoggingSettings, load_logging_settings
from tokenvest.core.vesting_exceptions import ConfigurationError


def test_defaults_when_environment_empty():
    assert load_logging_settings({}) == LoggingSettings()


def test_reads_all_variables():
    settings = load_logging_settings(
        {
            "TOKENVEST_LOG_LEVEL": "debug",
            "TOKENVEST_ENVIRONMENT": "staging",
            "TOKENVEST_LOG_FILE": "/tmp/tokenvest/vesting.json",
            "TOKENVEST_SERVICE_NAME": "payroll",
        }
    )

    assert settings.level == "DEBUG"
    assert settings.environment == "staging"
    assert settings.log_file == "/tmp/tokenvest/vesting.json"
    assert settings.service_name == "payroll"


def test_warn_alias():
    assert load_logging_settings({"TOKENVEST_LOG_LEVEL": "WARN"}).level == "WARNING"


def test_blank_values_fall_back_to_defaults():
    settings = load_logging_settings({"TOKENVEST_LOG_LEVEL": "  ", "TOKENVEST_LOG_FILE": " "})

    assert settings.level == "INFO"
    assert settings.log_file is None


def test_invalid_level_raises():
    with pytest.raises(ConfigurationError) as excinfo:
        load_logging_settings({"TOKENVEST_LOG_LEVEL": "LOUD"})

    assert excinfo.value.details["env_var"] == "TOKENVEST_LOG_LEVEL"


def test_reads_process_environment(monkeypatch):
    monkeypatch.setenv("TOKENVEST_ENVIRONMENT", "production")

    assert load_logging_settings().environment == "production"
