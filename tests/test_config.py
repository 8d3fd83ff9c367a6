"""Tests for gateway settings."""

import pytest
from pydantic import ValidationError

from recgate.config import GatewaySettings


def test_defaults_when_environment_is_empty():
    settings = GatewaySettings.from_env({})

    assert settings.port == 6666
    assert settings.engine_endpoint == "http://127.0.0.1:8088"
    assert settings.engine_api_key == "api_key"
    assert settings.engine_timeout == 10.0


def test_reads_environment_variables():
    settings = GatewaySettings.from_env(
        {
            "RECGATE_PORT": "7000",
            "GORSE_ENDPOINT": "http://gorse:8088",
            "GORSE_API_KEY": "k",
            "GORSE_TIMEOUT": "2.5",
            "LOG_LEVEL": "DEBUG",
        }
    )

    assert settings.port == 7000
    assert settings.engine_endpoint == "http://gorse:8088"
    assert settings.engine_api_key == "k"
    assert settings.engine_timeout == 2.5
    assert settings.log_level == "DEBUG"


def test_invalid_port_is_rejected():
    with pytest.raises(ValidationError):
        GatewaySettings.from_env({"RECGATE_PORT": "not-a-port"})


def test_settings_are_immutable():
    settings = GatewaySettings()

    with pytest.raises(ValidationError):
        settings.port = 1
