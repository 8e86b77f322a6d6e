"""Tests for the startup check."""

from unittest.mock import Mock, patch

from telemetry_pusher.adapters.driven.config.health_check import main
from telemetry_pusher.core.errors import InvalidJsonError, MissingConfigError

__all__ = []


def test_health_check_success() -> None:
    """Check should return 0 when configuration and payload load."""
    with (
        patch("telemetry_pusher.adapters.driven.config.health_check.load_settings") as mock_load,
        patch("telemetry_pusher.adapters.driven.config.health_check.load_payload") as mock_payload,
    ):
        mock_load.return_value = Mock(server="http://localhost:8080")
        mock_payload.return_value = Mock(source="data.json", body=b"{}")
        result = main(payload_path="data.json", env_file="pusher.env")

    assert result == 0
    mock_load.assert_called_once_with("pusher.env")
    mock_payload.assert_called_once_with("data.json")


def test_health_check_failure_on_config_error() -> None:
    """Check should return 1 when configuration fails to load."""
    with patch("telemetry_pusher.adapters.driven.config.health_check.load_settings") as mock_load:
        mock_load.side_effect = MissingConfigError("device_token")
        result = main()

    assert result == 1


def test_health_check_failure_on_payload_error() -> None:
    """Check should return 1 when the payload is invalid."""
    with (
        patch("telemetry_pusher.adapters.driven.config.health_check.load_settings"),
        patch("telemetry_pusher.adapters.driven.config.health_check.load_payload") as mock_payload,
    ):
        mock_payload.side_effect = InvalidJsonError("data.json", "Expecting value")
        result = main()

    assert result == 1
