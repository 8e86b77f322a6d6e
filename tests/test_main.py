"""Tests for main application entrypoint."""

import json
from pathlib import Path
from unittest.mock import AsyncMock, Mock, patch

import pytest

from telemetry_pusher.core.errors import InvalidJsonError, MissingConfigError, PayloadFileNotFoundError
from telemetry_pusher.main import (
    EXIT_OK,
    EXIT_ROUNDS_FAILED,
    EXIT_STARTUP_FAILED,
    exit_code_for,
    main,
)
from telemetry_pusher.ports.publish import PublishResult
from telemetry_pusher.ports.run import LoopState, RunPlan, RunSummary

__all__ = []


def test_exit_code_for_summary() -> None:
    """Exit code should depend only on the failed count."""
    assert exit_code_for(RunSummary(attempted=3, succeeded=3)) == EXIT_OK
    assert exit_code_for(RunSummary(attempted=3, succeeded=2, failed=1)) == EXIT_ROUNDS_FAILED
    assert EXIT_ROUNDS_FAILED != EXIT_STARTUP_FAILED


@pytest.fixture
def patched_main():
    """Patch main's collaborators; yields the mocks by name."""
    with (
        patch("telemetry_pusher.main.configure_logs"),
        patch("telemetry_pusher.main.load_settings") as mock_load_settings,
        patch("telemetry_pusher.main.load_payload") as mock_load_payload,
        patch("telemetry_pusher.main.TelemetryPublisher") as mock_publisher_class,
        patch("telemetry_pusher.main.make_stop_on_sigterm") as mock_stop,
        patch("telemetry_pusher.main.start_send_loop", new_callable=AsyncMock) as mock_loop,
    ):
        mock_settings = Mock()
        mock_settings.request_timeout_sec = 10.0
        mock_load_settings.return_value = mock_settings

        mock_publisher = AsyncMock()
        mock_publisher_class.return_value = mock_publisher
        mock_publisher.__aenter__.return_value = mock_publisher

        mock_loop.return_value = RunSummary(attempted=1, succeeded=1, state=LoopState.COMPLETED)

        yield {
            "load_settings": mock_load_settings,
            "load_payload": mock_load_payload,
            "publisher_class": mock_publisher_class,
            "publisher": mock_publisher,
            "stop": mock_stop,
            "loop": mock_loop,
            "settings": mock_settings,
        }


@pytest.mark.asyncio
async def test_main_runs_loop_with_cli_plan(patched_main) -> None:
    """Main should build the plan from arguments and hand it to the loop."""
    code = await main(["-i", "0", "-c", "3", "-f", "readings.json"])

    assert code == EXIT_OK
    patched_main["load_payload"].assert_called_once_with("readings.json")
    patched_main["publisher_class"].assert_called_once()
    assert patched_main["publisher_class"].call_args.kwargs["timeout_sec"] == 10.0

    kwargs = patched_main["loop"].call_args.kwargs
    assert kwargs["plan"] == RunPlan(interval_sec=0, round_count=3)
    assert kwargs["endpoint"] is patched_main["settings"].endpoint.return_value
    assert kwargs["payload"] is patched_main["load_payload"].return_value
    assert kwargs["publish_fn"] is patched_main["publisher"].publish
    assert kwargs["stop_fn"] is patched_main["stop"].return_value
    assert kwargs["sleep_fn"] is patched_main["stop"].return_value.wait


@pytest.mark.asyncio
async def test_main_returns_rounds_failed_code(patched_main) -> None:
    """A run with failed rounds should exit with the rounds-failed code."""
    patched_main["loop"].return_value = RunSummary(
        attempted=2, succeeded=1, failed=1, state=LoopState.COMPLETED
    )

    assert await main(["-c", "2"]) == EXIT_ROUNDS_FAILED


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("target", "error"),
    [
        ("load_settings", MissingConfigError("server")),
        ("load_settings", MissingConfigError("device_token")),
        ("load_payload", PayloadFileNotFoundError("data.json", "No such file or directory")),
        ("load_payload", InvalidJsonError("data.json", "Expecting ',' delimiter")),
    ],
)
async def test_main_aborts_on_startup_error(patched_main, target: str, error: Exception) -> None:
    """Startup errors should stop before any publisher is created."""
    patched_main[target].side_effect = error

    code = await main([])

    assert code == EXIT_STARTUP_FAILED
    patched_main["publisher_class"].assert_not_called()
    patched_main["loop"].assert_not_called()


@pytest.mark.asyncio
async def test_main_check_mode_does_not_send(patched_main) -> None:
    """--check should validate and exit without starting the loop."""
    with patch("telemetry_pusher.main.health_check.main", return_value=0) as mock_check:
        code = await main(["--check", "-f", "readings.json", "--env-file", "pusher.env"])

    assert code == EXIT_OK
    mock_check.assert_called_once_with(payload_path="readings.json", env_file="pusher.env")
    patched_main["loop"].assert_not_called()


@pytest.mark.asyncio
async def test_main_version_bypasses_everything(patched_main) -> None:
    """--version should exit before loading configuration."""
    with pytest.raises(SystemExit) as exc_info:
        await main(["-V"])

    assert exc_info.value.code == 0
    patched_main["load_settings"].assert_not_called()


@pytest.mark.asyncio
async def test_main_end_to_end_with_fake_transport(monkeypatch, tmp_path: Path) -> None:
    """Full startup with a real payload file and a stubbed publish call."""
    data_file = tmp_path / "data.json"
    data_file.write_text(json.dumps({"temperature": 21.5}))
    env_file = tmp_path / "pusher.env"
    env_file.write_text("")
    monkeypatch.setenv("server", "http://tb.local:8080")
    monkeypatch.setenv("device_token", "A1B2C3D4E5F6")
    monkeypatch.delenv("request_timeout", raising=False)

    publish = AsyncMock(side_effect=[PublishResult.success(200), PublishResult.failure("HTTP 500: x", 500)])

    with (
        patch("telemetry_pusher.main.configure_logs"),
        patch("telemetry_pusher.main.TelemetryPublisher.publish", publish),
    ):
        code = await main(["-i", "0", "-c", "2", "-f", str(data_file), "--env-file", str(env_file)])

    assert code == EXIT_ROUNDS_FAILED
    assert publish.await_count == 2
    endpoint, payload = publish.call_args.args
    assert endpoint.telemetry_url == "http://tb.local:8080/api/v1/A1B2C3D4E5F6/telemetry"
    assert payload.body == b'{"temperature":21.5}'
