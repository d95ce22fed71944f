"""Tests for CLI dispatch and exit codes."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock

import pytest
from pytest_mock import MockerFixture

from mbtagsync.config.config import AppConfig
from mbtagsync.ui.cli import CommandProcessor, main
from mbtagsync.ui.cli.args.options import HealthArgs, ScanArgs

_CLI = "mbtagsync.ui.cli.cli"


@pytest.fixture
def scan_args(tmp_path: Path) -> ScanArgs:
    return ScanArgs(
        command="scan",
        roots=(tmp_path,),
        refresh=True,
        verbose=False,
        quiet=False,
        config=AppConfig(cache_dir=tmp_path),
    )


@pytest.fixture
def mock_scan_command(mocker: MockerFixture, scan_args: ScanArgs) -> MagicMock:
    _ = mocker.patch(f"{_CLI}.ArgumentParser.process_args", return_value=scan_args)
    return mocker.patch(f"{_CLI}.ScanCommand")


def test_successful_command_returns_normally(mock_scan_command: MagicMock, scan_args: ScanArgs) -> None:
    mock_scan_command.return_value.execute.return_value = 0

    CommandProcessor.process_command(["scan"])

    mock_scan_command.assert_called_once_with(scan_args)


def test_failing_command_exits_with_its_code(mock_scan_command: MagicMock) -> None:
    mock_scan_command.return_value.execute.return_value = 1

    with pytest.raises(SystemExit) as excinfo:
        CommandProcessor.process_command(["scan"])
    assert excinfo.value.code == 1


def test_unexpected_errors_exit_one(mock_scan_command: MagicMock) -> None:
    mock_scan_command.return_value.execute.side_effect = OSError("Permission denied")

    with pytest.raises(SystemExit) as excinfo:
        CommandProcessor.process_command(["scan"])
    assert excinfo.value.code == 1


def test_keyboard_interrupt_exits_130(mock_scan_command: MagicMock) -> None:
    mock_scan_command.return_value.execute.side_effect = KeyboardInterrupt

    with pytest.raises(SystemExit) as excinfo:
        CommandProcessor.process_command(["scan"])
    assert excinfo.value.code == 130


def test_health_dispatch(mocker: MockerFixture, tmp_path: Path) -> None:
    args = HealthArgs(command="health", verbose=False, quiet=True, config=AppConfig(cache_dir=tmp_path))
    _ = mocker.patch(f"{_CLI}.ArgumentParser.process_args", return_value=args)
    health = mocker.patch(f"{_CLI}.HealthCommand")
    health.return_value.execute.return_value = 0

    CommandProcessor.process_command(["health"])

    health.assert_called_once_with(args)


def test_main_returns_zero(mocker: MockerFixture) -> None:
    process = mocker.patch(f"{_CLI}.CommandProcessor.process_command")

    assert main() == 0
    process.assert_called_once_with()
