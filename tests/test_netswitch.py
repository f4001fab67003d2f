"""Tests for netswitch.py.

Tests CLI argument parsing, command handlers and exit code handling.
"""

import json
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from config import ExitCode
from enums import Language, Theme
from errors import (
    AdapterControlError,
    AdapterNotFoundError,
    ControllerBusyError,
    CooldownActiveError,
    SelectionIncompleteError,
)
from models import Preferences, SelectionState, SwitchPlan
from netswitch import main, parse_arguments, run_list, run_prefs, run_select, run_switch


@pytest.fixture
def mock_controller(sample_adapters) -> MagicMock:
    """Controller double with a visible/all snapshot and defaults."""
    controller = MagicMock()
    controller.all_adapters = sample_adapters
    controller.adapters = [a for a in sample_adapters if not a.is_virtual and not a.is_bluetooth]
    controller.preferences = Preferences()
    controller.selection = controller.preferences.selection
    return controller


class TestParseArguments:
    """Tests for parse_arguments function."""

    def test_no_arguments(self) -> None:
        """Test default command is list."""
        args = parse_arguments([])

        assert args.command == "list"
        assert args.verbose is False
        assert args.log_file is None
        assert args.all is False
        assert args.export is None
        assert args.output is None

    def test_verbose_flag(self) -> None:
        """Test -v flag."""
        assert parse_arguments(["-v"]).verbose is True

    def test_log_file(self) -> None:
        """Test --log-file argument."""
        assert parse_arguments(["--log-file", "debug.log"]).log_file == Path("debug.log")

    def test_list_options(self) -> None:
        """Test list with --all and export."""
        args = parse_arguments(["list", "--all", "--export", "json", "--output", "out.json"])

        assert args.command == "list"
        assert args.all is True
        assert args.export == "json"
        assert args.output == Path("out.json")

    def test_output_requires_export(self, capsys) -> None:
        """Test --output without --export exits with code 4."""
        with pytest.raises(SystemExit) as exc_info:
            parse_arguments(["list", "--output", "out.json"])

        assert exc_info.value.code == ExitCode.INVALID_ARGUMENTS
        assert "--output requires --export" in capsys.readouterr().err

    def test_invalid_export_format(self) -> None:
        """Test unsupported export format is rejected by argparse."""
        with pytest.raises(SystemExit) as exc_info:
            parse_arguments(["list", "--export", "xml"])
        assert exc_info.value.code == 2

    def test_select(self) -> None:
        """Test select takes an adapter name."""
        args = parse_arguments(["select", "Ethernet 2"])
        assert args.command == "select"
        assert args.name == "Ethernet 2"

    def test_select_invalid_name(self) -> None:
        """Test blank adapter names exit with code 4."""
        with pytest.raises(SystemExit) as exc_info:
            parse_arguments(["select", "  "])
        assert exc_info.value.code == ExitCode.INVALID_ARGUMENTS

    def test_switch(self) -> None:
        """Test switch command."""
        assert parse_arguments(["switch"]).command == "switch"

    def test_prefs(self) -> None:
        """Test preference options."""
        args = parse_arguments(
            ["prefs", "--theme", "light", "--language", "German", "--show-virtual", "on"]
        )
        assert args.command == "prefs"
        assert args.theme == "light"
        assert args.language == "German"
        assert args.show_virtual == "on"
        assert args.show_bluetooth is None

    def test_help_mentions_cooldown_scope(self, capsys) -> None:
        """Test help explains the cooldown only spans one process."""
        with pytest.raises(SystemExit) as exc_info:
            parse_arguments(["--help"])

        assert exc_info.value.code == 0
        assert "applies within one process" in capsys.readouterr().out

    def test_prefs_invalid_language(self) -> None:
        """Test languages outside the supported set are rejected."""
        with pytest.raises(SystemExit):
            parse_arguments(["prefs", "--language", "Klingon"])


class TestRunList:
    """Tests for run_list function."""

    def test_table(self, mock_controller, capsys) -> None:
        """Test visible adapters are printed."""
        code = run_list(mock_controller, parse_arguments([]))

        assert code == ExitCode.SUCCESS
        mock_controller.refresh.assert_called_once()
        out = capsys.readouterr().out
        assert "Wi-Fi" in out
        assert "vEthernet" not in out

    def test_all(self, mock_controller, capsys) -> None:
        """Test --all shows hidden adapters."""
        run_list(mock_controller, parse_arguments(["list", "--all"]))
        assert "vEthernet" in capsys.readouterr().out

    def test_export_stdout(self, mock_controller, capsys) -> None:
        """Test JSON export to stdout."""
        run_list(mock_controller, parse_arguments(["list", "--export", "json"]))
        data = json.loads(capsys.readouterr().out)
        assert data["metadata"]["adapter_count"] == 2

    def test_export_file(self, mock_controller, tmp_path) -> None:
        """Test JSON export to a file."""
        output = tmp_path / "adapters.json"

        code = run_list(
            mock_controller,
            parse_arguments(["list", "--all", "--export", "json", "--output", str(output)]),
        )

        assert code == ExitCode.SUCCESS
        assert json.loads(output.read_text(encoding="utf-8"))["metadata"]["adapter_count"] == 4

    def test_no_adapters(self, mock_controller) -> None:
        """Test empty snapshot is a general error."""
        mock_controller.all_adapters = []
        mock_controller.adapters = []
        assert run_list(mock_controller, parse_arguments([])) == ExitCode.GENERAL_ERROR


class TestRunSelect:
    """Tests for run_select function."""

    def test_select_canonical_name(self, mock_controller, capsys) -> None:
        """Test the snapshot spelling is stored."""
        mock_controller.toggle_selection.return_value = SelectionState(["Wi-Fi"])

        code = run_select(mock_controller, "wi-fi")

        assert code == ExitCode.SUCCESS
        mock_controller.refresh.assert_called_once()
        mock_controller.toggle_selection.assert_called_once_with("Wi-Fi")
        assert "Selected: Wi-Fi / --" in capsys.readouterr().out

    def test_unknown_adapter(self, mock_controller) -> None:
        """Test selecting an unknown adapter fails."""
        code = run_select(mock_controller, "Ethernet 9")

        assert code == ExitCode.SWITCH_FAILED
        mock_controller.toggle_selection.assert_not_called()

    def test_deselect_skips_refresh(self, mock_controller) -> None:
        """Test deselecting needs no discovery."""
        mock_controller.selection = SelectionState(["Ethernet"])
        mock_controller.toggle_selection.return_value = SelectionState()

        code = run_select(mock_controller, "ethernet")

        assert code == ExitCode.SUCCESS
        mock_controller.refresh.assert_not_called()
        mock_controller.toggle_selection.assert_called_once_with("ethernet")


class TestRunSwitch:
    """Tests for run_switch function."""

    def test_success(self, mock_controller, capsys) -> None:
        """Test applied plan is printed."""
        mock_controller.switch.return_value = SwitchPlan("Ethernet", "Wi-Fi", False, True)

        assert run_switch(mock_controller) == ExitCode.SUCCESS

        out = capsys.readouterr().out
        assert "Ethernet: disabled" in out
        assert "Wi-Fi: enabled" in out

    @pytest.mark.parametrize(
        "error",
        [CooldownActiveError(3), SelectionIncompleteError(1), ControllerBusyError()],
    )
    def test_refused(self, mock_controller, error) -> None:
        """Test refusals exit with code 5."""
        mock_controller.switch.side_effect = error
        assert run_switch(mock_controller) == ExitCode.SWITCH_REFUSED

    @pytest.mark.parametrize(
        "error",
        [AdapterNotFoundError("Wi-Fi"), AdapterControlError("Wi-Fi", True, 5)],
    )
    def test_failed(self, mock_controller, error, caplog) -> None:
        """Test failures exit with code 6."""
        mock_controller.switch.side_effect = error
        assert run_switch(mock_controller) == ExitCode.SWITCH_FAILED
        assert "Wi-Fi" in caplog.text


class TestRunPrefs:
    """Tests for run_prefs function."""

    def test_apply_changes(self, mock_controller, capsys) -> None:
        """Test each option is applied through the controller."""
        args = parse_arguments(
            [
                "prefs",
                "--theme",
                "light",
                "--language",
                "Japanese",
                "--show-virtual",
                "on",
                "--show-bluetooth",
                "off",
            ]
        )

        assert run_prefs(mock_controller, args) == ExitCode.SUCCESS

        mock_controller.set_theme.assert_called_once_with(Theme.LIGHT)
        mock_controller.set_language.assert_called_once_with(Language.JAPANESE)
        mock_controller.set_show_virtual.assert_called_once_with(True)
        mock_controller.set_show_bluetooth.assert_called_once_with(False)
        assert "Theme:" in capsys.readouterr().out

    def test_show_only(self, mock_controller) -> None:
        """Test no options changes nothing."""
        run_prefs(mock_controller, parse_arguments(["prefs"]))
        mock_controller.set_theme.assert_not_called()
        mock_controller.set_language.assert_not_called()


class TestMain:
    """Tests for main function."""

    @patch("netswitch.check_dependencies", return_value=False)
    def test_missing_dependencies(self, mock_check) -> None:
        """Test exit code 2 without PowerShell."""
        with pytest.raises(SystemExit) as exc_info:
            main(["list"])
        assert exc_info.value.code == ExitCode.MISSING_DEPENDENCIES

    @patch("netswitch.check_dependencies", return_value=False)
    @patch("netswitch.SwitchController")
    def test_prefs_without_powershell(self, mock_cls, mock_check) -> None:
        """Test preferences work without PowerShell."""
        mock_cls.return_value.preferences = Preferences()

        with pytest.raises(SystemExit) as exc_info:
            main(["prefs"])

        assert exc_info.value.code == ExitCode.SUCCESS
        mock_check.assert_not_called()
        mock_cls.return_value.shutdown.assert_called_once()

    @patch("netswitch.check_dependencies", return_value=True)
    @patch("netswitch.SwitchController")
    def test_switch_exit_code(self, mock_cls, mock_check) -> None:
        """Test switch result becomes the exit code."""
        mock_cls.return_value.switch.side_effect = CooldownActiveError(4)

        with pytest.raises(SystemExit) as exc_info:
            main(["switch"])

        assert exc_info.value.code == ExitCode.SWITCH_REFUSED

    @patch("netswitch.check_dependencies", return_value=True)
    @patch("netswitch.SwitchController")
    def test_unexpected_error(self, mock_cls, mock_check) -> None:
        """Test unexpected errors exit with code 1 and release the worker."""
        mock_cls.return_value.refresh.side_effect = OSError("boom")

        with pytest.raises(SystemExit) as exc_info:
            main(["list"])

        assert exc_info.value.code == ExitCode.GENERAL_ERROR
        mock_cls.return_value.shutdown.assert_called_once()

    @patch("netswitch.check_dependencies", return_value=True)
    @patch("netswitch.SwitchController")
    def test_keyboard_interrupt(self, mock_cls, mock_check) -> None:
        """Test Ctrl+C exits with code 1."""
        mock_cls.return_value.refresh.side_effect = KeyboardInterrupt()

        with pytest.raises(SystemExit) as exc_info:
            main(["list"])

        assert exc_info.value.code == ExitCode.GENERAL_ERROR
