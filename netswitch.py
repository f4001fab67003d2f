#!/usr/bin/env python3
"""Netswitch - exclusive network adapter switcher.

Main entry point for the netswitch command-line tool.
"""

import argparse
import sys
import traceback
from pathlib import Path

from config import ExitCode
from display import format_output, format_preferences
from enums import Language, Theme
from errors import (
    AdapterControlError,
    AdapterNotFoundError,
    ControllerBusyError,
    CooldownActiveError,
    SelectionIncompleteError,
)
from export import export_to_json
from logging_config import get_logger, setup_logging
from orchestrator import SwitchController, check_dependencies
from switching import find_adapter
from utils import sanitize_for_log, validate_adapter_name

ON_OFF = {"on": True, "off": False}


def parse_arguments(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Args:
        argv: Argument list (default: sys.argv[1:])

    Returns:
        Parsed arguments namespace.

    Exits:
        Code 4 if invalid argument combinations.
    """
    parser = argparse.ArgumentParser(
        description="Switch between two network adapters (enable one, disable the other)",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  netswitch                         # List visible adapters
  netswitch list --all              # Include virtual and Bluetooth adapters
  netswitch select "Ethernet"       # Toggle adapter in the selection
  netswitch switch                  # Enable one selected adapter, disable the other
  netswitch prefs --show-virtual on # Change a preference
  netswitch list --export json --output adapters.json

Exit codes:
  0 - Success
  1 - General error
  2 - Missing dependencies
  4 - Invalid arguments
  5 - Switch refused (cooldown or incomplete selection)
  6 - Switch failed (adapter missing or state change rejected)

Note: the 5 second switch cooldown is kept in memory, so it only
applies within one process. Separate invocations start without it.
        """,
    )

    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("--log-file", type=Path, metavar="PATH", help="Write logs to file")
    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    list_parser = subparsers.add_parser("list", help="List adapters (default)")
    list_parser.add_argument(
        "--all",
        action="store_true",
        help="Show every adapter regardless of the virtual/Bluetooth filters",
    )
    list_parser.add_argument(
        "--export",
        choices=["json"],
        metavar="FORMAT",
        help="Export format (json)",
    )
    list_parser.add_argument(
        "--output",
        type=Path,
        metavar="PATH",
        help="Export destination file (requires --export)",
    )

    select_parser = subparsers.add_parser("select", help="Toggle an adapter in the selection")
    select_parser.add_argument("name", help="Adapter connection name")

    subparsers.add_parser("switch", help="Run the exclusive switch for the selected pair")

    prefs_parser = subparsers.add_parser("prefs", help="Show or change preferences")
    prefs_parser.add_argument("--theme", choices=[t.value for t in Theme])
    prefs_parser.add_argument("--language", choices=[lang.value for lang in Language])
    prefs_parser.add_argument("--show-virtual", choices=list(ON_OFF))
    prefs_parser.add_argument("--show-bluetooth", choices=list(ON_OFF))

    # After add_subparsers so the command default applies to its action too
    parser.set_defaults(command="list", all=False, export=None, output=None)

    args = parser.parse_args(argv)

    # Validation: --output requires --export
    if args.output and not args.export:
        print("Error: --output requires --export", file=sys.stderr)
        sys.exit(ExitCode.INVALID_ARGUMENTS)

    if args.command == "select" and not validate_adapter_name(args.name):
        print("Error: invalid adapter name", file=sys.stderr)
        sys.exit(ExitCode.INVALID_ARGUMENTS)

    return args


def run_list(controller: SwitchController, args: argparse.Namespace) -> ExitCode:
    """Refresh and print (or export) the adapter snapshot."""
    logger = get_logger(__name__)

    controller.refresh()
    adapters = controller.all_adapters if args.all else controller.adapters
    if not controller.all_adapters:
        logger.error("No network adapters found")
        return ExitCode.GENERAL_ERROR

    if args.export:
        json_data = export_to_json(adapters, controller.preferences)
        if args.output:
            args.output.write_text(json_data, encoding="utf-8")
            logger.info("Exported to %s", sanitize_for_log(str(args.output)))
        else:
            print(json_data)
    else:
        format_output(adapters, controller.preferences)

    return ExitCode.SUCCESS


def run_select(controller: SwitchController, name: str) -> ExitCode:
    """Toggle an adapter in the selection.

    Deselecting never needs discovery; selecting resolves the name against
    a fresh snapshot and stores its canonical spelling.
    """
    logger = get_logger(__name__)

    if not controller.selection.contains(name):
        controller.refresh()
        adapter = find_adapter(controller.all_adapters, name)
        if adapter is None:
            logger.error("Network adapter '%s' was not found", sanitize_for_log(name))
            return ExitCode.SWITCH_FAILED
        name = adapter.name

    selection = controller.toggle_selection(name)
    print(f"Selected: {selection.primary or '--'} / {selection.secondary or '--'}")
    return ExitCode.SUCCESS


def run_switch(controller: SwitchController) -> ExitCode:
    """Run the exclusive switch and report the result."""
    logger = get_logger(__name__)

    try:
        plan = controller.switch()
    except (CooldownActiveError, SelectionIncompleteError, ControllerBusyError) as e:
        logger.error("%s", e)
        return ExitCode.SWITCH_REFUSED
    except (AdapterNotFoundError, AdapterControlError) as e:
        logger.error("Error: %s", sanitize_for_log(str(e)))
        return ExitCode.SWITCH_FAILED

    print(f"{plan.first}: {'enabled' if plan.enable_first else 'disabled'}")
    print(f"{plan.second}: {'enabled' if plan.enable_second else 'disabled'}")
    return ExitCode.SUCCESS


def run_prefs(controller: SwitchController, args: argparse.Namespace) -> ExitCode:
    """Apply preference changes (if any) and print preferences."""
    if args.theme:
        controller.set_theme(Theme(args.theme))
    if args.language:
        controller.set_language(Language(args.language))
    if args.show_virtual:
        controller.set_show_virtual(ON_OFF[args.show_virtual])
    if args.show_bluetooth:
        controller.set_show_bluetooth(ON_OFF[args.show_bluetooth])

    format_preferences(controller.preferences)
    return ExitCode.SUCCESS


def main(argv: list[str] | None = None) -> None:
    """Main execution flow.

    Exit codes:
        0: Success
        1: General error
        2: Missing dependencies
        4: Invalid arguments
        5: Switch refused
        6: Switch failed
    """
    args = parse_arguments(argv)

    # Setup logging (must be called before any logger usage)
    setup_logging(verbose=args.verbose, log_file=args.log_file)

    logger = get_logger(__name__)

    # Preferences need no PowerShell
    if args.command != "prefs" and not check_dependencies():
        logger.error("Missing required dependencies - cannot continue")
        sys.exit(ExitCode.MISSING_DEPENDENCIES)

    controller = SwitchController()
    try:
        if args.command == "select":
            code = run_select(controller, args.name)
        elif args.command == "switch":
            code = run_switch(controller)
        elif args.command == "prefs":
            code = run_prefs(controller, args)
        else:
            code = run_list(controller, args)

        sys.exit(code)

    except KeyboardInterrupt:
        logger.error("Interrupted by user")
        sys.exit(ExitCode.GENERAL_ERROR)
    except (OSError, ValueError, RuntimeError) as e:
        logger.error("Error during execution: %s", sanitize_for_log(str(e)))
        if args.verbose:
            traceback.print_exc()
        sys.exit(ExitCode.GENERAL_ERROR)
    finally:
        controller.shutdown()


if __name__ == "__main__":
    main()
