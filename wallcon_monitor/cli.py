# wallcon_monitor/cli.py
import argparse

from wallcon_monitor.config import DEFAULT_CONFIG_PATH, MAX_REFRESH_DELAY, check_refresh_delay
from wallcon_monitor.services.commands import COMMANDS, abbreviation_label, command_help


def _positive_seconds(raw: str) -> float:
    try:
        value = float(raw)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid delay '{raw}'") from None
    try:
        return check_refresh_delay(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from None


def _commands_epilog() -> str:
    names = [cmd.name for cmd in COMMANDS]
    lines = ["commands:"]
    for cmd in COMMANDS:
        label = abbreviation_label(cmd.name, names)
        loop = " (supports --loop-mode)" if cmd.supports_loop else ""
        lines.append(f"  {label:<16}{cmd.description}{loop}")
    return "\n".join(lines)


def build_parser():
    parser = argparse.ArgumentParser(
        prog="wallcon-monitor",
        description="Monitor a Tesla Wall Connector",
        epilog=_commands_epilog(),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "addr",
        help="Name or IP address of the wall connector"
    )

    parser.add_argument(
        "command",
        help=f"Command to execute (can be abbreviated): {command_help()}"
    )

    parser.add_argument(
        "--config",
        default=None,
        help=f"Path to configuration file (default: {DEFAULT_CONFIG_PATH} if present)"
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable verbose debug logging"
    )

    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress diagnostic logging on stderr"
    )

    parser.add_argument(
        "-l", "--loop-mode",
        action="store_true",
        help="Keep refreshing until Esc or Ctrl+C (vitals only)"
    )

    parser.add_argument(
        "-d", "--delay",
        type=_positive_seconds,
        default=None,
        help=f"Seconds between refreshes in loop mode (default: 5, at most {MAX_REFRESH_DELAY:g})"
    )

    parser.add_argument(
        "--log",
        default=None,
        help="Append every raw API response to this file"
    )

    return parser
