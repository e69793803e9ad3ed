# wallcon_monitor/main.py

from dataclasses import replace
import curses
import sys

from .cli import build_parser
from .config import Config, DEFAULT_CONFIG_PATH
from .logging import ConsoleLog, ResponseLog

from .services.commands import Command, CommandError, resolve_command
from .services.output_formatter import emit_lines
from .services.vitals_loop import run_vitals_loop
from .services.wall_connector_client import WallConnectorClient, WallConnectorError


def _fail(log, message: str) -> int:
    log.debug("Exiting with error: %s", message)
    print(message, file=sys.stderr)
    return 1


def run_command(client: WallConnectorClient, command: Command, log) -> int:
    try:
        record = client.fetch(command.endpoint)
    except WallConnectorError as exc:
        return _fail(log, f"Error fetching {command.label}: {exc}")
    emit_lines(command.formatter(record))
    return 0


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        if args.config:
            app_cfg = Config.load(args.config, required=True)
        else:
            app_cfg = Config.load(DEFAULT_CONFIG_PATH)
    except (OSError, ValueError) as exc:
        print(f"Error loading config: {exc}", file=sys.stderr)
        return 1

    log = ConsoleLog(
        level="DEBUG" if args.debug else app_cfg.logging.console_level,
        quiet=args.quiet or app_cfg.logging.console_quiet,
        debug_modules=app_cfg.logging.debug_modules,
    ).setup()

    try:
        command = resolve_command(args.command)
    except CommandError as exc:
        return _fail(log, str(exc))

    if not args.addr.strip():
        return _fail(log, "Wall connector address is empty")

    if args.loop_mode and not command.supports_loop:
        return _fail(log, f"--loop-mode is not supported for the {command.name} command")

    response_log = None
    log_path = args.log or app_cfg.logging.response_log
    if log_path:
        try:
            response_log = ResponseLog(log_path)
        except OSError as exc:
            return _fail(log, f"Error opening log file {log_path}: {exc}")

    client = WallConnectorClient(
        replace(app_cfg.wall_connector, host=args.addr),
        log,
        response_log=response_log,
    )
    try:
        if args.loop_mode:
            delay = args.delay if args.delay is not None else app_cfg.refresh.delay
            log.info("Refreshing %s every %gs", client.base_url, delay)
            try:
                run_vitals_loop(client.fetch_vitals, delay, log)
            except curses.error as exc:
                return _fail(log, f"Error starting terminal: {exc}")
            return 0
        return run_command(client, command, log)
    finally:
        if response_log is not None:
            response_log.close()


if __name__ == "__main__":
    sys.exit(main())
