# wallcon_monitor/services/commands.py
"""Command table and abbreviation matching for the CLI.

Commands may be given as any prefix that identifies exactly one of them,
so ``ve`` runs ``version`` while a bare ``v`` is ambiguous.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable, Optional, Sequence

from wallcon_monitor.services.output_formatter import (
    format_lifetime,
    format_version,
    format_vitals,
    format_wifi_status,
)


@dataclass(frozen=True)
class Command:
    name: str
    endpoint: str             # path under /api/1
    description: str
    label: str = ""           # how error messages name the fetched record
    formatter: Optional[Callable[[object], list[str]]] = None
    supports_loop: bool = False


COMMANDS: tuple[Command, ...] = (
    Command("lifetime", "lifetime", "Lifetime statistics", "lifetime stats", format_lifetime),
    Command("version", "version", "Firmware and hardware version", "version", format_version),
    Command(
        "vitals", "vitals", "Live electrical and thermal readings", "vitals", format_vitals,
        supports_loop=True,
    ),
    Command("wifi_status", "wifi_status", "WiFi connection status", "wifi status", format_wifi_status),
)


class CommandError(ValueError):
    """Raised when a command abbreviation is unknown or ambiguous."""


def resolve_command(text: str, commands: Sequence[Command] = COMMANDS) -> Command:
    matches = [cmd for cmd in commands if cmd.name.startswith(text)]
    if not matches:
        available = ", ".join(cmd.name for cmd in commands)
        raise CommandError(f"Unknown command '{text}'. Available commands: {available}")
    if len(matches) > 1:
        names = ", ".join(cmd.name for cmd in matches)
        raise CommandError(f"Ambiguous command '{text}'. Matches: {names}")
    return matches[0]


def unique_prefix(name: str, names: Iterable[str]) -> str:
    others = [other for other in names if other != name]
    for length in range(1, len(name) + 1):
        prefix = name[:length]
        if not any(other.startswith(prefix) for other in others):
            return prefix
    return name


def abbreviation_label(name: str, names: Iterable[str]) -> str:
    prefix = unique_prefix(name, names)
    return f"({prefix}){name[len(prefix):]}"


def command_help(commands: Sequence[Command] = COMMANDS) -> str:
    names = [cmd.name for cmd in commands]
    return ", ".join(abbreviation_label(name, names) for name in names)
