# wallcon_monitor/models/version.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from wallcon_monitor.models.payload import get_optional_str, get_str


@dataclass(frozen=True)
class Version:
    firmware_version: str
    git_branch: str
    part_number: str
    serial_number: str
    web_service: str | None = None   # older firmware omits it

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "Version":
        return cls(
            firmware_version=get_str(payload, "firmware_version"),
            git_branch=get_str(payload, "git_branch"),
            part_number=get_str(payload, "part_number"),
            serial_number=get_str(payload, "serial_number"),
            web_service=get_optional_str(payload, "web_service"),
        )
