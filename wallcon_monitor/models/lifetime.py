# wallcon_monitor/models/lifetime.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from wallcon_monitor.models.payload import get_float, get_uint


@dataclass(frozen=True)
class Lifetime:
    contactor_cycles: int
    contactor_cycles_loaded: int
    alert_count: int
    thermal_foldbacks: int
    avg_startup_temp: float
    charge_starts: int
    energy_wh: int
    connector_cycles: int
    uptime_s: int
    charging_time_s: int

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "Lifetime":
        return cls(
            contactor_cycles=get_uint(payload, "contactor_cycles"),
            contactor_cycles_loaded=get_uint(payload, "contactor_cycles_loaded"),
            alert_count=get_uint(payload, "alert_count"),
            thermal_foldbacks=get_uint(payload, "thermal_foldbacks"),
            avg_startup_temp=get_float(payload, "avg_startup_temp"),
            charge_starts=get_uint(payload, "charge_starts"),
            energy_wh=get_uint(payload, "energy_wh"),
            connector_cycles=get_uint(payload, "connector_cycles"),
            uptime_s=get_uint(payload, "uptime_s"),
            charging_time_s=get_uint(payload, "charging_time_s"),
        )
