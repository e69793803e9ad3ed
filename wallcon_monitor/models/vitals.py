# wallcon_monitor/models/vitals.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from wallcon_monitor.models.payload import get_bool, get_float, get_int, get_list, get_uint


@dataclass(frozen=True)
class Vitals:
    """Live electrical and thermal snapshot of the wall connector."""

    contactor_closed: bool
    vehicle_connected: bool
    session_s: int
    session_energy_wh: float
    grid_v: float
    grid_hz: float
    vehicle_current_a: float
    current_a_a: float
    current_b_a: float
    current_c_a: float
    current_n_a: float
    voltage_a_v: float
    voltage_b_v: float
    voltage_c_v: float
    relay_coil_v: float
    pcba_temp_c: float
    handle_temp_c: float
    mcu_temp_c: float
    uptime_s: int
    input_thermopile_uv: int
    prox_v: float
    pilot_high_v: float
    pilot_low_v: float
    config_status: int
    evse_state: int
    current_alerts: list = field(default_factory=list)
    not_ready_reasons: list = field(default_factory=list)

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "Vitals":
        return cls(
            contactor_closed=get_bool(payload, "contactor_closed"),
            vehicle_connected=get_bool(payload, "vehicle_connected"),
            session_s=get_uint(payload, "session_s"),
            session_energy_wh=get_float(payload, "session_energy_wh"),
            grid_v=get_float(payload, "grid_v"),
            grid_hz=get_float(payload, "grid_hz"),
            vehicle_current_a=get_float(payload, "vehicle_current_a"),
            current_a_a=get_float(payload, "currentA_a"),
            current_b_a=get_float(payload, "currentB_a"),
            current_c_a=get_float(payload, "currentC_a"),
            current_n_a=get_float(payload, "currentN_a"),
            voltage_a_v=get_float(payload, "voltageA_v"),
            voltage_b_v=get_float(payload, "voltageB_v"),
            voltage_c_v=get_float(payload, "voltageC_v"),
            relay_coil_v=get_float(payload, "relay_coil_v"),
            pcba_temp_c=get_float(payload, "pcba_temp_c"),
            handle_temp_c=get_float(payload, "handle_temp_c"),
            mcu_temp_c=get_float(payload, "mcu_temp_c"),
            uptime_s=get_uint(payload, "uptime_s"),
            input_thermopile_uv=get_int(payload, "input_thermopile_uv"),
            prox_v=get_float(payload, "prox_v"),
            pilot_high_v=get_float(payload, "pilot_high_v"),
            pilot_low_v=get_float(payload, "pilot_low_v"),
            config_status=get_int(payload, "config_status"),
            evse_state=get_int(payload, "evse_state"),
            current_alerts=get_list(payload, "current_alerts"),
            not_ready_reasons=get_list(payload, "evse_not_ready_reasons"),
        )
