# wallcon_monitor/services/output_formatter.py

from __future__ import annotations

import base64
import binascii
from typing import Iterable, Sequence, Tuple

from wallcon_monitor.models.lifetime import Lifetime
from wallcon_monitor.models.version import Version
from wallcon_monitor.models.vitals import Vitals
from wallcon_monitor.models.wifi import WifiStatus

Row = Tuple[str, object]


def format_duration(seconds: int) -> str:
    days, rest = divmod(int(seconds), 86400)
    hours, rest = divmod(rest, 3600)
    mins = rest // 60
    if days > 0:
        return f"{days}d {hours}h {mins}m"
    if hours > 0:
        return f"{hours}h {mins}m"
    return f"{mins}m"


def format_energy(wh: float) -> str:
    return f"{wh / 1000.0:.2f} kWh"


def decode_ssid(encoded: str) -> str:
    """Decode the base64 SSID reported by the device, or return it unchanged."""
    try:
        return base64.b64decode(encoded, validate=True).decode("utf-8")
    except (binascii.Error, ValueError):
        return encoded


def _flag(value: bool) -> str:
    return "true" if value else "false"


def _items(values: Sequence) -> str:
    if not values:
        return "none"
    return ", ".join(str(v) for v in values)


def _block(title: str, rows: Iterable[Row]) -> list[str]:
    rows = list(rows)
    width = max(len(label) for label, _ in rows) + 1
    lines = [title]
    for label, value in rows:
        lines.append(f"  {label + ':':<{width}} {value}")
    return lines


def format_version(version: Version) -> list[str]:
    return _block(
        "Tesla Wall Connector Version Info:",
        [
            ("Firmware Version", version.firmware_version),
            ("Git Branch", version.git_branch),
            ("Part Number", version.part_number),
            ("Serial Number", version.serial_number),
            ("Web Service", version.web_service if version.web_service is not None else "n/a"),
        ],
    )


def format_wifi_status(status: WifiStatus) -> list[str]:
    return _block(
        "Tesla Wall Connector WiFi Status:",
        [
            ("SSID", decode_ssid(status.ssid)),
            ("Connected", _flag(status.connected)),
            ("Signal Strength", f"{status.signal_strength}%"),
            ("RSSI", f"{status.rssi} dBm"),
            ("SNR", f"{status.snr} dB"),
            ("IP Address", status.infra_ip),
            ("Internet", _flag(status.internet)),
            ("MAC Address", status.mac),
        ],
    )


def format_lifetime(lifetime: Lifetime) -> list[str]:
    return _block(
        "Tesla Wall Connector Lifetime Stats:",
        [
            ("Charge Starts", lifetime.charge_starts),
            ("Energy Delivered", format_energy(lifetime.energy_wh)),
            ("Charging Time", format_duration(lifetime.charging_time_s)),
            ("Uptime", format_duration(lifetime.uptime_s)),
            ("Contactor Cycles", lifetime.contactor_cycles),
            ("Loaded Cycles", lifetime.contactor_cycles_loaded),
            ("Connector Cycles", lifetime.connector_cycles),
            ("Thermal Foldbacks", lifetime.thermal_foldbacks),
            ("Alert Count", lifetime.alert_count),
            ("Avg Startup Temp", f"{lifetime.avg_startup_temp:.1f}°C"),
        ],
    )


def format_vitals(vitals: Vitals) -> list[str]:
    return _block(
        "Tesla Wall Connector Vitals:",
        [
            ("Vehicle Connected", _flag(vitals.vehicle_connected)),
            ("Contactor Closed", _flag(vitals.contactor_closed)),
            ("Session Time", format_duration(vitals.session_s)),
            ("Session Energy", format_energy(vitals.session_energy_wh)),
            ("Grid", f"{vitals.grid_v:.1f} V @ {vitals.grid_hz:.2f} Hz"),
            ("Vehicle Current", f"{vitals.vehicle_current_a:.1f} A"),
            (
                "Phase Currents",
                f"A={vitals.current_a_a:.1f} A  B={vitals.current_b_a:.1f} A  "
                f"C={vitals.current_c_a:.1f} A  N={vitals.current_n_a:.1f} A",
            ),
            (
                "Phase Voltages",
                f"A={vitals.voltage_a_v:.1f} V  B={vitals.voltage_b_v:.1f} V  "
                f"C={vitals.voltage_c_v:.1f} V",
            ),
            (
                "Temperatures",
                f"PCBA={vitals.pcba_temp_c:.1f}°C  Handle={vitals.handle_temp_c:.1f}°C  "
                f"MCU={vitals.mcu_temp_c:.1f}°C",
            ),
            ("Pilot Voltage", f"high={vitals.pilot_high_v:.1f} V  low={vitals.pilot_low_v:.1f} V"),
            ("Proximity Voltage", f"{vitals.prox_v:.1f} V"),
            ("Relay Coil Voltage", f"{vitals.relay_coil_v:.1f} V"),
            ("Input Thermopile", f"{vitals.input_thermopile_uv} uV"),
            ("Uptime", format_duration(vitals.uptime_s)),
            ("EVSE State", vitals.evse_state),
            ("Config Status", vitals.config_status),
            ("Current Alerts", _items(vitals.current_alerts)),
            ("Not Ready Reasons", _items(vitals.not_ready_reasons)),
        ],
    )


def emit_lines(lines: Iterable[str]) -> None:
    for line in lines:
        print(line)
