# wallcon_monitor/models/wifi.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from wallcon_monitor.models.payload import get_bool, get_int, get_str


@dataclass(frozen=True)
class WifiStatus:
    ssid: str             # base64 as reported by the device
    signal_strength: int  # percent
    rssi: int             # dBm
    snr: int              # dB
    connected: bool
    infra_ip: str
    internet: bool
    mac: str

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "WifiStatus":
        return cls(
            ssid=get_str(payload, "wifi_ssid"),
            signal_strength=get_int(payload, "wifi_signal_strength"),
            rssi=get_int(payload, "wifi_rssi"),
            snr=get_int(payload, "wifi_snr"),
            connected=get_bool(payload, "wifi_connected"),
            infra_ip=get_str(payload, "wifi_infra_ip"),
            internet=get_bool(payload, "internet"),
            mac=get_str(payload, "wifi_mac"),
        )
