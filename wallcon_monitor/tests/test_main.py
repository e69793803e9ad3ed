# wallcon_monitor/tests/test_main.py

import curses
import logging

import pytest

from wallcon_monitor import main as main_mod
from wallcon_monitor.services import vitals_loop, wall_connector_client
from wallcon_monitor.tests.fakes import (
    LIFETIME_PAYLOAD,
    VERSION_PAYLOAD,
    VITALS_PAYLOAD,
    WIFI_PAYLOAD,
    FakeSession,
    connection_refused,
)

BASE = "http://wallcon.local/api/1"


@pytest.fixture(autouse=True)
def _isolated(monkeypatch, tmp_path):
    # keep a stray wallcon_monitor.conf in the working directory out of the tests
    monkeypatch.chdir(tmp_path)
    root = logging.getLogger()
    orig_handlers = list(root.handlers)
    yield
    root.handlers.clear()
    root.handlers.extend(orig_handlers)


@pytest.fixture
def device(monkeypatch):
    session = FakeSession({})
    monkeypatch.setattr(wall_connector_client.requests, "Session", lambda: session)
    return session


def test_version_end_to_end(device, capsys):
    device.responses[f"{BASE}/version"] = (200, VERSION_PAYLOAD)

    assert main_mod.main(["wallcon.local", "ve"]) == 0

    out, err = capsys.readouterr()
    assert out.splitlines() == [
        "Tesla Wall Connector Version Info:",
        "  Firmware Version: 24.36.3+g6f3d3a2b0b9c6e",
        "  Git Branch:       HEAD",
        "  Part Number:      1529455-02-D",
        "  Serial Number:    PGT22123456789",
        "  Web Service:      6.3.1-tesla",
    ]
    assert err == ""


def test_malformed_json_exits_nonzero(device, capsys):
    device.responses[f"{BASE}/version"] = (200, '{"firmware_version": ')

    assert main_mod.main(["wallcon.local", "version"]) == 1

    out, err = capsys.readouterr()
    assert out == ""
    assert err.startswith("Error fetching version: ")
    assert len(err.splitlines()) == 1


def test_connection_failure_exits_nonzero(device, capsys):
    url = f"{BASE}/lifetime"
    device.responses[url] = (connection_refused(url), None)

    assert main_mod.main(["wallcon.local", "life"]) == 1

    out, err = capsys.readouterr()
    assert out == ""
    assert "Error fetching lifetime stats:" in err


def test_ambiguous_command(device, capsys):
    assert main_mod.main(["wallcon.local", "v"]) == 1

    out, err = capsys.readouterr()
    assert out == ""
    assert err.strip() == "Ambiguous command 'v'. Matches: version, vitals"
    assert device.calls == []


def test_unknown_command(device, capsys):
    assert main_mod.main(["wallcon.local", "reboot"]) == 1
    assert "Unknown command 'reboot'" in capsys.readouterr().err


def test_loop_mode_only_for_vitals(device, capsys):
    assert main_mod.main(["wallcon.local", "version", "--loop-mode"]) == 1
    assert "--loop-mode is not supported for the version command" in capsys.readouterr().err
    assert device.calls == []


def test_loop_mode_uses_configured_delay(device, monkeypatch, tmp_path):
    (tmp_path / "wallcon_monitor.conf").write_text("[refresh]\ndelay = 2\n")
    seen = {}

    def fake_loop(fetch, delay, log):
        seen["delay"] = delay
        seen["fetch"] = fetch
        return 0

    monkeypatch.setattr(main_mod, "run_vitals_loop", fake_loop)

    assert main_mod.main(["wallcon.local", "vi", "-l"]) == 0
    assert seen["delay"] == 2.0
    assert seen["fetch"].__name__ == "fetch_vitals"

    assert main_mod.main(["wallcon.local", "vi", "-l", "-d", "7"]) == 0
    assert seen["delay"] == 7.0


def test_non_positive_delay_is_a_usage_error(device):
    with pytest.raises(SystemExit) as excinfo:
        main_mod.main(["wallcon.local", "vitals", "-l", "--delay", "0"])
    assert excinfo.value.code == 2


def test_log_option_records_raw_responses(device, capsys, tmp_path):
    device.responses[f"{BASE}/lifetime"] = (200, LIFETIME_PAYLOAD)
    log_path = tmp_path / "responses.log"

    assert main_mod.main(["wallcon.local", "l", "--log", str(log_path)]) == 0
    assert main_mod.main(["wallcon.local", "l", "--log", str(log_path)]) == 0

    lines = log_path.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 2
    assert all(" lifetime: {" in line for line in lines)
    assert "Tesla Wall Connector Lifetime Stats:" in capsys.readouterr().out


def test_unopenable_log_file_exits_nonzero(device, capsys, tmp_path):
    log_path = tmp_path / "missing" / "responses.log"

    assert main_mod.main(["wallcon.local", "version", "--log", str(log_path)]) == 1

    assert "Error opening log file" in capsys.readouterr().err
    assert device.calls == []


def test_missing_explicit_config(device, capsys, tmp_path):
    assert main_mod.main(["--config", str(tmp_path / "nope.conf"), "wallcon.local", "version"]) == 1
    assert "Config file not found" in capsys.readouterr().err


def test_vitals_one_shot(device, capsys):
    device.responses[f"{BASE}/vitals"] = (200, VITALS_PAYLOAD)

    assert main_mod.main(["wallcon.local", "vi"]) == 0

    out, err = capsys.readouterr()
    assert out.splitlines()[0] == "Tesla Wall Connector Vitals:"
    assert "Session Time:       1h 5m" in out
    assert err == ""


def test_wifi_status_one_shot(device, capsys):
    device.responses[f"{BASE}/wifi_status"] = (200, WIFI_PAYLOAD)

    assert main_mod.main(["wallcon.local", "w"]) == 0

    out, err = capsys.readouterr()
    assert out.splitlines()[0] == "Tesla Wall Connector WiFi Status:"
    assert "  SSID:            HomeNet" in out.splitlines()
    assert err == ""


def test_terminal_start_failure_exits_nonzero(device, capsys, monkeypatch):
    def no_terminal():
        raise curses.error("setupterm: could not find terminal")

    monkeypatch.setattr(vitals_loop.curses, "initscr", no_terminal)

    assert main_mod.main(["wallcon.local", "vitals", "-l"]) == 1

    out, err = capsys.readouterr()
    assert out == ""
    assert err.startswith("Error starting terminal: setupterm")
    assert device.calls == []


def test_quiet_suppresses_console_logging(device, capsys):
    device.responses[f"{BASE}/version"] = (200, VERSION_PAYLOAD)

    assert main_mod.main(["wallcon.local", "version", "--debug", "--quiet"]) == 0

    assert logging.getLogger().handlers == []
    assert capsys.readouterr().err == ""
