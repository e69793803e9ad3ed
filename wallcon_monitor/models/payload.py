# wallcon_monitor/models/payload.py

from __future__ import annotations

from typing import Any, Mapping


class PayloadError(ValueError):
    """Raised when an API response does not match the expected record shape."""


def _describe(value: Any) -> str:
    return type(value).__name__


def _lookup(payload: Mapping[str, Any], key: str) -> Any:
    if key not in payload:
        raise PayloadError(f"missing field '{key}'")
    return payload[key]


def get_str(payload: Mapping[str, Any], key: str) -> str:
    value = _lookup(payload, key)
    if not isinstance(value, str):
        raise PayloadError(f"field '{key}' should be a string, got {_describe(value)}")
    return value


def get_optional_str(payload: Mapping[str, Any], key: str) -> str | None:
    if payload.get(key) is None:
        return None
    return get_str(payload, key)


def get_bool(payload: Mapping[str, Any], key: str) -> bool:
    value = _lookup(payload, key)
    if not isinstance(value, bool):
        raise PayloadError(f"field '{key}' should be a boolean, got {_describe(value)}")
    return value


def get_int(payload: Mapping[str, Any], key: str) -> int:
    value = _lookup(payload, key)
    # bool is a subclass of int; JSON true/false is never a counter
    if isinstance(value, bool) or not isinstance(value, int):
        raise PayloadError(f"field '{key}' should be an integer, got {_describe(value)}")
    return value


def get_uint(payload: Mapping[str, Any], key: str) -> int:
    value = get_int(payload, key)
    if value < 0:
        raise PayloadError(f"field '{key}' should not be negative, got {value}")
    return value


def get_float(payload: Mapping[str, Any], key: str) -> float:
    value = _lookup(payload, key)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise PayloadError(f"field '{key}' should be a number, got {_describe(value)}")
    return float(value)


def get_list(payload: Mapping[str, Any], key: str) -> list:
    value = payload.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise PayloadError(f"field '{key}' should be a list, got {_describe(value)}")
    return list(value)
