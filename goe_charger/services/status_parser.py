# goe_charger/services/status_parser.py

from __future__ import annotations

import math
from typing import Any, Dict, Optional

from goe_charger.models.status import ApiVersion, DeviceStatus


# ============================================================================
# Energy array layout (v1 device units)
# ============================================================================

ENERGY_VOLTAGE = (0, 1, 2)      # V
ENERGY_CURRENT = (4, 5, 6)      # 0.1 A
ENERGY_POWER = (7, 8, 9)        # 0.1 kW
ENERGY_MIN_LENGTH = 10

# Wh -> device units
_WH_TO_SESSION_UNITS = 360      # 1 unit = 1/360000 kWh
_WH_TO_DECI_KWH = 0.01          # 1 unit = 0.1 kWh


# ============================================================================
# Field coercion
# ============================================================================

def _as_float(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    return number if math.isfinite(number) else None


def _as_int(value: Any) -> Optional[int]:
    """Whole numbers only; a fractional code is as unreadable as a missing one."""
    number = _as_float(value)
    if number is None or not number.is_integer():
        return None
    if isinstance(value, int):
        return value
    return int(number)


def _as_flag(value: Any) -> Optional[int]:
    """v2 reports booleans where v1 reports 0/1."""
    if isinstance(value, bool):
        return 1 if value else 0
    return _as_int(value)


def _as_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _as_energy(value: Any) -> Optional[tuple[float, ...]]:
    if not isinstance(value, (list, tuple)):
        return None
    numbers = []
    for item in value:
        number = _as_float(item)
        if number is None:
            return None
        numbers.append(int(number) if number.is_integer() else number)
    return tuple(numbers)


def _scaled(value: Any, factor: float) -> Optional[int]:
    number = _as_float(value)
    if number is None:
        return None
    scaled = number * factor
    if not math.isfinite(scaled):
        return None
    return int(round(scaled))


# ============================================================================
# Version-specific parsers
# ============================================================================

def _parse_v1(payload: Dict[str, Any]) -> DeviceStatus:
    return DeviceStatus(
        version=ApiVersion.V1,
        pwm_signal=_as_int(payload.get("car")),
        error_code=_as_int(payload.get("err")),
        access_configuration=_as_int(payload.get("ast")),
        allow_charging=_as_flag(payload.get("alw")),
        temperature=_as_float(payload.get("tmp")),
        session_charge_consumption=_as_int(payload.get("dws")),
        session_charge_consumption_limit=_as_int(payload.get("dwo")),
        total_charge_consumption=_as_int(payload.get("eto")),
        energy=_as_energy(payload.get("nrg")),
        max_current=_as_int(payload.get("amp")),
        firmware=_as_str(payload.get("fwv")),
    )


def _v2_energy(raw: Any) -> Optional[tuple[float, ...]]:
    """
    v2 reports currents in A and powers in W; rebuild the v1 layout
    (0.1 A and 0.1 kW) so both versions decode identically.
    """
    values = _as_energy(raw)
    if values is None or len(values) < ENERGY_MIN_LENGTH:
        return values
    converted = list(values)
    for idx in ENERGY_CURRENT:
        converted[idx] = round(values[idx] * 10, 6)
    for idx in ENERGY_POWER:
        converted[idx] = round(values[idx] / 100, 6)
    if not all(math.isfinite(value) for value in converted):
        return None
    return tuple(converted)


def _v2_temperature(raw: Any) -> Optional[float]:
    if isinstance(raw, (list, tuple)):
        raw = raw[0] if raw else None
    return _as_float(raw)


def _parse_v2(payload: Dict[str, Any]) -> DeviceStatus:
    return DeviceStatus(
        version=ApiVersion.V2,
        pwm_signal=_as_int(payload.get("car")),
        error_code=_as_int(payload.get("err")),
        access_configuration=_as_int(payload.get("acs")),
        allow_charging=_as_flag(payload.get("alw")),
        temperature=_v2_temperature(payload.get("tma")),
        session_charge_consumption=_scaled(payload.get("wh"), _WH_TO_SESSION_UNITS),
        session_charge_consumption_limit=_scaled(payload.get("dwo"), _WH_TO_DECI_KWH),
        total_charge_consumption=_scaled(payload.get("eto"), _WH_TO_DECI_KWH),
        energy=_v2_energy(payload.get("nrg")),
        max_current=_as_int(payload.get("amp")),
        firmware=_as_str(payload.get("fwv")),
    )


_PARSERS = {
    ApiVersion.V1: _parse_v1,
    ApiVersion.V2: _parse_v2,
}


def parse_status(payload: Any, version: ApiVersion | int = ApiVersion.V1) -> DeviceStatus:
    """
    Build a DeviceStatus from a decoded JSON body.

    Raises ValueError when the body is not a JSON object or the version is
    unknown; individual bad fields only become None.
    """
    if not isinstance(payload, dict):
        raise ValueError(f"Status payload must be a JSON object, got {type(payload).__name__}")
    try:
        api_version = ApiVersion(int(version))
    except ValueError:
        raise ValueError(f"Unsupported API version: {version}") from None
    return _PARSERS[api_version](payload)
