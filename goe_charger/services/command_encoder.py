# goe_charger/services/command_encoder.py

from __future__ import annotations

from typing import Callable, Dict, Optional

from goe_charger import channels as ch
from goe_charger.models.status import ApiVersion
from goe_charger.models.values import (
    Command,
    DecimalValue,
    OnOff,
    Quantity,
    StringValue,
    Unit,
    WriteRequest,
)
from goe_charger.services.status_decoder import ACCESS_CONFIGURATION_TABLE, CodeTable


# v2 access control only knows open / authentication required
V2_ACCESS_CONFIGURATION_TABLE = CodeTable({0: "OPEN", 1: "RFID"})


def _magnitude(command: Command, unit: Unit) -> Optional[float]:
    """Magnitude of a plain number, or of a quantity converted to `unit`."""
    if isinstance(command, DecimalValue):
        return command.value
    if isinstance(command, Quantity):
        converted = command.to_unit(unit)
        return converted.magnitude if converted is not None else None
    return None


def _truncate(value: Optional[float]) -> Optional[int]:
    if value is None:
        return None
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        return None


def _encode_max_current(command: Command) -> Optional[str]:
    amps = _truncate(_magnitude(command, Unit.AMPERE))
    return str(amps) if amps is not None else None


def _encode_charge_limit_v1(command: Command) -> Optional[str]:
    # whole kWh, written in 0.1 kWh
    kwh = _truncate(_magnitude(command, Unit.KILOWATT_HOUR))
    return str(kwh * 10) if kwh is not None else None


def _encode_charge_limit_v2(command: Command) -> Optional[str]:
    # written in Wh
    kwh = _magnitude(command, Unit.KILOWATT_HOUR)
    if kwh is None:
        return None
    try:
        wh = _truncate(round(kwh * 1000, 6))
    except (TypeError, OverflowError):
        return None
    return str(wh) if wh is not None else None


def _encode_allow_charging_v1(command: Command) -> Optional[str]:
    if isinstance(command, OnOff):
        return "1" if command is OnOff.ON else "0"
    return None


def _encode_force_state_v2(command: Command) -> Optional[str]:
    # alw is read-only on v2; frc 2 forces charging on, 1 forces it off
    if isinstance(command, OnOff):
        return "2" if command is OnOff.ON else "1"
    return None


def _access_encoder(table: CodeTable) -> Callable[[Command], Optional[str]]:
    def _encode(command: Command) -> Optional[str]:
        if not isinstance(command, StringValue) or command.value is None:
            return None
        code = table.code_for(command.value)
        return str(code) if code is not None else None

    return _encode


_ENCODERS: Dict[ApiVersion, Dict[str, tuple[str, Callable[[Command], Optional[str]]]]] = {
    ApiVersion.V1: {
        ch.MAX_CURRENT: ("amp", _encode_max_current),
        ch.SESSION_CHARGE_CONSUMPTION_LIMIT: ("dwo", _encode_charge_limit_v1),
        ch.ALLOW_CHARGING: ("alw", _encode_allow_charging_v1),
        ch.ACCESS_CONFIGURATION: ("ast", _access_encoder(ACCESS_CONFIGURATION_TABLE)),
    },
    ApiVersion.V2: {
        ch.MAX_CURRENT: ("amp", _encode_max_current),
        ch.SESSION_CHARGE_CONSUMPTION_LIMIT: ("dwo", _encode_charge_limit_v2),
        ch.ALLOW_CHARGING: ("frc", _encode_force_state_v2),
        ch.ACCESS_CONFIGURATION: ("acs", _access_encoder(V2_ACCESS_CONFIGURATION_TABLE)),
    },
}


def key_for(channel_id: str, version: ApiVersion = ApiVersion.V1) -> Optional[str]:
    entry = _ENCODERS[ApiVersion(version)].get(channel_id)
    return entry[0] if entry else None


def encode(channel_id: str, command: Command, version: ApiVersion = ApiVersion.V1) -> Optional[WriteRequest]:
    """
    Translate a command for a channel into a device write for the given API version.

    Returns None when the channel is read-only/unknown, when the command is
    REFRESH, or when the command type or unit does not fit the channel.
    """
    entry = _ENCODERS[ApiVersion(version)].get(channel_id)
    if entry is None:
        return None
    key, encoder = entry
    value = encoder(command)
    if value is None:
        return None
    return WriteRequest(key=key, value=value)
