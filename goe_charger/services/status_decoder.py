# goe_charger/services/status_decoder.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Mapping, Optional

from goe_charger import channels as ch
from goe_charger.models.status import DeviceStatus
from goe_charger.models.values import (
    UNDEF,
    ChannelValue,
    DecimalValue,
    OnOff,
    Quantity,
    StringValue,
    Unit,
)
from goe_charger.services.status_parser import ENERGY_CURRENT, ENERGY_POWER, ENERGY_VOLTAGE


# ============================================================================
# Lookup tables
# ============================================================================

@dataclass(frozen=True)
class CodeTable:
    """
    Numeric code -> tag. Codes missing from the table resolve to `fallback`;
    a fallback of None yields a string value with no tag (not UNDEF).
    """

    codes: Mapping[int, str]
    fallback: Optional[str] = None

    def tag_for(self, code: int) -> Optional[str]:
        return self.codes.get(code, self.fallback)

    def code_for(self, tag: str) -> Optional[int]:
        wanted = tag.strip().upper()
        for code, name in self.codes.items():
            if name == wanted:
                return code
        return None


PWM_SIGNAL_TABLE = CodeTable(
    {
        1: "READY_NO_CAR",
        2: "CHARGING",
        3: "WAITING_FOR_CAR",
        4: "CHARGING_DONE_CAR_CONNECTED",
    }
)

ERROR_TABLE = CodeTable(
    {
        0: "NONE",
        1: "RCCB",
        3: "PHASE",
        8: "NO_GROUND",
    },
    fallback="INTERNAL",
)

ACCESS_CONFIGURATION_TABLE = CodeTable(
    {
        0: "OPEN",
        1: "RFID",
        2: "AWATTAR",
        3: "TIMER",
    }
)


@dataclass(frozen=True)
class Scale:
    unit: Unit
    divisor: int = 1
    multiplier: int = 1

    def apply(self, raw: float) -> Quantity:
        value = raw
        if self.divisor != 1:
            value = value / self.divisor
        if self.multiplier != 1:
            value = value * self.multiplier
        return Quantity(value, self.unit)


_CODE_FIELDS: Dict[str, tuple[str, CodeTable]] = {
    ch.PWM_SIGNAL: ("pwm_signal", PWM_SIGNAL_TABLE),
    ch.ERROR: ("error_code", ERROR_TABLE),
    ch.ACCESS_CONFIGURATION: ("access_configuration", ACCESS_CONFIGURATION_TABLE),
}

_SCALED_FIELDS: Dict[str, tuple[str, Scale]] = {
    ch.MAX_CURRENT: ("max_current", Scale(Unit.AMPERE)),
    ch.TEMPERATURE: ("temperature", Scale(Unit.CELSIUS)),
    ch.SESSION_CHARGE_CONSUMPTION: ("session_charge_consumption", Scale(Unit.KILOWATT_HOUR, divisor=360000)),
    ch.SESSION_CHARGE_CONSUMPTION_LIMIT: ("session_charge_consumption_limit", Scale(Unit.KILOWATT_HOUR, divisor=10)),
    ch.TOTAL_CHARGE_CONSUMPTION: ("total_charge_consumption", Scale(Unit.KILOWATT_HOUR, divisor=10)),
}

_ENERGY_FIELDS: Dict[str, tuple[int, Scale]] = {
    ch.VOLTAGE_L1: (ENERGY_VOLTAGE[0], Scale(Unit.VOLT)),
    ch.VOLTAGE_L2: (ENERGY_VOLTAGE[1], Scale(Unit.VOLT)),
    ch.VOLTAGE_L3: (ENERGY_VOLTAGE[2], Scale(Unit.VOLT)),
    ch.CURRENT_L1: (ENERGY_CURRENT[0], Scale(Unit.AMPERE, divisor=10)),
    ch.CURRENT_L2: (ENERGY_CURRENT[1], Scale(Unit.AMPERE, divisor=10)),
    ch.CURRENT_L3: (ENERGY_CURRENT[2], Scale(Unit.AMPERE, divisor=10)),
    ch.POWER_L1: (ENERGY_POWER[0], Scale(Unit.WATT, multiplier=100)),
    ch.POWER_L2: (ENERGY_POWER[1], Scale(Unit.WATT, multiplier=100)),
    ch.POWER_L3: (ENERGY_POWER[2], Scale(Unit.WATT, multiplier=100)),
}


# ============================================================================
# Decoders
# ============================================================================

def _energy_at(status: DeviceStatus, index: int) -> Optional[float]:
    if status.energy is None or index >= len(status.energy):
        return None
    return status.energy[index]


def _decode_code(field: str, table: CodeTable, status: DeviceStatus) -> ChannelValue:
    code = getattr(status, field)
    if code is None:
        return UNDEF
    return StringValue(table.tag_for(code))


def _decode_scaled(field: str, scale: Scale, status: DeviceStatus) -> ChannelValue:
    raw = getattr(status, field)
    if raw is None:
        return UNDEF
    return scale.apply(raw)


def _decode_energy(index: int, scale: Scale, status: DeviceStatus) -> ChannelValue:
    raw = _energy_at(status, index)
    if raw is None:
        return UNDEF
    return scale.apply(raw)


def _decode_allow_charging(status: DeviceStatus) -> ChannelValue:
    if status.allow_charging is None:
        return UNDEF
    return OnOff.ON if status.allow_charging == 1 else OnOff.OFF


def _decode_phases(status: DeviceStatus) -> ChannelValue:
    currents = [_energy_at(status, idx) for idx in ENERGY_CURRENT]
    if any(value is None for value in currents):
        return UNDEF
    return DecimalValue(sum(1 for value in currents if value > 0))


def _decode_firmware(status: DeviceStatus) -> ChannelValue:
    if status.firmware is None:
        return UNDEF
    return StringValue(status.firmware)


_SPECIAL: Dict[str, Callable[[DeviceStatus], ChannelValue]] = {
    ch.ALLOW_CHARGING: _decode_allow_charging,
    ch.PHASES: _decode_phases,
    ch.FIRMWARE: _decode_firmware,
}


def _decode(channel_id: str, status: DeviceStatus) -> ChannelValue:
    if channel_id in _CODE_FIELDS:
        return _decode_code(*_CODE_FIELDS[channel_id], status)
    if channel_id in _SCALED_FIELDS:
        return _decode_scaled(*_SCALED_FIELDS[channel_id], status)
    if channel_id in _ENERGY_FIELDS:
        return _decode_energy(*_ENERGY_FIELDS[channel_id], status)
    if channel_id in _SPECIAL:
        return _SPECIAL[channel_id](status)
    return UNDEF


def decode(channel_id: str, status: Any) -> ChannelValue:
    """Map one channel of a status reading to its value. Never raises."""
    if not isinstance(status, DeviceStatus):
        return UNDEF
    try:
        return _decode(channel_id, status)
    except (TypeError, ValueError, ArithmeticError):
        return UNDEF


def decode_all(status: DeviceStatus, channel_ids) -> Dict[str, ChannelValue]:
    return {channel_id: decode(channel_id, status) for channel_id in channel_ids}
