# goe_charger/services/output_formatter.py

from __future__ import annotations

import json
from typing import Any, Mapping, Optional

from goe_charger.models.connectivity import ConnectivityState
from goe_charger.models.values import (
    ChannelValue,
    DecimalValue,
    OnOff,
    Quantity,
    StringValue,
    Undefined,
)


def _round(value: float) -> float:
    rounded = round(value, 3)
    return int(rounded) if float(rounded).is_integer() else rounded


def value_to_json(value: ChannelValue) -> Any:
    if isinstance(value, Undefined):
        return "UNDEF"
    if isinstance(value, OnOff):
        return value.value
    if isinstance(value, DecimalValue):
        return value.value
    if isinstance(value, StringValue):
        return value.value
    if isinstance(value, Quantity):
        return {"value": _round(value.magnitude), "unit": value.unit.symbol}
    return str(value)


def value_to_text(value: ChannelValue) -> str:
    if isinstance(value, Undefined):
        return "UNDEF"
    if isinstance(value, StringValue) and value.value is None:
        return "NULL"
    if isinstance(value, Quantity):
        return f"{_round(value.magnitude)} {value.unit.symbol}"
    if isinstance(value, OnOff):
        return value.value
    return str(value)


def channels_payload(values: Mapping[str, ChannelValue]) -> dict[str, Any]:
    return {channel_id: value_to_json(value) for channel_id, value in values.items()}


def connectivity_payload(state: ConnectivityState) -> dict[str, Optional[str]]:
    return {
        "status": state.status.value,
        "detail": state.detail.value,
        "message": state.message,
    }


def emit_json(ip: str, connectivity: ConnectivityState, values: Mapping[str, ChannelValue]) -> None:
    result = {
        "charger": ip,
        "connectivity": connectivity_payload(connectivity),
        "channels": channels_payload(values),
    }
    print(json.dumps(result, indent=2))


def emit_human(ip: str, connectivity: ConnectivityState, values: Mapping[str, ChannelValue]) -> None:
    header = f"[{ip}] {connectivity.status.value}"
    if not connectivity.online:
        header += f" ({connectivity.detail.value})"
        if connectivity.message:
            header += f": {connectivity.message}"
    print(header)

    if not values:
        return
    width = max(len(channel_id) for channel_id in values)
    for channel_id, value in values.items():
        print(f"  {channel_id:<{width}}  {value_to_text(value)}")
