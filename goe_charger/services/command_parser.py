# goe_charger/services/command_parser.py

from __future__ import annotations

import math
import re

from goe_charger.models.values import (
    REFRESH,
    Command,
    DecimalValue,
    OnOff,
    Quantity,
    StringValue,
    Unit,
)


_QUANTITY_RE = re.compile(r"^\s*([-+]?\d+(?:\.\d+)?)\s*([^\d\s].*?)\s*$")


def _number(text: str) -> float | None:
    try:
        value = float(text)
    except ValueError:
        return None
    return value if math.isfinite(value) else None


def parse_command(text: str) -> Command:
    """
    Interpret command-line text as a Command.

        ON / OFF         -> OnOff
        REFRESH          -> REFRESH
        16 A, 11kWh      -> Quantity
        16               -> DecimalValue
        anything else    -> StringValue
    """
    raw = text.strip()
    upper = raw.upper()
    if upper in ("ON", "OFF"):
        return OnOff(upper)
    if upper == "REFRESH":
        return REFRESH

    number = _number(raw)
    if number is not None:
        return DecimalValue(int(number) if number.is_integer() else number)

    match = _QUANTITY_RE.match(raw)
    if match:
        unit = Unit.from_symbol(match.group(2))
        if unit is not None:
            return Quantity(float(match.group(1)), unit)

    return StringValue(raw)
