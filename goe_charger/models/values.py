# goe_charger/models/values.py
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union


class Undefined(Enum):
    """No data available for a channel (distinct from zero / off)."""

    UNDEF = "UNDEF"


UNDEF = Undefined.UNDEF


class RefreshType(Enum):
    """Query-only pseudo command; never produces a write."""

    REFRESH = "REFRESH"


REFRESH = RefreshType.REFRESH


class OnOff(Enum):
    ON = "ON"
    OFF = "OFF"


class Unit(Enum):
    # symbol, dimension, factor to the dimension's base unit
    AMPERE = ("A", "current", 1.0)
    MILLIAMPERE = ("mA", "current", 0.001)
    VOLT = ("V", "voltage", 1.0)
    WATT = ("W", "power", 1.0)
    KILOWATT = ("kW", "power", 1000.0)
    WATT_HOUR = ("Wh", "energy", 1.0)
    KILOWATT_HOUR = ("kWh", "energy", 1000.0)
    CELSIUS = ("°C", "temperature", 1.0)

    def __init__(self, symbol: str, dimension: str, factor: float):
        self.symbol = symbol
        self.dimension = dimension
        self.factor = factor

    @classmethod
    def from_symbol(cls, symbol: str) -> Optional["Unit"]:
        wanted = symbol.strip()
        for unit in cls:
            if unit.symbol == wanted:
                return unit
        lowered = wanted.lower()
        for unit in cls:
            if unit.symbol.lower() == lowered:
                return unit
        return None


@dataclass(frozen=True)
class DecimalValue:
    value: float

    def __str__(self) -> str:
        return f"{self.value}"


@dataclass(frozen=True)
class StringValue:
    # None is a legitimate payload: a string channel whose tag is unset
    value: Optional[str]

    def __str__(self) -> str:
        return self.value if self.value is not None else ""


@dataclass(frozen=True)
class Quantity:
    magnitude: float
    unit: Unit

    def to_unit(self, target: Unit) -> Optional["Quantity"]:
        """Convert within the same dimension; None when the units are incompatible."""
        if target is self.unit:
            return self
        if target.dimension != self.unit.dimension:
            return None
        return Quantity(self.magnitude * self.unit.factor / target.factor, target)

    def __str__(self) -> str:
        return f"{self.magnitude} {self.unit.symbol}"


ChannelValue = Union[Undefined, OnOff, DecimalValue, StringValue, Quantity]
Command = Union[RefreshType, OnOff, DecimalValue, StringValue, Quantity]


@dataclass(frozen=True)
class WriteRequest:
    """A device parameter write, ready for the transport."""

    key: str
    value: str
