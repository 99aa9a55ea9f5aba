# goe_charger/models/status.py
from dataclasses import dataclass
from enum import IntEnum


class ApiVersion(IntEnum):
    V1 = 1
    V2 = 2


@dataclass(frozen=True)
class DeviceStatus:
    """
    One status reading from the charger, normalized to the v1 device units.

    Every field is optional: None means the firmware did not report it.
    """

    version: ApiVersion = ApiVersion.V1
    pwm_signal: int | None = None
    error_code: int | None = None
    access_configuration: int | None = None
    allow_charging: int | None = None
    temperature: float | None = None             # °C
    session_charge_consumption: int | None = None        # 1/360000 kWh
    session_charge_consumption_limit: int | None = None  # 0.1 kWh
    total_charge_consumption: int | None = None          # 0.1 kWh
    energy: tuple[float, ...] | None = None      # see ENERGY_* indices in status_parser
    max_current: int | None = None               # A
    firmware: str | None = None
