# goe_charger/channels.py

# Base-layer channels (common to every firmware generation)
MAX_CURRENT = "max_current"
FIRMWARE = "firmware"
VOLTAGE_L1 = "voltage_l1"
VOLTAGE_L2 = "voltage_l2"
VOLTAGE_L3 = "voltage_l3"

# Charger channels
PWM_SIGNAL = "pwm_signal"
ERROR = "error"
ACCESS_CONFIGURATION = "access_configuration"
ALLOW_CHARGING = "allow_charging"
PHASES = "phases"
TEMPERATURE = "temperature"
SESSION_CHARGE_CONSUMPTION = "session_charge_consumption"
SESSION_CHARGE_CONSUMPTION_LIMIT = "session_charge_consumption_limit"
TOTAL_CHARGE_CONSUMPTION = "total_charge_consumption"
CURRENT_L1 = "current_l1"
CURRENT_L2 = "current_l2"
CURRENT_L3 = "current_l3"
POWER_L1 = "power_l1"
POWER_L2 = "power_l2"
POWER_L3 = "power_l3"

ALL_CHANNELS: tuple[str, ...] = (
    MAX_CURRENT,
    FIRMWARE,
    VOLTAGE_L1,
    VOLTAGE_L2,
    VOLTAGE_L3,
    PWM_SIGNAL,
    ERROR,
    ACCESS_CONFIGURATION,
    ALLOW_CHARGING,
    PHASES,
    TEMPERATURE,
    SESSION_CHARGE_CONSUMPTION,
    SESSION_CHARGE_CONSUMPTION_LIMIT,
    TOTAL_CHARGE_CONSUMPTION,
    CURRENT_L1,
    CURRENT_L2,
    CURRENT_L3,
    POWER_L1,
    POWER_L2,
    POWER_L3,
)

# Channels that accept commands
WRITABLE_CHANNELS: frozenset[str] = frozenset(
    {MAX_CURRENT, SESSION_CHARGE_CONSUMPTION_LIMIT, ALLOW_CHARGING, ACCESS_CONFIGURATION}
)
