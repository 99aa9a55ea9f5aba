# tests/test_status_decoder.py

import pytest

from goe_charger import channels as ch
from goe_charger.models.status import DeviceStatus
from goe_charger.models.values import UNDEF, DecimalValue, OnOff, Quantity, StringValue, Unit
from goe_charger.services.status_decoder import ERROR_TABLE, PWM_SIGNAL_TABLE, decode, decode_all


ENERGY = (230, 231, 229, 0, 12, 0, 5, 3, 0, 7)


def test_empty_status_is_undefined_everywhere():
    status = DeviceStatus()
    for channel_id in ch.ALL_CHANNELS:
        assert decode(channel_id, status) is UNDEF, channel_id


def test_unknown_channel_and_bad_input_are_undefined():
    assert decode("no_such_channel", DeviceStatus(pwm_signal=2)) is UNDEF
    assert decode(ch.PWM_SIGNAL, None) is UNDEF
    assert decode(ch.PWM_SIGNAL, {"car": 2}) is UNDEF


@pytest.mark.parametrize(
    "code, tag",
    [
        (1, "READY_NO_CAR"),
        (2, "CHARGING"),
        (3, "WAITING_FOR_CAR"),
        (4, "CHARGING_DONE_CAR_CONNECTED"),
    ],
)
def test_pwm_signal_tags(code, tag):
    assert decode(ch.PWM_SIGNAL, DeviceStatus(pwm_signal=code)) == StringValue(tag)


def test_unmapped_pwm_signal_is_unset_string_not_undefined():
    value = decode(ch.PWM_SIGNAL, DeviceStatus(pwm_signal=5))
    assert value is not UNDEF
    assert value == StringValue(None)


def test_unmapped_access_configuration_is_unset_string():
    assert decode(ch.ACCESS_CONFIGURATION, DeviceStatus(access_configuration=7)) == StringValue(None)
    assert decode(ch.ACCESS_CONFIGURATION, DeviceStatus(access_configuration=2)) == StringValue("AWATTAR")


def test_error_codes_fall_back_to_internal():
    assert decode(ch.ERROR, DeviceStatus(error_code=3)) == StringValue("PHASE")
    assert decode(ch.ERROR, DeviceStatus(error_code=0)) == StringValue("NONE")
    assert decode(ch.ERROR, DeviceStatus(error_code=99)) == StringValue("INTERNAL")
    assert decode(ch.ERROR, DeviceStatus(error_code=2)) == StringValue("INTERNAL")


def test_fallback_policies_differ_between_tables():
    assert PWM_SIGNAL_TABLE.fallback is None
    assert ERROR_TABLE.fallback == "INTERNAL"


def test_allow_charging():
    assert decode(ch.ALLOW_CHARGING, DeviceStatus(allow_charging=1)) is OnOff.ON
    assert decode(ch.ALLOW_CHARGING, DeviceStatus(allow_charging=0)) is OnOff.OFF
    assert decode(ch.ALLOW_CHARGING, DeviceStatus(allow_charging=7)) is OnOff.OFF
    assert decode(ch.ALLOW_CHARGING, DeviceStatus()) is UNDEF


def test_energy_array_channels():
    status = DeviceStatus(energy=ENERGY)

    assert decode(ch.PHASES, status) == DecimalValue(2)
    assert decode(ch.CURRENT_L1, status) == Quantity(1.2, Unit.AMPERE)
    assert decode(ch.CURRENT_L2, status) == Quantity(0.0, Unit.AMPERE)
    assert decode(ch.CURRENT_L3, status) == Quantity(0.5, Unit.AMPERE)
    assert decode(ch.POWER_L1, status) == Quantity(300, Unit.WATT)
    assert decode(ch.POWER_L3, status) == Quantity(700, Unit.WATT)
    assert decode(ch.VOLTAGE_L2, status) == Quantity(231, Unit.VOLT)


def test_phases_counts_zero_to_three():
    assert decode(ch.PHASES, DeviceStatus(energy=(0,) * 10)) == DecimalValue(0)
    assert decode(ch.PHASES, DeviceStatus(energy=(0, 0, 0, 0, 1, 1, 1, 0, 0, 0))) == DecimalValue(3)


def test_short_energy_array_degrades_per_channel():
    status = DeviceStatus(energy=(230, 231, 229, 0, 12))
    assert decode(ch.CURRENT_L1, status) == Quantity(1.2, Unit.AMPERE)
    assert decode(ch.CURRENT_L2, status) is UNDEF
    assert decode(ch.POWER_L1, status) is UNDEF
    assert decode(ch.PHASES, status) is UNDEF


def test_consumption_scaling():
    status = DeviceStatus(
        session_charge_consumption=3_600_000,
        session_charge_consumption_limit=110,
        total_charge_consumption=1234,
        temperature=31.5,
    )
    assert decode(ch.SESSION_CHARGE_CONSUMPTION, status) == Quantity(10.0, Unit.KILOWATT_HOUR)
    assert decode(ch.SESSION_CHARGE_CONSUMPTION_LIMIT, status) == Quantity(11.0, Unit.KILOWATT_HOUR)
    assert decode(ch.TOTAL_CHARGE_CONSUMPTION, status) == Quantity(123.4, Unit.KILOWATT_HOUR)
    assert decode(ch.TEMPERATURE, status) == Quantity(31.5, Unit.CELSIUS)


def test_base_layer_channels():
    status = DeviceStatus(max_current=16, firmware="040.0")
    assert decode(ch.MAX_CURRENT, status) == Quantity(16, Unit.AMPERE)
    assert decode(ch.FIRMWARE, status) == StringValue("040.0")


def test_decode_all_covers_requested_channels():
    values = decode_all(DeviceStatus(pwm_signal=2, energy=ENERGY), ch.ALL_CHANNELS)
    assert set(values) == set(ch.ALL_CHANNELS)
    assert values[ch.PWM_SIGNAL] == StringValue("CHARGING")
    assert values[ch.ERROR] is UNDEF
