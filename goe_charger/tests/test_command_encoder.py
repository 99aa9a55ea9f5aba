# tests/test_command_encoder.py

import pytest

from goe_charger import channels as ch
from goe_charger.models.status import ApiVersion, DeviceStatus
from goe_charger.models.values import REFRESH, DecimalValue, OnOff, Quantity, StringValue, Unit, WriteRequest
from goe_charger.services.command_encoder import encode
from goe_charger.services.status_decoder import decode
from goe_charger.services.status_parser import parse_status


def test_max_current_accepts_numbers_and_currents():
    assert encode(ch.MAX_CURRENT, Quantity(6, Unit.AMPERE)) == WriteRequest("amp", "6")
    assert encode(ch.MAX_CURRENT, Quantity(6500, Unit.MILLIAMPERE)) == WriteRequest("amp", "6")
    assert encode(ch.MAX_CURRENT, DecimalValue(16)) == WriteRequest("amp", "16")
    assert encode(ch.MAX_CURRENT, DecimalValue(16.7)) == WriteRequest("amp", "16")


def test_max_current_rejects_wrong_unit_and_type():
    assert encode(ch.MAX_CURRENT, Quantity(6, Unit.KILOWATT_HOUR)) is None
    assert encode(ch.MAX_CURRENT, OnOff.ON) is None
    assert encode(ch.MAX_CURRENT, StringValue("16")) is None


def test_charge_limit_is_written_in_tenths_of_kwh():
    assert encode(ch.SESSION_CHARGE_CONSUMPTION_LIMIT, DecimalValue(11)) == WriteRequest("dwo", "110")
    assert encode(ch.SESSION_CHARGE_CONSUMPTION_LIMIT, Quantity(11.9, Unit.KILOWATT_HOUR)) == WriteRequest("dwo", "110")
    assert encode(ch.SESSION_CHARGE_CONSUMPTION_LIMIT, Quantity(5000, Unit.WATT_HOUR)) == WriteRequest("dwo", "50")
    assert encode(ch.SESSION_CHARGE_CONSUMPTION_LIMIT, Quantity(5, Unit.AMPERE)) is None


def test_allow_charging():
    assert encode(ch.ALLOW_CHARGING, OnOff.ON) == WriteRequest("alw", "1")
    assert encode(ch.ALLOW_CHARGING, OnOff.OFF) == WriteRequest("alw", "0")
    assert encode(ch.ALLOW_CHARGING, DecimalValue(1)) is None


def test_access_configuration_is_case_insensitive():
    assert encode(ch.ACCESS_CONFIGURATION, StringValue("timer")) == WriteRequest("ast", "3")
    assert encode(ch.ACCESS_CONFIGURATION, StringValue("Open")) == WriteRequest("ast", "0")
    assert encode(ch.ACCESS_CONFIGURATION, StringValue("bogus")) is None
    assert encode(ch.ACCESS_CONFIGURATION, StringValue(None)) is None


@pytest.mark.parametrize("channel_id", ch.ALL_CHANNELS)
def test_refresh_never_writes(channel_id):
    assert encode(channel_id, REFRESH) is None


def test_read_only_and_unknown_channels_never_write():
    assert encode(ch.CURRENT_L1, DecimalValue(5)) is None
    assert encode("unknown", OnOff.ON) is None


def test_decoded_values_encode_back_to_device_codes():
    allow = decode(ch.ALLOW_CHARGING, DeviceStatus(allow_charging=1))
    assert encode(ch.ALLOW_CHARGING, allow) == WriteRequest("alw", "1")

    access = decode(ch.ACCESS_CONFIGURATION, DeviceStatus(access_configuration=3))
    assert encode(ch.ACCESS_CONFIGURATION, access) == WriteRequest("ast", "3")

    limit = decode(ch.SESSION_CHARGE_CONSUMPTION_LIMIT, DeviceStatus(session_charge_consumption_limit=110))
    assert encode(ch.SESSION_CHARGE_CONSUMPTION_LIMIT, limit) == WriteRequest("dwo", "110")


def test_v2_uses_its_own_keys_and_units():
    assert encode(ch.SESSION_CHARGE_CONSUMPTION_LIMIT, DecimalValue(11), ApiVersion.V2) == WriteRequest("dwo", "11000")
    assert encode(
        ch.SESSION_CHARGE_CONSUMPTION_LIMIT, Quantity(4.35, Unit.KILOWATT_HOUR), ApiVersion.V2
    ) == WriteRequest("dwo", "4350")
    assert encode(ch.ACCESS_CONFIGURATION, StringValue("rfid"), ApiVersion.V2) == WriteRequest("acs", "1")
    assert encode(ch.ACCESS_CONFIGURATION, StringValue("timer"), ApiVersion.V2) is None
    assert encode(ch.ALLOW_CHARGING, OnOff.ON, ApiVersion.V2) == WriteRequest("frc", "2")
    assert encode(ch.ALLOW_CHARGING, OnOff.OFF, ApiVersion.V2) == WriteRequest("frc", "1")
    assert encode(ch.MAX_CURRENT, Quantity(16, Unit.AMPERE), ApiVersion.V2) == WriteRequest("amp", "16")


def test_v2_decoded_values_encode_back_to_device_values():
    status = parse_status({"dwo": 11000, "acs": 0}, ApiVersion.V2)

    limit = decode(ch.SESSION_CHARGE_CONSUMPTION_LIMIT, status)
    assert encode(ch.SESSION_CHARGE_CONSUMPTION_LIMIT, limit, ApiVersion.V2) == WriteRequest("dwo", "11000")

    access = decode(ch.ACCESS_CONFIGURATION, status)
    assert encode(ch.ACCESS_CONFIGURATION, access, ApiVersion.V2) == WriteRequest("acs", "0")
