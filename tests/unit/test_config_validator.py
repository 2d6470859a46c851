import pytest
from pydantic import ValidationError

from src.syslogstream.config import validate_config
from src.syslogstream.format import Facility, Severity


# This function creates a valid raw dictionary for testing.
def _valid_raw(overrides=None):
    base = {
        "host": " logs.example.net ",
        "facility": "LOCAL3",
        # port, severity omitted to test defaults
    }
    if overrides:
        base.update(overrides)
    return base


# This test checks that defaults are applied and names are normalized.
def test_config__defaults_and_normalization():
    cfg = validate_config(_valid_raw())
    assert cfg.host == "logs.example.net"
    assert cfg.port == 514
    assert cfg.facility is Facility.LOCAL3
    assert cfg.severity is Severity.INFO
    assert cfg.tag is None
    assert cfg.timeout is None
    print("✅test_config__defaults_and_normalization passed")


# This test checks that facility and severity accept integer codes and digit strings.
def test_config__accepts_numeric_codes():
    cfg = validate_config(_valid_raw({"facility": 16, "severity": "3"}))
    assert cfg.facility is Facility.LOCAL0
    assert cfg.severity is Severity.ERROR


# This test checks that an out of range port is rejected.
def test_config__rejects_out_of_range_port():
    with pytest.raises(ValidationError):
        _ = validate_config(_valid_raw({"port": 0}))
    with pytest.raises(ValidationError):
        _ = validate_config(_valid_raw({"port": 65536}))
    print("✅test_config__rejects_out_of_range_port passed")


# This test checks that empty host, unknown facility/severity and bad codes are rejected.
def test_config__rejects_bad_host_facility_and_severity():
    with pytest.raises(ValidationError):
        _ = validate_config(_valid_raw({"host": "   "}))
    with pytest.raises(ValidationError):
        _ = validate_config({"port": 514})
    with pytest.raises(ValidationError):
        _ = validate_config(_valid_raw({"facility": "local9"}))
    with pytest.raises(ValidationError):
        _ = validate_config(_valid_raw({"facility": 24}))
    with pytest.raises(ValidationError):
        _ = validate_config(_valid_raw({"severity": "loud"}))
    with pytest.raises(ValidationError):
        _ = validate_config(_valid_raw({"severity": True}))


# This test checks tag and timeout validation.
def test_config__validates_tag_and_timeout():
    assert validate_config(_valid_raw({"tag": "  "})).tag is None
    assert validate_config(_valid_raw({"tag": "myapp[42]"})).tag == "myapp[42]"
    with pytest.raises(ValidationError):
        _ = validate_config(_valid_raw({"tag": "two words"}))
    with pytest.raises(ValidationError):
        _ = validate_config(_valid_raw({"tag": "x" * 33}))
    with pytest.raises(ValidationError):
        _ = validate_config(_valid_raw({"timeout": 0}))
    assert validate_config(_valid_raw({"timeout": 2.5})).timeout == 2.5
