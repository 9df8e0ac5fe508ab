# SPDX-License-Identifier: LGPL-2.1-or-later

import logging

import pytest

from libdynprefix import PoolConfiguration
from libdynprefix import ValidatedPoolConfiguration
from libdynprefix import validate
from libdynprefix.error import DynPrefixValueError
from libdynprefix.error import DynPrefixValidationError
from libdynprefix.error import IncompleteDelegationFieldsError
from libdynprefix.error import MalformedAddressError
from libdynprefix.error import PoolSizeTooSmallError
from libdynprefix.error import PrefixSizeTooLargeError
from libdynprefix.error import SlaIdExceedsSlaSizeError
from libdynprefix.error import SlaSizeExceedsAvailableBitsError

POOL_NAME = "home"
PREFIX_ADDRESS = "2001:0db8:0000:1234::"


def _gen_config(**kwargs):
    info = {
        "pool_name": POOL_NAME,
        "prefix_address": PREFIX_ADDRESS,
        "pool_size": 120,
        "prefix_size": 48,
        "sla_size": 8,
        "sla_id": 5,
    }
    info.update(kwargs)
    return PoolConfiguration(**info)


def test_valid_config():
    config = _gen_config()

    validated_config = validate(config)

    assert isinstance(validated_config, ValidatedPoolConfiguration)
    assert validated_config.config is config
    assert validated_config.pool_name == POOL_NAME
    assert validated_config.prefix_size == 48
    assert validated_config.sla_size == 8
    assert validated_config.sla_id == 5


def test_validate_does_not_modify_config():
    config = _gen_config()
    origin = config.to_dict()

    validate(config)

    assert config.to_dict() == origin


def test_validated_config_cannot_be_built_outside_validate():
    with pytest.raises(TypeError):
        ValidatedPoolConfiguration(_gen_config(), object())


def test_only_first_violation_is_reported():
    config = _gen_config(prefix_size=70, pool_size=50)

    with pytest.raises(PrefixSizeTooLargeError):
        validate(config)


def test_pool_size_checked_before_address():
    config = _gen_config(pool_size=50, prefix_address="2001:db8::")

    with pytest.raises(PoolSizeTooSmallError):
        validate(config)


def test_address_checked_before_sla_size():
    config = _gen_config(
        prefix_address="2001:0db8:0000:ff00:", prefix_size=60, sla_size=10
    )

    with pytest.raises(MalformedAddressError):
        validate(config)


@pytest.mark.parametrize("prefix_size", [64, 65, 128])
def test_prefix_size_too_large(prefix_size):
    with pytest.raises(PrefixSizeTooLargeError):
        validate(_gen_config(prefix_size=prefix_size))


def test_largest_prefix_size():
    validate(_gen_config(prefix_size=63, sla_size=1, sla_id=1))


@pytest.mark.parametrize("pool_size", [0, 64, 96])
def test_pool_size_too_small(pool_size):
    with pytest.raises(PoolSizeTooSmallError):
        validate(_gen_config(pool_size=pool_size))


def test_smallest_pool_size():
    validate(_gen_config(pool_size=97))


@pytest.mark.parametrize(
    "prefix_address",
    [
        "2001:db8:0:ff00::",
        "2001:0db8:0000:ff00:",
        "2001:0db8:0000:ff00:::",
        "2001:0db8:0000:zz00::",
        "2001.0db8.0000.ff00..",
    ],
)
def test_malformed_address(prefix_address):
    with pytest.raises(MalformedAddressError):
        validate(_gen_config(prefix_address=prefix_address))


def test_sla_size_exceeds_available_bits():
    config = _gen_config(prefix_size=60, sla_size=10, sla_id=0)

    with pytest.raises(SlaSizeExceedsAvailableBitsError):
        validate(config)


def test_sla_size_uses_all_available_bits():
    validate(_gen_config(prefix_size=60, sla_size=4, sla_id=0xF))


def test_sla_id_exceeds_sla_size():
    with pytest.raises(SlaIdExceedsSlaSizeError):
        validate(_gen_config(sla_size=8, sla_id=256))


def test_sla_id_uses_all_sla_bits():
    validate(_gen_config(sla_size=8, sla_id=255))


def test_sla_id_without_sla_size():
    with pytest.raises(SlaIdExceedsSlaSizeError):
        validate(_gen_config(sla_size=0, sla_id=1))


def test_zero_sla_id_fits_zero_sla_size():
    validate(_gen_config(sla_size=0, sla_id=0))


def test_prefix_size_without_sla_size():
    config = _gen_config(sla_size=None, sla_id=0)

    with pytest.raises(IncompleteDelegationFieldsError):
        validate(config)


def test_sla_size_without_prefix_size():
    config = _gen_config(prefix_size=None)

    with pytest.raises(IncompleteDelegationFieldsError):
        validate(config)


def test_no_delegation_fields():
    config = PoolConfiguration(POOL_NAME, PREFIX_ADDRESS)

    validated_config = validate(config)

    assert validated_config.prefix_size == 0
    assert validated_config.sla_size == 0
    assert validated_config.pool_size == 97


def test_no_delegation_fields_when_required():
    config = PoolConfiguration(POOL_NAME, PREFIX_ADDRESS)

    with pytest.raises(IncompleteDelegationFieldsError):
        validate(config, require_delegation=True)


def test_require_delegation_with_delegation_fields():
    validate(_gen_config(), require_delegation=True)


def test_sla_size_wider_than_site_hextet_warns(caplog):
    config = _gen_config(prefix_size=32, sla_size=20, sla_id=0x12345)

    with caplog.at_level(logging.WARNING):
        validate(config)

    assert "wider than the site hextet" in caplog.text


def test_validation_errors_are_value_errors():
    with pytest.raises(ValueError):
        validate(_gen_config(pool_size=1))
    assert issubclass(MalformedAddressError, DynPrefixValidationError)


@pytest.mark.parametrize(
    "field,value",
    [
        ("sla_id", -1),
        ("sla_size", -1),
        ("prefix_size", -8),
        ("pool_size", -120),
        ("sla_id", 1.0),
        ("pool_size", "120"),
        ("sla_size", True),
    ],
    ids=[
        "negative_sla_id",
        "negative_sla_size",
        "negative_prefix_size",
        "negative_pool_size",
        "float_sla_id",
        "string_pool_size",
        "bool_sla_size",
    ],
)
def test_not_unsigned_integer(field, value):
    info = {"sla_size": 1, "sla_id": 1}
    info[field] = value
    config = _gen_config(**info)

    with pytest.raises(DynPrefixValueError):
        validate(config)


def test_negative_sla_id_does_not_overwrite_site_hextet():
    config = _gen_config(prefix_size=48, sla_size=1, sla_id=-1)

    with pytest.raises(DynPrefixValueError) as e:
        validate(config)
    assert not isinstance(e.value, DynPrefixValidationError)


def test_prefix_address_not_a_string():
    with pytest.raises(MalformedAddressError):
        validate(_gen_config(prefix_address=None))
