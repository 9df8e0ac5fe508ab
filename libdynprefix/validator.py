# SPDX-License-Identifier: LGPL-2.1-or-later

import logging

from libdynprefix.error import DynPrefixValueError
from libdynprefix.error import IncompleteDelegationFieldsError
from libdynprefix.error import MalformedAddressError
from libdynprefix.error import PoolSizeTooSmallError
from libdynprefix.error import PrefixSizeTooLargeError
from libdynprefix.error import SlaIdExceedsSlaSizeError
from libdynprefix.error import SlaSizeExceedsAvailableBitsError
from libdynprefix.iplib import bit_length
from libdynprefix.iplib import is_canonical_prefix_address
from libdynprefix.schema import Constants

_VALIDATION_TOKEN = object()


class ValidatedPoolConfiguration:
    """
    Proof that a PoolConfiguration passed `validate()`. Only `validate()` can
    create it.
    """

    __slots__ = ("_config",)

    def __init__(self, config, token):
        if token is not _VALIDATION_TOKEN:
            raise TypeError(
                "ValidatedPoolConfiguration can only be created by validate()"
            )
        self._config = config

    @property
    def config(self):
        return self._config

    @property
    def pool_name(self):
        return self._config.pool_name

    @property
    def prefix_address(self):
        return self._config.prefix_address

    @property
    def pool_size(self):
        return self._config.pool_size

    @property
    def prefix_size(self):
        return self._config.prefix_size or 0

    @property
    def sla_size(self):
        return self._config.sla_size or 0

    @property
    def sla_id(self):
        return self._config.sla_id

    def __repr__(self):
        return "ValidatedPoolConfiguration({!r})".format(self._config)


def validate(config, require_delegation=False):
    """
    Check the pool configuration and return a ValidatedPoolConfiguration.
    The rules are checked in order and the first violation is raised as a
    DynPrefixValidationError subclass.

    With `require_delegation`, a configuration specifying neither the prefix
    size nor the SLA size is rejected instead of being used as is.

    Sizes and SLA id which are not unsigned integers raise
    DynPrefixValueError before any rule is checked.
    """
    validate_unsigned_integer(config.prefix_size, "prefix size", True)
    validate_unsigned_integer(config.pool_size, "pool size")
    validate_unsigned_integer(config.sla_size, "SLA size", True)
    validate_unsigned_integer(config.sla_id, "SLA id")

    prefix_size = config.prefix_size or 0
    sla_size = config.sla_size or 0

    validate_prefix_size(prefix_size)
    validate_pool_size(config.pool_size)
    validate_prefix_address(config.prefix_address)
    validate_sla_size(sla_size, prefix_size)
    validate_sla_id(config.sla_id, sla_size)
    validate_delegation_fields(
        config.prefix_size, config.sla_size, require_delegation
    )

    if sla_size > Constants.SITE_HEXTET_BITS:
        logging.warning(
            "SLA size %s is wider than the site hextet, only its low %s "
            "bits will be used",
            sla_size,
            Constants.SITE_HEXTET_BITS,
        )
    logging.debug("Pool configuration %s is valid", config)
    return ValidatedPoolConfiguration(config, _VALIDATION_TOKEN)


def validate_unsigned_integer(value, name, optional=False):
    if value is None and optional:
        return
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise DynPrefixValueError(
            "{} should be an unsigned integer, got {!r}".format(name, value)
        )


def validate_prefix_size(prefix_size):
    if prefix_size >= Constants.INTERFACE_ID_BITS:
        raise PrefixSizeTooLargeError(
            "Prefix size {} should be smaller than {}".format(
                prefix_size, Constants.INTERFACE_ID_BITS
            )
        )


def validate_pool_size(pool_size):
    if pool_size < Constants.MIN_POOL_SIZE:
        raise PoolSizeTooSmallError(
            "Pool size {} should be at least {}".format(
                pool_size, Constants.MIN_POOL_SIZE
            )
        )


def validate_prefix_address(prefix_address):
    if not isinstance(prefix_address, str) or not is_canonical_prefix_address(
        prefix_address
    ):
        raise MalformedAddressError(
            "Prefix address {} should be in the form "
            "xxxx:xxxx:xxxx:xxxx::".format(prefix_address)
        )


def validate_sla_size(sla_size, prefix_size):
    available_bits = Constants.INTERFACE_ID_BITS - prefix_size
    if sla_size > available_bits:
        raise SlaSizeExceedsAvailableBitsError(
            "SLA size {} exceeds the {} bits left by prefix size {}".format(
                sla_size, available_bits, prefix_size
            )
        )


def validate_sla_id(sla_id, sla_size):
    if bit_length(sla_id) > sla_size:
        raise SlaIdExceedsSlaSizeError(
            "SLA id {} needs {} bits but SLA size is {}".format(
                sla_id, bit_length(sla_id), sla_size
            )
        )


def validate_delegation_fields(prefix_size, sla_size, require_delegation):
    if (prefix_size is None) != (sla_size is None):
        raise IncompleteDelegationFieldsError(
            "Prefix size and SLA size should be specified together"
        )
    if require_delegation and prefix_size is None:
        raise IncompleteDelegationFieldsError(
            "Prefix size and SLA size are required"
        )
