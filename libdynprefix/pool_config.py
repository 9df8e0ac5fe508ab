# SPDX-License-Identifier: LGPL-2.1-or-later

import copy
import json
import logging
import os

import jsonschema as js
import yaml

from libdynprefix.error import DynPrefixValueError
from libdynprefix.schema import PoolConfig
from libdynprefix.schema import pool_config_schema

_ENV_KEYS = (
    (PoolConfig.ENV_NAME, PoolConfig.NAME),
    (PoolConfig.ENV_PREFIX_ADDRESS, PoolConfig.PREFIX_ADDRESS),
    (PoolConfig.ENV_PREFIX_SIZE, PoolConfig.PREFIX_SIZE),
    (PoolConfig.ENV_POOL_SIZE, PoolConfig.POOL_SIZE),
    (PoolConfig.ENV_SLA_SIZE, PoolConfig.SLA_SIZE),
    (PoolConfig.ENV_SLA_ID, PoolConfig.SLA_ID),
)

_INTEGER_KEYS = (
    PoolConfig.PREFIX_SIZE,
    PoolConfig.POOL_SIZE,
    PoolConfig.SLA_SIZE,
    PoolConfig.SLA_ID,
)


class PoolConfiguration:
    """
    Immutable pool configuration. `prefix_size` and `sla_size` are None when
    not specified.
    """

    __slots__ = (
        "_pool_name",
        "_prefix_address",
        "_prefix_size",
        "_pool_size",
        "_sla_size",
        "_sla_id",
    )

    def __init__(
        self,
        pool_name,
        prefix_address,
        pool_size=PoolConfig.DEFAULT_POOL_SIZE,
        prefix_size=None,
        sla_size=None,
        sla_id=PoolConfig.DEFAULT_SLA_ID,
    ):
        self._pool_name = pool_name
        self._prefix_address = prefix_address
        self._pool_size = pool_size
        self._prefix_size = prefix_size
        self._sla_size = sla_size
        self._sla_id = sla_id

    @property
    def pool_name(self):
        return self._pool_name

    @property
    def prefix_address(self):
        return self._prefix_address

    @property
    def pool_size(self):
        return self._pool_size

    @property
    def prefix_size(self):
        return self._prefix_size

    @property
    def sla_size(self):
        return self._sla_size

    @property
    def sla_id(self):
        return self._sla_id

    @property
    def has_delegation(self):
        return self._prefix_size is not None or self._sla_size is not None

    def to_dict(self):
        info = {
            PoolConfig.NAME: self._pool_name,
            PoolConfig.PREFIX_ADDRESS: self._prefix_address,
            PoolConfig.POOL_SIZE: self._pool_size,
            PoolConfig.SLA_ID: self._sla_id,
        }
        if self._prefix_size is not None:
            info[PoolConfig.PREFIX_SIZE] = self._prefix_size
        if self._sla_size is not None:
            info[PoolConfig.SLA_SIZE] = self._sla_size
        return info

    @classmethod
    def from_dict(cls, info):
        """
        Build the configuration from a dictionary keyed by `PoolConfig`
        names, checking its shape against the pool configuration schema and
        filling in the defaults.
        """
        schema_validate(info)
        return cls(
            pool_name=info[PoolConfig.NAME],
            prefix_address=info[PoolConfig.PREFIX_ADDRESS],
            pool_size=info.get(
                PoolConfig.POOL_SIZE, PoolConfig.DEFAULT_POOL_SIZE
            ),
            prefix_size=info.get(PoolConfig.PREFIX_SIZE),
            sla_size=info.get(PoolConfig.SLA_SIZE),
            sla_id=info.get(PoolConfig.SLA_ID, PoolConfig.DEFAULT_SLA_ID),
        )

    def _key(self):
        return (
            self._pool_name,
            self._prefix_address,
            self._pool_size,
            self._prefix_size,
            self._sla_size,
            self._sla_id,
        )

    def __eq__(self, other):
        if not isinstance(other, PoolConfiguration):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self):
        return hash(self._key())

    def __repr__(self):
        return "PoolConfiguration({})".format(self.to_dict())


def schema_validate(info):
    try:
        js.validate(info, pool_config_schema)
    except js.ValidationError as e:
        raise DynPrefixValueError(
            "Invalid pool configuration: {}".format(e.message)
        ) from e


def load_pool_config_file(path):
    with open(path) as fd:
        content = fd.read()
    return parse_pool_config(content)


def parse_pool_config(content):
    """
    Parse YAML or JSON text into a pool configuration dictionary. The
    pool may be given at top level or below the `pool` key.
    """
    try:
        # JSON dictionaries start with a curly brace
        if content.lstrip().startswith("{"):
            info = json.loads(content)
        else:
            info = yaml.load(content, Loader=yaml.SafeLoader)
    except (ValueError, yaml.YAMLError) as e:
        raise DynPrefixValueError(
            "Invalid pool configuration syntax: {}".format(e)
        ) from e

    if info is None:
        return {}
    if not isinstance(info, dict):
        raise DynPrefixValueError(
            "Pool configuration should be a dictionary, got {}".format(
                type(info).__name__
            )
        )
    return info.get(PoolConfig.KEY, info)


def pool_config_from_env(environ=None):
    if environ is None:
        environ = os.environ
    info = {}
    for env_name, key in _ENV_KEYS:
        value = environ.get(env_name)
        if value is None or value == "":
            continue
        logging.debug("Using %s from environment: %s", key, value)
        if key in _INTEGER_KEYS:
            value = parse_integer(value, key)
        info[key] = value
    return info


def parse_integer(value, key):
    """
    Parse a decimal integer. The SLA id also accepts the `0x` hexadecimal
    form.
    """
    value = value.strip()
    try:
        if key == PoolConfig.SLA_ID and value.lower().startswith("0x"):
            return int(value, 16)
        return int(value, 10)
    except ValueError:
        raise DynPrefixValueError(
            "Invalid integer {} for {}".format(value, key)
        )


def merge_pool_config(*sources):
    """
    Merge pool configuration dictionaries, later sources override earlier
    ones. Keys with None value are ignored.
    """
    info = {}
    for source in sources:
        for key, value in source.items():
            if value is not None:
                info[key] = copy.deepcopy(value)
    return info
