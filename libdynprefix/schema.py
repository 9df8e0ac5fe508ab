# SPDX-License-Identifier: LGPL-2.1-or-later

import pkgutil
import yaml


def load(schema_name):
    return yaml.load(
        pkgutil.get_data("libdynprefix", "schemas/" + schema_name + ".yaml"),
        Loader=yaml.SafeLoader,
    )


pool_config_schema = load("pool-config")


class PoolConfig:
    KEY = "pool"

    NAME = "name"
    PREFIX_ADDRESS = "prefix-address"
    PREFIX_SIZE = "prefix-size"
    POOL_SIZE = "pool-size"
    SLA_SIZE = "sla-size"
    SLA_ID = "sla-id"

    DEFAULT_POOL_SIZE = 97
    DEFAULT_SLA_ID = 0

    # Environment variables, in the same order as the keys above
    ENV_NAME = "DYNPREFIX_POOL_NAME"
    ENV_PREFIX_ADDRESS = "DYNPREFIX_PREFIX_ADDRESS"
    ENV_PREFIX_SIZE = "DYNPREFIX_PREFIX_SIZE"
    ENV_POOL_SIZE = "DYNPREFIX_POOL_SIZE"
    ENV_SLA_SIZE = "DYNPREFIX_SLA_SIZE"
    ENV_SLA_ID = "DYNPREFIX_SLA_ID"


class LoadPool:
    COMMAND = "load-pool"
    ADDRS = "addrs"

    REPLY_SUCCESS = "success"
    REPLY_ERRMSG = "errmsg"


class Constants:
    # Bit layout of the canonical prefix text `xxxx:xxxx:xxxx:xxxx::`
    PREFIX_ADDRESS_LENGTH = 21
    HEXTET_DIGITS = 4
    SITE_HEXTET_BITS = 16
    INTERFACE_ID_BITS = 64
    MIN_POOL_SIZE = 97

    DEFAULT_VICI_SOCKET = "/var/run/charon.vici"
