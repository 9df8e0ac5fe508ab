# SPDX-License-Identifier: LGPL-2.1-or-later

import logging

from libdynprefix.error import DynPrefixInternalError
from libdynprefix.iplib import PREFIX_ADDRESS_TAIL
from libdynprefix.iplib import format_hextet
from libdynprefix.iplib import parse_hextet
from libdynprefix.iplib import site_clearing_mask
from libdynprefix.iplib import split_prefix_address
from libdynprefix.schema import LoadPool
from libdynprefix.validator import ValidatedPoolConfiguration


def derive(validated_config):
    """
    Return the pool subnet, e.g. `2001:0db8:0000:1205::/120`, with the SLA id
    embedded into the low `sla_size` bits of the site hextet of the prefix
    address.
    """
    if not isinstance(validated_config, ValidatedPoolConfiguration):
        raise DynPrefixInternalError(
            "derive() requires a ValidatedPoolConfiguration, got {}".format(
                type(validated_config).__name__
            )
        )

    head, site_hextet, _ = split_prefix_address(
        validated_config.prefix_address
    )
    # The shape check lets colons into the site hextet, `12::` reads as 0x12
    site_field = embed_sla_id(
        parse_hextet(site_hextet),
        validated_config.sla_id,
        validated_config.sla_size,
    )
    address = "{}{}{}/{}".format(
        head,
        format_hextet(site_field),
        PREFIX_ADDRESS_TAIL,
        validated_config.pool_size,
    )
    logging.debug(
        "Derived pool address %s from %s",
        address,
        validated_config.prefix_address,
    )
    return address


def embed_sla_id(site_field, sla_id, sla_size):
    return (site_field & site_clearing_mask(sla_size)) | sla_id


def gen_load_pool_request(validated_config):
    """
    Return the body of the load-pool request for the validated
    configuration:

        <pool_name> {
            addrs = <pool address>
        }
    """
    return {
        validated_config.pool_name: {
            LoadPool.ADDRS: derive(validated_config)
        }
    }
