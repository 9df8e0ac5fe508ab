# SPDX-License-Identifier: LGPL-2.1-or-later

import string

from libdynprefix.error import DynPrefixInternalError
from libdynprefix.schema import Constants

_PREFIX_ADDRESS_CHARS = frozenset(string.hexdigits + ":")
_SITE_HEXTET_MASK = (1 << Constants.SITE_HEXTET_BITS) - 1

# Fields of the canonical prefix text `xxxx:xxxx:xxxx:xxxx::`
_HEAD_LENGTH = 15
_SITE_HEXTET_END = _HEAD_LENGTH + Constants.HEXTET_DIGITS
PREFIX_ADDRESS_TAIL = "::"


def is_canonical_prefix_address(address):
    """
    Structural check only: the hextets themselves are not parsed.
    """
    return len(address) == Constants.PREFIX_ADDRESS_LENGTH and all(
        char in _PREFIX_ADDRESS_CHARS for char in address
    )


def bit_length(value):
    return int(value).bit_length()


def site_clearing_mask(sla_size):
    """
    Return the 16 bits mask clearing the low `sla_size` bits of the site
    hextet. A `sla_size` of 16 or more clears the whole hextet.
    """
    if sla_size >= Constants.SITE_HEXTET_BITS:
        return 0
    return (_SITE_HEXTET_MASK << sla_size) & _SITE_HEXTET_MASK


def format_hextet(value):
    return "{:04x}".format(value & _SITE_HEXTET_MASK)


def split_prefix_address(address):
    """
    Split the canonical prefix text into its head (`xxxx:xxxx:xxxx:`), site
    hextet (`xxxx`) and tail (`::`).
    """
    if len(address) != Constants.PREFIX_ADDRESS_LENGTH:
        raise DynPrefixInternalError(
            "Prefix address {} is not {} characters long".format(
                address, Constants.PREFIX_ADDRESS_LENGTH
            )
        )
    head = address[:_HEAD_LENGTH]
    site_hextet = address[_HEAD_LENGTH:_SITE_HEXTET_END]
    tail = address[_SITE_HEXTET_END:]
    return head, site_hextet, tail


def parse_hextet(text):
    """
    Parse the leading hexadecimal digits of `text`, ignoring whatever
    follows them. Return 0 when `text` does not start with a hex digit.
    """
    digits = ""
    for char in text:
        if char not in string.hexdigits:
            break
        digits += char
    return int(digits, 16) if digits else 0
