# SPDX-License-Identifier: LGPL-2.1-or-later

import logging
import socket

from libdynprefix.error import DynPrefixDependencyError
from libdynprefix.error import DynPrefixVICIError
from libdynprefix.pool_address import gen_load_pool_request
from libdynprefix.schema import Constants
from libdynprefix.schema import LoadPool

try:
    import vici
    from vici.exception import CommandException
    from vici.exception import SessionException
except ModuleNotFoundError:
    raise DynPrefixDependencyError("python3 vici module not found")


DEFAULT_VICI_SOCKET = Constants.DEFAULT_VICI_SOCKET


def load_pool(validated_config, socket_path=DEFAULT_VICI_SOCKET):
    """
    Derive the pool address and register it with charon through the VICI
    socket. Return the derived address.
    """
    request = gen_load_pool_request(validated_config)
    address = request[validated_config.pool_name][LoadPool.ADDRS]
    reply = _submit(LoadPool.COMMAND, request, socket_path)
    _check_reply(reply)
    logging.info(
        "Pool %s loaded with address %s", validated_config.pool_name, address
    )
    return address


def _submit(command, request, socket_path):
    logging.debug("Connecting to VICI socket %s", socket_path)
    try:
        with socket.socket(socket.AF_UNIX, socket.SOCK_STREAM) as sock:
            sock.connect(socket_path)
            session = vici.Session(sock)
            logging.debug("Sending %s request: %s", command, request)
            return session.request(command, request)
    except CommandException as e:
        # The daemon answered with success != yes
        raise DynPrefixVICIError(str(e)) from e
    except SessionException as e:
        raise DynPrefixVICIError(
            "Unable to send the message: {}".format(e)
        ) from e
    except OSError as e:
        raise DynPrefixVICIError(
            "Connection failed: {}".format(e.strerror or e)
        ) from e


def _check_reply(reply):
    success = _decode(reply.get(LoadPool.REPLY_SUCCESS)) if reply else ""
    if not success.startswith("y"):
        errmsg = _decode(reply.get(LoadPool.REPLY_ERRMSG)) if reply else ""
        raise DynPrefixVICIError(
            errmsg or "ERROR: Unable to parse return message"
        )
    logging.debug("Received message: %s", success)


def _decode(value):
    if value is None:
        return ""
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return str(value)
