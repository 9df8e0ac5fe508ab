# SPDX-License-Identifier: LGPL-2.1-or-later
import argparse
import errno
import logging
import os
import sys

import libdynprefix
from libdynprefix import PoolConfiguration
from libdynprefix import PrettyRequest
from libdynprefix.error import DynPrefixDependencyError
from libdynprefix.error import DynPrefixValueError
from libdynprefix.error import DynPrefixVICIError
from libdynprefix.pool_config import load_pool_config_file
from libdynprefix.pool_config import merge_pool_config
from libdynprefix.pool_config import parse_integer
from libdynprefix.pool_config import pool_config_from_env
from libdynprefix.schema import Constants
from libdynprefix.schema import LoadPool
from libdynprefix.schema import PoolConfig


def main():
    parser = argparse.ArgumentParser()

    subparsers = parser.add_subparsers()
    _setup_subcommand_show(subparsers)
    _setup_subcommand_load(subparsers)
    _setup_subcommand_version(subparsers)
    parser.add_argument(
        "--version", action="store_true", help="Display dynprefix version"
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Show debug logs",
    )

    if len(sys.argv) == 1:
        parser.print_usage()
        return errno.EINVAL
    args = parser.parse_args()

    logging.basicConfig(
        format="%(asctime)s %(name)-12s %(levelname)-8s %(message)s",
        level=logging.DEBUG if args.verbose else logging.INFO,
    )

    if args.version:
        print(libdynprefix.__version__)
    elif not hasattr(args, "func"):
        parser.print_usage()
        return errno.EINVAL
    else:
        return args.func(args)


def _setup_subcommand_show(subparsers):
    parser_show = subparsers.add_parser(
        "show", help="Show the load-pool request without sending it"
    )
    parser_show.set_defaults(func=show)
    _add_pool_arguments(parser_show)
    parser_show.add_argument(
        "--json",
        help="Show as JSON",
        default=True,
        action="store_false",
        dest="yaml",
    )
    parser_show.add_argument(
        "-a",
        "--address-only",
        help="Show only the pool address",
        default=False,
        action="store_true",
        dest="address_only",
    )


def _setup_subcommand_load(subparsers):
    parser_load = subparsers.add_parser(
        "load", help="Load the pool into the charon daemon"
    )
    parser_load.set_defaults(func=load)
    _add_pool_arguments(parser_load)
    parser_load.add_argument(
        "--socket",
        default=Constants.DEFAULT_VICI_SOCKET,
        help="VICI socket of the charon daemon, default: %(default)s",
    )


def _setup_subcommand_version(subparsers):
    parser_version = subparsers.add_parser(
        "version", help="Display dynprefix version"
    )
    parser_version.set_defaults(func=version)


def _add_pool_arguments(parser):
    parser.add_argument(
        "-n",
        "--pool-name",
        dest="pool_name",
        help="Name of the pool to add",
    )
    parser.add_argument(
        "-p",
        "--prefix-address",
        dest="prefix_address",
        help="Delegated prefix in the form xxxx:xxxx:xxxx:xxxx::",
    )
    parser.add_argument(
        "-s",
        "--pool-size",
        dest="pool_size",
        type=int,
        help="Size of the pool to add as decimal integer, default: {}".format(
            PoolConfig.DEFAULT_POOL_SIZE
        ),
    )
    parser.add_argument(
        "-l",
        "--prefix-size",
        dest="prefix_size",
        type=int,
        help="Number of bits of the prefix delegated by the provider",
    )
    parser.add_argument(
        "-b",
        "--sla-size",
        dest="sla_size",
        type=int,
        help="Number of bits of the site hextet reserved for the SLA id",
    )
    parser.add_argument(
        "-i",
        "--sla-id",
        dest="sla_id",
        type=_sla_id,
        help="SLA id to embed, decimal or 0x prefixed hexadecimal",
    )
    parser.add_argument(
        "-f",
        "--file",
        help="YAML or JSON file containing the pool configuration",
    )
    parser.add_argument(
        "--require-delegation",
        action="store_true",
        default=False,
        dest="require_delegation",
        help="Refuse to run without prefix size and SLA size",
    )


def version(args):
    print(libdynprefix.__version__)


def show(args):
    try:
        validated_config = _gen_validated_config(args)
        request = libdynprefix.gen_load_pool_request(validated_config)
    except _MissingPoolArgument as e:
        sys.stderr.write("ERROR: {}\n".format(e))
        return os.EX_USAGE
    except DynPrefixValueError as e:
        sys.stderr.write("ERROR: {}\n".format(e))
        return os.EX_DATAERR

    if args.address_only:
        print(request[validated_config.pool_name][LoadPool.ADDRS])
    else:
        _print_request(request, use_yaml=args.yaml)


def load(args):
    try:
        validated_config = _gen_validated_config(args)
        address = libdynprefix.derive(validated_config)
    except _MissingPoolArgument as e:
        sys.stderr.write("ERROR: {}\n".format(e))
        return os.EX_USAGE
    except DynPrefixValueError as e:
        sys.stderr.write("ERROR: {}\n".format(e))
        return os.EX_DATAERR

    print("address_pool: {}".format(address))

    try:
        from libdynprefix import vici_client

        vici_client.load_pool(validated_config, socket_path=args.socket)
    except DynPrefixDependencyError as e:
        sys.stderr.write("ERROR: {}\n".format(e))
        return os.EX_UNAVAILABLE
    except DynPrefixVICIError as e:
        print(str(e))
        return os.EX_UNAVAILABLE

    print("Pool {} loaded".format(validated_config.pool_name))


class _MissingPoolArgument(Exception):
    pass


def _gen_validated_config(args):
    file_info = {}
    if args.file:
        try:
            file_info = load_pool_config_file(args.file)
        except OSError as e:
            raise DynPrefixValueError(
                "Failed to read {}: {}".format(args.file, e.strerror)
            )

    cli_info = {
        PoolConfig.NAME: args.pool_name,
        PoolConfig.PREFIX_ADDRESS: args.prefix_address,
        PoolConfig.PREFIX_SIZE: args.prefix_size,
        PoolConfig.POOL_SIZE: args.pool_size,
        PoolConfig.SLA_SIZE: args.sla_size,
        PoolConfig.SLA_ID: args.sla_id,
    }
    info = merge_pool_config(file_info, pool_config_from_env(), cli_info)
    if PoolConfig.NAME not in info or PoolConfig.PREFIX_ADDRESS not in info:
        raise _MissingPoolArgument(
            "pool_name and prefix_address are required, see -h for usage"
        )

    config = PoolConfiguration.from_dict(info)
    return libdynprefix.validate(
        config, require_delegation=args.require_delegation
    )


def _sla_id(value):
    return parse_integer(value, PoolConfig.SLA_ID)


def _print_request(request, use_yaml=False):
    request = PrettyRequest(request)
    if use_yaml:
        sys.stdout.write(request.yaml)
    else:
        print(request.json)
