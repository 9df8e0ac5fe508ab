# SPDX-License-Identifier: LGPL-2.1-or-later

import pkgutil

from . import error
from . import schema

from .pool_address import derive
from .pool_address import gen_load_pool_request
from .pool_config import PoolConfiguration
from .prettystate import PrettyRequest
from .validator import ValidatedPoolConfiguration
from .validator import validate

__all__ = [
    "PoolConfiguration",
    "PrettyRequest",
    "ValidatedPoolConfiguration",
    "derive",
    "error",
    "gen_load_pool_request",
    "schema",
    "validate",
]

__version__ = pkgutil.get_data("libdynprefix", "VERSION").decode().strip()
