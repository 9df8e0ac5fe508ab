# SPDX-License-Identifier: LGPL-2.1-or-later


class DynPrefixError(Exception):
    """
    The base exception of libdynprefix.
    """

    pass


class DynPrefixDependencyError(DynPrefixError):
    """
    libdynprefix requires external tools or modules installed, like the
    python3 vici module.
    """

    pass


class DynPrefixValueError(DynPrefixError, ValueError):
    """
    Exception happens before anything is sent to the daemon, user should
    resubmit the amended pool configuration. Example:
        * YAML/JSON syntax issue.
        * Pool configuration schema issue.
        * Integer option which is not a number.
    """

    pass


class DynPrefixValidationError(DynPrefixValueError):
    """
    The pool configuration violates one of the pool derivation rules.
    Only the first violated rule is reported.
    """

    pass


class PrefixSizeTooLargeError(DynPrefixValidationError):
    """
    The delegated prefix size is not smaller than 64.
    """

    pass


class PoolSizeTooSmallError(DynPrefixValidationError):
    """
    The pool size is smaller than 97.
    """

    pass


class MalformedAddressError(DynPrefixValidationError):
    """
    The prefix address is not in the `xxxx:xxxx:xxxx:xxxx::` form.
    """

    pass


class SlaSizeExceedsAvailableBitsError(DynPrefixValidationError):
    """
    The SLA size is larger than the bits left after the delegated prefix.
    """

    pass


class SlaIdExceedsSlaSizeError(DynPrefixValidationError):
    """
    The SLA id needs more bits than the SLA size provides.
    """

    pass


class IncompleteDelegationFieldsError(DynPrefixValidationError):
    """
    Only one of prefix size and SLA size was specified.
    """

    pass


class DynPrefixVICIError(DynPrefixError):
    """
    The charon daemon could not be reached or refused the load-pool request.
    """

    pass


class DynPrefixInternalError(DynPrefixError):
    """
    Unexpected behaviour happened. It is a bug of libdynprefix which should be
    fixed.
    """

    pass
