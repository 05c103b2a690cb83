"""Error taxonomy and status codes for the modexp call boundary.

Internal stages raise the exceptions below; only
:func:`bigmodexp.syscall.sol_big_mod_exp` turns them into the integer
status codes returned to the host.
"""

from enum import IntEnum


class Status(IntEnum):
    """Return codes of the syscall.  Zero is success."""

    SUCCESS = 0
    MALFORMED_INPUT = 1
    OPERAND_TOO_LARGE = 2
    INVALID_MODULUS = 3
    RESULT_OVERFLOW = 4


class ModExpError(ValueError):
    """Base class for every failure the engine reports to its caller."""

    status = None


class MalformedInputError(ModExpError):
    """Buffer too short for its descriptors, truncated, or with trailing bytes."""

    status = Status.MALFORMED_INPUT


class OperandTooLargeError(ModExpError):
    """A declared operand length exceeds the configured maximum."""

    status = Status.OPERAND_TOO_LARGE


class InvalidModulusError(ModExpError, ZeroDivisionError):
    """The modulus (or any divisor) is zero."""

    status = Status.INVALID_MODULUS


class ResultOverflowError(ModExpError, OverflowError):
    """The result does not fit in the fixed output width."""

    status = Status.RESULT_OVERFLOW
