"""Status-code call surface of the modexp engine.

Mirrors the host declaration::

    uint64_t sol_big_mod_exp(const uint8_t *input,
                             const uint64_t input_size,
                             uint8_t *result);

:func:`sol_big_mod_exp` accepts Python buffers as well as ``ctypes``
pointers and arrays, so the same entry point serves in-process callers and
native hosts.  :data:`c_sol_big_mod_exp` is a C-callable function pointer
with the exact native signature.

No :class:`~bigmodexp.errors.ModExpError` crosses this boundary: every
failure class is returned as its :class:`~bigmodexp.errors.Status` code and
the result buffer must then be treated as undefined.
"""

import ctypes
import logging

from .config import DEFAULT_CONFIG, ModExpConfig
from .decoder import decode_input
from .encoder import encode_result, writable_buffer
from .errors import MalformedInputError, ModExpError, Status
from .modexp import mod_exp

logger = logging.getLogger(__name__)

_POINTER_TYPES = (ctypes._Pointer, ctypes.c_void_p)


def _read_input(data, input_size: int, config: ModExpConfig) -> tuple:
    """Resolve *data* to a bytes-like object and the number of bytes to decode.

    Pointers are mapped in place, never copied, and never past one byte
    beyond the largest well-formed input.  That extra byte is enough to
    detect trailing data.
    """
    if input_size < 0:
        raise MalformedInputError(f"negative input size {input_size}")
    if not isinstance(data, _POINTER_TYPES):
        return data, input_size
    address = ctypes.cast(data, ctypes.c_void_p).value
    if not address:
        if input_size:
            raise MalformedInputError("null input pointer with non-zero size")
        return b"", 0
    size = min(input_size, config.max_input_bytes + 1)
    return (ctypes.c_ubyte * size).from_address(address), size


def _result_buffer(result, width: int):
    """Resolve *result* to a writable buffer of *width* bytes."""
    if not isinstance(result, _POINTER_TYPES):
        return result
    if not result:
        raise ValueError("null result pointer")
    return ctypes.cast(result, ctypes.POINTER(ctypes.c_ubyte * width)).contents


def sol_big_mod_exp(input, input_size: int, result,
                    config: ModExpConfig = DEFAULT_CONFIG) -> Status:
    """Compute ``base ** exponent % modulus`` from a packed input buffer.

    Args:
        input:      Packed operands (see :mod:`bigmodexp.decoder`) as a
                    bytes-like object, ``ctypes`` array or pointer.
        input_size: Declared length of *input* in bytes.
        result:     Writable buffer of ``config.result_bytes`` bytes
                    (``bytearray``, ``memoryview``, ``ctypes`` array or
                    pointer).  Fully overwritten on success.
        config:     Engine limits.

    Returns:
        :attr:`Status.SUCCESS` (0) or the non-zero status of the failure.

    Raises:
        ValueError: If *result* is not a usable output buffer.  This is a
                    caller fault, not an input rejection, and is checked
                    before the input is looked at.
    """
    output = writable_buffer(_result_buffer(result, config.result_bytes), config.result_bytes)
    try:
        data, size = _read_input(input, input_size, config)
        operands = decode_input(data, size, config)
        value = mod_exp(operands.base, operands.exponent, operands.modulus)
        encode_result(value, output, config.result_bytes)
    except ModExpError as exc:
        logger.debug("big_mod_exp rejected input: %s (%s)", exc.status.name, exc)
        return exc.status
    return Status.SUCCESS


SolBigModExpFunc = ctypes.CFUNCTYPE(
    ctypes.c_uint64,
    ctypes.POINTER(ctypes.c_ubyte),  # input
    ctypes.c_uint64,                 # input_size
    ctypes.POINTER(ctypes.c_ubyte),  # result
)


def _c_entry(input, input_size, result):
    # Exceptions cannot propagate through a C callback, and ctypes would
    # report an escaped one as 0.
    try:
        return int(sol_big_mod_exp(input, input_size, result))
    except ValueError as exc:
        logger.error("big_mod_exp called with an unusable result buffer: %s", exc)
    except Exception:
        logger.exception("big_mod_exp failed")
    return int(Status.MALFORMED_INPUT)


c_sol_big_mod_exp = SolBigModExpFunc(_c_entry)
