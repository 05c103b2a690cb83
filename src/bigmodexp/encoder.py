"""Fixed-width result serialisation."""

import ctypes

from .biguint import BigUint
from .config import DEFAULT_CONFIG
from .errors import ResultOverflowError


def writable_buffer(out, width: int) -> ctypes.Array:
    """Return a ctypes byte array sharing the memory of *out*.

    Raises:
        ValueError: If *out* is read-only or shorter than *width* bytes.
    """
    if isinstance(out, ctypes.Array):
        target = out
    else:
        nbytes = memoryview(out).nbytes
        try:
            target = (ctypes.c_ubyte * nbytes).from_buffer(out)
        except TypeError as exc:
            raise ValueError(f"result buffer is not writable: {exc}") from exc
    if ctypes.sizeof(target) < width:
        raise ValueError(
            f"result buffer holds {ctypes.sizeof(target)} bytes, {width} required"
        )
    return target


def encode_result(value: BigUint, out, width: int = None) -> None:
    """Write *value* big-endian and left-zero-padded into *out*.

    Exactly the first *width* bytes of *out* are written.

    Args:
        value: The value to serialise.
        out:   Writable buffer of at least *width* bytes: a ``bytearray``,
               writable ``memoryview`` or a ``ctypes`` array.
        width: Output width; defaults to ``DEFAULT_CONFIG.result_bytes``.

    Raises:
        ResultOverflowError: If *value* needs more than *width* bytes.
        ValueError:          If *out* is read-only or shorter than *width*.
    """
    if width is None:
        width = DEFAULT_CONFIG.result_bytes
    target = writable_buffer(out, width)
    if value.byte_length() > width:
        raise ResultOverflowError(
            f"result needs {value.byte_length()} bytes, output width is {width}"
        )
    ctypes.memmove(target, value.to_bytes(width), width)
