"""Input buffer decoding for the modexp syscall.

Wire layout (all integers big-endian, no padding between segments)::

    [base_len     - 32 bytes]
    [base         - base_len bytes]
    [exponent_len - 32 bytes]
    [exponent     - exponent_len bytes]
    [modulus_len  - 32 bytes]
    [modulus      - modulus_len bytes]

Decoding is strict: the three segments must consume the buffer exactly.
A truncated buffer, trailing bytes, or an over-long operand is rejected
before any arithmetic happens, so two independent decoders can never
disagree about which operands a buffer describes.
"""

from dataclasses import dataclass

from .biguint import BigUint
from .config import DEFAULT_CONFIG, ModExpConfig
from .errors import InvalidModulusError, MalformedInputError, OperandTooLargeError

_SEGMENT_NAMES = ("base", "exponent", "modulus")


@dataclass(frozen=True)
class Operands:
    """The decoded ``(base, exponent, modulus)`` triple of one invocation."""

    base: BigUint
    exponent: BigUint
    modulus: BigUint


def _input_view(data, input_size) -> memoryview:
    """Return a zero-copy byte view of the first *input_size* bytes of *data*."""
    view = memoryview(data)
    if view.ndim != 1 or view.itemsize != 1:
        view = view.cast("B")
    if input_size is None:
        return view
    if input_size < 0 or input_size > len(view):
        raise MalformedInputError(
            f"declared input size {input_size} does not match the "
            f"{len(view)} bytes available"
        )
    return view[:input_size]


def _read_segment(buf: memoryview, offset: int, name: str, config: ModExpConfig) -> tuple:
    """Read one length-prefixed segment starting at *offset*.

    Only the descriptor and the magnitude are copied out of *buf*, and the
    magnitude only once its length has passed the operand limit.

    Returns:
        ``(magnitude_bytes, next_offset)``.
    """
    width = config.length_descriptor_bytes
    if len(buf) - offset < width:
        raise MalformedInputError(f"buffer too short for the {name} length descriptor")
    declared = int.from_bytes(bytes(buf[offset: offset + width]), "big")
    offset += width

    if declared > config.max_operand_bytes:
        raise OperandTooLargeError(
            f"{name} length {declared} exceeds the maximum of "
            f"{config.max_operand_bytes} bytes"
        )
    if len(buf) - offset < declared:
        raise MalformedInputError(
            f"{name} declares {declared} bytes but only {len(buf) - offset} remain"
        )
    return bytes(buf[offset: offset + declared]), offset + declared


def split_input(data, input_size: int = None, config: ModExpConfig = DEFAULT_CONFIG) -> tuple:
    """Validate the framing of *data* and return the three raw magnitudes.

    *data* is never copied as a whole, so rejecting an oversized buffer costs
    no more memory than accepting a well-formed one.

    Args:
        data:       Bytes-like input buffer.
        input_size: Declared length of the input; defaults to ``len(data)``.
                    Only the first *input_size* bytes are decoded.
        config:     Size limits to enforce.

    Returns:
        ``(base, exponent, modulus)`` as big-endian ``bytes``.

    Raises:
        MalformedInputError:  Truncated buffer, trailing bytes, or a declared
                              input size larger than the buffer.
        OperandTooLargeError: A declared length exceeds ``max_operand_bytes``.
    """
    buf = _input_view(data, input_size)
    if len(buf) < config.min_input_bytes:
        raise MalformedInputError(
            f"input of {len(buf)} bytes cannot hold three "
            f"{config.length_descriptor_bytes}-byte length descriptors"
        )

    segments = []
    offset = 0
    for name in _SEGMENT_NAMES:
        magnitude, offset = _read_segment(buf, offset, name, config)
        segments.append(magnitude)

    if offset != len(buf):
        raise MalformedInputError(f"{len(buf) - offset} trailing bytes after the modulus")
    return tuple(segments)


def decode_input(data, input_size: int = None, config: ModExpConfig = DEFAULT_CONFIG) -> Operands:
    """Decode *data* into an :class:`Operands` triple.

    Raises:
        MalformedInputError:  See :func:`split_input`.
        OperandTooLargeError: See :func:`split_input`.
        InvalidModulusError:  The modulus is zero.
    """
    base, exponent, modulus = split_input(data, input_size, config)
    capacity = config.scratch_limbs
    operands = Operands(
        base=BigUint.from_bytes(base, capacity),
        exponent=BigUint.from_bytes(exponent, capacity),
        modulus=BigUint.from_bytes(modulus, capacity),
    )
    if operands.modulus.is_zero():
        raise InvalidModulusError("modulus is zero")
    return operands


def encode_input(base: bytes, exponent: bytes, modulus: bytes,
                 config: ModExpConfig = DEFAULT_CONFIG) -> bytes:
    """Build a wire-format buffer from three big-endian magnitudes.

    No size limits are applied here; they are enforced on decode.
    """
    width = config.length_descriptor_bytes
    return b"".join(
        len(part).to_bytes(width, "big") + bytes(part)
        for part in (base, exponent, modulus)
    )
