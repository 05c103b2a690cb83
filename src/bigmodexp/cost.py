"""Compute-unit pricing for a modexp input buffer.

The host meters the syscall before running it, so the price must depend
only on the validated segment lengths and the leading exponent bytes,
never on the result.  The model follows the EVM MODEXP precompile
(EIP-2565):

    words      = ceil(max(base_len, modulus_len) / 8)
    complexity = words ** 2
    iterations = bit position of the exponent's highest set bit,
                 counted from the first 32 exponent bytes plus 8 per
                 additional byte, at least 1
    units      = max(min_compute_units, complexity * iterations // divisor)
"""

from .config import DEFAULT_CONFIG, ModExpConfig
from .decoder import split_input

_WORD_BYTES = 8
_EXPONENT_HEAD_BYTES = 32


def multiplication_complexity(base_length: int, modulus_length: int) -> int:
    """Square of the operand width in 64-bit words."""
    words = -(-max(base_length, modulus_length) // _WORD_BYTES)
    return words ** 2


def iteration_count(exponent: bytes) -> int:
    """Estimated square-and-multiply rounds for a big-endian *exponent*."""
    head = int.from_bytes(exponent[:_EXPONENT_HEAD_BYTES], "big")
    head_bits = max(head.bit_length() - 1, 0)
    if len(exponent) <= _EXPONENT_HEAD_BYTES:
        count = head_bits
    else:
        count = 8 * (len(exponent) - _EXPONENT_HEAD_BYTES) + head_bits
    return max(count, 1)


def estimate_compute_units(data, input_size: int = None,
                           config: ModExpConfig = DEFAULT_CONFIG) -> int:
    """Price the input buffer *data*.

    The buffer framing is validated exactly as the decoder does, so an
    input that cannot be priced is also one the syscall would reject.

    Raises:
        MalformedInputError:  See :func:`bigmodexp.decoder.split_input`.
        OperandTooLargeError: See :func:`bigmodexp.decoder.split_input`.
    """
    base, exponent, modulus = split_input(data, input_size, config)
    units = (
        multiplication_complexity(len(base), len(modulus))
        * iteration_count(exponent)
        // config.compute_unit_divisor
    )
    return max(config.min_compute_units, units)
