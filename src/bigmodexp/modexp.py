"""Modular exponentiation over :class:`~bigmodexp.biguint.BigUint`.

Left-to-right binary exponentiation: the exponent is scanned from its most
significant bit down, squaring the accumulator at every bit and multiplying
by the reduced base when the bit is set.  Every product is reduced modulo
the modulus immediately, so no intermediate exceeds twice the modulus
width, and the loop runs exactly ``exponent.bit_length()`` times.
"""

from .biguint import BigUint
from .config import DEFAULT_CONFIG, ModExpConfig
from .decoder import decode_input, encode_input
from .errors import InvalidModulusError


def mod_exp(base: BigUint, exponent: BigUint, modulus: BigUint) -> BigUint:
    """Compute ``base ** exponent % modulus``.

    Args:
        base:     Any value; it is reduced modulo *modulus* first.
        exponent: Any value; zero yields ``1 % modulus``.
        modulus:  Non-zero modulus.  A modulus of one always yields zero.

    Returns:
        The reduced power, strictly less than *modulus*.

    Raises:
        InvalidModulusError: If *modulus* is zero.
    """
    if modulus.is_zero():
        raise InvalidModulusError("modulus is zero")
    if modulus.is_one():
        return BigUint.zero(modulus.capacity)

    reduced_base = base % modulus
    result = BigUint.one(modulus.capacity)
    for bit in range(exponent.bit_length() - 1, -1, -1):
        result = (result * result) % modulus
        if exponent.test_bit(bit):
            result = (result * reduced_base) % modulus
    return result


def big_mod_exp(base: bytes, exponent: bytes, modulus: bytes,
                config: ModExpConfig = DEFAULT_CONFIG) -> bytes:
    """Byte-level modexp returning a result as wide as *modulus*.

    The operands go through the same validation as a syscall input buffer.

    Raises:
        OperandTooLargeError: An operand exceeds ``config.max_operand_bytes``.
        InvalidModulusError:  The modulus is zero.
    """
    operands = decode_input(encode_input(base, exponent, modulus, config), config=config)
    result = mod_exp(operands.base, operands.exponent, operands.modulus)
    return result.to_bytes(len(modulus))
