"""Engine limits for the modular-exponentiation syscall.

All size ceilings live in one immutable :class:`ModExpConfig` so that the
worst-case cost of a call is fixed before any input is seen.  The
relationship between the operand ceiling and the output width is checked
when the configuration is built, which makes a result overflow a
configuration error rather than a runtime surprise.
"""

from dataclasses import dataclass

# Width of one BigUint limb.  Products of two limbs plus two carries fit
# exactly in an unsigned 64-bit accumulator.
LIMB_BITS = 32
LIMB_BYTES = LIMB_BITS // 8
LIMB_MASK = (1 << LIMB_BITS) - 1


@dataclass(frozen=True)
class ModExpConfig:
    """Size limits and pricing constants for one engine instance.

    Attributes:
        length_descriptor_bytes: Width of each big-endian length prefix
                                 in the input buffer.
        max_operand_bytes:       Largest accepted magnitude per operand.
        result_bytes:            Width of the big-endian output buffer.
        min_compute_units:       Floor of the compute-unit estimate.
        compute_unit_divisor:    Divisor applied to complexity * iterations.
    """

    length_descriptor_bytes: int = 32
    max_operand_bytes: int = 64
    result_bytes: int = 64
    min_compute_units: int = 200
    compute_unit_divisor: int = 3

    def __post_init__(self) -> None:
        if self.length_descriptor_bytes <= 0:
            raise ValueError("length_descriptor_bytes must be positive")
        if self.max_operand_bytes <= 0:
            raise ValueError("max_operand_bytes must be positive")
        if self.max_operand_bytes > self.result_bytes:
            raise ValueError(
                f"max_operand_bytes ({self.max_operand_bytes}) exceeds "
                f"result_bytes ({self.result_bytes}); results could not be encoded"
            )
        if self.compute_unit_divisor <= 0:
            raise ValueError("compute_unit_divisor must be positive")

    @property
    def min_input_bytes(self) -> int:
        """Size of a buffer holding three empty segments."""
        return 3 * self.length_descriptor_bytes

    @property
    def max_input_bytes(self) -> int:
        """Size of a buffer holding three maximum-size segments."""
        return self.min_input_bytes + 3 * self.max_operand_bytes

    @property
    def max_operand_limbs(self) -> int:
        return -(-self.max_operand_bytes // LIMB_BYTES)

    @property
    def scratch_limbs(self) -> int:
        """Limb capacity of any intermediate value (a full product)."""
        return 2 * self.max_operand_limbs


DEFAULT_CONFIG = ModExpConfig()
