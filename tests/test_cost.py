"""Tests for compute-unit pricing (cost.py) and engine configuration (config.py)."""

import pytest

from bigmodexp.config import DEFAULT_CONFIG, ModExpConfig
from bigmodexp.cost import (
    estimate_compute_units,
    iteration_count,
    multiplication_complexity,
)
from bigmodexp.decoder import encode_input
from bigmodexp.errors import MalformedInputError, OperandTooLargeError


# ---------------------------------------------------------------------------
# Pricing components
# ---------------------------------------------------------------------------

class TestMultiplicationComplexity:
    @pytest.mark.parametrize("base_len, mod_len, expected", [
        (0, 0, 0),
        (1, 1, 1),
        (8, 1, 1),
        (9, 1, 4),
        (1, 32, 16),
        (64, 64, 64),
    ])
    def test_words_squared(self, base_len, mod_len, expected):
        assert multiplication_complexity(base_len, mod_len) == expected


class TestIterationCount:
    def test_zero_exponent_costs_one(self):
        assert iteration_count(b"") == 1
        assert iteration_count(b"\x00" * 32) == 1

    def test_length_beyond_head_is_priced(self):
        # Zero-valued but long exponents still pay for the extra bytes.
        assert iteration_count(b"\x00" * 40) == 64

    def test_short_exponent(self):
        assert iteration_count(b"\x03") == 1
        assert iteration_count(b"\x01\x00") == 8
        assert iteration_count(b"\xff" * 32) == 255

    def test_long_exponent(self):
        assert iteration_count(b"\xff" * 64) == 8 * 32 + 255
        assert iteration_count(b"\x00" * 32 + b"\x01" * 32) == 8 * 32


# ---------------------------------------------------------------------------
# End-to-end estimates
# ---------------------------------------------------------------------------

class TestEstimateComputeUnits:
    def test_minimum_applies(self):
        assert estimate_compute_units(encode_input(b"\x05", b"\x03", b"\x0d")) == 200

    def test_maximum_operands(self):
        top = b"\xff" * 64
        expected = 64 * (8 * 32 + 255) // 3
        assert estimate_compute_units(encode_input(top, top, top)) == expected

    def test_independent_of_base_and_modulus_values(self):
        a = encode_input(b"\x01" * 48, b"\x7f" * 40, b"\x01" * 48)
        b = encode_input(b"\xfe" * 48, b"\x7f" * 40, b"\x02" * 48)
        assert estimate_compute_units(a) == estimate_compute_units(b)

    def test_custom_pricing(self):
        config = ModExpConfig(min_compute_units=0, compute_unit_divisor=1)
        assert estimate_compute_units(encode_input(b"\x05", b"\x03", b"\x0d"), config=config) == 1

    def test_rejects_malformed(self):
        with pytest.raises(MalformedInputError):
            estimate_compute_units(b"\x00" * 50)

    def test_rejects_oversized(self):
        with pytest.raises(OperandTooLargeError):
            estimate_compute_units(encode_input(b"\x01", b"\x01" * 65, b"\x07"))


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

class TestModExpConfig:
    def test_defaults(self):
        assert DEFAULT_CONFIG.length_descriptor_bytes == 32
        assert DEFAULT_CONFIG.max_operand_bytes == 64
        assert DEFAULT_CONFIG.result_bytes == 64
        assert DEFAULT_CONFIG.min_input_bytes == 96
        assert DEFAULT_CONFIG.max_input_bytes == 96 + 3 * 64
        assert DEFAULT_CONFIG.max_operand_limbs == 16
        assert DEFAULT_CONFIG.scratch_limbs == 32

    def test_operand_wider_than_result_rejected(self):
        with pytest.raises(ValueError):
            ModExpConfig(max_operand_bytes=65)

    def test_wider_result_allows_wider_operands(self):
        config = ModExpConfig(max_operand_bytes=256, result_bytes=256)
        assert config.scratch_limbs == 128

    @pytest.mark.parametrize("field", ["length_descriptor_bytes", "max_operand_bytes",
                                       "compute_unit_divisor"])
    def test_non_positive_rejected(self, field):
        with pytest.raises(ValueError):
            ModExpConfig(**{field: 0})

    def test_frozen(self):
        with pytest.raises(AttributeError):
            DEFAULT_CONFIG.max_operand_bytes = 128
