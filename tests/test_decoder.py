"""Tests for input decoding and framing validation (decoder.py)."""

import ctypes
import tracemalloc

import pytest

from bigmodexp.config import ModExpConfig
from bigmodexp.decoder import Operands, decode_input, encode_input, split_input
from bigmodexp.errors import (
    InvalidModulusError,
    MalformedInputError,
    OperandTooLargeError,
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def descriptor(n: int) -> bytes:
    return n.to_bytes(32, "big")


def packed(base: int, exponent: int, modulus: int) -> bytes:
    def raw(n):
        return n.to_bytes((n.bit_length() + 7) // 8, "big")
    return encode_input(raw(base), raw(exponent), raw(modulus))


# ---------------------------------------------------------------------------
# Well-formed buffers
# ---------------------------------------------------------------------------

class TestDecodeValid:
    def test_layout(self):
        data = encode_input(b"\x05", b"\x03", b"\x0d")
        assert data == (
            descriptor(1) + b"\x05" + descriptor(1) + b"\x03" + descriptor(1) + b"\x0d"
        )

    def test_decode_small(self):
        ops = decode_input(packed(5, 3, 13))
        assert isinstance(ops, Operands)
        assert (int(ops.base), int(ops.exponent), int(ops.modulus)) == (5, 3, 13)

    def test_empty_base_and_exponent_are_zero(self):
        ops = decode_input(encode_input(b"", b"", b"\x07"))
        assert ops.base.is_zero()
        assert ops.exponent.is_zero()
        assert int(ops.modulus) == 7

    def test_leading_zero_magnitudes(self):
        ops = decode_input(encode_input(b"\x00\x00\x05", b"\x00\x03", b"\x00" * 63 + b"\x0d"))
        assert (int(ops.base), int(ops.exponent), int(ops.modulus)) == (5, 3, 13)

    def test_maximum_operand_size(self):
        top = b"\xff" * 64
        ops = decode_input(encode_input(top, top, top))
        assert int(ops.modulus) == (1 << 512) - 1

    def test_accepts_bytearray_and_memoryview(self):
        data = packed(4, 13, 497)
        for buf in (bytearray(data), memoryview(data)):
            assert int(decode_input(buf).modulus) == 497

    def test_accepts_ctypes_array(self):
        data = packed(4, 13, 497)
        buf = (ctypes.c_ubyte * len(data)).from_buffer_copy(data)
        assert int(decode_input(buf).modulus) == 497

    def test_declared_size_prefix(self):
        data = packed(5, 3, 13)
        ops = decode_input(data + b"\xaa\xbb", input_size=len(data))
        assert int(ops.modulus) == 13

    def test_split_input(self):
        assert split_input(encode_input(b"\x01", b"", b"\x02\x03")) == (b"\x01", b"", b"\x02\x03")

    def test_custom_descriptor_width(self):
        config = ModExpConfig(length_descriptor_bytes=8, max_operand_bytes=32)
        data = encode_input(b"\x04", b"\x0d", b"\x01\xf1", config)
        assert len(data) == 3 * 8 + 4
        ops = decode_input(data, config=config)
        assert int(ops.modulus) == 497


# ---------------------------------------------------------------------------
# Malformed framing
# ---------------------------------------------------------------------------

class TestDecodeMalformed:
    def test_empty_buffer(self):
        with pytest.raises(MalformedInputError):
            decode_input(b"")

    def test_shorter_than_three_descriptors(self):
        with pytest.raises(MalformedInputError):
            decode_input(b"\x00" * 95)

    def test_three_zero_descriptors_is_framed_but_invalid_modulus(self):
        with pytest.raises(InvalidModulusError):
            decode_input(b"\x00" * 96)

    def test_modulus_overruns_buffer(self):
        data = descriptor(0) + descriptor(0) + descriptor(40) + b"\x01" * 10
        with pytest.raises(MalformedInputError):
            decode_input(data)

    def test_modulus_truncated(self):
        data = packed(5, 3, 0x010203)
        with pytest.raises(MalformedInputError):
            decode_input(data[:-1])

    def test_descriptor_truncated(self):
        data = descriptor(1) + b"\x05" + descriptor(1) + b"\x03" + descriptor(1)[:31] + b"\x0d"
        with pytest.raises(MalformedInputError):
            decode_input(data + b"\x00")

    def test_trailing_bytes(self):
        with pytest.raises(MalformedInputError):
            decode_input(packed(5, 3, 13) + b"\x00")

    def test_declared_size_larger_than_buffer(self):
        data = packed(5, 3, 13)
        with pytest.raises(MalformedInputError):
            decode_input(data, input_size=len(data) + 1)

    def test_negative_declared_size(self):
        with pytest.raises(MalformedInputError):
            decode_input(packed(5, 3, 13), input_size=-1)

    def test_declared_size_cuts_modulus(self):
        data = packed(5, 3, 13)
        with pytest.raises(MalformedInputError):
            decode_input(data, input_size=len(data) - 1)

    def test_large_buffer_is_not_copied(self):
        data = bytearray(32 * 1024 * 1024)
        data[:len(packed(5, 3, 13))] = packed(5, 3, 13)
        tracemalloc.start()
        try:
            with pytest.raises(MalformedInputError):
                split_input(data)
            _, peak = tracemalloc.get_traced_memory()
        finally:
            tracemalloc.stop()
        assert peak < 1024 * 1024


# ---------------------------------------------------------------------------
# Size limits and modulus validation
# ---------------------------------------------------------------------------

class TestDecodeLimits:
    @pytest.mark.parametrize("position", [0, 1, 2])
    def test_operand_too_large(self, position):
        parts = [b"\x01", b"\x01", b"\x01"]
        parts[position] = b"\x01" * 65
        with pytest.raises(OperandTooLargeError):
            decode_input(encode_input(*parts))

    def test_huge_descriptor_rejected_before_reading(self):
        # The declared length is checked before the magnitude is touched.
        data = b"\xff" * 32 + b"\x00" * 64
        with pytest.raises(OperandTooLargeError):
            decode_input(data)

    def test_zero_modulus(self):
        with pytest.raises(InvalidModulusError):
            decode_input(encode_input(b"\x05", b"\x03", b"\x00\x00"))

    def test_empty_modulus(self):
        with pytest.raises(InvalidModulusError):
            decode_input(encode_input(b"\x05", b"\x03", b""))

    def test_modulus_one_is_valid(self):
        assert decode_input(packed(5, 3, 1)).modulus.is_one()
