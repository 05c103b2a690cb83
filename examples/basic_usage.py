#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
bigmodexp: Usage Example
------------------------
This script demonstrates the core capabilities of the bigmodexp library:
1. Input Packing: building the length-prefixed operand buffer.
2. Pricing: the compute-unit estimate a host charges before the call.
3. The Syscall: computing base^exponent mod modulus into a 64-byte buffer.
4. Native Callers: invoking the engine through a C function pointer.
5. Failure Statuses: how malformed inputs are reported.

Usage:
    python3 examples/basic_usage.py
"""

import ctypes

from bigmodexp import (
    Status,
    c_sol_big_mod_exp,
    encode_input,
    estimate_compute_units,
    sol_big_mod_exp,
)


def report(label, status, out):
    if status == Status.SUCCESS:
        value = int.from_bytes(bytes(out), "big")
        print(f"  [{label}] SUCCESS: result = {value} (0x{bytes(out).hex()})")
    else:
        print(f"  [{label}] FAILURE: {Status(status).name} (code {int(status)})")


def main():
    # 1. Pack operands: 4^13 mod 497
    print("--- [1] Packing Input ---")
    data = encode_input(b"\x04", b"\x0d", (497).to_bytes(2, "big"))
    print(f"    Buffer: {len(data)} bytes")

    # 2. Price the call
    print("\n--- [2] Compute-Unit Estimate ---")
    print(f"    {estimate_compute_units(data)} CU")

    # 3. Python buffers
    print("\n--- [3] Syscall with Python Buffers ---")
    out = bytearray(64)
    report("bytearray", sol_big_mod_exp(data, len(data), out), out)

    # 4. ctypes buffers through the C entry point
    print("\n--- [4] Syscall through a C Function Pointer ---")
    c_input = (ctypes.c_ubyte * len(data)).from_buffer_copy(data)
    c_output = (ctypes.c_ubyte * 64)()
    report("c_sol_big_mod_exp", c_sol_big_mod_exp(c_input, len(data), c_output), c_output)

    # 5. Rejections
    print("\n--- [5] Failure Statuses ---")
    report("trailing byte", sol_big_mod_exp(data + b"\x00", len(data) + 1, out), out)
    oversized = encode_input(b"\x01" * 65, b"\x01", b"\x07")
    report("oversized base", sol_big_mod_exp(oversized, len(oversized), out), out)
    zero_mod = encode_input(b"\x05", b"\x03", b"\x00")
    report("zero modulus", sol_big_mod_exp(zero_mod, len(zero_mod), out), out)


if __name__ == "__main__":
    main()
