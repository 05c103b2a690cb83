#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
bigmodexp: Syscall Benchmark
----------------------------
Times sol_big_mod_exp over RSA-style moduli from 32 to 512 bits, with the
base and exponent filled with 0x01 bytes of the same width, and writes one
CSV row per modulus size (median / min / max over the timed runs, plus the
compute-unit estimate the host would charge).

Usage:
    python3 reproducibility/benchmarks/benchmark_modexp.py
"""

import csv
import os
import sys
import time

import numpy as np

current_dir = os.path.dirname(os.path.abspath(__file__))
sys.path.append(current_dir)
from utils import PROJECT_ROOT, setup_logger

from bigmodexp import Status, encode_input, estimate_compute_units, sol_big_mod_exp

logger = setup_logger("BenchmarkModExp")

# --- Configuration ---
OUTPUT_CSV_FILE = os.getenv("BENCH_OUTPUT_CSV", os.path.join(PROJECT_ROOT, "modexp_benchmark_results.csv"))
NUM_WARMUP_RUNS = int(os.getenv("BENCH_WARMUP_RUNS", "3"))
NUM_TIMED_RUNS = int(os.getenv("BENCH_TIMED_RUNS", "50"))

RSA_MODULI = {
    32: "D0575439",
    64: "BAB298F775C1CF9F",
    128: "A9CBDF29F6E078A40C47716B429A2BAF",
    256: "D7774B0C36C328A124C4C895A6000B7AAD1434F77D406AB67DD322DBC46318AB",
    512: "A2BAC741546DB79EDE3999899EFFC967D9755D7AE570BB7ABFFC3F8CD54F08F3"
         "B4F62C051CAE5E192DBECCE111F48D90CF59F50DF6CA001C2B17D73BF43E967F",
}

CSV_FIELDS = ["bits", "compute_units", "median_s", "min_s", "max_s", "runs", "result_hex"]


def run_case(bits, modulus_hex):
    """Benchmarks one modulus size and returns a CSV row dict."""
    width = bits // 8
    modulus = bytes.fromhex(modulus_hex)
    data = encode_input(b"\x01" * width, b"\x01" * width, modulus)
    out = bytearray(64)

    units = estimate_compute_units(data)

    for _ in range(NUM_WARMUP_RUNS):
        status = sol_big_mod_exp(data, len(data), out)
        if status != Status.SUCCESS:
            raise RuntimeError(f"{bits}-bit case failed with {Status(status).name}")

    times = np.empty(NUM_TIMED_RUNS)
    for i in range(NUM_TIMED_RUNS):
        start = time.perf_counter()
        sol_big_mod_exp(data, len(data), out)
        times[i] = time.perf_counter() - start

    expected = pow(int.from_bytes(b"\x01" * width, "big"), int.from_bytes(b"\x01" * width, "big"),
                   int(modulus_hex, 16))
    if bytes(out) != expected.to_bytes(64, "big"):
        raise RuntimeError(f"{bits}-bit case disagrees with the reference result")

    return {
        "bits": bits,
        "compute_units": units,
        "median_s": f"{np.median(times):.6f}",
        "min_s": f"{times.min():.6f}",
        "max_s": f"{times.max():.6f}",
        "runs": NUM_TIMED_RUNS,
        "result_hex": bytes(out).hex(),
    }


def main():
    logger.info(f"--- bigmodexp Benchmark (warmup={NUM_WARMUP_RUNS}, runs={NUM_TIMED_RUNS}) ---")
    rows = []
    for bits, modulus_hex in RSA_MODULI.items():
        logger.info(f"Processing: {bits}-bit modulus")
        try:
            row = run_case(bits, modulus_hex)
        except RuntimeError as e:
            logger.error(f"  -> FAILED: {e}")
            continue
        logger.info(f"  -> median {row['median_s']}s, {row['compute_units']} CU")
        rows.append(row)

    if not rows:
        logger.warning("No benchmark case completed.")
        sys.exit(1)

    with open(OUTPUT_CSV_FILE, "w", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=CSV_FIELDS)
        writer.writeheader()
        writer.writerows(rows)
    logger.info(f"Benchmark completed. Results in {OUTPUT_CSV_FILE}")


if __name__ == "__main__":
    main()
