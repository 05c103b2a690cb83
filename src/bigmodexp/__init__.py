"""bigmodexp – deterministic big-integer modular exponentiation syscall.

Public API re-exports for convenience:

    from bigmodexp import sol_big_mod_exp, Status
    from bigmodexp import BigUint, mod_exp, big_mod_exp
    from bigmodexp import decode_input, encode_input, estimate_compute_units
"""

from .biguint import BigUint, compare, multiply
from .config import DEFAULT_CONFIG, ModExpConfig
from .cost import estimate_compute_units, iteration_count, multiplication_complexity
from .decoder import Operands, decode_input, encode_input, split_input
from .encoder import encode_result
from .errors import (
    InvalidModulusError,
    MalformedInputError,
    ModExpError,
    OperandTooLargeError,
    ResultOverflowError,
    Status,
)
from .modexp import big_mod_exp, mod_exp
from .syscall import SolBigModExpFunc, c_sol_big_mod_exp, sol_big_mod_exp

__all__ = [
    # Call surface
    "sol_big_mod_exp",
    "c_sol_big_mod_exp",
    "SolBigModExpFunc",
    "Status",
    # Arithmetic
    "BigUint",
    "compare",
    "multiply",
    "mod_exp",
    "big_mod_exp",
    # Wire format
    "Operands",
    "decode_input",
    "encode_input",
    "split_input",
    "encode_result",
    # Pricing
    "estimate_compute_units",
    "iteration_count",
    "multiplication_complexity",
    # Configuration
    "ModExpConfig",
    "DEFAULT_CONFIG",
    # Errors
    "ModExpError",
    "MalformedInputError",
    "OperandTooLargeError",
    "InvalidModulusError",
    "ResultOverflowError",
]
