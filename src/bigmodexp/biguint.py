"""Fixed-capacity arbitrary-precision unsigned integers.

A :class:`BigUint` stores its magnitude as a read-only ``numpy.uint32``
array of limbs, least-significant limb first.  The representation is
canonical: the most significant limb is never zero and the value zero is
the empty array, so two values are equal exactly when their limb arrays
are equal.

Every value carries a capacity in limbs.  Results inherit the larger
capacity of their operands, and a value that would need more limbs than
its capacity raises :exc:`OverflowError` instead of growing.  With the
capacity derived from the maximum operand size, every intermediate of a
modular exponentiation is bounded before the computation starts.

Multiplication and division are schoolbook algorithms.  All arithmetic is
exact integer arithmetic; no floating point is involved anywhere.
"""

import numpy as np

from .config import DEFAULT_CONFIG, LIMB_BITS, LIMB_BYTES, LIMB_MASK
from .errors import InvalidModulusError

_LIMB_DTYPE = np.uint32
_WIDE_DTYPE = np.uint64

# Explicit uint64 scalars keep every accumulator operation in uint64.
_WIDE_MASK = np.uint64(LIMB_MASK)
_WIDE_SHIFT = np.uint64(LIMB_BITS)


def _trim(limbs: np.ndarray) -> np.ndarray:
    """Drop most-significant zero limbs."""
    nonzero = np.flatnonzero(limbs)
    if nonzero.size == 0:
        return limbs[:0]
    return limbs[: nonzero[-1] + 1]


def _propagate_carries(acc: np.ndarray) -> np.ndarray:
    """Fold a column accumulator of uint64 sums into 32-bit limbs."""
    out = np.zeros(acc.size, dtype=_LIMB_DTYPE)
    carry = 0
    for k, column in enumerate(acc.tolist()):
        carry += column
        out[k] = carry & LIMB_MASK
        carry >>= LIMB_BITS
    if carry:
        raise OverflowError("carry out of product accumulator")
    return out


class BigUint:
    """Immutable non-negative integer over 32-bit limbs.

    Args:
        limbs:    Limb values, least-significant first.  Each must fit in
                  32 bits.  Leading zero limbs are trimmed.
        capacity: Maximum number of limbs the value may occupy.  Defaults
                  to the scratch capacity of :data:`DEFAULT_CONFIG`.

    Raises:
        OverflowError: If the trimmed value needs more than *capacity* limbs.
    """

    __slots__ = ("_limbs", "_capacity")

    def __init__(self, limbs=(), capacity: int = None) -> None:
        if capacity is None:
            capacity = DEFAULT_CONFIG.scratch_limbs
        arr = _trim(np.array(limbs, dtype=_LIMB_DTYPE).reshape(-1)).copy()
        if arr.size > capacity:
            raise OverflowError(
                f"value needs {arr.size} limbs, capacity is {capacity}"
            )
        arr.flags.writeable = False
        self._limbs = arr
        self._capacity = capacity

    # ------------------------------------------------------------------
    # Construction and conversion
    # ------------------------------------------------------------------

    @classmethod
    def zero(cls, capacity: int = None) -> "BigUint":
        return cls((), capacity)

    @classmethod
    def one(cls, capacity: int = None) -> "BigUint":
        return cls((1,), capacity)

    @classmethod
    def from_bytes(cls, data, capacity: int = None) -> "BigUint":
        """Decode a big-endian magnitude of any length (empty means zero)."""
        data = bytes(data)
        padding = b"\x00" * ((-len(data)) % LIMB_BYTES)
        words = np.frombuffer(padding + data, dtype=">u4")
        return cls(words[::-1].astype(_LIMB_DTYPE), capacity)

    @classmethod
    def from_int(cls, value: int, capacity: int = None) -> "BigUint":
        if value < 0:
            raise ValueError("BigUint cannot hold a negative value")
        return cls.from_bytes(value.to_bytes((value.bit_length() + 7) // 8, "big"), capacity)

    def to_bytes(self, width: int = None) -> bytes:
        """Encode big-endian, left-padded with zeros to *width* bytes.

        Without *width* the minimal encoding is returned (``b""`` for zero).

        Raises:
            OverflowError: If the value needs more than *width* bytes.
        """
        raw = self._limbs[::-1].astype(">u4").tobytes().lstrip(b"\x00")
        if width is None:
            return raw
        if len(raw) > width:
            raise OverflowError(f"value needs {len(raw)} bytes, width is {width}")
        return raw.rjust(width, b"\x00")

    def __int__(self) -> int:
        return int.from_bytes(self.to_bytes(), "big")

    # ------------------------------------------------------------------
    # Inspection
    # ------------------------------------------------------------------

    @property
    def limbs(self) -> np.ndarray:
        """Read-only limb array, least-significant first."""
        return self._limbs

    @property
    def capacity(self) -> int:
        return self._capacity

    def is_zero(self) -> bool:
        return self._limbs.size == 0

    def is_one(self) -> bool:
        return self._limbs.size == 1 and int(self._limbs[0]) == 1

    def bit_length(self) -> int:
        if self.is_zero():
            return 0
        return (self._limbs.size - 1) * LIMB_BITS + int(self._limbs[-1]).bit_length()

    def byte_length(self) -> int:
        return (self.bit_length() + 7) // 8

    def test_bit(self, index: int) -> bool:
        """Return True if bit *index* (0 = least significant) is set."""
        limb, offset = divmod(index, LIMB_BITS)
        if limb >= self._limbs.size:
            return False
        return bool((int(self._limbs[limb]) >> offset) & 1)

    # ------------------------------------------------------------------
    # Operators
    # ------------------------------------------------------------------

    def __eq__(self, other) -> bool:
        if not isinstance(other, BigUint):
            return NotImplemented
        return compare(self, other) == 0

    def __hash__(self) -> int:
        return hash(tuple(self._limbs.tolist()))

    def __lt__(self, other: "BigUint") -> bool:
        return compare(self, other) < 0

    def __le__(self, other: "BigUint") -> bool:
        return compare(self, other) <= 0

    def __gt__(self, other: "BigUint") -> bool:
        return compare(self, other) > 0

    def __ge__(self, other: "BigUint") -> bool:
        return compare(self, other) >= 0

    def __bool__(self) -> bool:
        return not self.is_zero()

    def __mul__(self, other: "BigUint") -> "BigUint":
        return multiply(self, other)

    def __divmod__(self, other: "BigUint") -> tuple:
        return _divmod(self, other)

    def __floordiv__(self, other: "BigUint") -> "BigUint":
        return _divmod(self, other)[0]

    def __mod__(self, other: "BigUint") -> "BigUint":
        return _divmod(self, other)[1]

    def __repr__(self) -> str:
        return f"BigUint(0x{int(self):x})"


# ---------------------------------------------------------------------------
# Arithmetic
# ---------------------------------------------------------------------------

def compare(a: BigUint, b: BigUint) -> int:
    """Return -1, 0 or 1 as *a* is less than, equal to or greater than *b*."""
    la, lb = a.limbs.size, b.limbs.size
    if la != lb:
        return -1 if la < lb else 1
    differing = np.flatnonzero(a.limbs != b.limbs)
    if differing.size == 0:
        return 0
    top = differing[-1]
    return -1 if a.limbs[top] < b.limbs[top] else 1


def multiply(a: BigUint, b: BigUint) -> BigUint:
    """Schoolbook product of *a* and *b*.

    Each row ``a[i] * b`` is computed as a uint64 vector (a 32x32-bit
    product always fits) and split into low and high halves that are added
    into a column accumulator.  A column receives at most two halves per
    row, so the accumulator cannot overflow for any supported operand
    size.  A single sequential pass then propagates the carries.

    The result has at most ``len(a) + len(b)`` limbs.
    """
    capacity = max(a.capacity, b.capacity)
    if a.is_zero() or b.is_zero():
        return BigUint.zero(capacity)

    x = a.limbs.astype(_WIDE_DTYPE)
    y = b.limbs.astype(_WIDE_DTYPE)
    n, m = x.size, y.size
    acc = np.zeros(n + m + 1, dtype=_WIDE_DTYPE)
    for i in range(n):
        row = x[i] * y
        acc[i: i + m] += row & _WIDE_MASK
        acc[i + 1: i + m + 1] += row >> _WIDE_SHIFT
    return BigUint(_propagate_carries(acc), capacity)


def _divmod_short(u: list, d: int) -> tuple:
    """Divide a limb list by a single non-zero limb."""
    quotient = [0] * len(u)
    rem = 0
    for i in range(len(u) - 1, -1, -1):
        quotient[i], rem = divmod((rem << LIMB_BITS) | u[i], d)
    return quotient, [rem]


def _divmod_long(u: list, v: list) -> tuple:
    """Knuth's Algorithm D (TAOCP vol. 2, 4.3.1) over 32-bit limbs.

    Requires ``len(v) >= 2``, ``v[-1] != 0`` and ``len(u) >= len(v)``.
    """
    n = len(v)
    m = len(u) - n

    # D1: normalise so the divisor's top limb has its high bit set.
    shift = LIMB_BITS - v[-1].bit_length()
    vn = [((v[i] << shift) | ((v[i - 1] >> (LIMB_BITS - shift)) if i else 0)) & LIMB_MASK
          for i in range(n)]
    un = [0] * (len(u) + 1)
    un[len(u)] = u[-1] >> (LIMB_BITS - shift)
    for i in range(len(u) - 1, 0, -1):
        un[i] = ((u[i] << shift) | (u[i - 1] >> (LIMB_BITS - shift))) & LIMB_MASK
    un[0] = (u[0] << shift) & LIMB_MASK

    quotient = [0] * (m + 1)
    top, second = vn[n - 1], vn[n - 2]
    for j in range(m, -1, -1):
        # D3: estimate the quotient limb from the top two limbs.
        qhat, rhat = divmod((un[j + n] << LIMB_BITS) | un[j + n - 1], top)
        while qhat > LIMB_MASK or qhat * second > ((rhat << LIMB_BITS) | un[j + n - 2]):
            qhat -= 1
            rhat += top
            if rhat > LIMB_MASK:
                break

        # D4: multiply and subtract.
        borrow = 0
        carry = 0
        for i in range(n):
            product = qhat * vn[i] + carry
            carry = product >> LIMB_BITS
            t = un[i + j] - (product & LIMB_MASK) - borrow
            un[i + j] = t & LIMB_MASK
            borrow = 1 if t < 0 else 0
        t = un[j + n] - carry - borrow
        un[j + n] = t & LIMB_MASK

        # D6: the estimate was one too large; add the divisor back.
        if t < 0:
            qhat -= 1
            carry = 0
            for i in range(n):
                t = un[i + j] + vn[i] + carry
                un[i + j] = t & LIMB_MASK
                carry = t >> LIMB_BITS
            un[j + n] = (un[j + n] + carry) & LIMB_MASK

        quotient[j] = qhat

    # D8: unnormalise the remainder.
    remainder = [
        ((un[i] >> shift) | (un[i + 1] << (LIMB_BITS - shift))) & LIMB_MASK
        for i in range(n - 1)
    ]
    remainder.append(un[n - 1] >> shift)
    return quotient, remainder


def _divmod(a: BigUint, b: BigUint) -> tuple:
    """Return ``(a // b, a % b)``.

    Raises:
        InvalidModulusError: If *b* is zero.
    """
    if b.is_zero():
        raise InvalidModulusError("division by zero")
    capacity = max(a.capacity, b.capacity)
    if compare(a, b) < 0:
        return BigUint.zero(capacity), BigUint(a.limbs, capacity)

    u = a.limbs.tolist()
    v = b.limbs.tolist()
    if len(v) == 1:
        quotient, remainder = _divmod_short(u, v[0])
    else:
        quotient, remainder = _divmod_long(u, v)
    return BigUint(quotient, capacity), BigUint(remainder, capacity)
