"""16.16 fixed-point helpers, integer square root and the direction table."""

from __future__ import annotations

from functools import lru_cache

FIXED_SHIFT = 16
_MASK32 = 0xFFFFFFFF
_MASK64 = 0xFFFFFFFFFFFFFFFF


def _int32(v: int) -> int:
    v &= _MASK32
    return v - (1 << 32) if v & 0x80000000 else v


def _int64(v: int) -> int:
    v &= _MASK64
    return v - (1 << 64) if v & (1 << 63) else v


def _trunc_div(a: int, b: int) -> int:
    q = abs(a) // abs(b)
    return q if (a < 0) == (b < 0) else -q


def itof(v: int) -> int:
    """Convert an integer to 16.16 fixed point (32-bit wrapping)."""
    return _int32(v << FIXED_SHIFT)


def ftoi(v: int) -> int:
    """Convert a 16.16 fixed-point value to an integer, rounding down."""
    return v >> FIXED_SHIFT


def isqrt32(op: int) -> int:
    """Integer square root of an unsigned 32-bit value."""
    op &= _MASK32
    res = 0
    one = 1 << 30
    while one > op:
        one >>= 2
    while one:
        if op >= res + one:
            op -= res + one
            res += 2 * one
        res >>= 1
        one >>= 2
    return res


def vector_length(x: int, y: int) -> int:
    """Integer length of the vector (x, y)."""
    return isqrt32(x * x + y * y)


def distance_to(x1: int, y1: int, x2: int, y2: int) -> int:
    """Integer distance between two points."""
    return vector_length(x1 - x2, y1 - y2)


def _reduce(s: int, bits: int, tobits: int) -> tuple[int, int]:
    lim = 1 << tobits
    while s < -lim - 1 or s > lim:
        s >>= 1
        bits -= 1
    return s, bits


def _reduced_frac(s: int, bits: int, tobits: int) -> int:
    while bits > 60:
        s >>= 1
        bits -= 1
    return s << (tobits - bits)


@lru_cache(maxsize=None)
def cos_sin_table() -> tuple[tuple[int, int], ...]:
    """Return 128 (x, y) unit direction vectors in 16.16 fixed point."""
    scalebits = 28
    scale = 13176795  # (2pi / 128) << scalebits
    xs = [0] * 128
    ys = [0] * 128

    for i in range(128):
        rf = 0
        c = -1
        xf = i * scale
        s, bits = xf, scalebits
        t = 1
        while t < 26:
            rf += c * _reduced_frac(s, bits, 60)
            for _ in range(2):
                t += 1
                s = _trunc_div(s, t)
                s, bits = _reduce(s, bits, 31)
                s *= xf
                bits += scalebits
            c = -c

        shift = 60 - 16
        rf += 1 << (shift - 1)
        r = _int32(_int64(rf) >> shift)
        xs[i] = r
        ys[(i + 32) & 0x7F] = r

    return tuple(zip(xs, ys))