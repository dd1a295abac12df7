from typing import Optional

BIAS_MIN = -128
BIAS_MAX = 127


def clamp_bias(x: Optional[int]) -> int:
    if x is None:
        return 0
    return max(BIAS_MIN, min(BIAS_MAX, int(x)))


def saturating_add(a: int, b: int) -> int:
    return clamp_bias(a + b)


def saturating_sub(a: int, b: int) -> int:
    return clamp_bias(a - b)


def saturating_neg(a: int) -> int:
    # -(-128) does not fit in a signed byte
    return clamp_bias(-a)


def bias_fraction(bias: int) -> float:
    """Map a signed-byte bias onto roughly -1..1 (127 -> 1.0)."""
    return clamp_bias(bias) / float(BIAS_MAX)


def clamp(x: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, x))
