"""
Fixed-width 32-bit word arithmetic.

Python integers are unbounded, so every shift that may carry bits past the
word boundary is masked here. Words are always held unsigned.
"""

MASK32 = 0xFFFFFFFF


def u32(x: int) -> int:
    """Wrap ``x`` into the unsigned range ``[0, 2**32)``."""
    return x & MASK32


def shl32(x: int, n: int) -> int:
    """Left shift with wrap-around truncation to 32 bits."""
    return (x << n) & MASK32


def shr32(x: int, n: int) -> int:
    """Logical (zero-filling) right shift of a 32-bit word."""
    return (x & MASK32) >> n
