"""IEEE-754 helpers used by latitude quantization."""

from __future__ import annotations

import math
import struct


def is_odd_bits(x: float) -> bool:
    """Return ``True`` if the last mantissa bit of *x* (binary64) is set."""
    (bits,) = struct.unpack(">Q", struct.pack(">d", x))
    return bits & 1 == 1


def next_up(x: float) -> float:
    """Return the least representable float strictly greater than *x*.

    NaN and ``+inf`` are returned unchanged; ``±0.0`` steps to the smallest
    positive subnormal.
    """
    if math.isnan(x) or x == math.inf:
        return x
    return math.nextafter(x, math.inf)
