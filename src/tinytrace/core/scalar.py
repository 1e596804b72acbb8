"""Scalar arithmetic back-ends: native floating point and Q16.16 fixed point.

Every algorithm above this module is written against the operation set of
``NumericBackend``. Scalars of both back-ends support the Python arithmetic
and comparison operators, so vector and shading code reads the same whether
it runs on ``float`` values or on ``Fixed`` values. The few operations that
cannot be expressed with operators (square root, integer power, literal
conversion, quantization) live on the back-end object.

The fixed-point format is a signed 32-bit integer with 16 fractional bits
(scale factor 65536), giving a range of roughly +/-32768.0. Products and
quotients are computed on the wide (unbounded) Python integer before being
rescaled, which plays the role of a 64-bit intermediate.

Example:
    >>> from tinytrace.core.scalar import get_backend
    >>> fixed = get_backend("fixed")
    >>> x = fixed.scalar(2.25)
    >>> fixed.to_float(fixed.sqrt(x))
    1.5
    >>> fixed.quantize_channel(fixed.one)
    255
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from typing import Union

# =============================================================================
# Fixed-Point Format
# =============================================================================

FRACTION_BITS = 16
FIXED_ONE = 1 << FRACTION_BITS
FIXED_HALF = FIXED_ONE >> 1
FIXED_MAX = (1 << 31) - 1
FIXED_MIN = -(1 << 31)

# =============================================================================
# Numeric Safety Constants (shared by both back-ends)
# =============================================================================

# Distance sentinel for "no intersection yet"; must fit in Q16.16
BIG_DISTANCE = 30000.0

# Anything at or beyond this distance is reported as a miss
HIT_CUTOFF = 1000.0

# Offset applied to secondary ray origins and minimum accepted sphere root
SURFACE_BIAS = 1e-3

# Q16.16 hit points land up to ~4e-3 off the true surface
FIXED_SURFACE_BIAS = 1.0 / 64.0

# Rays with |direction.y| at or below this never hit the checker plane
PARALLEL_EPSILON = 1e-3

CHANNEL_MAX = 255


def _trunc_div(numerator: int, denominator: int) -> int:
    """Integer division rounding toward zero."""
    quotient = abs(numerator) // abs(denominator)
    if (numerator < 0) != (denominator < 0):
        return -quotient
    return quotient


def isqrt_binary(n: int) -> int:
    """Integer square root by binary search.

    Args:
        n: The value to take the root of.

    Returns:
        The largest r with r * r <= n, or 0 when n is not positive.
    """
    if n <= 0:
        return 0
    lo = 0
    hi = 1 << ((n.bit_length() + 1) // 2)
    while lo < hi:
        mid = (lo + hi + 1) >> 1
        if mid * mid <= n:
            lo = mid
        else:
            hi = mid - 1
    return lo


class Fixed:
    """A Q16.16 fixed-point number.

    Attributes:
        raw: The underlying integer, equal to value * 65536.
    """

    __slots__ = ("raw",)

    def __init__(self, raw: int) -> None:
        # NumPy integers would wrap on wide products
        self.raw = int(raw)

    @classmethod
    def from_float(cls, value: float) -> Fixed:
        """Convert a literal to fixed point, rounding to the nearest unit.

        Raises:
            ValueError: If the value is not representable in Q16.16.
        """
        raw = int(round(value * FIXED_ONE))
        if raw < FIXED_MIN or raw > FIXED_MAX:
            raise ValueError(f"Value {value} is outside the Q16.16 range")
        return cls(raw)

    @classmethod
    def from_int(cls, value: int) -> Fixed:
        return cls(int(value) << FRACTION_BITS)

    def __add__(self, other: Fixed) -> Fixed:
        if not isinstance(other, Fixed):
            return NotImplemented
        return Fixed(self.raw + other.raw)

    def __sub__(self, other: Fixed) -> Fixed:
        if not isinstance(other, Fixed):
            return NotImplemented
        return Fixed(self.raw - other.raw)

    def __mul__(self, other: Fixed) -> Fixed:
        if not isinstance(other, Fixed):
            return NotImplemented
        return Fixed((self.raw * other.raw) >> FRACTION_BITS)

    def __truediv__(self, other: Fixed) -> Fixed:
        if not isinstance(other, Fixed):
            return NotImplemented
        return Fixed(_trunc_div(self.raw << FRACTION_BITS, other.raw))

    def __neg__(self) -> Fixed:
        return Fixed(-self.raw)

    def __abs__(self) -> Fixed:
        return Fixed(abs(self.raw))

    def __lt__(self, other: Fixed) -> bool:
        if not isinstance(other, Fixed):
            return NotImplemented
        return self.raw < other.raw

    def __le__(self, other: Fixed) -> bool:
        if not isinstance(other, Fixed):
            return NotImplemented
        return self.raw <= other.raw

    def __gt__(self, other: Fixed) -> bool:
        if not isinstance(other, Fixed):
            return NotImplemented
        return self.raw > other.raw

    def __ge__(self, other: Fixed) -> bool:
        if not isinstance(other, Fixed):
            return NotImplemented
        return self.raw >= other.raw

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Fixed):
            return NotImplemented
        return self.raw == other.raw

    def __hash__(self) -> int:
        return hash(("Fixed", self.raw))

    def __float__(self) -> float:
        return self.raw / FIXED_ONE

    def __int__(self) -> int:
        # Truncates toward zero, like a C cast
        return _trunc_div(self.raw, FIXED_ONE)

    def __repr__(self) -> str:
        return f"Fixed({self.raw / FIXED_ONE!r})"


# A scalar is a float on the float back-end and a Fixed on the fixed back-end
Scalar = Union[float, Fixed]


# =============================================================================
# Back-end Interface
# =============================================================================


class NumericBackend(ABC):
    """The arithmetic operation set shared by both numeric back-ends.

    Concrete back-ends convert literals, provide square root and integer
    power, and decide how a color leaves the renderer. The constants
    ``zero``, ``one``, ``half``, ``big``, ``hit_cutoff``, ``surface_bias``
    and ``parallel_epsilon`` are converted once when the back-end is built so
    the per-pixel path never converts literals.
    """

    name = "abstract"

    # Surface bias literal, sized to this back-end's rounding error
    bias = SURFACE_BIAS

    # Largest magnitude an intermediate scalar may reach
    max_magnitude = math.inf

    def __init__(self) -> None:
        self.zero = self.scalar(0)
        self.one = self.scalar(1)
        self.half = self.scalar(0.5)
        self.big = self.scalar(BIG_DISTANCE)
        self.hit_cutoff = self.scalar(HIT_CUTOFF)
        self.surface_bias = self.scalar(self.bias)
        self.parallel_epsilon = self.scalar(PARALLEL_EPSILON)

    # -- conversions ---------------------------------------------------------

    @abstractmethod
    def scalar(self, value: float) -> Scalar:
        """Convert an int or float literal to a scalar."""

    @abstractmethod
    def from_int(self, value: int) -> Scalar:
        """Convert a machine integer (e.g. a pixel coordinate) to a scalar."""

    @abstractmethod
    def to_float(self, value: Scalar) -> float:
        """Convert a scalar to a Python float."""

    def to_int(self, value: Scalar) -> int:
        """Convert a scalar to an int, truncating toward zero."""
        return int(value)

    # -- arithmetic ----------------------------------------------------------

    def add(self, a: Scalar, b: Scalar) -> Scalar:
        return a + b

    def sub(self, a: Scalar, b: Scalar) -> Scalar:
        return a - b

    def neg(self, a: Scalar) -> Scalar:
        return -a

    def mul(self, a: Scalar, b: Scalar) -> Scalar:
        return a * b

    def div(self, a: Scalar, b: Scalar) -> Scalar:
        return a / b

    def min(self, a: Scalar, b: Scalar) -> Scalar:
        return a if a < b else b

    def max(self, a: Scalar, b: Scalar) -> Scalar:
        return a if a > b else b

    def abs(self, a: Scalar) -> Scalar:
        return abs(a)

    @abstractmethod
    def sqrt(self, value: Scalar) -> Scalar:
        """Square root; returns zero for non-positive input."""

    def pow_int(self, base: Scalar, exponent: int) -> Scalar:
        """Raise base to a non-negative integer power by repeated squaring.

        Raises:
            ValueError: If exponent is negative.
        """
        if exponent < 0:
            raise ValueError(f"Exponent {exponent} must be non-negative")
        result = self.one
        while exponent > 0:
            if exponent & 1:
                result = result * base
            exponent >>= 1
            if exponent:
                base = base * base
        return result

    # -- color output --------------------------------------------------------

    @abstractmethod
    def quantize_channel(self, value: Scalar) -> int:
        """Clamp a channel to [0, 1] and map it to an 8-bit value."""

    def quantize_color(self, color) -> tuple[int, int, int]:
        """Quantize an (r, g, b) color to three 8-bit channels."""
        return (
            self.quantize_channel(color[0]),
            self.quantize_channel(color[1]),
            self.quantize_channel(color[2]),
        )

    @abstractmethod
    def encode_color(self, color) -> tuple:
        """Convert a traced color to this back-end's pixel output."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class FloatBackend(NumericBackend):
    """Native Python floating point."""

    name = "float"

    def scalar(self, value: float) -> float:
        return float(value)

    def from_int(self, value: int) -> float:
        return float(value)

    def to_float(self, value: float) -> float:
        return float(value)

    def sqrt(self, value: float) -> float:
        if value <= 0.0:
            return 0.0
        return math.sqrt(value)

    def quantize_channel(self, value: float) -> int:
        clamped = min(max(value, 0.0), 1.0)
        return min(max(int(clamped * CHANNEL_MAX + 0.5), 0), CHANNEL_MAX)

    def encode_color(self, color) -> tuple[float, float, float]:
        """Return the raw, unclamped (r, g, b) floats."""
        return (float(color[0]), float(color[1]), float(color[2]))


class FixedBackend(NumericBackend):
    """Q16.16 fixed point on top of ``Fixed``."""

    name = "fixed"
    bias = FIXED_SURFACE_BIAS
    max_magnitude = FIXED_MAX / FIXED_ONE

    def scalar(self, value: float) -> Fixed:
        return Fixed.from_float(value)

    def from_int(self, value: int) -> Fixed:
        return Fixed.from_int(value)

    def to_float(self, value: Fixed) -> float:
        return float(value)

    def sqrt(self, value: Fixed) -> Fixed:
        if value.raw <= 0:
            return Fixed(0)
        return Fixed(isqrt_binary(value.raw << FRACTION_BITS))

    def quantize_channel(self, value: Fixed) -> int:
        raw = min(max(value.raw, 0), FIXED_ONE)
        channel = (raw * CHANNEL_MAX + FIXED_HALF) >> FRACTION_BITS
        return min(max(channel, 0), CHANNEL_MAX)

    def encode_color(self, color) -> tuple[int, int, int]:
        """Return the saturated 8-bit (r, g, b) channels."""
        return self.quantize_color(color)


# =============================================================================
# Back-end Registry
# =============================================================================

BACKENDS: dict[str, type[NumericBackend]] = {
    FloatBackend.name: FloatBackend,
    FixedBackend.name: FixedBackend,
}


def get_backend(backend: str | NumericBackend) -> NumericBackend:
    """Look up a numeric back-end by name.

    Args:
        backend: ``"float"``, ``"fixed"``, or an existing back-end instance
            (returned unchanged).

    Returns:
        A back-end instance.

    Raises:
        ValueError: If the name is not a known back-end.
    """
    if isinstance(backend, NumericBackend):
        return backend
    try:
        backend_cls = BACKENDS[backend]
    except KeyError:
        raise ValueError(
            f"Unknown numeric backend: {backend!r} (expected one of {sorted(BACKENDS)})"
        ) from None
    return backend_cls()
