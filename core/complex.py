import math
import re
from typing import List


# a, ib, a+ib, a-ib, -ib, i  (i alone means b = 1)
_NUMBER = r"(?:\d+(?:\.\d*)?|\.\d+)"
_COMPLEX_PATTERN = re.compile(
    rf"^(?P<real>[+-]?{_NUMBER})?(?:(?P<sign>[+-])?i(?P<imag>{_NUMBER})?)?$"
)


def _require(other):
    if other is None:
        raise TypeError("Complex operand cannot be None.")
    return other


def _format_part(value: float) -> str:
    if value == int(value):
        return str(int(value))
    return str(value)


class Complex:
    """Immutable complex number.

    Two numbers are considered equal when both of their components differ by
    at most DELTA, so instances are not hashable.
    """

    DELTA = 1e-6

    __slots__ = ("_re", "_im")

    def __init__(self, re=0.0, im=0.0):
        self._re = float(re)
        self._im = float(im)

    @property
    def re(self) -> float:
        return self._re

    @property
    def im(self) -> float:
        return self._im

    @classmethod
    def parse(cls, text: str) -> "Complex":
        """Parse ``a+ib`` style input; zero parts may be dropped but not both."""
        cleaned = text.replace(" ", "")
        match = _COMPLEX_PATTERN.match(cleaned)
        if not cleaned or match is None:
            raise ValueError(f"Invalid complex number: {text!r}")

        real, sign, imag = match.group("real", "sign", "imag")
        has_imaginary = "i" in cleaned
        if real is not None and has_imaginary and sign is None:
            raise ValueError(f"Invalid complex number: {text!r}")

        re_part = float(real) if real is not None else 0.0
        im_part = 0.0
        if has_imaginary:
            im_part = float(imag) if imag is not None else 1.0
            if sign == "-":
                im_part = -im_part
        return cls(re_part, im_part)

    def module(self) -> float:
        return math.hypot(self._re, self._im)

    def angle(self) -> float:
        """Principal argument normalized into [0, 2*pi)."""
        result = math.atan2(self._im, self._re)
        return result + 2 * math.pi if result < 0 else result

    def add(self, other: "Complex") -> "Complex":
        _require(other)
        return Complex(self._re + other.re, self._im + other.im)

    def sub(self, other: "Complex") -> "Complex":
        _require(other)
        return Complex(self._re - other.re, self._im - other.im)

    def multiply(self, other: "Complex") -> "Complex":
        _require(other)
        return Complex(self._re * other.re - self._im * other.im,
                       self._re * other.im + self._im * other.re)

    def divide(self, other: "Complex") -> "Complex":
        _require(other)
        denominator = other.re * other.re + other.im * other.im
        if denominator == 0:
            raise ZeroDivisionError(f"Cannot divide {self} by a complex number with zero module.")
        return Complex((self._re * other.re + self._im * other.im) / denominator,
                       (self._im * other.re - self._re * other.im) / denominator)

    def negate(self) -> "Complex":
        return Complex(-self._re, -self._im)

    def power(self, n: int) -> "Complex":
        if n < 0:
            raise ValueError(f"Exponent must be non-negative, was: {n}")
        magnitude = self.module() ** n
        argument = n * self.angle()
        return Complex(magnitude * math.cos(argument), magnitude * math.sin(argument))

    def root(self, n: int) -> List["Complex"]:
        if n <= 0:
            raise ValueError(f"Root count must be positive, was: {n}")
        magnitude = self.module() ** (1.0 / n)
        theta = self.angle()
        roots = []
        for k in range(n):
            argument = (theta + 2 * k * math.pi) / n
            roots.append(Complex(magnitude * math.cos(argument), magnitude * math.sin(argument)))
        return roots

    def __add__(self, other):
        if not isinstance(other, Complex):
            return NotImplemented
        return self.add(other)

    def __sub__(self, other):
        if not isinstance(other, Complex):
            return NotImplemented
        return self.sub(other)

    def __mul__(self, other):
        if not isinstance(other, Complex):
            return NotImplemented
        return self.multiply(other)

    def __truediv__(self, other):
        if not isinstance(other, Complex):
            return NotImplemented
        return self.divide(other)

    def __neg__(self):
        return self.negate()

    def __abs__(self):
        return self.module()

    def __complex__(self):
        return complex(self._re, self._im)

    def __eq__(self, other):
        if not isinstance(other, Complex):
            return NotImplemented
        return abs(self._re - other.re) <= self.DELTA and abs(self._im - other.im) <= self.DELTA

    __hash__ = None

    def __str__(self):
        text = ""
        if self._re != 0:
            text += _format_part(self._re)
        if self._im != 0:
            if text and self._im > 0:
                text += "+"
            text += _format_part(self._im) + "i"
        return text or "0"

    def __repr__(self):
        return f"Complex({self._re:.6f}, {self._im:.6f})"


Complex.ZERO = Complex(0, 0)
Complex.ONE = Complex(1, 0)
Complex.ONE_NEG = Complex(-1, 0)
Complex.IM = Complex(0, 1)
Complex.IM_NEG = Complex(0, -1)
