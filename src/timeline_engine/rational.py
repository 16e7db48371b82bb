from __future__ import annotations

"""
Exact rational numbers used as the time unit for all musical durations.

Unlike `fractions.Fraction`, a Rational can also represent the two
infinities INF = 1/0 and NEG_INF = -1/0. Indeterminate forms such as
INF - INF or 0 * INF reduce to 0/0 and raise ZeroDivisionError.
"""

import math
import operator
from dataclasses import dataclass
from typing import ClassVar, Union


def _sign_nonzero(x: int) -> int:
    """Like a sign function, but 0 counts as positive."""
    return -1 if x < 0 else 1


@dataclass(frozen=True, init=False, eq=False)
class Rational:
    """Fraction stored in lowest terms, with the sign in the numerator."""

    numerator: int
    denominator: int

    ZERO: ClassVar["Rational"]
    ONE: ClassVar["Rational"]
    INF: ClassVar["Rational"]
    NEG_INF: ClassVar["Rational"]

    def __init__(self, numerator: int, denominator: int = 1) -> None:
        numerator = operator.index(numerator)
        denominator = operator.index(denominator)
        if numerator == 0 and denominator == 0:
            raise ZeroDivisionError("cannot divide 0 by 0")

        a = abs(numerator)
        b = abs(denominator)
        sign = _sign_nonzero(numerator) * _sign_nonzero(denominator)
        d = math.gcd(a, b)
        object.__setattr__(self, "numerator", sign * (a // d))
        object.__setattr__(self, "denominator", b // d)

    @classmethod
    def parse(cls, value: Union[str, int, "Rational"]) -> "Rational":
        """Parse "3/4", "-2", "inf" or an int into a Rational."""
        if isinstance(value, Rational):
            return value
        if isinstance(value, bool):
            raise ValueError(f"not a rational: {value!r}")
        if isinstance(value, int):
            return cls(value)
        if not isinstance(value, str):
            raise ValueError(f"not a rational: {value!r}")

        text = value.strip().lower()
        if text in ("inf", "+inf"):
            return cls.INF
        if text == "-inf":
            return cls.NEG_INF
        num, sep, den = text.partition("/")
        try:
            if not sep:
                return cls(int(num))
            return cls(int(num), int(den))
        except ValueError:
            raise ValueError(f"not a rational: {value!r}") from None

    @staticmethod
    def _coerce(other: Union["Rational", int]) -> "Rational":
        if isinstance(other, Rational):
            return other
        if isinstance(other, int) and not isinstance(other, bool):
            return Rational(other)
        return NotImplemented  # type: ignore[return-value]

    # -- derived values ---------------------------------------------------

    @property
    def is_infinite(self) -> bool:
        return self.denominator == 0

    @property
    def quotient(self) -> int:
        """Floor of numerator / denominator."""
        return self.numerator // self.denominator

    @property
    def remainder(self) -> int:
        """Integer remainder of numerator / denominator, always in [0, denominator)."""
        return self.numerator % self.denominator

    @property
    def real(self) -> float:
        """Floating point approximation. Only for display and audio clocks."""
        if self.denominator == 0:
            return math.inf if self.numerator > 0 else -math.inf
        return self.numerator / self.denominator

    @property
    def reciprocal(self) -> "Rational":
        return Rational(self.denominator, self.numerator)

    # -- arithmetic -------------------------------------------------------

    def add(self, other: "Rational") -> "Rational":
        a, b = self.numerator, self.denominator
        c, d = other.numerator, other.denominator
        return Rational(a * d + b * c, b * d)

    def sub(self, other: "Rational") -> "Rational":
        a, b = self.numerator, self.denominator
        c, d = other.numerator, other.denominator
        return Rational(a * d - b * c, b * d)

    def mul(self, other: "Rational") -> "Rational":
        return Rational(self.numerator * other.numerator, self.denominator * other.denominator)

    def div(self, other: "Rational") -> "Rational":
        return Rational(self.numerator * other.denominator, self.denominator * other.numerator)

    def max(self, other: "Rational") -> "Rational":
        """Return the larger of the two values (self on ties)."""
        if self.ge(other):
            return self
        return other

    # -- comparison -------------------------------------------------------

    def _rank(self) -> int:
        # -1 for NEG_INF, 1 for INF, 0 for finite values
        if self.denominator != 0:
            return 0
        return 1 if self.numerator > 0 else -1

    def equals(self, other: "Rational") -> bool:
        # Lowest terms makes this a field-by-field check
        return self.numerator == other.numerator and self.denominator == other.denominator

    def lt(self, other: "Rational") -> bool:
        """Strict less-than. The other comparisons are defined from this one."""
        r1, r2 = self._rank(), other._rank()
        if r1 or r2:
            return r1 < r2
        # a/b < c/d  <=>  ad < cb since denominators are positive
        return self.numerator * other.denominator < other.numerator * self.denominator

    def gt(self, other: "Rational") -> bool:
        return other.lt(self)

    def le(self, other: "Rational") -> bool:
        return not self.gt(other)

    def ge(self, other: "Rational") -> bool:
        return not self.lt(other)

    # -- Python protocol --------------------------------------------------

    def __add__(self, other):
        other = self._coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return self.add(other)

    __radd__ = __add__

    def __sub__(self, other):
        other = self._coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return self.sub(other)

    def __rsub__(self, other):
        other = self._coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return other.sub(self)

    def __mul__(self, other):
        other = self._coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return self.mul(other)

    __rmul__ = __mul__

    def __truediv__(self, other):
        other = self._coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return self.div(other)

    def __rtruediv__(self, other):
        other = self._coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return other.div(self)

    def __neg__(self) -> "Rational":
        return Rational(-self.numerator, self.denominator)

    def __abs__(self) -> "Rational":
        return Rational(abs(self.numerator), self.denominator)

    def __lt__(self, other):
        other = self._coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return self.lt(other)

    def __gt__(self, other):
        other = self._coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return self.gt(other)

    def __le__(self, other):
        other = self._coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return self.le(other)

    def __ge__(self, other):
        other = self._coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return self.ge(other)

    def __eq__(self, other):
        other = self._coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return self.equals(other)

    def __hash__(self) -> int:
        # Whole numbers hash like the matching int
        if self.denominator == 1:
            return hash(self.numerator)
        return hash((self.numerator, self.denominator))

    def __float__(self) -> float:
        return self.real

    def __str__(self) -> str:
        if self.denominator == 0:
            return "inf" if self.numerator > 0 else "-inf"
        if self.denominator == 1:
            return str(self.numerator)
        return f"{self.numerator}/{self.denominator}"


Rational.ZERO = Rational(0, 1)
Rational.ONE = Rational(1, 1)
Rational.INF = Rational(1, 0)
Rational.NEG_INF = Rational(-1, 0)

ZERO = Rational.ZERO
ONE = Rational.ONE
INF = Rational.INF
NEG_INF = Rational.NEG_INF
