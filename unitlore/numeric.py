"""Numbers that are either exact rationals or machine floats."""

from __future__ import annotations

import math
from dataclasses import dataclass
from fractions import Fraction

_DIGIT_CHARS = "0123456789abcdefghijklmnopqrstuvwxyz"
_I64_MIN = -(2**63)
_I64_MAX = 2**63 - 1
_I64_LIMIT_AS_FLOAT = float(_I64_MAX)
_POWER_OF_TWO_BASES = (2, 8, 16, 32)


@dataclass(frozen=True)
class Digits:
    """Output precision for formatting.

    The default picks six significant digits and may switch to scientific
    notation; ``full_int`` always prints the whole integer part; ``count``
    prints that many digits past the integer part.
    """

    count: int | None = None
    full_int: bool = False

    def __post_init__(self) -> None:
        if self.count is not None:
            if self.full_int:
                raise ValueError("Digits cannot have both a count and full_int")
            if self.count < 0:
                raise ValueError("digit count must not be negative")

    @property
    def is_default(self) -> bool:
        return self.count is None and not self.full_int


def _size_in_base(value: int, base: int) -> int:
    """Digit count estimate: exact for power-of-two bases, otherwise it may be one too large."""
    value = abs(value)
    if value == 0:
        return 1
    bits = value.bit_length()
    if base & (base - 1) == 0:
        shift = base.bit_length() - 1
        return -(-bits // shift)
    return math.floor(bits * math.log(2) / math.log(base)) + 1


def _fraction_to_float(value: Fraction) -> float:
    try:
        return float(value)
    except OverflowError:
        return math.inf if value > 0 else -math.inf


def _float_div(left: float, right: float) -> float:
    if right == 0:
        if left == 0 or math.isnan(left):
            return math.nan
        return math.copysign(1.0, left) * math.copysign(1.0, right) * math.inf
    return left / right


def _float_rem(left: float, right: float) -> float:
    if right == 0 or math.isinf(left) or math.isnan(left) or math.isnan(right):
        return math.nan
    return math.fmod(left, right)


def _trunc_div(numerator: int, denominator: int) -> int:
    if (numerator < 0) != (denominator < 0):
        return -(abs(numerator) // abs(denominator))
    return abs(numerator) // abs(denominator)


def _coerce(value: object) -> Numeric | None:
    if isinstance(value, Numeric):
        return value
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float, Fraction)):
        return Numeric(value)
    return None


class Numeric:
    """An arbitrary-precision rational or a machine float.

    Mixing the two in arithmetic or comparison yields floats.
    """

    __slots__ = ("_value",)

    def __init__(self, value: Numeric | int | float | Fraction = 0) -> None:
        if isinstance(value, Numeric):
            value = value._value
        if isinstance(value, bool):
            raise TypeError("booleans are not numbers here")
        if isinstance(value, float):
            self._value: Fraction | float = value
        elif isinstance(value, (int, Fraction)):
            self._value = Fraction(value)
        else:
            raise TypeError(f"cannot make a Numeric from {type(value).__name__}")

    @classmethod
    def one(cls) -> Numeric:
        return cls(Fraction(1))

    @classmethod
    def zero(cls) -> Numeric:
        return cls(Fraction(0))

    @property
    def value(self) -> Fraction | float:
        return self._value

    @property
    def is_float(self) -> bool:
        return isinstance(self._value, float)

    def _parity(self, other: Numeric) -> tuple[Fraction | float, Fraction | float, bool]:
        if self.is_float or other.is_float:
            return self.to_float(), other.to_float(), True
        return self._value, other._value, False

    def __add__(self, other: object) -> Numeric:
        rhs = _coerce(other)
        if rhs is None:
            return NotImplemented
        left, right, _ = self._parity(rhs)
        return Numeric(left + right)

    def __radd__(self, other: object) -> Numeric:
        lhs = _coerce(other)
        return NotImplemented if lhs is None else lhs + self

    def __sub__(self, other: object) -> Numeric:
        rhs = _coerce(other)
        if rhs is None:
            return NotImplemented
        left, right, _ = self._parity(rhs)
        return Numeric(left - right)

    def __rsub__(self, other: object) -> Numeric:
        lhs = _coerce(other)
        return NotImplemented if lhs is None else lhs - self

    def __mul__(self, other: object) -> Numeric:
        rhs = _coerce(other)
        if rhs is None:
            return NotImplemented
        left, right, _ = self._parity(rhs)
        return Numeric(left * right)

    def __rmul__(self, other: object) -> Numeric:
        lhs = _coerce(other)
        return NotImplemented if lhs is None else lhs * self

    def __truediv__(self, other: object) -> Numeric:
        rhs = _coerce(other)
        if rhs is None:
            return NotImplemented
        left, right, is_float = self._parity(rhs)
        if is_float:
            return Numeric(_float_div(left, right))
        return Numeric(left / right)

    def __rtruediv__(self, other: object) -> Numeric:
        lhs = _coerce(other)
        return NotImplemented if lhs is None else lhs / self

    def __neg__(self) -> Numeric:
        return Numeric(-self._value)

    def __abs__(self) -> Numeric:
        return Numeric(abs(self._value))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Numeric):
            return NotImplemented
        return self.is_float == other.is_float and self._value == other._value

    def __hash__(self) -> int:
        return hash((self.is_float, self._value))

    def _compare_pair(self, other: object) -> tuple[Fraction | float, Fraction | float] | None:
        rhs = _coerce(other)
        if rhs is None:
            return None
        left, right, _ = self._parity(rhs)
        return left, right

    def __lt__(self, other: object) -> bool:
        pair = self._compare_pair(other)
        return NotImplemented if pair is None else pair[0] < pair[1]

    def __le__(self, other: object) -> bool:
        pair = self._compare_pair(other)
        return NotImplemented if pair is None else pair[0] <= pair[1]

    def __gt__(self, other: object) -> bool:
        pair = self._compare_pair(other)
        return NotImplemented if pair is None else pair[0] > pair[1]

    def __ge__(self, other: object) -> bool:
        pair = self._compare_pair(other)
        return NotImplemented if pair is None else pair[0] >= pair[1]

    def __repr__(self) -> str:
        return f"Numeric({self._value!r})"

    def __str__(self) -> str:
        return self.to_string()[1]

    def div_rem(self, other: Numeric) -> tuple[Numeric, Numeric]:
        """Return the quotient and remainder; rationals truncate toward zero."""
        left, right, is_float = self._parity(other)
        if is_float:
            return Numeric(_float_div(left, right)), Numeric(_float_rem(left, right))
        quotient = left / right
        whole = Fraction(_trunc_div(quotient.numerator, quotient.denominator))
        return Numeric(whole), Numeric(left - right * whole)

    def to_rational(self) -> tuple[int, int]:
        """Return the exact numerator and denominator."""
        value = self._value
        if isinstance(value, float):
            if not math.isfinite(value):
                raise ValueError(f"{value} has no rational value")
            value = Fraction(value)
        return value.numerator, value.denominator

    def to_int(self) -> int | None:
        """Truncate to a 64-bit integer, or None if it does not fit."""
        value = self._value
        if isinstance(value, float):
            if math.isfinite(value) and abs(value) < _I64_LIMIT_AS_FLOAT:
                return int(value)
            return None
        whole = _trunc_div(value.numerator, value.denominator)
        if _I64_MIN <= whole <= _I64_MAX:
            return whole
        return None

    def to_float(self) -> float:
        value = self._value
        if isinstance(value, float):
            return value
        return _fraction_to_float(value)

    def to_string(self, base: int = 10, digits: Digits | None = None) -> tuple[bool, str]:
        """Format in the given base; returns (is_exact, text)."""
        if not 2 <= base <= 36:
            raise ValueError(f"unsupported base {base}, must be from 2 to 36")
        digits = digits if digits is not None else Digits()

        value = self._value
        if isinstance(value, float):
            if math.isnan(value):
                return False, "NaN"
            if math.isinf(value):
                return False, "Inf" if value > 0 else "-Inf"

        negative = self < Numeric.zero()
        rational = abs(Fraction(value))
        num, den = rational.numerator, rational.denominator
        intdigits = _size_in_base(num // den, base)
        no_sci = not digits.is_default or (den == 1 and base in _POWER_OF_TWO_BASES)
        ndigits = 6 if digits.count is None else intdigits + digits.count

        buf = "-" if negative else ""
        cursor = rational / base**intdigits
        n = 0
        zeros = 0
        only_zeros = True
        placed_decimal = False
        while True:
            exact = cursor == 0
            use_sci = not no_sci and intdigits + zeros > 90 // base
            placed_ints = n >= intdigits
            bail = (
                (exact and (placed_ints or use_sci))
                or (n - zeros > ndigits and use_sci)
                or n - zeros > max(intdigits, ndigits)
            )
            if bail and use_sci:
                offset = 0 if n < intdigits else zeros
                body = buf[offset + placed_decimal + negative:]
                body = body[:1] + "." + body[1:]
                if len(body) == 2:
                    body += "0"
                sign = "-" if negative else ""
                return exact, f"{sign}{body}e{intdigits - zeros - 1}"
            if bail:
                return exact, buf
            if n == intdigits:
                buf += "."
                placed_decimal = True
            digit = (cursor.numerator * base // cursor.denominator) % base
            if digit:
                only_zeros = False
            elif only_zeros:
                zeros += 1
            if not (digit == 0 and only_zeros and n < intdigits - 1):
                buf += _DIGIT_CHARS[digit]
            cursor = cursor * base - digit
            n += 1

    def string_repr(
        self, base: int = 10, digits: Digits | None = None
    ) -> tuple[str | None, str | None]:
        """Return (exact text, approximate text); either may be absent."""
        value = self._value
        if isinstance(value, float):
            return None, self.to_string(base, digits)[1]
        exact, text = self.to_string(base, digits)
        if exact:
            return text, None
        num, den = value.numerator, value.denominator
        if den > 1_000 or num > 1_000_000:
            return None, text
        return f"{num}/{den}", text

    def to_parts(self) -> dict[str, str | None]:
        """Serializable form with numerator, denominator and display values."""
        exact, approx = self.string_repr(10, Digits())
        num, den = self.to_rational()
        return {
            "numer": str(num),
            "denom": str(den),
            "exactValue": exact,
            "approxValue": approx,
        }