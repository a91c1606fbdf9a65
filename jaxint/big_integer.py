"""Arbitrary precision integer value type.

A BigInteger is a sign and a canonical magnitude of 16-bit limbs. Instances
are immutable: every operation builds a new value and never touches its
operands, so they can be shared freely between threads.

Division follows truncating semantics: the quotient is rounded toward zero
and the remainder takes the sign of the dividend, i.e. -7 / 2 == -3 and
-7 % 2 == -1. The `/` and `%` operators follow the same rule.
"""

import numbers
from typing import NamedTuple, Union

from jaxint import errors
from jaxint import limbs
from jaxint import types
from jaxint import util

Sign = types.Sign
Ordering = types.Ordering

_DECIMAL_DIGITS = frozenset("0123456789")


class DivModResult(NamedTuple):
  quotient: "BigInteger"
  remainder: "BigInteger"


def _make(sign: Sign, magnitude: types.Limbs) -> "BigInteger":
  """Builds a BigInteger from already canonical parts."""
  if limbs.is_zero(magnitude):
    sign = Sign.ZERO
  obj = object.__new__(BigInteger)
  obj._sign = sign
  obj._magnitude = magnitude
  assert obj._is_canonical(), f"non-canonical value {sign!r} {magnitude!r}"
  return obj


def _parse_decimal(text: str) -> "BigInteger":
  """Parses an optionally signed run of decimal digits."""
  body = text
  sign = Sign.POSITIVE
  if body[:1] in ("+", "-"):
    if body[0] == "-":
      sign = Sign.NEGATIVE
    body = body[1:]
  if not body or not set(body) <= _DECIMAL_DIGITS:
    raise errors.InvalidDigitError(f"Invalid decimal integer: {text!r}")

  chunk = util.DECIMAL_CHUNK_DIGITS
  head = len(body) % chunk or chunk
  magnitude = limbs.from_small(int(body[:head]))
  for start in range(head, len(body), chunk):
    magnitude = limbs.multiply_small_add(
        magnitude, util.DECIMAL_CHUNK, int(body[start : start + chunk])
    )
  return _make(sign, magnitude)


def _format_decimal(magnitude: types.Limbs) -> str:
  chunks = []
  while not limbs.is_zero(magnitude):
    magnitude, chunk = limbs.divmod_small(magnitude, util.DECIMAL_CHUNK)
    chunks.append(chunk)
  if not chunks:
    return "0"
  width = util.DECIMAL_CHUNK_DIGITS
  return str(chunks[-1]) + "".join(
      f"{chunk:0{width}d}" for chunk in reversed(chunks[:-1])
  )


class BigInteger:
  """An integer that supports arbitrary precision arithmetic."""

  __slots__ = ("_sign", "_magnitude")

  def __init__(self, value: "NumberLike" = 0) -> None:
    if isinstance(value, BigInteger):
      sign, magnitude = value._sign, value._magnitude
    elif isinstance(value, numbers.Integral):
      value = int(value)
      # Take the magnitude first, so the most negative machine value needs no
      # special case.
      sign = Sign((value > 0) - (value < 0))
      magnitude = util.int_to_limbs(-value if value < 0 else value)
    elif isinstance(value, str):
      parsed = _parse_decimal(value)
      sign, magnitude = parsed._sign, parsed._magnitude
    else:
      raise TypeError(
          f"Unsupported type for BigInteger initialization: {type(value)}"
      )
    self._sign = sign
    self._magnitude = magnitude

  def _is_canonical(self) -> bool:
    if not limbs.is_canonical(self._magnitude):
      return False
    return (self._sign == Sign.ZERO) == limbs.is_zero(self._magnitude)

  @property
  def sign(self) -> Sign:
    return self._sign

  @property
  def magnitude(self) -> types.Limbs:
    return self._magnitude

  # Predicates

  def is_zero(self) -> bool:
    return self._sign == Sign.ZERO

  def is_positive(self) -> bool:
    return self._sign == Sign.POSITIVE

  def is_negative(self) -> bool:
    return self._sign == Sign.NEGATIVE

  def is_even(self) -> bool:
    return self._magnitude[0] & 1 == 0

  def is_odd(self) -> bool:
    return self._magnitude[0] & 1 == 1

  def is_unit(self) -> bool:
    """True for 1 and -1."""
    return self._magnitude == limbs.ONE

  def is_divisible_by(self, other: "NumberLike") -> bool:
    other = coerce(other)
    if other.is_zero():
      return self.is_zero()
    return self.mod(other).is_zero()

  def bit_length(self) -> int:
    """Bits needed to represent the magnitude; zero has bit length 0."""
    return limbs.bit_length(self._magnitude)

  # Comparison

  def compare_abs(self, other: "NumberLike") -> Ordering:
    return limbs.compare(self._magnitude, coerce(other)._magnitude)

  def compare(self, other: "NumberLike") -> Ordering:
    """Sign-aware comparison: negative < zero < positive."""
    other = coerce(other)
    if self._sign != other._sign:
      return (
          Ordering.GREATER_THAN
          if self._sign > other._sign
          else Ordering.LESS_THAN
      )
    order = limbs.compare(self._magnitude, other._magnitude)
    if self._sign == Sign.NEGATIVE:
      return order.reverse()
    return order

  # Arithmetic

  def negate(self) -> "BigInteger":
    return _make(-self._sign, self._magnitude)

  def abs(self) -> "BigInteger":
    return _make(Sign.POSITIVE, self._magnitude)

  def add(self, other: "NumberLike") -> "BigInteger":
    other = coerce(other)
    if self.is_zero():
      return other
    if other.is_zero():
      return self
    if self._sign == other._sign:
      return _make(self._sign, limbs.add(self._magnitude, other._magnitude))
    order = limbs.compare(self._magnitude, other._magnitude)
    if order == Ordering.EQUAL_TO:
      return ZERO
    if order == Ordering.GREATER_THAN:
      return _make(
          self._sign, limbs.subtract(self._magnitude, other._magnitude)
      )
    return _make(
        other._sign, limbs.subtract(other._magnitude, self._magnitude)
    )

  def subtract(self, other: "NumberLike") -> "BigInteger":
    return self.add(coerce(other).negate())

  def next(self) -> "BigInteger":
    return self.add(ONE)

  def prev(self) -> "BigInteger":
    return self.add(MINUS_ONE)

  def multiply(self, other: "NumberLike") -> "BigInteger":
    other = coerce(other)
    return _make(
        self._sign * other._sign,
        limbs.multiply(self._magnitude, other._magnitude),
    )

  def square(self) -> "BigInteger":
    return _make(
        self._sign * self._sign, limbs.square(self._magnitude)
    )

  def divmod(self, divisor: "NumberLike") -> DivModResult:
    """Truncating division; the remainder takes the sign of the dividend.

    Args:
      divisor: the value to divide by.

    Returns:
      A DivModResult with self == quotient * divisor + remainder and
      |remainder| < |divisor|.

    Raises:
      DivisionByZeroError: if divisor is zero.
    """
    divisor = coerce(divisor)
    if divisor.is_zero():
      raise errors.DivisionByZeroError(f"Cannot divide {self} by zero")
    quotient, remainder = limbs.divmod_limbs(
        self._magnitude, divisor._magnitude
    )
    return DivModResult(
        _make(self._sign * divisor._sign, quotient),
        _make(self._sign, remainder),
    )

  def divide(self, divisor: "NumberLike") -> "BigInteger":
    return self.divmod(divisor).quotient

  def mod(self, divisor: "NumberLike") -> "BigInteger":
    return self.divmod(divisor).remainder

  # Python protocol

  def __add__(self, other):
    if isinstance(other, (BigInteger, int)):
      return self.add(other)
    return NotImplemented

  __radd__ = __add__

  def __sub__(self, other):
    if isinstance(other, (BigInteger, int)):
      return self.subtract(other)
    return NotImplemented

  def __rsub__(self, other):
    if isinstance(other, int):
      return BigInteger(other).subtract(self)
    return NotImplemented

  def __mul__(self, other):
    if isinstance(other, (BigInteger, int)):
      return self.multiply(other)
    return NotImplemented

  __rmul__ = __mul__

  def __truediv__(self, other):
    if isinstance(other, (BigInteger, int)):
      return self.divide(other)
    return NotImplemented

  def __rtruediv__(self, other):
    if isinstance(other, int):
      return BigInteger(other).divide(self)
    return NotImplemented

  def __mod__(self, other):
    if isinstance(other, (BigInteger, int)):
      return self.mod(other)
    return NotImplemented

  def __rmod__(self, other):
    if isinstance(other, int):
      return BigInteger(other).mod(self)
    return NotImplemented

  def __divmod__(self, other):
    if isinstance(other, (BigInteger, int)):
      return tuple(self.divmod(other))
    return NotImplemented

  def __neg__(self):
    return self.negate()

  def __pos__(self):
    return self

  def __abs__(self):
    return self.abs()

  def __eq__(self, other):
    if isinstance(other, (BigInteger, int)):
      other = coerce(other)
      return (
          self._sign == other._sign and self._magnitude == other._magnitude
      )
    return NotImplemented

  def __ne__(self, other):
    if isinstance(other, (BigInteger, int)):
      return not self == other
    return NotImplemented

  def __lt__(self, other):
    if isinstance(other, (BigInteger, int)):
      return self.compare(other) == Ordering.LESS_THAN
    return NotImplemented

  def __le__(self, other):
    if isinstance(other, (BigInteger, int)):
      return self.compare(other) != Ordering.GREATER_THAN
    return NotImplemented

  def __gt__(self, other):
    if isinstance(other, (BigInteger, int)):
      return self.compare(other) == Ordering.GREATER_THAN
    return NotImplemented

  def __ge__(self, other):
    if isinstance(other, (BigInteger, int)):
      return self.compare(other) != Ordering.LESS_THAN
    return NotImplemented

  def __hash__(self):
    # Equal to a native int of the same value, so hash like one.
    return hash(int(self))

  def __bool__(self):
    return not self.is_zero()

  def __int__(self):
    return int(self._sign) * util.limbs_to_int(self._magnitude)

  def __str__(self):
    text = _format_decimal(self._magnitude)
    return "-" + text if self.is_negative() else text

  def __repr__(self):
    return f"BigInteger({self})"


NumberLike = Union[str, int, BigInteger]


def coerce(value: NumberLike) -> BigInteger:
  """Normalizes a number-like value into a BigInteger."""
  if isinstance(value, BigInteger):
    return value
  return BigInteger(value)


def from_parts(sign: Sign, magnitude: types.Limbs) -> BigInteger:
  """Builds a BigInteger from a sign and limbs that may need normalizing."""
  return _make(sign, limbs.normalize(magnitude))


def min_of(a: NumberLike, b: NumberLike) -> BigInteger:
  a, b = coerce(a), coerce(b)
  return b if a.compare(b) == Ordering.GREATER_THAN else a


def max_of(a: NumberLike, b: NumberLike) -> BigInteger:
  a, b = coerce(a), coerce(b)
  return a if a.compare(b) == Ordering.GREATER_THAN else b


ZERO = BigInteger(0)
ONE = BigInteger(1)
MINUS_ONE = BigInteger(-1)
TWO = BigInteger(2)
