"""Flat operation table over number-like arguments.

Every argument documented as NumberLike may be a decimal string, a Python int
or a BigInteger. It is coerced once here and the engine only ever sees
canonical BigInteger values.

Engine errors are raised as exceptions. Callers that prefer to branch on a
returned value can wrap any call in `checked`:

  outcome = api.checked(api.divide, 7, 0)
  if not outcome.ok:
    ...  # outcome.error is the DivisionByZeroError
"""

# pylint: disable=redefined-builtin

from typing import Any, Callable, NamedTuple, Optional, Sequence

from jaxint import big_integer
from jaxint import bitwise
from jaxint import conversion
from jaxint import errors
from jaxint import modular
from jaxint import number_theory
from jaxint import random_source
from jaxint import types

BigInteger = big_integer.BigInteger
NumberLike = big_integer.NumberLike
DivModResult = big_integer.DivModResult
ArrayRepresentation = conversion.ArrayRepresentation
Ordering = types.Ordering
coerce = big_integer.coerce


class Outcome(NamedTuple):
  """The value of a call, or the engine error it raised."""

  value: Any
  error: Optional[errors.BigIntegerError]

  @property
  def ok(self) -> bool:
    return self.error is None


def checked(operation: Callable[..., Any], *args, **kwargs) -> Outcome:
  """Runs operation and returns its result or engine error as an Outcome."""
  try:
    return Outcome(operation(*args, **kwargs), None)
  except errors.BigIntegerError as e:
    return Outcome(None, e)


# Construction and conversion


def parse(text: str, radix: NumberLike = 10) -> BigInteger:
  return conversion.parse(text, radix)


def from_array(
    digits: Sequence[NumberLike], radix: NumberLike, is_negative: bool = False
) -> BigInteger:
  return conversion.from_array(digits, radix, is_negative)


def to_array(value: NumberLike, radix: NumberLike) -> ArrayRepresentation:
  return conversion.to_array(value, radix)


def to_string(value: NumberLike, radix: NumberLike = 10) -> str:
  return conversion.to_string(value, radix)


# Comparison


def compare(a: NumberLike, b: NumberLike) -> Ordering:
  return coerce(a).compare(b)


def compare_abs(a: NumberLike, b: NumberLike) -> Ordering:
  return coerce(a).compare_abs(b)


def min(a: NumberLike, b: NumberLike) -> BigInteger:
  return big_integer.min_of(a, b)


def max(a: NumberLike, b: NumberLike) -> BigInteger:
  return big_integer.max_of(a, b)


# Arithmetic


def negate(a: NumberLike) -> BigInteger:
  return coerce(a).negate()


def abs(a: NumberLike) -> BigInteger:
  return coerce(a).abs()


def add(a: NumberLike, b: NumberLike) -> BigInteger:
  return coerce(a).add(b)


def subtract(a: NumberLike, b: NumberLike) -> BigInteger:
  return coerce(a).subtract(b)


def multiply(a: NumberLike, b: NumberLike) -> BigInteger:
  return coerce(a).multiply(b)


def square(a: NumberLike) -> BigInteger:
  return coerce(a).square()


def divmod(dividend: NumberLike, divisor: NumberLike) -> DivModResult:
  return coerce(dividend).divmod(divisor)


def divide(dividend: NumberLike, divisor: NumberLike) -> BigInteger:
  return coerce(dividend).divide(divisor)


def mod(dividend: NumberLike, divisor: NumberLike) -> BigInteger:
  return coerce(dividend).mod(divisor)


def pow(base: NumberLike, exponent: NumberLike) -> BigInteger:
  return modular.pow(base, exponent)


def mod_pow(
    base: NumberLike, exponent: NumberLike, modulus: NumberLike
) -> BigInteger:
  return modular.mod_pow(base, exponent, modulus)


def mod_inv(value: NumberLike, modulus: NumberLike) -> BigInteger:
  return modular.mod_inv(value, modulus)


# Number theory


def gcd(a: NumberLike, b: NumberLike) -> BigInteger:
  return number_theory.gcd(a, b)


def lcm(a: NumberLike, b: NumberLike) -> BigInteger:
  return number_theory.lcm(a, b)


def is_prime(value: NumberLike) -> bool:
  return number_theory.is_prime(value)


def is_probable_prime(
    value: NumberLike, rng: Optional[random_source.RandomSource] = None
) -> bool:
  return number_theory.is_probable_prime(value, rng)


def rand_between(
    low: NumberLike,
    high: NumberLike,
    rng: Optional[random_source.RandomSource] = None,
) -> BigInteger:
  return number_theory.rand_between(low, high, rng)


# Predicates


def is_even(value: NumberLike) -> bool:
  return coerce(value).is_even()


def is_odd(value: NumberLike) -> bool:
  return coerce(value).is_odd()


def is_positive(value: NumberLike) -> bool:
  return coerce(value).is_positive()


def is_negative(value: NumberLike) -> bool:
  return coerce(value).is_negative()


def is_zero(value: NumberLike) -> bool:
  return coerce(value).is_zero()


def is_unit(value: NumberLike) -> bool:
  return coerce(value).is_unit()


# Bitwise


def and_(a: NumberLike, b: NumberLike) -> BigInteger:
  return bitwise.and_(a, b)


def or_(a: NumberLike, b: NumberLike) -> BigInteger:
  return bitwise.or_(a, b)


def xor(a: NumberLike, b: NumberLike) -> BigInteger:
  return bitwise.xor(a, b)


def not_(a: NumberLike) -> BigInteger:
  return bitwise.not_(a)


def shift_left(value: NumberLike, count: NumberLike) -> BigInteger:
  return bitwise.shift_left(value, count)


def shift_right(value: NumberLike, count: NumberLike) -> BigInteger:
  return bitwise.shift_right(value, count)
