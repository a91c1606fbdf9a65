"""Conversions between BigInteger and digit arrays or strings in any radix.

Radices 2 to 36 print their digits with the alphabet 0-9a-z. Every other radix
prints each digit as its decimal value inside angle brackets, e.g. 100 in
radix 100 is "<1><0><0>". Radix 0 can only represent zero and radix 1 (or -1)
is a unary tally of ones.
"""

from typing import List, NamedTuple, Sequence

import jax
import jax.numpy as jnp
import numpy as np

from jaxint import big_integer
from jaxint import errors
from jaxint import limbs
from jaxint import types
from jaxint import util

BigInteger = big_integer.BigInteger
NumberLike = big_integer.NumberLike
coerce = big_integer.coerce

_MAX_ALPHABET_RADIX = len(util.DIGIT_ALPHABET)
_DECIMAL_DIGITS = frozenset("0123456789")


class ArrayRepresentation(NamedTuple):
  """Digits of a magnitude, most significant first, and its sign."""

  value: List[int]
  is_negative: bool


def _validated_radix(radix: NumberLike) -> BigInteger:
  radix = coerce(radix)
  if radix.is_negative() and not radix.is_unit():
    raise errors.InvalidRadixError(f"Unsupported negative radix {radix}")
  return radix


def _check_digits(digits: Sequence[BigInteger], radix: BigInteger, error):
  """Raises error unless every digit is representable in radix."""
  if radix.is_zero():
    if any(not d.is_zero() for d in digits):
      raise error("Radix 0 can only hold zero digits")
    return
  for d in digits:
    if d.is_negative():
      raise error(f"Negative digit {d} in radix {radix}")
    if radix.is_unit():
      if d.compare(big_integer.ONE) == types.Ordering.GREATER_THAN:
        raise error(f"{d} is not a valid digit in radix {radix}")
    elif d.compare(radix) != types.Ordering.LESS_THAN:
      raise error(f"{d} is not a valid digit in radix {radix}")


def to_array(value: NumberLike, radix: NumberLike) -> ArrayRepresentation:
  """Digits of |value| in radix by repeated division, most significant first.

  Args:
    value: the value to convert.
    radix: the radix; at least 2, or 0, 1 or -1 for the special cases.

  Returns:
    The digits and the sign flag. Zero is [0] and never negative.

  Raises:
    InvalidRadixError: for radix 0 with a non-zero value, or radix < -1.
  """
  value, radix = coerce(value), _validated_radix(radix)
  if radix.is_zero():
    if value.is_zero():
      return ArrayRepresentation([0], False)
    raise errors.InvalidRadixError(
        f"Cannot convert nonzero number {value} to radix 0"
    )
  if value.is_zero():
    return ArrayRepresentation([0], False)
  if radix.is_unit():
    return ArrayRepresentation([1] * int(value.abs()), value.is_negative())

  magnitude = value.magnitude
  digits = []
  if len(radix.magnitude) == 1:
    small_radix = radix.magnitude[0]
    while not limbs.is_zero(magnitude):
      magnitude, digit = limbs.divmod_small(magnitude, small_radix)
      digits.append(digit)
  else:
    while not limbs.is_zero(magnitude):
      magnitude, remainder = limbs.divmod_limbs(magnitude, radix.magnitude)
      digits.append(util.limbs_to_int(remainder))
  digits.reverse()
  return ArrayRepresentation(digits, value.is_negative())


def from_array(
    digits: Sequence[NumberLike], radix: NumberLike, is_negative: bool = False
) -> BigInteger:
  """Horner evaluation of digits (most significant first) in radix.

  A negative flag on an all-zero array still yields canonical zero.

  Args:
    digits: the digits, each in [0, radix), or in {0, 1} for radix 1 and -1.
    radix: the radix.
    is_negative: whether to negate the result.

  Returns:
    The value the digits spell.

  Raises:
    InvalidRadixError: if a digit does not fit the radix.
  """
  radix = _validated_radix(radix)
  digits = [coerce(d) for d in digits]
  _check_digits(digits, radix, errors.InvalidRadixError)

  radix_magnitude = radix.magnitude
  magnitude = limbs.ZERO
  for d in digits:
    magnitude = limbs.add(
        limbs.multiply(magnitude, radix_magnitude), d.magnitude
    )
  sign = types.Sign.NEGATIVE if is_negative else types.Sign.POSITIVE
  return big_integer.from_parts(sign, magnitude)


def to_string(value: NumberLike, radix: NumberLike = 10) -> str:
  value, radix = coerce(value), _validated_radix(radix)
  if radix == 10:
    return str(value)
  representation = to_array(value, radix)
  if radix.compare(2) != types.Ordering.LESS_THAN and (
      radix.compare(_MAX_ALPHABET_RADIX) != types.Ordering.GREATER_THAN
  ):
    text = "".join(util.DIGIT_ALPHABET[d] for d in representation.value)
  else:
    text = "".join(f"<{d}>" for d in representation.value)
  return ("-" if representation.is_negative else "") + text


def _tokenize(text: str, body: str) -> List[BigInteger]:
  """Splits body into digit values; bracketed decimals and 0-9a-z."""
  digits = []
  i = 0
  while i < len(body):
    c = body[i]
    if c == "<":
      end = body.find(">", i)
      token = body[i + 1 : end]
      if end < 0 or not token or not set(token) <= _DECIMAL_DIGITS:
        raise errors.InvalidDigitError(f"Malformed bracketed digit in {text!r}")
      digits.append(BigInteger(token))
      i = end + 1
    elif c in util.DIGIT_ALPHABET:
      digits.append(BigInteger(util.DIGIT_ALPHABET.index(c)))
      i += 1
    else:
      raise errors.InvalidDigitError(f"Invalid character {c!r} in {text!r}")
  return digits


def parse(text: str, radix: NumberLike = 10) -> BigInteger:
  """Parses the output of to_string back into a BigInteger.

  Letters are case-insensitive and bracketed digits are accepted in every
  radix.

  Args:
    text: an optionally signed digit string.
    radix: the radix the digits are written in.

  Returns:
    The parsed value.

  Raises:
    InvalidDigitError: on a malformed string or a digit outside the radix.
    InvalidRadixError: for a radix below -1.
  """
  radix = _validated_radix(radix)
  if radix == 10 and "<" not in text:
    return BigInteger(text)
  body = text.lower()
  is_negative = body.startswith("-")
  if body[:1] in ("+", "-"):
    body = body[1:]
  digits = _tokenize(text, body)
  if not digits:
    raise errors.InvalidDigitError(f"No digits in {text!r}")
  _check_digits(digits, radix, errors.InvalidDigitError)
  return from_array(digits, radix, is_negative)


def to_limb_array(value: NumberLike, array_size=None) -> jax.Array:
  """Exports the magnitude as little-endian uint16 limbs.

  Args:
    value: the value to export; only its magnitude is kept.
    array_size: the size of the array. If None, the array will have the
      minimum size necessary to store the magnitude.

  Returns:
    A JAX array of uint16 limbs.
  """
  magnitude = coerce(value).magnitude
  if array_size is not None:
    if array_size < len(magnitude):
      raise ValueError(
          f"{len(magnitude)} limbs do not fit an array of size {array_size}."
      )
    magnitude = util.pad_limbs(magnitude, array_size)
  return jnp.array(magnitude, dtype=jnp.uint16)


def from_limb_array(array, is_negative: bool = False) -> BigInteger:
  """Imports little-endian limbs, e.g. from to_limb_array."""
  array = np.asarray(array)
  if array.size and not np.issubdtype(array.dtype, np.integer):
    raise ValueError(f"Expected an integer array but got dtype {array.dtype}.")
  elements = array.reshape(-1).tolist()
  if any(not 0 <= e <= util.LIMB_MASK for e in elements):
    raise ValueError(f"Expected uint16 limbs but got: {elements}.")
  sign = types.Sign.NEGATIVE if is_negative else types.Sign.POSITIVE
  return big_integer.from_parts(sign, elements)
