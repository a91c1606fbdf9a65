"""Exponentiation and modular inverse on BigInteger."""

# pylint: disable=redefined-builtin

import logging

from jaxint import big_integer
from jaxint import errors
from jaxint import limbs

BigInteger = big_integer.BigInteger
NumberLike = big_integer.NumberLike
coerce = big_integer.coerce


def _exponent_bits(exponent: BigInteger):
  """Yields the bits of a non-negative exponent, least significant first."""
  magnitude = exponent.magnitude
  top = len(magnitude) - 1
  for i, limb in enumerate(magnitude):
    width = limb.bit_length() if i == top else limbs.BASE
    for bit in range(width):
      yield (limb >> bit) & 1


def pow(base: NumberLike, exponent: NumberLike) -> BigInteger:
  """Raises base to exponent by square-and-multiply.

  An exponent of zero gives one for every base, zero included. A negative
  exponent gives zero unless the base is a unit: 1 stays 1 and -1 alternates
  with the parity of the exponent.

  Args:
    base: the value to raise.
    exponent: the power.

  Returns:
    base ** exponent, or zero for a negative exponent on a non-unit base.
  """
  base, exponent = coerce(base), coerce(exponent)
  if exponent.is_zero():
    return big_integer.ONE
  if base.is_zero():
    return big_integer.ZERO
  if base.is_unit():
    if base.is_negative() and exponent.is_odd():
      return big_integer.MINUS_ONE
    return big_integer.ONE
  if exponent.is_negative():
    return big_integer.ZERO

  result = big_integer.ONE
  square = base
  for bit in _exponent_bits(exponent):
    if bit:
      result = result.multiply(square)
    square = square.square()
  return result


def mod_pow(
    base: NumberLike, exponent: NumberLike, modulus: NumberLike
) -> BigInteger:
  """Computes base ** exponent % modulus without forming base ** exponent.

  Every product is reduced right away, so intermediates never grow past
  modulus ** 2. Reduction is truncating, so the result matches
  pow(base, exponent).mod(modulus) including its sign.

  Args:
    base: the value to raise.
    exponent: the non-negative power.
    modulus: the non-zero modulus.

  Returns:
    The reduced power.

  Raises:
    InvalidExponentError: if exponent is negative.
    DivisionByZeroError: if modulus is zero.
  """
  base, exponent, modulus = coerce(base), coerce(exponent), coerce(modulus)
  if exponent.is_negative():
    raise errors.InvalidExponentError(
        f"Cannot take mod_pow with negative exponent {exponent}"
    )
  if modulus.is_zero():
    raise errors.DivisionByZeroError("Cannot take mod_pow with modulus 0")
  logging.debug(
      "mod_pow with a %d-bit exponent and a %d-bit modulus",
      exponent.bit_length(),
      modulus.bit_length(),
  )

  result = big_integer.ONE.mod(modulus)
  square = base.mod(modulus)
  for bit in _exponent_bits(exponent):
    if square.is_zero():
      return big_integer.ZERO
    if bit:
      result = result.multiply(square).mod(modulus)
    square = square.square().mod(modulus)
  return result


def mod_inv(value: NumberLike, modulus: NumberLike) -> BigInteger:
  """Extended Euclid inverse of value modulo |modulus|.

  Args:
    value: the value to invert.
    modulus: the non-zero modulus.

  Returns:
    For non-negative value, the inverse in [0, |modulus|). For negative value,
    the negation of the inverse of |value|.

  Raises:
    DivisionByZeroError: if modulus is zero.
    NotInvertibleError: if value and modulus are not co-prime.
  """
  value, modulus = coerce(value), coerce(modulus)
  if modulus.is_zero():
    raise errors.DivisionByZeroError("Cannot take mod_inv with modulus 0")
  modulus = modulus.abs()

  t, new_t = big_integer.ZERO, big_integer.ONE
  r, new_r = modulus, value.abs()
  while not new_r.is_zero():
    quotient = r.divide(new_r)
    t, new_t = new_t, t.subtract(quotient.multiply(new_t))
    r, new_r = new_r, r.subtract(quotient.multiply(new_r))

  if not r.is_unit():
    raise errors.NotInvertibleError(f"{value} and {modulus} are not co-prime")
  # Reduce so that a modulus of one yields zero.
  t = t.mod(modulus)
  if t.is_negative():
    t = t.add(modulus)
  if value.is_negative():
    return t.negate()
  return t
