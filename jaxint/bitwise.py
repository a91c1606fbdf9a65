"""Bitwise operations on BigInteger through a two's-complement view.

Magnitudes are stored unsigned, so a negative value is first encoded as a
fixed width vector of uint16 limbs in two's complement plus a fill limb that
stands for the infinite run of sign bits above it (0x0000 for non-negative
values, 0xFFFF for negative ones). The limb-wise operation runs on the
encoded vectors and the result is decoded back into sign and magnitude.
"""

from typing import Callable, Tuple

import numpy as np

from jaxint import big_integer
from jaxint import errors
from jaxint import limbs
from jaxint import types
from jaxint import util

BigInteger = big_integer.BigInteger
NumberLike = big_integer.NumberLike
coerce = big_integer.coerce

TwosComplement = Tuple[np.ndarray, int]

_SIGN_FILL = util.LIMB_MASK


def encode_twos_complement(value: BigInteger, width: int) -> TwosComplement:
  """Encodes value as width limbs of two's complement plus a fill limb.

  Args:
    value: the value to encode.
    width: the number of explicit limbs, at least len(value.magnitude).

  Returns:
    A tuple of the uint16 limb vector and the fill limb.
  """
  assert width >= len(value.magnitude)
  if not value.is_negative():
    return (
        np.asarray(util.pad_limbs(value.magnitude, width), util.LIMB_DTYPE),
        0,
    )
  # -x == ~(x - 1)
  decremented = limbs.subtract(value.magnitude, limbs.ONE)
  vector = np.asarray(util.pad_limbs(decremented, width), util.LIMB_DTYPE)
  return np.invert(vector), _SIGN_FILL


def decode_twos_complement(vector: np.ndarray, fill: int) -> BigInteger:
  """Inverse of encode_twos_complement."""
  if fill == 0:
    return big_integer.from_parts(types.Sign.POSITIVE, vector.tolist())
  assert fill == _SIGN_FILL
  # ~y == -(y + 1), so the magnitude is ~vector + 1.
  complemented = limbs.normalize(np.invert(vector).tolist())
  return big_integer.from_parts(
      types.Sign.NEGATIVE, limbs.add(complemented, limbs.ONE)
  )


def _combine(
    a: NumberLike,
    b: NumberLike,
    operation: Callable[[np.ndarray, np.ndarray], np.ndarray],
    fill_operation: Callable[[int, int], int],
) -> BigInteger:
  a, b = coerce(a), coerce(b)
  width = max(len(a.magnitude), len(b.magnitude))
  a_vector, a_fill = encode_twos_complement(a, width)
  b_vector, b_fill = encode_twos_complement(b, width)
  return decode_twos_complement(
      operation(a_vector, b_vector), fill_operation(a_fill, b_fill)
  )


def and_(a: NumberLike, b: NumberLike) -> BigInteger:
  return _combine(a, b, np.bitwise_and, lambda x, y: x & y)


def or_(a: NumberLike, b: NumberLike) -> BigInteger:
  return _combine(a, b, np.bitwise_or, lambda x, y: x | y)


def xor(a: NumberLike, b: NumberLike) -> BigInteger:
  return _combine(a, b, np.bitwise_xor, lambda x, y: x ^ y)


def not_(a: NumberLike) -> BigInteger:
  """Bitwise complement, i.e. -a - 1."""
  a = coerce(a)
  vector, fill = encode_twos_complement(a, len(a.magnitude))
  return decode_twos_complement(np.invert(vector), fill ^ _SIGN_FILL)


def _shift_count(count: NumberLike) -> int:
  count = coerce(count)
  if limbs.compare(count.magnitude, util.int_to_limbs(util.MAX_SHIFT)) == (
      types.Ordering.GREATER_THAN
  ):
    raise errors.ShiftRangeError(
        f"Shift count {count} is outside [-{util.MAX_SHIFT}, {util.MAX_SHIFT}]"
    )
  return int(count)


def _shift_left_by(value: BigInteger, bits: int) -> BigInteger:
  return big_integer.from_parts(
      value.sign, limbs.shift_left(value.magnitude, bits)
  )


def _shift_right_by(value: BigInteger, bits: int) -> BigInteger:
  """Arithmetic right shift, rounding toward negative infinity."""
  if not value.is_negative():
    return big_integer.from_parts(
        value.sign, limbs.shift_right(value.magnitude, bits)
    )
  # In two's complement, -x >> n == ~((x - 1) >> n) == -(((x - 1) >> n) + 1).
  decremented = limbs.subtract(value.magnitude, limbs.ONE)
  shifted = limbs.shift_right(decremented, bits)
  return big_integer.from_parts(
      types.Sign.NEGATIVE, limbs.add(shifted, limbs.ONE)
  )


def shift_left(value: NumberLike, count: NumberLike) -> BigInteger:
  """Shifts left by count bits; a negative count shifts right instead.

  Args:
    value: the value to shift.
    count: the number of bits, within [-MAX_SHIFT, MAX_SHIFT].

  Returns:
    value * 2**count, rounded toward negative infinity for negative counts.

  Raises:
    ShiftRangeError: if |count| exceeds MAX_SHIFT.
  """
  value, bits = coerce(value), _shift_count(count)
  if bits < 0:
    return _shift_right_by(value, -bits)
  return _shift_left_by(value, bits)


def shift_right(value: NumberLike, count: NumberLike) -> BigInteger:
  """Shifts right by count bits; a negative count shifts left instead."""
  value, bits = coerce(value), _shift_count(count)
  if bits < 0:
    return _shift_left_by(value, -bits)
  return _shift_right_by(value, bits)
