"""Magnitude arithmetic on little-endian vectors of 16-bit limbs.

Every function takes canonical limbs (no most-significant zero limbs, zero is
the single limb (0,)) and returns canonical limbs. Signs are handled by
big_integer; everything here is unsigned.
"""

import logging
from typing import List, Sequence, Tuple

import numpy as np

from jaxint import types
from jaxint import util

BASE = util.BASE
RADIX = util.RADIX
LIMB_MASK = util.LIMB_MASK

ZERO: types.Limbs = (0,)
ONE: types.Limbs = (1,)


def normalize(digits: Sequence[int]) -> types.Limbs:
  """Strips most-significant zero limbs, keeping at least one limb."""
  end = len(digits)
  while end > 1 and digits[end - 1] == 0:
    end -= 1
  if end == 0:
    return ZERO
  return tuple(digits[:end])


def is_canonical(digits: Sequence[int]) -> bool:
  if not digits:
    return False
  if len(digits) > 1 and digits[-1] == 0:
    return False
  return all(type(d) is int and 0 <= d <= LIMB_MASK for d in digits)


def is_zero(a: types.Limbs) -> bool:
  return len(a) == 1 and a[0] == 0


def from_small(value: int) -> types.Limbs:
  """Limbs for a word-sized non-negative value."""
  return util.int_to_limbs(value)


def bit_length(a: types.Limbs) -> int:
  if is_zero(a):
    return 0
  return (len(a) - 1) * BASE + a[-1].bit_length()


def trailing_zero_bits(a: types.Limbs) -> int:
  """Number of trailing zero bits of a non-zero magnitude."""
  assert not is_zero(a)
  count = 0
  for limb in a:
    if limb:
      return count + ((limb & -limb).bit_length() - 1)
    count += BASE
  return count


def compare(a: types.Limbs, b: types.Limbs) -> types.Ordering:
  """Compares by length first, then limb by limb from the top."""
  if len(a) != len(b):
    return (
        types.Ordering.GREATER_THAN
        if len(a) > len(b)
        else types.Ordering.LESS_THAN
    )
  for i in range(len(a) - 1, -1, -1):
    if a[i] != b[i]:
      return (
          types.Ordering.GREATER_THAN
          if a[i] > b[i]
          else types.Ordering.LESS_THAN
      )
  return types.Ordering.EQUAL_TO


def add(a: types.Limbs, b: types.Limbs) -> types.Limbs:
  if len(a) < len(b):
    a, b = b, a
  result = [0] * (len(a) + 1)
  carry = 0
  for i in range(len(a)):
    s = a[i] + (b[i] if i < len(b) else 0) + carry
    result[i] = s & LIMB_MASK
    carry = s >> BASE
  result[len(a)] = carry
  return normalize(result)


def subtract(a: types.Limbs, b: types.Limbs) -> types.Limbs:
  """Computes a - b. Requires a >= b."""
  assert compare(a, b) != types.Ordering.LESS_THAN
  result = [0] * len(a)
  borrow = 0
  for i in range(len(a)):
    s = a[i] - (b[i] if i < len(b) else 0) - borrow
    if s < 0:
      s += RADIX
      borrow = 1
    else:
      borrow = 0
    result[i] = s
  assert borrow == 0
  return normalize(result)


def _propagate_carries(coefficients: Sequence[int], size: int) -> types.Limbs:
  """Folds convolution coefficients back into limbs of a size-limb buffer."""
  result = [0] * size
  carry = 0
  for i, coefficient in enumerate(coefficients):
    total = int(coefficient) + carry
    result[i] = total & LIMB_MASK
    carry = total >> BASE
  i = len(coefficients)
  while carry:
    result[i] = carry & LIMB_MASK
    carry >>= BASE
    i += 1
  return normalize(result)


def multiply(a: types.Limbs, b: types.Limbs) -> types.Limbs:
  """Schoolbook product, computed as the convolution of the limb vectors.

  Each coefficient of the convolution is a sum of at most min(len(a), len(b))
  products of two 16-bit limbs, so it fits the uint64 accumulator.

  Args:
    a: the first factor.
    b: the second factor.

  Returns:
    The canonical limbs of a * b.
  """
  if is_zero(a) or is_zero(b):
    return ZERO
  if len(a) == 1 and len(b) == 1:
    return normalize([(a[0] * b[0]) & LIMB_MASK, (a[0] * b[0]) >> BASE])
  coefficients = np.convolve(
      np.asarray(a, dtype=util.ACCUMULATOR_DTYPE),
      np.asarray(b, dtype=util.ACCUMULATOR_DTYPE),
  )
  return _propagate_carries(coefficients.tolist(), len(a) + len(b))


def square(a: types.Limbs) -> types.Limbs:
  if is_zero(a):
    return ZERO
  vector = np.asarray(a, dtype=util.ACCUMULATOR_DTYPE)
  return _propagate_carries(np.convolve(vector, vector).tolist(), 2 * len(a))


def multiply_small_add(
    a: types.Limbs, factor: int, addend: int = 0
) -> types.Limbs:
  """Computes a * factor + addend for word-sized factor and addend."""
  assert 0 <= factor < RADIX and 0 <= addend < RADIX
  result = [0] * (len(a) + 1)
  carry = addend
  for i, limb in enumerate(a):
    product = limb * factor + carry
    result[i] = product & LIMB_MASK
    carry = product >> BASE
  result[len(a)] = carry
  return normalize(result)


def divmod_small(a: types.Limbs, divisor: int) -> Tuple[types.Limbs, int]:
  """Short division by a single-limb divisor."""
  assert 0 < divisor < RADIX
  quotient = [0] * len(a)
  remainder = 0
  for i in range(len(a) - 1, -1, -1):
    current = (remainder << BASE) | a[i]
    quotient[i] = current // divisor
    remainder = current % divisor
  return normalize(quotient), remainder


def _shift_into(a: Sequence[int], shift: int) -> List[int]:
  """Shifts left by shift < BASE bits into a buffer one limb longer."""
  result = [0] * (len(a) + 1)
  carry = 0
  for i, limb in enumerate(a):
    value = (limb << shift) | carry
    result[i] = value & LIMB_MASK
    carry = value >> BASE
  result[len(a)] = carry
  return result


def _long_divide(
    dividend: types.Limbs, divisor: types.Limbs
) -> Tuple[types.Limbs, types.Limbs]:
  """Knuth's algorithm D for a divisor of at least two limbs.

  Both operands are shifted so the top limb of the divisor has its high bit
  set. After the two-limb correction the trial quotient digit is at most one
  above the true digit, and the add-back step fixes that case.

  Args:
    dividend: the magnitude to divide.
    divisor: the magnitude to divide by, len(divisor) >= 2.

  Returns:
    A tuple of the quotient and remainder magnitudes.
  """
  shift = BASE - divisor[-1].bit_length()
  v = _shift_into(divisor, shift)[: len(divisor)]
  u = _shift_into(dividend, shift)
  n = len(v)
  m = len(dividend) - n
  v_top = v[-1]
  v_next = v[-2]
  quotient = [0] * (m + 1)

  for j in range(m, -1, -1):
    numerator = (u[j + n] << BASE) | u[j + n - 1]
    q_hat, r_hat = divmod(numerator, v_top)
    while q_hat >= RADIX or q_hat * v_next > ((r_hat << BASE) | u[j + n - 2]):
      q_hat -= 1
      r_hat += v_top
      if r_hat >= RADIX:
        break

    # Multiply and subtract q_hat * v from the current window of u.
    carry = 0
    borrow = 0
    for i in range(n):
      product = q_hat * v[i] + carry
      carry = product >> BASE
      diff = u[i + j] - (product & LIMB_MASK) - borrow
      u[i + j] = diff & LIMB_MASK
      borrow = 1 if diff < 0 else 0
    diff = u[j + n] - carry - borrow
    u[j + n] = diff & LIMB_MASK

    if diff < 0:
      # q_hat was one too large; add the divisor back.
      q_hat -= 1
      carry = 0
      for i in range(n):
        total = u[i + j] + v[i] + carry
        u[i + j] = total & LIMB_MASK
        carry = total >> BASE
      u[j + n] = (u[j + n] + carry) & LIMB_MASK
    quotient[j] = q_hat

  remainder = shift_right(normalize(u[:n]), shift)
  return normalize(quotient), remainder


def divmod_limbs(
    dividend: types.Limbs, divisor: types.Limbs
) -> Tuple[types.Limbs, types.Limbs]:
  """Floor division of magnitudes. The divisor must be non-zero."""
  assert not is_zero(divisor)
  if compare(dividend, divisor) == types.Ordering.LESS_THAN:
    return ZERO, dividend
  if len(divisor) == 1:
    quotient, remainder = divmod_small(dividend, divisor[0])
    return quotient, (remainder,)
  logging.debug(
      "long division of %d limbs by %d limbs", len(dividend), len(divisor)
  )
  return _long_divide(dividend, divisor)


def shift_left(a: types.Limbs, bits: int) -> types.Limbs:
  assert bits >= 0
  if is_zero(a) or bits == 0:
    return a
  limb_shift, bit_shift = divmod(bits, BASE)
  return normalize([0] * limb_shift + _shift_into(a, bit_shift))


def shift_right(a: types.Limbs, bits: int) -> types.Limbs:
  assert bits >= 0
  if bits == 0:
    return a
  limb_shift, bit_shift = divmod(bits, BASE)
  if limb_shift >= len(a):
    return ZERO
  source = a[limb_shift:]
  result = [0] * len(source)
  for i, limb in enumerate(source):
    upper = source[i + 1] if i + 1 < len(source) else 0
    result[i] = (
        (limb >> bit_shift) | (upper << (BASE - bit_shift))
    ) & LIMB_MASK
  return normalize(result)
