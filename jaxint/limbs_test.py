"""Tests for magnitude arithmetic on limbs."""

import hypothesis
from hypothesis import strategies
from jaxint import limbs
from jaxint import types
from jaxint import util
from absl.testing import absltest
from absl.testing import parameterized
import numpy as np

magnitudes = strategies.integers(min_value=0, max_value=2**600)


def to_limbs(value: int) -> types.Limbs:
  return util.int_to_limbs(value)


def to_int(value: types.Limbs) -> int:
  return util.limbs_to_int(value)


class NormalizeTest(parameterized.TestCase):

  @parameterized.named_parameters(
      dict(testcase_name="_empty", digits=[], expected=(0,)),
      dict(testcase_name="_all_zero", digits=[0, 0, 0], expected=(0,)),
      dict(
          testcase_name="_trailing_zeros", digits=[5, 7, 0, 0], expected=(5, 7)
      ),
      dict(testcase_name="_inner_zeros", digits=[0, 0, 1], expected=(0, 0, 1)),
  )
  def test_normalize(self, digits, expected):
    self.assertEqual(limbs.normalize(digits), expected)

  def test_is_canonical(self):
    self.assertTrue(limbs.is_canonical((0,)))
    self.assertTrue(limbs.is_canonical((0, 1)))
    self.assertFalse(limbs.is_canonical(()))
    self.assertFalse(limbs.is_canonical((1, 0)))
    self.assertFalse(limbs.is_canonical((util.RADIX,)))
    self.assertFalse(limbs.is_canonical((1.0,)))
    self.assertFalse(limbs.is_canonical((np.uint16(1),)))

  def test_bit_length(self):
    self.assertEqual(limbs.bit_length(limbs.ZERO), 0)
    self.assertEqual(limbs.bit_length((1,)), 1)
    self.assertEqual(limbs.bit_length((0, 1)), 17)

  def test_trailing_zero_bits(self):
    self.assertEqual(limbs.trailing_zero_bits((1,)), 0)
    self.assertEqual(limbs.trailing_zero_bits((8,)), 3)
    self.assertEqual(limbs.trailing_zero_bits((0, 0, 2)), 33)


class ArithmeticTest(parameterized.TestCase):

  @hypothesis.given(magnitudes, magnitudes)
  @hypothesis.settings(deadline=None)
  def test_compare_matches_int(self, a: int, b: int):
    expected = (a > b) - (a < b)
    self.assertEqual(int(limbs.compare(to_limbs(a), to_limbs(b))), expected)

  @hypothesis.given(magnitudes, magnitudes)
  @hypothesis.settings(deadline=None)
  def test_add_matches_int(self, a: int, b: int):
    self.assertEqual(to_int(limbs.add(to_limbs(a), to_limbs(b))), a + b)

  @hypothesis.given(magnitudes, magnitudes)
  @hypothesis.settings(deadline=None)
  def test_subtract_matches_int(self, a: int, b: int):
    a, b = max(a, b), min(a, b)
    result = limbs.subtract(to_limbs(a), to_limbs(b))
    self.assertTrue(limbs.is_canonical(result))
    self.assertEqual(to_int(result), a - b)

  @hypothesis.given(magnitudes, magnitudes)
  @hypothesis.settings(deadline=None)
  def test_multiply_matches_int(self, a: int, b: int):
    result = limbs.multiply(to_limbs(a), to_limbs(b))
    self.assertTrue(limbs.is_canonical(result))
    self.assertEqual(to_int(result), a * b)

  @hypothesis.given(magnitudes)
  @hypothesis.settings(deadline=None)
  def test_square_matches_multiply(self, a: int):
    self.assertEqual(
        limbs.square(to_limbs(a)), limbs.multiply(to_limbs(a), to_limbs(a))
    )

  def test_multiply_all_ones_limbs(self):
    # Largest possible coefficients in the convolution.
    a = 2 ** (16 * 64) - 1
    self.assertEqual(to_int(limbs.multiply(to_limbs(a), to_limbs(a))), a * a)

  @hypothesis.given(
      magnitudes,
      strategies.integers(min_value=0, max_value=util.RADIX - 1),
      strategies.integers(min_value=0, max_value=util.RADIX - 1),
  )
  @hypothesis.settings(deadline=None)
  def test_multiply_small_add(self, a: int, factor: int, addend: int):
    result = limbs.multiply_small_add(to_limbs(a), factor, addend)
    self.assertEqual(to_int(result), a * factor + addend)


class DivisionTest(parameterized.TestCase):

  @hypothesis.given(
      magnitudes, strategies.integers(min_value=1, max_value=util.RADIX - 1)
  )
  @hypothesis.settings(deadline=None)
  def test_divmod_small(self, a: int, divisor: int):
    quotient, remainder = limbs.divmod_small(to_limbs(a), divisor)
    self.assertEqual((to_int(quotient), remainder), divmod(a, divisor))

  @hypothesis.given(
      magnitudes, strategies.integers(min_value=1, max_value=2**400)
  )
  @hypothesis.settings(deadline=None)
  def test_divmod_matches_int(self, a: int, b: int):
    quotient, remainder = limbs.divmod_limbs(to_limbs(a), to_limbs(b))
    self.assertTrue(limbs.is_canonical(quotient))
    self.assertTrue(limbs.is_canonical(remainder))
    self.assertEqual((to_int(quotient), to_int(remainder)), divmod(a, b))

  @parameterized.named_parameters(
      # Operands that drive the trial quotient digit one too high, so the
      # add-back step runs.
      dict(
          testcase_name="_add_back_three_limbs",
          dividend=(0x0000, 0xFFFE, 0x8000),
          divisor=(0xFFFF, 0x8000),
      ),
      dict(
          testcase_name="_add_back_four_limbs",
          dividend=(0x0000, 0x0000, 0x8000, 0x7FFF),
          divisor=(0x0001, 0x0000, 0x8000),
      ),
      dict(
          testcase_name="_add_back_top_limb",
          dividend=(0x0000, 0xFFFE, 0x0000, 0x8000),
          divisor=(0xFFFF, 0x0000, 0x8000),
      ),
      dict(
          testcase_name="_unnormalized_divisor",
          dividend=(0x0003, 0x0000, 0x8000),
          divisor=(0x0001, 0x0000, 0x2000),
      ),
      dict(
          testcase_name="_equal_operands",
          dividend=(0x1234, 0x5678),
          divisor=(0x1234, 0x5678),
      ),
      dict(
          testcase_name="_dividend_smaller",
          dividend=(0x1234, 0x0001),
          divisor=(0x1234, 0x5678),
      ),
  )
  def test_divmod_edge_cases(self, dividend, divisor):
    quotient, remainder = limbs.divmod_limbs(dividend, divisor)
    self.assertEqual(
        (to_int(quotient), to_int(remainder)),
        divmod(to_int(dividend), to_int(divisor)),
    )


class ShiftTest(parameterized.TestCase):

  @hypothesis.given(magnitudes, strategies.integers(min_value=0, max_value=200))
  @hypothesis.settings(deadline=None)
  def test_shift_left(self, a: int, bits: int):
    self.assertEqual(to_int(limbs.shift_left(to_limbs(a), bits)), a << bits)

  @hypothesis.given(magnitudes, strategies.integers(min_value=0, max_value=700))
  @hypothesis.settings(deadline=None)
  def test_shift_right(self, a: int, bits: int):
    result = limbs.shift_right(to_limbs(a), bits)
    self.assertTrue(limbs.is_canonical(result))
    self.assertEqual(to_int(result), a >> bits)


if __name__ == "__main__":
  absltest.main()
