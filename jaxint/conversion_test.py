"""Tests for radix conversion and limb array export."""

import hypothesis
from hypothesis import strategies
import jax.numpy as jnp
from jaxint import big_integer
from jaxint import conversion
from jaxint import errors
from jaxint import types
from absl.testing import absltest
from absl.testing import parameterized
import numpy as np

BigInteger = big_integer.BigInteger

values = strategies.integers(min_value=-(2**300), max_value=2**300)


def python_digits(value: int, radix: int):
  value = abs(value)
  digits = []
  while value:
    value, digit = divmod(value, radix)
    digits.append(digit)
  return list(reversed(digits)) or [0]


class ToArrayTest(parameterized.TestCase):

  def test_decimal_digits(self):
    result = conversion.to_array(1000000000, 10)
    self.assertEqual(result.value, [1, 0, 0, 0, 0, 0, 0, 0, 0, 0])
    self.assertFalse(result.is_negative)

  @parameterized.named_parameters(
      dict(testcase_name="_hex", value=-255, radix=16, digits=[15, 15]),
      dict(testcase_name="_binary", value=10, radix=2, digits=[1, 0, 1, 0]),
      dict(
          testcase_name="_multi_limb_radix",
          value=2**45 + 7,
          radix=2**20,
          digits=[32, 0, 7],
      ),
      dict(testcase_name="_zero", value=0, radix=7, digits=[0]),
  )
  def test_to_array(self, value, radix, digits):
    result = conversion.to_array(value, radix)
    self.assertEqual(result.value, digits)
    self.assertEqual(result.is_negative, value < 0)

  @hypothesis.given(
      values, strategies.integers(min_value=2, max_value=2**70)
  )
  @hypothesis.settings(deadline=None)
  def test_to_array_matches_int(self, value: int, radix: int):
    result = conversion.to_array(value, radix)
    self.assertEqual(result.value, python_digits(value, radix))
    self.assertEqual(result.is_negative, value < 0)

  def test_zero_radix(self):
    self.assertEqual(conversion.to_array(0, 0), ([0], False))
    with self.assertRaises(errors.InvalidRadixError):
      conversion.to_array(5, 0)

  @parameterized.parameters(1, -1)
  def test_unit_radix_is_unary(self, radix):
    self.assertEqual(conversion.to_array(-3, radix), ([1, 1, 1], True))
    self.assertEqual(conversion.to_array(0, radix), ([0], False))

  def test_negative_radix_raises(self):
    with self.assertRaises(errors.InvalidRadixError):
      conversion.to_array(5, -2)


class FromArrayTest(parameterized.TestCase):

  @parameterized.named_parameters(
      dict(testcase_name="_decimal", digits=[1, 2, 3], radix=10, expected=123),
      dict(testcase_name="_empty", digits=[], radix=10, expected=0),
      dict(
          testcase_name="_negative", digits=[15, 15], radix=16, expected=-255
      ),
      dict(testcase_name="_unary", digits=[1, 1, 1], radix=-1, expected=3),
      dict(testcase_name="_zero_radix", digits=[0, 0], radix=0, expected=0),
      dict(
          testcase_name="_big_digits",
          digits=["32", 0, 7],
          radix=2**20,
          expected=2**45 + 7,
      ),
  )
  def test_from_array(self, digits, radix, expected):
    is_negative = expected < 0
    result = conversion.from_array(digits, radix, is_negative)
    self.assertEqual(result, expected)

  def test_numpy_digits(self):
    result = conversion.from_array(np.array([1, 2, 3]), np.int64(10))
    self.assertEqual(result, 123)

  def test_negative_zero_is_canonical(self):
    result = conversion.from_array([0, 0], 10, is_negative=True)
    self.assertEqual(result.sign, types.Sign.ZERO)
    self.assertEqual(result.magnitude, (0,))

  @parameterized.named_parameters(
      dict(testcase_name="_digit_too_large", digits=[10], radix=10),
      dict(testcase_name="_negative_digit", digits=[-1], radix=10),
      dict(testcase_name="_unary_two", digits=[2], radix=1),
      dict(testcase_name="_zero_radix_nonzero", digits=[1], radix=0),
      dict(testcase_name="_negative_radix", digits=[1], radix=-3),
  )
  def test_invalid_digits_raise(self, digits, radix):
    with self.assertRaises(errors.InvalidRadixError):
      conversion.from_array(digits, radix)

  @hypothesis.given(values, strategies.integers(min_value=2, max_value=1000))
  @hypothesis.settings(deadline=None)
  def test_from_array_inverts_to_array(self, value: int, radix: int):
    digits, is_negative = conversion.to_array(value, radix)
    self.assertEqual(conversion.from_array(digits, radix, is_negative), value)


class StringTest(parameterized.TestCase):

  @parameterized.named_parameters(
      dict(testcase_name="_decimal", value=-12345, radix=10, text="-12345"),
      dict(testcase_name="_hex", value=255, radix=16, text="ff"),
      dict(testcase_name="_negative_hex", value=-255, radix=16, text="-ff"),
      dict(testcase_name="_base36", value=35, radix=36, text="z"),
      dict(testcase_name="_binary", value=5, radix=2, text="101"),
      dict(
          testcase_name="_bracketed", value=10000, radix=100, text="<1><0><0>"
      ),
      dict(testcase_name="_unary", value=3, radix=1, text="<1><1><1>"),
      dict(testcase_name="_zero_radix", value=0, radix=0, text="<0>"),
  )
  def test_to_string(self, value, radix, text):
    self.assertEqual(conversion.to_string(value, radix), text)

  @hypothesis.given(values, strategies.integers(min_value=2, max_value=200))
  @hypothesis.settings(deadline=None)
  def test_parse_inverts_to_string(self, value: int, radix: int):
    text = conversion.to_string(value, radix)
    self.assertEqual(conversion.parse(text, radix), value)

  @parameterized.named_parameters(
      dict(testcase_name="_upper_case", text="FF", radix=16, expected=255),
      dict(testcase_name="_signed", text="-ff", radix=16, expected=-255),
      dict(testcase_name="_plus", text="+7", radix=8, expected=7),
      dict(testcase_name="_mixed", text="<1>0", radix=16, expected=16),
      dict(
          testcase_name="_bracket_decimal", text="<1><2>", radix=10, expected=12
      ),
      dict(testcase_name="_unary", text="111", radix=1, expected=3),
  )
  def test_parse(self, text, radix, expected):
    self.assertEqual(conversion.parse(text, radix), expected)

  @parameterized.named_parameters(
      dict(testcase_name="_empty", text="", radix=16),
      dict(testcase_name="_sign_only", text="-", radix=16),
      dict(testcase_name="_digit_out_of_radix", text="g", radix=16),
      dict(testcase_name="_symbol", text="1_000", radix=10),
      dict(testcase_name="_unclosed_bracket", text="<12", radix=100),
      dict(testcase_name="_empty_bracket", text="<>", radix=100),
      dict(testcase_name="_bracket_out_of_radix", text="<100>", radix=100),
  )
  def test_parse_invalid_raises(self, text, radix):
    with self.assertRaises(errors.InvalidDigitError):
      conversion.parse(text, radix)

  def test_parse_negative_radix_raises(self):
    with self.assertRaises(errors.InvalidRadixError):
      conversion.parse("1", -2)


class LimbArrayTest(parameterized.TestCase):

  def test_to_limb_array(self):
    result = conversion.to_limb_array(-(2**20 + 5))
    self.assertEqual(result.dtype, jnp.uint16)
    np.testing.assert_array_equal(result, [5, 16])

  def test_to_limb_array_padded(self):
    result = conversion.to_limb_array(2**20 + 5, array_size=4)
    np.testing.assert_array_equal(result, [5, 16, 0, 0])

  def test_to_limb_array_too_small(self):
    with self.assertRaises(ValueError):
      conversion.to_limb_array(2**40, array_size=2)

  def test_from_limb_array(self):
    array = conversion.to_limb_array(2**20 + 5, array_size=4)
    self.assertEqual(
        conversion.from_limb_array(array, is_negative=True), -(2**20 + 5)
    )
    zeros = np.zeros(3, dtype=np.uint16)
    self.assertTrue(conversion.from_limb_array(zeros, True).is_zero())

  def test_from_limb_array_out_of_range(self):
    with self.assertRaises(ValueError):
      conversion.from_limb_array([70000])

  @parameterized.named_parameters(
      dict(testcase_name="_fractional", array=np.array([1.5, 2.0])),
      dict(testcase_name="_whole_floats", array=np.array([1.0, 2.0])),
      dict(testcase_name="_bool", array=np.array([True, False])),
  )
  def test_from_limb_array_rejects_non_integer_dtype(self, array):
    with self.assertRaises(ValueError):
      conversion.from_limb_array(array)

  def test_from_limb_array_accepts_integer_dtypes(self):
    for dtype in (np.uint16, np.int32, np.uint64):
      value = conversion.from_limb_array(np.array([5, 16], dtype=dtype))
      self.assertEqual(value, 2**20 + 5)
      self.assertEqual(str(value), str(2**20 + 5))


if __name__ == "__main__":
  absltest.main()
