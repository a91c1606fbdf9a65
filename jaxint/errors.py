"""Errors raised by the jaxint engine."""


class BigIntegerError(Exception):
  """Base class for invalid operands handed to the engine."""


class InvalidDigitError(BigIntegerError, ValueError):
  """A numeric string contains a character that is not a valid digit."""


class InvalidRadixError(BigIntegerError, ValueError):
  """A radix does not fit the digits or the value being converted."""


class DivisionByZeroError(BigIntegerError, ZeroDivisionError):
  """Division, remainder or modular reduction by zero."""


class InvalidExponentError(BigIntegerError, ValueError):
  """Modular exponentiation with a negative exponent."""


class NotInvertibleError(BigIntegerError, ArithmeticError):
  """The value has no inverse for the modulus because they are not co-prime."""


class ShiftRangeError(BigIntegerError, OverflowError):
  """A shift count lies outside [-MAX_SHIFT, MAX_SHIFT]."""
