"""A module containing basic types for jaxint."""

import enum
from typing import Tuple

# Little-endian 16-bit limbs of a magnitude.
Limbs = Tuple[int, ...]


class Sign(enum.IntEnum):
  """The sign of a BigInteger. Zero has its own sign."""

  NEGATIVE = -1
  ZERO = 0
  POSITIVE = 1

  def __neg__(self) -> "Sign":
    return Sign(-int(self))

  def __mul__(self, other: "Sign") -> "Sign":
    return Sign(int(self) * int(other))


class Ordering(enum.IntEnum):
  """The result of comparing two values."""

  LESS_THAN = -1
  EQUAL_TO = 0
  GREATER_THAN = 1

  def reverse(self) -> "Ordering":
    return Ordering(-int(self))
