"""Global Configuration and limb helpers for jaxint.

Magnitudes are stored as little-endian tuples of 16-bit limbs. The product of
two limbs is below 2**32, so a uint64 accumulator can sum 2**32 such products
before it overflows, which bounds every convolution we will ever run.

Note that: the helpers converting from Python int are only used at the
native-integer boundary, never to carry out arithmetic.
"""

import numpy as np

####################################
# Global Configurations
####################################

BASE = 16
RADIX = 1 << BASE
LIMB_MASK = RADIX - 1
LIMB_DTYPE = np.uint16  # this type must match the BASE, i.e. np.uint<BASE>
ACCUMULATOR_DTYPE = np.uint64

# Decimal parsing and formatting consume this many digits per limb step.
DECIMAL_CHUNK_DIGITS = 4
DECIMAL_CHUNK = 10**DECIMAL_CHUNK_DIGITS

# Largest shift count accepted by shift_left / shift_right.
MAX_SHIFT = 2**53 - 1

DIGIT_ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyz"

####################################
# Primality Configurations
####################################

SMALL_PRIMES = (2, 3, 5, 7, 11, 13, 17, 19, 23, 29, 31, 37, 41, 43, 47)
# Everything below the square of the next prime is settled by trial division.
TRIAL_DIVISION_BOUND = 53 * 53

# Bases required for a deterministic Miller-Rabin check up to 2^64.
DETERMINISTIC_MILLER_RABIN_BASES = (2, 3, 5, 7, 11, 13, 17, 19, 23, 29, 31, 37)
DETERMINISTIC_BIT_LIMIT = 64


####################################
# Utility Functions
####################################


def int_to_limbs(python_int: int) -> tuple[int, ...]:
  """Chunk decompose a non-negative Python integer into 16-bit limbs.

  Args:
    python_int: The non-negative Python integer to convert.

  Returns:
    The little-endian limbs, with zero represented as a single zero limb.
  """
  if python_int < 0:
    raise ValueError(f"Expected a non-negative integer but got: {python_int}.")
  elements = []
  while python_int > 0:
    elements.append(python_int & LIMB_MASK)  # Extract the lower bits
    python_int >>= BASE  # Shift to remove the extracted bits
  return tuple(elements) or (0,)


def limbs_to_int(limbs) -> int:
  """Converts little-endian limbs to a single Python integer."""
  result = 0
  for i, elem in enumerate(limbs):
    result |= int(elem) << (i * BASE)
  return result


def pad_limbs(limbs, array_size: int) -> list[int]:
  """Zero pads the limbs to array_size entries."""
  assert array_size >= len(limbs)
  return list(limbs) + [0] * (array_size - len(limbs))
