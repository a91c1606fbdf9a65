"""Number-theoretic functions on BigInteger: gcd, lcm, primality, sampling."""

import logging
from typing import Iterable, Optional

from jaxint import big_integer
from jaxint import bitwise
from jaxint import limbs
from jaxint import modular
from jaxint import parameters
from jaxint import random_source
from jaxint import types
from jaxint import util

BigInteger = big_integer.BigInteger
NumberLike = big_integer.NumberLike
coerce = big_integer.coerce

# After this many rejected draws rand_between reduces the next draw instead.
_MAX_REJECTIONS = 64

_DEFAULT_RNG = random_source.SystemRandomSource()

# Seed of the source used for Miller-Rabin witnesses when none is supplied.
WITNESS_SEED = 0

_DETERMINISTIC_BASES = tuple(
    BigInteger(base) for base in util.DETERMINISTIC_MILLER_RABIN_BASES
)


def gcd(a: NumberLike, b: NumberLike) -> BigInteger:
  """Euclid's algorithm on magnitudes. The result is never negative."""
  a, b = coerce(a).abs(), coerce(b).abs()
  while not b.is_zero():
    a, b = b, a.mod(b)
  return a


def lcm(a: NumberLike, b: NumberLike) -> BigInteger:
  a, b = coerce(a), coerce(b)
  if a.is_zero() or b.is_zero():
    return big_integer.ZERO
  return a.multiply(b).abs().divide(gcd(a, b))


def rand_between(
    low: NumberLike,
    high: NumberLike,
    rng: Optional[random_source.RandomSource] = None,
) -> BigInteger:
  """Draws a uniform value from the closed range [low, high].

  The bounds may come in either order. Limbs are drawn to cover high - low,
  the top limb is masked to its bit length and draws past high - low are
  rejected, so each draw is accepted with probability above one half.

  Args:
    low: one end of the range.
    high: the other end of the range.
    rng: the source of random limbs; the OS entropy pool by default.

  Returns:
    A value in [min(low, high), max(low, high)].
  """
  low, high = coerce(low), coerce(high)
  if low.compare(high) == types.Ordering.GREATER_THAN:
    low, high = high, low
  span = high.subtract(low).magnitude
  if limbs.is_zero(span):
    return low
  rng = rng or _DEFAULT_RNG

  top_mask = (1 << span[-1].bit_length()) - 1
  for _ in range(_MAX_REJECTIONS + 1):
    drawn = rng.uniform_limbs(len(span)).tolist()
    drawn[-1] &= top_mask
    candidate = limbs.normalize(drawn)
    if limbs.compare(candidate, span) != types.Ordering.GREATER_THAN:
      break
  else:
    logging.debug(
        "rand_between: reducing after %d rejected draws", _MAX_REJECTIONS + 1
    )
    _, candidate = limbs.divmod_limbs(candidate, limbs.add(span, limbs.ONE))
  return low.add(big_integer.from_parts(types.Sign.POSITIVE, candidate))


def _trial_division(n: BigInteger) -> Optional[bool]:
  """Settles primality of a non-negative n by trial division, if it can."""
  if n.compare(big_integer.TWO) == types.Ordering.LESS_THAN:
    return False
  for p in util.SMALL_PRIMES:
    if n == p:
      return True
    if n.is_divisible_by(p):
      return False
  if n.compare(util.TRIAL_DIVISION_BOUND) == types.Ordering.LESS_THAN:
    return True
  return None


def _miller_rabin(n: BigInteger, witnesses: Iterable[BigInteger]) -> bool:
  """Miller-Rabin test of an odd n > 3 against the given witnesses."""
  n_minus_one = n.prev()
  s = limbs.trailing_zero_bits(n_minus_one.magnitude)
  d = bitwise.shift_right(n_minus_one, s)

  for witness in witnesses:
    x = modular.mod_pow(witness, d, n)
    if x.is_unit() or x == n_minus_one:
      continue
    for _ in range(s - 1):
      x = x.square().mod(n)
      if x == n_minus_one:
        break
    else:
      logging.debug("%s witnesses that %s is composite", witness, n)
      return False
  return True


def is_probable_prime(
    value: NumberLike,
    rng: Optional[random_source.RandomSource] = None,
    params: parameters.PrimalityParameters = parameters.DEFAULT_PRIMALITY_PARAMS,
) -> bool:
  """Miller-Rabin with params.rounds random witnesses in [2, n - 2].

  Primality is judged on |value|. Without an explicit rng the witnesses come
  from a PseudorandomSource seeded with WITNESS_SEED, so the answer for a given
  value is reproducible. A composite passes with probability at most
  4**-params.rounds.

  Args:
    value: the value to test.
    rng: the source of witnesses.
    params: the number of rounds to run.

  Returns:
    False if |value| is certainly composite (or below 2), True otherwise.
  """
  n = coerce(value).abs()
  settled = _trial_division(n)
  if settled is not None:
    return settled
  rng = rng or random_source.PseudorandomSource(WITNESS_SEED)
  upper = n.subtract(big_integer.TWO)
  witnesses = (
      rand_between(big_integer.TWO, upper, rng) for _ in range(params.rounds)
  )
  return _miller_rabin(n, witnesses)


def is_prime(
    value: NumberLike,
    rng: Optional[random_source.RandomSource] = None,
    params: parameters.PrimalityParameters = parameters.DEFAULT_PRIMALITY_PARAMS,
) -> bool:
  """Primality of |value|.

  Uses trial division for speed + deterministic Miller-Rabin for correctness
  up to params.deterministic_bit_limit bits, and escalates to
  is_probable_prime above that.

  Args:
    value: the value to test.
    rng: the source of witnesses once the test turns probabilistic.
    params: the primality parameters.

  Returns:
    True if |value| is prime (with bounded error above the deterministic
    limit), False otherwise.
  """
  n = coerce(value).abs()
  settled = _trial_division(n)
  if settled is not None:
    return settled
  if n.bit_length() <= params.deterministic_bit_limit:
    return _miller_rabin(n, _DETERMINISTIC_BASES)
  return is_probable_prime(n, rng, params)
