"""Sources of uniformly random limbs.

rand_between and the Miller-Rabin witness selection draw limbs through the
RandomSource interface, so callers can swap in a seeded or a deterministic
source. None of these sources is meant for cryptographic use.
"""

import abc
import itertools
import os
import threading
from typing import Iterable

import jax
import jax.numpy as jnp
import numpy as np

from jaxint import util


class RandomSource(abc.ABC):
  """An interface for random limb generators."""

  @abc.abstractmethod
  def uniform_limbs(self, count: int) -> np.ndarray:
    """Returns count limbs drawn uniformly from [0, RADIX) as uint16."""


def _validated_count(count: int) -> int:
  if count < 0:
    raise ValueError(f"Expected a non-negative limb count but got: {count}.")
  return count


class PseudorandomSource(RandomSource):
  """A seeded jax.random generator.

  The key is split on every draw, so a given seed always yields the same
  sequence of draws.
  """

  def __init__(self, seed: int = 0):
    self._key = jax.random.key(seed)
    self._lock = threading.Lock()

  def uniform_limbs(self, count: int) -> np.ndarray:
    count = _validated_count(count)
    with self._lock:
      self._key, subkey = jax.random.split(self._key)
    return np.asarray(
        jax.random.bits(subkey, shape=(count,), dtype=jnp.uint16),
        dtype=util.LIMB_DTYPE,
    )


class SystemRandomSource(RandomSource):
  """Draws limbs from the operating system entropy pool."""

  def uniform_limbs(self, count: int) -> np.ndarray:
    count = _validated_count(count)
    return np.frombuffer(os.urandom(2 * count), dtype="<u2").astype(
        util.LIMB_DTYPE
    )


class CycleRng(RandomSource):
  """A deterministic source that repeats the given limbs forever."""

  def __init__(self, values: Iterable[int]):
    values = list(values)
    if not values:
      raise ValueError("Expected a non-empty sequence of limbs.")
    if any(not 0 <= v <= util.LIMB_MASK for v in values):
      raise ValueError(f"Expected limbs in [0, {util.LIMB_MASK}]: {values}.")
    self._cycle = itertools.cycle(values)
    self._lock = threading.Lock()

  def uniform_limbs(self, count: int) -> np.ndarray:
    count = _validated_count(count)
    with self._lock:
      drawn = list(itertools.islice(self._cycle, count))
    return np.asarray(drawn, dtype=util.LIMB_DTYPE)


class ZeroRng(RandomSource):
  """A source that only ever produces zero limbs."""

  def uniform_limbs(self, count: int) -> np.ndarray:
    return np.zeros((_validated_count(count),), dtype=util.LIMB_DTYPE)


ALL_RNGS = [PseudorandomSource, SystemRandomSource, ZeroRng]
