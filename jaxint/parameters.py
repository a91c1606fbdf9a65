"""Class encapsulating params for primality testing."""

import dataclasses

from jaxint import util


@dataclasses.dataclass(frozen=True)
class PrimalityParameters:
  """Parameters for the Miller-Rabin primality tests."""

  # the number of random witnesses drawn by is_probable_prime. Each round of
  # a composite passing has probability at most 1/4.
  rounds: int = 20

  # magnitudes with at most this many bits are tested against the fixed
  # deterministic bases instead of random witnesses.
  deterministic_bit_limit: int = util.DETERMINISTIC_BIT_LIMIT

  def __post_init__(self) -> None:
    if self.rounds < 1:
      raise ValueError(f"rounds must be positive, got {self.rounds}.")
    if not 0 <= self.deterministic_bit_limit <= util.DETERMINISTIC_BIT_LIMIT:
      raise ValueError(
          "deterministic_bit_limit must be within "
          f"[0, {util.DETERMINISTIC_BIT_LIMIT}], got "
          f"{self.deterministic_bit_limit}."
      )


DEFAULT_PRIMALITY_PARAMS = PrimalityParameters()
