"""Bounded secure random value generation."""
from securerand.logic.rng import SecureRandomSource, SystemRandomSource


# Exclusive upper limit of the printed value
BOUND = 1000


def generate(bound: int = BOUND, source: SecureRandomSource | None = None) -> int:
    """
    Return one uniformly distributed integer in [0, bound).

    Raises:
        ValueError: If bound is not a positive integer.
        EntropySourceError: If the secure source cannot supply randomness.
    """
    source = source or SystemRandomSource()
    return source.uniform_below(bound)


def format_value(value: int) -> str:
    """Decimal text of value, no leading zeros."""
    return str(value)
