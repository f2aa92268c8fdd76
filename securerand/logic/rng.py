"""Secure random sources and unbiased bounded draws."""
import logging
import secrets
from abc import ABC, abstractmethod
from dataclasses import dataclass

from securerand.errors import EntropySourceError


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Draw:
    """Result of one bounded draw."""

    value: int
    attempts: int
    bytes_consumed: int


def _check_bound(bound: int) -> None:
    if isinstance(bound, bool) or not isinstance(bound, int) or bound <= 0:
        raise ValueError(f"bound must be a positive integer, got {bound!r}")


class SecureRandomSource(ABC):
    """Abstract secure random source.

    Subclasses supply raw bytes; draw() reduces them to a bounded integer.
    """

    @abstractmethod
    def random_bytes(self, n: int) -> bytes:
        """Return n random bytes or raise EntropySourceError."""
        pass

    def draw(self, bound: int) -> Draw:
        """
        Draw a uniform integer in [0, bound) by rejection sampling.

        Candidates are the low (bound - 1).bit_length() bits of a big-endian
        byte string; any candidate >= bound is discarded and redrawn.
        """
        _check_bound(bound)
        if bound == 1:
            return Draw(value=0, attempts=1, bytes_consumed=0)

        bits = (bound - 1).bit_length()
        n_bytes = (bits + 7) // 8
        mask = (1 << bits) - 1

        attempts = 0
        while True:
            attempts += 1
            raw = self.random_bytes(n_bytes)
            if len(raw) != n_bytes:
                raise EntropySourceError(
                    f"short read from entropy source: wanted {n_bytes} bytes, got {len(raw)}"
                )
            candidate = int.from_bytes(raw, "big") & mask
            if candidate < bound:
                break

        logger.debug(
            "draw(bound=%d): attempts=%d rejected=%d bytes=%d",
            bound,
            attempts,
            attempts - 1,
            attempts * n_bytes,
        )
        return Draw(value=candidate, attempts=attempts, bytes_consumed=attempts * n_bytes)

    def uniform_below(self, bound: int) -> int:
        """Return a uniform integer in [0, bound)."""
        return self.draw(bound).value


class SystemRandomSource(SecureRandomSource):
    """
    Production source backed by the operating system CSPRNG.

    No seed, no fallback to a non-secure generator.
    """

    def random_bytes(self, n: int) -> bytes:
        logger.debug("getrandom(%d)", n)
        try:
            return secrets.token_bytes(n)
        except (OSError, NotImplementedError) as e:
            raise EntropySourceError(f"OS entropy source unavailable: {e}") from e
