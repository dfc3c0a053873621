# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Prime multiplier sources for synthesized hash members."""

import logging
import threading
from typing import Protocol

logger = logging.getLogger(__name__)

INT32_MAX = 2**31 - 1

# Deterministic Miller-Rabin witnesses for every n < 3_215_031_751.
_WITNESSES = (2, 3, 5, 7)


class PrimeSpaceExhaustedError(RuntimeError):
    """Represent a run that issued every prime usable as a 32-bit multiplier."""


class PrimeSource(Protocol):
    """Supply the multiplier of one synthesized hash member."""

    def next(self) -> int:
        """Return the multiplier for the next hash member.

        Raises:
            PrimeSpaceExhaustedError: If no further multiplier is available.
        """


class PrimeSequence:
    """Issue strictly increasing primes, one per synthesized hash member.

    One instance lives for one generation run and is shared by every class of
    that run. Calls to ``next`` are serialized so that a host processing
    classes in parallel still never sees the same prime twice.
    """

    def __init__(self, last_prime: int = 0) -> None:
        """Initialize the sequence.

        Args:
            last_prime: Value the first issued prime must exceed.

        Raises:
            ValueError: If ``last_prime`` is negative or not below ``INT32_MAX``.
        """
        if last_prime < 0 or last_prime >= INT32_MAX:
            raise ValueError("last_prime must be in [0, 2**31 - 1).")
        self._last_prime = last_prime
        self._lock = threading.Lock()

    @property
    def last_prime(self) -> int:
        return self._last_prime

    def next(self) -> int:
        """Return the smallest prime strictly greater than the last one issued.

        Returns:
            Next prime multiplier.

        Raises:
            PrimeSpaceExhaustedError: If the next prime reaches ``INT32_MAX``.
                The sequence is left unchanged.
        """
        with self._lock:
            prime = next_prime(self._last_prime)
            if prime >= INT32_MAX:
                logger.error(
                    f"Prime multiplier space exhausted (last_prime={self._last_prime})"
                )
                raise PrimeSpaceExhaustedError(
                    "Reached MAX integer for random prime number generation. "
                    "Cannot continue."
                )
            self._last_prime = prime
        logger.debug(f"Issued hash multiplier (prime={prime})")
        return prime


class FixedPrime:
    """Return the same multiplier for every class."""

    def __init__(self, prime: int = 31) -> None:
        """Initialize the source.

        Args:
            prime: Multiplier returned by every call.

        Raises:
            ValueError: If ``prime`` is not a prime below ``INT32_MAX``.
        """
        if prime >= INT32_MAX or not is_prime(prime):
            raise ValueError(f"{prime} is not a prime below 2**31 - 1.")
        self._prime = prime

    def next(self) -> int:
        return self._prime


def next_prime(value: int) -> int:
    """Return the smallest prime strictly greater than ``value``."""
    if value < 2:
        return 2
    candidate = value + 1 if value % 2 == 0 else value + 2
    while not is_prime(candidate):
        candidate += 2
    return candidate


def is_prime(value: int) -> bool:
    """Check primality with a Miller-Rabin test exact for 32-bit values."""
    if value < 2:
        return False
    for small in (2, 3, 5, 7, 11, 13):
        if value % small == 0:
            return value == small
    exponent = value - 1
    rounds = 0
    while exponent % 2 == 0:
        exponent //= 2
        rounds += 1
    for witness in _WITNESSES:
        x = pow(witness, exponent, value)
        if x in (1, value - 1):
            continue
        for _ in range(rounds - 1):
            x = pow(x, 2, value)
            if x == value - 1:
                break
        else:
            return False
    return True
