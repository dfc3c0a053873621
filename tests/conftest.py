# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
import sys
from pathlib import Path

import pytest


def _add_src_to_path() -> None:
    root = Path(__file__).resolve().parents[1]
    src_path = root / "src"
    if str(src_path) not in sys.path:
        sys.path.insert(0, str(src_path))


_add_src_to_path()

from mbgsynth.primes import PrimeSequence  # noqa: E402


@pytest.fixture
def prime_sequence() -> PrimeSequence:
    """Return a fresh sequence, as one generation run would own."""
    return PrimeSequence()
