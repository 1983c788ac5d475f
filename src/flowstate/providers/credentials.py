"""API credential selection strategies."""

import itertools
import random
from collections.abc import Sequence
from typing import Protocol


class CredentialSelector(Protocol):
    """Picks which API key a provider call should use."""

    def select(self, credentials: Sequence[str]) -> str:
        """Choose one credential from a non-empty sequence."""
        ...


class RandomCredentialSelector:
    """Uniform random choice per call.

    Spreads quota use across keys without any shared state, so concurrent
    resolution tasks need no coordination.
    """

    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng = rng or random.Random()

    def select(self, credentials: Sequence[str]) -> str:
        if not credentials:
            raise ValueError("No credentials to select from")
        return self._rng.choice(credentials)


class RoundRobinCredentialSelector:
    """Cycle through keys in order."""

    def __init__(self) -> None:
        self._counter = itertools.count()

    def select(self, credentials: Sequence[str]) -> str:
        if not credentials:
            raise ValueError("No credentials to select from")
        return credentials[next(self._counter) % len(credentials)]
