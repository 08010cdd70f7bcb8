from threading import Lock
from typing import Protocol

import numpy as np


class RandomSource(Protocol):
    def random(self) -> float: ...

    def integers(self, low: int, high: int) -> int: ...


class NumpyRandomSource:
    """Uniform draws from a numpy ``Generator`` (optionally seeded)."""

    def __init__(self, seed=None):
        self._rng = np.random.default_rng(seed)
        # handlers run in FastAPI's threadpool; Generator is not thread-safe
        self._lock = Lock()

    def random(self) -> float:
        with self._lock:
            return float(self._rng.random())

    def integers(self, low: int, high: int) -> int:
        # high is exclusive
        with self._lock:
            return int(self._rng.integers(low, high))
