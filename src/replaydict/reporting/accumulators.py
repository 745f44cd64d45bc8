"""Thread-safe accumulators for numeric metrics.

Worker threads call add() concurrently while a reporter periodically reads
get_result() and calls reset() between reporting periods. Each accumulator
holds a single scalar behind a narrow critical section, so add() is a
commutative, associative fold regardless of interleaving.
"""

import math
import threading
from abc import ABC, abstractmethod
from typing import Generic, TypeVar

T = TypeVar("T")


class Accumulator(ABC, Generic[T]):
    """Folds reported values into a single result."""

    @abstractmethod
    def add(self, value: T) -> None:
        """Fold one value into the result."""

    @abstractmethod
    def get_result(self) -> T:
        """Return the current folded value."""

    @abstractmethod
    def reset(self) -> None:
        """Return to the initial state."""


class SumAccumulator(Accumulator[float]):
    """Sum of the reported values."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._sum = 0.0

    def add(self, value: float) -> None:
        with self._lock:
            self._sum += value

    def get_result(self) -> float:
        with self._lock:
            return self._sum

    def reset(self) -> None:
        with self._lock:
            self._sum = 0.0


class MinAccumulator(Accumulator[float]):
    """Minimum of the reported values, ``math.inf`` before the first add()."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._min = math.inf

    def add(self, value: float) -> None:
        with self._lock:
            if value < self._min:
                self._min = value

    def get_result(self) -> float:
        with self._lock:
            return self._min

    def reset(self) -> None:
        with self._lock:
            self._min = math.inf
