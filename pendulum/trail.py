"""
Fixed-capacity trail history of recent positions
"""

import math
from typing import Callable, Iterator, Tuple

import numpy as np

Point = Tuple[float, float]


class TrailBuffer:
    """Ring buffer of 2D samples, overwriting the oldest once full"""

    def __init__(self, capacity: int = 400) -> None:
        """
        Initialize an empty trail

        Args:
            capacity: Maximum number of retained samples (positive int)
        """
        if isinstance(capacity, bool) or not isinstance(capacity, (int, np.integer)) or capacity <= 0:
            raise ValueError(f"capacity must be a positive integer, got {capacity!r}")
        self.capacity = int(capacity)
        self.samples = np.zeros((self.capacity, 2), dtype=np.float64)
        self.write_index = 0
        self.count = 0

    def __len__(self) -> int:
        return self.count

    def push(self, point: Point) -> None:
        """Append one (x, y) sample"""
        self.samples[self.write_index, 0] = point[0]
        self.samples[self.write_index, 1] = point[1]
        self.write_index = (self.write_index + 1) % self.capacity
        if self.count < self.capacity:
            self.count += 1

    def reset(self) -> None:
        self.write_index = 0
        self.count = 0

    def _sample(self, age: int) -> Point:
        # age 0 is the newest sample
        slot = (self.write_index - 1 - age) % self.capacity
        return (float(self.samples[slot, 0]), float(self.samples[slot, 1]))

    def points(self, newest_first: bool = True) -> Iterator[Point]:
        """Iterate over all valid samples"""
        ages = range(self.count) if newest_first else range(self.count - 1, -1, -1)
        for age in ages:
            yield self._sample(age)

    def pairs(self) -> Iterator[Tuple[Point, Point]]:
        """
        Iterate over consecutive (newer, older) sample pairs

        Starts at the most recent sample and yields count - 1 pairs.
        """
        for age in range(self.count - 1):
            yield self._sample(age), self._sample(age + 1)

    def visit(self, callback: Callable[[Point, Point], None]) -> None:
        """Call callback(newer, older) for every pair, newest first"""
        for newer, older in self.pairs():
            callback(newer, older)

    def weighted_segments(self) -> Iterator[Tuple[Point, Point, float]]:
        """
        Iterate over (newer, older, weight) trail segments

        The k-th segment from the newest has weight sqrt((count - k) / count),
        so the newest segment is fully opaque and older segments fade.
        """
        for k, (newer, older) in enumerate(self.pairs()):
            yield newer, older, math.sqrt((self.count - k) / self.count)

    def to_array(self) -> np.ndarray:
        """Valid samples as a (count, 2) array ordered oldest to newest"""
        if self.count == 0:
            return np.zeros((0, 2), dtype=np.float64)
        slots = (self.write_index - self.count + np.arange(self.count)) % self.capacity
        return self.samples[slots].copy()


def create_trail(capacity: int = 400) -> TrailBuffer:
    return TrailBuffer(capacity)
