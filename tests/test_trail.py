"""
Unit tests for the trail ring buffer.

Tests capacity bounds, overwrite of the oldest sample and the newest-first
traversal order used for fading trail segments.
"""

import math

import numpy as np
import pytest

from pendulum.trail import TrailBuffer, create_trail


class TestTrailConstruction:
    """Test suite for TrailBuffer construction"""

    def test_starts_empty(self) -> None:
        """Test that a new trail holds no samples"""
        trail = TrailBuffer(8)

        assert trail.capacity == 8
        assert trail.count == 0
        assert trail.write_index == 0
        assert len(trail) == 0

    def test_default_capacity(self) -> None:
        """Test the default trail length"""
        assert TrailBuffer().capacity == 400

    def test_samples_preallocated(self) -> None:
        """Test that storage is allocated once at construction"""
        trail = TrailBuffer(16)
        storage = trail.samples
        for i in range(40):
            trail.push((float(i), float(-i)))

        assert trail.samples is storage
        assert trail.samples.shape == (16, 2)

    @pytest.mark.parametrize("capacity", [0, -1, -400])
    def test_rejects_non_positive_capacity(self, capacity: int) -> None:
        """Test that capacity must be positive"""
        with pytest.raises(ValueError):
            TrailBuffer(capacity)

    @pytest.mark.parametrize("capacity", [2.5, "10", None, True])
    def test_rejects_non_integer_capacity(self, capacity: object) -> None:
        """Test that capacity must be an integer"""
        with pytest.raises(ValueError):
            TrailBuffer(capacity)  # type: ignore[arg-type]

    def test_numpy_integer_capacity(self) -> None:
        """Test that numpy integers are accepted"""
        assert TrailBuffer(np.int64(5)).capacity == 5

    def test_create_trail(self) -> None:
        """Test the factory function"""
        trail = create_trail(256)

        assert isinstance(trail, TrailBuffer)
        assert trail.capacity == 256


class TestTrailPush:
    """Test suite for pushing samples"""

    def test_count_grows_until_capacity(self) -> None:
        """Test that count saturates at capacity"""
        trail = TrailBuffer(4)
        counts = []
        for i in range(6):
            trail.push((float(i), 0.0))
            counts.append(trail.count)

        assert counts == [1, 2, 3, 4, 4, 4]

    def test_write_index_wraps(self) -> None:
        """Test that the cursor wraps modulo capacity"""
        trail = TrailBuffer(3)
        for i in range(4):
            trail.push((float(i), 0.0))

        assert trail.write_index == 1

    @pytest.mark.parametrize("extra", [0, 1, 5, 17])
    def test_keeps_last_capacity_points(self, extra: int) -> None:
        """Test that capacity + k pushes keep exactly the last capacity points in order"""
        capacity = 5
        trail = TrailBuffer(capacity)
        pushed = [(float(i), float(10 * i)) for i in range(capacity + extra)]
        for point in pushed:
            trail.push(point)

        assert trail.count == capacity
        assert list(trail.points(newest_first=False)) == pushed[-capacity:]
        assert trail.to_array().tolist() == [list(p) for p in pushed[-capacity:]]

    def test_reset(self) -> None:
        """Test that reset forgets every sample"""
        trail = TrailBuffer(3)
        for i in range(5):
            trail.push((float(i), 0.0))
        trail.reset()

        assert trail.count == 0
        assert list(trail.pairs()) == []
        trail.push((9.0, 9.0))
        assert list(trail.points()) == [(9.0, 9.0)]


class TestTrailTraversal:
    """Test suite for newest-first traversal"""

    @pytest.fixture
    def trail(self) -> TrailBuffer:
        """Create a trail holding P1, P2, P3"""
        trail = TrailBuffer(10)
        for point in [(1.0, 1.0), (2.0, 2.0), (3.0, 3.0)]:
            trail.push(point)
        return trail

    def test_pairs_newest_first(self, trail: TrailBuffer) -> None:
        """Test that P1, P2, P3 yields (P3, P2), (P2, P1)"""
        assert list(trail.pairs()) == [
            ((3.0, 3.0), (2.0, 2.0)),
            ((2.0, 2.0), (1.0, 1.0)),
        ]

    def test_visit_calls_back_in_order(self, trail: TrailBuffer) -> None:
        """Test that visit reports the same pairs as pairs()"""
        visited = []
        trail.visit(lambda newer, older: visited.append((newer, older)))

        assert visited == list(trail.pairs())

    def test_traversal_is_restartable(self, trail: TrailBuffer) -> None:
        """Test that traversing twice yields the same sequence"""
        assert list(trail.pairs()) == list(trail.pairs())

    def test_empty_and_single_sample(self) -> None:
        """Test that fewer than two samples yield no segments"""
        trail = TrailBuffer(4)
        assert list(trail.pairs()) == []
        trail.push((1.0, 2.0))
        assert list(trail.pairs()) == []
        assert list(trail.points()) == [(1.0, 2.0)]

    def test_never_reads_unwritten_slots(self) -> None:
        """Test that a partly filled trail only reports written samples"""
        trail = TrailBuffer(100)
        for i in range(1, 4):
            trail.push((float(i), float(i)))
        points = [p for pair in trail.pairs() for p in pair]

        assert (0.0, 0.0) not in points

    def test_pairs_after_wrap(self) -> None:
        """Test adjacency across the wrap point of the ring"""
        trail = TrailBuffer(3)
        for i in range(1, 6):
            trail.push((float(i), 0.0))

        assert list(trail.pairs()) == [
            ((5.0, 0.0), (4.0, 0.0)),
            ((4.0, 0.0), (3.0, 0.0)),
        ]

    def test_full_trail_segment_count(self) -> None:
        """Test that a full trail yields capacity - 1 segments"""
        trail = TrailBuffer(400)
        for i in range(1000):
            trail.push((math.sin(i), math.cos(i)))

        assert len(list(trail.pairs())) == 399

    def test_points_newest_first(self, trail: TrailBuffer) -> None:
        """Test point-wise traversal order"""
        assert list(trail.points()) == [(3.0, 3.0), (2.0, 2.0), (1.0, 1.0)]
        assert list(trail.points(newest_first=False)) == [(1.0, 1.0), (2.0, 2.0), (3.0, 3.0)]

    def test_to_array_empty(self) -> None:
        """Test that an empty trail converts to a (0, 2) array"""
        assert TrailBuffer(5).to_array().shape == (0, 2)

    def test_deterministic(self) -> None:
        """Test that identical pushes give identical traversals"""
        a = TrailBuffer(7)
        b = TrailBuffer(7)
        for i in range(20):
            point = (math.sin(0.3 * i), math.cos(0.7 * i))
            a.push(point)
            b.push(point)

        assert list(a.pairs()) == list(b.pairs())


class TestWeightedSegments:
    """Test suite for fade weights"""

    def test_weights(self) -> None:
        """Test weight sqrt((count - k) / count) for the k-th segment"""
        trail = TrailBuffer(10)
        for i in range(4):
            trail.push((float(i), 0.0))
        weights = [w for _, _, w in trail.weighted_segments()]

        assert weights == pytest.approx([1.0, math.sqrt(0.75), math.sqrt(0.5)])

    def test_weights_strictly_decreasing(self) -> None:
        """Test that older segments are always fainter"""
        trail = TrailBuffer(50)
        for i in range(80):
            trail.push((float(i), 0.0))
        weights = [w for _, _, w in trail.weighted_segments()]

        assert all(a > b for a, b in zip(weights, weights[1:]))
        assert all(0.0 < w <= 1.0 for w in weights)

    def test_segments_match_pairs(self) -> None:
        """Test that weighted segments follow the same order as pairs()"""
        trail = TrailBuffer(6)
        for i in range(9):
            trail.push((float(i), float(i * i)))

        assert [(n, o) for n, o, _ in trail.weighted_segments()] == list(trail.pairs())
