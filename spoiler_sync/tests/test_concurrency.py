"""
Tests for concurrency module.
"""
import asyncio

import pytest

from spoiler_sync.src.concurrency import bounded_map


class InFlightTracker:
    """Worker that records the peak number of simultaneous calls."""

    def __init__(self, delays=None):
        self.current = 0
        self.peak = 0
        self.delays = delays or {}

    async def __call__(self, item):
        self.current += 1
        self.peak = max(self.peak, self.current)
        await asyncio.sleep(self.delays.get(item, 0.001))
        self.current -= 1
        return item * 10


class TestBoundedMap:
    """Test bounded_map function."""

    @pytest.mark.parametrize("limit", [1, 2, 5])
    def test_limit_respected(self, limit):
        tracker = InFlightTracker()
        asyncio.run(bounded_map(range(20), tracker, limit))
        assert tracker.peak <= limit
        assert tracker.peak == min(limit, 20)

    def test_results_in_input_order(self):
        # Earlier items finish last
        tracker = InFlightTracker(delays={0: 0.03, 1: 0.02, 2: 0.01})
        result = asyncio.run(bounded_map([0, 1, 2, 3], tracker, 4))
        assert result == [0, 10, 20, 30]

    def test_unbounded(self):
        tracker = InFlightTracker()
        asyncio.run(bounded_map(range(8), tracker, None))
        assert tracker.peak == 8

    def test_empty_input(self):
        assert asyncio.run(bounded_map([], InFlightTracker(), 3)) == []

    def test_invalid_limit(self):
        with pytest.raises(ValueError):
            asyncio.run(bounded_map([1], InFlightTracker(), 0))

    def test_failure_propagates_and_cancels_rest(self):
        started = []

        async def worker(item):
            started.append(item)
            if item == 1:
                raise RuntimeError("boom")
            await asyncio.sleep(0.05)
            return item

        with pytest.raises(RuntimeError, match="boom"):
            asyncio.run(bounded_map(range(10), worker, 2))
        # Items queued behind the failure never start
        assert len(started) < 10
