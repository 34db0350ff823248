"""
Tests for per-key serialization of concurrent operations.
"""
import asyncio

import pytest

from services.inflight import InFlightGuard


@pytest.mark.asyncio
class TestInFlightGuard:
    async def test_same_key_runs_in_submission_order(self):
        guard = InFlightGuard()
        events = []

        def make_operation(name, delay):
            async def operation():
                events.append(f"start {name}")
                await asyncio.sleep(delay)
                events.append(f"end {name}")
                return name
            return operation

        first = asyncio.create_task(guard.run("order-status:o1", make_operation("a", 0.05)))
        await asyncio.sleep(0)
        second = asyncio.create_task(guard.run("order-status:o1", make_operation("b", 0)))

        assert await asyncio.gather(first, second) == ["a", "b"]
        assert events == ["start a", "end a", "start b", "end b"]

    async def test_different_keys_overlap(self):
        guard = InFlightGuard()
        release = asyncio.Event()
        started = []

        async def blocking():
            started.append("o1")
            await release.wait()

        async def quick():
            started.append("o2")

        task = asyncio.create_task(guard.run("o1", blocking))
        await asyncio.sleep(0)
        await guard.run("o2", quick)
        assert started == ["o1", "o2"]
        assert guard.is_busy("o1")
        release.set()
        await task
        assert not guard.is_busy("o1")

    async def test_key_is_released_after_error(self):
        guard = InFlightGuard()

        async def failing():
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError):
            await guard.run("o1", failing)
        assert not guard.is_busy("o1")

        async def ok():
            return "ok"

        assert await guard.run("o1", ok) == "ok"
