"""Tests for the controller's timers and task tracking."""

import asyncio

from currency_converter.services.scheduling import SingleSlotTimer, TaskTracker


class Recorder:
    def __init__(self) -> None:
        self.calls = 0

    async def __call__(self) -> None:
        self.calls += 1


class TestSingleSlotTimer:
    async def test_rearming_replaces_pending_fire(self):
        tracker = TaskTracker()
        recorder = Recorder()
        timer = SingleSlotTimer(tracker, 0.02, recorder, name="debounce")

        for _ in range(5):
            timer.arm()
            await asyncio.sleep(0.005)
        await asyncio.sleep(0.05)
        await tracker.join()

        assert recorder.calls == 1
        assert not timer.armed

    async def test_cancel_prevents_fire(self):
        tracker = TaskTracker()
        recorder = Recorder()
        timer = SingleSlotTimer(tracker, 0.01, recorder, name="paste")

        timer.arm()
        timer.cancel()
        await asyncio.sleep(0.03)

        assert recorder.calls == 0
        assert timer.remaining == 0.0


class TestTaskTracker:
    async def test_join_waits_for_spawned_tasks(self):
        tracker = TaskTracker()
        recorder = Recorder()

        tracker.spawn(recorder(), name="work")
        assert tracker.pending == 1
        await tracker.join()

        assert recorder.calls == 1
        assert tracker.pending == 0

    async def test_failed_task_does_not_break_join(self):
        tracker = TaskTracker()

        async def boom() -> None:
            raise RuntimeError("boom")

        task = tracker.spawn(boom(), name="boom")
        await tracker.join()

        assert isinstance(task.exception(), RuntimeError)
        assert tracker.pending == 0

    async def test_cancel_all(self):
        tracker = TaskTracker()
        task = tracker.spawn(asyncio.sleep(10), name="sleep")

        tracker.cancel_all()
        await tracker.join()

        assert task.cancelled()
