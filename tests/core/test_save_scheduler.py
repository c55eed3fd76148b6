"""
Test suite for the debounced message-log saver.

Uses a short quiet period so timing-based behaviour runs quickly.

System role: Verification of save pacing and flush hooks
"""

import asyncio

import pytest

from docchat.core.save_scheduler import DebouncedSaver

QUIET = 0.05


class RecordingSave:
    """Save callable that records calls and can be held open."""

    def __init__(self, result: bool = True) -> None:
        self.calls: list[tuple[str, list[str]]] = []
        self.result = result
        self.gate: asyncio.Event | None = None

    async def __call__(self, session_id, messages) -> bool:
        self.calls.append((session_id, [m.text for m in messages]))
        if self.gate is not None:
            await self.gate.wait()
        return self.result


@pytest.fixture
def recorder() -> RecordingSave:
    return RecordingSave()


class TestDebounce:
    """Test suite for schedule() timing."""

    async def test_burst_should_collapse_into_one_save(self, recorder, make_message) -> None:
        """Test several mutations within the quiet period write once with the latest log."""
        # Arrange
        saver = DebouncedSaver(recorder, quiet_period=QUIET)
        log = []

        # Act
        for text in ("a", "b", "c"):
            log.append(make_message(text))
            saver.schedule("s1", log)
        await asyncio.sleep(QUIET * 4)

        # Assert
        assert recorder.calls == [("s1", ["a", "b", "c"])]
        assert saver.last_result is True

    async def test_nothing_should_be_written_before_quiet_period(self, recorder, make_message) -> None:
        """Test the save waits for the quiet period."""
        # Arrange
        saver = DebouncedSaver(recorder, quiet_period=1.0)

        # Act
        saver.schedule("s1", [make_message("a")])
        await asyncio.sleep(0.01)

        # Assert
        assert recorder.calls == []
        assert saver.has_pending
        await saver.close()

    async def test_snapshot_should_not_follow_later_mutation_of_list(self, recorder, make_message) -> None:
        """Test schedule() copies the list it is given."""
        # Arrange
        saver = DebouncedSaver(recorder, quiet_period=QUIET)
        log = [make_message("a")]

        # Act
        saver.schedule("s1", log)
        log.append(make_message("not scheduled"))
        await saver.flush()

        # Assert
        assert recorder.calls == [("s1", ["a"])]


class TestInFlight:
    """Test suite for mutations arriving while a save is running."""

    async def test_mutation_during_save_should_be_rescheduled_after_it(
        self, recorder, make_message
    ) -> None:
        """Test no second save starts until the first completes, then the latest log is written."""
        # Arrange
        recorder.gate = asyncio.Event()
        saver = DebouncedSaver(recorder, quiet_period=QUIET)
        saver.schedule("s1", [make_message("a")])
        await asyncio.sleep(QUIET * 3)
        assert saver.is_saving

        # Act
        saver.schedule("s1", [make_message("a"), make_message("b")])
        await asyncio.sleep(QUIET * 3)
        calls_while_blocked = list(recorder.calls)
        recorder.gate.set()
        await asyncio.sleep(QUIET * 4)

        # Assert
        assert calls_while_blocked == [("s1", ["a"])]
        assert recorder.calls == [("s1", ["a"]), ("s1", ["a", "b"])]


class TestFlush:
    """Test suite for flush() and close()."""

    async def test_flush_should_write_pending_immediately(self, recorder, make_message) -> None:
        """Test flush bypasses the quiet period."""
        # Arrange
        saver = DebouncedSaver(recorder, quiet_period=10.0)
        saver.schedule("s1", [make_message("a")])

        # Act
        result = await saver.flush()

        # Assert
        assert result is True
        assert recorder.calls == [("s1", ["a"])]
        assert not saver.has_pending

    async def test_flush_without_pending_should_not_write(self, recorder) -> None:
        """Test an idle flush is a no-op."""
        # Arrange
        saver = DebouncedSaver(recorder, quiet_period=QUIET)

        # Act
        result = await saver.flush()

        # Assert
        assert result is True
        assert recorder.calls == []

    async def test_flush_should_wait_for_in_flight_save(self, recorder, make_message) -> None:
        """Test flush never overlaps an in-flight write and then saves the pending snapshot."""
        # Arrange
        recorder.gate = asyncio.Event()
        saver = DebouncedSaver(recorder, quiet_period=QUIET)
        saver.schedule("s1", [make_message("a")])
        await asyncio.sleep(QUIET * 3)
        saver.schedule("s1", [make_message("a"), make_message("b")])

        # Act
        flush_task = asyncio.create_task(saver.flush())
        await asyncio.sleep(QUIET)
        assert not flush_task.done()
        recorder.gate.set()
        await flush_task

        # Assert
        assert recorder.calls == [("s1", ["a"]), ("s1", ["a", "b"])]

    async def test_failed_save_should_report_false(self, make_message) -> None:
        """Test a save returning False is recorded."""
        # Arrange
        saver = DebouncedSaver(RecordingSave(result=False), quiet_period=QUIET)
        saver.schedule("s1", [make_message("a")])

        # Act
        result = await saver.flush()

        # Assert
        assert result is False
        assert saver.last_result is False

    async def test_raising_save_should_be_reported_as_false(self, make_message) -> None:
        """Test exceptions from the save callable do not escape flush()."""
        # Arrange
        async def broken(session_id, messages):
            raise RuntimeError("connection reset")

        saver = DebouncedSaver(broken, quiet_period=QUIET)
        saver.schedule("s1", [make_message("a")])

        # Act
        result = await saver.close()

        # Assert
        assert result is False


class OverlapTrackingSave:
    """Slow save callable that records the peak number of concurrent writes."""

    def __init__(self, duration: float) -> None:
        self.duration = duration
        self.active = 0
        self.peak = 0
        self.calls: list[list[str]] = []

    async def __call__(self, session_id, messages) -> bool:
        self.active += 1
        self.peak = max(self.peak, self.active)
        self.calls.append([m.text for m in messages])
        try:
            await asyncio.sleep(self.duration)
        finally:
            self.active -= 1
        return True


class TestFlushExclusion:
    """Test suite for mutations arriving while a flush is writing."""

    async def test_schedule_during_flush_should_not_start_parallel_save(self, make_message) -> None:
        """Test a snapshot scheduled mid-flush waits for the flush write to finish."""
        # Arrange
        save = OverlapTrackingSave(duration=0.2)
        saver = DebouncedSaver(save, quiet_period=0.01)
        saver.schedule("s1", [make_message("question")])

        # Act
        flush_task = asyncio.create_task(saver.flush())
        await asyncio.sleep(0.02)
        assert saver.is_saving
        saver.schedule("s1", [make_message("question"), make_message("answer", sender="bot")])
        await flush_task
        await asyncio.sleep(0.35)

        # Assert
        assert save.peak == 1
        assert save.calls == [["question"], ["question", "answer"]]

    async def test_close_should_write_snapshot_scheduled_during_its_flush(self, make_message) -> None:
        """Test close() does not drop a snapshot that arrived while it was saving."""
        # Arrange
        save = OverlapTrackingSave(duration=0.1)
        saver = DebouncedSaver(save, quiet_period=10.0)
        saver.schedule("s1", [make_message("a")])

        # Act
        close_task = asyncio.create_task(saver.close())
        await asyncio.sleep(0.02)
        saver.schedule("s1", [make_message("a"), make_message("b")])
        result = await close_task

        # Assert
        assert result is True
        assert save.peak == 1
        assert save.calls == [["a"], ["a", "b"]]
        assert not saver.has_pending
