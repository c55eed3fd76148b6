"""
Debounced message-log saver.

Every mutation of the in-memory log calls schedule(); the write happens only
after a quiet period with no further mutations. While a write is in flight,
no timer is armed; the latest snapshot is kept and rescheduled once the write
completes. flush() forces the pending snapshot out immediately and is called
on session switch, new chat and connection close.

Dependencies: asyncio
System role: Conversation-level persistence pacing
"""

import asyncio
import logging
from typing import Awaitable, Callable, Sequence

from docchat.models.chat import ChatMessage

logger = logging.getLogger(__name__)

SaveFunction = Callable[[str, list[ChatMessage]], Awaitable[bool]]


class DebouncedSaver:
    """Coalesces bursts of log mutations into one save per quiet period."""

    def __init__(self, save: SaveFunction, quiet_period: float = 1.0) -> None:
        """
        Initialize saver.

        Args:
            save: Coroutine function persisting (session_id, messages)
            quiet_period: Seconds without mutations before a save fires
        """
        self._save = save
        self._quiet_period = quiet_period
        self._timer: asyncio.Task | None = None
        self._in_flight: asyncio.Task | None = None
        self._pending: tuple[str, list[ChatMessage]] | None = None
        self.last_result: bool | None = None

    @property
    def is_saving(self) -> bool:
        return self._in_flight is not None and not self._in_flight.done()

    @property
    def has_pending(self) -> bool:
        return self._pending is not None

    def schedule(self, session_id: str, messages: Sequence[ChatMessage]) -> None:
        """
        Record a snapshot and restart the quiet period.

        Args:
            session_id: Session the snapshot belongs to
            messages: Full message log
        """
        self._pending = (session_id, list(messages))
        self._cancel_timer()
        if self.is_saving:
            return
        self._timer = asyncio.create_task(self._wait_then_save())

    async def flush(self) -> bool:
        """
        Write the pending snapshot now.

        Waits for an in-flight save first, then runs the write as the
        in-flight save so schedule() calls made meanwhile are held back.

        Returns:
            bool: Result of the last write, True when nothing was pending
        """
        self._cancel_timer()
        while self.is_saving:
            await self._in_flight
            self._cancel_timer()

        if self._pending is None:
            return True if self.last_result is None else self.last_result

        session_id, messages = self._pending
        self._pending = None
        self._in_flight = asyncio.create_task(self._save_and_reschedule(session_id, messages))
        return await self._in_flight

    async def close(self) -> bool:
        """Flush until nothing is pending, then drop any timer."""
        result = await self.flush()
        while self._pending is not None:
            result = await self.flush()
        self._cancel_timer()
        return result

    def _cancel_timer(self) -> None:
        if self._timer is not None and not self._timer.done():
            self._timer.cancel()
        self._timer = None

    async def _wait_then_save(self) -> None:
        await asyncio.sleep(self._quiet_period)
        self._timer = None
        if self._pending is None or self.is_saving:
            return
        session_id, messages = self._pending
        self._pending = None
        self._in_flight = asyncio.create_task(self._save_and_reschedule(session_id, messages))

    async def _save_and_reschedule(self, session_id: str, messages: list[ChatMessage]) -> bool:
        try:
            return await self._run_save(session_id, messages)
        finally:
            if self._pending is not None:
                self._timer = asyncio.create_task(self._wait_then_save())

    async def _run_save(self, session_id: str, messages: list[ChatMessage]) -> bool:
        try:
            result = await self._save(session_id, messages)
        except Exception as e:
            logger.error(
                f"{__name__}:_run_save - Debounced save failed for session {session_id}: {e}",
                exc_info=True,
            )
            result = False
        if not result:
            logger.warning(f"{__name__}:_run_save - Message log for session {session_id} was not saved")
        self.last_result = result
        return result
