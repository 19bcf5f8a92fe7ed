# bot/core/state.py
from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable

log = logging.getLogger(__name__)

PENDING = "pending"
FIRED = "fired"
CANCELLED = "cancelled"


class GraceTimer:
    """
    One-shot deferred action for a single user.

    States:
    - pending   -> sleeping until the grace period runs out
    - fired     -> sleep finished, action started (cannot be cancelled anymore)
    - cancelled -> stopped before firing, action never runs
    """

    def __init__(self, user_id: int, channel_id: int, delay: float, started_at: float):
        self.user_id = user_id
        self.channel_id = channel_id
        self.delay = delay
        self.started_at = started_at
        self.state = PENDING
        self.task: asyncio.Task | None = None

    @property
    def pending(self) -> bool:
        return self.state == PENDING

    def cancel(self) -> bool:
        if self.state != PENDING:
            return False
        self.state = CANCELLED
        if self.task is not None:
            self.task.cancel()
        return True

    def __repr__(self) -> str:
        return f"<GraceTimer user={self.user_id} channel={self.channel_id} state={self.state}>"


class GracePeriodTracker:
    """
    Runtime-only map of user_id -> pending GraceTimer.

    At most one live timer per user. start() replaces, cancel() removes,
    and a fired timer removes itself whether its action worked or not.
    No awaits happen between check and replace, so events for the same
    user can't interleave inside start()/cancel().
    """

    def __init__(self, grace_seconds: float):
        self.grace_seconds = float(grace_seconds)
        self._entries: dict[int, GraceTimer] = {}

    def __contains__(self, user_id: int) -> bool:
        return user_id in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, user_id: int) -> GraceTimer | None:
        return self._entries.get(user_id)

    def active_ids(self) -> list[int]:
        return list(self._entries.keys())

    def start(
        self,
        user_id: int,
        channel_id: int,
        action: Callable[[], Awaitable[None]],
    ) -> GraceTimer:
        self.cancel(user_id)

        loop = asyncio.get_running_loop()
        timer = GraceTimer(user_id, channel_id, self.grace_seconds, loop.time())
        timer.task = loop.create_task(self._run(timer, action), name=f"grace-{user_id}")
        self._entries[user_id] = timer

        log.info("[CamGuard] ⏰ grace period started: user=%s channel=%s (%ss)", user_id, channel_id, self.grace_seconds)
        return timer

    def cancel(self, user_id: int) -> bool:
        timer = self._entries.pop(user_id, None)
        if timer is None:
            return False

        cancelled = timer.cancel()
        if cancelled:
            log.info("[CamGuard] ✅ grace period cleared: user=%s", user_id)
        return cancelled

    def cancel_all(self) -> int:
        count = 0
        for user_id in list(self._entries.keys()):
            if self.cancel(user_id):
                count += 1
        return count

    def _discard(self, timer: GraceTimer) -> None:
        # only drop the entry if it hasn't been replaced by a newer timer
        if self._entries.get(timer.user_id) is timer:
            del self._entries[timer.user_id]

    async def _run(self, timer: GraceTimer, action: Callable[[], Awaitable[None]]) -> None:
        try:
            await asyncio.sleep(timer.delay)
        except asyncio.CancelledError:
            self._discard(timer)
            return

        if timer.state != PENDING:
            self._discard(timer)
            return

        timer.state = FIRED
        try:
            await action()
        except Exception:
            log.exception("[CamGuard] ❌ grace action failed: user=%s", timer.user_id)
        finally:
            self._discard(timer)
