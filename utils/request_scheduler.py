"""
Serialized, rate limited request queue for the Riot API.

Every outbound call goes through one FIFO queue drained by a single asyncio
task. Before each dispatch the drain loop checks two windows (per second and
per minute) and sleeps until both have room, so the upstream quota is never
exceeded from this process.
"""

import asyncio
import time
from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Awaitable, Callable, Deque, Dict, Optional

from constants.league_config import LEAGUE_CONFIG, RATE_LIMITS
from logger import setup_logger

logger = setup_logger("RequestScheduler")

SECOND_WINDOW = 1.0
MINUTE_WINDOW = 60.0
MIN_WAIT = 0.001


class SchedulerState(Enum):
    IDLE = "idle"
    AWAITING_SECOND_WINDOW = "awaiting_second_window"
    AWAITING_MINUTE_WINDOW = "awaiting_minute_window"
    DISPATCHING = "dispatching"


@dataclass
class PendingRequest:
    url: str
    options: Dict
    future: asyncio.Future


@dataclass
class RateWindow:
    """
    Dispatch times inside the current second and minute windows.

    A window closes one interval after the oldest dispatch it holds, which
    bounds every rolling interval rather than only fixed clock buckets.
    """

    per_second_limit: int
    per_minute_limit: int
    _second: Deque[float] = field(default_factory=deque, repr=False)
    _minute: Deque[float] = field(default_factory=deque, repr=False)

    @property
    def count_this_second(self) -> int:
        return len(self._second)

    @property
    def count_this_minute(self) -> int:
        return len(self._minute)

    @property
    def second_window_start(self) -> Optional[float]:
        return self._second[0] if self._second else None

    @property
    def minute_window_start(self) -> Optional[float]:
        return self._minute[0] if self._minute else None

    def prune(self, now: float) -> None:
        """Reset whichever windows the clock has moved past."""
        while self._second and now - self._second[0] >= SECOND_WINDOW:
            self._second.popleft()
        while self._minute and now - self._minute[0] >= MINUTE_WINDOW:
            self._minute.popleft()

    def second_full(self) -> bool:
        return self.count_this_second >= self.per_second_limit

    def minute_full(self) -> bool:
        return self.count_this_minute >= self.per_minute_limit

    def second_wait(self, now: float) -> float:
        return self._second[0] + SECOND_WINDOW - now

    def minute_wait(self, now: float) -> float:
        return self._minute[0] + MINUTE_WINDOW - now

    def record(self, now: float) -> None:
        self._second.append(now)
        self._minute.append(now)


class RequestScheduler:
    """
    FIFO request queue with a single drain loop and dual window admission.

    ``submit`` enqueues a request and waits for its outcome. At most one
    request is in flight; the next admission check only runs after the
    previous request settled plus ``request_delay``. A failing request
    rejects its own caller and the loop moves on to the next one.
    """

    def __init__(
        self,
        executor: Callable[[str, Dict], Awaitable[Any]],
        per_second_limit: int = RATE_LIMITS["personal"]["per_second"],
        per_minute_limit: int = RATE_LIMITS["personal"]["per_minute"],
        request_delay: float = LEAGUE_CONFIG["api"]["request_delay"],
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        if per_second_limit <= 0 or per_minute_limit <= 0:
            raise ValueError("Rate limits must be positive")

        self._executor = executor
        self._clock = clock
        self._sleep = sleep
        self.request_delay = request_delay

        self.window = RateWindow(per_second_limit, per_minute_limit)
        self.state = SchedulerState.IDLE

        self._queue: Deque[PendingRequest] = deque()
        self._is_processing = False
        self._worker: Optional[asyncio.Task] = None

        self._stats = {
            "dispatched": 0,
            "succeeded": 0,
            "failed": 0,
            "skipped": 0,
            "second_waits": 0,
            "minute_waits": 0,
        }

    @classmethod
    def for_tier(cls, executor, tier: str = "personal", **kwargs) -> "RequestScheduler":
        """Build a scheduler with the limits of a Riot API key tier."""
        limits = RATE_LIMITS[tier]
        return cls(
            executor,
            per_second_limit=limits["per_second"],
            per_minute_limit=limits["per_minute"],
            **kwargs,
        )

    @property
    def is_processing(self) -> bool:
        return self._is_processing

    @property
    def queue_size(self) -> int:
        return len(self._queue)

    async def submit(self, url: str, options: Optional[Dict] = None) -> Any:
        """
        Queue a request and wait for its result.

        Args:
            url: Endpoint URL handed to the executor
            options: Executor options (headers, params)

        Returns:
            Whatever the executor returns for this request

        Raises:
            Whatever the executor raised for this request
        """
        future = asyncio.get_running_loop().create_future()
        self._queue.append(PendingRequest(url, options or {}, future))
        self._ensure_worker()
        return await future

    def _ensure_worker(self) -> None:
        if self._is_processing:
            return
        self._is_processing = True
        self._worker = asyncio.create_task(self._process_queue())

    async def _process_queue(self) -> None:
        try:
            while self._queue:
                await self._admit()

                request = self._queue.popleft()
                if request.future.done():
                    # Caller went away before dispatch
                    self._stats["skipped"] += 1
                    continue

                await self._dispatch(request)

                if self._queue:
                    await self._sleep(self.request_delay)
        finally:
            self._is_processing = False
            self.state = SchedulerState.IDLE

    async def _admit(self) -> None:
        """Sleep until both rate windows have room for one more request."""
        while True:
            now = self._clock()
            self.window.prune(now)

            if self.window.second_full():
                self.state = SchedulerState.AWAITING_SECOND_WINDOW
                self._stats["second_waits"] += 1
                wait = self.window.second_wait(now)
                logger.debug(f"Per-second limit reached. Waiting {wait:.3f}s")
                await self._sleep(max(wait, MIN_WAIT))
                continue

            if self.window.minute_full():
                self.state = SchedulerState.AWAITING_MINUTE_WINDOW
                self._stats["minute_waits"] += 1
                wait = self.window.minute_wait(now)
                logger.warning(f"Per-minute limit reached. Waiting {wait:.1f}s")
                await self._sleep(max(wait, MIN_WAIT))
                continue

            return

    async def _dispatch(self, request: PendingRequest) -> None:
        self.state = SchedulerState.DISPATCHING
        self.window.record(self._clock())
        self._stats["dispatched"] += 1

        try:
            result = await self._executor(request.url, request.options)
        except asyncio.CancelledError:
            if not request.future.done():
                request.future.cancel()
            raise
        except Exception as e:
            self._stats["failed"] += 1
            logger.debug(f"Request failed: {request.url} ({e.__class__.__name__})")
            if not request.future.done():
                request.future.set_exception(e)
        else:
            self._stats["succeeded"] += 1
            if not request.future.done():
                request.future.set_result(result)

    async def close(self) -> None:
        """Stop the drain loop and cancel every queued request."""
        while self._queue:
            request = self._queue.popleft()
            if not request.future.done():
                request.future.cancel()
        if self._worker and not self._worker.done():
            self._worker.cancel()
            try:
                await self._worker
            except asyncio.CancelledError:
                pass
        self._worker = None

    def get_stats(self) -> Dict:
        """Get queue, window and dispatch statistics."""
        return {
            **self._stats,
            "state": self.state.value,
            "queue_size": len(self._queue),
            "requests_this_second": self.window.count_this_second,
            "requests_this_minute": self.window.count_this_minute,
            "per_second_limit": self.window.per_second_limit,
            "per_minute_limit": self.window.per_minute_limit,
        }
