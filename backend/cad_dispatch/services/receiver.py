"""Background receiver that feeds queued event payloads to the engine."""

import asyncio
import logging
from typing import Any, Awaitable, Callable

from cad_dispatch.config import get_settings
from cad_dispatch.schemas.state import StateResponse
from cad_dispatch.services.dispatcher import DispatchOutcome
from cad_dispatch.services.engine import DispatchEngine

logger = logging.getLogger(__name__)
settings = get_settings()

StateListener = Callable[[StateResponse], Awaitable[None]]


class ReceiverFullError(Exception):
    """The receiver queue is at capacity."""

    pass


class EventReceiver:
    """
    Single consumer of the inbound event stream.

    Transports call submit()/submit_nowait(); one background task takes
    payloads off the queue and applies them one at a time in delivery order.
    A bad payload is logged and skipped; the loop only ends on stop().
    """

    def __init__(
        self,
        engine: DispatchEngine,
        max_size: int = settings.event_queue_size,
        on_state_change: StateListener | None = None,
        log_state: bool = settings.log_state_after_event,
    ):
        self.engine = engine
        self.on_state_change = on_state_change
        self.log_state = log_state
        self._queue: asyncio.Queue[bytes | str | dict[str, Any]] = asyncio.Queue(maxsize=max_size)
        self._task: asyncio.Task | None = None
        self.processed = 0

    @property
    def pending(self) -> int:
        """Number of payloads waiting to be processed."""
        return self._queue.qsize()

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def submit_nowait(self, payload: bytes | str | dict[str, Any]) -> int:
        """Enqueue a payload. Raises ReceiverFullError if the queue is full."""
        try:
            self._queue.put_nowait(payload)
        except asyncio.QueueFull as e:
            raise ReceiverFullError(f"Event queue full ({self._queue.maxsize})") from e
        return self.pending

    async def submit(self, payload: bytes | str | dict[str, Any]) -> int:
        """Enqueue a payload, waiting for room if the queue is full."""
        await self._queue.put(payload)
        return self.pending

    def start(self) -> asyncio.Task:
        """Start the consumer task on the running loop."""
        if self.running:
            return self._task
        self._task = asyncio.create_task(self._consume(), name="dispatch-event-receiver")
        logger.info("Started receiver")
        return self._task

    async def stop(self, drain: bool = settings.drain_on_shutdown) -> None:
        """
        Stop the consumer.

        With drain=True everything already queued is applied first; otherwise
        pending payloads are abandoned. Events are never interrupted midway.
        """
        if self._task is None:
            return

        if drain and self.running:
            logger.info(f"Draining {self.pending} pending events")
            await self._queue.join()

        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
        logger.info(f"Receiver stopped after {self.processed} events")

    async def process_one(self, payload: bytes | str | dict[str, Any]) -> DispatchOutcome:
        """Apply a payload and notify the state listener."""
        logger.debug(f"Received a message: {payload!r}")
        outcome = self.engine.handle(payload)
        self.processed += 1

        if outcome.applied and (self.on_state_change or self.log_state):
            state = self.engine.snapshot()
            if self.log_state:
                logger.info(f"==> {state.model_dump_json(by_alias=True)}")
            if self.on_state_change:
                try:
                    await self.on_state_change(state)
                except Exception as e:
                    logger.error(f"State listener failed: {e}", exc_info=True)

        return outcome

    async def _consume(self) -> None:
        while True:
            payload = await self._queue.get()
            try:
                await self.process_one(payload)
            except Exception as e:
                logger.exception(f"Unexpected error processing event: {e}")
            finally:
                self._queue.task_done()
