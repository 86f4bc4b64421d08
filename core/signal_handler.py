from __future__ import annotations

import asyncio
import logging
from typing import List, Optional, Set

from models.deal import translate
from models.execution_outcome import ExecutionOutcome
from models.settings import Settings
from models.signal import IncomingSignal
from modules.dispatcher import BotDispatcher
from modules.outcome_reporter import report_outcome

logger = logging.getLogger(__name__)


class SignalHandler:
    """
    Runs one background task per inbound signal.

    The HTTP listener calls :meth:`submit` and answers its caller straight
    away; the outcome of the outbound commands is only ever logged.
    :meth:`drain` waits for every task still in flight.
    """

    def __init__(
        self,
        settings: Settings,
        *,
        dispatcher: Optional[BotDispatcher] = None,
        server: Optional[str] = None,
    ) -> None:
        self.settings = settings
        self.dispatcher = dispatcher or BotDispatcher(settings)
        self.server = server
        self._tasks: Set[asyncio.Task] = set()

    async def handle(self, signal: IncomingSignal) -> List[ExecutionOutcome]:
        """Translate, dispatch both commands in order, report each as it lands."""
        logger.info("Got signal: %s", signal)
        pair = translate(signal.action)
        return await self.dispatcher.execute_pair(
            pair, server=self.server, on_outcome=report_outcome
        )

    def submit(self, signal: IncomingSignal) -> asyncio.Task:
        task = asyncio.create_task(self.handle(signal))
        self._tasks.add(task)
        task.add_done_callback(self._on_done)
        return task

    @property
    def pending(self) -> int:
        return len(self._tasks)

    async def drain(self) -> None:
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    def _on_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error("Signal task crashed", exc_info=exc)
