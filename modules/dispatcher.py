"""
dispatcher.py
-------------
Sends OutgoingCommands to the 3Commas trade-signal endpoint.

A pair is executed strictly in order: the start command is only sent once the
close command's attempt has finished, whatever its result.
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Callable, List, Optional

import aiohttp

from models.deal import Action, ActionPair
from models.execution_outcome import ExecutionOutcome
from models.outgoing_command import OutgoingCommand
from models.settings import Settings

JSON_HEADERS = {"Content-Type": "application/json"}

OutcomeCallback = Callable[[ExecutionOutcome], object]


class BotDispatcher:
    """Executes bot commands over HTTP and turns every attempt into an outcome."""

    def __init__(
        self,
        settings: Settings,
        logger: Optional[logging.Logger] = None,
        *,
        server: Optional[str] = None,
    ) -> None:
        self.settings = settings
        self.logger = logger or logging.getLogger(self.__class__.__name__)
        self.server = (server or settings.request_server).rstrip("/")

        self.metrics = {
            "requests_sent": 0,
            "errors": 0,
        }

    def url_for(self, server: Optional[str] = None) -> str:
        base = server.rstrip("/") if server else self.server
        return f"{base}{self.settings.request_path}"

    # -------------------------------------------------------------------- #
    async def execute(
        self,
        session: aiohttp.ClientSession,
        action: Action,
        command: OutgoingCommand,
        *,
        server: Optional[str] = None,
    ) -> ExecutionOutcome:
        """POST one command. Transport failures are captured, never raised."""
        url = self.url_for(server)
        body = command.to_json()
        self.logger.info("Executing %s request with: %s", action, body)

        started = time.monotonic()
        try:
            async with session.post(url, data=body, headers=JSON_HEADERS) as resp:
                self.metrics["requests_sent"] += 1
                text = await resp.text(errors="replace")
                status = resp.status
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            self.metrics["errors"] += 1
            return ExecutionOutcome(
                action=action,
                command=command,
                url=url,
                started_at=started,
                finished_at=time.monotonic(),
                error=exc,
            )

        if not 200 <= status < 300:
            self.metrics["errors"] += 1
        return ExecutionOutcome(
            action=action,
            command=command,
            url=url,
            started_at=started,
            finished_at=time.monotonic(),
            status=status,
            body=text,
        )

    async def execute_pair(
        self,
        pair: ActionPair,
        *,
        server: Optional[str] = None,
        session: Optional[aiohttp.ClientSession] = None,
        on_outcome: Optional[OutcomeCallback] = None,
    ) -> List[ExecutionOutcome]:
        """
        Build and send both commands of ``pair`` one after the other.

        ``on_outcome`` is called with each outcome as soon as its request has
        finished, before the next command is sent.
        """
        if session is None:
            async with aiohttp.ClientSession() as own_session:
                return await self._run_pair(own_session, pair, server, on_outcome)
        return await self._run_pair(session, pair, server, on_outcome)

    async def _run_pair(
        self,
        session: aiohttp.ClientSession,
        pair: ActionPair,
        server: Optional[str],
        on_outcome: Optional[OutcomeCallback],
    ) -> List[ExecutionOutcome]:
        outcomes: List[ExecutionOutcome] = []
        for action in pair:
            command = OutgoingCommand.from_action(action, self.settings)
            outcome = await self.execute(session, action, command, server=server)
            if on_outcome is not None:
                on_outcome(outcome)
            outcomes.append(outcome)
        return outcomes
