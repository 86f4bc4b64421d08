# --------------------------------------------------------------------
# models/execution_outcome.py
# One record per dispatched command: what was sent and what came back.
# Consumed once by the outcome reporter, never stored.
# --------------------------------------------------------------------
from __future__ import annotations
from dataclasses import dataclass
from typing import Optional

from models.deal import Action
from models.outgoing_command import OutgoingCommand


@dataclass(frozen=True)
class ExecutionOutcome:
    action: Action
    command: OutgoingCommand
    url: str
    started_at: float   # time.monotonic()
    finished_at: float
    status: Optional[int] = None        # None when the transport failed
    body: Optional[str] = None
    error: Optional[BaseException] = None

    @property
    def is_transport_error(self) -> bool:
        return self.error is not None

    @property
    def is_success(self) -> bool:
        return self.error is None and self.status is not None and 200 <= self.status < 300
