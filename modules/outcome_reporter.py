"""
outcome_reporter.py
-------------------
Classifies each ExecutionOutcome and writes the operator-facing log record.
Purely observability: nothing here retries or raises.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from models.execution_outcome import ExecutionOutcome

_logger = logging.getLogger(__name__)


def report_outcome(
    outcome: ExecutionOutcome, logger: Optional[logging.Logger] = None
) -> bool:
    """Log one outcome. Returns the success classification."""
    log = logger or _logger
    deal = outcome.action.deal.value
    role = outcome.action.role.value
    bot_id = outcome.command.bot_id

    if outcome.is_success:
        log.info("✅ %s request to %s bot %s successful", deal, role, bot_id)
        return True

    if outcome.is_transport_error:
        log.warning(
            "❌ %s request to %s bot %s failed: transport error", deal, role, bot_id
        )
        log.debug("Transport error for %s: %r", outcome.url, outcome.error)
    else:
        log.warning(
            "❌ %s request to %s bot %s failed: HTTP %s", deal, role, bot_id, outcome.status
        )
        log.debug("Result content: %s", outcome.body)
    return False


def report_outcomes(
    outcomes: Iterable[ExecutionOutcome], logger: Optional[logging.Logger] = None
) -> int:
    """Report every outcome; returns how many succeeded."""
    return sum(1 for o in outcomes if report_outcome(o, logger))
