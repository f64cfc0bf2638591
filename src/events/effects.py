"""
Best-effort side effects of the event and RSVP workflows.

Confirmation emails and asset cleanup run as detached tasks. Their outcome
is recorded in an EffectLog and logged; it never reaches the result of the
operation that spawned them.
"""

import asyncio
import logging
from collections import deque
from collections.abc import Coroutine
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

from src.errors import BestEffortFailure

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EffectOutcome:
    """Outcome of one best-effort side effect."""

    name: str
    succeeded: bool
    failure: BestEffortFailure | None = None
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))


class EffectLog:
    """Bounded in-memory record of side-effect outcomes."""

    def __init__(self, max_entries: int = 500) -> None:
        self._entries: deque[EffectOutcome] = deque(maxlen=max_entries)

    def record(self, outcome: EffectOutcome) -> None:
        self._entries.append(outcome)

    def entries(self) -> list[EffectOutcome]:
        return list(self._entries)

    def failures(self) -> list[EffectOutcome]:
        return [entry for entry in self._entries if not entry.succeeded]


class SideEffectRunner:
    def __init__(self, effect_log: EffectLog | None = None) -> None:
        self.effect_log = effect_log or EffectLog()
        # Strong references so pending tasks are not garbage collected
        self._pending: set[asyncio.Task] = set()

    def spawn(self, name: str, coro: Coroutine[Any, Any, Any]) -> asyncio.Task:
        task = asyncio.create_task(self._run(name, coro), name=name)
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    async def drain(self) -> None:
        """Wait for every pending side effect to finish."""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    async def _run(self, name: str, coro: Coroutine[Any, Any, Any]) -> None:
        try:
            await coro
        except Exception as e:
            failure = BestEffortFailure(name, e)
            logger.warning("Side effect %s failed: %s", name, e)
            self.effect_log.record(EffectOutcome(name=name, succeeded=False, failure=failure))
        else:
            logger.debug("Side effect %s completed", name)
            self.effect_log.record(EffectOutcome(name=name, succeeded=True))


effect_log = EffectLog()
side_effects = SideEffectRunner(effect_log)
