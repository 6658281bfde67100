"""Completion tracking for one publish run."""

import asyncio
import logging
from typing import Callable, Optional

from content_publisher.core.models import RunReport

logger = logging.getLogger(__name__)

CompletionCallback = Callable[[RunReport], None]


class TaskTracker:
    """Counts outstanding publish operations and fires completion once.

    One tracker is created per run. ``record_outcome`` never suspends
    between the decrement and the threshold check, so concurrent asyncio
    tasks cannot double-count; threaded callers would need a lock around it.
    """

    def __init__(self, on_complete: Optional[CompletionCallback] = None):
        self.on_complete = on_complete
        self.total = 0
        self.outstanding = 0
        self.successed = 0
        self.failed = 0
        self.report: Optional[RunReport] = None
        self._completed = True
        self._done = asyncio.Event()

    @property
    def done(self) -> bool:
        return self.outstanding <= 0

    def set_task(self, task: int) -> None:
        """Start a run with ``task`` outstanding operations.

        A run seeded with zero operations completes immediately.
        """
        self.total = task
        self.outstanding = task
        self.successed = 0
        self.failed = 0
        self.report = None
        self._completed = False
        self._done.clear()
        logger.debug("Seeded run with %d tasks", task)
        if self.done:
            self._complete()

    def record_outcome(self, ok: bool) -> None:
        """Record one finished operation and complete the run at zero."""
        if self._completed:
            logger.warning("Outcome recorded after run completion, ignoring")
            return

        self.outstanding -= 1
        if ok:
            self.successed += 1
        else:
            self.failed += 1

        if self.done:
            self._complete()

    def clear_task(self) -> None:
        self.outstanding = 0
        self.successed = 0
        self.failed = 0

    async def wait(self) -> RunReport:
        """Wait until the run completes and return its report."""
        await self._done.wait()
        return self.report

    def _complete(self) -> None:
        self._completed = True
        self.report = RunReport(total=self.total, successed=self.successed, failed=self.failed)
        logger.info(
            "Run complete: %d succeeded, %d failed of %d",
            self.report.successed, self.report.failed, self.report.total,
        )
        try:
            if self.on_complete is not None:
                self.on_complete(self.report)
        finally:
            self.clear_task()
            self._done.set()
