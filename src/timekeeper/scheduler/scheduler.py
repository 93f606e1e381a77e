"""Scheduler - Runs the compliance check once or on a fixed interval."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from timekeeper.pipeline import RunResult

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL_SECONDS = 300


class Scheduler:
    """Invokes a check callable, optionally in a loop.

    Each invocation is a full, independent run. A failing run is logged and
    the loop carries on to the next interval.
    """

    def __init__(
        self,
        check: Callable[[], RunResult],
        interval_seconds: int = DEFAULT_INTERVAL_SECONDS,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        """Initialize the Scheduler.

        Args:
            check: Runs one compliance check.
            interval_seconds: Pause between runs in watch mode.
            sleep: Sleep function (replaced in tests).
        """
        self.check = check
        self.interval_seconds = interval_seconds
        self.sleep = sleep

    def run_once(self) -> RunResult:
        """Run a single check, propagating any failure."""
        return self.check()

    def run_forever(self, max_runs: int | None = None) -> int:
        """Run checks every ``interval_seconds``.

        Args:
            max_runs: Stop after this many runs (None = never stop).

        Returns:
            Number of runs performed.
        """
        runs = 0
        logger.info("Watching every %d seconds", self.interval_seconds)
        while max_runs is None or runs < max_runs:
            try:
                result = self.check()
                logger.info(
                    "Run %d: %d tasks missing time or status update",
                    runs + 1,
                    len(result.report.issues),
                )
            except Exception:
                logger.exception("Check failed")
            runs += 1
            if max_runs is not None and runs >= max_runs:
                break
            self.sleep(self.interval_seconds)
        return runs
