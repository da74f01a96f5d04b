"""
Failure handlers receive analysis failures out of band.

The orchestrator calls `handle` for every strategy that fails and ignores
whatever the handler does with it.
"""

import logging
from typing import Protocol

from shared.errors import AnalysisFailure, CannotInterpretInput

logger = logging.getLogger("failure_handler")


class FailureHandler(Protocol):
    """Sink for failures raised by analysis strategies."""

    def handle(self, failure: AnalysisFailure) -> None:
        ...


class LoggingFailureHandler:
    """
    Logs every failure and keeps a history for inspection.

    CannotInterpretInput is expected during normal fallback and is logged
    as a warning; any other analysis failure is logged as an error.
    """

    def __init__(self):
        self.handled: list[AnalysisFailure] = []

    def handle(self, failure: AnalysisFailure) -> None:
        self.handled.append(failure)
        if isinstance(failure, CannotInterpretInput):
            logger.warning(f"Strategy could not interpret input: {failure}")
        else:
            logger.error(f"Strategy failed: {failure}")

    def get_handled_count(self) -> int:
        return len(self.handled)

    def clear_history(self):
        self.handled.clear()
