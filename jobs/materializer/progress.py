"""Observadores de progreso (fire-and-forget).

Reemplazan la barra de progreso de consola: el core solo notifica, nunca
lee un valor de retorno.
"""

from __future__ import annotations

import logging
from typing import Optional, Protocol

logger = logging.getLogger(__name__)


class ProgressObserver(Protocol):
    def on_run_started(self, total_records: int) -> None:
        ...

    def on_record_processed(self) -> None:
        ...

    def on_iteration_complete(self, iteration: int, total: int) -> None:
        ...


class NullProgressObserver:
    """No hace nada. Default del runner y del benchmark."""

    def on_run_started(self, total_records: int) -> None:
        return None

    def on_record_processed(self) -> None:
        return None

    def on_iteration_complete(self, iteration: int, total: int) -> None:
        return None


class LoggingProgressObserver:
    """Loguea cada ``every`` registros procesados y cada iteración del benchmark."""

    def __init__(self, every: int = 1000, log: Optional[logging.Logger] = None):
        self._every = max(1, every)
        self._log = log or logger
        self._total: Optional[int] = None
        self.processed = 0

    def on_run_started(self, total_records: int) -> None:
        self._total = total_records
        self.processed = 0

    def on_record_processed(self) -> None:
        self.processed += 1
        if self.processed % self._every == 0 or self.processed == self._total:
            self._log.info("materialize_progress processed=%d total=%s", self.processed, self._total)

    def on_iteration_complete(self, iteration: int, total: int) -> None:
        self._log.info("Iteration %d/%d finished", iteration, total)
