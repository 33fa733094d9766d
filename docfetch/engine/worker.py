"""Worker loop consuming identifiers from the shared queue."""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Iterable

import structlog

from ..errors import QueueClosedError
from .exporter import BaseExporter
from .fetcher import Fetcher
from .work_queue import WorkQueue


class WorkerState(str, Enum):
    IDLE = "idle"
    FETCHING = "fetching"
    WRITING = "writing"
    TERMINATED = "terminated"


class Worker:
    """Take one identifier at a time until the queue is closed and drained.

    Failures are per identifier: they are logged and the loop moves on.
    """

    def __init__(
        self,
        name: str,
        work_queue: WorkQueue[str],
        fetcher: Fetcher,
        exporter: BaseExporter,
        logger: structlog.BoundLogger,
    ) -> None:
        self.name = name
        self.work_queue = work_queue
        self.fetcher = fetcher
        self.exporter = exporter
        self.logger = logger.bind(worker=name)
        self.state = WorkerState.IDLE
        self.processed = 0

    def run(self) -> None:
        while True:
            try:
                identifier = self.work_queue.get()
            except QueueClosedError:
                self._transition(WorkerState.TERMINATED)
                return
            self.process(identifier)

    def process(self, identifier: str) -> None:
        self._transition(WorkerState.FETCHING, identifier=identifier)
        try:
            result = self.fetcher.fetch(identifier, _StateTrackingExporter(self))
        except Exception as exc:  # noqa: BLE001
            self.logger.error(
                "fetch_failed",
                identifier=identifier,
                error=str(exc),
                error_type=type(exc).__name__,
            )
        else:
            self.logger.debug(
                "fetch_succeeded",
                identifier=identifier,
                status=result.status_code,
                path=str(result.path),
            )
        finally:
            self.processed += 1
            self._transition(WorkerState.IDLE)

    def _transition(self, state: WorkerState, **fields: object) -> None:
        self.state = state
        self.logger.debug("worker_state", state=state.value, **fields)


class _StateTrackingExporter(BaseExporter):
    """Flip the owning worker to WRITING once the body starts being persisted."""

    def __init__(self, worker: Worker) -> None:
        self._worker = worker
        self._inner = worker.exporter

    def artifact_path(self, identifier: str) -> Path:
        return self._inner.artifact_path(identifier)

    def export(self, identifier: str, chunks: Iterable[bytes]) -> Path:
        self._worker._transition(WorkerState.WRITING, identifier=identifier)
        return self._inner.export(identifier, chunks)


__all__ = ["Worker", "WorkerState"]
