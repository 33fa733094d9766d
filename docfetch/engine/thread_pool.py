"""Bounded worker pool fanning identifiers out to fetch-and-save workers."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor, wait
from pathlib import Path
from typing import Iterable

import structlog

from ..config import FetchConfig
from ..errors import InputSourceError
from ..logging_conf import get_logger
from .exporter import BaseExporter, FileExporter
from .fetcher import Fetcher
from .source import IdSource
from .work_queue import WorkQueue
from .worker import Worker


class WorkerPool:
    """Start N workers, feed them from the calling thread, wait for all to exit.

    The pool reports no per-item results; individual failures only show up in
    the log. ``run`` returns once every enqueued identifier has been handled.
    """

    def __init__(
        self,
        config: FetchConfig,
        fetcher: Fetcher | None = None,
        exporter: BaseExporter | None = None,
        logger: structlog.BoundLogger | None = None,
    ) -> None:
        self.config = config
        self.logger = logger or get_logger("pool")
        self._owns_fetcher = fetcher is None
        self.fetcher = fetcher or Fetcher(config)
        self.exporter = exporter or FileExporter(
            config.output_dir, config.separator, config.separator_replacement
        )
        self.workers: list[Worker] = []

    def close(self) -> None:
        if self._owns_fetcher:
            self.fetcher.close()
        self.exporter.close()

    def __enter__(self) -> "WorkerPool":
        return self

    def __exit__(self, *_exc_info: object) -> None:
        self.close()

    def run_file(self, path: Path | None = None) -> None:
        """Process every identifier listed in ``path`` (defaults to the configured input)."""

        # Opening first means a missing input fails before any worker starts.
        source = IdSource(path or self.config.input_path)
        with source:
            self.run(source)

    def run(self, identifiers: Iterable[str]) -> None:
        work_queue: WorkQueue[str] = WorkQueue(self.config.queue_capacity)
        if not self.config.output_dir.is_dir():
            self.logger.warning("output_dir_missing", output_dir=str(self.config.output_dir))
        self.workers = [
            Worker(f"worker-{index}", work_queue, self.fetcher, self.exporter, self.logger)
            for index in range(self.config.workers)
        ]
        self.logger.info(
            "pool_started",
            workers=self.config.workers,
            queue_capacity=work_queue.capacity,
        )
        enqueued = 0
        with ThreadPoolExecutor(
            max_workers=self.config.workers, thread_name_prefix="docfetch"
        ) as executor:
            futures = [executor.submit(worker.run) for worker in self.workers]
            try:
                for identifier in identifiers:
                    work_queue.put(identifier)
                    enqueued += 1
            except InputSourceError as exc:
                dropped = work_queue.cancel()
                self.logger.error(
                    "input_aborted", error=str(exc), enqueued=enqueued, dropped=dropped
                )
                raise
            except BaseException:
                work_queue.cancel()
                raise
            else:
                work_queue.close()
            finally:
                # Workers finish their in-flight item before the executor exits.
                wait(futures)
        for future in futures:
            # Surface unexpected crashes of the worker loop itself.
            future.result()
        self.logger.info("pool_finished", enqueued=enqueued)


__all__ = ["WorkerPool"]
