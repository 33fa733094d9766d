"""Engine components wiring source → queue → workers → fetch → export."""

from .exporter import BaseExporter, FileExporter, artifact_name
from .fetcher import FetchResult, Fetcher, build_target_url, client_options
from .source import IdSource, read_identifiers
from .thread_pool import WorkerPool
from .work_queue import WorkQueue
from .worker import Worker, WorkerState

__all__ = [
    "BaseExporter",
    "FetchResult",
    "Fetcher",
    "FileExporter",
    "IdSource",
    "WorkQueue",
    "Worker",
    "WorkerPool",
    "WorkerState",
    "artifact_name",
    "build_target_url",
    "client_options",
    "read_identifiers",
]
