"""Shared fixtures: a local config, a fake HTTP endpoint and a recording logger."""

from __future__ import annotations

from pathlib import Path
from threading import Lock
from typing import Any, Callable, Iterable

import httpx
import pytest

from docfetch.config import FetchConfig
from docfetch.engine import Fetcher

ENDPOINT_ROOT = "http://docs.test/Resumo/ResumoVisualizar?NrSolicitacao="


class RecordingLogger:
    """Stand-in for a structlog bound logger collecting (level, event, fields)."""

    def __init__(self, records: list[tuple[str, str, dict[str, Any]]] | None = None, **bound: Any) -> None:
        self.records = records if records is not None else []
        self.bound = bound
        self._lock = Lock()

    def bind(self, **fields: Any) -> "RecordingLogger":
        child = RecordingLogger(self.records, **{**self.bound, **fields})
        child._lock = self._lock
        return child

    def _log(self, level: str, event: str, **fields: Any) -> None:
        with self._lock:
            self.records.append((level, event, {**self.bound, **fields}))

    def debug(self, event: str, **fields: Any) -> None:
        self._log("debug", event, **fields)

    def info(self, event: str, **fields: Any) -> None:
        self._log("info", event, **fields)

    def warning(self, event: str, **fields: Any) -> None:
        self._log("warning", event, **fields)

    def error(self, event: str, **fields: Any) -> None:
        self._log("error", event, **fields)

    def events(self, event: str) -> list[dict[str, Any]]:
        return [fields for _level, name, fields in self.records if name == event]


class FakeEndpoint:
    """MockTransport handler answering per identifier and recording requests."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.routes: dict[str, Callable[[httpx.Request], httpx.Response]] = {}
        self._lock = Lock()

    def __call__(self, request: httpx.Request) -> httpx.Response:
        with self._lock:
            self.requests.append(request)
        identifier = request.url.params.get("NrSolicitacao", "")
        route = self.routes.get(identifier)
        if route is not None:
            return route(request)
        return httpx.Response(200, content=f"body:{identifier}".encode(), request=request)

    @property
    def requested_identifiers(self) -> list[str]:
        return [request.url.params.get("NrSolicitacao", "") for request in self.requests]


@pytest.fixture
def output_dir(tmp_path: Path) -> Path:
    directory = tmp_path / "DATUMS"
    directory.mkdir()
    return directory


@pytest.fixture
def fetch_config(tmp_path: Path, output_dir: Path) -> Callable[..., FetchConfig]:
    def _builder(**overrides: Any) -> FetchConfig:
        base: dict[str, Any] = {
            "input_path": tmp_path / "ids.txt",
            "output_dir": output_dir,
            "proxy": None,
            "endpoint_root": ENDPOINT_ROOT,
            "workers": 3,
            "timeout": 5.0,
        }
        base.update(overrides)
        return FetchConfig(**base)

    return _builder


@pytest.fixture
def endpoint() -> FakeEndpoint:
    return FakeEndpoint()


@pytest.fixture
def mock_client(endpoint: FakeEndpoint) -> Iterable[httpx.Client]:
    client = httpx.Client(transport=httpx.MockTransport(endpoint), follow_redirects=True)
    yield client
    client.close()


@pytest.fixture
def fetcher(fetch_config, mock_client: httpx.Client) -> Callable[..., Fetcher]:
    def _builder(config: FetchConfig | None = None) -> Fetcher:
        return Fetcher(config or fetch_config(), client=mock_client)

    return _builder


@pytest.fixture
def recording_logger() -> RecordingLogger:
    return RecordingLogger()


@pytest.fixture
def write_ids(tmp_path: Path) -> Callable[[Iterable[str]], Path]:
    def _write(lines: Iterable[str], name: str = "ids.txt") -> Path:
        path = tmp_path / name
        path.write_text("".join(f"{line}\n" for line in lines), encoding="utf-8")
        return path

    return _write
