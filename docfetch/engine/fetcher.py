"""HTTP fetching through the configured forward proxy."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import httpx
import structlog

from ..config import FetchConfig
from ..errors import ResponseStatusError, TargetURLError
from ..logging_conf import get_logger
from .exporter import BaseExporter


def build_target_url(endpoint_root: str, identifier: str) -> str:
    """Join the endpoint root and the raw identifier, without any escaping."""

    target = f"{endpoint_root}{identifier}"
    try:
        url = httpx.URL(target)
    except (httpx.InvalidURL, UnicodeError) as exc:
        raise TargetURLError(identifier, f"Malformed target URL {target!r}: {exc}") from exc
    if not url.is_absolute_url or not url.host:
        raise TargetURLError(identifier, f"Target URL is not absolute: {target!r}")
    return target


def client_options(config: FetchConfig) -> dict[str, Any]:
    """Keyword arguments used to build the shared :class:`httpx.Client`."""

    return {
        "proxy": config.proxy,
        "timeout": httpx.Timeout(config.timeout),
        "follow_redirects": True,
        "trust_env": False,
    }


@dataclass(slots=True)
class FetchResult:
    """Outcome of one successful fetch-and-write."""

    identifier: str
    url: str
    status_code: int
    path: Path


class Fetcher:
    """Issue one GET per identifier and hand the streamed body to an exporter."""

    def __init__(
        self,
        config: FetchConfig,
        client: httpx.Client | None = None,
        logger: structlog.BoundLogger | None = None,
    ) -> None:
        self.config = config
        self.logger = logger or get_logger("fetcher")
        self._owns_client = client is None
        self._client = client or httpx.Client(**client_options(config))

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "Fetcher":
        return self

    def __exit__(self, *_exc_info: object) -> None:
        self.close()

    def fetch(self, identifier: str, exporter: BaseExporter) -> FetchResult:
        url = build_target_url(self.config.endpoint_root, identifier)
        with self._client.stream("GET", url) as response:
            if not response.is_success and not self.config.accept_error_status:
                raise ResponseStatusError(identifier, response.status_code, url)
            path = exporter.export(
                identifier, response.iter_bytes(chunk_size=self.config.chunk_size)
            )
        return FetchResult(
            identifier=identifier,
            url=url,
            status_code=response.status_code,
            path=path,
        )


__all__ = ["FetchResult", "Fetcher", "build_target_url", "client_options"]
