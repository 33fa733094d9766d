"""Pydantic models describing a docfetch run."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import httpx
from pydantic import BaseModel, Field, field_validator, model_validator

DEFAULT_ENDPOINT_ROOT = (
    "http://www3.mte.gov.br/sistemas/mediador/Resumo/ResumoVisualizar?NrSolicitacao="
)
DEFAULT_PROXY = "http://177.185.240.241:80"


class FetchConfig(BaseModel):
    """Everything a worker pool needs to fetch and persist a list of identifiers."""

    input_path: Path = Field(default=Path("ids.txt"))
    output_dir: Path = Field(default=Path("DATUMS"))
    proxy: str | None = DEFAULT_PROXY
    endpoint_root: str = DEFAULT_ENDPOINT_ROOT
    workers: int = 10
    queue_size: int | None = Field(
        default=None,
        description="Capacity of the work queue; defaults to the worker count.",
    )
    timeout: float | None = Field(
        default=30.0,
        description="Per-request deadline in seconds; null waits forever.",
    )
    accept_error_status: bool = False
    separator: str = "/"
    separator_replacement: str = "-"
    chunk_size: int = 64 * 1024
    log_dir: Path | None = None

    @field_validator("input_path", "output_dir", mode="before")
    @classmethod
    def _coerce_paths(cls, value: Any) -> Path:
        if value is None or value == "":
            raise ValueError("path cannot be empty")
        return Path(value)

    @field_validator("log_dir", mode="before")
    @classmethod
    def _coerce_log_dir(cls, value: Any) -> Path | None:
        if value in (None, ""):
            return None
        return Path(value)

    @field_validator("proxy", mode="before")
    @classmethod
    def _normalise_proxy(cls, value: Any) -> str | None:
        if value in (None, ""):
            return None
        text = str(value).strip()
        try:
            url = httpx.URL(text)
        except httpx.InvalidURL as exc:
            raise ValueError(f"Invalid proxy URL: {text}") from exc
        if url.scheme not in ("http", "https", "socks5") or not url.host:
            raise ValueError(f"Proxy must be an absolute http(s)/socks5 URL: {text}")
        return text

    @field_validator("endpoint_root")
    @classmethod
    def _validate_endpoint(cls, value: str) -> str:
        try:
            url = httpx.URL(value)
        except httpx.InvalidURL as exc:
            raise ValueError(f"Invalid endpoint root: {value}") from exc
        if url.scheme not in ("http", "https") or not url.host:
            raise ValueError(f"Endpoint root must be an absolute http(s) URL: {value}")
        return value

    @model_validator(mode="after")
    def _validate_limits(self) -> "FetchConfig":
        if self.workers < 1:
            raise ValueError("workers must be >= 1")
        if self.queue_size is not None and self.queue_size < 1:
            raise ValueError("queue_size must be >= 1")
        if self.timeout is not None and self.timeout <= 0:
            raise ValueError("timeout must be > 0")
        if self.chunk_size < 1:
            raise ValueError("chunk_size must be >= 1")
        if not self.separator:
            raise ValueError("separator cannot be empty")
        if self.separator in self.separator_replacement:
            raise ValueError("separator_replacement cannot contain the separator")
        return self

    @property
    def queue_capacity(self) -> int:
        return self.queue_size or self.workers


__all__ = ["DEFAULT_ENDPOINT_ROOT", "DEFAULT_PROXY", "FetchConfig"]
