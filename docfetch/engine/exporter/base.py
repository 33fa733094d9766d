"""Exporter Service Provider Interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Iterable


class BaseExporter(ABC):
    """Uniform contract for persisting one response body per identifier."""

    @abstractmethod
    def artifact_path(self, identifier: str) -> Path:
        """Return where the body fetched for ``identifier`` will be stored."""

    @abstractmethod
    def export(self, identifier: str, chunks: Iterable[bytes]) -> Path:
        """Persist the body and return the artifact path."""

    def close(self) -> None:
        """Release underlying resources."""


__all__ = ["BaseExporter"]
