"""Exception types shared across docfetch."""

from __future__ import annotations


class DocfetchError(Exception):
    """Base class for docfetch errors."""


class InputSourceError(DocfetchError):
    """The identifier list could not be opened or read. Fatal for a run."""


class QueueClosedError(DocfetchError):
    """Raised by the work queue once it is closed (and drained, for readers)."""


class FetchError(DocfetchError):
    """Per-identifier failure; logged and skipped by workers."""

    def __init__(self, identifier: str, message: str) -> None:
        super().__init__(message)
        self.identifier = identifier


class TargetURLError(FetchError):
    """The endpoint root joined with the identifier is not a valid URL."""


class ResponseStatusError(FetchError):
    """The server answered with a non-success status code."""

    def __init__(self, identifier: str, status_code: int, url: str) -> None:
        super().__init__(identifier, f"Unexpected status {status_code} for {url}")
        self.status_code = status_code
        self.url = url


__all__ = [
    "DocfetchError",
    "FetchError",
    "InputSourceError",
    "QueueClosedError",
    "ResponseStatusError",
    "TargetURLError",
]
