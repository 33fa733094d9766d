"""Line-delimited identifier source."""

from __future__ import annotations

from pathlib import Path
from typing import IO, Iterator

from ..errors import InputSourceError


class IdSource:
    """Lazy, forward-only reader yielding one identifier per line.

    The file is opened on construction so that a missing input is reported
    before any work is scheduled. Only the line terminator is stripped; blank
    lines come through as empty identifiers. Undecodable bytes are kept as
    surrogate escapes rather than failing the read.
    """

    def __init__(self, path: Path, encoding: str = "utf-8") -> None:
        self.path = Path(path)
        try:
            self._stream: IO[str] | None = self.path.open(
                "r", encoding=encoding, errors="surrogateescape", newline=""
            )
        except OSError as exc:
            raise InputSourceError(f"Cannot open input file {self.path}: {exc}") from exc
        self._consumed = False

    def __iter__(self) -> Iterator[str]:
        if self._consumed or self._stream is None:
            raise InputSourceError(f"Input file {self.path} has already been read")
        self._consumed = True
        stream = self._stream
        try:
            for line in stream:
                yield line.rstrip("\r\n")
        except OSError as exc:
            raise InputSourceError(f"Error while reading {self.path}: {exc}") from exc
        finally:
            self.close()

    def close(self) -> None:
        if self._stream is not None:
            self._stream.close()
            self._stream = None

    def __enter__(self) -> "IdSource":
        return self

    def __exit__(self, *_exc_info: object) -> None:
        self.close()


def read_identifiers(path: Path) -> list[str]:
    """Read every identifier from ``path`` eagerly."""

    with IdSource(path) as source:
        return list(source)


__all__ = ["IdSource", "read_identifiers"]
