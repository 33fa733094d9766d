"""File based exporter writing raw response bodies into an output directory."""

from __future__ import annotations

import contextlib
import os
import tempfile
from pathlib import Path
from typing import Iterable

from ...errors import FetchError
from .base import BaseExporter

PART_SUFFIX = ".part"


def artifact_name(identifier: str, separator: str = "/", replacement: str = "-") -> str:
    """Map an identifier to its output file name, e.g. ``MR003081/2008`` -> ``MR003081-2008``."""

    return identifier.replace(separator, replacement)


class FileExporter(BaseExporter):
    """Write each body to ``output_dir/<artifact name>``.

    The output directory is never created here. Bodies are streamed into a
    temporary ``.part`` file next to the target and renamed over it once
    complete, so a failed transfer leaves no artifact behind.
    """

    def __init__(self, output_dir: Path, separator: str = "/", replacement: str = "-") -> None:
        self.output_dir = Path(output_dir)
        self.separator = separator
        self.replacement = replacement

    def artifact_path(self, identifier: str) -> Path:
        name = artifact_name(identifier, self.separator, self.replacement)
        if name in ("", ".", "..") or os.sep in name or (os.altsep and os.altsep in name):
            raise FetchError(identifier, f"Identifier {identifier!r} does not map to a file name")
        return self.output_dir / name

    def export(self, identifier: str, chunks: Iterable[bytes]) -> Path:
        target = self.artifact_path(identifier)
        fd, part_name = tempfile.mkstemp(
            dir=self.output_dir, prefix=f".{target.name}.", suffix=PART_SUFFIX
        )
        part_path = Path(part_name)
        try:
            with os.fdopen(fd, "wb") as stream:
                for chunk in chunks:
                    stream.write(chunk)
            # mkstemp creates owner-only files
            part_path.chmod(0o644)
            os.replace(part_path, target)
        except BaseException:
            with contextlib.suppress(FileNotFoundError):
                part_path.unlink()
            raise
        return target


__all__ = ["FileExporter", "PART_SUFFIX", "artifact_name"]
