"""Exporter implementations."""

from .base import BaseExporter
from .file_exporter import FileExporter, artifact_name

__all__ = ["BaseExporter", "FileExporter", "artifact_name"]
