"""docfetch: fetch documents by identifier through a proxy into local files."""

__version__ = "0.1.0"

__all__ = ["__version__"]
