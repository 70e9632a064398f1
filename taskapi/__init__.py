"""Task API: a per-user task list REST service."""

__version__ = "1.0.0"
