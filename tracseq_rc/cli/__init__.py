"""Command-line interface (``tracseq-rc`` / ``python -m tracseq_rc.cli``)."""

from .__main__ import main

__all__ = ["main"]
