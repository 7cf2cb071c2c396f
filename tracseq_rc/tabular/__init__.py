"""File adapters: read a sample sheet into rows of strings and write rows back."""

from .reader import IOFailure, UnsupportedFileType, read_document
from .writer import derive_output_path, write_rows

__all__ = [
    "IOFailure",
    "UnsupportedFileType",
    "read_document",
    "derive_output_path",
    "write_rows",
]
