from __future__ import annotations

from collections.abc import Sequence

from ..models.document import LocatedHeader, Row

"""Header row location.

Plain sample sheets carry their field names on the first row. Sheets exported
from LIMS often start with a free-form preamble instead; for those a sentinel
label (e.g. "Sample ID") in the first cell marks the header row.
"""

__all__ = [
    "EmptyDocument",
    "HeaderNotFound",
    "locate_header",
]


class EmptyDocument(Exception):
    """Raised when a document contains no rows at all."""


class HeaderNotFound(Exception):
    """Raised when no row starts with the configured sentinel label."""


def locate_header(rows: Sequence[Row], sentinel: str | None = None) -> LocatedHeader:
    """Find the header row of ``rows``.

    Args:
        rows: Every row of the document, in order
        sentinel: First-cell label of the header row. None means the first
            row is the header.

    Returns:
        LocatedHeader with the header, its index, the data rows strictly after
        it and the preamble rows before it.

    Raises:
        EmptyDocument: ``rows`` is empty
        HeaderNotFound: ``sentinel`` was given and no row's first cell matches
    """
    if not rows:
        raise EmptyDocument("document has no rows")

    if sentinel is None:
        return LocatedHeader(header=rows[0], header_index=0, data_rows=list(rows[1:]))

    wanted = sentinel.strip()
    for index, row in enumerate(rows):
        if row and row[0].strip() == wanted:
            return LocatedHeader(
                header=row,
                header_index=index,
                data_rows=list(rows[index + 1:]),
                preamble=list(rows[:index]),
            )
    raise HeaderNotFound(f"no row starts with sentinel '{wanted}' ({len(rows)} rows scanned)")
