from __future__ import annotations

"""Nucleotide sequence codec."""

__all__ = [
    "NUCLEOTIDES",
    "reverse_complement",
]

NUCLEOTIDES = frozenset("ATGCN")

# 大文字 ACGTN のみ相補変換。その他の文字 (小文字/数字/記号) はそのまま通す
_COMPLEMENT = str.maketrans("ATGCN", "TACGN")


def reverse_complement(sequence: str) -> str:
    """Return the reverse complement of ``sequence``.

    Total and permissive: characters outside ``ATGCN`` pass through unchanged.

    >>> reverse_complement("ATGC")
    'GCAT'
    >>> reverse_complement("ATGC-N")
    'N-GCAT'
    """
    return sequence[::-1].translate(_COMPLEMENT)
