"""Reverse-complement index sequences in sequencing sample sheets."""

__version__ = "0.1.0"
