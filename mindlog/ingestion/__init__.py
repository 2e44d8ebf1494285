"""Readers for calendars produced by other applications."""

from mindlog.ingestion.ics_reader import ICSReader

__all__ = ["ICSReader"]
