"""Output layer for calendar documents."""

from mindlog.output.ics_writer import ICSWriter

__all__ = ["ICSWriter"]
