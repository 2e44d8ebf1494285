"""RFC 5545 primitives: value formatters, text safety and extension registry."""

from mindlog.ical.extensions import EXT_PREFIX, Extension, PayloadKind
from mindlog.ical.formatters import (
    current_timestamp,
    derive_uid,
    format_date_only,
    format_date_time,
)
from mindlog.ical.text import escape_text, fold_line, unescape_text, unfold_lines

__all__ = [
    "EXT_PREFIX",
    "Extension",
    "PayloadKind",
    "current_timestamp",
    "derive_uid",
    "escape_text",
    "fold_line",
    "format_date_only",
    "format_date_time",
    "unescape_text",
    "unfold_lines",
]
