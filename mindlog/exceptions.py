"""Exception hierarchy for MindLog calendar operations."""


class MindLogError(Exception):
    """Base exception for MindLog calendar operations."""

    pass


class FormatError(MindLogError):
    """Malformed date, time or duration handed to a formatter."""

    pass


class EncodingError(MindLogError):
    """Text value that cannot be represented safely in an iCalendar line."""

    pass


class EmptySelectionError(MindLogError):
    """No eligible events to export."""

    pass


class EventNotFoundError(MindLogError):
    """Event not found in the store."""

    pass


class ValidationError(MindLogError):
    """Pydantic validation error."""

    pass


class IngestionError(MindLogError):
    """Error while reading a foreign calendar file."""

    pass


class ExportError(MindLogError):
    """Error during calendar export."""

    pass
