"""Text escaping and line folding for iCalendar content lines."""

import re

from mindlog.exceptions import EncodingError

MAX_LINE_OCTETS = 75
CRLF = "\r\n"

# Continuation lines start with a single space, leaving 74 octets of payload
_CONTINUATION_PREFIX = " "
_FOLD_PATTERN = re.compile(r"\r\n[ \t]")
_LINE_BREAK_PATTERN = re.compile(r"\r\n?")
_ESCAPE_PATTERN = re.compile(r"\\([\\;,nN])")
_UNESCAPED = {"\\": "\\", ";": ";", ",": ",", "n": "\n", "N": "\n"}


def _check_representable(text: str) -> None:
    for position, char in enumerate(text):
        code = ord(char)
        if (code < 0x20 and char not in "\n\t") or code == 0x7F:
            raise EncodingError(
                f"Control character U+{code:04X} at position {position} "
                f"cannot be represented in iCalendar text"
            )


def escape_text(text: str) -> str:
    """Escape a TEXT value: backslash first, then ``;``, ``,`` and newline.

    CRLF and lone CR line breaks are written as plain newlines.

    Raises:
        EncodingError: If the text holds a control character other than
            a line break or tab
    """
    text = _LINE_BREAK_PATTERN.sub("\n", text)
    _check_representable(text)
    return (
        text.replace("\\", "\\\\")
        .replace(";", "\\;")
        .replace(",", "\\,")
        .replace("\n", "\\n")
    )


def unescape_text(text: str) -> str:
    """Reverse :func:`escape_text`."""
    return _ESCAPE_PATTERN.sub(lambda match: _UNESCAPED[match.group(1)], text)


def fold_line(line: str) -> str:
    """Fold a content line at 75 UTF-8 octets.

    The first segment holds at most 75 octets, each continuation a single
    space plus at most 74 octets. Segments break only between characters,
    so multi-byte characters are never split. Short lines and lines that
    are already folded come back unchanged.
    """
    if CRLF in line:
        line = unfold_lines(line)
    if len(line.encode("utf-8")) <= MAX_LINE_OCTETS:
        return line

    segments = []
    current: list[str] = []
    current_octets = 0
    limit = MAX_LINE_OCTETS
    for char in line:
        size = len(char.encode("utf-8"))
        if current_octets + size > limit:
            segments.append("".join(current))
            limit = MAX_LINE_OCTETS - len(_CONTINUATION_PREFIX)
            current = [char]
            current_octets = size
        else:
            current.append(char)
            current_octets += size
    segments.append("".join(current))

    return (CRLF + _CONTINUATION_PREFIX).join(segments)


def unfold_lines(text: str) -> str:
    """Join folded continuation lines back into logical lines."""
    return _FOLD_PATTERN.sub("", text)


def ensure_single_line(value: str) -> str:
    """Check a value that is written without escaping (ids, colors, foreign X-props).

    Raises:
        EncodingError: If the value holds a line break or other control character
    """
    for position, char in enumerate(value):
        code = ord(char)
        if (code < 0x20 and char != "\t") or code == 0x7F:
            raise EncodingError(
                f"Control character U+{code:04X} at position {position} "
                f"cannot appear in a raw property value"
            )
    return value
