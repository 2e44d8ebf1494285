"""MindLog X-property registry.

Domain data that RFC 5545 has no property for (diary answers, question of
the day, mood, lunar calendar) travels inside otherwise standard VEVENTs as
non-standard ``X-MINDLOG-*`` properties. Consumers ignore names they do not
know, so the set can grow without breaking older readers.
"""

import re
from enum import Enum, unique

EXT_PREFIX = "X-MINDLOG"

_X_NAME_PATTERN = re.compile(r"X-[A-Z0-9]+(-[A-Z0-9]+)*")


class PayloadKind(str, Enum):
    """How an extension value is encoded on the wire."""

    CATEGORY = "category"  # literal from a closed set, written raw
    TEXT = "text"  # short free text, escaped
    ESCAPED_TEXT = "escaped_text"  # long user-authored text, escaped and folded
    COLOR = "color"  # "#RRGGBB"
    UID_REF = "uid_ref"  # UID of another event
    IDENTIFIER = "identifier"  # opaque id from an application catalog


@unique
class Extension(str, Enum):
    """Registered MindLog extension property names."""

    # Discriminator: "SCHEDULE" or "DIARY"
    TYPE = f"{EXT_PREFIX}-TYPE"

    # Daily reflection
    QUESTION_CATEGORY = f"{EXT_PREFIX}-QUESTION-CATEGORY"
    QUESTION_ID = f"{EXT_PREFIX}-QUESTION-ID"
    QUESTION_TEXT = f"{EXT_PREFIX}-QUESTION-TEXT"
    DIARY_CONTENT = f"{EXT_PREFIX}-DIARY-CONTENT"

    # Lunar calendar (display only)
    LUNAR_DATE = f"{EXT_PREFIX}-LUNAR-DATE"
    LUNAR_FESTIVAL = f"{EXT_PREFIX}-LUNAR-FESTIVAL"

    # UI state persisted with the event
    MOOD_COLOR = f"{EXT_PREFIX}-MOOD-COLOR"

    # Sync conflict tracking
    CONFLICT_OF = f"{EXT_PREFIX}-CONFLICT-OF"


PAYLOAD_KINDS: dict[Extension, PayloadKind] = {
    Extension.TYPE: PayloadKind.CATEGORY,
    Extension.QUESTION_CATEGORY: PayloadKind.CATEGORY,
    Extension.QUESTION_ID: PayloadKind.IDENTIFIER,
    Extension.QUESTION_TEXT: PayloadKind.TEXT,
    Extension.DIARY_CONTENT: PayloadKind.ESCAPED_TEXT,
    Extension.LUNAR_DATE: PayloadKind.TEXT,
    Extension.LUNAR_FESTIVAL: PayloadKind.TEXT,
    Extension.MOOD_COLOR: PayloadKind.COLOR,
    Extension.CONFLICT_OF: PayloadKind.UID_REF,
}


def is_registered(name: str) -> bool:
    """True if ``name`` is one of the MindLog extension properties."""
    try:
        Extension(name.upper())
    except ValueError:
        return False
    return True


def payload_kind(name: str) -> PayloadKind | None:
    """Payload kind of a registered extension, or None for foreign names."""
    if not is_registered(name):
        return None
    return PAYLOAD_KINDS[Extension(name.upper())]


def is_text_payload(kind: PayloadKind | None) -> bool:
    """True for kinds whose values go through TEXT escaping."""
    return kind in (PayloadKind.TEXT, PayloadKind.ESCAPED_TEXT)


def is_extension_name(name: str) -> bool:
    """True if ``name`` is a syntactically valid X-property name (any vendor)."""
    return bool(_X_NAME_PATTERN.fullmatch(name.upper()))


def normalize_x_props(x_props: dict[str, str]) -> dict[str, str]:
    """Upper-case X-property names, rejecting anything that is not an X-name.

    Raises:
        ValueError: If a name could be read as a standard property or a
            component delimiter (``UID``, ``END``...)
    """
    normalized = {}
    for name, value in x_props.items():
        if not is_extension_name(name):
            raise ValueError(f"Not an X-property name: {name!r}")
        normalized[name.upper()] = value
    return normalized
