"""Tests for the X-property registry."""

from enum import Enum, unique

import pytest

from mindlog.ical.extensions import (
    EXT_PREFIX,
    PAYLOAD_KINDS,
    Extension,
    PayloadKind,
    is_extension_name,
    is_registered,
    normalize_x_props,
    payload_kind,
)


def test_every_key_shares_the_vendor_prefix():
    """All registered names live under X-MINDLOG-."""
    assert EXT_PREFIX == "X-MINDLOG"
    for extension in Extension:
        assert extension.value.startswith(f"{EXT_PREFIX}-")


def test_keys_are_unique():
    """No two logical fields share a property name."""
    # __members__ includes aliases, which iterating the enum would skip
    values = [member.value for member in Extension.__members__.values()]
    assert len(Extension.__members__) == len(set(values))


def test_duplicate_key_is_rejected():
    """A registry enum with a repeated property name fails at class creation."""
    with pytest.raises(ValueError):

        @unique
        class Duplicated(str, Enum):
            FIRST = f"{EXT_PREFIX}-SAME"
            SECOND = f"{EXT_PREFIX}-SAME"


def test_every_key_has_a_payload_kind():
    """The registry documents a payload type for each key."""
    assert set(PAYLOAD_KINDS) == set(Extension)
    assert PAYLOAD_KINDS[Extension.DIARY_CONTENT] == PayloadKind.ESCAPED_TEXT
    assert PAYLOAD_KINDS[Extension.MOOD_COLOR] == PayloadKind.COLOR
    assert PAYLOAD_KINDS[Extension.CONFLICT_OF] == PayloadKind.UID_REF


def test_lookup_of_unknown_names():
    """Foreign names are not registered and have no payload kind."""
    assert is_registered("X-MINDLOG-TYPE")
    assert is_registered("x-mindlog-type")
    assert not is_registered("X-MINDLOG-UNKNOWN")
    assert not is_registered("X-APPLE-STRUCTURED-LOCATION")
    assert payload_kind("X-APPLE-STRUCTURED-LOCATION") is None
    assert payload_kind("X-MINDLOG-LUNAR-DATE") == PayloadKind.TEXT


def test_extension_name_syntax():
    """Any vendor's X-name is accepted; standard names are not."""
    assert is_extension_name("X-WR-CALNAME")
    assert is_extension_name("x-other-flag")
    assert not is_extension_name("SUMMARY")
    assert not is_extension_name("X-")
    assert not is_extension_name("X-BAD NAME")


def test_normalize_x_props():
    """Names are upper-cased; standard property names are rejected."""
    assert normalize_x_props({"x-other-flag": "1"}) == {"X-OTHER-FLAG": "1"}
    with pytest.raises(ValueError):
        normalize_x_props({"END": "VEVENT"})
