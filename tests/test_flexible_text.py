"""Tests for voyager_shared.flexible_text."""

import pytest

from voyager_shared.errors import PartialFieldError
from voyager_shared.flexible_text import (
    collect_refs,
    decode_flexible_text,
    read_bool,
    read_int,
    read_object,
    read_ref,
    read_string,
    read_text,
)


# ---------------------------------------------------------------------------
# decode_flexible_text
# ---------------------------------------------------------------------------

def test_bare_string():
    assert decode_flexible_text("Engineer") == "Engineer"


def test_text_wrapper():
    assert decode_flexible_text({"text": "Engineer", "attributesV2": []}) == "Engineer"


def test_bare_and_wrapped_are_equal():
    assert decode_flexible_text("Engineer") == decode_flexible_text({"text": "Engineer"})


def test_none_is_empty():
    assert decode_flexible_text(None) == ""


def test_wrapper_without_text_is_empty():
    assert decode_flexible_text({"accessibilityText": "x"}) == ""


@pytest.mark.parametrize("value", [42, ["Engineer"], {"text": 5}, True])
def test_unexpected_shape_raises(value):
    with pytest.raises(PartialFieldError):
        decode_flexible_text(value)


# ---------------------------------------------------------------------------
# Tolerant readers
# ---------------------------------------------------------------------------

class TestReaders:
    def test_read_text_degrades_to_empty(self):
        assert read_text({"headline": 42}, "headline") == ""

    def test_read_text_missing_key(self):
        assert read_text({}, "headline") == ""

    def test_read_string_rejects_wrapper(self):
        assert read_string({"publicIdentifier": {"text": "x"}}, "publicIdentifier") == ""

    def test_read_int(self):
        assert read_int({"n": 7}, "n") == 7
        assert read_int({"n": "7"}, "n") == 0
        assert read_int({}, "n") == 0

    def test_read_int_rejects_bool(self):
        assert read_int({"n": True}, "n") == 0

    def test_read_bool(self):
        assert read_bool({"premium": True}, "premium") is True
        assert read_bool({"premium": "yes"}, "premium") is False

    def test_read_object(self):
        assert read_object({"location": {"countryCode": "us"}}, "location") == {"countryCode": "us"}
        assert read_object({"location": "us"}, "location") == {}

    def test_read_ref(self):
        assert read_ref({"*company": "urn:li:fsd_company:1"}, "*company") == "urn:li:fsd_company:1"
        assert read_ref({"*company": ""}, "*company") is None
        assert read_ref({"*company": 1}, "*company") is None


# ---------------------------------------------------------------------------
# collect_refs
# ---------------------------------------------------------------------------

def test_collect_refs_nested_and_ordered():
    item = {
        "$type": "com.linkedin.voyager.dash.search.SearchItem",
        "item": {
            "*entityResult": "urn:li:fsd_entityResultViewModel:1",
            "insight": {"*profile": "urn:li:fsd_profile:A"},
        },
        "*badges": ["urn:li:badge:1", "urn:li:badge:2"],
    }
    assert collect_refs(item) == [
        "urn:li:fsd_entityResultViewModel:1",
        "urn:li:fsd_profile:A",
        "urn:li:badge:1",
        "urn:li:badge:2",
    ]


def test_collect_refs_ignores_plain_keys():
    assert collect_refs({"entityUrn": "urn:li:fsd_profile:A", "trackingUrn": "urn:li:member:1"}) == []


def test_collect_refs_deduplicates():
    item = {"*a": "urn:li:x:1", "nested": {"*b": "urn:li:x:1"}}
    assert collect_refs(item) == ["urn:li:x:1"]
