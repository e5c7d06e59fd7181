"""Tests del parser XML y de la normalización objeto/lista."""

from __future__ import annotations

import pytest

from mcommons import ApiError, ParseError
from mcommons.adapters.xml_response import as_list, parse_envelope, unwrap


def test_parse_envelope_merges_attributes_and_coerces_booleans():
    envelope = parse_envelope(
        b'<response success="true">'
        b'<campaigns><campaign active="false" id="12"><name>Main</name></campaign></campaigns>'
        b"</response>"
    )

    assert envelope["success"] is True
    campaign = envelope["campaigns"]["campaign"]
    assert campaign == {"active": False, "id": "12", "name": "Main"}


def test_parse_envelope_keeps_element_text_as_string():
    envelope = parse_envelope(b"<response><flag>true</flag></response>")

    assert envelope["flag"] == "true"


def test_parse_envelope_empty_response():
    assert parse_envelope(b"<response/>") == {}


def test_parse_envelope_rejects_malformed_xml():
    with pytest.raises(ParseError):
        parse_envelope(b"<response><campaigns></response>")


def test_parse_envelope_requires_response_root():
    with pytest.raises(ParseError):
        parse_envelope(b"<html><body>Maintenance</body></html>")


def test_parse_envelope_raises_api_error_on_failure_flag():
    with pytest.raises(ApiError) as excinfo:
        parse_envelope(b'<response success="false"><error id="5" message="Invalid phone number"/></response>')

    assert excinfo.value.code == "5"
    assert excinfo.value.message == "Invalid phone number"


@pytest.mark.parametrize(
    "value,expected",
    [
        (None, []),
        ([], []),
        ({"id": "1"}, [{"id": "1"}]),
        ([{"id": "1"}, {"id": "2"}], [{"id": "1"}, {"id": "2"}]),
        ("text", ["text"]),
    ],
)
def test_as_list(value, expected):
    assert as_list(value) == expected


def test_unwrap_single_child_is_one_element_list():
    envelope = parse_envelope(b'<response><campaigns><campaign id="1"/></campaigns></response>')

    assert as_list(unwrap(envelope, "campaigns", "campaign")) == [{"id": "1"}]


def test_unwrap_multiple_children_keep_order():
    envelope = parse_envelope(
        b"<response><campaigns>"
        b'<campaign id="3"/><campaign id="1"/><campaign id="2"/>'
        b"</campaigns></response>"
    )

    items = as_list(unwrap(envelope, "campaigns", "campaign"))
    assert [c["id"] for c in items] == ["3", "1", "2"]


def test_unwrap_empty_container_is_absent():
    envelope = parse_envelope(b'<response><groups page="4"/></response>')

    assert unwrap(envelope, "groups", "group") is None


def test_unwrap_missing_container_is_parse_error():
    with pytest.raises(ParseError):
        unwrap({"other": {}}, "groups", "group")
