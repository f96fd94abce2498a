"""Tests for core.entity_graph.EntityGraph."""

import pytest

from core.entity_graph import EntityGraph, decode_payload, extract_root_items
from voyager_shared.errors import MalformedPayloadError, ResponseParseError
from voyager_shared.wire_types import COMPANY, PROFILE, CompanyEntity, ProfileEntity


def _payload(included, data=None):
    return {"data": data, "included": included}


def test_first_occurrence_wins():
    graph = EntityGraph.from_payload(_payload([
        {"$type": COMPANY, "entityUrn": "urn:li:fsd_company:1", "name": "First"},
        {"$type": COMPANY, "entityUrn": "urn:li:fsd_company:1", "name": "Second"},
    ]))
    assert graph.get("urn:li:fsd_company:1").name == "First"
    assert len(graph.of_kind(COMPANY)) == 2


def test_follow_checks_variant():
    graph = EntityGraph.from_payload(_payload([
        {"$type": COMPANY, "entityUrn": "urn:li:fsd_company:1", "name": "Initech"},
    ]))
    assert isinstance(graph.follow("urn:li:fsd_company:1", CompanyEntity), CompanyEntity)
    assert graph.follow("urn:li:fsd_company:1", ProfileEntity) is None
    assert graph.follow("urn:li:fsd_company:404", CompanyEntity) is None
    assert graph.follow(None, CompanyEntity) is None


def test_self_reference_resolves_one_hop():
    graph = EntityGraph.from_payload(_payload([
        {"$type": PROFILE, "entityUrn": "urn:li:fsd_profile:A", "*industry": "urn:li:fsd_profile:A"},
    ]))
    profile = graph.get("urn:li:fsd_profile:A")
    assert graph.follow(profile.industry_urn, ProfileEntity) is profile


def test_missing_included_is_empty():
    graph = EntityGraph.from_payload({"data": {"data": {}}})
    assert graph.entities == ()
    assert graph.root_items == ()


def test_included_not_a_list():
    with pytest.raises(MalformedPayloadError):
        EntityGraph.from_payload({"included": {"$type": PROFILE}})


def test_payload_not_an_object():
    with pytest.raises(MalformedPayloadError):
        EntityGraph.from_payload(["included"])


class TestExtractRootItems:
    def test_star_elements(self):
        data = {"data": {"identityDashProfilesByMemberIdentity": {"*elements": ["urn:a", "urn:b"]}}}
        assert extract_root_items(data) == [("urn:a",), ("urn:b",)]

    def test_clusters_with_items(self):
        data = {"data": {"searchDashClustersByAll": {"elements": [
            {"items": [{"item": {"*entityResult": "urn:1"}}, {"item": {}}]},
            {"items": [{"item": {"*entityResult": "urn:2", "*profile": "urn:p"}}]},
        ]}}}
        assert extract_root_items(data) == [("urn:1",), ("urn:2", "urn:p")]

    def test_dollar_keys_skipped(self):
        data = {"data": {"$recipeTypes": ["x"], "root": {"*elements": ["urn:a"]}}}
        assert extract_root_items(data) == [("urn:a",)]

    def test_elements_not_a_list(self):
        with pytest.raises(MalformedPayloadError):
            extract_root_items({"data": {"root": {"elements": "nope"}}})

    def test_null_inner_data_has_no_items(self):
        assert extract_root_items({"data": None}) == []

    def test_inner_data_not_an_object(self):
        with pytest.raises(MalformedPayloadError):
            extract_root_items({"data": ["urn:a"]})

    def test_data_not_an_object(self):
        with pytest.raises(MalformedPayloadError):
            extract_root_items("nope")


def test_decode_payload_invalid_json():
    with pytest.raises(ResponseParseError):
        decode_payload(b"<html>login</html>")


def test_decode_payload_bytes():
    assert decode_payload(b'{"included": []}') == {"included": []}
