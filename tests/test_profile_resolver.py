"""
Tests for core.profile_resolver.ProfileResolver.

Fixture loaded from tests/fixtures/profile_response.json: the anchor
jane-doe, a second profile (john-smith) whose position must not leak into
jane's experience, and one entity of an unrecognized type.
"""

import copy
import json
import os

import pytest

from core.models import Date, DateRange
from core.profile_resolver import ProfileResolver, resolve_profile, resolve_profile_json
from voyager_shared.errors import EntityValidationError, MalformedPayloadError, NotFoundError, ResponseParseError

# ---------------------------------------------------------------------------
# Fixture helpers
# ---------------------------------------------------------------------------

FIXTURES_DIR = os.path.join(os.path.dirname(__file__), "fixtures")


def _load(filename: str) -> dict:
    with open(os.path.join(FIXTURES_DIR, filename), encoding="utf-8") as fh:
        return json.load(fh)


@pytest.fixture()
def payload():
    return _load("profile_response.json")


@pytest.fixture()
def profile(payload):
    return resolve_profile(payload, "jane-doe")


# ---------------------------------------------------------------------------
# Scalar fields
# ---------------------------------------------------------------------------

class TestScalarFields:
    def test_identity(self, profile):
        assert profile.public_identifier == "jane-doe"
        assert profile.urn == "urn:li:fsd_profile:ACoAAJane"

    def test_full_name_composed(self, profile):
        assert profile.first_name == "Jane"
        assert profile.last_name == "Doe"
        assert profile.full_name == "Jane Doe"

    def test_headline_unwrapped(self, profile):
        assert profile.headline == "Staff Engineer at Initech"

    def test_summary_sanitized(self, profile):
        assert profile.summary == "Builds data platforms."

    def test_profile_url(self, profile):
        assert profile.profile_url == "https://www.linkedin.com/in/jane-doe/"

    def test_flags(self, profile):
        assert profile.is_creator is True
        assert profile.is_premium is True
        assert profile.is_memorialized is False
        assert profile.temp_status == ""


# ---------------------------------------------------------------------------
# Referenced entities
# ---------------------------------------------------------------------------

class TestReferences:
    def test_industry(self, profile):
        assert profile.industry == "Software Development"

    def test_location_merges_geo(self, profile):
        assert profile.location.name == "San Francisco, California, United States"
        assert profile.location.country_code == "us"
        assert profile.location.postal_code == "94107"
        assert profile.location.geo_urn == "urn:li:fsd_geo:102277331"

    def test_picture(self, profile):
        assert profile.profile_picture.display_image_urn == "urn:li:digitalmediaAsset:C4E03AQJane"
        assert profile.profile_picture.a11y_text == "Jane Doe"

    def test_follower_count_from_following_state(self, profile):
        assert profile.connection_info.connection_count == 500
        assert profile.connection_info.follower_count == 1234
        assert profile.connection_info.following is False

    def test_follower_count_falls_back_to_network_info(self, payload):
        payload["included"] = [e for e in payload["included"] if "FollowingState" not in e.get("$type", "")]
        profile = resolve_profile(payload, "jane-doe")
        assert profile.connection_info.follower_count == 1200

    def test_dangling_reference_leaves_field_empty(self, payload):
        payload["included"] = [e for e in payload["included"] if "Industry" not in e.get("$type", "")]
        assert resolve_profile(payload, "jane-doe").industry == ""


# ---------------------------------------------------------------------------
# Nested collections
# ---------------------------------------------------------------------------

class TestCollections:
    def test_experience_in_payload_order(self, profile):
        assert [e.title for e in profile.experience] == ["Staff Engineer", "Software Engineer"]

    def test_other_profiles_positions_excluded(self, profile):
        assert all(e.company_name != "Globex" for e in profile.experience)

    def test_company_name_from_reference(self, profile):
        assert profile.experience[0].company_name == "Initech"
        assert profile.experience[1].company_name == "Hooli"

    def test_current_position_date_range(self, profile):
        current = profile.experience[0]
        assert current.date_range == DateRange(start=Date(year=2019, month=4), end=None)
        assert current.date_range.is_current

    def test_past_position_date_range(self, profile):
        assert profile.experience[1].date_range == DateRange(
            start=Date(year=2015, month=6), end=Date(year=2019, month=3)
        )

    def test_education_time_period_unified(self, profile):
        (education,) = profile.education
        assert education.school_name == "State University"
        assert education.degree_name == "BSc"
        assert education.date_range == DateRange(start=Date(year=2011), end=Date(year=2015))

    def test_skills(self, profile):
        assert [(s.name, s.endorsement_count) for s in profile.skills] == [
            ("Python", 42),
            ("Distributed Systems", 0),
        ]

    def test_certifications(self, profile):
        (cert,) = profile.certifications
        assert cert.name == "AWS Certified Solutions Architect"
        assert cert.authority == "Amazon Web Services"
        assert cert.license_number == "ABC-123"
        assert cert.date_range.end == Date(year=2024, month=1)

    def test_anchor_with_no_nested_entities(self, payload):
        payload["included"] = [e for e in payload["included"] if e.get("entityUrn") == "urn:li:fsd_profile:ACoAAJane"]
        profile = resolve_profile(payload, "jane-doe")
        assert profile.experience == ()
        assert profile.education == ()
        assert profile.skills == ()
        assert profile.connection_info is None


# ---------------------------------------------------------------------------
# Anchor selection and errors
# ---------------------------------------------------------------------------

class TestAnchor:
    def test_other_identifier(self, payload):
        profile = resolve_profile(payload, "john-smith")
        assert profile.full_name == "John Smith"
        assert profile.headline == "Product Manager at Globex"

    def test_no_identifier_uses_root_item(self, payload):
        assert resolve_profile(payload).public_identifier == "jane-doe"

    def test_not_found(self, payload):
        with pytest.raises(NotFoundError) as exc_info:
            resolve_profile(payload, "nobody-here")
        assert exc_info.value.identifier == "nobody-here"

    def test_empty_payload_not_found(self):
        with pytest.raises(NotFoundError):
            resolve_profile({"data": {"data": {}}, "included": []})

    def test_missing_public_identifier_fails_validation(self):
        payload = {
            "data": {"data": {"root": {"*elements": ["urn:li:fsd_profile:X"]}}},
            "included": [{
                "$type": "com.linkedin.voyager.dash.identity.profile.Profile",
                "entityUrn": "urn:li:fsd_profile:X",
                "firstName": "Anon",
            }],
        }
        with pytest.raises(EntityValidationError):
            resolve_profile(payload)

    def test_null_result_not_found(self):
        with pytest.raises(NotFoundError) as exc_info:
            resolve_profile({"data": {"data": None}, "included": []}, "jane-doe")
        assert exc_info.value.identifier == "jane-doe"

    def test_null_result_with_included_profile(self, payload):
        payload["data"] = {"data": None}
        assert resolve_profile(payload, "jane-doe").full_name == "Jane Doe"

    def test_malformed_included(self):
        with pytest.raises(MalformedPayloadError):
            resolve_profile({"included": "nope"}, "jane-doe")


def test_resolution_is_idempotent(payload):
    before = copy.deepcopy(payload)
    resolver = ProfileResolver()
    first = resolver.resolve(payload, "jane-doe")
    second = resolver.resolve(payload, "jane-doe")
    assert first == second
    assert payload == before


def test_resolve_profile_json(payload):
    body = json.dumps(payload).encode("utf-8")
    assert resolve_profile_json(body, "jane-doe").full_name == "Jane Doe"


def test_resolve_profile_json_rejects_non_json():
    with pytest.raises(ResponseParseError):
        resolve_profile_json(b"not json", "jane-doe")


def test_to_dict_serializes(profile):
    data = profile.to_dict()
    assert data["public_identifier"] == "jane-doe"
    assert data["experience"][0]["company_name"] == "Initech"
    json.dumps(data)
