"""Tests for voyager_shared.wire_types."""

import pytest

from voyager_shared.errors import MalformedPayloadError
from voyager_shared.wire_types import (
    EDUCATION,
    GEO,
    POSITION,
    PROFILE,
    SKILL,
    EducationEntity,
    GeoEntity,
    PositionEntity,
    ProfileEntity,
    SkillEntity,
    UnknownEntity,
    decode_entity,
    type_hint_for_urn,
)


def test_profile_dispatch():
    entity = decode_entity({
        "$type": PROFILE,
        "entityUrn": "urn:li:fsd_profile:A",
        "publicIdentifier": "jane-doe",
        "firstName": {"text": "Jane"},
        "lastName": "Doe",
        "geoLocation": {"*geo": "urn:li:fsd_geo:1"},
        "location": {"countryCode": "us"},
    })
    assert isinstance(entity, ProfileEntity)
    assert entity.urn == "urn:li:fsd_profile:A"
    assert entity.first_name == "Jane"
    assert entity.last_name == "Doe"
    assert entity.geo_urn == "urn:li:fsd_geo:1"
    assert entity.country_code == "us"


def test_position_keeps_only_its_fields():
    entity = decode_entity({
        "$type": POSITION,
        "entityUrn": "urn:li:fsd_profilePosition:(A,1)",
        "title": "Engineer",
        "publicIdentifier": "not-a-position-field",
        "dateRange": {"start": {"year": 2020}},
    })
    assert isinstance(entity, PositionEntity)
    assert entity.title == "Engineer"
    assert entity.date_range == {"start": {"year": 2020}}
    assert not hasattr(entity, "public_identifier")


def test_education_time_period():
    entity = decode_entity({
        "$type": EDUCATION,
        "entityUrn": "urn:li:fsd_profileEducation:(A,1)",
        "timePeriod": {"startDate": {"year": 2010}},
    })
    assert isinstance(entity, EducationEntity)
    assert entity.time_period == {"startDate": {"year": 2010}}


def test_geo_uses_localized_name():
    entity = decode_entity({"$type": GEO, "entityUrn": "urn:li:fsd_geo:1", "defaultLocalizedName": "Berlin"})
    assert isinstance(entity, GeoEntity)
    assert entity.name == "Berlin"


def test_wrong_field_shape_degrades_to_empty():
    entity = decode_entity({"$type": SKILL, "entityUrn": "urn:li:fsd_skill:(A,1)", "name": 12, "endorsementCount": "x"})
    assert isinstance(entity, SkillEntity)
    assert entity.name == ""
    assert entity.endorsement_count == 0


def test_missing_type_uses_urn_prefix():
    entity = decode_entity({"entityUrn": "urn:li:fsd_profilePosition:(A,1)", "title": "Engineer"})
    assert isinstance(entity, PositionEntity)
    assert entity.type_tag == POSITION


def test_unknown_type():
    entity = decode_entity({"$type": "com.linkedin.voyager.dash.deco.Thing", "entityUrn": "urn:li:thing:1"})
    assert isinstance(entity, UnknownEntity)
    assert entity.urn == "urn:li:thing:1"


def test_type_hint_prefers_longer_prefix():
    assert type_hint_for_urn("urn:li:fsd_profileEducation:(A,1)") == EDUCATION
    assert type_hint_for_urn("urn:li:fsd_profile:A") == PROFILE
    assert type_hint_for_urn("urn:li:other:1") == ""


@pytest.mark.parametrize("raw", ["urn:li:fsd_profile:A", 5, None, ["x"]])
def test_non_object_element_is_malformed(raw):
    with pytest.raises(MalformedPayloadError):
        decode_entity(raw)


def test_non_string_type_is_malformed():
    with pytest.raises(MalformedPayloadError):
        decode_entity({"$type": 7, "entityUrn": "urn:li:fsd_profile:A"})
