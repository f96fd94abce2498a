"""
Wire Types — The type-tag dispatch table for Voyager "included" entities.

A normalized Voyager response carries every entity it touches in one flat
"included" array. Each element is tagged with a "$type" discriminator:

    {
      "$type": "com.linkedin.voyager.dash.identity.profile.Position",
      "entityUrn": "urn:li:fsd_profilePosition:(ACoAAB...,2113530)",
      "profileUrn": "urn:li:fsd_profile:ACoAAB...",
      "title": "Staff Engineer",
      "companyName": "Initech",
      "dateRange": {"start": {"year": 2019, "month": 4}},
      ...
    }

decode_entity() looks the tag up in ENTITY_TYPES and hands the raw dict to
that variant's from_wire(). Every variant is a frozen dataclass that owns
only the fields of its own shape; keys that belong to other shapes are
ignored. When "$type" is missing, URN_PREFIX_HINTS maps the URN prefix to a
tag. Anything still unrecognized becomes an UnknownEntity: it is indexed so
references to it resolve, but resolvers never project it.

Field-level shape problems are absorbed by the readers in flexible_text.py.
Only structural problems (element not an object, "$type" not a string)
raise MalformedPayloadError.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Type

from .errors import MalformedPayloadError
from .flexible_text import (
    read_bool,
    read_int,
    read_object,
    read_ref,
    read_string,
    read_text,
)

DASH = "com.linkedin.voyager.dash."

PROFILE = DASH + "identity.profile.Profile"
POSITION = DASH + "identity.profile.Position"
EDUCATION = DASH + "identity.profile.Education"
SKILL = DASH + "identity.profile.Skill"
CERTIFICATION = DASH + "identity.profile.Certification"
NETWORK_INFO = DASH + "identity.profile.ProfileNetworkInfo"
FOLLOWING_STATE = DASH + "feed.FollowingState"
GEO = DASH + "common.Geo"
INDUSTRY = DASH + "common.Industry"
COMPANY = DASH + "organization.Company"
SCHOOL = DASH + "organization.School"
SEARCH_HIT = DASH + "search.EntityResultViewModel"

TYPE_KEY = "$type"
URN_KEY = "entityUrn"

# Checked in order; the longer profile-scoped prefixes must win over fsd_profile:
URN_PREFIX_HINTS = (
    ("urn:li:fsd_profilePosition:", POSITION),
    ("urn:li:fsd_profileEducation:", EDUCATION),
    ("urn:li:fsd_profileCertification:", CERTIFICATION),
    ("urn:li:fsd_profile:", PROFILE),
    ("urn:li:fsd_skill:", SKILL),
    ("urn:li:fsd_followingState:", FOLLOWING_STATE),
    ("urn:li:fsd_geo:", GEO),
    ("urn:li:fsd_industry:", INDUSTRY),
    ("urn:li:fsd_company:", COMPANY),
    ("urn:li:fsd_school:", SCHOOL),
    ("urn:li:fsd_entityResultViewModel:", SEARCH_HIT),
)


def type_hint_for_urn(urn: str) -> str:
    """Infer a "$type" tag from a URN prefix, or "" if the prefix is unknown."""
    for prefix, tag in URN_PREFIX_HINTS:
        if urn.startswith(prefix):
            return tag
    return ""


@dataclass(frozen=True)
class WireEntity:
    """Fields shared by every variant: its discriminator and its own URN."""

    type_tag: str = ""
    urn: str = ""

    @classmethod
    def from_wire(cls, raw: Dict[str, Any], type_tag: str, urn: str) -> "WireEntity":
        return cls(type_tag=type_tag, urn=urn)


@dataclass(frozen=True)
class UnknownEntity(WireEntity):
    pass


@dataclass(frozen=True)
class ProfileEntity(WireEntity):
    public_identifier: str = ""
    first_name: str = ""
    last_name: str = ""
    headline: str = ""
    summary: str = ""
    country_code: str = ""
    postal_code: str = ""
    geo_urn: Optional[str] = None
    industry_urn: Optional[str] = None
    following_state_urn: Optional[str] = None
    picture_urn: str = ""
    picture_a11y_text: str = ""
    creator: bool = False
    memorialized: bool = False
    premium: bool = False
    temp_status: str = ""
    temp_status_emoji: str = ""

    @classmethod
    def from_wire(cls, raw, type_tag, urn):
        location = read_object(raw, "location")
        picture = read_object(raw, "profilePicture")
        return cls(
            type_tag=type_tag,
            urn=urn,
            public_identifier=read_string(raw, "publicIdentifier"),
            first_name=read_text(raw, "firstName"),
            last_name=read_text(raw, "lastName"),
            headline=read_text(raw, "headline"),
            summary=read_text(raw, "summary"),
            country_code=read_string(location, "countryCode"),
            postal_code=read_string(location, "postalCode"),
            geo_urn=read_ref(read_object(raw, "geoLocation"), "*geo"),
            industry_urn=read_ref(raw, "*industry"),
            following_state_urn=read_ref(raw, "*followingState"),
            picture_urn=read_string(picture, "displayImageUrn"),
            picture_a11y_text=read_text(picture, "a11yText"),
            creator=read_bool(raw, "creator"),
            memorialized=read_bool(raw, "memorialized"),
            premium=read_bool(raw, "premium"),
            temp_status=read_text(raw, "tempStatus"),
            temp_status_emoji=read_string(raw, "tempStatusEmoji"),
        )


@dataclass(frozen=True)
class PositionEntity(WireEntity):
    """A work experience entry. Dates arrive as dateRange{start, end}."""

    profile_urn: str = ""
    title: str = ""
    company_name: str = ""
    company_urn: Optional[str] = None
    location_name: str = ""
    description: str = ""
    employment_type: str = ""
    date_range: Optional[Dict[str, Any]] = None

    @classmethod
    def from_wire(cls, raw, type_tag, urn):
        return cls(
            type_tag=type_tag,
            urn=urn,
            profile_urn=read_string(raw, "profileUrn"),
            title=read_text(raw, "title"),
            company_name=read_text(raw, "companyName"),
            company_urn=read_ref(raw, "*company"),
            location_name=read_text(raw, "locationName"),
            description=read_text(raw, "description"),
            employment_type=read_text(raw, "employmentType"),
            date_range=read_object(raw, "dateRange") or None,
        )


@dataclass(frozen=True)
class EducationEntity(WireEntity):
    """An education entry. Dates arrive as timePeriod{startDate, endDate}."""

    profile_urn: str = ""
    school_name: str = ""
    school_urn: Optional[str] = None
    degree_name: str = ""
    field_of_study: str = ""
    grade: str = ""
    activities: str = ""
    description: str = ""
    time_period: Optional[Dict[str, Any]] = None

    @classmethod
    def from_wire(cls, raw, type_tag, urn):
        return cls(
            type_tag=type_tag,
            urn=urn,
            profile_urn=read_string(raw, "profileUrn"),
            school_name=read_text(raw, "schoolName"),
            school_urn=read_ref(raw, "*school"),
            degree_name=read_text(raw, "degreeName"),
            field_of_study=read_text(raw, "fieldOfStudy"),
            grade=read_text(raw, "grade"),
            activities=read_text(raw, "activities"),
            description=read_text(raw, "description"),
            time_period=read_object(raw, "timePeriod") or None,
        )


@dataclass(frozen=True)
class SkillEntity(WireEntity):
    profile_urn: str = ""
    name: str = ""
    endorsement_count: int = 0

    @classmethod
    def from_wire(cls, raw, type_tag, urn):
        return cls(
            type_tag=type_tag,
            urn=urn,
            profile_urn=read_string(raw, "profileUrn"),
            name=read_text(raw, "name"),
            endorsement_count=read_int(raw, "endorsementCount"),
        )


@dataclass(frozen=True)
class CertificationEntity(WireEntity):
    profile_urn: str = ""
    name: str = ""
    authority: str = ""
    license_number: str = ""
    url: str = ""
    company_urn: Optional[str] = None
    date_range: Optional[Dict[str, Any]] = None

    @classmethod
    def from_wire(cls, raw, type_tag, urn):
        return cls(
            type_tag=type_tag,
            urn=urn,
            profile_urn=read_string(raw, "profileUrn"),
            name=read_text(raw, "name"),
            authority=read_text(raw, "authority"),
            license_number=read_string(raw, "licenseNumber"),
            url=read_string(raw, "url"),
            company_urn=read_ref(raw, "*company"),
            date_range=read_object(raw, "dateRange") or None,
        )


@dataclass(frozen=True)
class NetworkInfoEntity(WireEntity):
    profile_urn: str = ""
    connections_count: int = 0
    followers_count: int = 0

    @classmethod
    def from_wire(cls, raw, type_tag, urn):
        return cls(
            type_tag=type_tag,
            urn=urn,
            profile_urn=read_string(raw, "profileUrn"),
            connections_count=read_int(raw, "connectionsCount"),
            followers_count=read_int(raw, "followersCount"),
        )


@dataclass(frozen=True)
class FollowingStateEntity(WireEntity):
    follower_count: int = 0
    followee_count: int = 0
    following: bool = False

    @classmethod
    def from_wire(cls, raw, type_tag, urn):
        return cls(
            type_tag=type_tag,
            urn=urn,
            follower_count=read_int(raw, "followerCount"),
            followee_count=read_int(raw, "followeeCount"),
            following=read_bool(raw, "following"),
        )


@dataclass(frozen=True)
class NamedEntity(WireEntity):
    """Geo, industry, company and school entities: only a display name matters."""

    name: str = ""

    name_key = "name"

    @classmethod
    def from_wire(cls, raw, type_tag, urn):
        return cls(type_tag=type_tag, urn=urn, name=read_text(raw, cls.name_key))


@dataclass(frozen=True)
class GeoEntity(NamedEntity):
    name_key = "defaultLocalizedName"


@dataclass(frozen=True)
class IndustryEntity(NamedEntity):
    pass


@dataclass(frozen=True)
class CompanyEntity(NamedEntity):
    pass


@dataclass(frozen=True)
class SchoolEntity(NamedEntity):
    pass


@dataclass(frozen=True)
class SearchHitEntity(WireEntity):
    """A search result card (EntityResultViewModel)."""

    tracking_urn: str = ""
    public_identifier: str = ""
    title: str = ""
    primary_subtitle: str = ""
    secondary_subtitle: str = ""
    summary: str = ""
    navigation_url: str = ""

    @classmethod
    def from_wire(cls, raw, type_tag, urn):
        return cls(
            type_tag=type_tag,
            urn=urn,
            tracking_urn=read_string(raw, "trackingUrn"),
            public_identifier=read_string(raw, "publicIdentifier"),
            title=read_text(raw, "title"),
            primary_subtitle=read_text(raw, "primarySubtitle"),
            secondary_subtitle=read_text(raw, "secondarySubtitle"),
            summary=read_text(raw, "summary"),
            navigation_url=read_string(raw, "navigationUrl"),
        )


ENTITY_TYPES: Dict[str, Type[WireEntity]] = {
    PROFILE: ProfileEntity,
    POSITION: PositionEntity,
    EDUCATION: EducationEntity,
    SKILL: SkillEntity,
    CERTIFICATION: CertificationEntity,
    NETWORK_INFO: NetworkInfoEntity,
    FOLLOWING_STATE: FollowingStateEntity,
    GEO: GeoEntity,
    INDUSTRY: IndustryEntity,
    COMPANY: CompanyEntity,
    SCHOOL: SchoolEntity,
    SEARCH_HIT: SearchHitEntity,
}


def decode_entity(raw: Any) -> WireEntity:
    """Decode one element of the "included" array into its variant.

    Args:
        raw: The decoded JSON element.

    Returns:
        The variant instance selected by "$type" (or by URN prefix when the
        tag is absent), or an UnknownEntity.

    Raises:
        MalformedPayloadError: If the element is not an object or its "$type"
            is present but not a string.
    """
    if not isinstance(raw, dict):
        raise MalformedPayloadError(f"included element must be an object, got {type(raw).__name__}")

    type_tag = raw.get(TYPE_KEY)
    if type_tag is not None and not isinstance(type_tag, str):
        raise MalformedPayloadError(f"{TYPE_KEY} must be a string, got {type(type_tag).__name__}")

    urn = read_string(raw, URN_KEY)
    if not type_tag:
        type_tag = type_hint_for_urn(urn)

    variant = ENTITY_TYPES.get(type_tag, UnknownEntity)
    return variant.from_wire(raw, type_tag, urn)
