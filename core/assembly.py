"""
Assembly — Converts wire variants into the nested shapes of a Profile.

Both resolvers use a CollectionAssembler to gather the nested collections
(experience, education, skills, certifications) and the optional nested
structures (location, picture, connection info) for one anchor.

Ownership policy
----------------
A nested entity is tied to its profile through its "profileUrn" field when
the payload provides one. What happens when it does not depends on the
endpoint:

  SINGLE_SUBJECT  (profile lookup)  The response describes one member, so
                                    every unowned entity belongs to the anchor.
  MULTI_SUBJECT   (search)          Several members share one payload. An
                                    unowned entity cannot be placed, so it is
                                    skipped and recorded in `unassociated`.

Entities that name a different owner are never attached in either mode.

Date ranges
-----------
Positions and certifications send dateRange{start, end}; educations send
timePeriod{startDate, endDate}. Both become a DateRange of Date values.
"""

from typing import Any, Dict, Iterator, List, Optional, Tuple

from voyager_shared.flexible_text import read_int
from voyager_shared.wire_types import (
    CERTIFICATION,
    EDUCATION,
    NETWORK_INFO,
    POSITION,
    SKILL,
    CompanyEntity,
    FollowingStateEntity,
    GeoEntity,
    IndustryEntity,
    ProfileEntity,
    SchoolEntity,
    WireEntity,
)

from .entity_graph import EntityGraph
from .models import (
    Certification,
    ConnectionInfo,
    Date,
    DateRange,
    Education,
    Experience,
    ProfileLocation,
    ProfilePicture,
    Skill,
)

SINGLE_SUBJECT = "single_subject"
MULTI_SUBJECT = "multi_subject"

# Kinds tied to a profile through their profileUrn field
OWNED_KINDS = (POSITION, EDUCATION, SKILL, CERTIFICATION, NETWORK_INFO)


def clean_text(value: str) -> str:
    """Strip NUL bytes and surrounding whitespace from a display string."""
    return value.replace("\x00", "").strip()


def compose_full_name(display_name: str, first_name: str, last_name: str) -> str:
    """Use the display name; otherwise first + last, but only when both are present."""
    if display_name:
        return display_name
    if first_name and last_name:
        return f"{first_name} {last_name}"
    return ""


def date_from_wire(raw: Any) -> Optional[Date]:
    if not isinstance(raw, dict):
        return None
    date = Date(year=read_int(raw, "year"), month=read_int(raw, "month"), day=read_int(raw, "day"))
    if not (date.year or date.month or date.day):
        return None
    return date


def _date_range(raw: Optional[Dict[str, Any]], start_key: str, end_key: str) -> Optional[DateRange]:
    if not raw:
        return None
    start = date_from_wire(raw.get(start_key))
    end = date_from_wire(raw.get(end_key))
    if start is None and end is None:
        return None
    return DateRange(start=start, end=end)


def date_range_from_range(raw: Optional[Dict[str, Any]]) -> Optional[DateRange]:
    """dateRange{start, end} -> DateRange"""
    return _date_range(raw, "start", "end")


def date_range_from_time_period(raw: Optional[Dict[str, Any]]) -> Optional[DateRange]:
    """timePeriod{startDate, endDate} -> DateRange"""
    return _date_range(raw, "startDate", "endDate")


class CollectionAssembler:
    """Builds nested Profile structures for anchors within one EntityGraph.

    Attributes:
        graph: The indexed payload.
        policy: SINGLE_SUBJECT or MULTI_SUBJECT.
        unassociated: Per discriminator, the URNs of nested entities that carry
            no owner and are therefore never attached (MULTI_SUBJECT only).
            Computed once over the whole payload, independent of anchors.
    """

    def __init__(self, graph: EntityGraph, policy: str = SINGLE_SUBJECT):
        if policy not in (SINGLE_SUBJECT, MULTI_SUBJECT):
            raise ValueError(f"Invalid ownership policy: {policy}")
        self.graph = graph
        self.policy = policy
        self.unassociated: Dict[str, List[str]] = {}
        if policy == MULTI_SUBJECT:
            for type_tag in OWNED_KINDS:
                unowned = [e.urn for e in graph.of_kind(type_tag) if not getattr(e, "profile_urn", "")]
                if unowned:
                    self.unassociated[type_tag] = unowned

    def owned(self, type_tag: str, owner_urn: str) -> Iterator[WireEntity]:
        """Yield entities of a kind that belong to owner_urn, in payload order."""
        for entity in self.graph.of_kind(type_tag):
            entity_owner = getattr(entity, "profile_urn", "")
            if entity_owner:
                if owner_urn and entity_owner == owner_urn:
                    yield entity
            elif self.policy == SINGLE_SUBJECT:
                yield entity

    def _name_of(self, urn: Optional[str], variant) -> str:
        entity = self.graph.follow(urn, variant)
        return entity.name if entity is not None else ""

    def experience(self, owner_urn: str) -> Tuple[Experience, ...]:
        return tuple(
            Experience(
                urn=p.urn,
                title=p.title,
                company_name=p.company_name or self._name_of(p.company_urn, CompanyEntity),
                company_urn=p.company_urn or "",
                location_name=p.location_name,
                description=p.description,
                employment_type=p.employment_type,
                date_range=date_range_from_range(p.date_range),
            )
            for p in self.owned(POSITION, owner_urn)
        )

    def education(self, owner_urn: str) -> Tuple[Education, ...]:
        return tuple(
            Education(
                urn=e.urn,
                school_name=e.school_name or self._name_of(e.school_urn, SchoolEntity),
                school_urn=e.school_urn or "",
                degree_name=e.degree_name,
                field_of_study=e.field_of_study,
                grade=e.grade,
                activities=e.activities,
                description=e.description,
                date_range=date_range_from_time_period(e.time_period),
            )
            for e in self.owned(EDUCATION, owner_urn)
        )

    def skills(self, owner_urn: str) -> Tuple[Skill, ...]:
        return tuple(
            Skill(urn=s.urn, name=s.name, endorsement_count=s.endorsement_count)
            for s in self.owned(SKILL, owner_urn)
        )

    def certifications(self, owner_urn: str) -> Tuple[Certification, ...]:
        return tuple(
            Certification(
                urn=c.urn,
                name=c.name,
                authority=c.authority or self._name_of(c.company_urn, CompanyEntity),
                license_number=c.license_number,
                url=c.url,
                date_range=date_range_from_range(c.date_range),
            )
            for c in self.owned(CERTIFICATION, owner_urn)
        )

    def industry(self, profile: Optional[ProfileEntity]) -> str:
        if profile is None:
            return ""
        return self._name_of(profile.industry_urn, IndustryEntity)

    def location(self, profile: Optional[ProfileEntity], display_name: str = "") -> Optional[ProfileLocation]:
        """Merge the profile's location fields with its referenced Geo entity.

        display_name, when given (search cards), wins over the Geo name.
        """
        name = display_name
        country_code = postal_code = geo_urn = ""
        if profile is not None:
            geo_urn = profile.geo_urn or ""
            country_code = profile.country_code
            postal_code = profile.postal_code
            if not name:
                name = self._name_of(profile.geo_urn, GeoEntity)

        if not (name or country_code or postal_code or geo_urn):
            return None
        return ProfileLocation(name=name, country_code=country_code, postal_code=postal_code, geo_urn=geo_urn)

    def picture(self, profile: Optional[ProfileEntity]) -> Optional[ProfilePicture]:
        if profile is None or not (profile.picture_urn or profile.picture_a11y_text):
            return None
        return ProfilePicture(display_image_urn=profile.picture_urn, a11y_text=profile.picture_a11y_text)

    def connection_info(self, profile: Optional[ProfileEntity], owner_urn: str) -> Optional[ConnectionInfo]:
        """Combine the owned network info with the profile's following state.

        The follower count comes from the following state when present,
        otherwise from the network info.
        """
        network = next(iter(self.owned(NETWORK_INFO, owner_urn)), None) if owner_urn else None
        following = None
        if profile is not None:
            following = self.graph.follow(profile.following_state_urn, FollowingStateEntity)

        if network is None and following is None:
            return None
        return ConnectionInfo(
            connection_count=network.connections_count if network is not None else 0,
            follower_count=following.follower_count if following is not None else network.followers_count,
            following=following.following if following is not None else False,
        )
