"""
Models — The resolved, denormalized domain entities.

Resolvers build these once per call from an immutable wire payload. All
classes are frozen and nested collections are tuples, so a Profile cannot
be changed after it is returned and two resolutions of the same payload
compare equal field for field.
"""

from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional, Tuple


@dataclass(frozen=True)
class Date:
    year: int = 0
    month: int = 0
    day: int = 0


@dataclass(frozen=True)
class DateRange:
    """Start and end of an experience, education or certification.

    end is None for an ongoing entry.
    """

    start: Optional[Date] = None
    end: Optional[Date] = None

    @property
    def is_current(self) -> bool:
        return self.start is not None and self.end is None


@dataclass(frozen=True)
class Experience:
    urn: str = ""
    title: str = ""
    company_name: str = ""
    company_urn: str = ""
    location_name: str = ""
    description: str = ""
    employment_type: str = ""
    date_range: Optional[DateRange] = None


@dataclass(frozen=True)
class Education:
    urn: str = ""
    school_name: str = ""
    school_urn: str = ""
    degree_name: str = ""
    field_of_study: str = ""
    grade: str = ""
    activities: str = ""
    description: str = ""
    date_range: Optional[DateRange] = None


@dataclass(frozen=True)
class Skill:
    urn: str = ""
    name: str = ""
    endorsement_count: int = 0


@dataclass(frozen=True)
class Certification:
    urn: str = ""
    name: str = ""
    authority: str = ""
    license_number: str = ""
    url: str = ""
    date_range: Optional[DateRange] = None


@dataclass(frozen=True)
class ProfileLocation:
    name: str = ""
    country_code: str = ""
    postal_code: str = ""
    geo_urn: str = ""


@dataclass(frozen=True)
class ProfilePicture:
    display_image_urn: str = ""
    a11y_text: str = ""


@dataclass(frozen=True)
class ConnectionInfo:
    connection_count: int = 0
    follower_count: int = 0
    following: bool = False


@dataclass(frozen=True)
class Profile:
    """A fully resolved member profile.

    Attributes:
        public_identifier: Vanity name from the profile URL, e.g. "jane-doe".
        urn: The profile URN, e.g. "urn:li:fsd_profile:ACoAAB...".
        full_name: As displayed; first + last when the payload has no display name.
        location: None when the payload carries no location data at all.
        profile_picture: None when the payload carries no picture data.
        connection_info: None when no network or following-state entity applies.
        experience/education/skills/certifications: In payload order.
    """

    public_identifier: str = ""
    urn: str = ""
    first_name: str = ""
    last_name: str = ""
    full_name: str = ""
    headline: str = ""
    summary: str = ""
    industry: str = ""
    profile_url: str = ""
    location: Optional[ProfileLocation] = None
    profile_picture: Optional[ProfilePicture] = None
    connection_info: Optional[ConnectionInfo] = None
    experience: Tuple[Experience, ...] = ()
    education: Tuple[Education, ...] = ()
    skills: Tuple[Skill, ...] = ()
    certifications: Tuple[Certification, ...] = ()
    is_creator: bool = False
    is_memorialized: bool = False
    is_premium: bool = False
    temp_status: str = ""
    temp_status_emoji: str = ""

    def to_dict(self) -> Dict[str, Any]:
        """JSON-serializable representation (nested dataclasses become dicts)."""
        return asdict(self)
