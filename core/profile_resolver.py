"""
Profile Resolver — Reassembles one Profile from a profile-lookup response.

This module sits between the raw API response and the caller. It takes the
normalized Voyager payload (root result + flat "included" array) and
produces a single, fully nested Profile.

Resolution steps:
  1. Index the payload (EntityGraph).
  2. Find the anchor Profile entity:
       - with a requested identifier: the Profile whose publicIdentifier
         matches exactly;
       - without one: the first Profile referenced from the root result,
         else the first Profile carrying a publicIdentifier.
     No match raises NotFoundError.
  3. Project the anchor's scalar fields (Flexible Text normalized, NUL bytes
     stripped, whitespace trimmed on names, headline and summary).
  4. Assemble experience, education, skills and certifications with the
     SINGLE_SUBJECT ownership policy, and follow the anchor's *geo,
     *industry and *followingState references one hop.
  5. Validate: the result must carry a public identifier.

Fallback rules (the only values not copied straight from the payload):
  - full_name is "first last" when both names are present
  - profile_url is built from the public identifier

Pipeline context:
    VoyagerClient.get_profile() calls resolve_profile() on the decoded
    response. resolve_profile_json() is the same for saved response bodies.
"""

import logging
from typing import Any, Optional, Union

from config.settings import PROFILE_URL_TEMPLATE
from voyager_shared.errors import EntityValidationError, NotFoundError
from voyager_shared.wire_types import PROFILE, ProfileEntity

from .assembly import SINGLE_SUBJECT, CollectionAssembler, clean_text, compose_full_name
from .entity_graph import EntityGraph, decode_payload
from .models import Profile

logger = logging.getLogger(__name__)


class ProfileResolver:
    """Resolves a profile-lookup payload into a Profile."""

    def resolve(self, payload: Any, public_identifier: Optional[str] = None) -> Profile:
        """Resolve the payload.

        Args:
            payload: The decoded JSON response.
            public_identifier: The requested vanity name; None to take the
                profile the response is rooted on.

        Returns:
            The resolved Profile.

        Raises:
            MalformedPayloadError: If the payload is not in normalized form.
            NotFoundError: If no Profile entity matches.
            EntityValidationError: If the anchor has no public identifier.
        """
        graph = EntityGraph.from_payload(payload)
        anchor = self._find_anchor(graph, public_identifier)
        assembler = CollectionAssembler(graph, SINGLE_SUBJECT)

        first_name = clean_text(anchor.first_name)
        last_name = clean_text(anchor.last_name)
        identifier = anchor.public_identifier

        profile = Profile(
            public_identifier=identifier,
            urn=anchor.urn,
            first_name=first_name,
            last_name=last_name,
            full_name=compose_full_name("", first_name, last_name),
            headline=clean_text(anchor.headline),
            summary=clean_text(anchor.summary),
            industry=assembler.industry(anchor),
            profile_url=PROFILE_URL_TEMPLATE.format(identifier) if identifier else "",
            location=assembler.location(anchor),
            profile_picture=assembler.picture(anchor),
            connection_info=assembler.connection_info(anchor, anchor.urn),
            experience=assembler.experience(anchor.urn),
            education=assembler.education(anchor.urn),
            skills=assembler.skills(anchor.urn),
            certifications=assembler.certifications(anchor.urn),
            is_creator=anchor.creator,
            is_memorialized=anchor.memorialized,
            is_premium=anchor.premium,
            temp_status=anchor.temp_status,
            temp_status_emoji=anchor.temp_status_emoji,
        )

        if not profile.public_identifier:
            raise EntityValidationError(f"resolved profile {profile.urn or '<no urn>'} has no publicIdentifier")

        logger.debug(
            "Resolved profile %s: %d positions, %d educations, %d skills, %d certifications",
            profile.public_identifier,
            len(profile.experience),
            len(profile.education),
            len(profile.skills),
            len(profile.certifications),
        )
        return profile

    def _find_anchor(self, graph: EntityGraph, public_identifier: Optional[str]) -> ProfileEntity:
        profiles = graph.of_kind(PROFILE)

        if public_identifier:
            for entity in profiles:
                if entity.public_identifier == public_identifier:
                    return entity
            raise NotFoundError(public_identifier)

        for item in graph.root_items:
            for entity in graph.item_entities(item):
                if isinstance(entity, ProfileEntity):
                    return entity

        for entity in profiles:
            if entity.public_identifier:
                return entity

        raise NotFoundError("", "no profile entity found in API response")


def resolve_profile(payload: Any, public_identifier: Optional[str] = None) -> Profile:
    """Resolve a decoded profile-lookup payload. See ProfileResolver.resolve()."""
    return ProfileResolver().resolve(payload, public_identifier)


def resolve_profile_json(body: Union[bytes, str], public_identifier: Optional[str] = None) -> Profile:
    """Resolve a raw (saved or fetched) response body.

    Raises:
        ResponseParseError: If the body is not JSON.
    """
    return resolve_profile(decode_payload(body), public_identifier)
