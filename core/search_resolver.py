"""
Search Resolver — Turns a people-search response into an ordered list of Profiles.

Each root item of a search response references a search card
(EntityResultViewModel) and possibly other entities: the member's Profile,
a feedback card, insight cards. One Profile is produced per root item that
references a card, in root-item order. Items without a card are skipped.

Per hit:
  - the card supplies the display fields: title -> full_name,
    primarySubtitle -> headline, secondarySubtitle -> location name,
    navigationUrl -> profile_url, trackingUrn -> urn
  - the member's Profile entity is the one co-referenced in the same root
    item, else the Profile whose URN equals the card's trackingUrn; it
    supplies publicIdentifier (when the card lacks one), first/last name,
    picture and location details
  - nested collections use the MULTI_SUBJECT ownership policy: only
    entities whose profileUrn names this member are attached; unowned ones
    are skipped and reported once per resolve call

A payload without any root items (older deployments) falls back to the
cards in "included" order, matched to Profiles by trackingUrn only.

Every result must carry a URN; a card with neither a trackingUrn nor a
matched Profile fails the call with EntityValidationError.
"""

import logging
from typing import Any, Dict, List, Optional, Union

from config.settings import PROFILE_URL_TEMPLATE
from voyager_shared.errors import EntityValidationError
from voyager_shared.wire_types import SEARCH_HIT, ProfileEntity, SearchHitEntity

from .assembly import MULTI_SUBJECT, CollectionAssembler, clean_text, compose_full_name
from .entity_graph import EntityGraph, decode_payload
from .models import Profile

logger = logging.getLogger(__name__)


class SearchResolver:
    """Resolves a search payload into Profiles.

    Attributes:
        unassociated: After resolve(), the number of nested entities per
            discriminator that were skipped because they name no owner.
    """

    def __init__(self):
        self.unassociated: Dict[str, int] = {}

    def resolve(self, payload: Any) -> List[Profile]:
        graph = EntityGraph.from_payload(payload)
        assembler = CollectionAssembler(graph, MULTI_SUBJECT)
        results = []

        if graph.root_items:
            for item in graph.root_items:
                entities = graph.item_entities(item)
                hit = next((e for e in entities if isinstance(e, SearchHitEntity)), None)
                if hit is None:
                    logger.debug("Skipping root item without a search card: %s", item)
                    continue
                member = next((e for e in entities if isinstance(e, ProfileEntity)), None)
                if member is None:
                    member = graph.follow(hit.tracking_urn, ProfileEntity)
                results.append(self._build(hit, member, assembler))
        else:
            for hit in graph.of_kind(SEARCH_HIT):
                member = graph.follow(hit.tracking_urn, ProfileEntity)
                results.append(self._build(hit, member, assembler))

        self.unassociated = {tag: len(urns) for tag, urns in assembler.unassociated.items()}
        for tag, count in self.unassociated.items():
            logger.warning("Skipped %d %s entities with no owning profile reference", count, tag)

        logger.debug("Resolved %d search results", len(results))
        return results

    def _build(self, hit: SearchHitEntity, member: Optional[ProfileEntity], assembler: CollectionAssembler) -> Profile:
        owner_urn = member.urn if member is not None else hit.tracking_urn
        urn = hit.tracking_urn or (member.urn if member is not None else "")
        public_identifier = hit.public_identifier or (member.public_identifier if member is not None else "")
        first_name = clean_text(member.first_name) if member is not None else ""
        last_name = clean_text(member.last_name) if member is not None else ""

        profile_url = hit.navigation_url
        if not profile_url and public_identifier:
            profile_url = PROFILE_URL_TEMPLATE.format(public_identifier)

        profile = Profile(
            public_identifier=public_identifier,
            urn=urn,
            first_name=first_name,
            last_name=last_name,
            full_name=compose_full_name(clean_text(hit.title), first_name, last_name),
            headline=clean_text(hit.primary_subtitle),
            summary=clean_text(hit.summary),
            industry=assembler.industry(member),
            profile_url=profile_url,
            location=assembler.location(member, display_name=clean_text(hit.secondary_subtitle)),
            profile_picture=assembler.picture(member),
            connection_info=assembler.connection_info(member, owner_urn),
            experience=assembler.experience(owner_urn),
            education=assembler.education(owner_urn),
            skills=assembler.skills(owner_urn),
            certifications=assembler.certifications(owner_urn),
            is_creator=member.creator if member is not None else False,
            is_memorialized=member.memorialized if member is not None else False,
            is_premium=member.premium if member is not None else False,
            temp_status=member.temp_status if member is not None else "",
            temp_status_emoji=member.temp_status_emoji if member is not None else "",
        )

        if not profile.urn:
            raise EntityValidationError(f"search result {hit.urn or '<no urn>'} has no member URN")
        return profile


def resolve_search(payload: Any) -> List[Profile]:
    """Resolve a decoded search payload. See SearchResolver.resolve()."""
    return SearchResolver().resolve(payload)


def resolve_search_json(body: Union[bytes, str]) -> List[Profile]:
    return resolve_search(decode_payload(body))
