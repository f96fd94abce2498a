"""
Entity Graph — Index pass over a normalized Voyager response.

A normalized response has this structure:

    {
      "data": {
        "data": {
          "searchDashClustersByAll": {          # one root field per query
            "elements": [                       # clusters
              {"items": [                       # root items
                {"item": {"*entityResult": "urn:li:fsd_entityResultViewModel:..."}},
                ...
              ]}
            ]
          }
        }
      },
      "included": [                             # every entity, flat
        {"$type": "com.linkedin.voyager.dash.search.EntityResultViewModel", ...},
        {"$type": "com.linkedin.voyager.dash.identity.profile.Profile", ...}
      ]
    }

Lookup endpoints use "*elements": ["urn:..."] instead of clusters; each
URN is then its own root item.

EntityGraph.from_payload() decodes every included element through the
wire_types dispatch table and builds:
  - a URN index (first occurrence wins when an entity is repeated)
  - a discriminator index preserving "included" order
  - the ordered root items, each a tuple of the URNs it references

Root items never hold inline entity data: anything under a "*" key is a
reference, everything else is ignored.
"""

import json
import logging
from typing import Any, Dict, List, Optional, Tuple, Type, Union

from voyager_shared.errors import MalformedPayloadError, ResponseParseError
from voyager_shared.flexible_text import collect_refs
from voyager_shared.wire_types import WireEntity, decode_entity

logger = logging.getLogger(__name__)

RootItem = Tuple[str, ...]


class EntityGraph:
    """Read-only indexes over one decoded response payload."""

    def __init__(self, entities: List[WireEntity], root_items: List[RootItem]):
        self.entities = tuple(entities)
        self.root_items = tuple(root_items)
        self._by_urn: Dict[str, WireEntity] = {}
        self._by_kind: Dict[str, List[WireEntity]] = {}

        for entity in self.entities:
            if entity.urn and entity.urn not in self._by_urn:
                self._by_urn[entity.urn] = entity
            self._by_kind.setdefault(entity.type_tag, []).append(entity)

    @classmethod
    def from_payload(cls, payload: Any) -> "EntityGraph":
        """Decode and index a response payload.

        Raises:
            MalformedPayloadError: If the payload, its "included" array or its
                root result do not have the normalized shape.
        """
        if not isinstance(payload, dict):
            raise MalformedPayloadError(f"payload must be an object, got {type(payload).__name__}")

        included = payload.get("included")
        if included is None:
            included = []
        if not isinstance(included, list):
            raise MalformedPayloadError(f"included must be an array, got {type(included).__name__}")

        entities = [decode_entity(raw) for raw in included]
        root_items = extract_root_items(payload.get("data"))

        logger.debug("Indexed %d included entities, %d root items", len(entities), len(root_items))
        return cls(entities, root_items)

    def get(self, urn: Optional[str]) -> Optional[WireEntity]:
        if not urn:
            return None
        return self._by_urn.get(urn)

    def follow(self, urn: Optional[str], variant: Type[WireEntity]) -> Optional[WireEntity]:
        """Dereference a URN one hop, returning the entity only if it is of the given variant."""
        entity = self.get(urn)
        if isinstance(entity, variant):
            return entity
        return None

    def of_kind(self, type_tag: str) -> Tuple[WireEntity, ...]:
        """All entities with this discriminator, in "included" order."""
        return tuple(self._by_kind.get(type_tag, ()))

    def item_entities(self, item: RootItem) -> List[WireEntity]:
        """Entities referenced by a root item that are present in the payload."""
        return [e for e in (self.get(urn) for urn in item) if e is not None]


def decode_payload(body: Union[bytes, str]) -> Any:
    """JSON-decode a raw response body.

    Raises:
        ResponseParseError: If the body is not valid JSON (or not valid UTF-8).
    """
    try:
        return json.loads(body)
    except ValueError as e:
        raise ResponseParseError(f"failed to parse response body: {e}") from e


def extract_root_items(data: Any) -> List[RootItem]:
    """Collect the ordered root items from the "data" section of a response."""
    if data is None:
        return []
    if not isinstance(data, dict):
        raise MalformedPayloadError(f"data must be an object, got {type(data).__name__}")

    inner = data.get("data", data)
    if inner is None:
        return []
    if not isinstance(inner, dict):
        raise MalformedPayloadError(f"data.data must be an object, got {type(inner).__name__}")

    items: List[RootItem] = []
    for key, root in inner.items():
        if key.startswith("$") or not isinstance(root, dict):
            continue
        items.extend(_items_from_root(key, root))
    return items


def _items_from_root(key: str, root: Dict[str, Any]) -> List[RootItem]:
    if "*elements" in root:
        urns = root["*elements"]
        if not isinstance(urns, list):
            raise MalformedPayloadError(f"{key}.*elements must be an array")
        return [(urn,) for urn in urns if isinstance(urn, str) and urn]

    if "elements" in root:
        elements = root["elements"]
        if not isinstance(elements, list):
            raise MalformedPayloadError(f"{key}.elements must be an array")
        items = []
        for element in elements:
            if not isinstance(element, dict):
                raise MalformedPayloadError(f"{key}.elements entries must be objects")
            if "items" in element:
                cluster_items = element["items"]
                if not isinstance(cluster_items, list):
                    raise MalformedPayloadError(f"{key}.elements[].items must be an array")
                candidates = cluster_items
            else:
                candidates = [element]
            for candidate in candidates:
                refs = tuple(collect_refs(candidate))
                if refs:
                    items.append(refs)
        return items

    refs = tuple(collect_refs(root))
    return [refs] if refs else []
