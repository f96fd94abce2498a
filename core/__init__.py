"""
Core package — Request encoding, graph resolution and the extraction pipeline.

  orchestrator.py      Pipeline coordination (fetch/load, save)
  voyager_client.py    HTTP communication with Voyager
  query_encoder.py     The "variables" query-parameter grammar
  entity_graph.py      Index pass over a normalized response
  assembly.py          Nested collections, date ranges, ownership policy
  profile_resolver.py  Profile lookup response -> Profile
  search_resolver.py   Search response -> [Profile]
  models.py            Resolved domain entities
"""

from .models import Profile
from .query_encoder import SearchArgs, encode_profile_variables, encode_search_variables, build_graphql_url
from .entity_graph import EntityGraph
from .profile_resolver import ProfileResolver, resolve_profile, resolve_profile_json
from .search_resolver import SearchResolver, resolve_search, resolve_search_json
from .voyager_client import AuthCredentials, RequestsTransport, VoyagerClient
from .orchestrator import VoyagerOrchestrator
