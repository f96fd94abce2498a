"""
Voyager API Client — Executes encoded GraphQL GET requests against LinkedIn Voyager.

This module is responsible for all HTTP communication. It composes the three
pure pieces of the pipeline around a single network call:

  1. Query Encoder   builds the request URL (query_encoder.py)
  2. Transport       executes GET url with headers -> (status, body bytes)
  3. Graph Resolver  turns the decoded body into Profiles (profile_resolver.py,
                     search_resolver.py)

Authentication:
    Voyager authenticates a browser session with the li_at cookie plus a
    CSRF token that must equal the JSESSIONID cookie value:

        Csrf-Token: ajax:1234567890
        Cookie: li_at=AQEDAR...; JSESSIONID="ajax:1234567890"

Status handling:
    200        body is decoded and resolved
    401, 403   UnauthorizedError
    429        RateLimitedError
    other      RequestFailedError

No retries are made here; retry and rate-limit policy belong to the caller.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple
from urllib.parse import quote

import requests

from config.settings import (
    DEFAULT_HEADERS,
    DEFAULT_PROFILE_QUERY_ID,
    DEFAULT_SEARCH_QUERY_ID,
    PROFILE_URL_TEMPLATE,
    REQUEST_TIMEOUT_SECONDS,
    SEARCH_REFERER_URL,
    VOYAGER_GRAPHQL_URL,
)
from voyager_shared.errors import (
    AuthMissingError,
    RateLimitedError,
    RequestFailedError,
    TransportError,
    UnauthorizedError,
)

from .entity_graph import decode_payload
from .models import Profile
from .profile_resolver import resolve_profile
from .query_encoder import (
    SearchArgs,
    build_graphql_url,
    encode_profile_variables,
    encode_search_variables,
)
from .search_resolver import resolve_search

logger = logging.getLogger(__name__)


@dataclass
class AuthCredentials:
    """Session credentials copied from a logged-in browser."""

    li_at: str
    csrf_token: str
    jsessionid: str = ""

    def is_complete(self) -> bool:
        return bool(self.li_at and self.csrf_token)

    def cookie_header(self) -> str:
        jsessionid = self.jsessionid or self.csrf_token
        return f'li_at={self.li_at}; JSESSIONID="{jsessionid}"'


class RequestsTransport:
    """GET-only transport over a requests.Session.

    requests transparently decompresses gzip/deflate bodies, so callers
    always receive plain bytes.
    """

    def __init__(self, timeout: float = REQUEST_TIMEOUT_SECONDS, session: Optional[requests.Session] = None):
        self.timeout = timeout
        self._session = session or requests.Session()

    def get(self, url: str, headers: Dict[str, str]) -> Tuple[int, bytes]:
        """Execute the request.

        Returns:
            (status_code, body_bytes)

        Raises:
            TransportError: If the request could not be completed.
        """
        try:
            response = self._session.get(url, headers=headers, timeout=self.timeout)
        except requests.RequestException as e:
            raise TransportError(f"http client failed to execute request: {e}") from e
        return response.status_code, response.content


class VoyagerClient:
    """Client for the Voyager GraphQL people-search and profile endpoints.

    Attributes:
        credentials: li_at cookie, CSRF token and JSESSIONID.
        headers: Headers sent on every request; DEFAULT_HEADERS when not given.
        base_url: GraphQL endpoint URL.
        search_query_id: queryId of the search endpoint.
        profile_query_id: queryId of the profile endpoint.
    """

    def __init__(
        self,
        credentials: AuthCredentials,
        headers: Optional[Dict[str, str]] = None,
        transport=None,
        base_url: str = VOYAGER_GRAPHQL_URL,
        search_query_id: str = DEFAULT_SEARCH_QUERY_ID,
        profile_query_id: str = DEFAULT_PROFILE_QUERY_ID,
    ):
        self.credentials = credentials
        self.headers = dict(DEFAULT_HEADERS if headers is None else headers)
        self.base_url = base_url
        self.search_query_id = search_query_id
        self.profile_query_id = profile_query_id
        self._transport = transport or RequestsTransport()

    def search_profiles(self, args: SearchArgs) -> List[Profile]:
        """Run a people search and resolve the result cards.

        Raises:
            AuthMissingError: If credentials are incomplete.
            EncodingError: If keywords are missing.
            TransportError: On network failure or a non-200 status.
            ResolveError: If the response cannot be resolved.
        """
        self._require_auth()
        url = build_graphql_url(self.base_url, self.search_query_id, encode_search_variables(args))
        headers = {
            "Referer": build_search_referer(args),
            "X-Li-Page-Instance": "urn:li:page:d_flagship3_search_srp_people;placeholder",
            "X-Li-Pem-Metadata": "Voyager - People SRP=search-results",
        }
        payload = self._get(url, headers)
        profiles = resolve_search(payload)
        logger.info("Search %r returned %d profiles", args.keywords, len(profiles))
        return profiles

    def get_profile(self, public_identifier: str) -> Profile:
        """Fetch and resolve one profile by its public identifier.

        Raises:
            AuthMissingError: If credentials are incomplete.
            EncodingError: If the identifier is empty.
            NotFoundError: If the response holds no matching profile.
        """
        self._require_auth()
        url = build_graphql_url(self.base_url, self.profile_query_id, encode_profile_variables(public_identifier))
        # Header values must stay Latin-1; vanity names may not be
        escaped = quote(public_identifier, safe="")
        headers = {
            "Referer": PROFILE_URL_TEMPLATE.format(escaped),
            "X-Li-Page-Instance": f"urn:li:page:d_flagship3_profile_view_base;{escaped}",
            "X-Li-Pem-Metadata": "Voyager - Profile",
        }
        payload = self._get(url, headers)
        return resolve_profile(payload, public_identifier)

    def _require_auth(self):
        if not self.credentials.is_complete():
            raise AuthMissingError("authentication credentials (li_at, csrf_token) are missing")

    def _request_headers(self, extra_headers: Dict[str, str]) -> Dict[str, str]:
        headers = dict(self.headers)
        headers["Csrf-Token"] = self.credentials.csrf_token
        headers["Cookie"] = self.credentials.cookie_header()
        headers.update(extra_headers)
        return headers

    def _execute(self, url: str, extra_headers: Dict[str, str]) -> bytes:
        logger.debug("GET %s", url)
        status_code, body = self._transport.get(url, self._request_headers(extra_headers))

        if status_code != 200:
            text = body.decode("utf-8", errors="replace")
            if status_code in (401, 403):
                raise UnauthorizedError(status_code, text)
            if status_code == 429:
                raise RateLimitedError(status_code, text)
            raise RequestFailedError(status_code, text)

        logger.debug("Received %d bytes", len(body))
        return body

    def _get(self, url: str, extra_headers: Dict[str, str]):
        return decode_payload(self._execute(url, extra_headers))


def build_search_referer(args: SearchArgs) -> str:
    """Referer of the people-search page the request pretends to come from.

    The network filter is written as a literal JSON array, as the web app does:
        .../search/results/people/?keywords=investor&network=["F","O"]&origin=FACETED_SEARCH
    """
    parts = ["keywords=" + quote(args.keywords, safe="")]
    network = args.filters.get("network")
    if network:
        parts.append('network=["' + '","'.join(network) + '"]')
    parts.append(f"origin={args.origin}")
    return SEARCH_REFERER_URL + "?" + "&".join(parts)
