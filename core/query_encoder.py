"""
Query Encoder — Builds the Voyager "variables" grammar for GraphQL GET requests.

Voyager GraphQL endpoints do not take URL-encoded JSON. The "variables"
query parameter is written in a Rest.li-style grammar and spliced into the
URL unescaped:

    variables=(start:0,count:10,origin:FACETED_SEARCH,query:(keywords:data%20scientist,
              flagshipSearchIntent:SEARCH_SRP,queryParameters:List((key:network,value:List(F,O)),
              (key:resultType,value:List(PEOPLE))),includeFiltersInResponse:false))

Grammar rules:
  - scalars are written bare: ints as digits, booleans as true/false, strings as-is
  - FreeText leaves (keywords, identifiers) are percent-encoded individually,
    since they may contain spaces or the grammar's own delimiters
  - lists are written List(a,b,c); an empty list is List()
  - records are written (key:value,key2:value2), recursively
  - parentheses, colons and commas of the grammar itself are never escaped

Records are built from explicit (key, value) pairs, so the emitted key order
is the order of the endpoint schema below, never dict iteration order.
A None value inside a record means "optional and absent": the key is omitted.

Policies:
  - An empty filter list is omitted from queryParameters entirely.
  - A missing or zero paging start is written as start:0.
  - Filters keep the order in which the caller supplied them; resultType is
    appended last unless the caller already supplied it.

Pipeline context:
    VoyagerClient calls encode_search_variables() / encode_profile_variables()
    and then build_graphql_url() to produce the request URL.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple
from urllib.parse import quote, urlencode

from voyager_shared.errors import EncodingError


@dataclass(frozen=True)
class FreeText:
    """A user-supplied text leaf that must be percent-encoded."""

    value: str


class Record:
    """An ordered (key:value,...) group of the variables grammar."""

    def __init__(self, *pairs: Tuple[str, Any]):
        self.pairs = pairs

    def __repr__(self):
        return f"Record{self.pairs!r}"


@dataclass
class SearchArgs:
    """Arguments for a people search.

    Attributes:
        keywords: Free-text search keywords (required).
        filters: Named filter lists, e.g. {"network": ["F", "O"]}. Insertion
            order is preserved in the request.
        start: Paging offset; None is treated as 0.
        count: Page size; None omits the key.
        origin: Voyager search origin.
        flagship_search_intent: Voyager search intent.
        result_type: Value of the trailing resultType filter; None omits it.
        include_filters_in_response: Ask the server to echo facet filters.
    """

    keywords: str
    filters: Dict[str, List[str]] = field(default_factory=dict)
    start: Optional[int] = 0
    count: Optional[int] = 10
    origin: str = "FACETED_SEARCH"
    flagship_search_intent: str = "SEARCH_SRP"
    result_type: Optional[str] = "PEOPLE"
    include_filters_in_response: bool = False


def escape_free_text(value: str) -> str:
    """Percent-encode a free-text leaf. Spaces become %20, delimiters are escaped."""
    return quote(value, safe="")


def encode_value(value: Any) -> str:
    """Encode one node of the value tree.

    Raises:
        EncodingError: If a None reaches a position that needs a value.
        TypeError: For plain dicts (use Record) and unsupported types.
    """
    if value is None:
        raise EncodingError("cannot encode a missing value")
    if isinstance(value, FreeText):
        return escape_free_text(value.value)
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float, str)):
        return str(value)
    if isinstance(value, (list, tuple)):
        return "List(" + ",".join(encode_value(v) for v in value) + ")"
    if isinstance(value, Record):
        return "(" + ",".join(f"{k}:{encode_value(v)}" for k, v in value.pairs if v is not None) + ")"
    raise TypeError(f"cannot encode {type(value).__name__} in variables grammar")


def _require(value: Optional[str], name: str) -> str:
    if value is None or not str(value).strip():
        raise EncodingError(f"{name} is required")
    return value


def search_query_parameters(args: SearchArgs) -> List[Record]:
    """Build the queryParameters list: non-empty filters, then resultType."""
    params = [
        Record(("key", name), ("value", list(values)))
        for name, values in args.filters.items()
        if values
    ]
    if args.result_type and "resultType" not in args.filters:
        params.append(Record(("key", "resultType"), ("value", [args.result_type])))
    return params


def encode_search_variables(args: SearchArgs) -> str:
    """Encode a people-search request.

    Raises:
        EncodingError: If keywords are missing or blank.
    """
    keywords = _require(args.keywords, "keywords")
    variables = Record(
        ("start", args.start or 0),
        ("count", args.count),
        ("origin", args.origin),
        ("query", Record(
            ("keywords", FreeText(keywords)),
            ("flagshipSearchIntent", args.flagship_search_intent),
            ("queryParameters", search_query_parameters(args)),
            ("includeFiltersInResponse", args.include_filters_in_response),
        )),
    )
    return encode_value(variables)


def encode_profile_variables(public_identifier: str) -> str:
    """Encode a profile lookup: (memberIdentity:<publicIdentifier>).

    Raises:
        EncodingError: If the identifier is missing or blank.
    """
    identifier = _require(public_identifier, "publicIdentifier")
    return encode_value(Record(("memberIdentity", FreeText(identifier))))


def build_graphql_url(base_url: str, query_id: str, variables: str) -> str:
    """Assemble the request URL.

    queryId and includeWebMetadata go through normal query-string encoding;
    the variables fragment is appended verbatim so its parentheses stay literal.
    """
    base_query = urlencode([("includeWebMetadata", "true"), ("queryId", query_id)])
    separator = "&" if "?" in base_url else "?"
    return f"{base_url}{separator}{base_query}&variables={variables}"
