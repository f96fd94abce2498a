"""
voyager-shared — Building blocks shared by the Voyager encoder and resolvers.

  errors.py          Exception hierarchy (EncodingError, NotFoundError, ...).
  flexible_text.py   Flexible Text normalization and tolerant field readers.
  wire_types.py      "$type" dispatch table and the per-type wire variants.
  output_manager.py  Timestamped output folders and retention cleanup.
"""

from .errors import (
    AuthMissingError,
    EncodingError,
    EntityValidationError,
    MalformedPayloadError,
    NotFoundError,
    PartialFieldError,
    RateLimitedError,
    RequestFailedError,
    ResolveError,
    ResponseParseError,
    TransportError,
    UnauthorizedError,
    VoyagerError,
)
from .flexible_text import collect_refs, decode_flexible_text
from .output_manager import OutputManager
from .wire_types import ENTITY_TYPES, decode_entity
