"""
Errors — Exception hierarchy for the Voyager extractor.

Every exception raised by this project derives from VoyagerError so callers
can catch the whole family in one place. The tree splits by where the
failure happens:

  EncodingError           A required request argument is missing (Query Encoder)
  ResolveError            The response payload cannot produce a domain entity
    NotFoundError           No anchor entity matches the requested identifier
    MalformedPayloadError   The payload is not the normalized shape at all
      ResponseParseError      The response body is not valid JSON
    EntityValidationError   A resolved entity lacks its primary identifier
  PartialFieldError       A single field has the wrong shape (absorbed locally)
  AuthMissingError        Credentials were not supplied
  TransportError          The HTTP call itself failed
    RequestFailedError      Non-200 status
      UnauthorizedError       401 / 403
      RateLimitedError        429

NotFoundError is an expected outcome (typo in an identifier, private
profile) and is meant to be handled by callers, not reported as a crash.
PartialFieldError never escapes the resolvers: the tolerant field readers in
flexible_text.py catch it and degrade the field to its empty value.
"""

from typing import Optional


class VoyagerError(Exception):
    """Base class for all extractor errors."""


class EncodingError(VoyagerError):
    """A required scalar argument for the query encoder is missing."""


class ResolveError(VoyagerError):
    """The graph resolver could not produce a domain entity."""


class NotFoundError(ResolveError):
    """No anchor entity in the payload matches the requested identifier."""

    def __init__(self, identifier: str, message: Optional[str] = None):
        self.identifier = identifier
        super().__init__(message or f"profile not found in API response for publicIdentifier: {identifier}")


class MalformedPayloadError(ResolveError):
    """The payload cannot be decoded into the normalized wire shape."""


class ResponseParseError(MalformedPayloadError):
    """The raw response body is not decodable JSON."""


class EntityValidationError(ResolveError):
    """A finished domain entity is missing its primary identifier."""


class PartialFieldError(VoyagerError):
    """A field is present but has an unexpected shape.

    Attributes:
        field: The wire field name, when known.
        value: The offending value.
    """

    def __init__(self, field: str, value, message: Optional[str] = None):
        self.field = field
        self.value = value
        super().__init__(message or f"field {field!r} has unexpected shape: {type(value).__name__}")


class AuthMissingError(VoyagerError):
    """Authentication credentials (li_at, csrf_token) are missing."""


class TransportError(VoyagerError):
    """The HTTP request could not be executed."""


class RequestFailedError(TransportError):
    """The server answered with a non-200 status code.

    Attributes:
        status_code: HTTP status returned by the server.
        body: Raw response body, decoded leniently for diagnostics.
    """

    def __init__(self, status_code: int, body: str = "", message: Optional[str] = None):
        self.status_code = status_code
        self.body = body
        super().__init__(message or f"received status code {status_code}, body: {body[:500]}")


class UnauthorizedError(RequestFailedError):
    """401 or 403: credentials rejected or expired."""


class RateLimitedError(RequestFailedError):
    """429: the server is throttling this session."""
