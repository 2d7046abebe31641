"""
cometlookup.errors — Failure kinds raised while resolving an Identifier.

None of these cross Identifier boundaries: the batch driver records them
as a failed resolution and moves on.
"""

from __future__ import annotations
from typing import Optional


class CometLookupError(Exception):
    """Base class for all resolution failures."""


class TransportError(CometLookupError):
    """Network, TLS, timeout or unexpected HTTP status for one request."""

    def __init__(self, message: str, url: str = "",
                 status_code: Optional[int] = None):
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class NotFoundError(TransportError):
    """The remote answered 404 for a candidate."""

    def __init__(self, url: str = ""):
        super().__init__(f"Not found: {url}", url=url, status_code=404)


class AmbiguousResponseError(CometLookupError):
    """Horizons returned an index of matching objects instead of data."""

    def __init__(self, message: str, text: str = ""):
        super().__init__(message)
        self.text = text


class ParseError(CometLookupError):
    """An otherwise successful response lacks the expected structure."""


class NoMatchError(CometLookupError):
    """Every candidate and fallback was exhausted."""


class InputError(CometLookupError):
    """The Identifier list could not be read."""
