"""Exceptions raised by the catalog client."""

from __future__ import annotations


class CatalogError(Exception):
    """Base class for every error raised by the client."""


class MalformedRequestError(CatalogError, ValueError):
    def __init__(self, reference: str, reason: str) -> None:
        super().__init__(f"malformed request reference {reference!r}: {reason}")
        self.reference = reference
        self.reason = reason


class TransportError(CatalogError):
    """The HTTP exchange could not be completed."""


class ApiError(CatalogError):
    def __init__(self, status_code: int) -> None:
        super().__init__(f"api error, response code: {status_code}")
        self.status_code = status_code


class DecodeError(CatalogError):
    """The response body is not a well-formed catalog document."""
