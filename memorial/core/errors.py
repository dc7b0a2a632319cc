"""
Error taxonomy for the memorial planner.

API-layer validation and not-found conditions are returned as structured
4xx responses; storage failures bubble up to the top-level handler.
"""

from __future__ import annotations


class MemorialError(Exception):
    """Base class for all memorial planner errors."""
    
    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(MemorialError):
    """A required field is missing or malformed, or there is nothing to generate."""
    pass


class NotFoundError(MemorialError):
    """Unknown category or unknown item identifier."""
    pass


class StorageError(MemorialError):
    """The persistence layer is unreachable or failing."""
    pass


class ClientPersistenceError(MemorialError):
    """Client-local storage is unavailable or full."""
    pass


class ApiError(MemorialError):
    """The content API answered with a non-success status."""
    
    def __init__(self, message: str, status_code: int):
        super().__init__(message)
        self.status_code = status_code
