"""Domain-level exception hierarchy for service and repository layers."""

from __future__ import annotations


class DomainError(Exception):
    """Base class for domain-specific failures."""


class NotFoundError(DomainError):
    """Raised when a requested entity does not exist."""


class ConflictError(DomainError):
    """Raised when a state conflict occurs (e.g. duplicate reports)."""


class InvalidArgumentError(DomainError):
    """Raised when caller input (pagination, report form) is malformed."""


class StoreError(DomainError):
    """Raised when the underlying store fails (I/O, connection, constraint)."""
