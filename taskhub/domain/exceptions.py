"""Errors raised by the grouping and notification use cases."""

from __future__ import annotations


class TaskhubError(Exception):
    """Base class for domain errors surfaced to API callers."""


class ValidationError(TaskhubError, ValueError):
    """Input that can never succeed, such as an empty group name."""


class NotFoundError(TaskhubError, LookupError):
    """The resource does not exist or does not belong to the caller."""


class UnauthorizedError(TaskhubError):
    """The caller is not a member of the team or not the resource owner."""


class AuthenticationError(TaskhubError):
    """A live channel handshake presented a missing or invalid token."""


class DispatchFailure(TaskhubError):
    """A notification could not be persisted."""


__all__ = [
    "AuthenticationError",
    "DispatchFailure",
    "NotFoundError",
    "TaskhubError",
    "UnauthorizedError",
    "ValidationError",
]
