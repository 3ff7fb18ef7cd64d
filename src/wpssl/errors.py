"""Custom exceptions for the wpssl CLI."""

from __future__ import annotations


class WpsslError(Exception):
    """Base exception for all wpssl operations."""

    def __init__(self, message: str, *, exit_code: int = 1):
        super().__init__(message)
        self.exit_code = exit_code


class PrivilegeError(WpsslError):
    """Not running as root."""


class InputValidationError(WpsslError):
    """Operator input failed a format check."""


class UnsupportedPlatformError(WpsslError):
    """Distribution has no entry in the install table."""


class ExternalToolError(WpsslError):
    """An external command exited non-zero."""


class ResourceConflictError(WpsslError):
    """A port or directory is already taken and the operator declined to free it."""


class PostconditionError(WpsslError):
    """An external tool reported success but its expected output is missing."""
