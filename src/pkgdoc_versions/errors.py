# SPDX-License-Identifier: MIT
"""Exception classes for the versions tab builder."""

from __future__ import annotations


class ErrorCode:
    """Standard error codes."""

    MALFORMED_VERSION = "MALFORMED_VERSION"
    COLLABORATOR_FAILED = "COLLABORATOR_FAILED"
    INVALID_CONFIG = "INVALID_CONFIG"


class VersionsError(Exception):
    """Base exception with a machine-readable error code.

    Attributes:
        code: Error code from ErrorCode class
        message: Human-readable error message
    """

    code: str = ErrorCode.MALFORMED_VERSION

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)

    def to_dict(self) -> dict:
        """Convert to a serializable error payload."""
        return {"error": {"code": self.code, "message": self.message}}


class MalformedVersionError(VersionsError):
    """Raised when a version string is not a valid semantic version."""

    code = ErrorCode.MALFORMED_VERSION

    def __init__(self, version: str, message: str = ""):
        self.version = version
        super().__init__(message or f"Invalid semantic version: {version!r}")


class CollaboratorError(VersionsError):
    """Raised when an injected callback (link or vulnerability lookup) fails."""

    code = ErrorCode.COLLABORATOR_FAILED

    def __init__(self, collaborator: str, module_path: str, cause: BaseException):
        self.collaborator = collaborator
        self.module_path = module_path
        super().__init__(f"{collaborator} failed for {module_path!r}: {cause}")


class ConfigError(VersionsError):
    """Raised when configuration loading fails."""

    code = ErrorCode.INVALID_CONFIG
