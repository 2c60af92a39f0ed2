"""Typed exception hierarchy for Google Drive related errors.

This module defines all custom exceptions used by the Drive client library.
All exceptions inherit from DriveError base class for easy catching and
include descriptive messages with context to help with debugging.
"""


class SyncError(Exception):
    """Base exception for all drive-sync-fix errors.

    Use this to catch any application-level error from the fix tool.
    """
    pass


class DriveError(SyncError):
    """Base exception for all Drive-related errors."""
    pass


class InvalidCredentialsError(DriveError):
    """Raised when API credentials are missing or authentication fails."""

    def __init__(self, source: str, reason: str = "credentials are invalid"):
        super().__init__(f"Drive authentication failed ({source}): {reason}")
        self.source = source
        self.reason = reason


class RemoteFileNotFoundError(DriveError):
    """Raised when a requested file does not exist or is not visible."""

    def __init__(self, file_id: str):
        super().__init__(f"File {file_id} not found")
        self.file_id = file_id


class APIUnreachableError(DriveError):
    """Raised when the Drive API is not available or unreachable."""

    def __init__(self, endpoint: str):
        super().__init__(f"API is not available at {endpoint}")
        self.endpoint = endpoint


class APIAccessError(DriveError):
    """Raised when API access fails after retries or due to access restrictions."""

    def __init__(self, message: str = "Drive API failure (after 3 retries)"):
        super().__init__(message)
