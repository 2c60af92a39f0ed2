"""Google Drive client library for sync hierarchy maintenance.

This package provides Python abstractions over the Google Drive REST API v3,
covering the file fetch, listing and metadata update calls the fix tool needs.
"""

from .errors import (
    SyncError,
    DriveError,
    InvalidCredentialsError,
    RemoteFileNotFoundError,
    APIUnreachableError,
    APIAccessError,
)

__all__ = [
    "SyncError",
    "DriveError",
    "InvalidCredentialsError",
    "RemoteFileNotFoundError",
    "APIUnreachableError",
    "APIAccessError",
]
