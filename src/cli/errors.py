"""Typed exception hierarchy for CLI-related errors.

This module defines all custom exceptions used by the CLI.
All exceptions inherit from CLIError base class for easy catching and
include descriptive messages with context to help with debugging.
"""

from typing import Optional

from src.drive_client.errors import SyncError


class CLIError(SyncError):
    """Base exception for all CLI-related errors."""
    pass


class ConfigError(CLIError):
    """Raised when the configuration file is unreadable or invalid."""

    def __init__(self, message: str, config_path: Optional[str] = None):
        if config_path:
            full_message = f"Config error in {config_path}: {message}"
        else:
            full_message = f"Config error: {message}"
        super().__init__(full_message)
        self.config_path = config_path
        self.original_message = message


class RootNotADirectoryError(CLIError):
    """Raised when the given sync root ID names a file rather than a folder."""

    def __init__(self, file_id: str, mime_type: str = ""):
        super().__init__(
            f"Provided root id {file_id} is not a directory (mimeType: '{mime_type}')"
        )
        self.file_id = file_id
        self.mime_type = mime_type


class NotASyncRootError(CLIError):
    """Raised when the given folder does not carry the syncRoot marker."""

    def __init__(self, file_id: str):
        super().__init__(f"Root dir with id {file_id} is not a sync root")
        self.file_id = file_id


class ListingError(CLIError):
    """Raised when the full file listing cannot be collected."""

    def __init__(self, reason: str):
        super().__init__(f"Failed listing files: {reason}")
        self.reason = reason


class CorrectionError(CLIError):
    """Raised when a syncRootId correction write fails."""

    def __init__(self, file_id: str, name: str, reason: str):
        super().__init__(
            f"Failed to update syncRootId of {name} [{file_id}]: {reason}"
        )
        self.file_id = file_id
        self.name = name
        self.reason = reason
