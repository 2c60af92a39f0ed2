"""Data models for CLI operations.

This module defines the data models used by the CLI module.
All models use dataclasses for clean, type-safe data structures,
following the patterns established in src/models.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Optional


class ExitCode(IntEnum):
    """Exit codes for CLI operations.

    - SUCCESS (0): Hierarchy fixed (or previewed) successfully
    - GENERAL_ERROR (1): Config issues, validation failures, failed writes
    - AUTH_ERROR (3): Authentication or authorization failure
    - NETWORK_ERROR (4): Network connectivity or API availability issues
    - NOT_FOUND (5): The sync root does not exist

    Example:
        >>> sys.exit(ExitCode.SUCCESS)
    """
    SUCCESS = 0
    GENERAL_ERROR = 1
    AUTH_ERROR = 3
    NETWORK_ERROR = 4
    NOT_FOUND = 5


@dataclass(frozen=True)
class Correction:
    """A planned syncRootId write for one file.

    Attributes:
        file_id: Drive file ID
        name: File name for display purposes
        current_value: syncRootId as currently stored ("" when absent)
        target_value: syncRootId to write ("" clears the marker)

    Example:
        >>> Correction("1x", "notes.txt", current_value="", target_value="1root")
    """
    file_id: str
    name: str
    current_value: str
    target_value: str

    @property
    def kind(self) -> str:
        return "assign" if self.target_value else "clear"


@dataclass
class FixSummary:
    """Summary of a hierarchy fix run for display to user.

    Attributes:
        total_files: Number of files returned by the listing
        in_subtree_count: Files inside the sync root's subtree (root excluded)
        not_in_subtree_count: Files outside the subtree
        assigned_count: Files whose syncRootId was set to the root
        cleared_count: Files whose syncRootId was cleared
        dry_run: Whether writes were suppressed
        elapsed_seconds: Wall-clock duration of the run
    """
    total_files: int = 0
    in_subtree_count: int = 0
    not_in_subtree_count: int = 0
    assigned_count: int = 0
    cleared_count: int = 0
    dry_run: bool = False
    elapsed_seconds: Optional[float] = None

    @property
    def corrected_count(self) -> int:
        return self.assigned_count + self.cleared_count
