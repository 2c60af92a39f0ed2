"""Command-line interface for fixing Drive sync hierarchies.

This package provides the `drive-sync-fix` CLI tool that resolves a sync root,
partitions the user's Drive listing into the root's subtree and the rest, and
repairs stale syncRootId markers with progress indication and error handling.
"""

from .fix_command import FixCommand
from .root_resolver import RootResolver
from .subtree_partitioner import SubtreePartitioner
from .models import ExitCode, Correction, FixSummary
from .errors import (
    CLIError,
    ConfigError,
    RootNotADirectoryError,
    NotASyncRootError,
    ListingError,
    CorrectionError,
)

__all__ = [
    'FixCommand',
    'RootResolver',
    'SubtreePartitioner',
    'ExitCode',
    'Correction',
    'FixSummary',
    'CLIError',
    'ConfigError',
    'RootNotADirectoryError',
    'NotASyncRootError',
    'ListingError',
    'CorrectionError',
]
