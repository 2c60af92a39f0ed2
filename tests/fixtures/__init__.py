"""Test fixtures for the drive-sync-fix tests.

This module provides builders for Drive file resources and RemoteEntity
objects used across the unit tests.
"""

from .drive_files import (
    ROOT_ID,
    api_file,
    make_file,
    make_folder,
    make_root,
)

__all__ = [
    'ROOT_ID',
    'api_file',
    'make_file',
    'make_folder',
    'make_root',
]
