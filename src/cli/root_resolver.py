"""Sync root resolution.

This module fetches the folder named as sync root and checks that it is a
directory carrying the syncRoot marker before any listing work starts.
"""

import logging
from typing import Optional

from ..drive_client.api_wrapper import APIWrapper
from ..drive_client.auth import Authenticator
from ..models.remote_entity import RemoteEntity
from .errors import NotASyncRootError, RootNotADirectoryError

logger = logging.getLogger(__name__)

ROOT_FIELDS = ["id", "name", "mimeType", "appProperties"]


class RootResolver:
    """Resolves and validates the sync root folder.

    Example:
        >>> resolver = RootResolver(api)
        >>> root = resolver.resolve("1AbCdEf")
        >>> print(root.name)
    """

    def __init__(self, api: Optional[APIWrapper] = None):
        """Initialize RootResolver with optional API wrapper.

        Args:
            api: APIWrapper instance. If None, creates one with
                 default authentication.
        """
        if api is None:
            api = APIWrapper(Authenticator())
        self.api = api

    def resolve(self, root_id: str) -> RemoteEntity:
        """Fetch the sync root and validate it.

        Args:
            root_id: Drive ID of the expected sync root folder

        Returns:
            The root entity, unchanged

        Raises:
            ValueError: If root_id is empty
            RemoteFileNotFoundError: If the folder does not exist
            APIUnreachableError: If the API is unreachable
            APIAccessError: If API access fails after retries
            RootNotADirectoryError: If the ID names a file
            NotASyncRootError: If the folder lacks the syncRoot marker
        """
        if not root_id or not root_id.strip():
            raise ValueError("root_id cannot be empty")

        logger.info(f"Drive API: GET /files/{root_id}?fields={','.join(ROOT_FIELDS)}")
        data = self.api.get_file(root_id, ROOT_FIELDS)
        root = RemoteEntity.from_api(data)

        if not root.is_dir:
            raise RootNotADirectoryError(root_id, root.mime_type)

        if not root.is_sync_root:
            raise NotASyncRootError(root_id)

        logger.debug(f"Resolved sync root '{root.name}' [{root.file_id}]")
        return root
