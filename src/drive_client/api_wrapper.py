"""API wrapper for Google Drive REST API v3.

This module wraps the google-api-python-client Drive service and provides
error translation from HTTP exceptions to our typed exception hierarchy.
It integrates with the retry logic for handling rate limits.
"""

import logging
import re
import socket
from typing import Any, Dict, Iterable, List, Optional, Union

import httplib2
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from .auth import Authenticator
from .errors import (
    InvalidCredentialsError,
    RemoteFileNotFoundError,
    APIUnreachableError,
    APIAccessError,
)
from .retry_logic import as_decorator, _is_rate_limit_error

logger = logging.getLogger(__name__)

DRIVE_ENDPOINT = "https://www.googleapis.com/drive/v3"
LIST_PAGE_SIZE = 1000

Fields = Union[str, Iterable[str]]


def join_fields(fields: Fields) -> str:
    """Render a field projection as the comma separated string Drive expects.

    Example:
        >>> join_fields(["id", "name"])
        'id,name'
    """
    if isinstance(fields, str):
        return fields
    return ",".join(fields)


class APIWrapper:
    """Wrapper around the google-api-python-client Drive service.

    This class provides a thin wrapper over the Drive API client that:
    1. Handles authentication using the Authenticator
    2. Translates HTTP errors to typed exceptions
    3. Integrates retry logic for rate limits
    4. Hides pagination of file listings

    Example:
        >>> auth = Authenticator()
        >>> api = APIWrapper(auth)
        >>> folder = api.get_file("1AbCdEf", ["id", "name", "mimeType"])
    """

    def __init__(self, authenticator: Authenticator, service: Optional[Any] = None):
        """Initialize the API wrapper.

        Args:
            authenticator: Authenticator instance for loading credentials
            service: Prebuilt Drive service resource (built lazily if None)
        """
        self._authenticator = authenticator
        self._service = service

    def _get_service(self) -> Any:
        """Get or create the Drive service resource.

        Raises:
            InvalidCredentialsError: If credentials are missing
        """
        if self._service is None:
            creds = self._authenticator.get_credentials()
            self._service = build("drive", "v3", credentials=creds, cache_discovery=False)
        return self._service

    def _validate_file_id(self, file_id: str) -> None:
        """Validate that a file ID is in the correct format.

        Drive IDs are URL-safe base64-like strings.

        Raises:
            ValueError: If file_id is empty or contains unexpected characters
        """
        if not file_id or not str(file_id).strip():
            raise ValueError("file_id cannot be empty")

        if not re.match(r'^[A-Za-z0-9_-]+$', str(file_id).strip()):
            raise ValueError(
                f"Invalid file_id format: '{file_id}'. "
                f"File IDs may only contain letters, digits, '-' and '_'."
            )

    def _sanitize_credentials(self, text: str) -> str:
        """Mask bearer tokens, access tokens and API keys in error text."""
        if not text:
            return text

        sanitized = re.sub(
            r'Bearer\s+[^\s\n\r]+',
            'Bearer ***REDACTED***',
            text,
            flags=re.IGNORECASE
        )
        sanitized = re.sub(
            r'(access_token|refresh_token|client_secret|key)=([^&\s"\']+)',
            r'\1=***REDACTED***',
            sanitized,
            flags=re.IGNORECASE
        )
        # OAuth access tokens start with "ya29."
        sanitized = re.sub(r'ya29\.[\w.-]+', '***REDACTED***', sanitized)
        return sanitized

    def _translate_error(self, exception: Exception, operation: str, file_id: str = "unknown") -> Exception:
        """Translate client exceptions to typed Drive exceptions.

        Args:
            exception: The original exception from the API client
            operation: Description of the operation that failed (for logging)
            file_id: The file the operation addressed, if any

        Returns:
            Exception: Translated exception (one of our typed exceptions)
        """
        if isinstance(exception, (socket.timeout, TimeoutError, ConnectionError, httplib2.HttpLib2Error)):
            return APIUnreachableError(endpoint=DRIVE_ENDPOINT)

        if isinstance(exception, HttpError):
            status = int(exception.resp.status)
            if status == 401:
                return InvalidCredentialsError(source=DRIVE_ENDPOINT, reason="request was not authorized")
            if status == 404:
                return RemoteFileNotFoundError(file_id=file_id)
            if status in (502, 503, 504):
                return APIUnreachableError(endpoint=DRIVE_ENDPOINT)

        safe_error_msg = self._sanitize_credentials(str(exception))
        logger.error(f"API operation failed: {operation} - {safe_error_msg}")
        return APIAccessError(f"Drive API failure during {operation}: {safe_error_msg}")

    def get_file(self, file_id: str, fields: Fields) -> Dict[str, Any]:
        """Fetch a single file's metadata.

        Args:
            file_id: The Drive file ID
            fields: Field projection (e.g. ["id", "name", "mimeType"])

        Returns:
            Dict containing the file resource

        Raises:
            InvalidCredentialsError: If credentials are invalid
            RemoteFileNotFoundError: If the file doesn't exist
            APIUnreachableError: If API is unreachable
            APIAccessError: If API access fails after retries
        """
        self._validate_file_id(file_id)

        @as_decorator
        def _fetch():
            service = self._get_service()
            try:
                return service.files().get(
                    fileId=file_id,
                    fields=join_fields(fields),
                ).execute()
            except Exception as e:
                if _is_rate_limit_error(e):
                    # Untranslated so the retry wrapper can back off
                    raise
                raise self._translate_error(e, f"get_file({file_id})", file_id) from e

        return _fetch()

    def list_all_files(
        self,
        query: str,
        fields: Fields,
        order_by: str = "",
    ) -> List[Dict[str, Any]]:
        """List every file matching a query, following all result pages.

        Args:
            query: Drive search query (e.g. "trashed = false")
            fields: Field projection, must include nextPageToken
            order_by: Optional sort order

        Returns:
            List of file resources across all pages

        Raises:
            InvalidCredentialsError: If credentials are invalid
            APIUnreachableError: If API is unreachable
            APIAccessError: If API access fails after retries
        """
        files: List[Dict[str, Any]] = []
        page_token: Optional[str] = None
        page_num = 0

        while True:
            page_num += 1
            params: Dict[str, Any] = {
                "q": query,
                "fields": join_fields(fields),
                "pageSize": LIST_PAGE_SIZE,
            }
            if page_token:
                params["pageToken"] = page_token
            if order_by:
                params["orderBy"] = order_by

            @as_decorator
            def _list(params=params, page_num=page_num):
                service = self._get_service()
                try:
                    return service.files().list(**params).execute()
                except Exception as e:
                    if _is_rate_limit_error(e):
                        raise
                    raise self._translate_error(e, f"list_all_files(page {page_num})") from e

            response = _list()
            batch = response.get("files", [])
            files.extend(batch)
            logger.debug(f"Listed page {page_num}: {len(batch)} file(s), {len(files)} so far")

            page_token = response.get("nextPageToken")
            if not page_token:
                break

        return files

    def update_file(self, file_id: str, body: Dict[str, Any], fields: Fields) -> Dict[str, Any]:
        """Patch a file's metadata. Only the supplied fields are changed.

        Args:
            file_id: The Drive file ID
            body: Partial file resource (e.g. {"appProperties": {...}})
            fields: Field projection of the returned resource

        Returns:
            Dict containing the updated file resource

        Raises:
            InvalidCredentialsError: If credentials are invalid
            RemoteFileNotFoundError: If the file doesn't exist
            APIUnreachableError: If API is unreachable
            APIAccessError: If API access fails after retries
        """
        self._validate_file_id(file_id)

        @as_decorator
        def _update():
            service = self._get_service()
            try:
                return service.files().update(
                    fileId=file_id,
                    body=body,
                    fields=join_fields(fields),
                ).execute()
            except Exception as e:
                if _is_rate_limit_error(e):
                    # Untranslated so the retry wrapper can back off
                    raise
                raise self._translate_error(e, f"update_file({file_id})", file_id) from e

        return _update()
