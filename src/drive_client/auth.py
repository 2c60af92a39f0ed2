"""Authentication module for loading Google Drive credentials.

This module handles loading Google Drive OAuth credentials. The paths of the
OAuth client secrets and the cached user token are read from environment
variables using python-dotenv. A cached token is refreshed when expired; when
no usable token exists the installed-app OAuth flow is run once and the
resulting token is stored for later runs.
"""

import logging
import os
from pathlib import Path
from typing import NamedTuple, Optional

from dotenv import load_dotenv
from google.auth.exceptions import RefreshError
from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import InstalledAppFlow

from .errors import InvalidCredentialsError

logger = logging.getLogger(__name__)

SCOPES = ['https://www.googleapis.com/auth/drive']
DEFAULT_TOKEN_FILE = '.drive-sync/token.json'


class CredentialPaths(NamedTuple):
    """Locations of the OAuth files."""
    client_secrets_file: str
    token_file: str


class Authenticator:
    """Loads and validates Drive credentials.

    Required environment variables:
        DRIVE_CREDENTIALS_FILE: OAuth client secrets JSON (desktop client)

    Optional environment variables:
        DRIVE_TOKEN_FILE: Cached authorized-user token JSON
                          (default: .drive-sync/token.json)

    Raises:
        InvalidCredentialsError: If the client secrets are missing or the
            token cannot be obtained

    Example:
        >>> auth = Authenticator()
        >>> creds = auth.get_credentials()
    """

    def __init__(self):
        """Initialize the authenticator by loading environment variables from .env file."""
        load_dotenv()
        self._credentials: Optional[Credentials] = None

    def get_paths(self) -> CredentialPaths:
        """Resolve the credential file locations from the environment.

        Returns:
            CredentialPaths with the client secrets and token file paths

        Raises:
            InvalidCredentialsError: If DRIVE_CREDENTIALS_FILE is not set
        """
        client_secrets = os.getenv('DRIVE_CREDENTIALS_FILE')
        token_file = os.getenv('DRIVE_TOKEN_FILE') or DEFAULT_TOKEN_FILE

        if not client_secrets:
            raise InvalidCredentialsError(
                source="DRIVE_CREDENTIALS_FILE",
                reason="environment variable is not set"
            )

        return CredentialPaths(client_secrets_file=client_secrets, token_file=token_file)

    def get_credentials(self) -> Credentials:
        """Get valid Drive credentials, refreshing or authorizing as needed.

        Returns:
            Credentials: google-auth user credentials with the Drive scope

        Raises:
            InvalidCredentialsError: If credentials cannot be loaded or obtained
        """
        if self._credentials is not None and self._credentials.valid:
            return self._credentials

        paths = self.get_paths()
        creds = self._load_token(paths.token_file)

        if creds and creds.expired and creds.refresh_token:
            try:
                logger.info("Refreshing expired Drive token")
                creds.refresh(Request())
            except RefreshError as e:
                logger.warning(f"Token refresh failed, re-authorizing: {e}")
                creds = None

        if not creds or not creds.valid:
            creds = self._run_flow(paths.client_secrets_file)

        self._store_token(paths.token_file, creds)
        self._credentials = creds
        return creds

    def _load_token(self, token_file: str) -> Optional[Credentials]:
        if not os.path.exists(token_file):
            return None
        try:
            return Credentials.from_authorized_user_file(token_file, SCOPES)
        except (ValueError, OSError) as e:
            logger.warning(f"Ignoring unreadable token file {token_file}: {e}")
            return None

    def _run_flow(self, client_secrets_file: str) -> Credentials:
        if not os.path.exists(client_secrets_file):
            raise InvalidCredentialsError(
                source=client_secrets_file,
                reason="client secrets file does not exist"
            )
        try:
            flow = InstalledAppFlow.from_client_secrets_file(client_secrets_file, SCOPES)
            return flow.run_local_server(port=0)
        except ValueError as e:
            raise InvalidCredentialsError(source=client_secrets_file, reason=str(e)) from e

    def _store_token(self, token_file: str, creds: Credentials) -> None:
        token_path = Path(token_file)
        try:
            token_path.parent.mkdir(parents=True, exist_ok=True)
            token_path.write_text(creds.to_json(), encoding='utf-8')
        except OSError as e:
            # Credentials are still usable for this run
            logger.warning(f"Could not store token at {token_file}: {e}")
