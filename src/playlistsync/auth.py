"""YouTube OAuth2 session handling."""

import os
import pickle
from typing import List, Optional

from google.auth.exceptions import RefreshError
from google.auth.transport.requests import Request
from google_auth_oauthlib.flow import Flow
from googleapiclient.discovery import build

from . import config
from .errors import AuthorizationError
from .logging_config import get_logger

logger = get_logger(__name__)


class YouTubeSession:
    """Supplies OAuth2 credentials for the YouTube Data API.

    Tokens are obtained through the authorization-code flow, pickled to
    ``token_file`` and refreshed when expired. One session is created per
    process and handed to everything that talks to the API.
    """

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        token_file: str = config.TOKEN_FILE,
        redirect_uri: str = config.REDIRECT_URI,
        scopes: Optional[List[str]] = None,
    ):
        """Initialize session.

        Args:
            client_id: OAuth client ID from the Google Cloud console
            client_secret: OAuth client secret
            token_file: Where tokens are stored between runs
            redirect_uri: Callback URL registered for the OAuth client
            scopes: OAuth scopes, defaults to config.YOUTUBE_SCOPES
        """
        self.client_id = client_id
        self.client_secret = client_secret
        self.token_file = token_file
        self.redirect_uri = redirect_uri
        self.scopes = scopes or list(config.YOUTUBE_SCOPES)
        self._credentials = None

    @classmethod
    def from_settings(cls, settings: config.SyncSettings) -> "YouTubeSession":
        """Create a session from sync settings."""
        return cls(
            client_id=settings.client_id,
            client_secret=settings.client_secret,
            token_file=settings.token_file,
            redirect_uri=settings.redirect_uri,
        )

    def _client_config(self) -> dict:
        return {
            "web": {
                "client_id": self.client_id,
                "client_secret": self.client_secret,
                "auth_uri": config.AUTH_URI,
                "token_uri": config.TOKEN_URI,
                "redirect_uris": [self.redirect_uri],
            }
        }

    def _flow(self) -> Flow:
        return Flow.from_client_config(
            self._client_config(),
            scopes=self.scopes,
            redirect_uri=self.redirect_uri,
            autogenerate_code_verifier=False,
        )

    def _load_credentials(self):
        if self._credentials is not None:
            return self._credentials

        if os.path.exists(self.token_file):
            try:
                with open(self.token_file, "rb") as token:
                    self._credentials = pickle.load(token)
            except (OSError, pickle.UnpicklingError, EOFError) as e:
                logger.warning("Could not read stored token %s: %s", self.token_file, str(e))
                self._credentials = None
        return self._credentials

    def _save_credentials(self) -> None:
        token_dir = os.path.dirname(self.token_file)
        if token_dir:
            os.makedirs(token_dir, exist_ok=True)
        with open(self.token_file, "wb") as token:
            pickle.dump(self._credentials, token)

    def has_valid_token(self) -> bool:
        """Check for a usable token, refreshing an expired one.

        Returns:
            True if API calls can be authorized
        """
        creds = self._load_credentials()
        if not creds:
            return False
        if creds.valid:
            return True

        if creds.expired and creds.refresh_token:
            try:
                creds.refresh(Request())
            except RefreshError as e:
                logger.warning("Failed to refresh OAuth token: %s", str(e))
                return False
            self._save_credentials()
            logger.debug("Refreshed OAuth token")
            return True

        return False

    def get_token(self) -> str:
        """Get the current bearer token.

        Raises:
            AuthorizationError: If no valid token is available
        """
        if not self.has_valid_token():
            raise AuthorizationError(
                "Authorization required", authorization_url=self.authorization_url()
            )
        return self._credentials.token

    def authorization_url(self) -> str:
        """Build the consent URL the user must visit once."""
        url, _ = self._flow().authorization_url(
            access_type="offline",
            prompt="consent",
            include_granted_scopes="true",
        )
        return url

    def handle_callback(self, code: str) -> bool:
        """Complete the handshake with the code from the OAuth callback.

        Args:
            code: Authorization code returned to the redirect URI

        Returns:
            True if a token was obtained and stored
        """
        if not code:
            logger.error("Authorization callback did not include a code")
            return False

        flow = self._flow()
        try:
            flow.fetch_token(code=code)
        except Exception as e:
            logger.error("Authorization failed: %s", str(e))
            return False

        self._credentials = flow.credentials
        self._save_credentials()
        logger.info("Authorization successful, token saved to %s", self.token_file)
        return True

    def build_client(self):
        """Build an authorized YouTube Data API v3 client.

        Raises:
            AuthorizationError: If no valid token is available
        """
        if not self.has_valid_token():
            raise AuthorizationError(
                "Authorization required", authorization_url=self.authorization_url()
            )
        return build("youtube", "v3", credentials=self._credentials, cache_discovery=False)
