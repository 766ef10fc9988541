"""
Google OAuth2 helper.

Runs the authorization-code flow through a short-lived local callback
listener and exchanges the stored refresh token for access tokens.
"""
import asyncio
from typing import Any, Callable, Dict, Optional

from google.auth.exceptions import RefreshError, TransportError
from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import InstalledAppFlow, WSGITimeoutError
from oauthlib.oauth2.rfc6749.errors import OAuth2Error

from ..constants import (
    Service,
    GOOGLE_AUTH_URI,
    GOOGLE_TOKEN_URI,
    GOOGLE_DRIVE_SCOPES,
    OAUTH_CALLBACK_HOST,
    OAUTH_CALLBACK_PORT,
    OAUTH_TIMEOUT,
)
from ..exceptions import AuthorizationError, InvalidCredentialsError, NetworkError
from ..logging import get_logger
from ..storage.models import GoogleDriveCredentials

logger = get_logger(__name__)

PROMPT_MESSAGE = (
    "If your browser does not open, visit this URL to authorize pld:\n{url}"
)
SUCCESS_MESSAGE = (
    "Authorization successful! You can close this window and return to the terminal."
)


class GoogleOAuthFlow:
    """
    Authorization-code flow for a desktop OAuth client.

    The consent page redirects to http://localhost:3000/, where a one-shot
    listener receives the code. The listener gives up after two minutes.

    Example:
        >>> flow = GoogleOAuthFlow(client_id, client_secret)
        >>> credentials = flow.authorize()
        >>> credentials.refresh_token
        '1//0g...'
    """

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        port: int = OAUTH_CALLBACK_PORT,
        timeout: int = OAUTH_TIMEOUT,
        open_browser: bool = True,
        flow_factory: Optional[Callable[..., InstalledAppFlow]] = None
    ):
        """
        Initialize flow.

        Args:
            client_id: OAuth client ID
            client_secret: OAuth client secret
            port: Local callback port
            timeout: Seconds to wait for the browser redirect
            open_browser: Open the consent page automatically
            flow_factory: Builds the InstalledAppFlow (defaults to from_client_config)
        """
        self._client_id = client_id
        self._client_secret = client_secret
        self._port = port
        self._timeout = timeout
        self._open_browser = open_browser
        self._flow_factory = flow_factory or InstalledAppFlow.from_client_config

    @property
    def redirect_uri(self) -> str:
        return f"http://{OAUTH_CALLBACK_HOST}:{self._port}/"

    @property
    def client_config(self) -> Dict[str, Any]:
        """Client configuration in the client_secrets.json "installed" format."""
        return {
            'installed': {
                'client_id': self._client_id,
                'client_secret': self._client_secret,
                'auth_uri': GOOGLE_AUTH_URI,
                'token_uri': GOOGLE_TOKEN_URI,
                'redirect_uris': [self.redirect_uri],
            }
        }

    def authorize(self) -> GoogleDriveCredentials:
        """
        Run the consent flow and return credentials with a refresh token.

        Raises:
            AuthorizationError: If consent is denied, times out, the port is
                busy, or Google returns no refresh token
        """
        flow = self._flow_factory(self.client_config, scopes=GOOGLE_DRIVE_SCOPES)
        logger.info(f"Waiting for OAuth callback on {self.redirect_uri}")
        try:
            credentials = flow.run_local_server(
                host=OAUTH_CALLBACK_HOST,
                port=self._port,
                open_browser=self._open_browser,
                timeout_seconds=self._timeout,
                authorization_prompt_message=PROMPT_MESSAGE,
                success_message=SUCCESS_MESSAGE,
                access_type='offline',
                prompt='consent',
            )
        except OSError as e:
            raise AuthorizationError(
                f"Could not start the local callback listener on port {self._port}: {e}",
                service=Service.GOOGLE_DRIVE.value
            ) from e
        except OAuth2Error as e:
            raise AuthorizationError(
                f"Authorization failed: {e.description or e.error}",
                service=Service.GOOGLE_DRIVE.value
            ) from e
        except WSGITimeoutError as e:
            raise AuthorizationError(
                "Authorization timeout",
                service=Service.GOOGLE_DRIVE.value
            ) from e

        if not getattr(credentials, 'refresh_token', None):
            raise AuthorizationError(
                "No refresh token received. Please try again.",
                service=Service.GOOGLE_DRIVE.value
            )

        logger.info("Google Drive authorization received")
        return GoogleDriveCredentials(
            client_id=self._client_id,
            client_secret=self._client_secret,
            refresh_token=credentials.refresh_token,
        )


def build_credentials(config: GoogleDriveCredentials) -> Credentials:
    """google-auth Credentials that can refresh from the stored token."""
    return Credentials(
        token=None,
        refresh_token=config.refresh_token,
        token_uri=GOOGLE_TOKEN_URI,
        client_id=config.client_id,
        client_secret=config.client_secret,
        scopes=GOOGLE_DRIVE_SCOPES,
    )


async def fetch_access_token(
    config: GoogleDriveCredentials,
    request_factory: Callable[[], Request] = Request
) -> str:
    """
    Exchange the refresh token for a short-lived access token.

    Args:
        config: Stored Google Drive credentials
        request_factory: Builds the google-auth transport

    Returns:
        Access token

    Raises:
        InvalidCredentialsError: If Google rejects the refresh token
        NetworkError: If Google cannot be reached
    """
    if not config.is_authorized:
        raise InvalidCredentialsError(
            "Google Drive is not authorized",
            service=Service.GOOGLE_DRIVE.value
        )

    credentials = build_credentials(config)
    try:
        await asyncio.to_thread(credentials.refresh, request_factory())
    except RefreshError as e:
        raise InvalidCredentialsError(
            f"Google rejected the refresh token: {e}",
            service=Service.GOOGLE_DRIVE.value
        ) from e
    except TransportError as e:
        raise NetworkError(
            f"Could not reach Google: {e}",
            service=Service.GOOGLE_DRIVE.value
        ) from e

    logger.debug("Obtained Google Drive access token")
    return credentials.token
