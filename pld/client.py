"""
PldClient - high-level entry point for uploads and stored credentials.

Example:
    >>> client = PldClient()
    >>> result = await client.upload("video.mp4", Service.GOFILE)
    >>> print(result.download_link)
"""
from pathlib import Path
from typing import Optional, Union

from .core.adapters import BaseAdapter, create_adapter
from .core.auth import GoogleOAuthFlow
from .core.constants import Service
from .core.exceptions import ConfigError
from .core.logging import get_logger
from .core.settings import Settings
from .core.storage import ConfigStore, HistoryStore, GoogleDriveCredentials
from .core.upload import (
    UploadCoordinator,
    UploadResult,
    CancellationToken,
    ProgressCallback,
)

logger = get_logger(__name__)


class PldClient:
    """
    Ties settings, the config and history stores, and the adapters together.

    Attributes:
        settings: Runtime settings
        config: Credential store (config.json)
        history: Upload history (history.json)
    """

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or Settings.from_env()
        self.config = ConfigStore(self.settings.config_file)
        self.history = HistoryStore(self.settings.history_file)

    def adapter_for(self, service: Service) -> BaseAdapter:
        """
        Build the adapter for a service from stored credentials.

        Raises:
            MissingCredentialsError: If the service needs credentials that are
                not configured
        """
        return create_adapter(service, self.config, self.settings)

    def coordinator(
        self,
        service: Service = Service.GOFILE,
        progress_callback: Optional[ProgressCallback] = None,
        cancellation: Optional[CancellationToken] = None
    ) -> UploadCoordinator:
        """
        Build an UploadCoordinator wired to the history store.

        Raises:
            MissingCredentialsError: If the service is not configured
        """
        return UploadCoordinator(
            self.adapter_for(service),
            settings=self.settings,
            history=self.history,
            progress_callback=progress_callback,
            cancellation=cancellation,
        )

    async def upload(
        self,
        file_path: Union[str, Path],
        service: Service = Service.GOFILE,
        progress_callback: Optional[ProgressCallback] = None,
        cancellation: Optional[CancellationToken] = None
    ) -> UploadResult:
        """
        Upload a file and record it in history.

        Args:
            file_path: Local file to upload
            service: Destination service
            progress_callback: Called with UploadProgress on every chunk sent
            cancellation: Token that aborts the upload when fired

        Returns:
            UploadResult with file id and download link
        """
        coordinator = self.coordinator(service, progress_callback, cancellation)
        return await coordinator.upload(file_path)

    def authorize_google_drive(
        self,
        client_id: str,
        client_secret: str,
        open_browser: bool = True
    ) -> GoogleDriveCredentials:
        """
        Run the OAuth consent flow and store the resulting credentials.

        Raises:
            AuthorizationError: If authorization fails
            ConfigError: If client id or secret is empty
        """
        client_id, client_secret = client_id.strip(), client_secret.strip()
        if not client_id or not client_secret:
            raise ConfigError(
                "Client ID and Client Secret cannot be empty",
                service=Service.GOOGLE_DRIVE.value
            )
        flow = GoogleOAuthFlow(client_id, client_secret, open_browser=open_browser)
        credentials = flow.authorize()
        saved = self.config.set_google_drive(credentials)
        logger.info(f"Google Drive credentials saved to {self.config.path}")
        return saved
