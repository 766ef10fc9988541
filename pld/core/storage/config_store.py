"""
Credential storage backed by config.json.
"""
from pathlib import Path
from typing import Optional, Union

from ..constants import Service
from ..exceptions import ConfigError
from ..logging import get_logger
from ..utils import utc_now
from .json_store import JsonFileStore
from .models import AppConfig, ApiKeyCredentials, GoogleDriveCredentials

logger = get_logger(__name__)


class ConfigStore:
    """
    Per-service credentials.

    Every mutation loads the document, changes it and writes it back whole.

    Example:
        >>> store = ConfigStore(Path.home() / '.pld' / 'config.json')
        >>> store.set_api_key(Service.PIXELDRAIN, 'key')
        >>> store.get_api_key(Service.PIXELDRAIN)
        'key'
    """

    def __init__(self, path: Union[str, Path]):
        self._file = JsonFileStore(path)

    @property
    def path(self) -> Path:
        return self._file.path

    def load(self) -> AppConfig:
        """
        Load the config document.

        Old installs stored a single Pixeldrain key as a top-level "apiKey";
        such documents are migrated to the services map and saved.
        """
        raw = self._file.read()
        if not isinstance(raw, dict):
            logger.warning(f"Ignoring malformed config in {self.path}")
            return AppConfig()

        config = AppConfig.from_dict(raw)
        if raw.get('apiKey') and 'services' not in raw:
            logger.info("Migrating legacy config format")
            config.services[Service.PIXELDRAIN.value] = ApiKeyCredentials(
                api_key=raw['apiKey'],
                updated_at=utc_now(),
            )
            self.save(config)
        return config

    def save(self, config: AppConfig) -> None:
        self._file.write(config.to_dict())

    def get_credentials(self, service: Service) -> Optional[ApiKeyCredentials]:
        """Stored API key credentials for Pixeldrain or Gofile."""
        self._require_api_key_service(service)
        creds = self.load().services.get(service.value)
        if creds is None or not creds.api_key:
            return None
        return creds

    def get_api_key(self, service: Service) -> Optional[str]:
        creds = self.get_credentials(service)
        return creds.api_key if creds else None

    def set_api_key(self, service: Service, api_key: str) -> ApiKeyCredentials:
        """
        Store an API key.

        Raises:
            ConfigError: If the key is empty
        """
        self._require_api_key_service(service)
        api_key = (api_key or '').strip()
        if not api_key:
            raise ConfigError("API key cannot be empty", service=service.value)

        config = self.load()
        creds = ApiKeyCredentials(api_key=api_key, updated_at=utc_now())
        config.services[service.value] = creds
        self.save(config)
        logger.info(f"Saved {service.label} API key")
        return creds

    def delete_api_key(self, service: Service) -> bool:
        """Remove a stored key. Returns True if one was removed."""
        self._require_api_key_service(service)
        config = self.load()
        if config.services.pop(service.value, None) is None:
            return False
        self.save(config)
        logger.info(f"Deleted {service.label} API key")
        return True

    def get_google_drive(self) -> Optional[GoogleDriveCredentials]:
        return self.load().google_drive

    def set_google_drive(self, credentials: GoogleDriveCredentials) -> GoogleDriveCredentials:
        """
        Store Google Drive OAuth credentials.

        Raises:
            ConfigError: If client ID or secret is empty
        """
        if not credentials.client_id or not credentials.client_secret:
            raise ConfigError(
                "Client ID and Client Secret cannot be empty",
                service=Service.GOOGLE_DRIVE.value
            )
        credentials.updated_at = utc_now()
        config = self.load()
        config.google_drive = credentials
        self.save(config)
        logger.info("Saved Google Drive credentials")
        return credentials

    def delete_google_drive(self) -> bool:
        config = self.load()
        if config.google_drive is None:
            return False
        config.google_drive = None
        self.save(config)
        logger.info("Deleted Google Drive credentials")
        return True

    @staticmethod
    def _require_api_key_service(service: Service) -> None:
        if service is Service.GOOGLE_DRIVE:
            raise ConfigError(
                "Google Drive uses OAuth credentials, not an API key",
                service=service.value
            )
