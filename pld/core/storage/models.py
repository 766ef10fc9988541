"""
Data models for the config and history documents.

Field names on disk are camelCase so existing ~/.pld files keep working.
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Any, Optional

from ..utils import isoformat, parse_isoformat, utc_now, mask_secret


@dataclass
class ApiKeyCredentials:
    """
    API key for Pixeldrain or Gofile.

    Attributes:
        api_key: The key (Gofile: account token)
        updated_at: When the key was last written
    """
    api_key: str
    updated_at: Optional[datetime] = None

    @property
    def masked(self) -> str:
        return mask_secret(self.api_key)

    def to_dict(self) -> Dict[str, Any]:
        result = {'apiKey': self.api_key}
        if self.updated_at is not None:
            result['updatedAt'] = isoformat(self.updated_at)
        return result

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ApiKeyCredentials':
        return cls(
            api_key=data.get('apiKey', ''),
            updated_at=parse_isoformat(data.get('updatedAt')),
        )


@dataclass
class GoogleDriveCredentials:
    """
    OAuth2 client and refresh token for Google Drive.

    Attributes:
        client_id: OAuth client ID from Google Cloud Console
        client_secret: OAuth client secret
        refresh_token: Long-lived token from the authorization-code flow
        updated_at: When the credentials were last written
    """
    client_id: str
    client_secret: str
    refresh_token: Optional[str] = None
    updated_at: Optional[datetime] = None

    @property
    def is_authorized(self) -> bool:
        """True when a refresh token is available."""
        return bool(self.client_id and self.client_secret and self.refresh_token)

    @property
    def masked_client_id(self) -> str:
        return mask_secret(self.client_id, head=10, tail=0)

    @property
    def masked_client_secret(self) -> str:
        return mask_secret(self.client_secret, head=4, tail=0)

    def to_dict(self) -> Dict[str, Any]:
        result = {
            'clientId': self.client_id,
            'clientSecret': self.client_secret,
        }
        if self.refresh_token:
            result['refreshToken'] = self.refresh_token
        if self.updated_at is not None:
            result['updatedAt'] = isoformat(self.updated_at)
        return result

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'GoogleDriveCredentials':
        return cls(
            client_id=data.get('clientId', ''),
            client_secret=data.get('clientSecret', ''),
            refresh_token=data.get('refreshToken'),
            updated_at=parse_isoformat(data.get('updatedAt')),
        )


@dataclass
class AppConfig:
    """
    The whole config.json document.

    Attributes:
        services: API-key credentials keyed by service name
        google_drive: Google Drive OAuth credentials, if configured
    """
    services: Dict[str, ApiKeyCredentials] = field(default_factory=dict)
    google_drive: Optional[GoogleDriveCredentials] = None

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {
            'services': {name: creds.to_dict() for name, creds in self.services.items()}
        }
        if self.google_drive is not None:
            result['googleDrive'] = self.google_drive.to_dict()
        return result

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'AppConfig':
        services = {}
        raw_services = data.get('services')
        if isinstance(raw_services, dict):
            for name, value in raw_services.items():
                if isinstance(value, dict):
                    services[name] = ApiKeyCredentials.from_dict(value)
        google_drive = None
        if isinstance(data.get('googleDrive'), dict):
            google_drive = GoogleDriveCredentials.from_dict(data['googleDrive'])
        return cls(services=services, google_drive=google_drive)


@dataclass(frozen=True)
class HistoryEntry:
    """
    One past upload.

    Attributes:
        service: Service name (pixeldrain, gofile, googledrive)
        timestamp: Upload completion time
        filename: Local file name
        file_size: Human readable size, e.g. "1.5 MB"
        file_id: Service file identifier
        download_link: Shareable link
    """
    service: str
    timestamp: datetime
    filename: str
    file_size: str
    file_id: str
    download_link: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            'service': self.service,
            'timestamp': isoformat(self.timestamp),
            'filename': self.filename,
            'fileSize': self.file_size,
            'fileId': self.file_id,
            'downloadLink': self.download_link,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'HistoryEntry':
        return cls(
            service=data.get('service', ''),
            timestamp=parse_isoformat(data.get('timestamp')) or utc_now(),
            filename=data.get('filename', ''),
            file_size=data.get('fileSize', ''),
            file_id=data.get('fileId', ''),
            download_link=data.get('downloadLink', ''),
        )
