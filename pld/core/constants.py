"""Service identifiers, endpoints and limits."""
from enum import Enum
from typing import Optional

from .exceptions import UnknownServiceError

CONFIG_FILENAME = 'config.json'
HISTORY_FILENAME = 'history.json'

HISTORY_LIMIT = 50
HISTORY_DISPLAY_LIMIT = 10

# Streaming read size for file bodies
DEFAULT_CHUNK_SIZE = 256 * 1024

PIXELDRAIN_UPLOAD_URL = 'https://pixeldrain.com/api/file'
PIXELDRAIN_FILE_URL = 'https://pixeldrain.com/u/{file_id}'
PIXELDRAIN_API_KEYS_URL = 'https://pixeldrain.com/user/api_keys'
PIXELDRAIN_FREE_LIMIT = 10 * 1024 ** 3

GOFILE_UPLOAD_URL = 'https://upload.gofile.io/uploadfile'
GOFILE_PROFILE_URL = 'https://gofile.io/myProfile'

GOOGLE_DRIVE_UPLOAD_URL = 'https://www.googleapis.com/upload/drive/v3/files'
GOOGLE_DRIVE_FILES_URL = 'https://www.googleapis.com/drive/v3/files'
GOOGLE_DRIVE_SHARE_URL = 'https://drive.google.com/file/d/{file_id}/view?usp=sharing'
GOOGLE_DRIVE_SCOPES = ['https://www.googleapis.com/auth/drive.file']
GOOGLE_AUTH_URI = 'https://accounts.google.com/o/oauth2/auth'
GOOGLE_TOKEN_URI = 'https://oauth2.googleapis.com/token'
GOOGLE_CONSOLE_URL = 'https://console.cloud.google.com/apis/credentials'

OAUTH_CALLBACK_HOST = 'localhost'
OAUTH_CALLBACK_PORT = 3000
OAUTH_TIMEOUT = 120


class Service(str, Enum):
    """Supported upload destinations."""

    PIXELDRAIN = 'pixeldrain'
    GOFILE = 'gofile'
    GOOGLE_DRIVE = 'googledrive'

    @property
    def flag(self) -> str:
        """Short CLI flag for the service."""
        return _FLAGS[self]

    @property
    def label(self) -> str:
        """Human readable name."""
        return _LABELS[self]

    @property
    def color(self) -> str:
        """Rich color used when printing the service label."""
        return _COLORS[self]

    @classmethod
    def default(cls) -> 'Service':
        return cls.GOFILE

    @classmethod
    def from_flag(cls, value: Optional[str]) -> 'Service':
        """
        Resolve a CLI flag (gf/pd/gd) or full service name.

        Args:
            value: Flag or name; None selects the default service

        Returns:
            Matching Service

        Raises:
            UnknownServiceError: If the value matches no service
        """
        if value is None or not value.strip():
            return cls.default()
        key = value.strip().lower()
        for service in cls:
            if key in (service.flag, service.value):
                return service
        raise UnknownServiceError(
            f"Unknown service '{value}'. Use gf (Gofile), pd (Pixeldrain) or gd (Google Drive)."
        )


_FLAGS = {
    Service.PIXELDRAIN: 'pd',
    Service.GOFILE: 'gf',
    Service.GOOGLE_DRIVE: 'gd',
}

_LABELS = {
    Service.PIXELDRAIN: 'Pixeldrain',
    Service.GOFILE: 'Gofile',
    Service.GOOGLE_DRIVE: 'Google Drive',
}

_COLORS = {
    Service.PIXELDRAIN: 'green',
    Service.GOFILE: 'magenta',
    Service.GOOGLE_DRIVE: 'blue',
}
