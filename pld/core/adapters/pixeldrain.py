"""
Pixeldrain adapter.

Pixeldrain authenticates with HTTP Basic auth: empty username, API key as
the password.
"""
import base64
from typing import Any, Dict, Optional, Tuple

from ..constants import (
    Service,
    PIXELDRAIN_UPLOAD_URL,
    PIXELDRAIN_FILE_URL,
    PIXELDRAIN_FREE_LIMIT,
    DEFAULT_CHUNK_SIZE,
)
from ..exceptions import MissingCredentialsError, ServiceError
from .base import BaseAdapter


class PixeldrainAdapter(BaseAdapter):
    """
    Uploads to https://pixeldrain.com/api/file.

    Response: {"id": "abc123"} -> https://pixeldrain.com/u/abc123
    """

    service = Service.PIXELDRAIN
    default_upload_url = PIXELDRAIN_UPLOAD_URL
    free_limit = PIXELDRAIN_FREE_LIMIT

    def __init__(
        self,
        api_key: str,
        upload_url: Optional[str] = None,
        chunk_size: int = DEFAULT_CHUNK_SIZE
    ):
        """
        Initialize adapter.

        Args:
            api_key: Pixeldrain API key

        Raises:
            MissingCredentialsError: If api_key is empty
        """
        if not api_key:
            raise MissingCredentialsError(
                "No Pixeldrain API key found",
                service=self.service.value
            )
        super().__init__(upload_url, chunk_size)
        self._api_key = api_key

    @classmethod
    def exceeds_free_limit(cls, size: int) -> bool:
        """True if size is over the free-tier upload limit."""
        return size > cls.free_limit

    def auth_headers(self) -> Dict[str, str]:
        token = base64.b64encode(f":{self._api_key}".encode('utf-8')).decode('ascii')
        return {'Authorization': f"Basic {token}"}

    def parse_response(self, data: Any) -> Tuple[str, str]:
        if not isinstance(data, dict) or not data.get('id'):
            message = data.get('message') if isinstance(data, dict) else None
            raise ServiceError(
                message or "Pixeldrain response did not include a file id",
                service=self.service.value
            )
        file_id = str(data['id'])
        return file_id, PIXELDRAIN_FILE_URL.format(file_id=file_id)
