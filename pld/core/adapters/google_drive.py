"""
Google Drive adapter.

Three calls per upload:
1. multipart/related upload (JSON metadata + file stream)
2. "anyone with the link" reader permission
3. file lookup for the webViewLink
"""
from typing import Any, Awaitable, Callable, Dict, Optional, Tuple

import aiohttp

from ..auth import fetch_access_token
from ..constants import (
    Service,
    GOOGLE_DRIVE_UPLOAD_URL,
    GOOGLE_DRIVE_FILES_URL,
    GOOGLE_DRIVE_SHARE_URL,
    DEFAULT_CHUNK_SIZE,
)
from ..exceptions import MissingCredentialsError, ServiceError
from ..logging import get_logger
from ..storage.models import GoogleDriveCredentials
from ..upload.models import UploadSource, UploadResult
from ..upload.payload import ReadCallback
from .base import BaseAdapter

logger = get_logger(__name__)

FILE_FIELDS = 'id, name, webViewLink, webContentLink'

TokenProvider = Callable[[], Awaitable[str]]


class GoogleDriveAdapter(BaseAdapter):
    """
    Uploads to the Drive v3 API with an OAuth2 access token.

    The access token is fetched from the stored refresh token right before
    the upload.
    """

    service = Service.GOOGLE_DRIVE
    default_upload_url = GOOGLE_DRIVE_UPLOAD_URL

    def __init__(
        self,
        credentials: Optional[GoogleDriveCredentials],
        token_provider: Optional[TokenProvider] = None,
        upload_url: Optional[str] = None,
        files_url: Optional[str] = None,
        chunk_size: int = DEFAULT_CHUNK_SIZE
    ):
        """
        Initialize adapter.

        Args:
            credentials: Stored OAuth credentials with a refresh token
            token_provider: Coroutine function returning an access token
            upload_url: Override for the media upload endpoint
            files_url: Override for the files metadata endpoint

        Raises:
            MissingCredentialsError: If Drive has not been authorized
        """
        if credentials is None or not credentials.is_authorized:
            raise MissingCredentialsError(
                "Google Drive not configured",
                service=self.service.value
            )
        super().__init__(upload_url, chunk_size)
        self._credentials = credentials
        self._token_provider = token_provider or (lambda: fetch_access_token(credentials))
        self._files_url = (files_url or GOOGLE_DRIVE_FILES_URL).rstrip('/')
        self._access_token: Optional[str] = None

    def auth_headers(self) -> Dict[str, str]:
        if self._access_token is None:
            return {}
        return {'Authorization': f"Bearer {self._access_token}"}

    def parse_response(self, data: Any) -> Tuple[str, str]:
        if not isinstance(data, dict) or not data.get('id'):
            raise ServiceError(
                "Google Drive response did not include a file id",
                service=self.service.value
            )
        file_id = str(data['id'])
        link = data.get('webViewLink') or GOOGLE_DRIVE_SHARE_URL.format(file_id=file_id)
        return file_id, link

    async def upload(
        self,
        session: aiohttp.ClientSession,
        source: UploadSource,
        on_read: ReadCallback
    ) -> UploadResult:
        self._access_token = await self._token_provider()
        headers = self.auth_headers()

        with aiohttp.MultipartWriter('related') as body:
            body.append_json({'name': source.name})
            body.append_payload(self.build_payload(source, on_read))

        logger.debug(f"Uploading {source.name} to Google Drive")
        created = await self.request_json(
            session,
            'POST',
            self.upload_url,
            params={'uploadType': 'multipart', 'fields': FILE_FIELDS},
            data=body,
            headers=headers,
        )
        if not isinstance(created, dict) or not created.get('id'):
            raise ServiceError(
                "Google Drive did not return the created file",
                service=self.service.value
            )
        file_id = created['id']

        logger.debug(f"Sharing {file_id} with anyone who has the link")
        await self.request_json(
            session,
            'POST',
            f"{self._files_url}/{file_id}/permissions",
            json={'role': 'reader', 'type': 'anyone'},
            headers=headers,
        )

        info = await self.request_json(
            session,
            'GET',
            f"{self._files_url}/{file_id}",
            params={'fields': FILE_FIELDS},
            headers=headers,
        )
        file_id, link = self.parse_response(info)
        return UploadResult(
            service=self.service,
            file_id=file_id,
            download_link=link,
            file_name=source.name,
            file_size=source.size,
            response=info,
        )
