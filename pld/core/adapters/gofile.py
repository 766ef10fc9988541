"""
Gofile adapter.

Uploads are anonymous unless an account token is configured.
"""
from typing import Any, Dict, Optional, Tuple

from ..constants import Service, GOFILE_UPLOAD_URL, DEFAULT_CHUNK_SIZE
from ..exceptions import ServiceError
from .base import BaseAdapter


class GofileAdapter(BaseAdapter):
    """
    Uploads to https://upload.gofile.io/uploadfile.

    Response:
        {"status": "ok", "data": {"id": "...", "downloadPage": "https://gofile.io/d/..."}}

    Older servers name the id "fileId"; both are accepted.
    """

    service = Service.GOFILE
    default_upload_url = GOFILE_UPLOAD_URL

    def __init__(
        self,
        token: Optional[str] = None,
        upload_url: Optional[str] = None,
        chunk_size: int = DEFAULT_CHUNK_SIZE
    ):
        super().__init__(upload_url, chunk_size)
        self._token = token or None

    @property
    def is_anonymous(self) -> bool:
        return self._token is None

    def auth_headers(self) -> Dict[str, str]:
        if self._token is None:
            return {}
        return {'Authorization': f"Bearer {self._token}"}

    def parse_response(self, data: Any) -> Tuple[str, str]:
        if not isinstance(data, dict):
            raise ServiceError("Gofile returned an unexpected response", service=self.service.value)

        if data.get('status') != 'ok':
            raise ServiceError(
                data.get('message') or f"Gofile upload failed: {data.get('status', 'unknown status')}",
                service=self.service.value
            )

        payload = data.get('data') or {}
        file_id = payload.get('fileId') or payload.get('id')
        link = payload.get('downloadPage')
        if not file_id or not link:
            raise ServiceError(
                "Gofile response did not include a file id and download page",
                service=self.service.value
            )
        return str(file_id), str(link)
