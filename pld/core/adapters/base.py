"""
Base class for service adapters.

Holds what every service shares: multipart body construction around a
streamed file, JSON requests, and mapping HTTP failures to pld exceptions.
"""
import json
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Tuple

import aiohttp

from ..constants import DEFAULT_CHUNK_SIZE, Service
from ..exceptions import InvalidCredentialsError, ServiceError
from ..logging import get_logger
from ..upload.models import UploadSource, UploadResult
from ..upload.payload import FileStreamPayload, ReadCallback

logger = get_logger(__name__)


class BaseAdapter(ABC):
    """
    Uploads a file as multipart/form-data to a single endpoint.

    Subclasses supply the endpoint, auth headers and response mapping.
    """

    service: Service
    default_upload_url: str = ''
    file_field: str = 'file'

    def __init__(self, upload_url: Optional[str] = None, chunk_size: int = DEFAULT_CHUNK_SIZE):
        """
        Initialize adapter.

        Args:
            upload_url: Override for the service endpoint
            chunk_size: Read size used when streaming the file
        """
        self._upload_url = upload_url or self.default_upload_url
        self._chunk_size = chunk_size

    @property
    def upload_url(self) -> str:
        return self._upload_url

    @abstractmethod
    def auth_headers(self) -> Dict[str, str]:
        """Headers carrying the service credentials (may be empty)."""

    @abstractmethod
    def parse_response(self, data: Any) -> Tuple[str, str]:
        """
        Map the service response to (file_id, download_link).

        Raises:
            ServiceError: If the response does not describe an uploaded file
        """

    def build_payload(self, source: UploadSource, on_read: ReadCallback) -> FileStreamPayload:
        return FileStreamPayload(
            source.path,
            source.size,
            on_read=on_read,
            chunk_size=self._chunk_size,
        )

    def build_form(self, source: UploadSource, on_read: ReadCallback) -> aiohttp.FormData:
        form = aiohttp.FormData()
        form.add_field(
            self.file_field,
            self.build_payload(source, on_read),
            filename=source.name,
            content_type='application/octet-stream',
        )
        return form

    async def upload(
        self,
        session: aiohttp.ClientSession,
        source: UploadSource,
        on_read: ReadCallback
    ) -> UploadResult:
        """Stream the file to the service and normalize the response."""
        logger.debug(f"POST {self.upload_url} ({source.size} bytes)")
        data = await self.request_json(
            session,
            'POST',
            self.upload_url,
            data=self.build_form(source, on_read),
            headers=self.auth_headers(),
        )
        file_id, link = self.parse_response(data)
        return UploadResult(
            service=self.service,
            file_id=file_id,
            download_link=link,
            file_name=source.name,
            file_size=source.size,
            response=data if isinstance(data, dict) else {},
        )

    async def request_json(
        self,
        session: aiohttp.ClientSession,
        method: str,
        url: str,
        **kwargs: Any
    ) -> Any:
        """
        Send a request and decode the JSON body.

        Raises:
            InvalidCredentialsError: On 401/403
            ServiceError: On any other error status or a non-JSON body
        """
        async with session.request(method, url, **kwargs) as response:
            if response.status >= 400:
                await self._raise_for_status(response)
            try:
                data = await response.json(content_type=None)
            except ValueError as e:
                raise ServiceError(
                    f"{self.service.label} returned an unreadable response",
                    service=self.service.value,
                    status=response.status
                ) from e
            logger.debug(f"{self.service.label} responded {response.status}")
            return data

    async def _raise_for_status(self, response: aiohttp.ClientResponse) -> None:
        message = await self._error_message(response)
        logger.error(f"{self.service.label} returned HTTP {response.status}: {message}")
        if response.status in (401, 403):
            raise InvalidCredentialsError(message, service=self.service.value, status=response.status)
        raise ServiceError(message, service=self.service.value, status=response.status)

    @staticmethod
    async def _error_message(response: aiohttp.ClientResponse) -> str:
        text = await response.text()
        try:
            body = json.loads(text) if text else None
        except ValueError:
            body = None
        if isinstance(body, dict):
            error = body.get('error')
            if isinstance(error, dict) and error.get('message'):
                return str(error['message'])
            if body.get('message'):
                return str(body['message'])
            if body.get('status') and body.get('status') != 'ok':
                return str(body['status'])
        return response.reason or 'Unknown error'
