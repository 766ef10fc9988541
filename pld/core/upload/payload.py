"""
Streamed file payload for aiohttp requests.

The file is read in fixed-size chunks with aiofiles and written straight to
the connection, so memory use does not grow with file size. A callback is
told how many bytes were written after every chunk.
"""
from pathlib import Path
from typing import Any, Callable, Optional

import aiofiles
from aiohttp.abc import AbstractStreamWriter
from aiohttp.payload import Payload

from ..constants import DEFAULT_CHUNK_SIZE
from ..logging import get_logger

logger = get_logger(__name__)

ReadCallback = Callable[[int], None]


class FileStreamPayload(Payload):
    """
    aiohttp payload that streams a file from disk.

    The size is known up front, so requests carrying it (directly or as a
    multipart part) get a Content-Length instead of chunked encoding.

    Example:
        >>> payload = FileStreamPayload(path, size, on_read=lambda n: print(n))
        >>> form = aiohttp.FormData()
        >>> form.add_field('file', payload, filename=path.name)
    """

    def __init__(
        self,
        path: Path,
        size: int,
        on_read: Optional[ReadCallback] = None,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        content_type: str = 'application/octet-stream',
        **kwargs: Any
    ):
        """
        Initialize payload.

        Args:
            path: File to stream
            size: File size in bytes
            on_read: Called with the byte count of each chunk written
            chunk_size: Read size in bytes
            content_type: Content-Type of the part
        """
        super().__init__(path, content_type=content_type, **kwargs)
        self._path = Path(path)
        self._size = size
        self._on_read = on_read
        self._chunk_size = chunk_size

    @property
    def path(self) -> Path:
        return self._path

    async def write(self, writer: AbstractStreamWriter) -> None:
        """Write the file to the connection chunk by chunk."""
        sent = 0
        async with aiofiles.open(self._path, 'rb') as f:
            while True:
                chunk = await f.read(self._chunk_size)
                if not chunk:
                    break
                await writer.write(chunk)
                sent += len(chunk)
                if self._on_read is not None:
                    self._on_read(len(chunk))
        logger.debug(f"Streamed {sent} bytes from {self._path.name}")

    def decode(self, encoding: str = 'utf-8', errors: str = 'strict') -> str:
        raise TypeError("A streamed file payload cannot be decoded to text")
