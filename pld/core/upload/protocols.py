"""
Protocol definitions for upload module.

The coordinator depends on these, not on concrete service adapters.
"""
from typing import Callable, Protocol

import aiohttp

from ..constants import Service
from .models import UploadSource, UploadResult, UploadProgress
from .payload import ReadCallback

ProgressCallback = Callable[[UploadProgress], None]


class ServiceAdapter(Protocol):
    """
    Protocol for a single upload destination.

    An adapter owns the endpoint, auth header shape and response mapping
    of one service.
    """

    service: Service

    async def upload(
        self,
        session: aiohttp.ClientSession,
        source: UploadSource,
        on_read: ReadCallback
    ) -> UploadResult:
        """
        Upload a file.

        Args:
            session: HTTP session to use
            source: Validated file
            on_read: Called with the byte count of every chunk sent

        Returns:
            Normalized upload result
        """
        ...
