"""
Upload coordinator.

Orchestrates a single upload: validate the file, stream it through a
service adapter while tracking progress, honour cancellation, and record
the result in history.
"""
import asyncio
import time
from pathlib import Path
from typing import Optional, Union

import aiohttp

from ..exceptions import NetworkError, UploadCancelledError
from ..logging import get_logger
from ..settings import Settings
from ..storage import HistoryStore
from .cancellation import CancellationToken
from .models import UploadResult, UploadSource
from .progress import ProgressTracker
from .protocols import ServiceAdapter, ProgressCallback
from .services import FileValidator

logger = get_logger(__name__)


class UploadCoordinator:
    """
    Coordinates the file upload process.

    Uses dependency injection for the adapter, history and cancellation
    token, so each piece can be swapped in tests.

    Example:
        >>> coordinator = UploadCoordinator(GofileAdapter(), history=history)
        >>> result = await coordinator.upload("video.mp4")
        >>> print(result.download_link)
    """

    def __init__(
        self,
        adapter: ServiceAdapter,
        settings: Optional[Settings] = None,
        history: Optional[HistoryStore] = None,
        progress_callback: Optional[ProgressCallback] = None,
        cancellation: Optional[CancellationToken] = None
    ):
        """
        Initialize upload coordinator.

        Args:
            adapter: Destination service adapter
            settings: Runtime settings (HTTP session options)
            history: Store that receives an entry per successful upload
            progress_callback: Optional callback for progress updates
            cancellation: Token that aborts the in-flight request when fired
        """
        self._adapter = adapter
        self._settings = settings or Settings()
        self._history = history
        self._progress_callback = progress_callback
        self._cancellation = cancellation or CancellationToken()
        self._validator = FileValidator()

    @property
    def cancellation(self) -> CancellationToken:
        return self._cancellation

    @property
    def progress_callback(self) -> Optional[ProgressCallback]:
        return self._progress_callback

    @progress_callback.setter
    def progress_callback(self, callback: Optional[ProgressCallback]) -> None:
        self._progress_callback = callback

    async def upload(self, file_path: Union[str, Path]) -> UploadResult:
        """
        Execute the complete upload process.

        Args:
            file_path: Local file to upload

        Returns:
            Normalized upload result

        Raises:
            FileNotFoundError: If file doesn't exist
            ValueError: If path is not a regular file
            UploadCancelledError: If the cancellation token fired
            NetworkError: If the service could not be reached
            UploadError: For service-side failures raised by the adapter
        """
        source = self._validator.validate(file_path)
        self._cancellation.raise_if_cancelled()

        service = self._adapter.service
        logger.info(f"Starting upload: {source.name} ({source.display_size}) to {service.label}")

        start = time.monotonic()
        result = await self._run(source)
        elapsed = time.monotonic() - start
        logger.info(f"Upload finished in {elapsed:.1f}s: {result.download_link}")

        if self._history is not None:
            self._history.add(result.to_history_entry())
        return result

    async def _run(self, source: UploadSource) -> UploadResult:
        tracker = ProgressTracker(source.size)
        loaded = 0

        def on_read(count: int) -> None:
            nonlocal loaded
            loaded += count
            progress = tracker.update(loaded)
            if self._progress_callback is not None:
                self._progress_callback(progress)

        async with aiohttp.ClientSession(**self._settings.session_kwargs()) as session:
            task = asyncio.ensure_future(self._adapter.upload(session, source, on_read))
            self._cancellation.register(task.cancel)
            try:
                return await task
            except asyncio.CancelledError:
                if self._cancellation.cancelled:
                    logger.warning(f"Upload of {source.name} cancelled after {loaded} bytes")
                    raise UploadCancelledError(
                        "Upload cancelled by user",
                        service=self._adapter.service.value
                    ) from None
                raise
            except (aiohttp.ClientConnectionError, aiohttp.ClientPayloadError, asyncio.TimeoutError) as e:
                logger.error(f"Network error uploading {source.name}: {e!r}")
                raise NetworkError(
                    f"Could not reach {self._adapter.service.label}: {e}",
                    service=self._adapter.service.value
                ) from e
            finally:
                self._cancellation.unregister(task.cancel)
