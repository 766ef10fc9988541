"""Tests for the upload coordinator, payload streaming and cancellation."""
import asyncio
import os
import signal
import sys
import pytest
import aiohttp
from unittest.mock import Mock, AsyncMock

from pld.core.constants import Service
from pld.core.exceptions import NetworkError, UploadCancelledError, ServiceError
from pld.core.storage import HistoryStore
from pld.core.upload import (
    UploadCoordinator,
    UploadResult,
    CancellationToken,
    FileStreamPayload,
    cancel_on_interrupt,
)


class FakeAdapter:
    """Adapter that reports reads in fixed steps instead of talking HTTP."""

    service = Service.GOFILE

    def __init__(self, steps=(4, 4, 4), error=None, hang=False):
        self.steps = steps
        self.error = error
        self.hang = hang
        self.session = None

    async def upload(self, session, source, on_read):
        self.session = session
        for step in self.steps:
            on_read(step)
            await asyncio.sleep(0)
        if self.hang:
            await asyncio.sleep(30)
        if self.error is not None:
            raise self.error
        return UploadResult(
            service=self.service,
            file_id='f1',
            download_link='https://gofile.io/d/f1',
            file_name=source.name,
            file_size=source.size,
        )


class TestFileStreamPayload:
    """Test suite for FileStreamPayload."""

    @pytest.mark.asyncio
    async def test_writes_in_chunks(self, sample_file):
        reads = []
        writer = Mock()
        writer.write = AsyncMock()
        payload = FileStreamPayload(sample_file, 12, on_read=reads.append, chunk_size=5)

        await payload.write(writer)

        written = b''.join(call.args[0] for call in writer.write.await_args_list)
        assert written == b'hello world!'
        assert reads == [5, 5, 2]
        assert payload.size == 12
        assert payload.content_type == 'application/octet-stream'

    def test_cannot_decode(self, sample_file):
        with pytest.raises(TypeError):
            FileStreamPayload(sample_file, 12).decode()


class TestCancellationToken:
    """Test suite for CancellationToken."""

    def test_cancel_runs_callbacks_once(self):
        token = CancellationToken()
        callback = Mock()
        token.register(callback)

        token.cancel()
        token.cancel()

        assert token.cancelled
        callback.assert_called_once_with()

    def test_register_after_cancel_runs_immediately(self):
        token = CancellationToken()
        token.cancel()
        callback = Mock()

        token.register(callback)

        callback.assert_called_once_with()

    def test_unregister(self):
        token = CancellationToken()
        callback = Mock()
        token.register(callback)
        token.unregister(callback)

        token.cancel()

        callback.assert_not_called()

    def test_raise_if_cancelled(self):
        token = CancellationToken()
        token.raise_if_cancelled()

        token.cancel()
        with pytest.raises(UploadCancelledError, match="Upload cancelled by user"):
            token.raise_if_cancelled()

    @pytest.mark.skipif(sys.platform == 'win32', reason="POSIX signals")
    @pytest.mark.asyncio
    async def test_sigint_fires_token(self):
        token = CancellationToken()

        with cancel_on_interrupt(token):
            os.kill(os.getpid(), signal.SIGINT)
            for _ in range(50):
                if token.cancelled:
                    break
                await asyncio.sleep(0.01)

        assert token.cancelled


class TestUploadCoordinator:
    """Test suite for UploadCoordinator."""

    @pytest.fixture
    def history(self, settings):
        return HistoryStore(settings.history_file)

    @pytest.mark.asyncio
    async def test_upload_reports_progress_and_records_history(self, sample_file, settings, history):
        snapshots = []
        adapter = FakeAdapter()
        coordinator = UploadCoordinator(
            adapter,
            settings=settings,
            history=history,
            progress_callback=snapshots.append
        )

        result = await coordinator.upload(sample_file)

        assert result.download_link == 'https://gofile.io/d/f1'
        assert [s.loaded for s in snapshots] == [4, 8, 12]
        assert snapshots[-1].percentage == 100
        assert all(s.total == 12 for s in snapshots)
        assert isinstance(adapter.session, aiohttp.ClientSession)

        entries = history.load()
        assert len(entries) == 1
        assert entries[0].filename == 'sample.txt'
        assert entries[0].file_size == '12 Bytes'
        assert entries[0].service == 'gofile'

    @pytest.mark.asyncio
    async def test_progress_callback_can_be_set_later(self, sample_file, settings):
        snapshots = []
        coordinator = UploadCoordinator(FakeAdapter(), settings=settings)
        coordinator.progress_callback = snapshots.append

        await coordinator.upload(sample_file)

        assert len(snapshots) == 3

    @pytest.mark.asyncio
    async def test_missing_file(self, tmp_path, settings):
        coordinator = UploadCoordinator(FakeAdapter(), settings=settings)

        with pytest.raises(FileNotFoundError):
            await coordinator.upload(tmp_path / "nope.bin")

    @pytest.mark.asyncio
    async def test_directory_rejected(self, tmp_path, settings):
        coordinator = UploadCoordinator(FakeAdapter(), settings=settings)

        with pytest.raises(ValueError):
            await coordinator.upload(tmp_path)

    @pytest.mark.asyncio
    async def test_cancellation_aborts_upload(self, sample_file, settings, history):
        token = CancellationToken()
        coordinator = UploadCoordinator(
            FakeAdapter(hang=True),
            settings=settings,
            history=history,
            cancellation=token
        )
        asyncio.get_running_loop().call_later(0.05, token.cancel)

        with pytest.raises(UploadCancelledError):
            await coordinator.upload(sample_file)

        assert history.load() == []

    @pytest.mark.asyncio
    async def test_already_cancelled(self, sample_file, settings):
        token = CancellationToken()
        token.cancel()
        adapter = FakeAdapter()
        coordinator = UploadCoordinator(adapter, settings=settings, cancellation=token)

        with pytest.raises(UploadCancelledError):
            await coordinator.upload(sample_file)

        assert adapter.session is None

    @pytest.mark.asyncio
    async def test_connection_error_becomes_network_error(self, sample_file, settings):
        adapter = FakeAdapter(error=aiohttp.ClientConnectionError("connection refused"))
        coordinator = UploadCoordinator(adapter, settings=settings)

        with pytest.raises(NetworkError) as exc_info:
            await coordinator.upload(sample_file)

        assert exc_info.value.service == 'gofile'

    @pytest.mark.asyncio
    async def test_service_error_propagates(self, sample_file, settings, history):
        adapter = FakeAdapter(error=ServiceError("rejected", service='gofile', status=500))
        coordinator = UploadCoordinator(adapter, settings=settings, history=history)

        with pytest.raises(ServiceError):
            await coordinator.upload(sample_file)

        assert history.load() == []
