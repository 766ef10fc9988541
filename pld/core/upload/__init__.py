"""
Upload module.

Streams one file to one service with live progress and cancellation.
"""
from .cancellation import CancellationToken, cancel_on_interrupt
from .coordinator import UploadCoordinator
from .models import UploadSource, UploadResult, UploadProgress
from .payload import FileStreamPayload
from .progress import ProgressTracker
from .protocols import ServiceAdapter, ProgressCallback, ReadCallback

__all__ = [
    # Main classes
    'UploadCoordinator',
    'ProgressTracker',
    'FileStreamPayload',
    'CancellationToken',
    'cancel_on_interrupt',

    # Models
    'UploadSource',
    'UploadResult',
    'UploadProgress',

    # Protocols
    'ServiceAdapter',
    'ProgressCallback',
    'ReadCallback',
]
