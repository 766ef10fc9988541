"""
Data models for upload module.

Uses dataclasses for immutable, type-safe data structures.
"""
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Dict, Any, Optional

from ..constants import Service
from ..storage.models import HistoryEntry
from ..utils import format_file_size, format_speed, format_eta, utc_now


@dataclass(frozen=True)
class UploadSource:
    """
    A validated local file.

    Attributes:
        path: Absolute path to the file
        name: File name sent to the service
        size: File size in bytes
    """
    path: Path
    name: str
    size: int

    @property
    def display_size(self) -> str:
        return format_file_size(self.size)


@dataclass(frozen=True)
class UploadResult:
    """
    Result of a successful upload, normalized across services.

    Attributes:
        service: Destination service
        file_id: Service file identifier
        download_link: Shareable link
        file_name: Uploaded file name
        file_size: Size in bytes
        response: Raw service response
    """
    service: Service
    file_id: str
    download_link: str
    file_name: str
    file_size: int
    response: Dict[str, Any] = field(default_factory=dict)

    def to_history_entry(self, timestamp: Optional[datetime] = None) -> HistoryEntry:
        return HistoryEntry(
            service=self.service.value,
            timestamp=timestamp or utc_now(),
            filename=self.file_name,
            file_size=format_file_size(self.file_size),
            file_id=self.file_id,
            download_link=self.download_link,
        )


@dataclass(frozen=True)
class UploadProgress:
    """
    One progress sample.

    Attributes:
        loaded: Bytes sent so far
        total: Total bytes to send
        speed: Bytes per second over the last sampling interval
        eta: Seconds remaining at that speed, None while unknown
    """
    loaded: int
    total: int
    speed: float = 0.0
    eta: Optional[float] = None

    @property
    def percentage(self) -> int:
        """Returns upload progress as a rounded percentage."""
        if self.total <= 0:
            return 100 if self.loaded else 0
        return int(self.loaded * 100 / self.total + 0.5)

    @property
    def is_complete(self) -> bool:
        return self.loaded >= self.total

    @property
    def speed_display(self) -> str:
        return format_speed(self.speed)

    @property
    def eta_display(self) -> str:
        return format_eta(self.eta)
