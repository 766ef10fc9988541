"""Formatting helpers shared by the CLI and the stores."""
import math
from datetime import datetime, timezone
from typing import Optional, Union

_SIZE_UNITS = ('Bytes', 'KB', 'MB', 'GB', 'TB')


def format_file_size(size: int) -> str:
    """
    Format a byte count with 1024-based units.

    Example:
        >>> format_file_size(1536)
        '1.5 KB'
    """
    if size <= 0:
        return '0 Bytes'
    value = float(size)
    index = 0
    while value >= 1024 and index < len(_SIZE_UNITS) - 1:
        value /= 1024
        index += 1
    return f"{round(value, 2):g} {_SIZE_UNITS[index]}"


def format_speed(bytes_per_second: float) -> str:
    """Speed in MB/s with two decimals."""
    return f"{bytes_per_second / (1024 * 1024):.2f} MB/s"


def format_eta(seconds: Optional[float]) -> str:
    """ETA as 'Xm Ys' or 'Ys'; '--' when unknown."""
    if seconds is None or math.isinf(seconds):
        return '--'
    total = int(round(max(seconds, 0)))
    minutes, secs = divmod(total, 60)
    if minutes > 0:
        return f"{minutes}m {secs}s"
    return f"{secs}s"


def format_timestamp(value: Union[str, datetime, None]) -> str:
    """Render an ISO timestamp (or datetime) in local time as dd/mm/YYYY HH:MM."""
    if value is None:
        return ''
    if isinstance(value, str):
        parsed = parse_isoformat(value)
        if parsed is None:
            return value
        value = parsed
    if value.tzinfo is not None:
        value = value.astimezone()
    return value.strftime('%d/%m/%Y %H:%M')


def mask_secret(secret: str, head: int = 4, tail: int = 4) -> str:
    """
    Mask a credential for display.

    Example:
        >>> mask_secret('abcdefghijkl')
        'abcd...ijkl'
    """
    if not secret:
        return ''
    if len(secret) <= head + tail:
        return '*' * len(secret)
    if tail == 0:
        return f"{secret[:head]}..."
    return f"{secret[:head]}...{secret[-tail:]}"


def utc_now() -> datetime:
    """Timezone-aware current time, used for updatedAt/timestamp fields."""
    return datetime.now(timezone.utc)


def isoformat(value: datetime) -> str:
    """ISO-8601 with millisecond precision and a Z suffix for UTC."""
    text = value.isoformat(timespec='milliseconds')
    return text.replace('+00:00', 'Z')


def parse_isoformat(value: Optional[str]) -> Optional[datetime]:
    """Parse an ISO-8601 string as written by isoformat(); None if unparseable."""
    if not value:
        return None
    try:
        return datetime.fromisoformat(value.replace('Z', '+00:00'))
    except ValueError:
        return None
