"""
Service adapters.

Each adapter maps a local file to one service's upload protocol and
normalizes its response to (file id, download link).
"""
from typing import Optional

from ..constants import Service
from ..settings import Settings
from ..storage import ConfigStore
from .base import BaseAdapter
from .pixeldrain import PixeldrainAdapter
from .gofile import GofileAdapter
from .google_drive import GoogleDriveAdapter


def create_adapter(
    service: Service,
    config: ConfigStore,
    settings: Optional[Settings] = None
) -> BaseAdapter:
    """
    Build the adapter for a service from stored credentials.

    Raises:
        MissingCredentialsError: If Pixeldrain has no API key or Google
            Drive is not authorized
    """
    chunk_size = (settings or Settings()).chunk_size
    if service is Service.PIXELDRAIN:
        return PixeldrainAdapter(config.get_api_key(service), chunk_size=chunk_size)
    if service is Service.GOFILE:
        return GofileAdapter(config.get_api_key(service), chunk_size=chunk_size)
    return GoogleDriveAdapter(config.get_google_drive(), chunk_size=chunk_size)


__all__ = [
    'BaseAdapter',
    'PixeldrainAdapter',
    'GofileAdapter',
    'GoogleDriveAdapter',
    'create_adapter',
]
