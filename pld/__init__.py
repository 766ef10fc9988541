"""
pld - upload files to Pixeldrain, Gofile or Google Drive from the terminal.

Usage:
    >>> from pld import PldClient, Service
    >>>
    >>> client = PldClient()
    >>> result = await client.upload("video.mp4", Service.PIXELDRAIN)
    >>> print(result.download_link)
"""
import logging
from .client import PldClient

from .core.constants import Service
from .core.settings import Settings, TimeoutConfig
from .core.exceptions import (
    PldException,
    ConfigError,
    MissingCredentialsError,
    UnknownServiceError,
    AuthorizationError,
    UploadError,
    InvalidCredentialsError,
    ServiceError,
    NetworkError,
    UploadCancelledError,
)
from .core.upload import UploadResult, UploadProgress, CancellationToken
from .core.logging import PACKAGE_LOGGER

__version__ = '1.0.0'


def setup_logging(level=logging.INFO, handler=None):
    """
    Configure logging for pld modules.

    Applies the level to the package logger and every pld.* logger created
    so far. Loggers created later pick it up through get_logger().

    Args:
        level: Logging level (default: logging.INFO)
        handler: Optional handler that replaces any handler previously
            installed here on the package logger
    """
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(level)

    for name, logger in list(logging.root.manager.loggerDict.items()):
        if name.startswith(PACKAGE_LOGGER + '.') and isinstance(logger, logging.Logger):
            logger.setLevel(level)
            logger.propagate = True

    if handler is not None:
        for existing in list(package_logger.handlers):
            if existing.get_name() == PACKAGE_LOGGER:
                package_logger.removeHandler(existing)
        handler.set_name(PACKAGE_LOGGER)
        package_logger.addHandler(handler)


__all__ = [
    'PldClient',
    'Service',
    'Settings',
    'TimeoutConfig',
    'UploadResult',
    'UploadProgress',
    'CancellationToken',
    'PldException',
    'ConfigError',
    'MissingCredentialsError',
    'UnknownServiceError',
    'AuthorizationError',
    'UploadError',
    'InvalidCredentialsError',
    'ServiceError',
    'NetworkError',
    'UploadCancelledError',
    'setup_logging',
    '__version__',
]
