"""
Core module.

Storage, upload pipeline, service adapters and OAuth support.
"""
from .constants import Service
from .exceptions import (
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
from .settings import Settings, TimeoutConfig
from .logging import get_logger

__all__ = [
    'Service',
    'Settings',
    'TimeoutConfig',
    'get_logger',
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
]
