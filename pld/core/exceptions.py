"""
Custom exceptions for pld.

Library code raises these; the CLI turns them into messages and exit codes.
"""
from typing import Optional


class PldException(Exception):
    """Base exception for all pld errors."""

    def __init__(
        self,
        message: str,
        service: Optional[str] = None,
        status: Optional[int] = None
    ) -> None:
        """
        Initialize the exception.

        Args:
            message: Error message
            service: Service name the error relates to (if any)
            status: HTTP status code (if available)
        """
        self.message = message
        self.service = service
        self.status = status
        super().__init__(message)


class ConfigError(PldException):
    """Exception raised for configuration problems."""
    pass


class MissingCredentialsError(ConfigError):
    """Exception raised when a service needs credentials that are not configured."""
    pass


class UnknownServiceError(PldException, ValueError):
    """Exception raised for an unrecognised service flag or name."""
    pass


class AuthorizationError(PldException):
    """Exception raised when the OAuth2 authorization flow fails."""
    pass


class UploadError(PldException):
    """Base exception for failed uploads."""
    pass


class InvalidCredentialsError(UploadError):
    """Exception raised when a service rejects the configured credentials (401/403)."""
    pass


class ServiceError(UploadError):
    """Exception raised when a service answers with an error or an unexpected body."""
    pass


class NetworkError(UploadError):
    """Exception raised when a service cannot be reached."""
    pass


class UploadCancelledError(UploadError):
    """Exception raised when the user interrupts an upload."""
    pass
