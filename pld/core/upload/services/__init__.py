"""Upload services."""
from .file_service import FileValidator

__all__ = ['FileValidator']
