"""
File validation service.
"""
from pathlib import Path
from typing import Union

from ...logging import get_logger
from ..models import UploadSource

logger = get_logger(__name__)


class FileValidator:
    """
    Validates files before upload.

    Responsibilities:
    - Check file existence
    - Verify file is not a directory
    - Get file size
    """

    def validate(self, file_path: Union[str, Path]) -> UploadSource:
        """
        Validate a file for upload.

        Args:
            file_path: Path to the file

        Returns:
            UploadSource with absolute path, name and size

        Raises:
            FileNotFoundError: If file doesn't exist
            ValueError: If path is not a regular file
        """
        path = Path(file_path).expanduser()

        if not path.exists():
            raise FileNotFoundError(f"File not found: {file_path}")

        if not path.is_file():
            raise ValueError(f"Path is not a file: {file_path}")

        path = path.resolve()
        size = path.stat().st_size
        logger.debug(f"File validated: {path} ({size} bytes)")

        return UploadSource(path=path, name=path.name, size=size)
