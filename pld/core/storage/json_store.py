"""
JSON file storage.

Both config.json and history.json are small documents that are read whole
and rewritten whole on every change. The tool is single-user and
single-process, so there is no locking.
"""
from pathlib import Path
from typing import Any, Callable, Union
import json

from ..logging import get_logger

logger = get_logger(__name__)


class JsonFileStore:
    """
    Reads and writes one JSON document.

    A missing file reads as the default value. A file that cannot be read or
    parsed is logged and also reads as the default value.
    """

    def __init__(self, path: Union[str, Path], default_factory: Callable[[], Any] = dict):
        """
        Initialize the store.

        Args:
            path: Location of the JSON document
            default_factory: Builds the value returned when there is no document
        """
        self._path = Path(path)
        self._default_factory = default_factory

    @property
    def path(self) -> Path:
        return self._path

    def exists(self) -> bool:
        return self._path.is_file()

    def read(self) -> Any:
        """Load the document, or the default value."""
        if not self._path.exists():
            return self._default_factory()
        try:
            with open(self._path, 'r', encoding='utf-8') as f:
                return json.load(f)
        except (OSError, ValueError) as e:
            logger.warning(f"Could not load {self._path.name}: {e}")
            return self._default_factory()

    def write(self, data: Any) -> None:
        """Replace the document with data."""
        self._path.parent.mkdir(parents=True, exist_ok=True)
        with open(self._path, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
        logger.debug(f"Wrote {self._path}")

    def delete(self) -> bool:
        """Remove the document. Returns True if a file was removed."""
        if not self._path.exists():
            return False
        self._path.unlink()
        logger.debug(f"Deleted {self._path}")
        return True
