"""Clipboard access."""
import pyperclip

from .logging import get_logger

logger = get_logger(__name__)


def copy_to_clipboard(text: str) -> bool:
    """
    Copy text to the system clipboard.

    Returns:
        False if no clipboard mechanism is available (e.g. a headless
        server without xclip/xsel)
    """
    try:
        pyperclip.copy(text)
    except pyperclip.PyperclipException as e:
        logger.warning(f"Could not copy to clipboard: {e}")
        return False
    return True
