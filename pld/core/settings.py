"""
Settings module.

Runtime configuration for pld: where config/history live and how the
HTTP session behaves. Values come from defaults and environment variables.
"""
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Dict, Any
import logging
import os

from .constants import CONFIG_FILENAME, HISTORY_FILENAME, DEFAULT_CHUNK_SIZE
from .logging import level_from_env

CONFIG_DIR_ENV = 'PLD_CONFIG_DIR'


def default_config_dir() -> Path:
    """Returns ~/.pld"""
    return Path.home() / '.pld'


@dataclass
class TimeoutConfig:
    """
    Timeout configuration.

    There is no total timeout: a large upload may legitimately run for hours.
    """
    total: Optional[float] = None  # Total request timeout
    connect: float = 30.0  # Connection timeout
    sock_connect: float = 30.0  # Socket connect timeout
    sock_read: Optional[float] = None  # Socket read timeout

    def to_aiohttp_timeout(self):
        """Convert to aiohttp ClientTimeout."""
        import aiohttp
        return aiohttp.ClientTimeout(
            total=self.total,
            connect=self.connect,
            sock_read=self.sock_read,
            sock_connect=self.sock_connect
        )


@dataclass
class Settings:
    """
    Complete runtime configuration.

    Attributes:
        config_dir: Directory holding config.json and history.json
        chunk_size: Read size used when streaming file bodies
        timeout: HTTP timeouts
        user_agent: User-Agent header sent to every service
        log_level: Default level for pld loggers
    """
    config_dir: Path = field(default_factory=default_config_dir)
    chunk_size: int = DEFAULT_CHUNK_SIZE
    timeout: TimeoutConfig = field(default_factory=TimeoutConfig)
    user_agent: str = 'pld-cli/1.0.0'
    log_level: int = logging.WARNING

    def __post_init__(self):
        if isinstance(self.config_dir, str):
            self.config_dir = Path(self.config_dir)
        if self.chunk_size <= 0:
            raise ValueError(f"chunk_size must be positive, got {self.chunk_size}")

    @classmethod
    def from_env(cls) -> 'Settings':
        """Create settings from PLD_CONFIG_DIR / PLD_LOG_LEVEL."""
        config_dir = os.environ.get(CONFIG_DIR_ENV)
        return cls(
            config_dir=Path(config_dir).expanduser() if config_dir else default_config_dir(),
            log_level=level_from_env(),
        )

    @property
    def config_file(self) -> Path:
        return self.config_dir / CONFIG_FILENAME

    @property
    def history_file(self) -> Path:
        return self.config_dir / HISTORY_FILENAME

    def session_kwargs(self) -> Dict[str, Any]:
        """Get kwargs for aiohttp ClientSession."""
        return {
            'headers': {'User-Agent': self.user_agent},
            'timeout': self.timeout.to_aiohttp_timeout(),
            'trust_env': True,
        }
