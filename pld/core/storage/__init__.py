"""
Storage module.

Config and history persistence as whole-file JSON documents.
"""
from .json_store import JsonFileStore
from .models import AppConfig, ApiKeyCredentials, GoogleDriveCredentials, HistoryEntry
from .config_store import ConfigStore
from .history_store import HistoryStore

__all__ = [
    'JsonFileStore',
    'AppConfig',
    'ApiKeyCredentials',
    'GoogleDriveCredentials',
    'HistoryEntry',
    'ConfigStore',
    'HistoryStore',
]
