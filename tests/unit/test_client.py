"""Tests for PldClient, Service flags, settings and logging setup."""
import logging
import pytest
from pathlib import Path
from unittest.mock import patch

import aiohttp

from pld import PldClient, setup_logging, __version__
from pld.core.adapters import GofileAdapter
from pld.core.constants import Service
from pld.core.exceptions import AuthorizationError, ConfigError, UnknownServiceError
from pld.core.logging import get_logger, level_from_env
from pld.core.settings import Settings, TimeoutConfig
from pld.core.storage import GoogleDriveCredentials


class TestService:
    """Test suite for Service flag resolution."""

    @pytest.mark.parametrize("flag,expected", [
        ('gf', Service.GOFILE),
        ('pd', Service.PIXELDRAIN),
        ('gd', Service.GOOGLE_DRIVE),
        ('PD', Service.PIXELDRAIN),
        ('gofile', Service.GOFILE),
        ('googledrive', Service.GOOGLE_DRIVE),
    ])
    def test_from_flag(self, flag, expected):
        assert Service.from_flag(flag) is expected

    @pytest.mark.parametrize("flag", [None, '', '  '])
    def test_default_is_gofile(self, flag):
        assert Service.from_flag(flag) is Service.GOFILE

    def test_unknown_flag(self):
        with pytest.raises(UnknownServiceError, match="xx"):
            Service.from_flag('xx')

    def test_labels(self):
        assert Service.GOOGLE_DRIVE.label == 'Google Drive'
        assert Service.PIXELDRAIN.flag == 'pd'


class TestSettings:
    """Test suite for Settings."""

    def test_defaults(self):
        settings = Settings()

        assert settings.config_dir == Path.home() / '.pld'
        assert settings.chunk_size == 256 * 1024
        assert settings.config_file.name == 'config.json'
        assert settings.history_file.name == 'history.json'

    def test_from_env(self, monkeypatch, tmp_path):
        monkeypatch.setenv('PLD_CONFIG_DIR', str(tmp_path))
        monkeypatch.setenv('PLD_LOG_LEVEL', 'debug')

        settings = Settings.from_env()

        assert settings.config_dir == tmp_path
        assert settings.log_level == logging.DEBUG

    def test_string_dir(self, tmp_path):
        assert Settings(config_dir=str(tmp_path)).config_dir == tmp_path

    def test_invalid_chunk_size(self):
        with pytest.raises(ValueError):
            Settings(chunk_size=0)

    def test_no_total_timeout(self):
        timeout = TimeoutConfig().to_aiohttp_timeout()

        assert isinstance(timeout, aiohttp.ClientTimeout)
        assert timeout.total is None
        assert timeout.connect == 30.0

    def test_session_kwargs(self):
        kwargs = Settings().session_kwargs()

        assert kwargs['trust_env'] is True
        assert kwargs['headers']['User-Agent'] == f"pld-cli/{__version__}"


class TestLogging:
    """Test suite for logging helpers."""

    def test_level_from_env(self, monkeypatch):
        monkeypatch.setenv('PLD_LOG_LEVEL', 'INFO')
        assert level_from_env() == logging.INFO

    def test_level_from_env_invalid(self, monkeypatch):
        monkeypatch.setenv('PLD_LOG_LEVEL', 'chatty')
        assert level_from_env() == logging.WARNING

    def test_get_logger_propagates(self):
        assert get_logger('pld.test').propagate is True

    def test_setup_logging(self):
        setup_logging(logging.DEBUG)
        try:
            assert logging.getLogger('pld.core.upload').level == logging.DEBUG
        finally:
            setup_logging(logging.NOTSET)

    def test_setup_logging_reaches_module_loggers(self):
        leaf = get_logger('pld.core.storage.json_store')
        setup_logging(logging.ERROR)
        try:
            assert leaf.level == logging.ERROR
            assert not leaf.isEnabledFor(logging.WARNING)
            assert get_logger('pld.created.later').level == logging.ERROR
        finally:
            setup_logging(logging.NOTSET)

    def test_setup_logging_replaces_handler(self):
        first, second = logging.NullHandler(), logging.NullHandler()
        package = logging.getLogger('pld')
        try:
            setup_logging(logging.INFO, handler=first)
            setup_logging(logging.INFO, handler=second)

            assert second in package.handlers
            assert first not in package.handlers
        finally:
            package.removeHandler(second)
            setup_logging(logging.NOTSET)


class TestPldClient:
    """Test suite for PldClient."""

    def test_stores_live_in_config_dir(self, client, config_dir):
        assert client.config.path == config_dir / 'config.json'
        assert client.history.path == config_dir / 'history.json'

    def test_adapter_for(self, client):
        assert isinstance(client.adapter_for(Service.GOFILE), GofileAdapter)

    def test_coordinator_uses_history(self, client):
        coordinator = client.coordinator(Service.GOFILE)
        assert coordinator._history is client.history

    def test_authorize_google_drive_saves(self, client):
        with patch('pld.client.GoogleOAuthFlow') as flow_cls:
            flow_cls.return_value.authorize.return_value = GoogleDriveCredentials('id', 'secret', 'rt')

            saved = client.authorize_google_drive(' id ', 'secret', open_browser=False)

        flow_cls.assert_called_once_with('id', 'secret', open_browser=False)
        assert saved.updated_at is not None
        assert client.config.get_google_drive().refresh_token == 'rt'

    def test_authorize_google_drive_empty_client(self, client):
        with pytest.raises(ConfigError):
            client.authorize_google_drive('', 'secret')

    def test_authorize_google_drive_failure_keeps_config(self, client):
        with patch('pld.client.GoogleOAuthFlow') as flow_cls:
            flow_cls.return_value.authorize.side_effect = AuthorizationError("Authorization timeout")

            with pytest.raises(AuthorizationError):
                client.authorize_google_drive('id', 'secret')

        assert client.config.get_google_drive() is None
