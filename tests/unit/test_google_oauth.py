"""Tests for the Google OAuth2 helper."""
import pytest
from unittest.mock import Mock, patch

from google.auth.exceptions import RefreshError, TransportError
from google_auth_oauthlib.flow import WSGITimeoutError
from oauthlib.oauth2.rfc6749.errors import AccessDeniedError

from pld.core.auth import GoogleOAuthFlow, build_credentials, fetch_access_token
from pld.core.exceptions import AuthorizationError, InvalidCredentialsError, NetworkError
from pld.core.storage import GoogleDriveCredentials


@pytest.fixture
def flow_factory():
    """Factory returning a flow whose consent step yields a refresh token."""
    flow = Mock()
    flow.run_local_server.return_value = Mock(refresh_token='refresh-token', token='access')
    return Mock(return_value=flow)


class TestGoogleOAuthFlow:
    """Test suite for GoogleOAuthFlow."""

    def test_client_config(self):
        oauth = GoogleOAuthFlow('id', 'secret')
        installed = oauth.client_config['installed']

        assert installed['client_id'] == 'id'
        assert installed['client_secret'] == 'secret'
        assert installed['redirect_uris'] == ['http://localhost:3000/']
        assert installed['token_uri'] == 'https://oauth2.googleapis.com/token'

    def test_authorize(self, flow_factory):
        oauth = GoogleOAuthFlow('id', 'secret', open_browser=False, flow_factory=flow_factory)

        credentials = oauth.authorize()

        assert credentials == GoogleDriveCredentials('id', 'secret', 'refresh-token')
        flow_factory.assert_called_once_with(
            oauth.client_config,
            scopes=['https://www.googleapis.com/auth/drive.file']
        )
        kwargs = flow_factory.return_value.run_local_server.call_args.kwargs
        assert kwargs['port'] == 3000
        assert kwargs['open_browser'] is False
        assert kwargs['timeout_seconds'] == 120
        assert kwargs['access_type'] == 'offline'
        assert kwargs['prompt'] == 'consent'

    def test_missing_refresh_token(self, flow_factory):
        flow_factory.return_value.run_local_server.return_value = Mock(refresh_token=None)
        oauth = GoogleOAuthFlow('id', 'secret', flow_factory=flow_factory)

        with pytest.raises(AuthorizationError, match="No refresh token received"):
            oauth.authorize()

    def test_port_in_use(self, flow_factory):
        flow_factory.return_value.run_local_server.side_effect = OSError("Address already in use")
        oauth = GoogleOAuthFlow('id', 'secret', flow_factory=flow_factory)

        with pytest.raises(AuthorizationError, match="port 3000"):
            oauth.authorize()

    def test_consent_denied(self, flow_factory):
        flow_factory.return_value.run_local_server.side_effect = AccessDeniedError()
        oauth = GoogleOAuthFlow('id', 'secret', flow_factory=flow_factory)

        with pytest.raises(AuthorizationError, match="Authorization failed"):
            oauth.authorize()

    def test_timeout(self, flow_factory):
        flow_factory.return_value.run_local_server.side_effect = WSGITimeoutError("Timed out waiting for response from authorization server")
        oauth = GoogleOAuthFlow('id', 'secret', flow_factory=flow_factory)

        with pytest.raises(AuthorizationError, match="Authorization timeout"):
            oauth.authorize()

    def test_unrelated_attribute_error_propagates(self, flow_factory):
        flow_factory.return_value.run_local_server.side_effect = AttributeError("boom")
        oauth = GoogleOAuthFlow('id', 'secret', flow_factory=flow_factory)

        with pytest.raises(AttributeError, match="boom"):
            oauth.authorize()


class TestAccessToken:
    """Test suite for build_credentials / fetch_access_token."""

    @pytest.fixture
    def config(self):
        return GoogleDriveCredentials('id', 'secret', 'refresh-token')

    def test_build_credentials(self, config):
        credentials = build_credentials(config)

        assert credentials.refresh_token == 'refresh-token'
        assert credentials.client_id == 'id'
        assert credentials.client_secret == 'secret'
        assert credentials.token is None

    @pytest.mark.asyncio
    async def test_fetch_access_token(self, config):
        credentials = Mock(token='access-token')
        request = Mock()

        with patch('pld.core.auth.google_oauth.build_credentials', return_value=credentials):
            token = await fetch_access_token(config, request_factory=lambda: request)

        assert token == 'access-token'
        credentials.refresh.assert_called_once_with(request)

    @pytest.mark.asyncio
    async def test_rejected_refresh_token(self, config):
        credentials = Mock()
        credentials.refresh.side_effect = RefreshError("invalid_grant")

        with patch('pld.core.auth.google_oauth.build_credentials', return_value=credentials):
            with pytest.raises(InvalidCredentialsError):
                await fetch_access_token(config, request_factory=Mock)

    @pytest.mark.asyncio
    async def test_transport_error(self, config):
        credentials = Mock()
        credentials.refresh.side_effect = TransportError("unreachable")

        with patch('pld.core.auth.google_oauth.build_credentials', return_value=credentials):
            with pytest.raises(NetworkError):
                await fetch_access_token(config, request_factory=Mock)

    @pytest.mark.asyncio
    async def test_not_authorized(self):
        with pytest.raises(InvalidCredentialsError):
            await fetch_access_token(GoogleDriveCredentials('id', 'secret'))
