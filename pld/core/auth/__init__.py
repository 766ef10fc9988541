"""OAuth2 support for Google Drive."""
from .google_oauth import GoogleOAuthFlow, build_credentials, fetch_access_token

__all__ = [
    'GoogleOAuthFlow',
    'build_credentials',
    'fetch_access_token',
]
