"""Authentication module for opencontext.

Provides Bearer token validation for the SSE transport using FastMCP's auth
system. The stdio transport is local and never authenticates.
"""

import hmac
import logging

from fastmcp.server.auth import AccessToken, TokenVerifier

from opencontext.config import Config

logger = logging.getLogger(__name__)


class BearerTokenVerifier(TokenVerifier):
    """
    FastMCP TokenVerifier that validates bearer tokens against OPENCONTEXT_AUTH_TOKEN.
    """

    def __init__(self, config: Config):
        """Initialize verifier with config.

        Args:
            config: Config instance with auth_token
        """
        super().__init__()
        self._config = config

    async def verify_token(self, token: str) -> AccessToken | None:
        """
        Verify a bearer token and return access info if valid.

        Args:
            token: The bearer token (without "Bearer " prefix)

        Returns:
            AccessToken if valid, None if invalid
        """
        # If no auth token is configured, allow all requests
        if self._config.auth_token is None:
            return AccessToken(
                token=token or "anonymous",
                client_id="anonymous",
                scopes=["read"],
            )

        if not token:
            logger.warning("Empty authentication token")
            return None

        # Constant-time comparison
        if not hmac.compare_digest(token.encode(), self._config.auth_token.encode()):
            logger.warning("Invalid authentication token")
            return None

        return AccessToken(token=token, client_id="authenticated", scopes=["read"])


def get_auth_provider(config: Config) -> BearerTokenVerifier | None:
    """
    Get the auth provider if authentication is configured.

    Returns:
        BearerTokenVerifier if OPENCONTEXT_AUTH_TOKEN is set, None otherwise
    """
    if config.auth_token is not None:
        return BearerTokenVerifier(config)
    return None
