"""Microsoft OAuth token exchange (authorization code and refresh token grants)"""

import logging

import httpx
from pydantic import ValidationError

from .constants import Endpoints
from .errors import Hop, HopFailedError, InvalidRefreshTokenError
from .models import MicrosoftTokenResponse
from .transport import post_form, status_of

logger = logging.getLogger(__name__)


async def exchange_authorization_code(
    client: httpx.AsyncClient,
    endpoints: Endpoints,
    code: str,
    code_verifier: str,
    client_id: str,
    redirect_uri: str,
    scope: str,
) -> MicrosoftTokenResponse:
    """Exchange an authorization code for Microsoft tokens

    Args:
        client: HTTP client
        endpoints: Endpoint configuration
        code: Authorization code from the callback
        code_verifier: PKCE verifier issued with the authorization URL
        client_id: Azure application client ID
        redirect_uri: Redirect URI used in the authorization request
        scope: OAuth scope

    Returns:
        MicrosoftTokenResponse

    Raises:
        HopFailedError: On network, status or decoding failure
    """
    data = {
        "client_id": client_id,
        "scope": scope,
        "code": code,
        "redirect_uri": redirect_uri,
        "grant_type": "authorization_code",
        "code_verifier": code_verifier,
    }

    logger.info(f"Exchanging authorization code for tokens at {endpoints.token_url}")

    try:
        response = await post_form(client, endpoints.token_url, data)
        tokens = MicrosoftTokenResponse.model_validate_json(response.content)
    except httpx.HTTPError as e:
        logger.error(f"Token exchange failed: {e}")
        raise HopFailedError(Hop.CODE_EXCHANGE, e, status_code=status_of(e)) from e
    except ValidationError as e:
        logger.error(f"Failed to parse token exchange response: {e.error_count()} validation error(s)")
        raise HopFailedError(Hop.CODE_EXCHANGE, e) from e

    logger.info("Successfully exchanged authorization code for tokens")
    return tokens


async def refresh_microsoft_token(
    client: httpx.AsyncClient,
    endpoints: Endpoints,
    refresh_token: str,
    client_id: str,
    scope: str,
) -> MicrosoftTokenResponse:
    """Exchange a refresh token for fresh Microsoft tokens

    Every failure mode is reported as InvalidRefreshTokenError; the caller
    can only respond to any of them by signing in again.

    Raises:
        InvalidRefreshTokenError: On any failure
    """
    if not refresh_token:
        raise InvalidRefreshTokenError("No refresh token provided")

    data = {
        "client_id": client_id,
        "scope": scope,
        "refresh_token": refresh_token,
        "grant_type": "refresh_token",
    }

    logger.info("Attempting to refresh Microsoft tokens...")

    try:
        response = await post_form(client, endpoints.refresh_url, data)
        tokens = MicrosoftTokenResponse.model_validate_json(response.content)
    except httpx.HTTPError as e:
        logger.error(f"Token refresh failed: {type(e).__name__} (status {status_of(e)})")
        raise InvalidRefreshTokenError() from e
    except ValidationError as e:
        logger.error(f"Failed to parse token refresh response: {e.error_count()} validation error(s)")
        raise InvalidRefreshTokenError() from e

    if tokens.refresh_token is None:
        logger.debug("Refresh response carried no new refresh token")

    logger.info("Successfully refreshed Microsoft tokens")
    return tokens
