"""Minecraft services login and profile retrieval"""

import logging

import httpx
from pydantic import ValidationError

from .constants import Endpoints
from .errors import AccountNotOwnedError, AzureAppNotPermittedError, Hop, HopFailedError
from .models import MinecraftAuthRequest, MinecraftAuthResponse, MinecraftProfile
from .transport import get_json, post_json, status_of

logger = logging.getLogger(__name__)


async def authenticate_with_minecraft(
    client: httpx.AsyncClient,
    endpoints: Endpoints,
    user_hash: str,
    xsts_token: str,
) -> MinecraftAuthResponse:
    """Log in to Minecraft services with the composite XBL3.0 identity token

    Args:
        client: HTTP client
        endpoints: Endpoint configuration
        user_hash: User hash from the Xbox Live display claims
        xsts_token: XSTS token

    Returns:
        MinecraftAuthResponse

    Raises:
        AccountNotOwnedError: The response carries an empty access token
        AzureAppNotPermittedError: The service answered 403
        HopFailedError: On network, status or decoding failure
    """
    body = MinecraftAuthRequest.from_xsts(user_hash, xsts_token).model_dump()

    try:
        response = await post_json(client, endpoints.minecraft_auth_url, body)
        result = MinecraftAuthResponse.model_validate_json(response.content)
    except httpx.HTTPStatusError as e:
        logger.error(f"Minecraft authentication failed: {e}")
        if e.response.status_code == 403:
            raise AzureAppNotPermittedError(e) from e
        raise HopFailedError(Hop.MINECRAFT_AUTH, e, status_code=status_of(e)) from e
    except httpx.HTTPError as e:
        logger.error(f"Minecraft authentication request failed: {e}")
        raise HopFailedError(Hop.MINECRAFT_AUTH, e) from e
    except ValidationError as e:
        logger.error(f"Failed to parse Minecraft authentication response: {e.error_count()} validation error(s)")
        raise HopFailedError(Hop.MINECRAFT_AUTH, e) from e

    # An empty token means the account does not own the game
    if not result.access_token:
        logger.warning("Minecraft returned an empty access token")
        raise AccountNotOwnedError()

    logger.info("Minecraft authentication succeeded")
    return result


async def fetch_minecraft_profile(
    client: httpx.AsyncClient,
    endpoints: Endpoints,
    access_token: str,
) -> MinecraftProfile:
    """Fetch the Minecraft profile for a Minecraft access token

    Raises:
        HopFailedError: On network, status or decoding failure
    """
    try:
        response = await get_json(client, endpoints.minecraft_profile_url, bearer_token=access_token)
        profile = MinecraftProfile.model_validate_json(response.content)
    except httpx.HTTPError as e:
        logger.error(f"Profile fetch failed: {e}")
        raise HopFailedError(Hop.PROFILE_FETCH, e, status_code=status_of(e)) from e
    except ValidationError as e:
        logger.error(f"Failed to parse profile response: {e.error_count()} validation error(s)")
        raise HopFailedError(Hop.PROFILE_FETCH, e) from e

    logger.info(f"Fetched Minecraft profile {profile.name}")
    return profile
