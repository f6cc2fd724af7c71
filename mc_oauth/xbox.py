"""Xbox Live user authentication and XSTS authorization"""

import logging
from typing import Optional

import httpx
from pydantic import ValidationError

from .constants import (
    Endpoints,
    XERR_ADULT_VERIFICATION,
    XERR_CHILD_ACCOUNT,
    XERR_NO_XBOX_ACCOUNT,
    XERR_REGION_UNAVAILABLE,
)
from .errors import (
    AccountNotOwnedError,
    Hop,
    HopFailedError,
    MicrosoftAuthError,
    XSTSCondition,
    XSTSError,
)
from .models import (
    XboxLiveAuthRequest,
    XboxLiveAuthResponse,
    XSTSAuthRequest,
    XSTSAuthResponse,
    XSTSErrorResponse,
)
from .transport import post_json, status_of

logger = logging.getLogger(__name__)


async def authenticate_with_xbox_live(
    client: httpx.AsyncClient,
    endpoints: Endpoints,
    access_token: str,
) -> XboxLiveAuthResponse:
    """Authenticate with Xbox Live using a Microsoft access token

    Args:
        client: HTTP client
        endpoints: Endpoint configuration
        access_token: Microsoft access token from the code or refresh exchange

    Returns:
        XboxLiveAuthResponse with the Xbox Live token and user hash

    Raises:
        HopFailedError: On network, status or decoding failure
    """
    body = XboxLiveAuthRequest.for_access_token(access_token).model_dump(by_alias=True)

    try:
        response = await post_json(client, endpoints.xbox_live_auth_url, body)
        result = XboxLiveAuthResponse.model_validate_json(response.content)
    except httpx.HTTPError as e:
        logger.error(f"Xbox Live authentication failed: {e}")
        raise HopFailedError(Hop.XBOX_LIVE, e, status_code=status_of(e)) from e
    except ValidationError as e:
        logger.error(f"Failed to parse Xbox Live response: {e.error_count()} validation error(s)")
        raise HopFailedError(Hop.XBOX_LIVE, e) from e

    logger.info("Xbox Live authentication succeeded")
    return result


def map_xsts_error(error: XSTSErrorResponse) -> Optional[MicrosoftAuthError]:
    """Translate an XSTS error body into the matching error

    Returns:
        The error to raise, or None when the body carries no XErr code
    """
    xerr = error.xerr
    if xerr is None:
        return None

    if xerr == XERR_NO_XBOX_ACCOUNT:
        return AccountNotOwnedError(xerr=xerr)
    if xerr == XERR_REGION_UNAVAILABLE:
        return XSTSError(
            xerr, "Xbox Live is not available in this country or region",
            XSTSCondition.REGION_UNSUPPORTED, error.redirect,
        )
    if xerr in XERR_ADULT_VERIFICATION:
        return XSTSError(
            xerr, "The account needs adult verification",
            XSTSCondition.ADULT_VERIFICATION_REQUIRED, error.redirect,
        )
    if xerr == XERR_CHILD_ACCOUNT:
        return XSTSError(
            xerr, "The account is a child account and must be added to a family group",
            XSTSCondition.CHILD_ACCOUNT, error.redirect,
        )
    return XSTSError(
        xerr, error.message or "Unknown XSTS error",
        XSTSCondition.UNKNOWN, error.redirect,
    )


async def authenticate_with_xsts(
    client: httpx.AsyncClient,
    endpoints: Endpoints,
    xbl_token: str,
) -> XSTSAuthResponse:
    """Authorize the Xbox Live token against the Minecraft relying party

    The response body is read once. When the status is not 2xx or the body
    does not match the token schema, the same bytes are checked against the
    XSTS error schema and a known XErr code is raised as its own condition.

    Raises:
        AccountNotOwnedError: XErr 2148916233
        XSTSError: Any other XErr code
        HopFailedError: Network failure, or a body matching neither schema
    """
    body = XSTSAuthRequest.for_xbox_live_token(xbl_token).model_dump(by_alias=True)

    try:
        response = await post_json(client, endpoints.xsts_auth_url, body, check_status=False)
    except httpx.HTTPError as e:
        logger.error(f"XSTS request failed: {e}")
        raise HopFailedError(Hop.XSTS, e) from e

    failure: Optional[Exception] = None
    if response.is_success:
        try:
            result = XSTSAuthResponse.model_validate_json(response.content)
        except ValidationError as e:
            failure = e
        else:
            logger.info("XSTS authorization succeeded")
            return result
    else:
        failure = httpx.HTTPStatusError(
            f"XSTS returned status {response.status_code}",
            request=response.request,
            response=response,
        )

    try:
        error_body = XSTSErrorResponse.model_validate_json(response.content)
    except ValidationError:
        error_body = None

    mapped = map_xsts_error(error_body) if error_body is not None else None
    if mapped is not None:
        logger.error(f"XSTS refused authorization: XErr {error_body.xerr}")
        raise mapped from failure

    logger.error(f"XSTS authorization failed: {type(failure).__name__} (status {response.status_code})")
    raise HopFailedError(Hop.XSTS, failure, status_code=response.status_code) from failure
