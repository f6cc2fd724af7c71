"""OAuth redirect (callback) URL parsing"""

import logging
from urllib.parse import parse_qs, urlsplit

from .errors import (
    AuthorizationCodeMissingError,
    MalformedCallbackURLError,
    StateMismatchError,
)

logger = logging.getLogger(__name__)


def parse_callback(url: str, expected_state: str) -> str:
    """
    Extract the authorization code from a redirect URL.

    A state parameter, when present, must equal expected_state exactly.
    Providers that omit state entirely are tolerated.

    Args:
        url: Redirect URL the browser landed on
        expected_state: State issued by begin_login

    Returns:
        The authorization code, query-decoded

    Raises:
        MalformedCallbackURLError: If url is not an absolute URL
        StateMismatchError: If the state does not match
        AuthorizationCodeMissingError: If there is no code parameter
    """
    if not isinstance(url, str):
        raise MalformedCallbackURLError("Callback URL must be a string")

    try:
        parts = urlsplit(url.strip())
    except ValueError as e:
        raise MalformedCallbackURLError(f"Malformed callback URL: {e}") from e

    if not parts.scheme or not (parts.netloc or parts.path):
        raise MalformedCallbackURLError("Malformed callback URL")

    params = parse_qs(parts.query, keep_blank_values=True)

    # CSRF protection
    states = params.get("state")
    if states is not None and states[0] != expected_state:
        logger.warning("Callback state does not match the issued state")
        raise StateMismatchError()

    codes = params.get("code")
    if not codes:
        provider_error = params.get("error", [None])[0]
        if provider_error:
            description = params.get("error_description", [""])[0]
            detail = f"{provider_error}: {description}" if description else provider_error
            raise AuthorizationCodeMissingError(
                f"Authorization failed: {detail}", provider_error=detail
            )
        raise AuthorizationCodeMissingError()

    return codes[0]
