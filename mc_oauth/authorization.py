"""Microsoft OAuth authorization URL construction"""

from urllib.parse import urlencode, urlsplit

from .errors import InvalidConfigurationError
from .models import LoginSession
from .pkce import generate_pkce, generate_state


def validate_endpoint(url: str) -> str:
    """
    Check that an endpoint URL is absolute http(s).

    Raises:
        InvalidConfigurationError: If the URL is malformed
    """
    try:
        parts = urlsplit(url)
    except ValueError as e:
        raise InvalidConfigurationError(f"Invalid endpoint URL: {url!r}") from e
    if parts.scheme not in ("http", "https") or not parts.netloc:
        raise InvalidConfigurationError(f"Invalid endpoint URL: {url!r}")
    if parts.query or parts.fragment:
        raise InvalidConfigurationError(f"Endpoint URL must not carry a query or fragment: {url!r}")
    return url


def create_login_session(
    authorize_url: str,
    client_id: str,
    redirect_uri: str,
    scope: str,
) -> LoginSession:
    """
    Create a login session: fresh state, PKCE pair and authorization URL.

    No network call is made. The caller opens session.url in a browser and
    keeps session.state and session.code_verifier for the callback.

    Args:
        authorize_url: Microsoft authorize endpoint
        client_id: Azure application client ID
        redirect_uri: Registered redirect URI
        scope: OAuth scope

    Returns:
        LoginSession

    Raises:
        InvalidConfigurationError: If the authorize endpoint is malformed
    """
    validate_endpoint(authorize_url)

    state = generate_state()
    pkce = generate_pkce()

    params = {
        "client_id": client_id,
        "response_type": "code",
        "redirect_uri": redirect_uri,
        "response_mode": "query",
        "scope": scope,
        "state": state,
        "code_challenge": pkce.challenge,
        "code_challenge_method": "S256",
    }

    url = f"{authorize_url}?{urlencode(params)}"

    return LoginSession(url=url, state=state, code_verifier=pkce.verifier)
