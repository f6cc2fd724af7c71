from config.loader import get_config_loader
from mc_oauth.constants import (
    AUTHORIZE_URL,
    DEFAULT_HTTP_TIMEOUT,
    DEFAULT_SCOPE,
    MINECRAFT_AUTH_URL,
    MINECRAFT_PROFILE_URL,
    REFRESH_URL,
    TOKEN_URL,
    XBOX_LIVE_AUTH_URL,
    XSTS_AUTH_URL,
    Endpoints,
)

# Get the config loader instance
config = get_config_loader()

# Logging
LOG_LEVEL = config.get("LOG_LEVEL", "info")
DEBUG_LOG_FILE = config.get("DEBUG_LOG_FILE", "mc_auth_debug.log")

# Azure application registration (no usable default: every launcher registers its own)
MS_CLIENT_ID = config.get("MS_CLIENT_ID", "")
MS_REDIRECT_URI = config.get("MS_REDIRECT_URI", "http://localhost:28562/auth/callback")
MS_SCOPE = config.get("MS_SCOPE", DEFAULT_SCOPE)

# Timeout applied to every hop of the sign-in chain
HTTP_TIMEOUT = config.get("HTTP_TIMEOUT", DEFAULT_HTTP_TIMEOUT)
# How long the loopback callback server waits for the browser redirect
CALLBACK_TIMEOUT = config.get("CALLBACK_TIMEOUT", 300.0)

# Endpoint overrides (test doubles, proxies)
ENDPOINTS = Endpoints(
    authorize_url=config.get_url("MS_AUTHORIZE_URL", AUTHORIZE_URL),
    token_url=config.get_url("MS_TOKEN_URL", TOKEN_URL),
    refresh_url=config.get_url("MS_REFRESH_URL", REFRESH_URL),
    xbox_live_auth_url=config.get_url("XBOX_LIVE_AUTH_URL", XBOX_LIVE_AUTH_URL),
    xsts_auth_url=config.get_url("XSTS_AUTH_URL", XSTS_AUTH_URL),
    minecraft_auth_url=config.get_url("MINECRAFT_AUTH_URL", MINECRAFT_AUTH_URL),
    minecraft_profile_url=config.get_url("MINECRAFT_PROFILE_URL", MINECRAFT_PROFILE_URL),
)
