"""
Microsoft / Xbox Live / Minecraft OAuth constants
"""
from dataclasses import dataclass

# OAuth configuration
DEFAULT_SCOPE = "XboxLive.signin offline_access"

AUTHORIZE_URL = "https://login.microsoftonline.com/consumers/oauth2/v2.0/authorize"
TOKEN_URL = "https://login.microsoftonline.com/consumers/oauth2/v2.0/token"
REFRESH_URL = "https://login.live.com/oauth20_token.srf"

# Xbox Live / XSTS
XBOX_LIVE_AUTH_URL = "https://user.auth.xboxlive.com/user/authenticate"
XSTS_AUTH_URL = "https://xsts.auth.xboxlive.com/xsts/authorize"
XBOX_LIVE_SITE_NAME = "user.auth.xboxlive.com"
XBOX_LIVE_RELYING_PARTY = "http://auth.xboxlive.com"
XSTS_RELYING_PARTY = "rp://api.minecraftservices.com/"
XSTS_SANDBOX_ID = "RETAIL"

# Minecraft services
MINECRAFT_AUTH_URL = "https://api.minecraftservices.com/authentication/login_with_xbox"
MINECRAFT_PROFILE_URL = "https://api.minecraftservices.com/minecraft/profile"
IDENTITY_TOKEN_SCHEME = "XBL3.0"

# XSTS XErr codes
XERR_NO_XBOX_ACCOUNT = 2148916233
XERR_REGION_UNAVAILABLE = 2148916235
XERR_ADULT_VERIFICATION = (2148916236, 2148916237)
XERR_CHILD_ACCOUNT = 2148916238

DEFAULT_HTTP_TIMEOUT = 30.0


@dataclass(frozen=True)
class Endpoints:
    """Endpoint URLs used by each hop of the sign-in chain"""
    authorize_url: str = AUTHORIZE_URL
    token_url: str = TOKEN_URL
    refresh_url: str = REFRESH_URL
    xbox_live_auth_url: str = XBOX_LIVE_AUTH_URL
    xsts_auth_url: str = XSTS_AUTH_URL
    minecraft_auth_url: str = MINECRAFT_AUTH_URL
    minecraft_profile_url: str = MINECRAFT_PROFILE_URL
