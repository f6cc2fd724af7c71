"""
Microsoft account sign-in for Minecraft: Microsoft OAuth (PKCE) → Xbox Live → XSTS → Minecraft services
"""
from .constants import DEFAULT_SCOPE, Endpoints
from .pkce import (
    PKCEPair,
    generate_code_challenge,
    generate_code_verifier,
    generate_pkce,
    generate_state,
)
from .models import (
    CapeInfo,
    CompleteLoginResult,
    LoginSession,
    LoginStep,
    MicrosoftTokenResponse,
    MinecraftAuthResponse,
    MinecraftProfile,
    SkinInfo,
    TextureState,
    XboxLiveAuthResponse,
    XSTSErrorResponse,
)
from .errors import (
    AccountNotOwnedError,
    AuthErrorKind,
    AuthorizationCodeMissingError,
    AzureAppNotPermittedError,
    Hop,
    HopFailedError,
    InvalidConfigurationError,
    InvalidRefreshTokenError,
    LoginCancelledError,
    MalformedCallbackURLError,
    MicrosoftAuthError,
    StateMismatchError,
    XSTSCondition,
    XSTSError,
)
from .authorization import create_login_session
from .callback import parse_callback
from .token_exchange import exchange_authorization_code, refresh_microsoft_token
from .xbox import authenticate_with_xbox_live, authenticate_with_xsts
from .minecraft import authenticate_with_minecraft, fetch_minecraft_profile
from .client import MicrosoftAuthClient, ProgressCallback
from .callback_server import OAuthCallbackServer, start_callback_server

__all__ = [
    # Configuration
    "DEFAULT_SCOPE",
    "Endpoints",
    # PKCE
    "PKCEPair",
    "generate_code_challenge",
    "generate_code_verifier",
    "generate_pkce",
    "generate_state",
    # Models
    "CapeInfo",
    "CompleteLoginResult",
    "LoginSession",
    "LoginStep",
    "MicrosoftTokenResponse",
    "MinecraftAuthResponse",
    "MinecraftProfile",
    "SkinInfo",
    "TextureState",
    "XboxLiveAuthResponse",
    "XSTSErrorResponse",
    # Errors
    "AccountNotOwnedError",
    "AuthErrorKind",
    "AuthorizationCodeMissingError",
    "AzureAppNotPermittedError",
    "Hop",
    "HopFailedError",
    "InvalidConfigurationError",
    "InvalidRefreshTokenError",
    "LoginCancelledError",
    "MalformedCallbackURLError",
    "MicrosoftAuthError",
    "StateMismatchError",
    "XSTSCondition",
    "XSTSError",
    # Hops
    "create_login_session",
    "parse_callback",
    "exchange_authorization_code",
    "refresh_microsoft_token",
    "authenticate_with_xbox_live",
    "authenticate_with_xsts",
    "authenticate_with_minecraft",
    "fetch_minecraft_profile",
    # Orchestration
    "MicrosoftAuthClient",
    "ProgressCallback",
    # Callback server
    "OAuthCallbackServer",
    "start_callback_server",
]
