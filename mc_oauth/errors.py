"""Error types for the Microsoft → Xbox Live → XSTS → Minecraft sign-in chain

Every error carries a ``kind`` tag so callers can branch on the condition
without caring which hop produced it. Account-not-owned is raised both by
XSTS (XErr 2148916233) and by the Minecraft login hop (empty access token)
and is the same condition in both cases.
"""

from enum import Enum
from typing import Optional

GENERIC_USER_MESSAGE = "Sign-in failed, please try again."


class AuthErrorKind(str, Enum):
    """Condition tag carried by every MicrosoftAuthError"""
    INVALID_CONFIGURATION = "invalid_configuration"
    MALFORMED_URL = "malformed_url"
    CSRF_STATE_MISMATCH = "csrf_state_mismatch"
    AUTHORIZATION_CODE_MISSING = "authorization_code_missing"
    HOP_FAILED = "hop_failed"
    SECURITY_TOKEN_SERVICE_ERROR = "security_token_service_error"
    ACCOUNT_DOES_NOT_OWN_GAME = "account_does_not_own_game"
    INVALID_OR_EXPIRED_REFRESH_TOKEN = "invalid_or_expired_refresh_token"
    CANCELLED = "cancelled"


class Hop(str, Enum):
    """Network hops of the sign-in chain, in order"""
    CODE_EXCHANGE = "code_exchange"
    XBOX_LIVE = "xbox_live"
    XSTS = "xsts"
    MINECRAFT_AUTH = "minecraft_auth"
    PROFILE_FETCH = "profile_fetch"


class XSTSCondition(str, Enum):
    """Known XSTS failure conditions"""
    REGION_UNSUPPORTED = "region_unsupported"
    ADULT_VERIFICATION_REQUIRED = "adult_verification_required"
    CHILD_ACCOUNT = "child_account"
    UNKNOWN = "unknown"


_XSTS_USER_MESSAGES = {
    XSTSCondition.REGION_UNSUPPORTED: "Xbox Live is not available in your country or region.",
    XSTSCondition.ADULT_VERIFICATION_REQUIRED: "This account needs adult verification on the Xbox website before it can sign in.",
    XSTSCondition.CHILD_ACCOUNT: "This is a child account. An adult must add it to a Microsoft family group before it can sign in.",
}


class MicrosoftAuthError(Exception):
    """Base class for all sign-in errors"""

    kind: AuthErrorKind

    @property
    def user_message(self) -> str:
        """Text suitable for showing to the person signing in"""
        return GENERIC_USER_MESSAGE


class InvalidConfigurationError(MicrosoftAuthError):
    """An endpoint URL or client setting is malformed. Not retryable."""
    kind = AuthErrorKind.INVALID_CONFIGURATION


class MalformedCallbackURLError(MicrosoftAuthError):
    """The redirect URL handed back by the browser is not a valid URL"""
    kind = AuthErrorKind.MALFORMED_URL


class StateMismatchError(MicrosoftAuthError):
    """The callback state does not match the one issued by begin_login"""
    kind = AuthErrorKind.CSRF_STATE_MISMATCH

    def __init__(self, message: str = "State parameter mismatch - possible CSRF attack"):
        super().__init__(message)


class AuthorizationCodeMissingError(MicrosoftAuthError):
    """The callback URL carries no authorization code"""
    kind = AuthErrorKind.AUTHORIZATION_CODE_MISSING

    def __init__(
        self,
        message: str = "Authorization code not found in callback URL",
        provider_error: Optional[str] = None,
    ):
        super().__init__(message)
        self.provider_error = provider_error


class HopFailedError(MicrosoftAuthError):
    """A hop failed on the network, with a non-2xx status, or on decoding"""
    kind = AuthErrorKind.HOP_FAILED

    def __init__(
        self,
        hop: Hop,
        cause: Optional[BaseException] = None,
        status_code: Optional[int] = None,
    ):
        self.hop = hop
        self.cause = cause
        self.status_code = status_code
        # Message carries the cause type only, never its text
        details = []
        if cause is not None:
            details.append(type(cause).__name__)
        if status_code is not None:
            details.append(f"status {status_code}")
        detail = f": {', '.join(details)}" if details else ""
        super().__init__(f"{hop.value.replace('_', '-')}-failed{detail}")


class AzureAppNotPermittedError(HopFailedError):
    """Minecraft services rejected the Azure application (HTTP 403)"""

    def __init__(self, cause: Optional[BaseException] = None):
        super().__init__(Hop.MINECRAFT_AUTH, cause, status_code=403)

    @property
    def user_message(self) -> str:
        return "This application is not permitted to access the Minecraft API."


class XSTSError(MicrosoftAuthError):
    """The security token service answered with an XErr code"""
    kind = AuthErrorKind.SECURITY_TOKEN_SERVICE_ERROR

    def __init__(
        self,
        code: int,
        message: str,
        condition: XSTSCondition = XSTSCondition.UNKNOWN,
        redirect: Optional[str] = None,
    ):
        self.code = code
        self.message = message
        self.condition = condition
        self.redirect = redirect
        super().__init__(f"XSTS error {code}: {message}")

    @property
    def user_message(self) -> str:
        return _XSTS_USER_MESSAGES.get(self.condition, GENERIC_USER_MESSAGE)


class AccountNotOwnedError(MicrosoftAuthError):
    """The Microsoft account does not own Minecraft"""
    kind = AuthErrorKind.ACCOUNT_DOES_NOT_OWN_GAME

    def __init__(self, xerr: Optional[int] = None):
        # xerr is set when XSTS reported the condition, None when the
        # Minecraft login hop returned an empty access token
        self.xerr = xerr
        super().__init__("This account does not own Minecraft")

    @property
    def user_message(self) -> str:
        return "This Microsoft account does not own Minecraft: Java Edition."


class InvalidRefreshTokenError(MicrosoftAuthError):
    """The refresh token exchange failed for any reason"""
    kind = AuthErrorKind.INVALID_OR_EXPIRED_REFRESH_TOKEN

    def __init__(self, message: str = "Invalid or expired refresh token"):
        super().__init__(message)

    @property
    def user_message(self) -> str:
        return "Your session has expired. Please sign in again."


class LoginCancelledError(MicrosoftAuthError):
    """The flow deadline passed before the chain completed"""
    kind = AuthErrorKind.CANCELLED
