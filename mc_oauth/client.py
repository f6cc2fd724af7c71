"""Microsoft → Xbox Live → XSTS → Minecraft sign-in orchestration"""

import asyncio
import logging
from typing import Callable, Optional

import httpx

from .authorization import create_login_session
from .callback import parse_callback
from .constants import DEFAULT_HTTP_TIMEOUT, DEFAULT_SCOPE, Endpoints
from .errors import LoginCancelledError
from .minecraft import authenticate_with_minecraft, fetch_minecraft_profile
from .models import CompleteLoginResult, LoginSession, LoginStep, MicrosoftTokenResponse
from .token_exchange import exchange_authorization_code, refresh_microsoft_token
from .transport import create_http_client
from .xbox import authenticate_with_xbox_live, authenticate_with_xsts

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[LoginStep], None]


class MicrosoftAuthClient:
    """Signs a Microsoft account into Minecraft services

    This class orchestrates the authentication flow:
    - Login session creation (state, PKCE, authorization URL)
    - Callback URL parsing with CSRF state check
    - Code exchange → Xbox Live → XSTS → Minecraft → profile
    - Refresh: refresh-token exchange → Xbox Live → XSTS → Minecraft → profile

    The client keeps only immutable configuration, so one instance can run
    many flows concurrently. Opening the browser, receiving the redirect and
    storing tokens are the caller's job.

    Example:
        async with MicrosoftAuthClient(client_id, redirect_uri) as auth:
            session = auth.begin_login()
            # open session.url, wait for the redirect...
            code = auth.parse_callback(redirect_url, session.state)
            result = await auth.complete_login(code, session.code_verifier)
    """

    def __init__(
        self,
        client_id: str,
        redirect_uri: str,
        scope: str = DEFAULT_SCOPE,
        endpoints: Optional[Endpoints] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        timeout: float = DEFAULT_HTTP_TIMEOUT,
    ):
        """Initialize the client

        Args:
            client_id: Azure application client ID
            redirect_uri: OAuth redirect URI registered for the application
            scope: OAuth scope
            endpoints: Endpoint URLs (defaults to the production services)
            http_client: AsyncClient to use for every hop. When omitted the
                client creates one with the given timeout and closes it in aclose().
            timeout: Transport timeout in seconds for a client-created AsyncClient
        """
        self.client_id = client_id
        self.redirect_uri = redirect_uri
        self.scope = scope
        self.endpoints = endpoints or Endpoints()
        self._owns_http_client = http_client is None
        self.http_client = http_client or create_http_client(timeout)

    async def __aenter__(self) -> "MicrosoftAuthClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the HTTP client if this instance created it"""
        if self._owns_http_client:
            await self.http_client.aclose()

    # Step 1: login URL

    def begin_login(self) -> LoginSession:
        """Generate the authorization URL with fresh state and PKCE values

        Returns:
            LoginSession with url, state and code_verifier

        Raises:
            InvalidConfigurationError: If the authorize endpoint is malformed
        """
        return create_login_session(
            self.endpoints.authorize_url,
            self.client_id,
            self.redirect_uri,
            self.scope,
        )

    # Step 2: callback

    @staticmethod
    def parse_callback(url: str, expected_state: str) -> str:
        """Extract the authorization code from the redirect URL

        See mc_oauth.callback.parse_callback.
        """
        return parse_callback(url, expected_state)

    # Step 3: complete login

    async def complete_login(
        self,
        code: str,
        code_verifier: str,
        on_progress: Optional[ProgressCallback] = None,
        timeout: Optional[float] = None,
    ) -> CompleteLoginResult:
        """Run the full chain from authorization code to Minecraft profile

        Args:
            code: Authorization code from parse_callback
            code_verifier: PKCE verifier from begin_login
            on_progress: Called with a LoginStep before each hop and once
                with LoginStep.COMPLETE at the end
            timeout: Deadline in seconds for the whole flow

        Returns:
            CompleteLoginResult

        Raises:
            MicrosoftAuthError: The first hop failure, or LoginCancelledError
        """
        return await self._with_deadline(
            self._complete_login(code, code_verifier, on_progress), timeout
        )

    async def refresh_login(
        self,
        refresh_token: str,
        on_progress: Optional[ProgressCallback] = None,
        timeout: Optional[float] = None,
    ) -> CompleteLoginResult:
        """Refresh the Microsoft token and re-run Xbox Live → profile

        Args:
            refresh_token: Refresh token from a previous result
            on_progress: Called with a LoginStep before each hop and once
                with LoginStep.COMPLETE at the end
            timeout: Deadline in seconds for the whole flow

        Returns:
            CompleteLoginResult. Its refresh_token is the rotated token, or
            the input token when the provider did not issue a new one.

        Raises:
            InvalidRefreshTokenError: The refresh exchange failed
            MicrosoftAuthError: Any later hop failure, or LoginCancelledError
        """
        return await self._with_deadline(
            self._refresh_login(refresh_token, on_progress), timeout
        )

    # Internals

    async def _complete_login(
        self,
        code: str,
        code_verifier: str,
        on_progress: Optional[ProgressCallback],
    ) -> CompleteLoginResult:
        _notify(on_progress, LoginStep.EXCHANGING_CODE)
        tokens = await exchange_authorization_code(
            self.http_client,
            self.endpoints,
            code,
            code_verifier,
            self.client_id,
            self.redirect_uri,
            self.scope,
        )
        return await self._sign_in_to_minecraft(
            tokens, tokens.refresh_token or "", on_progress
        )

    async def _refresh_login(
        self,
        refresh_token: str,
        on_progress: Optional[ProgressCallback],
    ) -> CompleteLoginResult:
        _notify(on_progress, LoginStep.REFRESHING_TOKEN)
        tokens = await refresh_microsoft_token(
            self.http_client,
            self.endpoints,
            refresh_token,
            self.client_id,
            self.scope,
        )
        return await self._sign_in_to_minecraft(
            tokens, tokens.refresh_token or refresh_token, on_progress
        )

    async def _sign_in_to_minecraft(
        self,
        tokens: MicrosoftTokenResponse,
        refresh_token: str,
        on_progress: Optional[ProgressCallback],
    ) -> CompleteLoginResult:
        """Xbox Live → XSTS → Minecraft → profile, shared by both flows"""
        _notify(on_progress, LoginStep.AUTHENTICATING_XBOX_LIVE)
        xbl = await authenticate_with_xbox_live(
            self.http_client, self.endpoints, tokens.access_token
        )

        _notify(on_progress, LoginStep.AUTHENTICATING_XSTS)
        xsts = await authenticate_with_xsts(self.http_client, self.endpoints, xbl.token)

        _notify(on_progress, LoginStep.AUTHENTICATING_MINECRAFT)
        minecraft = await authenticate_with_minecraft(
            self.http_client, self.endpoints, xbl.user_hash, xsts.token
        )

        _notify(on_progress, LoginStep.FETCHING_PROFILE)
        profile = await fetch_minecraft_profile(
            self.http_client, self.endpoints, minecraft.access_token
        )

        _notify(on_progress, LoginStep.COMPLETE)
        logger.info(f"Signed in as {profile.name}")
        return CompleteLoginResult.from_profile(profile, minecraft.access_token, refresh_token)

    async def _with_deadline(self, flow, timeout: Optional[float]) -> CompleteLoginResult:
        if timeout is None:
            return await flow
        try:
            return await asyncio.wait_for(flow, timeout=timeout)
        except asyncio.TimeoutError as e:
            logger.warning(f"Sign-in flow cancelled after {timeout} seconds")
            raise LoginCancelledError(f"Sign-in did not complete within {timeout} seconds") from e


def _notify(on_progress: Optional[ProgressCallback], step: LoginStep) -> None:
    logger.debug(f"Sign-in step: {step.value}")
    if on_progress is not None:
        on_progress(step)


__all__ = ["MicrosoftAuthClient", "ProgressCallback"]
