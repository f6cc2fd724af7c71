"""
Local OAuth callback server for loopback redirect URIs
"""
import asyncio
import logging
from typing import Optional
from urllib.parse import urlsplit

from aiohttp import web

from .callback import parse_callback
from .errors import InvalidConfigurationError, LoginCancelledError, MicrosoftAuthError

logger = logging.getLogger(__name__)

SUCCESS_PAGE = """
<html>
    <body>
        <h1>Signed in</h1>
        <p>You can now close this window and return to the terminal.</p>
        <script>
            setTimeout(function() {
                window.close();
            }, 2000);
        </script>
    </body>
</html>
"""

FAILURE_PAGE = """
<html>
    <body>
        <h1>Sign-in failed</h1>
        <p>{message}</p>
        <p>You can close this window.</p>
    </body>
</html>
"""


class OAuthCallbackServer:
    """Local HTTP server that receives the Microsoft OAuth redirect"""

    def __init__(self, redirect_uri: str, expected_state: str):
        """
        Args:
            redirect_uri: Loopback redirect URI, e.g. http://localhost:28562/auth/callback
            expected_state: State issued with the authorization URL
        """
        parts = urlsplit(redirect_uri)
        if parts.scheme != "http" or not parts.hostname or not parts.port:
            raise InvalidConfigurationError(
                f"Callback server needs an http://host:port redirect URI, got {redirect_uri!r}"
            )

        self.redirect_uri = redirect_uri
        self.host = parts.hostname
        self.port = parts.port
        self.path = parts.path or "/"
        self.expected_state = expected_state

        self.code: Optional[str] = None
        self.error: Optional[MicrosoftAuthError] = None
        self.app = web.Application()
        self.runner: Optional[web.AppRunner] = None
        self._event = asyncio.Event()

        self.app.router.add_get(self.path, self._handle_callback)

    async def _handle_callback(self, request: web.Request) -> web.Response:
        """Handle the redirect: validate state and capture the code"""
        # The first redirect decides the outcome; later hits get the same page
        if self._event.is_set():
            return self._outcome_page()

        callback_url = f"{self.redirect_uri.split('?', 1)[0]}?{request.query_string}"

        try:
            code = parse_callback(callback_url, self.expected_state)
        except MicrosoftAuthError as e:
            logger.error(f"Callback rejected: {e}")
            self.error = e
        else:
            self.code = code

        self._event.set()
        return self._outcome_page()

    def _outcome_page(self) -> web.Response:
        if self.error is not None:
            return web.Response(
                text=FAILURE_PAGE.format(message=self.error.user_message),
                content_type="text/html",
                status=400,
            )
        return web.Response(text=SUCCESS_PAGE, content_type="text/html")

    async def start(self) -> None:
        """Start listening on the redirect URI's host and port"""
        self.runner = web.AppRunner(self.app)
        await self.runner.setup()

        site = web.TCPSite(self.runner, host=self.host, port=self.port)
        await site.start()
        logger.info(f"OAuth callback server listening on {self.host}:{self.port}{self.path}")

    async def wait_for_callback(self, timeout: float = 300) -> str:
        """
        Wait for the browser redirect.

        Args:
            timeout: Maximum time to wait in seconds

        Returns:
            Authorization code

        Raises:
            LoginCancelledError: If no redirect arrives in time
            MicrosoftAuthError: If the redirect fails validation
        """
        try:
            await asyncio.wait_for(self._event.wait(), timeout=timeout)
        except asyncio.TimeoutError as e:
            logger.warning(f"OAuth callback timeout after {timeout} seconds")
            raise LoginCancelledError(f"No sign-in callback within {timeout} seconds") from e

        if self.error is not None:
            raise self.error
        return self.code

    async def stop(self) -> None:
        """Stop the callback server"""
        if self.runner:
            await self.runner.cleanup()
            self.runner = None


async def start_callback_server(redirect_uri: str, expected_state: str) -> OAuthCallbackServer:
    """
    Start an OAuth callback server.

    Args:
        redirect_uri: Loopback redirect URI
        expected_state: Expected state parameter for CSRF protection

    Returns:
        Running OAuthCallbackServer
    """
    server = OAuthCallbackServer(redirect_uri, expected_state)
    await server.start()
    return server
