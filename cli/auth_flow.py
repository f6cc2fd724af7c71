"""Microsoft account sign-in flow for the terminal"""

import asyncio
import logging
import webbrowser
from typing import Optional

from mc_oauth import (
    CompleteLoginResult,
    LoginStep,
    MicrosoftAuthClient,
    MicrosoftAuthError,
    start_callback_server,
)

from .status_display import STEP_LABELS

logger = logging.getLogger(__name__)


class CLIAuthFlow:
    """Drive MicrosoftAuthClient interactively in a terminal"""

    def __init__(self, client: MicrosoftAuthClient, console, callback_timeout: float = 300):
        """
        Args:
            client: Configured MicrosoftAuthClient
            console: Rich console for output
            callback_timeout: Seconds to wait for the browser redirect with --listen
        """
        self.client = client
        self.console = console
        self.callback_timeout = callback_timeout

    def _on_progress(self, step: LoginStep) -> None:
        if step == LoginStep.COMPLETE:
            self.console.print("[green][OK][/green] Signed in")
        else:
            self.console.print(f"  [dim]…[/dim] {STEP_LABELS[step]}")

    async def login(self, open_browser: bool = True, listen: bool = False) -> Optional[CompleteLoginResult]:
        """Run the interactive login flow

        Args:
            open_browser: Try to open the authorization URL automatically
            listen: Receive the redirect with the loopback callback server
                instead of asking the user to paste it

        Returns:
            CompleteLoginResult, or None if the flow failed or was cancelled
        """
        # Step 1: Generate auth URL and open browser
        session = self.client.begin_login()

        server = None
        try:
            if listen:
                server = await start_callback_server(self.client.redirect_uri, session.state)

            self.console.print("\n[bold]Step 1:[/bold] Sign in with your Microsoft account")
            if open_browser and webbrowser.open(session.url):
                self.console.print("[green][OK][/green] Browser opened successfully")
            else:
                self.console.print(f"Please open this URL in your browser:\n{session.url}")

            # Step 2: Receive the redirect
            if server is not None:
                self.console.print("\n[bold]Step 2:[/bold] Waiting for the browser to redirect back...")
                code = await server.wait_for_callback(timeout=self.callback_timeout)
            else:
                self.console.print("\n[bold]Step 2:[/bold] Paste the URL your browser was redirected to")
                self.console.print(f"[dim]It starts with: {self.client.redirect_uri}?code=[/dim]\n")
                try:
                    callback_url = await asyncio.to_thread(input, "Callback URL: ")
                except (KeyboardInterrupt, EOFError):
                    self.console.print("\n[yellow]Sign-in cancelled by user[/yellow]")
                    return None
                code = self.client.parse_callback(callback_url, session.state)

            # Step 3: Run the chain
            self.console.print("\n[bold]Step 3:[/bold] Signing in to Minecraft...")
            return await self.client.complete_login(
                code, session.code_verifier, on_progress=self._on_progress
            )

        except MicrosoftAuthError as e:
            logger.debug(f"Sign-in failed: {type(e).__name__}: {e}")
            self._report_failure(e)
            return None
        finally:
            if server is not None:
                await server.stop()

    async def refresh(self, refresh_token: str) -> Optional[CompleteLoginResult]:
        """Refresh a session from a stored refresh token

        Returns:
            CompleteLoginResult, or None if the refresh failed
        """
        self.console.print("\n[bold]Refreshing session...[/bold]")
        try:
            return await self.client.refresh_login(refresh_token, on_progress=self._on_progress)
        except MicrosoftAuthError as e:
            logger.debug(f"Refresh failed: {type(e).__name__}: {e}")
            self._report_failure(e)
            return None

    def _report_failure(self, error: MicrosoftAuthError) -> None:
        self.console.print(f"[red]{error.user_message}[/red]")
        self.console.print(f"[dim]{error.kind.value}: {error}[/dim]")
