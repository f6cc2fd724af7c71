"""Tests for the terminal sign-in flow and result display"""
import dataclasses
import io
import logging
import unittest
from unittest.mock import patch

from rich.console import Console

from cli.auth_flow import CLIAuthFlow
from cli.main import build_parser, run
from cli.status_display import mask_token, show_login_result
from mc_oauth import LoginSession, MicrosoftAuthClient
from tests.fixtures import ENDPOINTS, PROFILE_NAME, MockServices
from utils.debug_console import DebugCapturingConsole, create_console

REDIRECT = "http://localhost:28562/auth/callback"


def make_console() -> Console:
    return Console(file=io.StringIO(), width=200, color_system=None)


class TestMaskToken(unittest.TestCase):

    def test_long_token_keeps_prefix(self):
        self.assertEqual(mask_token("eyJhbGciOiJIUzI1NiJ9"), "eyJhbG…(20 chars)")

    def test_short_and_empty_tokens(self):
        self.assertEqual(mask_token("abc"), "***")
        self.assertEqual(mask_token(""), "(none)")


class TestParser(unittest.TestCase):

    def test_login_flags(self):
        args = build_parser().parse_args(["--show-tokens", "login", "--no-browser", "--listen"])
        self.assertEqual(args.command, "login")
        self.assertTrue(args.no_browser)
        self.assertTrue(args.listen)
        self.assertTrue(args.show_tokens)

    def test_refresh_takes_token(self):
        args = build_parser().parse_args(["refresh", "tok"])
        self.assertEqual(args.command, "refresh")
        self.assertEqual(args.refresh_token, "tok")


class TestCLIAuthFlow(unittest.IsolatedAsyncioTestCase):

    async def test_refresh_prints_progress_and_returns_result(self):
        services = MockServices()
        console = make_console()

        async with services.client() as http_client:
            client = MicrosoftAuthClient("client-123", REDIRECT, http_client=http_client)
            result = await CLIAuthFlow(client, console).refresh("old-refresh")

        self.assertEqual(result.profile_name, PROFILE_NAME)
        output = console.file.getvalue()
        self.assertIn("Refreshing Microsoft token", output)
        self.assertIn("Fetching Minecraft profile", output)
        self.assertIn("Signed in", output)

    async def test_refresh_failure_is_reported(self):
        services = MockServices({ENDPOINTS.refresh_url: (400, {"error": "invalid_grant"})})
        console = make_console()

        async with services.client() as http_client:
            client = MicrosoftAuthClient("client-123", REDIRECT, http_client=http_client)
            result = await CLIAuthFlow(client, console).refresh("revoked")

        self.assertIsNone(result)
        output = console.file.getvalue()
        self.assertIn("Your session has expired", output)
        self.assertIn("invalid_or_expired_refresh_token", output)

    async def test_login_with_pasted_callback_url(self):
        services = MockServices()
        console = make_console()
        session = LoginSession(url="https://login.example/authorize", state="s1", code_verifier="v1")

        async with services.client() as http_client:
            client = MicrosoftAuthClient("client-123", REDIRECT, http_client=http_client)
            with patch.object(client, "begin_login", return_value=session), \
                    patch("builtins.input", return_value=f"{REDIRECT}?code=abc&state=s1"):
                result = await CLIAuthFlow(client, console).login(open_browser=False)

        self.assertEqual(result.profile_name, PROFILE_NAME)
        self.assertIn("https://login.example/authorize", console.file.getvalue())

    async def test_login_with_forged_state_makes_no_requests(self):
        services = MockServices()
        console = make_console()
        session = LoginSession(url="https://login.example/authorize", state="s1", code_verifier="v1")

        async with services.client() as http_client:
            client = MicrosoftAuthClient("client-123", REDIRECT, http_client=http_client)
            with patch.object(client, "begin_login", return_value=session), \
                    patch("builtins.input", return_value=f"{REDIRECT}?code=abc&state=forged"):
                result = await CLIAuthFlow(client, console).login(open_browser=False)

        self.assertIsNone(result)
        self.assertEqual(services.requests, [])
        self.assertIn("csrf_state_mismatch", console.file.getvalue())

    async def test_login_cancelled_at_prompt(self):
        console = make_console()
        client = MicrosoftAuthClient("client-123", REDIRECT)
        async with client:
            with patch("builtins.input", side_effect=EOFError):
                result = await CLIAuthFlow(client, console).login(open_browser=False)

        self.assertIsNone(result)
        self.assertIn("cancelled", console.file.getvalue())


class TestRun(unittest.IsolatedAsyncioTestCase):

    async def test_missing_client_id_exits_with_usage_error(self):
        console = make_console()
        args = build_parser().parse_args(["refresh", "tok"])
        with patch("settings.MS_CLIENT_ID", ""):
            self.assertEqual(await run(args, console), 2)
        self.assertIn("MS_CLIENT_ID", console.file.getvalue())


class TestShowLoginResult(unittest.IsolatedAsyncioTestCase):

    async def test_tokens_masked_unless_requested(self):
        services = MockServices()
        async with services.client() as http_client:
            client = MicrosoftAuthClient("client-123", REDIRECT, http_client=http_client)
            result = await client.refresh_login("old-refresh")

        console = make_console()
        show_login_result(result, console)
        output = console.file.getvalue()
        self.assertIn(PROFILE_NAME, output)
        self.assertIn("c4bb2799-e166-4b6f-970c-a96c9e58f2d3", output)
        self.assertIn("Migrator", output)
        self.assertNotIn("mc-access-token", output)

        console = make_console()
        show_login_result(result, console, show_tokens=True)
        self.assertIn("mc-access-token", console.file.getvalue())

    async def test_non_uuid_profile_id_is_shown_as_is(self):
        services = MockServices()
        async with services.client() as http_client:
            client = MicrosoftAuthClient("client-123", REDIRECT, http_client=http_client)
            result = await client.refresh_login("old-refresh")

        console = make_console()
        show_login_result(dataclasses.replace(result, profile_id="legacy-id"), console)
        self.assertIn("legacy-id", console.file.getvalue())


class TestDebugConsole(unittest.TestCase):

    def test_output_is_mirrored_without_markup(self):
        debug_logger = logging.getLogger("tests.debug_console")
        console = DebugCapturingConsole(debug_logger=debug_logger, file=io.StringIO())

        with self.assertLogs(debug_logger, level="DEBUG") as logs:
            console.print("[bold]Signed in[/bold]")

        self.assertEqual(logs.output, ["DEBUG:tests.debug_console:[CONSOLE] Signed in"])
        self.assertIn("Signed in", console.file.getvalue())

    def test_plain_console_without_debug(self):
        console = create_console()
        self.assertNotIsInstance(console, DebugCapturingConsole)


if __name__ == '__main__':
    unittest.main()
