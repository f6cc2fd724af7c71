"""CLI entry point and argument parsing"""

import argparse
import asyncio
import sys

import settings
from mc_oauth import MicrosoftAuthClient

from .auth_flow import CLIAuthFlow
from .debug_setup import setup_logging
from .status_display import show_login_result


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Sign in to Minecraft with a Microsoft account")
    parser.add_argument("--debug", "-d", action="store_true", help="Enable debug logging")
    parser.add_argument(
        "--client-id",
        default=None,
        help="Azure application client ID (default: MS_CLIENT_ID from config)"
    )
    parser.add_argument(
        "--redirect-uri",
        default=None,
        help="OAuth redirect URI (default: MS_REDIRECT_URI from config)"
    )
    parser.add_argument(
        "--show-tokens",
        action="store_true",
        help="Print tokens in full instead of masked"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    login = subparsers.add_parser("login", help="Sign in through the browser")
    login.add_argument("--no-browser", action="store_true", help="Print the URL instead of opening a browser")
    login.add_argument(
        "--listen",
        action="store_true",
        help="Receive the redirect on the loopback redirect URI instead of pasting it"
    )

    refresh = subparsers.add_parser("refresh", help="Refresh a session from a refresh token")
    refresh.add_argument("refresh_token", help="Refresh token from a previous sign-in")

    return parser


async def run(args: argparse.Namespace, console) -> int:
    client_id = args.client_id or settings.MS_CLIENT_ID
    if not client_id:
        console.print("[red]ERROR:[/red] No client ID. Set MS_CLIENT_ID or pass --client-id.")
        return 2

    async with MicrosoftAuthClient(
        client_id=client_id,
        redirect_uri=args.redirect_uri or settings.MS_REDIRECT_URI,
        scope=settings.MS_SCOPE,
        endpoints=settings.ENDPOINTS,
        timeout=settings.HTTP_TIMEOUT,
    ) as client:
        flow = CLIAuthFlow(client, console, callback_timeout=settings.CALLBACK_TIMEOUT)

        if args.command == "login":
            result = await flow.login(open_browser=not args.no_browser, listen=args.listen)
        else:
            result = await flow.refresh(args.refresh_token)

    if result is None:
        return 1

    show_login_result(result, console, show_tokens=args.show_tokens)
    return 0


def main():
    """Entry point for the CLI"""
    args = build_parser().parse_args()
    console = setup_logging(args.debug, settings.LOG_LEVEL, settings.DEBUG_LOG_FILE)

    try:
        exit_code = asyncio.run(run(args, console))
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted by user[/yellow]")
        exit_code = 130
    except Exception as e:
        console.print(f"\n[red]Fatal error:[/red] {e}")
        if args.debug:
            console.print_exception()
        exit_code = 1

    sys.exit(exit_code)


if __name__ == "__main__":
    main()
