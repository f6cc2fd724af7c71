"""Result display functionality for CLI"""

from rich.table import Table

from mc_oauth import CompleteLoginResult, LoginStep

STEP_LABELS = {
    LoginStep.EXCHANGING_CODE: "Exchanging authorization code",
    LoginStep.REFRESHING_TOKEN: "Refreshing Microsoft token",
    LoginStep.AUTHENTICATING_XBOX_LIVE: "Authenticating with Xbox Live",
    LoginStep.AUTHENTICATING_XSTS: "Authorizing with XSTS",
    LoginStep.AUTHENTICATING_MINECRAFT: "Signing in to Minecraft services",
    LoginStep.FETCHING_PROFILE: "Fetching Minecraft profile",
    LoginStep.COMPLETE: "Done",
}


def mask_token(token: str, visible: int = 6) -> str:
    """
    Mask a token for display, keeping only its first characters

    Args:
        token: Token to mask
        visible: Number of leading characters to keep

    Returns:
        Masked token, or "(none)" for an empty token
    """
    if not token:
        return "(none)"
    if len(token) <= visible:
        return "*" * len(token)
    return f"{token[:visible]}…({len(token)} chars)"


def show_login_result(result: CompleteLoginResult, console, show_tokens: bool = False):
    """
    Display a sign-in result

    Args:
        result: CompleteLoginResult to display
        console: Rich console for output
        show_tokens: Print tokens in full instead of masked
    """
    table = Table(title="Minecraft Account")
    table.add_column("Property", style="cyan")
    table.add_column("Value")

    table.add_row("Username", result.profile_name)
    try:
        profile_uuid = str(result.profile_uuid)
    except ValueError:
        profile_uuid = result.profile_id
    table.add_row("Profile UUID", profile_uuid)
    table.add_row("Issued At", result.issued_at.isoformat())

    active_skin = result.active_skin
    table.add_row("Active Skin", active_skin.url if active_skin else "(default)")
    table.add_row("Skins", str(len(result.skins)))
    table.add_row("Capes", ", ".join(cape.alias or cape.id for cape in result.capes) or "(none)")

    access_token = result.access_token if show_tokens else mask_token(result.access_token)
    refresh_token = result.refresh_token if show_tokens else mask_token(result.refresh_token)
    table.add_row("Access Token", access_token)
    table.add_row("Refresh Token", refresh_token)

    console.print(table)
