"""CLI package for mc-oauth

Command-line front end for signing in to Minecraft with a Microsoft account.
"""

from cli.auth_flow import CLIAuthFlow
from cli.main import main

__all__ = [
    "CLIAuthFlow",
    "main",
]
