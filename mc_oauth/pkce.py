"""PKCE (Proof Key for Code Exchange) generation, RFC 7636"""

import base64
import hashlib
import secrets
from typing import NamedTuple

# 96 random bytes encode to 128 base64url characters
VERIFIER_BYTES = 96
VERIFIER_MAX_LENGTH = 128
STATE_BYTES = 16


class PKCEPair(NamedTuple):
    """PKCE code verifier and challenge pair"""
    verifier: str
    challenge: str


def _base64url(data: bytes) -> str:
    """Base64url encode without padding (RFC 4648 section 5)"""
    return base64.urlsafe_b64encode(data).decode("ascii").rstrip("=")


def generate_code_verifier() -> str:
    """
    Generate a high-entropy code verifier.

    Returns:
        URL-safe string of 43-128 characters
    """
    return _base64url(secrets.token_bytes(VERIFIER_BYTES))[:VERIFIER_MAX_LENGTH]


def generate_code_challenge(verifier: str) -> str:
    """
    Derive the S256 code challenge for a verifier.

    Args:
        verifier: PKCE code verifier

    Returns:
        base64url(SHA-256(verifier)), always 43 characters
    """
    digest = hashlib.sha256(verifier.encode("utf-8")).digest()
    return _base64url(digest)


def generate_state() -> str:
    """
    Generate a random state parameter for CSRF protection.

    Returns:
        16 random bytes, base64url encoded
    """
    return _base64url(secrets.token_bytes(STATE_BYTES))


def generate_pkce() -> PKCEPair:
    """Generate a fresh verifier and its matching challenge"""
    verifier = generate_code_verifier()
    return PKCEPair(verifier=verifier, challenge=generate_code_challenge(verifier))
