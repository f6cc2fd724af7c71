"""Shared HTTP helpers for the sign-in hops"""

import logging
from typing import Any, Dict, Optional

import httpx

from .constants import DEFAULT_HTTP_TIMEOUT

logger = logging.getLogger(__name__)

FORM_HEADERS = {"Content-Type": "application/x-www-form-urlencoded"}
JSON_HEADERS = {
    "Content-Type": "application/json",
    "Accept": "application/json",
}


def create_http_client(timeout: float = DEFAULT_HTTP_TIMEOUT) -> httpx.AsyncClient:
    """Create the AsyncClient used for every hop, with one uniform timeout"""
    return httpx.AsyncClient(timeout=timeout)


async def post_form(
    client: httpx.AsyncClient,
    url: str,
    data: Dict[str, str],
) -> httpx.Response:
    """POST an application/x-www-form-urlencoded body and require a 2xx reply

    Raises:
        httpx.RequestError: On network failure
        httpx.HTTPStatusError: On a non-2xx status
    """
    response = await client.post(url, data=data, headers=FORM_HEADERS)
    logger.debug(f"POST {url} -> {response.status_code}")
    response.raise_for_status()
    return response


async def post_json(
    client: httpx.AsyncClient,
    url: str,
    body: Dict[str, Any],
    check_status: bool = True,
) -> httpx.Response:
    """POST a JSON body

    Args:
        check_status: Raise httpx.HTTPStatusError on a non-2xx status.
            Pass False when the caller inspects error bodies itself.
    """
    response = await client.post(url, json=body, headers=JSON_HEADERS)
    logger.debug(f"POST {url} -> {response.status_code}")
    if check_status:
        response.raise_for_status()
    return response


async def get_json(
    client: httpx.AsyncClient,
    url: str,
    bearer_token: Optional[str] = None,
) -> httpx.Response:
    """GET with an optional bearer token and require a 2xx reply"""
    headers = {"Accept": "application/json"}
    if bearer_token is not None:
        headers["Authorization"] = f"Bearer {bearer_token}"
    response = await client.get(url, headers=headers)
    logger.debug(f"GET {url} -> {response.status_code}")
    response.raise_for_status()
    return response


def status_of(error: BaseException) -> Optional[int]:
    """HTTP status code carried by an httpx error, if any"""
    if isinstance(error, httpx.HTTPStatusError):
        return error.response.status_code
    return None
