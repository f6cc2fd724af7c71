"""Canned service responses and a routing mock transport for the sign-in hops"""

import json
from typing import Any, Callable, Dict, List, Optional, Union
from urllib.parse import parse_qs

import httpx

from mc_oauth.constants import Endpoints

ENDPOINTS = Endpoints()

PROFILE_ID = "c4bb2799e1664b6f970ca96c9e58f2d3"
PROFILE_NAME = "A_Pi"

MS_TOKEN = {
    "token_type": "Bearer",
    "scope": "XboxLive.signin offline_access",
    "expires_in": 3600,
    "ext_expires_in": 3600,
    "access_token": "ms-access-token",
    "refresh_token": "ms-refresh-token",
}

XBL_TOKEN = {
    "IssueInstant": "2024-05-01T10:00:00.0000000Z",
    "NotAfter": "2024-05-15T10:00:00.0000000Z",
    "Token": "xbl-token",
    "DisplayClaims": {"xui": [{"uhs": "1234567890"}]},
}

XSTS_TOKEN = {
    "IssueInstant": "2024-05-01T10:00:01.0000000Z",
    "NotAfter": "2024-05-02T02:00:01.0000000Z",
    "Token": "xsts-token",
    "DisplayClaims": {"xui": [{"uhs": "1234567890"}]},
}

MC_LOGIN = {
    "username": "9a1f0c1e-0000-4000-8000-000000000000",
    "roles": [],
    "access_token": "mc-access-token",
    "token_type": "Bearer",
    "expires_in": 86400,
}

PROFILE = {
    "id": PROFILE_ID,
    "name": PROFILE_NAME,
    "skins": [
        {
            "id": "6a6e65e5-76dd-4c3c-a625-162924514568",
            "state": "ACTIVE",
            "url": "http://textures.minecraft.net/texture/1a4af718455d4aab528e7a61f86fa25e6a369d1768dcb13f7df319a713eb810b",
            "variant": "CLASSIC",
            "alias": "STEVE",
        }
    ],
    "capes": [
        {
            "id": "1981aad373fa9754",
            "state": "INACTIVE",
            "url": "http://textures.minecraft.net/texture/2340c0e03dd24a11b15a8b33c2a7e9e32abb2051b2481d0ba7defd635ca7a933",
            "alias": "Migrator",
        }
    ],
}

Route = Union[tuple, Callable[[httpx.Request], Any]]


def xsts_error(xerr: int, message: str = "") -> Dict[str, Any]:
    return {
        "Identity": "0",
        "XErr": xerr,
        "Message": message,
        "Redirect": "https://start.ui.xboxlive.com/AddChildToFamily",
    }


class MockServices:
    """Routes requests to canned responses keyed by endpoint URL

    A route is either (status, payload), where a dict payload is sent as
    JSON and str/bytes as the raw body, or a callable taking the request.
    """

    def __init__(self, overrides: Optional[Dict[str, Route]] = None):
        self.routes: Dict[str, Route] = {
            ENDPOINTS.token_url: (200, MS_TOKEN),
            ENDPOINTS.refresh_url: (200, MS_TOKEN),
            ENDPOINTS.xbox_live_auth_url: (200, XBL_TOKEN),
            ENDPOINTS.xsts_auth_url: (200, XSTS_TOKEN),
            ENDPOINTS.minecraft_auth_url: (200, MC_LOGIN),
            ENDPOINTS.minecraft_profile_url: (200, PROFILE),
        }
        self.routes.update(overrides or {})
        self.requests: List[httpx.Request] = []

    def handler(self, request: httpx.Request):
        self.requests.append(request)
        url = f"{request.url.scheme}://{request.url.host}{request.url.path}"
        route = self.routes[url]
        if callable(route):
            return route(request)
        status, payload = route
        if isinstance(payload, (str, bytes)):
            return httpx.Response(status, content=payload)
        return httpx.Response(status, json=payload)

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))

    def requested_urls(self) -> List[str]:
        return [f"{r.url.scheme}://{r.url.host}{r.url.path}" for r in self.requests]

    def request_to(self, url: str) -> httpx.Request:
        for request in self.requests:
            if f"{request.url.scheme}://{request.url.host}{request.url.path}" == url:
                return request
        raise AssertionError(f"No request sent to {url}")


def form_body(request: httpx.Request) -> Dict[str, str]:
    return {k: v[0] for k, v in parse_qs(request.content.decode()).items()}


def json_body(request: httpx.Request) -> Dict[str, Any]:
    return json.loads(request.content)
