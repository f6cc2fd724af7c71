"""Data models for Microsoft / Xbox Live / Minecraft authentication

Wire schemas are pydantic models. The Xbox Live and XSTS endpoints use
PascalCase keys, Microsoft and Minecraft use snake_case; aliases keep the
wire names exact while the Python attributes stay snake_case.
"""

import datetime
import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from .constants import (
    IDENTITY_TOKEN_SCHEME,
    XBOX_LIVE_RELYING_PARTY,
    XBOX_LIVE_SITE_NAME,
    XSTS_RELYING_PARTY,
    XSTS_SANDBOX_ID,
)


# Microsoft OAuth

class MicrosoftTokenResponse(BaseModel):
    """Token endpoint response for authorization_code and refresh_token grants"""
    access_token: str
    token_type: str
    expires_in: int
    scope: str
    refresh_token: Optional[str] = None
    ext_expires_in: Optional[int] = None


# Xbox Live / XSTS

class _PascalModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class XboxLiveProperties(_PascalModel):
    auth_method: str = Field(default="RPS", alias="AuthMethod")
    site_name: str = Field(default=XBOX_LIVE_SITE_NAME, alias="SiteName")
    rps_ticket: str = Field(alias="RpsTicket")


class XboxLiveAuthRequest(_PascalModel):
    """Xbox Live user authenticate request"""
    properties: XboxLiveProperties = Field(alias="Properties")
    relying_party: str = Field(default=XBOX_LIVE_RELYING_PARTY, alias="RelyingParty")
    token_type: str = Field(default="JWT", alias="TokenType")

    @classmethod
    def for_access_token(cls, access_token: str) -> "XboxLiveAuthRequest":
        return cls(properties=XboxLiveProperties(rps_ticket=f"d={access_token}"))


class XSTSProperties(_PascalModel):
    sandbox_id: str = Field(default=XSTS_SANDBOX_ID, alias="SandboxId")
    user_tokens: List[str] = Field(alias="UserTokens")


class XSTSAuthRequest(_PascalModel):
    """XSTS authorize request"""
    properties: XSTSProperties = Field(alias="Properties")
    relying_party: str = Field(default=XSTS_RELYING_PARTY, alias="RelyingParty")
    token_type: str = Field(default="JWT", alias="TokenType")

    @classmethod
    def for_xbox_live_token(cls, xbl_token: str) -> "XSTSAuthRequest":
        return cls(properties=XSTSProperties(user_tokens=[xbl_token]))


class XUIClaim(BaseModel):
    uhs: str


class DisplayClaims(BaseModel):
    xui: List[XUIClaim] = Field(min_length=1)


class XboxLiveAuthResponse(_PascalModel):
    """Xbox Live and XSTS token response (both endpoints share this shape)"""
    issue_instant: str = Field(alias="IssueInstant")
    not_after: str = Field(alias="NotAfter")
    token: str = Field(alias="Token")
    display_claims: DisplayClaims = Field(alias="DisplayClaims")

    @property
    def user_hash(self) -> str:
        return self.display_claims.xui[0].uhs


XSTSAuthResponse = XboxLiveAuthResponse


class XSTSErrorResponse(_PascalModel):
    """Error body returned by XSTS when authorization is refused"""
    identity: Optional[str] = Field(default=None, alias="Identity")
    xerr: Optional[int] = Field(default=None, alias="XErr")
    message: Optional[str] = Field(default=None, alias="Message")
    redirect: Optional[str] = Field(default=None, alias="Redirect")


# Minecraft services

class MinecraftAuthRequest(BaseModel):
    """login_with_xbox request"""
    identityToken: str

    @classmethod
    def from_xsts(cls, user_hash: str, xsts_token: str) -> "MinecraftAuthRequest":
        return cls(identityToken=f"{IDENTITY_TOKEN_SCHEME} x={user_hash};{xsts_token}")


class MinecraftAuthResponse(BaseModel):
    """login_with_xbox response"""
    access_token: str
    token_type: str
    expires_in: int
    username: Optional[str] = None
    roles: Optional[List[Any]] = None


class TextureState(str, Enum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"


class SkinMetadata(BaseModel):
    model: str


class SkinInfo(BaseModel):
    """Skin owned by a profile"""
    id: str
    url: str
    state: TextureState = TextureState.ACTIVE
    variant: Optional[str] = None
    alias: Optional[str] = None
    metadata: Optional[SkinMetadata] = None


class CapeInfo(BaseModel):
    """Cape owned by a profile"""
    id: str
    url: str
    state: TextureState = TextureState.ACTIVE
    alias: Optional[str] = None


class MinecraftProfile(BaseModel):
    """Minecraft profile response"""
    id: str
    name: str
    skins: Optional[List[SkinInfo]] = None
    capes: Optional[List[CapeInfo]] = None


# Flow data

class LoginStep(str, Enum):
    """Progress markers emitted by the orchestrator, in flow order"""
    EXCHANGING_CODE = "exchanging_code"
    REFRESHING_TOKEN = "refreshing_token"
    AUTHENTICATING_XBOX_LIVE = "authenticating_xbox_live"
    AUTHENTICATING_XSTS = "authenticating_xsts"
    AUTHENTICATING_MINECRAFT = "authenticating_minecraft"
    FETCHING_PROFILE = "fetching_profile"
    COMPLETE = "complete"


@dataclass(frozen=True)
class LoginSession:
    """Data the caller must keep across the browser round-trip

    Attributes:
        url: Authorization URL to open in the browser
        state: CSRF token that must come back unchanged in the callback
        code_verifier: PKCE verifier for complete_login
    """
    url: str
    state: str
    code_verifier: str


def _utcnow() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc)


@dataclass(frozen=True)
class CompleteLoginResult:
    """Outcome of a successful login or refresh

    Attributes:
        profile_id: Minecraft profile UUID (undashed hex, as returned by the service)
        profile_name: Minecraft username
        access_token: Minecraft services bearer token
        refresh_token: Microsoft refresh token for refresh_login
        skins: Skins owned by the profile
        capes: Capes owned by the profile
        issued_at: UTC time the result was assembled
    """
    profile_id: str
    profile_name: str
    access_token: str
    refresh_token: str
    skins: Tuple[SkinInfo, ...] = ()
    capes: Tuple[CapeInfo, ...] = ()
    issued_at: datetime.datetime = field(default_factory=_utcnow)

    @property
    def profile_uuid(self) -> uuid.UUID:
        """Profile id as a UUID; accepts both dashed and undashed forms"""
        return uuid.UUID(self.profile_id)

    @property
    def active_skin(self) -> Optional[SkinInfo]:
        for skin in self.skins:
            if skin.state == TextureState.ACTIVE:
                return skin
        return None

    @classmethod
    def from_profile(
        cls,
        profile: MinecraftProfile,
        access_token: str,
        refresh_token: str,
    ) -> "CompleteLoginResult":
        return cls(
            profile_id=profile.id,
            profile_name=profile.name,
            access_token=access_token,
            refresh_token=refresh_token,
            skins=tuple(profile.skins or ()),
            capes=tuple(profile.capes or ()),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-safe dictionary for caller-side storage"""
        return {
            "profile_id": self.profile_id,
            "profile_name": self.profile_name,
            "access_token": self.access_token,
            "refresh_token": self.refresh_token,
            "skins": [skin.model_dump(mode="json") for skin in self.skins],
            "capes": [cape.model_dump(mode="json") for cape in self.capes],
            "issued_at": self.issued_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CompleteLoginResult":
        """Load from a dictionary produced by to_dict"""
        return cls(
            profile_id=data["profile_id"],
            profile_name=data["profile_name"],
            access_token=data["access_token"],
            refresh_token=data["refresh_token"],
            skins=tuple(SkinInfo.model_validate(s) for s in data.get("skins", [])),
            capes=tuple(CapeInfo.model_validate(c) for c in data.get("capes", [])),
            issued_at=datetime.datetime.fromisoformat(data["issued_at"]),
        )
