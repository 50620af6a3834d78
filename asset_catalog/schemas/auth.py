"""Authentication schemas for bearer JWT tokens."""

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field

ANONYMOUS_USER_ID = "anonymous"


class JWTClaims(BaseModel):
    """Claims read from a verified access token."""

    sub: str = Field(..., description="Subject (user ID)")
    email: Optional[str] = Field(None, description="User email")
    role: Optional[str] = Field(None, description="User role")
    exp: Optional[int] = Field(None, description="Expiration timestamp")
    app_metadata: Optional[Dict[str, Any]] = Field(None, description="Application metadata")


class CurrentUser(BaseModel):
    """Caller identity used to stamp asset ownership."""

    id: str = Field(..., description="User ID")
    email: Optional[str] = Field(None, description="User email")
    role: str = Field(default="user", description="User role")
    is_anonymous: bool = Field(default=False, description="Caller did not present a token")

    @classmethod
    def anonymous(cls) -> "CurrentUser":
        return cls(id=ANONYMOUS_USER_ID, role="anonymous", is_anonymous=True)
