"""
Sessions module data models.
"""

from datetime import datetime

from pydantic import BaseModel, Field


class Session(BaseModel):
    """
    A persisted session row.

    Only the SHA-256 digest of the token is stored, so a leaked sessions
    table cannot be replayed as cookies.
    """

    token_digest: str = Field(..., description="SHA-256 hex digest of the opaque token")
    user_id: str = Field(..., description="Owner of the session")
    created_at: datetime = Field(..., description="Issued at")
    expires_at: datetime = Field(..., description="Fixed expiry; sessions are not renewed")

    def is_expired(self, now: datetime) -> bool:
        return now >= self.expires_at


class SessionToken(BaseModel):
    """
    An issued session, as handed to the HTTP layer.

    `token` is the only copy of the secret; it goes into the cookie.
    """

    token: str = Field(..., description="Opaque session token")
    user_id: str = Field(..., description="Owner of the session")
    expires_at: datetime = Field(..., description="Expiry (also the cookie's lifetime)")

    model_config = {"frozen": True}
