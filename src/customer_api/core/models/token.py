"""Verified token claims."""

from typing import Any

from pydantic import BaseModel, Field


class TokenClaims(BaseModel):
    """Claims extracted from a verified bearer token."""

    token: str = Field(description="The raw token", repr=False)
    subject: str = Field(description="Subject (sub) claim - the customer email")
    issuer: str | None = Field(default=None, description="Issuer (iss) claim")
    issued_at: int | None = Field(default=None, description="Issued-at (iat) claim")
    expires_at: int = Field(description="Expiry (exp) claim")
    scopes: list[str] = Field(default_factory=list, description="Granted scopes")
    custom_claims: dict[str, Any] = Field(
        default_factory=dict, description="Any non-registered claims"
    )
