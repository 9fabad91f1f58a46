"""
Shared data models used across modules.

These models are shared infrastructure, not business logic.
Module-specific models should stay in their respective module directories.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, EmailStr, Field


class AuthenticatedUser(BaseModel):
    """
    Represents an authenticated player.

    Populated from the JWT claims issued by the identity provider and made
    available to route handlers via dependency injection. Game state (lives,
    scores, badges) lives on the profile in modules.users, not here.
    """

    id: str = Field(..., description="User ID (UUID from Supabase)")
    email: EmailStr = Field(..., description="User's email address")
    email_verified: bool = Field(default=False, description="Whether email is verified")
    display_name: Optional[str] = Field(None, description="Name from the token metadata")
    photo_url: Optional[str] = Field(None, description="Avatar from the social provider")
    provider: str = Field(default="email", description="Sign-in provider (google, facebook, email)")

    last_sign_in: Optional[datetime] = Field(None, description="Token issue time")

    model_config = {
        "frozen": True,  # Make immutable for safety
        "extra": "ignore",  # Ignore extra fields from JWT
    }


class TokenPayload(BaseModel):
    """JWT token payload structure."""

    sub: str  # User ID
    email: str
    email_confirmed_at: Optional[str] = None
    user_metadata: dict = Field(default_factory=dict)
    app_metadata: dict = Field(default_factory=dict)
    aud: str  # Audience
    exp: int  # Expiration timestamp
    iat: int  # Issued at timestamp
