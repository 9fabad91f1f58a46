"""
JWT Authentication middleware.

Validates Supabase JWT tokens and turns their claims into an
AuthenticatedUser. Players sign in with Google, Facebook or email; the
provider and the profile fields the provider shares travel in the token.
"""

from typing import Optional
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import jwt, JWTError
from datetime import datetime, timezone

from shared.config import get_settings
from shared.models import AuthenticatedUser, TokenPayload

KNOWN_PROVIDERS = ("google", "facebook", "email")

# Bearer token extractor
bearer_scheme = HTTPBearer(auto_error=False)


class AuthError(HTTPException):
    """401 with a Bearer challenge."""

    def __init__(self, detail: str):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )


def decode_token(token: str) -> TokenPayload:
    """
    Verify a Supabase access token (HS256, audience "authenticated").

    Raises:
        AuthError: If the secret is not configured, or the token is
            expired, malformed or signed with another key
    """
    secret = get_settings().supabase_jwt_secret
    if not secret:
        raise AuthError("Server authentication not configured")

    try:
        claims = jwt.decode(token, secret, algorithms=["HS256"], audience="authenticated")
    except jwt.ExpiredSignatureError:
        raise AuthError("Token has expired")
    except JWTError as e:
        raise AuthError(f"Invalid token: {str(e)}")
    return TokenPayload(**claims)


def get_user_from_payload(payload: TokenPayload) -> AuthenticatedUser:
    """
    Map token claims to an AuthenticatedUser.

    Email sign-up stores the chosen name as display_name; Google and
    Facebook put it under full_name (or name) and the picture under
    avatar_url (or picture). Unknown providers count as email.
    """
    metadata = payload.user_metadata
    provider = payload.app_metadata.get("provider", "email")
    return AuthenticatedUser(
        id=payload.sub,
        email=payload.email,
        email_verified=payload.email_confirmed_at is not None,
        display_name=metadata.get("display_name") or metadata.get("full_name") or metadata.get("name"),
        photo_url=metadata.get("avatar_url") or metadata.get("picture"),
        provider=provider if provider in KNOWN_PROVIDERS else "email",
        last_sign_in=datetime.fromtimestamp(payload.iat, tz=timezone.utc),
    )


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> AuthenticatedUser:
    """
    Dependency that requires a signed-in player.

    Game routes normally depend on api.dependencies.get_current_player,
    which builds on this and resolves the game profile.
    """
    if credentials is None:
        raise AuthError("Missing authorization header")

    return get_user_from_payload(decode_token(credentials.credentials))
