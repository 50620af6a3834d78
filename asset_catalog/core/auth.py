"""Authentication dependencies for FastAPI routes.

Callers may present a bearer JWT signed with the configured secret. Without
a token the caller is the anonymous user, unless anonymous access is
disabled in settings.
"""

from typing import Optional

import jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import ValidationError as PydanticValidationError

from asset_catalog.core.config import settings
from asset_catalog.core.exceptions import ConfigurationError
from asset_catalog.schemas.auth import CurrentUser, JWTClaims
from asset_catalog.utils.logging import get_logger

LOGGER = get_logger(__name__)

# HTTP Bearer token scheme
security = HTTPBearer(auto_error=False)


def decode_token(token: str) -> JWTClaims:
    """Verify a bearer token and return its claims.

    Raises:
        ConfigurationError: If no signing secret is configured
        jwt.InvalidTokenError: If the token is malformed, expired or badly signed
    """
    if not settings.auth.jwt_secret:
        raise ConfigurationError("AUTH_JWT_SECRET is not configured")

    audience = settings.auth.jwt_audience
    payload = jwt.decode(
        token,
        settings.auth.jwt_secret,
        algorithms=[settings.auth.jwt_algorithm],
        audience=audience,
        options={"verify_aud": bool(audience)},
    )
    try:
        return JWTClaims(**payload)
    except PydanticValidationError as e:
        raise jwt.InvalidTokenError(f"Token claims are incomplete: {e}") from e


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> CurrentUser:
    """Resolve the caller from the Authorization header.

    Args:
        credentials: HTTP Authorization credentials (automatically injected)

    Returns:
        CurrentUser: Token subject, or the anonymous user when no token is sent

    Raises:
        HTTPException: If the token is invalid, or missing while anonymous access is off
    """
    if not credentials:
        if settings.auth.allow_anonymous:
            return CurrentUser.anonymous()

        LOGGER.warning("No authorization credentials provided")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authorization header missing",
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        claims = decode_token(credentials.credentials)
    except jwt.InvalidTokenError as e:
        LOGGER.warning(f"Invalid token: {e}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authentication token",
            headers={"WWW-Authenticate": "Bearer"},
        ) from e
    except ConfigurationError as e:
        LOGGER.error(f"Token verification unavailable: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Authentication service error",
        ) from e

    user = CurrentUser(id=claims.sub, email=claims.email, role=claims.role or "user")
    LOGGER.debug(f"Authenticated user: {user.id}")
    return user
