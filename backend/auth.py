"""
Bearer token verification for the creations API.

Identity always comes from the token's ``sub`` claim, never from request
bodies.
"""

from __future__ import annotations

import logging
from functools import lru_cache

import jwt
from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jwt import PyJWKClient

from backend.config import Settings, get_settings

logger = logging.getLogger(__name__)

_bearer = HTTPBearer(auto_error=False)


@lru_cache(maxsize=4)
def _jwks_client(url: str) -> PyJWKClient:
    return PyJWKClient(url)


def decode_token(token: str, settings: Settings) -> dict:
    """Verify a bearer token and return its claims.

    RS256 tokens are checked against ``settings.jwks_url`` when it is set;
    otherwise the token must be signed with ``settings.jwt_secret``.

    Raises:
        ValueError: If the token cannot be verified.
    """
    options = {
        "verify_aud": settings.jwt_audience is not None,
        "verify_iss": settings.jwt_issuer is not None,
    }
    try:
        if settings.jwks_url:
            key = _jwks_client(settings.jwks_url).get_signing_key_from_jwt(token).key
            algorithms = ["RS256"]
        elif settings.jwt_secret:
            key = settings.jwt_secret
            algorithms = [settings.jwt_algorithm]
        else:
            raise ValueError("No token verification key configured")
        return jwt.decode(
            token,
            key=key,
            algorithms=algorithms,
            audience=settings.jwt_audience,
            issuer=settings.jwt_issuer,
            leeway=settings.jwt_leeway_seconds,
            options=options,
        )
    except jwt.PyJWTError as e:
        raise ValueError(f"Token decode error: {e}") from e


def get_current_user_id(
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer),
    settings: Settings = Depends(get_settings),
) -> str:
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise HTTPException(status_code=401, detail="Missing bearer token")
    try:
        claims = decode_token(credentials.credentials, settings)
    except ValueError as e:
        logger.info("Rejected bearer token: %s", e)
        raise HTTPException(status_code=401, detail="Invalid bearer token")
    user_id = claims.get("sub")
    if not user_id:
        raise HTTPException(status_code=401, detail="Token has no subject")
    return str(user_id)
