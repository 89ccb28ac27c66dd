import logging
import time

import httpx
from fastapi import HTTPException, Request
from jose import jwt

from settleup.core.config import settings

logger = logging.getLogger(__name__)

_jwks_cache = None
_jwks_last_fetch = 0


async def get_jwks():
    """
    JWKS fetcher with:
    - timeout
    - cache
    - fallback to the stale cache when the provider is unreachable
    """
    global _jwks_cache, _jwks_last_fetch

    # Use cached keys if still fresh
    if _jwks_cache and time.time() - _jwks_last_fetch < settings.JWKS_TTL:
        return _jwks_cache

    try:
        async with httpx.AsyncClient(timeout=3.0) as client:
            res = await client.get(settings.JWKS_URL)
            res.raise_for_status()
            _jwks_cache = res.json()
            _jwks_last_fetch = time.time()
            return _jwks_cache

    except httpx.HTTPError as exc:
        logger.warning("JWKS fetch failed: %s", exc)
        if _jwks_cache:
            return _jwks_cache

        raise HTTPException(
            status_code=503, detail="Auth service unavailable. Try again later."
        )


def get_bearer_token(request: Request) -> str:
    auth = request.headers.get("Authorization")
    if not auth or not auth.startswith("Bearer "):
        raise HTTPException(status_code=401, detail="Missing token")
    return auth.split(" ")[1]


async def _signing_key(token: str):
    if not settings.JWKS_URL:
        return settings.JWT_SECRET, [settings.JWT_ALGO]

    unverified_header = jwt.get_unverified_header(token)
    jwks = await get_jwks()
    key = next((k for k in jwks["keys"] if k["kid"] == unverified_header.get("kid")), None)
    if key is None:
        raise HTTPException(401, "Invalid token key")
    return key, [key.get("alg", "RS256")]


async def verify_token(request: Request) -> dict:
    token = get_bearer_token(request)

    try:
        key, algorithms = await _signing_key(token)

        return jwt.decode(
            token,
            key,
            algorithms=algorithms,
            audience=settings.JWT_AUDIENCE,
        )

    except jwt.ExpiredSignatureError:
        raise HTTPException(401, "Token expired")
    except jwt.JWTError:
        raise HTTPException(401, "Invalid token")
