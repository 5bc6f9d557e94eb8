"""Bearer token verification for page owners and site admins.

Two modes: real Cognito access tokens checked against the pool's JWKS, or
HS256 tokens signed with SECRET_KEY when COGNITO_MOCK is on (local dev, tests).
Only the resulting claims leave this module; identity is trusted from them.
"""

import time

import httpx
from jose import JWTError, jwt

from app.core.config import settings

GROUPS_CLAIM = "cognito:groups"
JWKS_TTL_SECONDS = 3600

_jwks: dict | None = None
_jwks_loaded_at: float = 0.0


def _issuer() -> str:
    return (
        f"https://cognito-idp.{settings.COGNITO_REGION}.amazonaws.com"
        f"/{settings.COGNITO_USER_POOL_ID}"
    )


async def _signing_keys() -> dict:
    """Pool JWKS, refetched at most once per JWKS_TTL_SECONDS."""
    global _jwks, _jwks_loaded_at
    if _jwks is not None and (time.time() - _jwks_loaded_at) <= JWKS_TTL_SECONDS:
        return _jwks

    async with httpx.AsyncClient(timeout=10.0) as client:
        resp = await client.get(f"{_issuer()}/.well-known/jwks.json")
        resp.raise_for_status()
    _jwks = resp.json()
    _jwks_loaded_at = time.time()
    return _jwks


async def decode_access_token(token: str) -> dict:
    """Verify ``token`` and return its claims. Raises JWTError when invalid."""
    if settings.COGNITO_MOCK:
        return jwt.decode(
            token,
            settings.SECRET_KEY,
            algorithms=["HS256"],
            options={"verify_aud": False, "verify_iss": False},
        )

    kid = jwt.get_unverified_header(token).get("kid")
    keys = (await _signing_keys()).get("keys", [])
    key = next((k for k in keys if k.get("kid") == kid), None)
    if key is None:
        raise JWTError("Key not found in JWKS")

    claims = jwt.decode(
        token,
        key,
        algorithms=["RS256"],
        audience=settings.COGNITO_CLIENT_ID,
        issuer=_issuer(),
        options={"verify_at_hash": False},
    )
    if claims.get("token_use") != "access":
        raise JWTError("Not an access token")
    return claims


def claim_groups(claims: dict) -> list[str]:
    groups = claims.get(GROUPS_CLAIM) or []
    return [g for g in groups if isinstance(g, str)]


def create_mock_access_token(
    sub: str,
    email: str = "test@example.com",
    expires_in: int = 900,
    groups: list[str] | None = None,
) -> str:
    """Create a mock JWT for testing. Only usable when COGNITO_MOCK=true."""
    now = int(time.time())
    payload: dict = {
        "sub": sub,
        "email": email,
        "token_use": "access",
        "iat": now,
        "exp": now + expires_in,
    }
    if groups:
        payload[GROUPS_CLAIM] = groups
    return jwt.encode(payload, settings.SECRET_KEY, algorithm="HS256")
