"""FastAPI dependency chain: JWT → User, plus the admin gate for site settings."""

import logging
from collections.abc import AsyncGenerator

from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.exceptions import ForbiddenError
from app.core.security import claim_groups, decode_access_token
from app.db.session import async_session_factory
from app.models.user import User

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Yield an async DB session. Commits on success, rolls back on error."""
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def get_current_user_claims(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> dict:
    """Extract and verify the Bearer token, returning JWT claims."""
    if credentials is None:
        raise HTTPException(status_code=401, detail="Missing authorization header")

    try:
        claims = await decode_access_token(credentials.credentials)
    except JWTError as e:
        raise HTTPException(status_code=401, detail=f"Invalid token: {e}") from e

    return claims


async def get_current_user(
    claims: dict = Depends(get_current_user_claims),
    db: AsyncSession = Depends(get_db),
) -> User:
    """Resolve cognito_sub from JWT claims to a User row.

    Auto-provisions the user if they exist in Cognito but not yet in our DB.
    """
    cognito_sub = claims.get("sub")
    if not cognito_sub:
        raise HTTPException(status_code=401, detail="Token missing sub claim")

    result = await db.execute(select(User).where(User.cognito_sub == cognito_sub))
    user = result.scalar_one_or_none()

    if user is None:
        user = User(
            cognito_sub=cognito_sub,
            email=claims.get("email"),
            full_name=claims.get("name"),
        )
        db.add(user)
        await db.flush()
        logger.info("Provisioned user %s for sub %s", user.id, cognito_sub)

    if not user.is_active:
        raise HTTPException(status_code=403, detail="User account is deactivated")

    return user


async def require_admin(
    claims: dict = Depends(get_current_user_claims),
    user: User = Depends(get_current_user),
) -> User:
    """Allow only members of the configured Cognito admin group."""
    if settings.ADMIN_GROUP not in claim_groups(claims):
        raise ForbiddenError(f"Requires membership in the '{settings.ADMIN_GROUP}' group")
    return user
