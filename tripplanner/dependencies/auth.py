from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from tripplanner.core.database import get_db
from tripplanner.core.exceptions import UnauthenticatedError
from tripplanner.core.security import decode_access_token
from tripplanner.models.user.user import User

# auto_error=False so a missing header yields 401 rather than FastAPI's 403
security = HTTPBearer(auto_error=False)


class Identity(BaseModel):
    """Verified caller, resolved once per request and passed to every service call."""
    user_id: int
    email: str


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: AsyncSession = Depends(get_db)
) -> User:
    if credentials is None:
        raise UnauthenticatedError("Not authenticated")

    payload = decode_access_token(credentials.credentials)
    if payload is None:
        raise UnauthenticatedError()

    # Tokens carry the user id; older ones may only carry the email
    subject = payload.get("sub")
    email = payload.get("email")
    if subject is not None:
        try:
            stmt = select(User).where(User.id == int(subject))
        except (TypeError, ValueError):
            raise UnauthenticatedError()
    elif email:
        stmt = select(User).where(User.email == email)
    else:
        raise UnauthenticatedError()

    user = await db.scalar(stmt)
    if user is None or not user.is_active:
        raise UnauthenticatedError()
    return user


async def get_identity(user: User = Depends(get_current_user)) -> Identity:
    return Identity(user_id=user.id, email=user.email)
