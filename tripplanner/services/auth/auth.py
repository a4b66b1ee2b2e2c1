from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from fastapi import HTTPException

from tripplanner.core.exceptions import UnauthenticatedError
from tripplanner.core.logger import logger
from tripplanner.core.security import create_access_token, hash_password, verify_password
from tripplanner.models.user.user import User
from tripplanner.schemas.user.user import TokenResponse, UserCreate


async def register_user(user_data: UserCreate, db: AsyncSession) -> User:
    result = await db.execute(select(User).where(User.email == user_data.email))
    if result.scalar():
        raise HTTPException(status_code=400, detail="Email already registered")

    result = await db.execute(select(User).where(User.username == user_data.username))
    if result.scalar():
        raise HTTPException(status_code=400, detail="Username already taken")

    new_user = User(
        email=user_data.email,
        username=user_data.username,
        hashed_password=hash_password(user_data.password),
    )
    db.add(new_user)
    try:
        await db.commit()
        await db.refresh(new_user)
    except IntegrityError:
        # Lost a race with a concurrent registration
        await db.rollback()
        raise HTTPException(status_code=400, detail="Email or username already exists")

    logger.info(f"User {new_user.id} registered")
    return new_user


async def login_user(email: str, password: str, db: AsyncSession) -> TokenResponse:
    result = await db.execute(select(User).where(User.email == email))
    user = result.scalar()

    if not user or not verify_password(password, user.hashed_password):
        logger.warning(f"Failed login for {email}")
        raise UnauthenticatedError("Invalid credentials")
    if not user.is_active:
        raise UnauthenticatedError("Account is disabled")

    token = create_access_token(data={"sub": str(user.id), "email": user.email})
    return TokenResponse(access_token=token)
