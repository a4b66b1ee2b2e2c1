from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from tripplanner.core.database import get_db
from tripplanner.dependencies.auth import get_current_user
from tripplanner.models.user.user import User
from tripplanner.schemas.user.user import TokenResponse, UserCreate, UserLogin, UserOut
from tripplanner.services.auth import auth as auth_service

router = APIRouter(prefix="/auth", tags=["Auth"])

@router.post("/register", response_model=UserOut, status_code=status.HTTP_201_CREATED)
async def register(
    user: UserCreate,
    db: AsyncSession = Depends(get_db)
):
    return await auth_service.register_user(user, db)

@router.post("/login", response_model=TokenResponse)
async def login_route(
    user_data: UserLogin,
    db: AsyncSession = Depends(get_db)
):
    return await auth_service.login_user(user_data.email, user_data.password, db)

@router.get("/me", response_model=UserOut)
async def me(current_user: User = Depends(get_current_user)):
    return current_user
