"""
Auth API Endpoints
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_db
from app.schemas.user import LoginRequest, LoginResponse, RegisterRequest, RegisterResponse
from app.services.auth_service import AuthService

router = APIRouter()

@router.post("/login", response_model=LoginResponse)
async def login(
    credentials: LoginRequest,
    db: AsyncSession = Depends(get_db)
):
    """
    Exchange e-mail and password for an access token
    """
    data = await AuthService(db).login(credentials)
    return {"success": True, "message": "Login successful", "data": data}

@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
async def register(
    user: RegisterRequest,
    db: AsyncSession = Depends(get_db)
):
    """
    Create a user account
    """
    return await AuthService(db).register(user)
