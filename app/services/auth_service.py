"""
Auth Service
Registration and login backed by hashed passwords and JWT access tokens
"""

import logging
from typing import Dict

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import Conflict, Unauthorized, ValidationFailed, guard_service
from app.core.security import create_access_token, get_password_hash, verify_password
from app.models.user import User
from app.schemas.user import LoginRequest, RegisterRequest

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Incorrect email or password."


class AuthService:

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _username_taken(self, username: str) -> bool:
        result = await self.db.execute(select(User.id).where(User.username == username))
        return result.scalar_one_or_none() is not None

    async def unique_username(self, email: str) -> str:
        """
        Username derived from the e-mail local part, suffixed 1, 2, ...
        until it no longer collides
        """
        base = email.split('@')[0]
        username = base
        counter = 1
        while await self._username_taken(username):
            username = f"{base}{counter}"
            counter += 1
        return username

    @staticmethod
    def _public_user(user: User) -> Dict:
        return {'id': user.id, 'fullName': user.full_name, 'email': user.email}

    @guard_service("A system error occurred during registration. Please try again later.")
    async def register(self, payload: RegisterRequest) -> Dict:
        if payload.password != payload.confirm_password:
            raise ValidationFailed("Passwords do not match.")

        existing = await self.db.execute(select(User.id).where(User.email == payload.email))
        if existing.scalar_one_or_none() is not None:
            raise Conflict("This email is already registered.")

        user = User(
            full_name=payload.full_name,
            email=payload.email,
            username=await self.unique_username(payload.email),
            hashed_password=get_password_hash(payload.password),
            total_balance=0
        )
        self.db.add(user)
        await self.db.commit()
        await self.db.refresh(user)

        logger.info("Registered user %s as %s", user.id, user.username)

        return {
            'message': 'Registration successful',
            'user': self._public_user(user),
            'token': create_access_token(user.id, {'email': user.email})
        }

    @guard_service("A system error occurred during login. Please try again later.")
    async def login(self, payload: LoginRequest) -> Dict:
        result = await self.db.execute(select(User).where(User.email == payload.email))
        user = result.scalar_one_or_none()

        if not user or not verify_password(payload.password, user.hashed_password):
            raise Unauthorized(INVALID_CREDENTIALS)

        return {
            'accessToken': create_access_token(user.id, {'email': user.email}),
            'user': self._public_user(user)
        }
