"""
Auth / user Pydantic schemas
"""

from pydantic import BaseModel, Field

class RegisterRequest(BaseModel):
    full_name: str = Field(..., alias="fullName", min_length=1)
    email: str = Field(..., pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    password: str = Field(..., min_length=1)
    confirm_password: str = Field(..., alias="confirmPassword", min_length=1)

    class Config:
        populate_by_name = True

class LoginRequest(BaseModel):
    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)

class UserPublic(BaseModel):
    id: int
    fullName: str
    email: str

class RegisterResponse(BaseModel):
    message: str
    user: UserPublic
    token: str

class LoginData(BaseModel):
    accessToken: str
    user: UserPublic

class LoginResponse(BaseModel):
    success: bool = True
    message: str
    data: LoginData