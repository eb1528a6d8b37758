"""
User schemas.
"""
from pydantic import BaseModel, Field
from uuid import UUID
from typing import Optional
from spaceledger.models.user import UserRole


class UserCreate(BaseModel):
    username: str = Field(..., min_length=1)
    email: str = Field(..., min_length=3)
    password: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    role: UserRole = UserRole.USER
    wallet_address: Optional[str] = None


class LoginRequest(BaseModel):
    username: Optional[str] = None
    password: Optional[str] = None
    wallet_address: Optional[str] = None


class UserResponse(BaseModel):
    id: UUID
    username: str
    email: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    role: UserRole
    wallet_address: Optional[str] = None

    class Config:
        from_attributes = True
