"""
EccoServ - User / Profile Schemas
"""
from pydantic import EmailStr, Field
from typing import Annotated, List, Optional
from datetime import datetime

from eccoserv.models import UserType
from .base import CamelModel, StrList, lenient_enum


class RegisterRequest(CamelModel):
    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=72)
    user_type: UserType


class RegisterResponse(CamelModel):
    id: str
    name: str
    email: str
    user_type: UserType


class LoginRequest(CamelModel):
    email: EmailStr
    password: str = Field(..., min_length=1)
    user_type: UserType


class ClientCreate(CamelModel):
    user_id: str
    address: Optional[str] = None
    phone: Optional[str] = Field(None, max_length=30)


class ProviderCreate(CamelModel):
    user_id: str
    specialties: List[str] = Field(default_factory=list)
    phone: Optional[str] = Field(None, max_length=30)


class UserOut(CamelModel):
    id: str
    email: str
    name: str
    user_type: Annotated[UserType, lenient_enum(UserType, UserType.CLIENT)]
    created_at: Optional[datetime] = None


class ClientOut(CamelModel):
    id: str
    user_id: str
    address: Optional[str] = None
    phone: Optional[str] = None
    created_at: Optional[datetime] = None


class ProviderOut(CamelModel):
    id: str
    user_id: str
    specialties: StrList = Field(default_factory=list)
    phone: Optional[str] = None
    created_at: Optional[datetime] = None


class PasswordResetResponse(CamelModel):
    user_id: str
    email: str
    temporary_password: str
    message: str = "Password reset successfully"
