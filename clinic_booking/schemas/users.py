# clinic_booking/schemas/users.py

from typing import Optional
from pydantic import BaseModel


class UserCreate(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None


class UserLogin(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class UserRead(BaseModel):
    id: int
    name: str
    email: str
    role: str

    model_config = {"from_attributes": True}


class UserRegistered(BaseModel):
    message: str
    user: UserRead


class TokenResponse(BaseModel):
    token: str
    user: UserRead
