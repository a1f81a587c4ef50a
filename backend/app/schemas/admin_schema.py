from pydantic import BaseModel, EmailStr, Field
from typing import Literal, Optional

class LoginRequest(BaseModel):
    email: EmailStr
    password: str

class AdminOut(BaseModel):
    id: str
    email: str
    name: Optional[str] = None

class LoginResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    admin: AdminOut

class PasswordChange(BaseModel):
    current_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=1)

class MoveRequest(BaseModel):
    """Swap sort order with the neighbouring record"""
    direction: Literal["up", "down"]
