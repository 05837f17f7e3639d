from typing import Optional
from pydantic import BaseModel


class LoginRequest(BaseModel):
    username: Optional[str] = None
    password: Optional[str] = None


class CredentialsUpdate(BaseModel):
    currentPassword: Optional[str] = None
    newUsername: Optional[str] = None
    newPassword: Optional[str] = None


class AdminRead(BaseModel):
    username: str
