"""Pydantic schemas for API requests and responses."""

from src.schemas.auth import LoginResponse, UserLogin, UserRegister
from src.schemas.user import MessageResponse, UserResponse, UserUpdate, UserUpdateResponse

__all__ = [
    "UserRegister",
    "UserLogin",
    "LoginResponse",
    "UserResponse",
    "UserUpdate",
    "UserUpdateResponse",
    "MessageResponse",
]
