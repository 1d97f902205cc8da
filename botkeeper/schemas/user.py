"""
botkeeper/schemas/user.py

Purpose: Request bodies for the account endpoints

Missing registration/login fields default to empty strings so they fail
their own ordered check in the service layer.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class RegisterRequest(BaseModel):
    """Body of POST /register."""
    model_config = ConfigDict(populate_by_name=True)

    username: str = ""
    email: str = ""
    password: str = ""
    confirm_password: str = Field(default="", alias="confirmPassword")
    state: Optional[Dict[str, Any]] = None


class LoginRequest(BaseModel):
    """Body of POST /login."""
    email: str = ""
    password: str = ""


class UpdateUserRequest(BaseModel):
    """Body of PUT /users/{email}. Any subset of the fields may be sent."""
    username: Optional[str] = None
    password: Optional[str] = None
    state: Optional[Dict[str, Any]] = None
