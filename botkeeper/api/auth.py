"""
botkeeper/api/auth.py

Purpose: Registration and login endpoints

- Parses request bodies
- Delegates to the user service
- Errors are translated by the registered exception handlers
"""

from fastapi import APIRouter

from botkeeper.schemas.response import MessageResponse
from botkeeper.schemas.user import LoginRequest, RegisterRequest
from botkeeper.services import user_service
from botkeeper.utils import constants

router = APIRouter()


@router.post("/register", status_code=201, response_model=MessageResponse)
def register(request: RegisterRequest):
    """
    Register a new account.

    Raises:
        400: Validation failure or email already registered
    """
    user_service.register_user(
        username=request.username,
        email=request.email,
        password=request.password,
        confirm_password=request.confirm_password,
        state=request.state
    )
    return {"message": constants.REGISTRATION_SUCCESS}


@router.post("/login")
def login(request: LoginRequest):
    """
    Check credentials and return the matching user.

    Raises:
        400: Malformed email or short password
        401: Unknown email or wrong password
    """
    user = user_service.authenticate_user(request.email, request.password)
    return {"message": constants.LOGIN_SUCCESS, "user": user_service.public_view(user)}
