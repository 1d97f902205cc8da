"""
botkeeper/api/users.py

Purpose: User record endpoints

- Listing and lookup by email
- Field-level update
- Deletion
"""

from fastapi import APIRouter

from botkeeper.schemas.response import MessageResponse
from botkeeper.schemas.user import UpdateUserRequest
from botkeeper.services import user_service
from botkeeper.utils import constants

router = APIRouter(prefix="/users")


@router.get("")
def list_users():
    """Return every user record in registration order."""
    return [user_service.public_view(user) for user in user_service.list_users()]


@router.get("/{email}")
def get_user(email: str):
    """
    Get one user by email.

    Raises:
        404: User not found
    """
    return user_service.public_view(user_service.get_user(email))


@router.put("/{email}")
def update_user(email: str, request: UpdateUserRequest):
    """
    Overlay any of username, password and state onto the stored user.

    Raises:
        400: Supplied username or password too short
        404: User not found
    """
    user = user_service.update_user(
        email,
        username=request.username,
        password=request.password,
        state=request.state
    )
    return {"message": constants.USER_UPDATED, "updatedUser": user_service.public_view(user)}


@router.delete("/{email}", response_model=MessageResponse)
def delete_user(email: str):
    """
    Delete a user by email.

    Raises:
        404: User not found
    """
    user_service.delete_user(email)
    return {"message": constants.USER_DELETED}
