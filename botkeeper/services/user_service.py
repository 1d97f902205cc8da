"""
botkeeper/services/user_service.py

Purpose: User account management

- Registration with ordered validation
- Credential check for login
- Lookup, listing, field-level update and deletion
"""

from typing import Any, Dict, List, Optional

from botkeeper.core.config import settings
from botkeeper.core.exceptions import AuthError, ConflictError, NotFoundError, ValidationError
from botkeeper.core.logging import get_logger, LogContext
from botkeeper.db.store import get_store
from botkeeper.models.user import UserRecord
from botkeeper.utils import constants
from botkeeper.utils.validation_utils import validate_email, validate_password, validate_username

logger = get_logger(__name__)


def public_view(record: UserRecord) -> dict:
    """
    Serializes a record for a response body.

    The password is dropped unless EXPOSE_PASSWORDS is enabled.
    """
    document = record.to_document()
    if not settings.EXPOSE_PASSWORDS:
        document.pop("password", None)
    return document


def register_user(
    username: str,
    email: str,
    password: str,
    confirm_password: str,
    state: Optional[Dict[str, Any]] = None
) -> UserRecord:
    """
    Creates a new account.

    Checks run in order and the first failure wins.

    Raises:
        ValidationError: Bad username, email, password or confirmation
        ConflictError: Email already registered
    """
    if not validate_username(username):
        raise ValidationError(constants.USERNAME_TOO_SHORT)
    if not validate_email(email):
        raise ValidationError(constants.INVALID_EMAIL)
    if not validate_password(password):
        raise ValidationError(constants.PASSWORD_TOO_SHORT)
    if password != confirm_password:
        raise ValidationError(constants.PASSWORD_MISMATCH)

    with LogContext(email=email, operation="register"):
        store = get_store()
        with store.transaction() as records:
            if store.find(records, email) is not None:
                logger.warning("Registration rejected, email already taken")
                raise ConflictError(constants.USER_EXISTS)

            user = UserRecord(
                username=username,
                email=email,
                password=password,
                state=state if state is not None else {}
            )
            records.append(user)

        logger.info("New user registered")
        return user


def authenticate_user(email: str, password: str) -> UserRecord:
    """
    Checks login credentials.

    Unknown email and wrong password raise the same AuthError.

    Raises:
        ValidationError: Malformed email or short password
        AuthError: Credentials do not match a record
    """
    if not validate_email(email):
        raise ValidationError(constants.INVALID_EMAIL)
    if not validate_password(password):
        raise ValidationError(constants.PASSWORD_TOO_SHORT)

    store = get_store()
    records = store.load()
    index = store.find(records, email)

    if index is None or records[index].password != password:
        with LogContext(email=email, operation="login"):
            logger.info("Login failed")
        raise AuthError(constants.INVALID_CREDENTIALS)

    return records[index]


def list_users() -> List[UserRecord]:
    """Returns every record in stored order."""
    return get_store().load()


def get_user(email: str) -> UserRecord:
    """
    Retrieves a user by email.

    Raises:
        NotFoundError: No record with that email
    """
    store = get_store()
    records = store.load()
    index = store.find(records, email)
    if index is None:
        raise NotFoundError(constants.USER_NOT_FOUND)
    return records[index]


def update_user(
    email: str,
    username: Optional[str] = None,
    password: Optional[str] = None,
    state: Optional[Dict[str, Any]] = None
) -> UserRecord:
    """
    Overlays the supplied fields onto an existing record.

    Fields left as None keep their stored value.

    Raises:
        ValidationError: Supplied username or password too short
        NotFoundError: No record with that email
    """
    if username is not None and not validate_username(username):
        raise ValidationError(constants.USERNAME_TOO_SHORT)
    if password is not None and not validate_password(password):
        raise ValidationError(constants.PASSWORD_TOO_SHORT)

    with LogContext(email=email, operation="update"):
        store = get_store()
        with store.transaction() as records:
            index = store.find(records, email)
            if index is None:
                raise NotFoundError(constants.USER_NOT_FOUND)

            user = records[index]
            if username is not None:
                user.username = username
            if password is not None:
                user.password = password
            if state is not None:
                user.state = state

        logger.info("User updated")
        return user


def delete_user(email: str) -> None:
    """
    Removes a user by email.

    Raises:
        NotFoundError: No record with that email
    """
    with LogContext(email=email, operation="delete"):
        store = get_store()
        with store.transaction() as records:
            index = store.find(records, email)
            if index is None:
                raise NotFoundError(constants.USER_NOT_FOUND)
            del records[index]

        logger.info("User deleted")
