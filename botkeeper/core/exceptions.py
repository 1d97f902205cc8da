from typing import Optional, Any


class BotkeeperError(Exception):
    """
    Base exception for Botkeeper application.
    """
    def __init__(self, message: str, code: str = "INTERNAL_ERROR", status_code: int = 500, details: Optional[Any] = None):
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)


class ValidationError(BotkeeperError):
    """
    Raised when request input is malformed.
    """
    def __init__(self, message: str = "Validation error", details: Optional[Any] = None):
        super().__init__(message, code="VALIDATION_ERROR", status_code=400, details=details)


class ConflictError(BotkeeperError):
    """
    Raised when a write would duplicate a unique key.
    """
    def __init__(self, message: str = "Resource already exists", details: Optional[Any] = None):
        super().__init__(message, code="CONFLICT", status_code=400, details=details)


class AuthError(BotkeeperError):
    """
    Raised when credentials do not match.
    """
    def __init__(self, message: str = "Authentication failed", details: Optional[Any] = None):
        super().__init__(message, code="AUTHENTICATION_FAILED", status_code=401, details=details)


class NotFoundError(BotkeeperError):
    """
    Raised when a requested resource is not found.
    """
    def __init__(self, message: str = "Resource not found", details: Optional[Any] = None):
        super().__init__(message, code="NOT_FOUND", status_code=404, details=details)


class StoreError(BotkeeperError):
    """
    Base class for record store failures.
    """
    def __init__(self, message: str, code: str = "STORE_ERROR", details: Optional[Any] = None):
        super().__init__(message, code=code, status_code=500, details=details)


class StoreIOError(StoreError):
    """
    Raised when the users file cannot be read or written.
    """
    def __init__(self, message: str = "Record store is unavailable", details: Optional[Any] = None):
        super().__init__(message, code="STORE_IO_ERROR", details=details)


class CorruptStoreError(StoreError):
    """
    Raised when the users file holds content that is not a valid record collection.
    """
    def __init__(self, message: str = "Record store is corrupt", details: Optional[Any] = None):
        super().__init__(message, code="STORE_CORRUPT", details=details)
