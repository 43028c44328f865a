# File: winajaya/core/errors.py

"""
Error taxonomy for the API and the JSON bodies the server answers with.

Service-level errors are translated into HTTPExceptions by the routes.
Anything else that escapes a request ends up in one of the two response
builders below.
"""

from fastapi.responses import JSONResponse

from winajaya.core.config import Settings

CORS_REJECTION_MESSAGE = "Not allowed by CORS"
GENERIC_ERROR_MESSAGE = "Something went wrong"


class WinajayaError(Exception):
    """Base class for errors raised by this package."""


class CORSError(WinajayaError):
    def __init__(self, message: str = CORS_REJECTION_MESSAGE):
        super().__init__(message)
        self.message = message


class PayloadTooLargeError(WinajayaError):
    def __init__(self, limit: int):
        super().__init__("request entity too large")
        self.limit = limit


class MalformedBodyError(WinajayaError):
    pass


class UserNotFoundError(WinajayaError):
    def __init__(self, user_id: int):
        super().__init__(f"User {user_id} not found")
        self.user_id = user_id


class BranchNotFoundError(WinajayaError):
    def __init__(self, branch_id: int):
        super().__init__(f"Branch {branch_id} not found")
        self.branch_id = branch_id


class InvalidBranchError(WinajayaError):
    def __init__(self, branch_id: int):
        super().__init__(f"Branch {branch_id} does not exist")
        self.branch_id = branch_id


class DuplicateEmailError(WinajayaError):
    def __init__(self, email: str):
        super().__init__("Email already registered")
        self.email = email


class DuplicateBranchNameError(WinajayaError):
    def __init__(self, name: str):
        super().__init__("Branch name already exists")
        self.name = name


class ConflictError(WinajayaError):
    """A write was rejected by a storage constraint."""


class InvalidCredentialsError(WinajayaError):
    def __init__(self):
        super().__init__("Invalid email or password")


def cors_error_response(exc: CORSError) -> JSONResponse:
    return JSONResponse(
        status_code=403,
        content={"error": "CORS Error", "message": exc.message},
    )


def internal_error_response(exc: Exception, settings: Settings) -> JSONResponse:
    """
    500 body for anything not handled elsewhere.

    The exception text is only exposed in the development environment.
    """
    message = str(exc) if settings.is_development else GENERIC_ERROR_MESSAGE
    return JSONResponse(
        status_code=500,
        content={"error": "Internal server error", "message": message},
    )
