from fastapi import HTTPException, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
import logging

logger = logging.getLogger(__name__)


class FellowshipException(Exception):
    """Base application error; carries the HTTP status it maps to."""
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str, code: str = None):
        self.message = message
        self.code = code
        super().__init__(self.message)


class ValidationError(FellowshipException):
    """Missing or malformed input"""
    pass


class DuplicateResourceError(FellowshipException):
    """Email or invite code already taken"""
    pass


class InvalidInviteCodeError(FellowshipException):
    """Invite code unknown, already used or deactivated"""

    def __init__(self, message: str = "Invalid or expired invite code", code: str = None):
        super().__init__(message, code)


class ExpiredError(FellowshipException):
    """Invite code past its expiry"""

    def __init__(self, message: str = "Invite code has expired", code: str = None):
        super().__init__(message, code)


class AuthenticationError(FellowshipException):
    """Bad credentials or bad session token"""
    status_code = status.HTTP_401_UNAUTHORIZED


class AuthorizationError(FellowshipException):
    """Insufficient role or not the resource owner"""
    status_code = status.HTTP_403_FORBIDDEN


class NotFoundError(FellowshipException):
    """Missing document by id"""
    status_code = status.HTTP_404_NOT_FOUND


class UpstreamServiceError(FellowshipException):
    """External service failed; masked by callers"""
    status_code = status.HTTP_502_BAD_GATEWAY


async def fellowship_exception_handler(request: Request, exc: FellowshipException):
    if exc.status_code >= 500:
        logger.error(f"Application error: {exc.message}")
    else:
        logger.info(f"Application error ({exc.status_code}): {exc.message}")
    content = {
        "error": exc.__class__.__name__,
        "message": exc.message,
    }
    if exc.code:
        content["code"] = exc.code
    return JSONResponse(status_code=exc.status_code, content=content)


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.warning(f"Validation error: {exc.errors()}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": "ValidationError",
            "message": "Request data is invalid",
            "details": _serializable_errors(exc),
        }
    )


async def http_exception_handler(request: Request, exc: HTTPException):
    logger.warning(f"HTTP error: {exc.status_code} - {exc.detail}")
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": "HTTPException",
            "message": exc.detail
        },
        headers=getattr(exc, "headers", None),
    )


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled error: {type(exc).__name__}: {exc}", exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "InternalServerError",
            "message": "Internal server error"
        }
    )


def _serializable_errors(exc: RequestValidationError) -> list:
    # ctx may hold exception instances that JSON cannot encode
    errors = []
    for error in exc.errors():
        error = dict(error)
        if "ctx" in error:
            error["ctx"] = {k: str(v) for k, v in error["ctx"].items()}
        error.pop("input", None)
        errors.append(error)
    return errors
