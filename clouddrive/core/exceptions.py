from typing import Any, Dict, List, Optional
from starlette import status

class AppError(Exception):
    status_code: int = status.HTTP_400_BAD_REQUEST
    code: str = "bad_request"

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        code: Optional[str] = None,
        field: Optional[str] = None,
        errors: Optional[List[dict]] = None,  # [{'code':..., 'message':..., 'field':...}]
        details: Optional[Dict[str, Any]] = None,  # Additional details for the error
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code or type(self).status_code
        self.code = code or type(self).code
        self.field = field
        self.errors = errors
        self.details = details


class AuthenticationError(AppError):
    """No valid caller identity"""
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "unauthenticated"


class FileTooLargeError(AppError):
    status_code = status.HTTP_413_CONTENT_TOO_LARGE
    code = "file_too_large"


class QuotaExceededError(AppError):
    status_code = status.HTTP_413_CONTENT_TOO_LARGE
    code = "quota_exceeded"


class NotFoundError(AppError):
    """Entry does not exist or is not visible to the caller"""
    status_code = status.HTTP_404_NOT_FOUND
    code = "not_found"


class InvalidParentError(AppError):
    code = "invalid_parent"


class InvalidNameError(AppError):
    code = "invalid_name"


class FolderNotEmptyError(AppError):
    status_code = status.HTTP_409_CONFLICT
    code = "folder_not_empty"


class InconsistencyError(AppError):
    """A multi-step operation stopped half way; details describe what is left behind"""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    code = "inconsistency"


class BackendError(AppError):
    """Document store or blob store failure"""
    status_code = status.HTTP_502_BAD_GATEWAY
    code = "backend_error"
