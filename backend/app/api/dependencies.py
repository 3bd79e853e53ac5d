from typing import Any, TypeVar
from fastapi import HTTPException, status
from app.services.result import ErrorKind, ServiceResult

T = TypeVar("T")

# Client-correctable failures all surface as 400 - including "no such user",
# which existing clients expect instead of a 404
STATUS_BY_ERROR_KIND = {
    ErrorKind.VALIDATION: status.HTTP_400_BAD_REQUEST,
    ErrorKind.NOT_FOUND: status.HTTP_400_BAD_REQUEST,
    ErrorKind.AUTH: status.HTTP_400_BAD_REQUEST,
    ErrorKind.CONFLICT: status.HTTP_400_BAD_REQUEST,
    ErrorKind.SERVER: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def unwrap(result: ServiceResult[T]) -> Any:
    """
    Return the value of a successful service result.

    Failed results are raised as HTTPException with the status for their
    error kind; the exception handler in main renders them as {"message": ...}.
    """
    if result.ok:
        return result.value

    raise HTTPException(
        status_code=STATUS_BY_ERROR_KIND.get(
            result.error.kind, status.HTTP_500_INTERNAL_SERVER_ERROR),
        detail=result.error.message
    )
