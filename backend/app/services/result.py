from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, Optional, TypeVar

T = TypeVar("T")

SERVER_ERROR_MESSAGE = "Server error"


class ErrorKind(str, Enum):
    """Failure categories a service operation can report.

    The HTTP layer owns the mapping from kind to status code; services never
    deal in status codes themselves.
    """

    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    AUTH = "auth"
    CONFLICT = "conflict"
    SERVER = "server"


@dataclass(frozen=True)
class ServiceError:
    kind: ErrorKind
    message: str


@dataclass(frozen=True)
class ServiceResult(Generic[T]):
    """Outcome of a service operation: either a value or a tagged error."""

    value: Optional[T] = None
    error: Optional[ServiceError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: Any = None) -> "ServiceResult[Any]":
        return cls(value=value)

    @classmethod
    def failure(cls, kind: ErrorKind, message: str) -> "ServiceResult[Any]":
        return cls(error=ServiceError(kind=kind, message=message))

    @classmethod
    def server_error(cls) -> "ServiceResult[Any]":
        # Internal details are logged by the caller, never returned
        return cls.failure(ErrorKind.SERVER, SERVER_ERROR_MESSAGE)
