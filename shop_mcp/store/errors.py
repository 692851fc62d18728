"""
Error types and the Result contract shared by resources, tools and prompts.

Helpers raise ShopDataError subclasses. Operation entry points catch them
and hand back a Result so the transport adapter can decide how a failure
is presented to the MCP client.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class ErrorKind(str, Enum):
    """Failure categories surfaced to callers."""
    NOT_FOUND = "not_found"
    VALIDATION = "validation"
    IO = "io"


class ShopDataError(Exception):
    """Base class for data store and lookup failures."""

    kind = ErrorKind.IO

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class NotFoundError(ShopDataError):
    """A shop or customer id did not resolve."""

    kind = ErrorKind.NOT_FOUND


class InvalidIdentifierError(ShopDataError):
    """An identifier or argument was malformed."""

    kind = ErrorKind.VALIDATION


class StorageError(ShopDataError):
    """A fixture file could not be read, parsed or written."""

    kind = ErrorKind.IO


@dataclass
class Result:
    """
    Outcome of a resource, tool or prompt operation.
    
    Exactly one of data/error is meaningful, depending on success.
    """
    success: bool
    data: Any = None
    error: Optional[str] = None
    kind: Optional[ErrorKind] = None

    @classmethod
    def ok(cls, data: Any) -> "Result":
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, kind: ErrorKind, message: str) -> "Result":
        return cls(success=False, error=message, kind=kind)

    @classmethod
    def from_error(cls, error: ShopDataError) -> "Result":
        return cls.fail(error.kind, error.message)

    def unwrap(self) -> Any:
        """Return data, or raise the failure as a ShopDataError subclass."""
        if self.success:
            return self.data
        error_type = {
            ErrorKind.NOT_FOUND: NotFoundError,
            ErrorKind.VALIDATION: InvalidIdentifierError,
        }.get(self.kind, StorageError)
        raise error_type(self.error or "Unknown error")
