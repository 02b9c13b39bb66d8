"""Exception hierarchy for the Strike protocol client."""

from __future__ import annotations

from collections.abc import Sequence
from enum import Enum
from typing import Any

ERROR_PREFIX = "Strike"


class ErrorKind(str, Enum):
    """Closed set of failure categories surfaced by the library."""

    VALIDATION = "validation"
    RPC = "rpc"
    API = "api"


def format_error_message(operation: str, description: str) -> str:
    """Render the ``"Strike [operation] | description"`` presentation form."""
    return f"{ERROR_PREFIX} [{operation}] | {description}"


class StrikeError(Exception):
    """Base exception for all Strike protocol errors."""

    kind: ErrorKind

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ValidationError(StrikeError):
    """Raised when an argument fails validation, before any network call."""

    kind = ErrorKind.VALIDATION

    def __init__(
        self,
        operation: str,
        description: str,
        field: str | None = None,
        value: Any | None = None,
        details: dict | None = None,
    ):
        super().__init__(format_error_message(operation, description), details)
        self.operation = operation
        self.description = description
        self.field = field
        self.value = value


class RpcError(StrikeError):
    """Raised when the chain client rejects a call or transaction."""

    kind = ErrorKind.RPC

    def __init__(
        self,
        message: str,
        error: BaseException | None = None,
        method: str | None = None,
        parameters: Sequence[Any] | None = None,
        details: dict | None = None,
    ):
        super().__init__(message, details)
        self.error = error
        self.method = method
        self.parameters = list(parameters or [])


class ApiError(StrikeError):
    """Raised when the off-chain Strike API returns an unusable response."""

    kind = ErrorKind.API

    def __init__(
        self,
        error: str,
        response_code: int | None = None,
        response_message: str | None = None,
        details: dict | None = None,
    ):
        super().__init__(error, details)
        self.error = error
        self.response_code = response_code
        self.response_message = response_message

    def as_dict(self) -> dict[str, Any]:
        return {
            "error": self.error,
            "responseCode": self.response_code,
            "responseMessage": self.response_message,
        }
