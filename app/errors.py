"""Error types raised by the ticket artifact pipeline and stores."""

from dataclasses import dataclass
from enum import Enum


class ErrorCode(Enum):
    """Error codes surfaced to HTTP clients."""

    INVALID_REQUEST = "INVALID_REQUEST"
    ENCODING_FAILED = "ENCODING_FAILED"
    COMPOSITING_FAILED = "COMPOSITING_FAILED"
    TEMPLATE_NOT_FOUND = "TEMPLATE_NOT_FOUND"
    STORE_FAILED = "STORE_FAILED"


@dataclass(frozen=True)
class TicketError(Exception):
    """Base error with code and user-safe message."""

    code: ErrorCode
    message: str

    def __str__(self) -> str:
        return self.message


class ValidationError(TicketError):
    """Raised for user-correctable input (bad batch size, missing code)."""

    def __init__(self, message: str) -> None:
        super().__init__(code=ErrorCode.INVALID_REQUEST, message=message)


class EncodingError(TicketError):
    """Raised when a payload cannot be encoded as a QR symbol."""

    def __init__(self, message: str) -> None:
        super().__init__(code=ErrorCode.ENCODING_FAILED, message=message)


class CompositingError(TicketError):
    """Raised when the template cannot be read or the overlay cannot be applied."""

    def __init__(self, message: str, code: ErrorCode = ErrorCode.COMPOSITING_FAILED) -> None:
        super().__init__(code=code, message=message)


class ResourceMissingError(CompositingError):
    """Raised when the background template file is absent."""

    def __init__(self, path: str) -> None:
        super().__init__(
            message=f"Ticket template not found: {path}",
            code=ErrorCode.TEMPLATE_NOT_FOUND,
        )
        self.path = path


class StoreError(TicketError):
    """Raised when the ticket store cannot be read or written."""

    def __init__(self, message: str) -> None:
        super().__init__(code=ErrorCode.STORE_FAILED, message=message)
