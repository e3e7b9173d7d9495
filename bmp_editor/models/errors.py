"""Ошибки кодека и движка преобразований.

Каждая ошибка несёт `kind`, поэтому вызывающий код может как ловить
конкретный класс, так и сверять вид ошибки.
"""
from __future__ import annotations

from enum import Enum
from typing import Sequence


class ErrorKind(Enum):
    CHANNEL_OPEN = "channel_open"
    UNEXPECTED_END = "unexpected_end"
    CHANNEL_IO = "channel_io"
    INCOMPATIBLE_FORMAT = "incompatible_format"
    OUT_OF_RANGE = "out_of_range"


class BitmapError(Exception):
    kind: ErrorKind


class ChannelOpenError(BitmapError):
    kind = ErrorKind.CHANNEL_OPEN

    def __init__(self, path: object, reason: str = "") -> None:
        self.path = path
        message = f"Failed to open file: {path}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)


class UnexpectedEndOfInput(BitmapError):
    kind = ErrorKind.UNEXPECTED_END

    def __init__(self, expected: int, received: int) -> None:
        self.expected = expected
        self.received = received
        super().__init__(
            f"Unexpectedly reached end of input: needed {expected} bytes, got {received}"
        )


class ChannelIOError(BitmapError):
    kind = ErrorKind.CHANNEL_IO

    def __init__(self, operation: str, reason: str = "") -> None:
        self.operation = operation
        message = f"Error while trying to {operation}"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class IncompatibleFormat(BitmapError):
    """Заголовки прочитаны, но не прошли проверки совместимости."""

    kind = ErrorKind.INCOMPATIBLE_FORMAT

    def __init__(self, failures: Sequence[str]) -> None:
        self.failures = list(failures)
        details = "; ".join(self.failures) if self.failures else "unknown reason"
        super().__init__(
            "Invalid or incompatible file. Only 24-bit uncompressed files are supported "
            f"({details})"
        )


class OutOfRange(BitmapError):
    kind = ErrorKind.OUT_OF_RANGE

    def __init__(self, bound: str, message: str) -> None:
        self.bound = bound
        super().__init__(message)
