"""Error codes, their descriptions and the per-thread last error."""

from __future__ import annotations

import threading
from enum import IntEnum


class ErrorCode(IntEnum):
    """Status codes reported by the toolkit."""

    OK = 0
    OUT_OF_BOUNDS = 1
    NULL_PTR = 2
    NO_RESOURCES = 3
    BAD_FORMAT = 4
    INVALID_PARAM = 5
    NETWORK_ERROR = 6
    CLOSED = 7
    TIMEOUT = 8
    WOULD_BLOCK = 9
    ADDRESS_IN_USE = 10
    CONNECTION_REFUSED = 11
    HOST_UNREACHABLE = 12
    PROTOCOL_ERROR = 13
    CHECKSUM_FAILED = 14
    BUFFER_TOO_SMALL = 15
    PARSE_ERROR = 16
    UNSUPPORTED_VERSION = 17
    SEQUENCE_ERROR = 18
    AUTHENTICATION_FAILED = 19
    AUTHORIZATION_FAILED = 20
    RATE_LIMITED = 21
    DEVICE_BUSY = 22
    DEVICE_FAILURE = 23
    CONFIGURATION_ERROR = 24
    INTERRUPT = 25
    ABORT = 26
    VALIDATION = 27
    UNSUPPORTED = 28


_DESCRIPTIONS = {
    ErrorCode.OK: "Success",
    ErrorCode.OUT_OF_BOUNDS: "Index out of bounds",
    ErrorCode.NULL_PTR: "Null pointer in parameters or returns",
    ErrorCode.NO_RESOURCES: "No resources available",
    ErrorCode.BAD_FORMAT: "Invalid format in format string",
    ErrorCode.INVALID_PARAM: "Invalid parameter passed",
    ErrorCode.NETWORK_ERROR: "Network operation failed",
    ErrorCode.CLOSED: "Socket is closed",
    ErrorCode.TIMEOUT: "Operation timed out",
    ErrorCode.WOULD_BLOCK: "Operation would block",
    ErrorCode.ADDRESS_IN_USE: "Address already in use",
    ErrorCode.CONNECTION_REFUSED: "Connection refused by remote",
    ErrorCode.HOST_UNREACHABLE: "Host unreachable",
    ErrorCode.PROTOCOL_ERROR: "Protocol-specific error",
    ErrorCode.CHECKSUM_FAILED: "Checksum/CRC verification failed",
    ErrorCode.BUFFER_TOO_SMALL: "Buffer too small for operation",
    ErrorCode.PARSE_ERROR: "Failed to parse data",
    ErrorCode.UNSUPPORTED_VERSION: "Unsupported protocol version",
    ErrorCode.SEQUENCE_ERROR: "Sequence/ordering error",
    ErrorCode.AUTHENTICATION_FAILED: "Authentication failed",
    ErrorCode.AUTHORIZATION_FAILED: "Authorization failed",
    ErrorCode.RATE_LIMITED: "Rate limit exceeded",
    ErrorCode.DEVICE_BUSY: "Device is busy",
    ErrorCode.DEVICE_FAILURE: "Device failure",
    ErrorCode.CONFIGURATION_ERROR: "Configuration error",
    ErrorCode.INTERRUPT: "The current operation was interrupted",
    ErrorCode.ABORT: "The current operation was aborted",
    ErrorCode.VALIDATION: "Validation error",
    ErrorCode.UNSUPPORTED: "Operation not supported",
}

_state = threading.local()


def error_string(code: int) -> str:
    """Return a human-readable description of an error code."""
    try:
        return _DESCRIPTIONS[ErrorCode(code)]
    except ValueError:
        return "Unknown error"


def set_last_error(code: int) -> None:
    """Record the last error for the calling thread."""
    _state.code = ErrorCode(code)


def last_error() -> ErrorCode:
    """Return the last error recorded by the calling thread."""
    return getattr(_state, "code", ErrorCode.OK)


class PtkError(Exception):
    """An operation failed with a toolkit error code."""

    def __init__(self, code: int, message: str | None = None) -> None:
        self.code = ErrorCode(code)
        self.message = message if message is not None else error_string(self.code)
        super().__init__(self.message)

    def __str__(self) -> str:
        return f"{self.message} ({self.code.name})"